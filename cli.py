"""CLI entry point - wrapper so `python cli.py serve` works from a checkout"""

from cli.main import main

if __name__ == "__main__":
    main()
