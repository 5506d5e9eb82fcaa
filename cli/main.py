"""CLI entry point and argument parsing"""

import argparse
import logging
import sys

from rich.console import Console

import settings
from claims import extract_handle
from cli.entry_display import show_entry
from web import ClaimServer


console = Console()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="GameLab creator claim service")
    parser.add_argument("--debug", "-d", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command")

    serve = subparsers.add_parser("serve", help="Run the HTTP service")
    serve.add_argument("--bind", "-b", default=None, help="Override bind address (default: from config)")
    serve.add_argument("--port", "-p", type=int, default=None, help="Override port (default: from config)")

    entry = subparsers.add_parser("entry", help="Show the ownership record of a catalog entry")
    entry.add_argument("entry_id", help="Catalog entry id")

    handle = subparsers.add_parser("extract-handle", help="Show the handle parsed from a developer URL")
    handle.add_argument("url", help="Developer profile URL")

    return parser


def main(argv=None):
    """Entry point for the CLI"""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.debug:
        logging.basicConfig(level=settings.LOG_LEVEL.upper(), format="%(levelname)s %(name)s: %(message)s")

    try:
        if args.command == "serve":
            ClaimServer(debug=args.debug, bind_address=args.bind, port=args.port).run()
        elif args.command == "entry":
            if not show_entry(args.entry_id, console):
                sys.exit(1)
        elif args.command == "extract-handle":
            found = extract_handle(args.url)
            if found is None:
                console.print(f"[red]No handle found in[/red] {args.url!r}")
                sys.exit(1)
            console.print(f"[green]@{found}[/green]")
        else:
            parser.print_help()

    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
    except Exception as e:
        console.print(f"\n[red]Fatal error:[/red] {e}")
        if args.debug:
            console.print_exception()
        sys.exit(1)


if __name__ == "__main__":
    main()
