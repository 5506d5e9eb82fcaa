"""CLI package for the GameLab creator claim service

Serves the HTTP endpoints and offers small inspection commands for
catalog ownership records.
"""

from cli.main import main

__all__ = [
    "main",
]
