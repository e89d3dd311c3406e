"""CLI package for fileref.

This package contains the Typer application and all subcommands.
"""

from fileref.cli.main import app

__all__ = ["app"]
