"""CLI commands for fileref.

This package contains all subcommand implementations.
"""

from fileref.cli.commands import config, file, scan

__all__ = ["config", "file", "scan"]
