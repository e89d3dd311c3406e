"""Scan command implementation.

Lists the entries below a directory using FileScanner.
"""

import json
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer

from fileref.core.config import ScanSettings, load_config_or_default
from fileref.core.errors import ConfigError, ScanError
from fileref.core.path import FileRef
from fileref.filesystem.models import PathType, classify_path
from fileref.filesystem.scanner import FileScanner
from fileref.utils.formatting import (
    console,
    create_entry_table,
    format_entry_row,
    print_error,
    print_info,
)


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


def scan(
    root: Annotated[
        Path,
        typer.Argument(help="Directory to scan."),
    ] = Path("."),
    files: Annotated[
        bool,
        typer.Option("--files", help="Include files (default: files and directories)."),
    ] = False,
    dirs: Annotated[
        bool,
        typer.Option("--dirs", help="Include directories (default: files and directories)."),
    ] = False,
    no_recurse: Annotated[
        bool,
        typer.Option("--no-recurse", help="Only list the immediate children of ROOT."),
    ] = False,
    skip: Annotated[
        list[str] | None,
        typer.Option("--skip", "-s", help="Directory name pattern not to descend into."),
    ] = None,
    include_self: Annotated[
        bool,
        typer.Option("--include-self", help="Include ROOT itself in the results."),
    ] = False,
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Fail on unreadable directories."),
    ] = False,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
    limit: Annotated[
        int | None,
        typer.Option(
            "--limit",
            "-l",
            help="Stop after this many results.",
        ),
    ] = None,
) -> None:
    """Scan a directory tree and list its entries."""
    settings = _load_scan_settings()
    if skip:
        settings = settings.model_copy(update={"skip_dirs": [*settings.skip_dirs, *skip]})

    scanner = FileScanner(FileRef(root))
    if files:
        scanner.include_files()
    if dirs:
        scanner.include_dirs()
    if include_self:
        scanner.include_self()
    scanner.apply_settings(settings)
    if no_recurse:
        scanner.recurse(False)
    if strict:
        scanner.strict()

    entries: list[FileRef] = []
    try:
        for entry in scanner:
            entries.append(entry)
            if limit and len(entries) >= limit:
                break
    except ScanError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if not entries:
        print_info(f"No entries found under {FileRef(root)}.")
        return

    if output_format == OutputFormat.JSON:
        _print_json(entries)
        return

    _print_table(entries, FileRef(root))
    if limit and len(entries) >= limit:
        console.print(f"\n[dim](stopped after {limit} entries)[/dim]")


# === Private helper functions ===


def _load_scan_settings() -> ScanSettings:
    """Load configured scan defaults, exiting on an invalid config file."""
    try:
        return load_config_or_default().scan
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def _entry_size(entry: FileRef, path_type: PathType | None) -> int | None:
    """Size in bytes of a file entry, None for anything else."""
    if path_type != PathType.FILE:
        return None
    try:
        return Path(entry.path).stat().st_size
    except OSError:
        return None


def _print_table(entries: list[FileRef], root: FileRef) -> None:
    """Display entries as a Rich table."""
    table = create_entry_table(title=f"Entries under {root}")
    for entry in entries:
        path_type = classify_path(entry)
        table.add_row(*format_entry_row(entry, path_type, _entry_size(entry, path_type)))
    console.print(table)
    console.print(f"\n[dim]Found {len(entries)} entries[/dim]")


def _print_json(entries: list[FileRef]) -> None:
    """Display entries as JSON."""
    data = []
    for entry in entries:
        path_type = classify_path(entry)
        data.append(
            {
                "path": entry.path,
                "path_type": path_type.value if path_type else None,
                "size_bytes": _entry_size(entry, path_type),
            }
        )
    console.print_json(json.dumps(data))
