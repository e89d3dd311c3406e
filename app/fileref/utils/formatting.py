"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

import sys

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from fileref.core.path import FileRef
from fileref.core.theme import get_theme
from fileref.filesystem.models import PathType


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances (theme loaded once at import)
console = Console(theme=get_theme(), color_system=_detect_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_detect_color_system())

_TYPE_STYLES: dict[PathType, str] = {
    PathType.DIRECTORY: "entry.dir",
    PathType.FILE: "entry.file",
    PathType.SYMLINK: "entry.link",
    PathType.DEAD_SYMLINK: "muted",
}


def create_entry_table(title: str = "Scan Results") -> Table:
    """Create a pre-configured table for displaying scanned entries.

    Args:
        title: Table title.

    Returns:
        Rich Table configured for entry display.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Path", no_wrap=True)
    table.add_column("Type", width=12)
    table.add_column("Size", style="info", justify="right")
    return table


def format_entry_row(entry: FileRef, path_type: PathType | None, size: int | None) -> tuple[str, str, str]:
    """Format a scanned entry as a table row with type styling.

    Args:
        entry: The scanned path.
        path_type: Entry classification (None if it vanished).
        size: Size in bytes for files, None otherwise.

    Returns:
        Tuple of (path, type, size) with Rich markup.
    """
    path = escape(entry.to_display_text())
    if path_type is None:
        return (f"[muted]{path}[/]", "[muted]-[/]", "-")
    style = _TYPE_STYLES[path_type]
    size_str = format_size(size) if size is not None else "-"
    return (f"[{style}]{path}[/]", f"[{style}]{path_type.value}[/]", size_str)


def format_size(size_bytes: int) -> str:
    """Format byte count as human-readable string."""
    if size_bytes < 1024:
        return f"{size_bytes} B"
    size = size_bytes / 1024
    for unit in ("KB", "MB"):
        if size < 1024:
            return f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} GB"


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")
