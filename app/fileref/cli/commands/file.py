"""File operation commands.

Thin CLI wrappers over the FileRef read/write/append/copy/delete methods.
"""

from pathlib import Path
from typing import Annotated

import typer

from fileref.core.errors import FileRefError
from fileref.core.path import FileRef
from fileref.utils.formatting import print_error, print_info, print_success

app = typer.Typer(
    help="Read, write, copy and delete files.",
    no_args_is_help=True,
)

PathArgument = Annotated[Path, typer.Argument(help="Target path.")]


def _fail(error: FileRefError) -> typer.Exit:
    """Report an operation failure and build the exit to raise."""
    print_error(str(error))
    return typer.Exit(code=1)


@app.command()
def cat(path: PathArgument) -> None:
    """Print a text file."""
    try:
        content = FileRef(path).read()
    except FileRefError as e:
        raise _fail(e) from e
    typer.echo(content, nl=False)


@app.command()
def write(
    path: PathArgument,
    text: Annotated[str, typer.Argument(help="Text to write.")],
) -> None:
    """Replace a file's content with TEXT (creating the file if needed)."""
    try:
        FileRef(path).write(text)
    except FileRefError as e:
        raise _fail(e) from e
    print_success(f"Wrote {len(text.encode('utf-8'))} bytes to {FileRef(path)}")


@app.command()
def append(
    path: PathArgument,
    text: Annotated[str, typer.Argument(help="Text to append.")],
) -> None:
    """Append TEXT to a file (creating the file if needed)."""
    try:
        FileRef(path).append(text)
    except FileRefError as e:
        raise _fail(e) from e
    print_success(f"Appended {len(text.encode('utf-8'))} bytes to {FileRef(path)}")


@app.command()
def cp(
    source: Annotated[Path, typer.Argument(help="File to copy.")],
    destination: Annotated[Path, typer.Argument(help="Destination file.")],
) -> None:
    """Copy a file. The destination directory must exist."""
    try:
        copied = FileRef(source).copy_to(FileRef(destination))
    except FileRefError as e:
        raise _fail(e) from e
    print_success(f"Copied {FileRef(source)} to {FileRef(destination)} ({copied} bytes)")


@app.command()
def rm(
    path: PathArgument,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Delete a file or directory tree. Missing paths are not an error."""
    target = FileRef(path)
    if not target.exists() and not target.is_symlink():
        print_info(f"Nothing to delete at {target}.")
        return

    if not yes:
        kind = "directory tree" if target.is_dir() else "file"
        confirmed = typer.confirm(f"Delete {kind} {target}?", default=False)
        if not confirmed:
            print_info("Aborted.")
            raise typer.Exit(code=0)

    try:
        target.delete()
    except FileRefError as e:
        raise _fail(e) from e
    print_success(f"Deleted {target}")
