"""File operations backing the FileRef read/write/copy/delete methods.

Each function is a thin pass-through to pathlib/shutil. OSErrors are
translated into the FileIOError family by translate_os_errors. Text is
always UTF-8 and newlines are passed through untranslated, so whatever
is written is read back unchanged.
"""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path
from typing import TYPE_CHECKING

from fileref.core.errors import (
    FileIOError,
    NotAFileError,
    PathExistsError,
    PathNotFoundError,
    translate_os_errors,
)

if TYPE_CHECKING:
    from fileref.core.path import FileRef

logger = logging.getLogger(__name__)

_ENCODING = "utf-8"


def _as_path(ref: FileRef, action: str) -> Path:
    """Convert a FileRef into a pathlib.Path, rejecting the empty path."""
    if not ref.path:
        msg = f"Could not {action} an empty path"
        raise PathNotFoundError(msg, path="", action=action)
    return Path(ref.path)


# =============================================================================
# Reading
# =============================================================================


def read_text(ref: FileRef) -> str:
    """Read the whole file as UTF-8 text.

    Raises:
        PathNotFoundError: If the file does not exist.
        NotAFileError: If the path is a directory.
        PathEncodingError: If the content is not valid UTF-8.
        PathPermissionError: If the file cannot be opened.
    """
    target = _as_path(ref, "read")
    with translate_os_errors(ref.path, "read"), open(target, encoding=_ENCODING, newline="") as f:
        return f.read()


def read_bytes(ref: FileRef) -> bytes:
    """Read the whole file as bytes."""
    target = _as_path(ref, "read")
    with translate_os_errors(ref.path, "read"):
        return target.read_bytes()


def read_range(ref: FileRef, start: int, end: int) -> bytes:
    """Read the bytes in ``[start, end)`` from the file.

    Args:
        ref: File to read from.
        start: Offset of the first byte.
        end: Offset one past the last byte.

    Returns:
        Exactly ``end - start`` bytes.

    Raises:
        ValueError: If the range is negative or inverted.
        FileIOError: If the file is shorter than ``end``.
    """
    if start < 0 or end < start:
        msg = f"Invalid byte range [{start}, {end})"
        raise ValueError(msg)

    target = _as_path(ref, "read")
    with translate_os_errors(ref.path, "read"), open(target, "rb") as f:
        f.seek(start)
        data = f.read(end - start)

    if len(data) != end - start:
        msg = f"Could not read bytes [{start}, {end}) of '{ref.path}': file is too short"
        raise FileIOError(msg, path=ref.path, action="read")
    return data


# =============================================================================
# Writing
# =============================================================================


def write_text(ref: FileRef, content: str) -> None:
    """Create or truncate the file and write UTF-8 text to it.

    The parent directory must already exist.
    """
    target = _as_path(ref, "write")
    with (
        translate_os_errors(ref.path, "write"),
        open(target, "w", encoding=_ENCODING, newline="") as f,
    ):
        f.write(content)


def write_bytes(ref: FileRef, data: bytes) -> None:
    """Create or truncate the file and write bytes to it."""
    target = _as_path(ref, "write")
    with translate_os_errors(ref.path, "write"):
        target.write_bytes(data)


def write_bytes_to_range(ref: FileRef, start: int, data: bytes) -> None:
    """Overwrite bytes of an existing file starting at ``start``.

    Raises:
        PathNotFoundError: If the file does not exist.
    """
    if start < 0:
        msg = f"Invalid start offset {start}"
        raise ValueError(msg)

    target = _as_path(ref, "write")
    with translate_os_errors(ref.path, "write"), open(target, "r+b") as f:
        f.seek(start)
        f.write(data)


def append_text(ref: FileRef, content: str) -> None:
    """Append UTF-8 text to the file, creating it if absent."""
    target = _as_path(ref, "append to")
    with (
        translate_os_errors(ref.path, "append to"),
        open(target, "a", encoding=_ENCODING, newline="") as f,
    ):
        f.write(content)


def append_bytes(ref: FileRef, data: bytes) -> None:
    """Append bytes to the file, creating it if absent."""
    target = _as_path(ref, "append to")
    with translate_os_errors(ref.path, "append to"), open(target, "ab") as f:
        f.write(data)


# =============================================================================
# Creating
# =============================================================================


def ensure_parent_dir(ref: FileRef) -> None:
    """Create the parent directory chain of ``ref`` if it is missing."""
    _as_path(ref, "create parent of")
    if ref.is_root():
        return
    parent = ref.parent_dir()
    if parent.is_dir():
        return
    with translate_os_errors(parent.path, "create directory"):
        Path(parent.path).mkdir(parents=True, exist_ok=True)


def create_file(ref: FileRef) -> None:
    """Create an empty file, creating missing parent directories.

    Raises:
        PathExistsError: If something already exists at the path.
    """
    target = _as_path(ref, "create")
    with translate_os_errors(ref.path, "create"):
        if target.exists() or target.is_symlink():
            msg = f"Could not create file '{ref.path}': path already exists"
            raise PathExistsError(msg, path=ref.path, action="create")

    ensure_parent_dir(ref)
    with translate_os_errors(ref.path, "create"), open(target, "x"):
        pass


def create_dir(ref: FileRef) -> None:
    """Create a directory, creating missing parent directories.

    Raises:
        PathExistsError: If something already exists at the path.
    """
    target = _as_path(ref, "create directory")
    with translate_os_errors(ref.path, "create directory"):
        target.mkdir(parents=True, exist_ok=False)


# =============================================================================
# Copying and deleting
# =============================================================================


def copy_file(ref: FileRef, destination: str | os.PathLike[str]) -> int:
    """Copy a file's bytes to ``destination``.

    The destination's parent directory must exist; it is never created.
    When the source is missing nothing is written at the destination.

    Args:
        ref: Source file.
        destination: Target file path.

    Returns:
        Number of bytes copied.

    Raises:
        PathNotFoundError: If the source or the destination directory is absent.
        NotAFileError: If the source or destination is a directory.
        PathPermissionError: If either side cannot be inspected or opened.
    """
    source = _as_path(ref, "copy")
    dest = Path(os.fspath(destination))

    with translate_os_errors(ref.path, "copy"):
        if source.is_dir():
            msg = f"Could not copy '{ref.path}': only files can be copied"
            raise NotAFileError(msg, path=ref.path, action="copy")
        if not source.exists():
            msg = f"Could not copy '{ref.path}': path does not exist"
            raise PathNotFoundError(msg, path=ref.path, action="copy")
        if dest.is_dir():
            msg = f"Could not copy to '{dest.as_posix()}': destination is a directory"
            raise NotAFileError(msg, path=dest.as_posix(), action="copy")
        if not dest.parent.is_dir():
            msg = f"Could not copy to '{dest.as_posix()}': destination directory does not exist"
            raise PathNotFoundError(msg, path=dest.as_posix(), action="copy")

        shutil.copyfile(source, dest)
        copied = dest.stat().st_size

    logger.debug("Copied %s to %s (%d bytes)", ref.path, dest.as_posix(), copied)
    return copied


def delete_path(ref: FileRef) -> None:
    """Delete a file, symlink or directory tree.

    Deleting a path that does not exist is a no-op.
    """
    if not ref.path:
        return

    target = Path(ref.path)
    with translate_os_errors(ref.path, "delete"):
        # Directories (but not symlinks to directories)
        if target.is_dir() and not target.is_symlink():
            shutil.rmtree(target)
            logger.debug("Deleted directory tree %s", ref.path)
        elif target.exists() or target.is_symlink():
            target.unlink(missing_ok=True)
            logger.debug("Deleted %s", ref.path)
        else:
            logger.debug("Nothing to delete at %s", ref.path)
