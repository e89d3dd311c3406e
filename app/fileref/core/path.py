"""The FileRef path value type.

A FileRef wraps a textual path. Paths are stored in a portable form that
uses ``/`` as the separator on every platform; ``\\`` is accepted on input
and converted. The referenced entry does not need to exist.

FileRef values are immutable: concatenation (``+``, ``+=``, ``concat``)
always produces a new value. Filesystem predicates are not cached and
re-query the filesystem on every call, so their results can change
between calls. A FileRef is meant for single-owner, single-thread use.
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Callable
from dataclasses import dataclass
from functools import total_ordering
from pathlib import Path
from typing import TYPE_CHECKING

from fileref.core import ops
from fileref.core.errors import FileRefError, WorkingDirError

if TYPE_CHECKING:
    from fileref.filesystem.scanner import FileScanner

logger = logging.getLogger(__name__)

SEPARATOR = "/"
_INVALID_SEPARATOR = "\\"
_CURRENT_DIR = "."
_PARENT_DIR = ".."
_DRIVE_PATTERN = re.compile(r"^[A-Za-z]:")


def _split_root(path: str) -> tuple[str, str]:
    """Split a portable path into its root prefix and the remaining body.

    The prefix is an optional drive (``C:``) followed by an optional
    leading separator.
    """
    drive = ""
    match = _DRIVE_PATTERN.match(path)
    if match:
        drive = match.group(0)
        path = path[len(drive) :]
    if path.startswith(SEPARATOR):
        return drive + SEPARATOR, path.lstrip(SEPARATOR)
    return drive, path


def normalize_path(path: str) -> str:
    """Clean up a textual path.

    Converts ``\\`` to ``/``, collapses repeated separators, drops ``.``
    segments and cancels ``..`` against a preceding named segment. Leading
    ``..`` segments of relative paths are kept; ``..`` directly below a root
    is dropped. Trailing separators are removed. Never raises: the empty
    string stays empty and anything else is cleaned on a best-effort basis.

    Args:
        path: Raw path text.

    Returns:
        The normalized path text.
    """
    if not path:
        return ""

    prefix, body = _split_root(path.replace(_INVALID_SEPARATOR, SEPARATOR))

    nodes: list[str] = []
    for node in body.split(SEPARATOR):
        if node in ("", _CURRENT_DIR):
            continue
        if node == _PARENT_DIR:
            if nodes and nodes[-1] != _PARENT_DIR:
                nodes.pop()
                continue
            if prefix.endswith(SEPARATOR):
                # Cannot go above a root
                continue
        nodes.append(node)

    normalized = prefix + SEPARATOR.join(nodes)
    return normalized or _CURRENT_DIR


@total_ordering
@dataclass(frozen=True, slots=True, init=False, eq=False, repr=False)
class FileRef:
    """Immutable reference to a filesystem path.

    ``FileRef(text)`` normalizes the text (see normalize_path).
    ``FileRef.raw(text)`` stores it verbatim. Two references are equal
    when their normalized forms are equal, so a raw reference compares
    equal to its normalized counterpart.

    Attributes:
        path: The stored path text.
    """

    path: str

    def __init__(self, path: str | os.PathLike[str] = "") -> None:
        object.__setattr__(self, "path", normalize_path(os.fspath(path)))

    # =========================================================================
    # Construction
    # =========================================================================

    @classmethod
    def new(cls, path: str | os.PathLike[str]) -> FileRef:
        """Create a normalized reference (same as calling the class)."""
        return cls(path)

    @classmethod
    def raw(cls, path: str) -> FileRef:
        """Create a reference that stores ``path`` exactly as given.

        No normalization is performed, so the caller is responsible for
        passing text that is already well-formed. Intended for literal
        constants.
        """
        ref = cls.__new__(cls)
        object.__setattr__(ref, "path", path)
        return ref

    # Alias kept for parity with constant-style construction
    new_const = raw

    @classmethod
    def working_dir(cls) -> FileRef:
        """Get the current working directory of the process.

        Raises:
            WorkingDirError: If the working directory cannot be determined,
                e.g. because it was deleted.
        """
        try:
            cwd = os.getcwd()
        except OSError as e:
            msg = f"Cannot determine the working directory: {e}"
            raise WorkingDirError(msg) from e
        return cls(cwd)

    # =========================================================================
    # Dunder protocol
    # =========================================================================

    def __str__(self) -> str:
        return self.path

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.path!r})"

    def __fspath__(self) -> str:
        return self.path

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FileRef):
            return self.normalized == other.normalized
        return NotImplemented

    def __lt__(self, other: object) -> bool:
        if isinstance(other, FileRef):
            return self.normalized < other.normalized
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.normalized)

    def __add__(self, suffix: str | os.PathLike[str]) -> FileRef:
        if not isinstance(suffix, (str, os.PathLike)):
            return NotImplemented
        return self.concat(suffix)

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def normalized(self) -> str:
        """The normalized form of the path (used for equality)."""
        return normalize_path(self.path)

    @property
    def nodes(self) -> list[str]:
        """Path segments of the normalized path, without the root prefix."""
        _, body = _split_root(self.normalized)
        return body.split(SEPARATOR) if body else []

    @property
    def name(self) -> str:
        """Last segment of the path (file or directory name)."""
        nodes = self.nodes
        return nodes[-1] if nodes else ""

    @property
    def extension(self) -> str | None:
        """Text after the last dot of the name, or None without a dot."""
        name = self.name
        if name in (_CURRENT_DIR, _PARENT_DIR) or "." not in name:
            return None
        return name.rsplit(".", 1)[1]

    @property
    def stem(self) -> str:
        """Name without its extension."""
        extension = self.extension
        if extension is None:
            return self.name
        return self.name[: -(len(extension) + 1)]

    def to_display_text(self) -> str:
        """Render the path for logging and printing."""
        return self.path

    # =========================================================================
    # Path arithmetic
    # =========================================================================

    def concat(self, suffix: str | os.PathLike[str]) -> FileRef:
        """Append ``suffix`` as a new path segment and return a new reference.

        Exactly one separator ends up between the existing path and the
        suffix, whether or not either side already carries one.

        Args:
            suffix: Text (or path-like) to append.

        Returns:
            A new normalized FileRef.
        """
        text = os.fspath(suffix).replace(_INVALID_SEPARATOR, SEPARATOR)
        if not text:
            return type(self)(self.path)
        if not self.path:
            return type(self)(text)
        base = self.path.replace(_INVALID_SEPARATOR, SEPARATOR).rstrip(SEPARATOR)
        return type(self)(base + SEPARATOR + text.lstrip(SEPARATOR))

    def is_root(self) -> bool:
        """Check if the path is a bare root (``/``, ``C:`` or ``C:/``)."""
        prefix, body = _split_root(self.normalized)
        return bool(prefix) and not body

    def is_absolute_path(self) -> bool:
        """Check if the path starts at a root or drive."""
        prefix, _ = _split_root(self.normalized)
        return bool(prefix)

    def is_relative_path(self) -> bool:
        """Check if the path is relative to the working directory."""
        return not self.is_absolute_path()

    def parent_dir(self) -> FileRef:
        """Get the directory that contains this path.

        A single relative segment has ``.`` as its parent, and a path
        ending in ``..`` gets one more ``..``.

        Raises:
            FileRefError: If the path is empty or a bare root.
        """
        normalized = self.normalized
        prefix, body = _split_root(normalized)
        if not body:
            msg = f"Could not get the parent of '{self.path}': it has no parent"
            raise FileRefError(msg)

        nodes = body.split(SEPARATOR)
        if nodes[-1] in (_CURRENT_DIR, _PARENT_DIR):
            return type(self)(normalized + SEPARATOR + _PARENT_DIR)
        if len(nodes) == 1:
            return type(self)(prefix or _CURRENT_DIR)
        return type(self)(prefix + SEPARATOR.join(nodes[:-1]))

    def absolute(self) -> FileRef:
        """Return this path made absolute against the working directory."""
        if self.is_absolute_path():
            return self
        return FileRef.working_dir().concat(self.path)

    def relative(self) -> FileRef:
        """Return this path relative to the working directory when inside it."""
        if self.is_relative_path():
            return self
        working_dir = FileRef.working_dir().normalized
        normalized = self.normalized
        if normalized == working_dir:
            return type(self)(_CURRENT_DIR)
        prefix = working_dir.rstrip(SEPARATOR) + SEPARATOR
        if normalized.startswith(prefix):
            return type(self)(normalized[len(prefix) :])
        return self

    def child(self, name: str) -> FileRef:
        """Get the entry called ``name`` inside this directory.

        ``name`` is a single directory entry name and is kept verbatim, so a
        POSIX file name containing ``\\`` still refers to that file. Use
        concat() for multi-segment suffixes.
        """
        base = self.normalized
        if base in ("", _CURRENT_DIR):
            return type(self).raw(name)
        return type(self).raw(base.rstrip(SEPARATOR) + SEPARATOR + name)

    def with_extension(self, extension: str | None) -> FileRef:
        """Return the path with its extension replaced, or removed for None.

        Raises:
            FileRefError: If the path has no file name.
        """
        name = self.name
        if not name or name in (_CURRENT_DIR, _PARENT_DIR):
            msg = f"Could not change the extension of '{self.path}': it has no file name"
            raise FileRefError(msg)
        head = self.normalized[: -len(name)]
        suffix = "." + extension.lstrip(".") if extension else ""
        return type(self)(head + self.stem + suffix)

    # =========================================================================
    # Text helpers
    # =========================================================================

    def replace(self, old: str, new: str) -> FileRef:
        """Replace every occurrence of ``old`` in the path text."""
        return type(self)(self.path.replace(old, new))

    def strip_prefix(self, prefix: str) -> FileRef | None:
        """Remove a leading ``prefix``, or return None if it is not there."""
        if not self.path.startswith(prefix):
            return None
        return type(self)(self.path[len(prefix) :])

    def strip_suffix(self, suffix: str) -> FileRef | None:
        """Remove a trailing ``suffix``, or return None if it is not there."""
        if not suffix:
            return type(self)(self.path)
        if not self.path.endswith(suffix):
            return None
        return type(self)(self.path[: -len(suffix)])

    # =========================================================================
    # Filesystem predicates
    # =========================================================================

    def _query(self, check: Callable[[Path], bool]) -> bool:
        """Run a pathlib predicate, treating an unreadable path as absent."""
        if not self.path:
            return False
        try:
            return check(Path(self.path))
        except OSError as e:
            logger.debug("Cannot inspect %s: %s", self.path, e)
            return False

    def exists(self) -> bool:
        """Check if something exists at the path (follows symlinks)."""
        return self._query(Path.exists)

    def is_file(self) -> bool:
        """Check if the path is an existing regular file."""
        return self._query(Path.is_file)

    def is_dir(self) -> bool:
        """Check if the path is an existing directory."""
        return self._query(Path.is_dir)

    is_directory = is_dir

    def is_symlink(self) -> bool:
        """Check if the path is a symbolic link (live or dead)."""
        return self._query(Path.is_symlink)

    def is_accessible(self) -> bool:
        """Check if the current process may read the path."""
        if not self.exists():
            return False
        mode = os.R_OK | os.X_OK if self.is_dir() else os.R_OK
        return os.access(self.path, mode)

    # =========================================================================
    # File operations
    # =========================================================================

    def read(self) -> str:
        """Read the file as UTF-8 text."""
        return ops.read_text(self)

    def read_bytes(self) -> bytes:
        """Read the file as bytes."""
        return ops.read_bytes(self)

    def read_range(self, start: int, end: int) -> bytes:
        """Read the bytes in ``[start, end)``."""
        return ops.read_range(self, start, end)

    def write(self, content: str) -> None:
        """Create or truncate the file and write text to it."""
        ops.write_text(self, content)

    def write_bytes(self, data: bytes) -> None:
        """Create or truncate the file and write bytes to it."""
        ops.write_bytes(self, data)

    def write_bytes_to_range(self, start: int, data: bytes) -> None:
        """Overwrite bytes of an existing file starting at ``start``."""
        ops.write_bytes_to_range(self, start, data)

    def append(self, content: str) -> None:
        """Append text to the file, creating it if absent."""
        ops.append_text(self, content)

    def append_bytes(self, data: bytes) -> None:
        """Append bytes to the file, creating it if absent."""
        ops.append_bytes(self, data)

    def copy_to(self, destination: str | os.PathLike[str]) -> int:
        """Copy the file to ``destination`` and return the bytes copied."""
        return ops.copy_file(self, destination)

    def delete(self) -> None:
        """Delete the file or directory tree; no-op if absent."""
        ops.delete_path(self)

    def create_file(self) -> None:
        """Create an empty file (and missing parent directories)."""
        ops.create_file(self)

    def create_dir(self) -> None:
        """Create a directory (and missing parent directories)."""
        ops.create_dir(self)

    def ensure_exists(self, *, directory: bool = False) -> None:
        """Create the file (or directory) unless something already exists."""
        if self.exists():
            return
        if directory:
            ops.create_dir(self)
        else:
            ops.create_file(self)

    def ensure_parent_dir(self) -> None:
        """Create the parent directory chain if it is missing."""
        ops.ensure_parent_dir(self)

    # =========================================================================
    # Scanning
    # =========================================================================

    def scanner(self) -> FileScanner:
        """Create a scanner rooted at this directory."""
        from fileref.filesystem.scanner import FileScanner

        return FileScanner(self)

    def list_files(self) -> list[FileRef]:
        """List the files directly inside this directory."""
        return self.scanner().include_files().recurse(False).collect()

    def list_files_recurse(self) -> list[FileRef]:
        """List all files below this directory."""
        return self.scanner().include_files().collect()

    def list_dirs(self) -> list[FileRef]:
        """List the directories directly inside this directory."""
        return self.scanner().include_dirs().recurse(False).collect()

    def list_dirs_recurse(self) -> list[FileRef]:
        """List all directories below this directory."""
        return self.scanner().include_dirs().collect()


# Signature of scanner filters and recursion predicates
PathPredicate = Callable[[FileRef], bool]
