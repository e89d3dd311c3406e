"""Lazy directory tree scanner.

FileScanner walks a directory tree depth-first in pre-order using an
explicit stack, so deep trees never hit the recursion limit. Entries are
produced one at a time; the caller pays only for what it consumes and can
stop at any point.

Unreadable subdirectories (permission denied, removed mid-scan) and
entries whose type cannot be determined are skipped with a warning and
the scan continues. In strict mode a ScanError is raised instead.
"""

from __future__ import annotations

import logging
import os
import stat
from collections.abc import Iterator
from pathlib import Path
from typing import TYPE_CHECKING

from fileref.core.errors import ScanError, ScannerStateError
from fileref.core.path import FileRef, PathPredicate
from fileref.filesystem.models import ScanFilterSet

if TYPE_CHECKING:
    from fileref.core.config import ScanSettings

logger = logging.getLogger(__name__)


def _never(_entry: FileRef) -> bool:
    return False


class FileScanner:
    """Configurable, lazy iterator over the entries below a root directory.

    Configure with the chained builder methods, then iterate (or call
    collect()). Each directory's own entry is yielded before its contents
    and siblings are visited in sorted name order. Once iteration has
    started the configuration is frozen and the scanner cannot be
    restarted; use clone() for another pass.

    Entry names are kept verbatim (see FileRef.child), so POSIX names
    containing ``\\`` are yielded as-is. Such entries compare equal to the
    ``/``-separated form, because equality uses normalized paths.

    A scanner is not thread-safe and must not be shared between threads.

    Args:
        root: Directory to scan. A root that does not exist or is not a
            directory produces no entries.
        filters: Initial filter configuration. Defaults to a fresh
            ScanFilterSet (files and directories, always recurse).
    """

    def __init__(
        self,
        root: FileRef | str | os.PathLike[str],
        filters: ScanFilterSet | None = None,
    ) -> None:
        self._root = root if isinstance(root, FileRef) else FileRef(root)
        self._filters = filters if filters is not None else ScanFilterSet()
        self._iterator: Iterator[FileRef] | None = None

    @property
    def root(self) -> FileRef:
        """Root directory of the scan."""
        return self._root

    @property
    def filters(self) -> ScanFilterSet:
        """Current filter configuration."""
        return self._filters

    @property
    def started(self) -> bool:
        """Whether iteration has begun."""
        return self._iterator is not None

    def __repr__(self) -> str:
        return f"FileScanner({self._root.path!r}, {self._filters.inclusion_mode.value})"

    # =========================================================================
    # Builder
    # =========================================================================

    def _configure(self) -> ScanFilterSet:
        if self._iterator is not None:
            msg = f"Cannot reconfigure scanner on '{self._root}' after scanning started"
            raise ScannerStateError(msg)
        return self._filters

    def include_files(self) -> FileScanner:
        """Yield file entries (adds to any other enabled category)."""
        self._configure().include_files = True
        return self

    def include_dirs(self) -> FileScanner:
        """Yield directory entries (adds to any other enabled category)."""
        self._configure().include_dirs = True
        return self

    include_directories = include_dirs

    def include_all(self) -> FileScanner:
        """Yield both files and directories."""
        filters = self._configure()
        filters.include_files = True
        filters.include_dirs = True
        return self

    def include_self(self) -> FileScanner:
        """Also yield the root itself, before anything else."""
        self._configure().include_self = True
        return self

    def filter(self, predicate: PathPredicate) -> FileScanner:
        """Only yield entries accepted by ``predicate``.

        Replaces any previous result filter. Does not affect recursion.
        """
        self._configure().results_filter = predicate
        return self

    def recurse_filter(self, predicate: PathPredicate) -> FileScanner:
        """Only descend into subdirectories accepted by ``predicate``.

        Replaces any previous recursion predicate. The predicate is called
        once per subdirectory, before its contents are listed. A rejected
        directory can still be yielded.
        """
        self._configure().recurse_filter = predicate
        return self

    def recurse(self, enabled: bool = True) -> FileScanner:
        """Descend into every subdirectory, or (``False``) into none."""
        self._configure().recurse_filter = None if enabled else _never
        return self

    def follow_symlinks(self, enabled: bool = True) -> FileScanner:
        """Descend into symlinked directories."""
        self._configure().follow_symlinks = enabled
        return self

    def strict(self, enabled: bool = True) -> FileScanner:
        """Raise ScanError on unreadable entries instead of skipping them."""
        self._configure().strict = enabled
        return self

    def apply_settings(self, settings: ScanSettings) -> FileScanner:
        """Apply configured scan defaults.

        Skip patterns and the hidden-entry setting are combined with any
        predicates already installed.
        """
        filters = self._configure()
        filters.follow_symlinks = settings.follow_symlinks
        filters.strict = settings.strict

        previous_recurse = filters.recurse_filter
        previous_results = filters.results_filter
        include_hidden = settings.include_hidden

        def recurse_predicate(directory: FileRef) -> bool:
            if settings.is_skipped_dir(directory.name):
                return False
            if not include_hidden and directory.name.startswith("."):
                return False
            return previous_recurse is None or previous_recurse(directory)

        filters.recurse_filter = recurse_predicate

        if not include_hidden:

            def results_predicate(entry: FileRef) -> bool:
                if entry.name.startswith("."):
                    return False
                return previous_results is None or previous_results(entry)

            filters.results_filter = results_predicate

        return self

    def clone(self) -> FileScanner:
        """Create an unstarted scanner with a copy of this configuration."""
        return FileScanner(self._root, self._filters.copy())

    # =========================================================================
    # Iteration
    # =========================================================================

    def __iter__(self) -> FileScanner:
        return self

    def __next__(self) -> FileRef:
        if self._iterator is None:
            self._iterator = self._walk()
        return next(self._iterator)

    def collect(self) -> list[FileRef]:
        """Drain the remaining entries into a list, preserving order."""
        return list(self)

    def _walk(self) -> Iterator[FileRef]:
        """Generate matching entries depth-first, in pre-order."""
        filters = self._filters
        root = self._root

        if filters.include_self and root.exists() and filters.accepts(root):
            yield root

        if not root.is_dir():
            logger.debug("Scan root is not a directory: %s", root)
            return

        visited: set[tuple[int, int]] = set()
        if filters.follow_symlinks:
            self._mark_visited(root, visited)

        children = self._list_dir(root)
        if children is None:
            return

        stack = list(reversed(children))
        while stack:
            entry = stack.pop()
            kind = self._entry_kind(entry)
            if kind is None:
                continue
            is_dir, is_link = kind

            sub_entries: list[FileRef] | None = None
            if self._should_descend(entry, is_dir, is_link, visited):
                sub_entries = self._list_dir(entry)
                if sub_entries is None:
                    continue

            if filters.includes(is_dir) and filters.accepts(entry):
                yield entry

            if sub_entries:
                stack.extend(reversed(sub_entries))

    def _entry_kind(self, entry: FileRef) -> tuple[bool, bool] | None:
        """Determine ``(is_dir, is_link)`` for a listed entry.

        A symlink counts as a directory when its target is one.

        Returns:
            The entry kind, or None if the entry vanished or cannot be
            inspected.

        Raises:
            ScanError: If the entry cannot be inspected in strict mode.
        """
        try:
            info = os.lstat(entry.path)
        except FileNotFoundError:
            logger.debug("Entry vanished during scan: %s", entry)
            return None
        except OSError as e:
            if self._filters.strict:
                msg = f"Cannot inspect '{entry}': {e.strerror or e}"
                raise ScanError(msg, path=entry.path) from e
            logger.warning("Skipping uninspectable entry %s: %s", entry, e.strerror or e)
            return None

        if not stat.S_ISLNK(info.st_mode):
            return stat.S_ISDIR(info.st_mode), False
        try:
            target = os.stat(entry.path)
        except OSError:
            # Dead link or link loop
            return False, True
        return stat.S_ISDIR(target.st_mode), True

    def _should_descend(
        self,
        entry: FileRef,
        is_dir: bool,
        is_link: bool,
        visited: set[tuple[int, int]],
    ) -> bool:
        """Decide whether the contents of ``entry`` are visited."""
        if not is_dir:
            return False
        if is_link and not self._filters.follow_symlinks:
            return False
        if not self._filters.should_recurse(entry):
            return False
        if self._filters.follow_symlinks and not self._mark_visited(entry, visited):
            logger.debug("Skipping already visited directory: %s", entry)
            return False
        return True

    @staticmethod
    def _mark_visited(directory: FileRef, visited: set[tuple[int, int]]) -> bool:
        """Record a directory's identity; False if it was seen before."""
        try:
            info = os.stat(directory.path)
        except OSError:
            return True
        key = (info.st_dev, info.st_ino)
        if key in visited:
            return False
        visited.add(key)
        return True

    def _list_dir(self, directory: FileRef) -> list[FileRef] | None:
        """List a directory's entries in sorted name order.

        Returns:
            The entries, or None if the directory could not be read.

        Raises:
            ScanError: If the directory cannot be read in strict mode.
        """
        try:
            names = sorted(child.name for child in Path(directory.path).iterdir())
        except OSError as e:
            if self._filters.strict:
                msg = f"Cannot read directory '{directory}': {e.strerror or e}"
                raise ScanError(msg, path=directory.path) from e
            logger.warning("Skipping unreadable directory %s: %s", directory, e.strerror or e)
            return None

        return [directory.child(name) for name in names]
