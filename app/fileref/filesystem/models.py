"""Filesystem scan models.

This module defines the filter configuration consumed by FileScanner
and the entry type classification used when presenting scan results.
"""

import dataclasses
from dataclasses import dataclass
from enum import Enum

from fileref.core.path import FileRef, PathPredicate


class InclusionMode(str, Enum):
    """Which entry categories a scan yields.

    Attributes:
        FILES: Only files (including symlinks that do not point at a directory).
        DIRECTORIES: Only directories.
        ALL: Files and directories.
    """

    FILES = "files"
    DIRECTORIES = "directories"
    ALL = "all"


class PathType(str, Enum):
    """Type of filesystem entry.

    Attributes:
        DIRECTORY: Regular directory.
        FILE: Regular file.
        SYMLINK: Symbolic link with a valid target.
        DEAD_SYMLINK: Symbolic link whose target does not exist.
    """

    DIRECTORY = "directory"
    FILE = "file"
    SYMLINK = "symlink"
    DEAD_SYMLINK = "dead_symlink"


@dataclass(slots=True)
class ScanFilterSet:
    """Filter configuration for a single scan.

    Built incrementally through the FileScanner builder methods. Inclusion
    flags are additive: when neither is set, both files and directories
    are yielded.

    Attributes:
        include_files: Yield file entries.
        include_dirs: Yield directory entries.
        include_self: Yield the scan root before its contents.
        results_filter: Predicate an entry must pass to be yielded.
            None accepts every entry.
        recurse_filter: Predicate a subdirectory must pass to be descended
            into. None descends into every subdirectory.
        follow_symlinks: Descend into symlinked directories.
        strict: Raise ScanError on unreadable directories instead of
            skipping them.
    """

    include_files: bool = False
    include_dirs: bool = False
    include_self: bool = False
    results_filter: PathPredicate | None = None
    recurse_filter: PathPredicate | None = None
    follow_symlinks: bool = False
    strict: bool = False

    @property
    def inclusion_mode(self) -> InclusionMode:
        """Effective inclusion mode derived from the inclusion flags."""
        if self.include_files == self.include_dirs:
            return InclusionMode.ALL
        return InclusionMode.FILES if self.include_files else InclusionMode.DIRECTORIES

    def includes(self, is_dir: bool) -> bool:
        """Check if an entry of the given category is yielded."""
        mode = self.inclusion_mode
        if mode == InclusionMode.ALL:
            return True
        return mode == (InclusionMode.DIRECTORIES if is_dir else InclusionMode.FILES)

    def accepts(self, entry: FileRef) -> bool:
        """Check an entry against the result filter."""
        return self.results_filter is None or self.results_filter(entry)

    def should_recurse(self, directory: FileRef) -> bool:
        """Check a subdirectory against the recursion predicate."""
        return self.recurse_filter is None or self.recurse_filter(directory)

    def copy(self) -> "ScanFilterSet":
        """Return an independent copy of this filter set."""
        return dataclasses.replace(self)


def classify_path(entry: FileRef) -> PathType | None:
    """Determine the type of a filesystem entry.

    Checks for symlinks first (before is_dir/is_file which follow
    symlinks), distinguishing between live and dead symlinks.

    Args:
        entry: Path to classify.

    Returns:
        PathType classification, or None if nothing exists at the path
        or it cannot be inspected.
    """
    if entry.is_symlink():
        if not entry.exists():
            return PathType.DEAD_SYMLINK
        return PathType.SYMLINK

    if entry.is_dir():
        return PathType.DIRECTORY
    if entry.exists():
        return PathType.FILE

    return None
