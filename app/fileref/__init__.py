"""fileref - path handling, file operations and lazy directory scanning.

Example:
    >>> from fileref import FileRef
    >>> images = FileRef("images")
    >>> pngs = (
    ...     images.scanner()
    ...     .include_files()
    ...     .recurse_filter(lambda d: not d.name.startswith("_"))
    ...     .collect()
    ... )
"""

__version__ = "0.1.0"

from fileref.core.errors import (
    ConfigError,
    ConfigNotFoundError,
    ConfigParseError,
    FileIOError,
    FileRefError,
    NotAFileError,
    PathEncodingError,
    PathExistsError,
    PathNotFoundError,
    PathPermissionError,
    ScanError,
    ScannerStateError,
    WorkingDirError,
)
from fileref.core.path import FileRef, PathPredicate, normalize_path
from fileref.filesystem.models import InclusionMode, ScanFilterSet
from fileref.filesystem.scanner import FileScanner

__all__ = [
    "ConfigError",
    "ConfigNotFoundError",
    "ConfigParseError",
    "FileIOError",
    "FileRef",
    "FileRefError",
    "FileScanner",
    "InclusionMode",
    "NotAFileError",
    "PathEncodingError",
    "PathExistsError",
    "PathNotFoundError",
    "PathPermissionError",
    "PathPredicate",
    "ScanError",
    "ScanFilterSet",
    "ScannerStateError",
    "WorkingDirError",
    "__version__",
    "normalize_path",
]
