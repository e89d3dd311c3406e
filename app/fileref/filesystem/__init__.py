"""Directory scanning module.

This module provides the lazy FileScanner and the filter and entry
type models it works with.
"""

from fileref.filesystem.models import InclusionMode, PathType, ScanFilterSet, classify_path
from fileref.filesystem.scanner import FileScanner

__all__ = [
    "FileScanner",
    "InclusionMode",
    "PathType",
    "ScanFilterSet",
    "classify_path",
]
