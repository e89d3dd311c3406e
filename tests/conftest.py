"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import os
from collections.abc import Iterator
from pathlib import Path

import pytest
from fileref.core.path import FileRef


@pytest.fixture(autouse=True)
def isolated_config_home(tmp_path_factory: pytest.TempPathFactory) -> Iterator[Path]:
    """Point XDG_CONFIG_HOME at an empty directory so user config never leaks in."""
    config_home = tmp_path_factory.mktemp("xdg-config")
    previous = os.environ.get("XDG_CONFIG_HOME")
    os.environ["XDG_CONFIG_HOME"] = str(config_home)
    yield config_home
    if previous is None:
        os.environ.pop("XDG_CONFIG_HOME", None)
    else:
        os.environ["XDG_CONFIG_HOME"] = previous


@pytest.fixture
def tree(tmp_path: Path) -> FileRef:
    """Create a small directory tree and return its root.

    Layout::

        root/
            file1.txt
            subdir1/
                file2.txt
                sub_subdir1/
                    file3.txt
            subdir2/
                file4.txt
    """
    root = tmp_path / "root"
    (root / "subdir1" / "sub_subdir1").mkdir(parents=True)
    (root / "subdir2").mkdir()
    (root / "file1.txt").write_text("one")
    (root / "subdir1" / "file2.txt").write_text("two")
    (root / "subdir1" / "sub_subdir1" / "file3.txt").write_text("three")
    (root / "subdir2" / "file4.txt").write_text("four")
    return FileRef(root)


@pytest.fixture
def images(tmp_path: Path) -> FileRef:
    """Create images/ with a.png, b.png and _hidden/c.png."""
    root = tmp_path / "images"
    (root / "_hidden").mkdir(parents=True)
    (root / "a.png").write_bytes(b"a")
    (root / "b.png").write_bytes(b"b")
    (root / "_hidden" / "c.png").write_bytes(b"c")
    return FileRef(root)
