"""Unit tests for the FileRef value type.

Tests normalization, raw construction, concatenation, equality and
the path property helpers.
"""

import dataclasses
import errno
import os
from pathlib import Path
from unittest.mock import patch

import pytest
from fileref.core.errors import FileRefError, WorkingDirError
from fileref.core.path import FileRef, normalize_path


class TestNormalization:
    """Tests for the normalizing constructor."""

    def test_backslashes_become_forward_slashes(self) -> None:
        """Windows separators are converted to the portable form."""
        assert FileRef("dir\\file.txt").path == "dir/file.txt"

    def test_mixed_separators(self) -> None:
        """Mixed separators normalize to a single form."""
        assert FileRef("a\\b/c\\\\d//e").path == "a/b/c/d/e"

    def test_redundant_separators_and_dots(self) -> None:
        """Doubled separators and '.' segments collapse."""
        assert FileRef("a//b/./c") == FileRef("a/b/c")
        assert FileRef("a//b/./c").path == "a/b/c"

    def test_messy_path(self) -> None:
        """'..' cancels preceding segments, including after other '..'."""
        assert FileRef("./dir1/dir2/..//../file.txt").path == "file.txt"

    def test_leading_parent_segments_are_kept(self) -> None:
        """Relative paths keep '..' that cannot be resolved."""
        assert FileRef("../../a/../b").path == "../../b"

    def test_parent_above_root_is_dropped(self) -> None:
        """'..' directly under the root stays at the root."""
        assert FileRef("/../a").path == "/a"

    def test_absolute_root_preserved(self) -> None:
        """A leading separator survives normalization."""
        assert FileRef("/usr//local/").path == "/usr/local"
        assert FileRef("/").path == "/"

    def test_drive_prefix_preserved(self) -> None:
        """Windows drive letters are kept."""
        assert FileRef("C:\\Users\\me\\..\\file.txt").path == "C:/Users/file.txt"

    def test_trailing_separator_removed(self) -> None:
        """Trailing separators are dropped."""
        assert FileRef("test1/test2/").path == "test1/test2"

    def test_current_dir_alone(self) -> None:
        """A path that only refers to the current dir becomes '.'."""
        assert FileRef("./").path == "."
        assert FileRef("a/..").path == "."

    def test_empty_path(self) -> None:
        """The empty string stays empty and never raises."""
        assert FileRef("").path == ""
        assert normalize_path("") == ""

    def test_accepts_path_like(self, tmp_path: Path) -> None:
        """os.PathLike objects are accepted."""
        assert FileRef(tmp_path).path == tmp_path.as_posix()


class TestRawConstruction:
    """Tests for the raw (verbatim) constructor."""

    @pytest.mark.parametrize("text", ["static/dir/file.txt", "a//b/./c", "dir\\x", ""])
    def test_raw_preserves_text(self, text: str) -> None:
        """Raw construction never alters its input."""
        assert FileRef.raw(text).to_display_text() == text
        assert str(FileRef.raw(text)) == text

    def test_new_const_alias(self) -> None:
        """new_const is the same as raw."""
        assert FileRef.new_const("x//y").path == "x//y"

    def test_raw_equals_normalized_counterpart(self) -> None:
        """Equality is defined on the normalized form."""
        assert FileRef.raw("a//b/./c") == FileRef("a/b/c")
        assert hash(FileRef.raw("a//b/./c")) == hash(FileRef("a/b/c"))

    def test_new_normalizes(self) -> None:
        """FileRef.new behaves like the constructor."""
        assert FileRef.new("a//b").path == "a/b"


class TestImmutability:
    """Tests for value semantics."""

    def test_cannot_assign_path(self) -> None:
        """FileRef attributes are read-only."""
        ref = FileRef("a")
        with pytest.raises(dataclasses.FrozenInstanceError):
            ref.path = "b"  # type: ignore[misc]

    def test_usable_as_dict_key(self) -> None:
        """Equal refs hash to the same bucket."""
        seen = {FileRef("a/b"): 1}
        assert seen[FileRef("a//b/")] == 1

    def test_ordering(self) -> None:
        """Refs sort by their normalized text."""
        refs = [FileRef("b"), FileRef("a/c"), FileRef("a")]
        assert sorted(refs) == [FileRef("a"), FileRef("a/c"), FileRef("b")]

    def test_not_equal_to_str(self) -> None:
        """FileRef does not compare equal to plain strings."""
        assert FileRef("a") != "a"


class TestConcatenation:
    """Tests for concat, + and +=."""

    @pytest.mark.parametrize(
        ("base", "suffix"),
        [
            ("dir", "file"),
            ("dir", "/file"),
            ("dir/", "file"),
            ("dir/", "/file"),
            ("dir\\", "\\file"),
        ],
    )
    def test_single_separator(self, base: str, suffix: str) -> None:
        """Exactly one separator ends up between base and suffix."""
        assert (FileRef(base) + suffix).path == "dir/file"
        assert FileRef.raw(base).concat(suffix).path == "dir/file"

    def test_nested_suffix(self) -> None:
        """Multi-segment suffixes are appended as-is."""
        assert (FileRef("a") + "b/c.txt").path == "a/b/c.txt"

    def test_concat_does_not_mutate(self) -> None:
        """Concatenation returns a new value."""
        base = FileRef("dir")
        result = base + "file"
        assert base.path == "dir"
        assert result.path == "dir/file"

    def test_in_place_add_rebinds(self) -> None:
        """+= rebinds the name and leaves other references untouched."""
        ref = FileRef("dir")
        alias = ref
        ref += "sub"
        ref += "/file.txt"
        assert ref.path == "dir/sub/file.txt"
        assert alias.path == "dir"

    def test_empty_suffix(self) -> None:
        """An empty suffix yields an equal value."""
        assert FileRef("dir").concat("") == FileRef("dir")

    def test_empty_base(self) -> None:
        """An empty base yields the suffix."""
        assert FileRef("").concat("/file").path == "/file"
        assert FileRef("").concat("file").path == "file"

    def test_root_base(self) -> None:
        """Appending to the root does not double the separator."""
        assert (FileRef("/") + "etc").path == "/etc"

    def test_add_rejects_other_types(self) -> None:
        """Adding a non-path type raises TypeError."""
        with pytest.raises(TypeError):
            _ = FileRef("a") + 1  # type: ignore[operator]


class TestProperties:
    """Tests for name, extension and related accessors."""

    def test_nodes(self) -> None:
        """nodes lists the path segments."""
        assert FileRef("dir/subdir/file.txt").nodes == ["dir", "subdir", "file.txt"]
        assert FileRef("/usr/bin").nodes == ["usr", "bin"]

    def test_name(self) -> None:
        """name is the last segment."""
        assert FileRef("dir/subdir/file.txt").name == "file.txt"
        assert FileRef("/").name == ""

    def test_extension(self) -> None:
        """extension is the text after the last dot."""
        assert FileRef("dir/archive.tar.gz").extension == "gz"
        assert FileRef("dir/README").extension is None

    def test_stem(self) -> None:
        """stem drops the extension."""
        assert FileRef("dir/archive.tar.gz").stem == "archive.tar"
        assert FileRef("dir/README").stem == "README"

    def test_repr(self) -> None:
        """repr shows the class and path."""
        assert repr(FileRef("a/b")) == "FileRef('a/b')"

    def test_fspath(self, tmp_path: Path) -> None:
        """FileRef works with os APIs."""
        ref = FileRef(tmp_path)
        assert os.fspath(ref) == tmp_path.as_posix()
        assert Path(ref) == tmp_path


class TestParentDir:
    """Tests for parent_dir."""

    def test_parent_dir(self) -> None:
        """Parent of a nested path drops the last segment."""
        assert FileRef("dir/subdir/file.txt").parent_dir().path == "dir/subdir"

    def test_parent_dir_ends_with_slash(self) -> None:
        """Trailing separators do not count as a segment."""
        assert FileRef("test1/test2/").parent_dir().path == "test1"

    def test_parent_dir_relative_root(self) -> None:
        """A single relative segment has the current dir as parent."""
        assert FileRef("file.txt").parent_dir().path == "."

    def test_parent_dir_of_absolute_child(self) -> None:
        """A top-level absolute entry has the root as parent."""
        assert FileRef("/etc").parent_dir().path == "/"

    def test_parent_dir_of_parent_reference(self) -> None:
        """Paths ending in '..' go one level further up."""
        assert FileRef("..").parent_dir().path == "../.."

    @pytest.mark.parametrize("text", ["/", "C:", "C:/", ""])
    def test_parent_dir_of_root_fails(self, text: str) -> None:
        """Roots and the empty path have no parent."""
        with pytest.raises(FileRefError):
            FileRef(text).parent_dir()


class TestAbsoluteRelative:
    """Tests for absolute/relative conversion and working_dir."""

    def test_is_absolute_path(self) -> None:
        """Root and drive prefixes make a path absolute."""
        assert FileRef("/tmp").is_absolute_path()
        assert FileRef("C:/tmp").is_absolute_path()
        assert FileRef("tmp").is_relative_path()

    def test_absolute(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Relative paths are resolved against the working directory."""
        monkeypatch.chdir(tmp_path)
        assert FileRef("dir/file.txt").absolute() == FileRef(Path.cwd()) + "dir/file.txt"

    def test_absolute_keeps_absolute(self) -> None:
        """Absolute paths are returned unchanged."""
        ref = FileRef("/already/absolute")
        assert ref.absolute() is ref

    def test_relative(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Paths inside the working directory become relative."""
        monkeypatch.chdir(tmp_path)
        cwd = Path.cwd()
        ref = FileRef(cwd / "dir" / "file.txt")
        assert ref.relative().path == "dir/file.txt"
        assert FileRef(cwd).relative().path == "."

    def test_relative_outside_working_dir(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Paths outside the working directory stay absolute."""
        inside = tmp_path / "inside"
        inside.mkdir()
        monkeypatch.chdir(inside)
        ref = FileRef(tmp_path / "outside.txt")
        assert ref.relative() == ref

    def test_working_dir(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """working_dir returns the process working directory."""
        monkeypatch.chdir(tmp_path)
        assert FileRef.working_dir() == FileRef(os.getcwd())

    def test_working_dir_failure(self) -> None:
        """A vanished working directory raises WorkingDirError."""
        with (
            patch("fileref.core.path.os.getcwd", side_effect=FileNotFoundError("gone")),
            pytest.raises(WorkingDirError),
        ):
            FileRef.working_dir()


class TestDerivedPaths:
    """Tests for child, with_extension and the text helpers."""

    def test_child(self) -> None:
        """child appends one entry name."""
        assert FileRef("dir").child("file.txt").path == "dir/file.txt"
        assert FileRef("/").child("etc").path == "/etc"

    def test_child_of_current_dir(self) -> None:
        """Children of '.' have no leading './'."""
        assert FileRef(".").child("file.txt").path == "file.txt"

    def test_child_keeps_name_verbatim(self) -> None:
        """A backslash in an entry name is not turned into a separator."""
        child = FileRef("dir").child("a\\b.txt")

        assert child.path == "dir/a\\b.txt"
        assert child == FileRef("dir/a/b.txt")

    def test_with_extension(self) -> None:
        """The last extension is replaced, a leading dot is optional."""
        assert FileRef("dir/archive.tar.gz").with_extension("zip").path == "dir/archive.tar.zip"
        assert FileRef("dir/README").with_extension(".md").path == "dir/README.md"

    def test_with_extension_none_removes(self) -> None:
        """None or an empty string drops the extension."""
        assert FileRef("dir/file.txt").with_extension(None).path == "dir/file"
        assert FileRef("file.txt").with_extension("").path == "file"

    def test_with_extension_without_name(self) -> None:
        """Paths without a file name cannot take an extension."""
        with pytest.raises(FileRefError, match="no file name"):
            FileRef("/").with_extension("txt")

    def test_replace(self) -> None:
        """replace substitutes text and normalizes the result."""
        assert FileRef("src/old/file.txt").replace("old", "new").path == "src/new/file.txt"
        assert FileRef("a/b").replace("/", "//").path == "a/b"

    def test_strip_prefix(self) -> None:
        """strip_prefix returns None when the prefix is absent."""
        assert FileRef("/home/user/file.txt").strip_prefix("/home/") == FileRef("user/file.txt")
        assert FileRef("/home/user/file.txt").strip_prefix("/var") is None

    def test_strip_suffix(self) -> None:
        """strip_suffix returns None when the suffix is absent."""
        assert FileRef("dir/file.txt").strip_suffix(".txt") == FileRef("dir/file")
        assert FileRef("dir/file.txt").strip_suffix(".md") is None
        assert FileRef("dir/file.txt").strip_suffix("") == FileRef("dir/file.txt")


class TestPredicates:
    """Tests for the filesystem predicates."""

    def test_exists_file_and_dir(self, tmp_path: Path) -> None:
        """Predicates reflect the live filesystem."""
        file = tmp_path / "file.txt"
        file.write_text("x")

        assert FileRef(file).exists()
        assert FileRef(file).is_file()
        assert not FileRef(file).is_dir()
        assert FileRef(tmp_path).is_dir()
        assert FileRef(tmp_path).is_directory()
        assert not FileRef(tmp_path).is_file()

    def test_missing_path(self, tmp_path: Path) -> None:
        """A missing path is neither file nor directory."""
        ref = FileRef(tmp_path) + "missing"
        assert not ref.exists()
        assert not ref.is_file()
        assert not ref.is_dir()
        assert not ref.is_accessible()

    def test_predicates_are_not_cached(self, tmp_path: Path) -> None:
        """Each call re-queries the filesystem."""
        ref = FileRef(tmp_path) + "later.txt"
        assert not ref.exists()
        (tmp_path / "later.txt").write_text("now")
        assert ref.exists()

    def test_empty_path_does_not_exist(self) -> None:
        """The empty path never refers to an entry."""
        assert not FileRef("").exists()
        assert not FileRef("").is_dir()

    def test_is_accessible(self, tmp_path: Path) -> None:
        """Readable entries are accessible."""
        file = tmp_path / "file.txt"
        file.write_text("x")
        assert FileRef(file).is_accessible()
        assert FileRef(tmp_path).is_accessible()

    def test_uninspectable_path_is_absent(self, tmp_path: Path) -> None:
        """A stat failure other than not-found makes every predicate False."""
        file = tmp_path / "file.txt"
        file.write_text("x")
        ref = FileRef(file)
        error = PermissionError(errno.EACCES, "Permission denied")

        with patch("os.stat", side_effect=error), patch("os.lstat", side_effect=error):
            assert not ref.exists()
            assert not ref.is_file()
            assert not ref.is_dir()
            assert not ref.is_symlink()

    def test_is_root(self) -> None:
        """Only bare roots are roots."""
        assert FileRef("/").is_root()
        assert FileRef("C:").is_root()
        assert not FileRef("/etc").is_root()
        assert not FileRef(".").is_root()


class TestScanHelpers:
    """Tests for the listing shortcuts on FileRef."""

    def test_scanner_is_rooted_here(self, tree: FileRef) -> None:
        """scanner() starts at this path."""
        assert tree.scanner().root == tree

    def test_list_files(self, tree: FileRef) -> None:
        """list_files only returns direct children."""
        assert tree.list_files() == [tree + "file1.txt"]

    def test_list_files_recurse(self, tree: FileRef) -> None:
        """list_files_recurse descends into every directory."""
        assert [entry.name for entry in tree.list_files_recurse()] == [
            "file1.txt",
            "file2.txt",
            "file3.txt",
            "file4.txt",
        ]

    def test_list_dirs(self, tree: FileRef) -> None:
        """list_dirs only returns direct subdirectories."""
        assert tree.list_dirs() == [tree + "subdir1", tree + "subdir2"]

    def test_list_dirs_recurse(self, tree: FileRef) -> None:
        """list_dirs_recurse includes nested directories."""
        assert tree.list_dirs_recurse() == [
            tree + "subdir1",
            tree + "subdir1/sub_subdir1",
            tree + "subdir2",
        ]
