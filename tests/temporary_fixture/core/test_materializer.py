import os
import tempfile
import uuid

import pytest

from temporary_fixture.core.context import MaterializationContext
from temporary_fixture.core.materializer import make
from temporary_fixture.models.fixture import Fixture
from temporary_fixture.exceptions import (
    FileOperationError,
    IllegalPathError,
    InvalidContentError,
    MissingSymlinkTargetError,
)
from temporary_fixture.utils.file_utils import FileUtils

TEMP = os.path.normpath(os.path.abspath(tempfile.gettempdir()))


def read_text(path):
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


class TestMakePathTraversal:
    """Test that make() refuses to write or link outside the fixture root."""

    def test_rejects_root_outside_cwd_and_tempdir(self, tmp_path, monkeypatch):
        # Arrange
        monkeypatch.chdir(tmp_path)
        root_path = os.path.join(TEMP, uuid.uuid4().hex, "..")
        new_dir = Fixture("dir", {"file.txt": Fixture("file", "ehm")})

        # Act & Assert
        with pytest.raises(IllegalPathError, match="Illegal path"):
            make(root_path, new_dir)

    def test_rejects_hard_link_to_outside_file(self, fixture_root, outside_file):
        # Arrange
        fixture = Fixture("dir", {"link": Fixture("link", os.path.join("..", outside_file))})

        # Act & Assert
        with pytest.raises(IllegalPathError) as exc_info:
            make(fixture_root, fixture)

        assert exc_info.value.filepath == TEMP
        assert not os.path.lexists(os.path.join(fixture_root, "link"))

    def test_rejects_symlink_to_outside_file(self, fixture_root, outside_file):
        # Arrange
        fixture = Fixture("dir", {"link": Fixture("symlink", os.path.join("..", outside_file))})

        # Act & Assert
        with pytest.raises(IllegalPathError):
            make(fixture_root, fixture)

        assert not os.path.lexists(os.path.join(fixture_root, "link"))

    def test_rejects_absolute_symlink_target_outside_root(self, fixture_root, outside_file):
        # Arrange
        fixture = {"link": Fixture("symlink", os.path.join(TEMP, outside_file))}

        # Act & Assert
        with pytest.raises(IllegalPathError):
            make(fixture_root, fixture)

    def test_each_call_starts_from_fresh_boundary(self, fixture_root):
        """A root created by one call does not leak into the next call."""
        # Arrange
        make(fixture_root, {"sub": {}})

        # Act & Assert
        with pytest.raises(IllegalPathError):
            make(os.path.join(fixture_root, "sub", "file.txt"), "data")
        with pytest.raises(IllegalPathError):
            make(os.path.join(fixture_root, "file.txt"), "data")

        assert not os.path.exists(os.path.join(fixture_root, "file.txt"))

    def test_rejects_link_into_sibling_not_yet_created(self, fixture_root):
        """A sibling directory only becomes a legal parent once it is created."""
        # Arrange
        fixture = {
            "b": {"l": Fixture("link", os.path.join("..", "a", "x"))},
            "a": {"x": "1"},
        }

        # Act & Assert
        with pytest.raises(IllegalPathError) as exc_info:
            make(fixture_root, fixture)

        assert exc_info.value.filepath == os.path.join(fixture_root, "a")
        assert not os.path.lexists(os.path.join(fixture_root, "b", "l"))

    def test_boundary_collapses_to_root(self, fixture_root, outside_file):
        """Once the root exists the temp directory itself is no longer writable."""
        # Arrange
        fixture = {"sub": {"escape": Fixture("link", os.path.join("..", "..", outside_file))}}

        # Act & Assert
        with pytest.raises(IllegalPathError):
            make(fixture_root, fixture)


class TestMakeDirectoryStructure:
    """Test creating directory structures."""

    def test_creates_structure_from_explicit_fixtures(self, fixture_root):
        # Arrange
        fixture = Fixture("dir", {
            "file": Fixture("file", "hello"),
            "subdir": Fixture("dir", {
                "subf": Fixture("file", "subs"),
            }),
            "link": Fixture("link", "file"),
            "sym": Fixture("symlink", "subdir"),
        })

        # Act
        result = make(fixture_root, fixture)

        # Assert
        assert result == fixture_root
        assert os.path.isdir(fixture_root)
        assert os.path.isfile(os.path.join(fixture_root, "file"))
        assert os.path.isdir(os.path.join(fixture_root, "subdir"))
        assert os.path.isfile(os.path.join(fixture_root, "subdir", "subf"))
        assert os.path.isfile(os.path.join(fixture_root, "link"))
        assert not os.path.islink(os.path.join(fixture_root, "link"))
        assert os.path.islink(os.path.join(fixture_root, "sym"))
        assert os.path.isdir(os.path.join(fixture_root, "sym"))

    def test_creates_structure_from_raw_values(self, fixture_root):
        # Arrange
        fixture = {
            "file": "hello",
            "subdir": {"subf": "subs"},
            "link": Fixture("link", "file"),
            "sym": Fixture("symlink", "subdir"),
        }

        # Act
        make(fixture_root, fixture)

        # Assert
        assert read_text(os.path.join(fixture_root, "file")) == "hello"
        assert read_text(os.path.join(fixture_root, "subdir", "subf")) == "subs"
        assert read_text(os.path.join(fixture_root, "sym", "subf")) == "subs"

    def test_round_trip_contents(self, fixture_root):
        # Act
        make(fixture_root, {"a.txt": "hello", "sub": {"b.txt": "world"}})

        # Assert
        assert os.path.isdir(fixture_root)
        assert os.path.isdir(os.path.join(fixture_root, "sub"))
        assert read_text(os.path.join(fixture_root, "a.txt")) == "hello"
        assert read_text(os.path.join(fixture_root, "sub", "b.txt")) == "world"

    def test_writes_exact_bytes(self, fixture_root):
        # Arrange
        payload = bytes(range(256))

        # Act
        make(fixture_root, {"blob.bin": payload, "array.bin": bytearray(b"\x00\r\n")})

        # Assert
        with open(os.path.join(fixture_root, "blob.bin"), "rb") as f:
            assert f.read() == payload
        with open(os.path.join(fixture_root, "array.bin"), "rb") as f:
            assert f.read() == b"\x00\r\n"

    def test_text_is_written_without_newline_translation(self, fixture_root):
        # Act
        make(fixture_root, {"lines.txt": "a\nb\n"})

        # Assert
        with open(os.path.join(fixture_root, "lines.txt"), "rb") as f:
            assert f.read() == b"a\nb\n"

    def test_uses_given_encoding(self, fixture_root):
        # Act
        make(fixture_root, {"latin.txt": "é"}, encoding="latin-1")

        # Assert
        with open(os.path.join(fixture_root, "latin.txt"), "rb") as f:
            assert f.read() == b"\xe9"

    def test_creating_same_directory_twice_succeeds(self, fixture_root):
        # Arrange
        fixture = {"sub": {"f.txt": "one"}}
        make(fixture_root, fixture)

        # Act
        make(fixture_root, {"sub": {"f.txt": "two"}})

        # Assert
        assert read_text(os.path.join(fixture_root, "sub", "f.txt")) == "two"

    def test_top_level_file_in_tempdir(self, fixture_root):
        # Act
        make(fixture_root, "just a file")

        # Assert
        assert read_text(fixture_root) == "just a file"

    def test_relative_root_resolves_against_cwd(self, monkeypatch):
        # Arrange
        monkeypatch.chdir(TEMP)
        name = f"tf-relative-{uuid.uuid4().hex}"

        try:
            # Act
            result = make(name, {"f.txt": "x"})

            # Assert
            assert result == os.path.join(TEMP, name)
            assert read_text(os.path.join(TEMP, name, "f.txt")) == "x"
        finally:
            FileUtils.remove_tree(os.path.join(TEMP, name))

    def test_hard_link_shares_data_with_target(self, fixture_root):
        # Act
        make(fixture_root, {"file": "some contents", "subDir": {"link": Fixture("link", "../file")}})

        # Assert
        link = os.path.join(fixture_root, "subDir", "link")
        assert read_text(link) == "some contents"
        assert os.path.samefile(link, os.path.join(fixture_root, "file"))

    def test_hard_link_to_missing_target_fails(self, fixture_root):
        # Act & Assert
        with pytest.raises(FileOperationError) as exc_info:
            make(fixture_root, {"link": Fixture("link", "missing")})

        assert isinstance(exc_info.value.__cause__, FileNotFoundError)
        assert exc_info.value.filepath == os.path.join(fixture_root, "link")

    def test_invalid_raw_content_fails_before_writing(self, fixture_root):
        # Act & Assert
        with pytest.raises(InvalidContentError):
            make(fixture_root, 42)

        assert not os.path.exists(fixture_root)


class TestMakeSymlinks:
    """Test deferred symlink creation."""

    def test_symlink_declared_before_its_target(self, fixture_root):
        # Arrange
        fixture = {"link": Fixture("symlink", "sibling"), "sibling": {"f.txt": "x"}}

        # Act
        make(fixture_root, fixture)

        # Assert
        link = os.path.join(fixture_root, "link")
        assert os.path.islink(link)
        assert read_text(os.path.join(link, "f.txt")) == "x"

    def test_symlink_to_file_in_nested_directory(self, fixture_root):
        # Act
        make(fixture_root, {"sub": {"link": Fixture("symlink", "../target.txt")}, "target.txt": "t"})

        # Assert
        link = os.path.join(fixture_root, "sub", "link")
        assert os.path.islink(link)
        assert os.readlink(link) == os.path.join(fixture_root, "target.txt")
        assert read_text(link) == "t"

    def test_missing_symlink_target_fails(self, fixture_root):
        # Act & Assert
        with pytest.raises(MissingSymlinkTargetError) as exc_info:
            make(fixture_root, {"broken": Fixture("symlink", "does-not-exist")})

        assert exc_info.value.target == os.path.join(fixture_root, "does-not-exist")
        assert not os.path.lexists(os.path.join(fixture_root, "broken"))

    def test_nested_call_with_context_defers_symlinks(self, fixture_root):
        """Nested calls only record symlinks; the top-level call creates them."""
        # Arrange
        os.makedirs(fixture_root)
        context = MaterializationContext(allowed_paths={fixture_root})

        # Act
        make(os.path.join(fixture_root, "link"), Fixture("symlink", "target"), context)

        # Assert
        assert context.symlinks == {
            os.path.join(fixture_root, "link"): os.path.join(fixture_root, "target"),
        }
        assert not os.path.lexists(os.path.join(fixture_root, "link"))
