# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Tests for the in-memory driver."""

from __future__ import annotations

import io

import pytest

from tests.helpers import DriverValidationSuite, build_tree
from tierfs.errors import AccessDeniedError, FilesystemError
from tierfs.filesystem import (
    Filesystem,
    InMemoryDriver,
    OpenFlags,
    ReadDriver,
    ReadWriteDriver,
    TempDriver,
)


class TestInMemoryDriverSuite(DriverValidationSuite):
    """Run the shared validation suite against InMemoryDriver."""

    @pytest.fixture
    def fs(self) -> Filesystem:
        return Filesystem(InMemoryDriver())


class TestCapabilities:
    def test_implements_every_tier(self) -> None:
        driver = InMemoryDriver()
        assert isinstance(driver, ReadDriver)
        assert isinstance(driver, ReadWriteDriver)
        assert isinstance(driver, TempDriver)
        assert Filesystem(driver).can_all()


class TestListingOrder:
    def test_read_dir_preserves_insertion_order(self, memory_fs: Filesystem) -> None:
        build_tree(memory_fs, "/d", {"b": b"", "a": {}, "c": b""})

        assert [info.name for info in memory_fs.read_dir("/d")] == ["b", "a", "c"]

    def test_recreated_entry_moves_to_end(self, memory_fs: Filesystem) -> None:
        build_tree(memory_fs, "/d", {"a": b"", "b": b""})
        memory_fs.delete_file("/d/a")
        memory_fs.write_bytes("/d/a", b"")

        assert [info.name for info in memory_fs.read_dir("/d")] == ["b", "a"]


class TestHandles:
    def test_writes_publish_on_close(self, memory_fs: Filesystem) -> None:
        memory_fs.write_bytes("/f", b"before")

        handle = memory_fs.create_file("/f")
        _ = handle.write(b"after")
        assert memory_fs.read_bytes("/f") == b""
        handle.close()

        assert memory_fs.read_bytes("/f") == b"after"

    def test_read_only_handle_rejects_write(self, memory_fs: Filesystem) -> None:
        memory_fs.write_bytes("/f", b"x")
        with memory_fs.open("/f") as handle, pytest.raises(io.UnsupportedOperation):
            _ = handle.write(b"y")

    def test_write_only_handle_rejects_read(self, memory_fs: Filesystem) -> None:
        memory_fs.write_bytes("/f", b"x")
        with (
            memory_fs.open_file("/f", OpenFlags.WRITE_ONLY) as handle,
            pytest.raises(io.UnsupportedOperation),
        ):
            _ = handle.read()

    def test_closed_handle_rejects_io(self, memory_fs: Filesystem) -> None:
        memory_fs.write_bytes("/f", b"x")
        handle = memory_fs.open("/f")
        handle.close()
        handle.close()
        with pytest.raises(ValueError, match="closed file"):
            _ = handle.read()

    def test_open_directory_fails(self, memory_fs: Filesystem) -> None:
        memory_fs.create_directory("/d")
        with pytest.raises(FilesystemError, match="Is a directory"):
            _ = memory_fs.open("/d")

    def test_write_after_delete_is_dropped(self, memory_fs: Filesystem) -> None:
        handle = memory_fs.create_file("/f")
        memory_fs.delete_file("/f")
        _ = handle.write(b"late")
        handle.close()

        assert not memory_fs.exists("/f")


class TestDirectories:
    def test_create_directory_over_file_fails(self, memory_fs: Filesystem) -> None:
        memory_fs.write_bytes("/f", b"")
        with pytest.raises(FilesystemError, match="A file exists"):
            memory_fs.create_directory("/f/sub")

    def test_move_dir_into_itself_fails(self, memory_fs: Filesystem) -> None:
        build_tree(memory_fs, "/a", {"b": {}})
        with pytest.raises(FilesystemError, match="into itself"):
            memory_fs.move_dir("/a", "/a/b/c")

    def test_move_dir_onto_existing_fails(self, memory_fs: Filesystem) -> None:
        memory_fs.create_directory("/a")
        memory_fs.create_directory("/b")
        with pytest.raises(FilesystemError, match="already exists"):
            memory_fs.move_dir("/a", "/b")

    def test_move_root_is_denied(self, memory_fs: Filesystem) -> None:
        with pytest.raises(AccessDeniedError):
            memory_fs.move_dir("/", "/elsewhere")

    def test_move_dir_rekeys_descendants(self, memory_fs: Filesystem) -> None:
        build_tree(memory_fs, "/a", {"x": {"y": b"deep"}})

        memory_fs.move_dir("/a", "/z")

        assert memory_fs.read_bytes("/z/x/y") == b"deep"
        assert [info.name for info in memory_fs.read_dir("/")] == ["z"]


class TestTemp:
    def test_temp_file_lives_under_tmp(self, memory_fs: Filesystem) -> None:
        path = memory_fs.get_temp_file("report-*.txt")

        assert path.startswith("/tmp/report-")
        assert path.endswith(".txt")
        assert memory_fs.read_bytes(path) == b""

    def test_temp_file_without_wildcard_appends_token(
        self, memory_fs: Filesystem
    ) -> None:
        path = memory_fs.get_temp_file("scratch")
        assert path.startswith("/tmp/scratch")
        assert len(path) > len("/tmp/scratch")

    def test_temp_dirs_are_unique(self, memory_fs: Filesystem) -> None:
        first = memory_fs.get_temp_dir("work-")
        second = memory_fs.get_temp_dir("work-")

        assert first != second
        assert memory_fs.is_dir(first) and memory_fs.is_dir(second)
