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

"""Tests for copying and moving between filesystems."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from tests.helpers import NavigationOnlyDriver, ReadOnlyDriver, build_tree
from tierfs.errors import FilesystemError, NotExistsError, NotSupportedError
from tierfs.filesystem import (
    Filesystem,
    InMemoryDriver,
    LocalDriver,
    copy,
    copy_all,
    copy_dir,
    copy_file,
    move,
    move_all,
    move_dir,
    move_file,
)


@pytest.fixture
def source() -> Filesystem:
    fs = Filesystem(InMemoryDriver())
    build_tree(
        fs,
        "/data",
        {"report.csv": b"a,b\n1,2\n", "raw": {"day1.bin": b"\x00\x01"}},
    )
    return fs


@pytest.fixture
def target(tmp_path: Path) -> Filesystem:
    return Filesystem(LocalDriver(_root=str(tmp_path)))


class TestCopyAcrossBackends:
    def test_copy_file(self, source: Filesystem, target: Filesystem) -> None:
        copy_file(source, "/data/report.csv", target, "/report.csv")

        assert target.read_bytes("/report.csv") == b"a,b\n1,2\n"
        assert source.read_bytes("/data/report.csv") == b"a,b\n1,2\n"

    def test_copy_dispatches_on_type(
        self, source: Filesystem, target: Filesystem, tmp_path: Path
    ) -> None:
        copy(source, "/data", target, "/mirror")

        assert (tmp_path / "mirror" / "report.csv").read_bytes() == b"a,b\n1,2\n"
        assert (tmp_path / "mirror" / "raw" / "day1.bin").read_bytes() == b"\x00\x01"

    def test_copy_dir_creates_destination(
        self, source: Filesystem, target: Filesystem
    ) -> None:
        copy_dir(source, "/data/raw", target, "/a/b/raw")
        assert target.read_bytes("/a/b/raw/day1.bin") == b"\x00\x01"

    def test_copy_all_into_existing_directory(
        self, source: Filesystem, target: Filesystem
    ) -> None:
        target.create_directory("/into")
        copy_all(source, "/data", target, "/into")

        assert {info.name for info in target.read_dir("/into")} == {
            "report.csv",
            "raw",
        }

    def test_copy_missing_source(self, source: Filesystem, target: Filesystem) -> None:
        with pytest.raises(NotExistsError):
            copy(source, "/nope", target, "/nope")

    def test_copy_from_read_only_source(self, target: Filesystem) -> None:
        backend = InMemoryDriver()
        Filesystem(backend).write_bytes("/f", b"ro")
        read_only = Filesystem(ReadOnlyDriver(backend))

        copy(read_only, "/f", target, "/f")

        assert target.read_bytes("/f") == b"ro"


class TestMoveAcrossBackends:
    def test_move_file(self, source: Filesystem, target: Filesystem) -> None:
        move_file(source, "/data/report.csv", target, "/report.csv")

        assert target.read_bytes("/report.csv") == b"a,b\n1,2\n"
        assert not source.exists("/data/report.csv")

    def test_move_dir(self, source: Filesystem, target: Filesystem) -> None:
        move_dir(source, "/data/raw", target, "/raw")

        assert target.read_bytes("/raw/day1.bin") == b"\x00\x01"
        assert not source.exists("/data/raw")

    def test_move_dispatches_on_type(
        self, source: Filesystem, target: Filesystem
    ) -> None:
        move(source, "/data", target, "/data")

        assert target.is_file("/data/report.csv")
        assert not source.exists("/data")

    def test_move_all_leaves_empty_source(
        self, source: Filesystem, target: Filesystem
    ) -> None:
        target.create_directory("/dest")

        move_all(source, "/data", target, "/dest")

        assert source.is_dir("/data")
        assert list(source.read_dir("/data")) == []
        assert target.is_file("/dest/raw/day1.bin")

    def test_move_missing_source(self, source: Filesystem, target: Filesystem) -> None:
        with pytest.raises(NotExistsError):
            move(source, "/nope", target, "/nope")


class TestSameFilesystem:
    def test_move_file_onto_itself_keeps_file(self, target: Filesystem) -> None:
        target.write_bytes("/a.txt", b"keep")

        move_file(target, "/a.txt", target, "a.txt")

        assert target.read_bytes("/a.txt") == b"keep"

    def test_copy_file_onto_itself_on_host_disk(self, tmp_path: Path) -> None:
        fs = Filesystem(LocalDriver())
        path = tmp_path / "a.txt"
        _ = path.write_bytes(b"keep")

        copy_file(fs, str(path), fs, f"{tmp_path}/./a.txt")

        assert path.read_bytes() == b"keep"

    def test_copy_dir_into_own_subtree_on_host_disk(self, tmp_path: Path) -> None:
        fs = Filesystem(LocalDriver())
        (tmp_path / "src").mkdir()
        _ = (tmp_path / "src" / "f").write_bytes(b"1")

        with pytest.raises(FilesystemError):
            copy_dir(fs, str(tmp_path / "src"), fs, f"{tmp_path}/src//nested")

        assert not (tmp_path / "src" / "nested").exists()


class TestCapabilityChecks:
    def test_copy_needs_readable_source(self, target: Filesystem) -> None:
        navigation_only = Filesystem(NavigationOnlyDriver())
        with pytest.raises(NotSupportedError) as excinfo:
            copy(navigation_only, "/f", target, "/f")
        assert excinfo.value.operation == "copy"
        assert "Source" in str(excinfo.value)

    def test_copy_needs_writable_destination(self, source: Filesystem) -> None:
        read_only = Filesystem(ReadOnlyDriver())
        with pytest.raises(NotSupportedError) as excinfo:
            copy_file(source, "/data/report.csv", read_only, "/x")
        assert excinfo.value.operation == "copy_file"
        assert "Destination" in str(excinfo.value)

    def test_move_needs_writable_source(self, target: Filesystem) -> None:
        backend = InMemoryDriver()
        Filesystem(backend).write_bytes("/f", b"x")
        read_only = Filesystem(ReadOnlyDriver(backend))

        with pytest.raises(NotSupportedError) as excinfo:
            move(read_only, "/f", target, "/f")

        assert excinfo.value.operation == "move"
        assert not target.exists("/f")
        assert backend.exists("/f")

    @pytest.mark.parametrize("operation", [move_file, move_dir, move_all])
    def test_move_variants_need_writable_destination(
        self,
        source: Filesystem,
        operation: Callable[[Filesystem, str, Filesystem, str], None],
    ) -> None:
        read_only = Filesystem(ReadOnlyDriver())
        with pytest.raises(NotSupportedError):
            operation(source, "/data", read_only, "/x")
