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

"""Tests for the host disk driver."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from tests.helpers import DriverValidationSuite
from tierfs.config import FilesystemConfig
from tierfs.errors import AccessDeniedError, NotSupportedError
from tierfs.filesystem import (
    Filesystem,
    LocalDriver,
    OpenFlags,
    TempDriver,
    WalkOptions,
)


class TestRootedLocalDriverSuite(DriverValidationSuite):
    """Run the shared validation suite against a rooted LocalDriver."""

    @pytest.fixture
    def fs(self, tmp_path: Path) -> Filesystem:
        return Filesystem(LocalDriver(_root=str(tmp_path)))


class TestRootedPaths:
    def test_paths_land_inside_root(self, tmp_path: Path, local_fs: Filesystem) -> None:
        local_fs.write_string("/notes/today.txt", "hello")
        assert (tmp_path / "notes" / "today.txt").read_text() == "hello"

    def test_parent_segments_cannot_escape(
        self, tmp_path: Path, local_fs: Filesystem
    ) -> None:
        local_fs.write_string("../../escape.txt", "trapped")

        assert (tmp_path / "escape.txt").read_text() == "trapped"
        assert not (tmp_path.parent / "escape.txt").exists()

    def test_symlink_escape_is_denied(self, tmp_path: Path) -> None:
        root = tmp_path / "root"
        outside = tmp_path / "outside"
        root.mkdir()
        outside.mkdir()
        (outside / "secret.txt").write_text("secret")
        (root / "link").symlink_to(outside, target_is_directory=True)
        fs = Filesystem(LocalDriver(_root=str(root)))

        with pytest.raises(AccessDeniedError):
            _ = fs.read_bytes("/link/secret.txt")
        assert fs.exists("/link/secret.txt") is False

    def test_root_property(self, tmp_path: Path) -> None:
        assert LocalDriver(_root=str(tmp_path)).root == str(tmp_path)
        assert LocalDriver().root is None

    def test_stat_root_reports_separator(self, tmp_path: Path) -> None:
        fs = Filesystem(LocalDriver(_root=str(tmp_path)))
        info = fs.stat("/")
        assert info.name == "/"
        assert info.is_dir

    def test_stat_unrooted_directory_uses_host_name(self, tmp_path: Path) -> None:
        info = Filesystem(LocalDriver()).stat(str(tmp_path))
        assert info.name == tmp_path.name

    def test_root_visit_hides_host_directory(self, tmp_path: Path) -> None:
        fs = Filesystem(LocalDriver(_root=str(tmp_path)))
        fs.write_bytes("/a.txt", b"a")
        seen: list[tuple[str, str, bool]] = []

        fs.walk(
            "/",
            visit=lambda directory, info, is_root: seen.append(
                (directory, info.name, is_root)
            ),
            options=WalkOptions(visit_root_dir=True),
        )

        assert seen == [("/", "/", True), ("/", "a.txt", False)]


class TestTempSupport:
    def test_rooted_driver_refuses_temp_files(self, local_fs: Filesystem) -> None:
        # Gating passes; the rooted driver refuses.
        assert local_fs.can_temp()
        with pytest.raises(NotSupportedError) as excinfo:
            _ = local_fs.get_temp_file("x-*")
        assert excinfo.value.operation == "get_temp_file"

    def test_rooted_driver_refuses_temp_dirs(self, local_fs: Filesystem) -> None:
        with pytest.raises(NotSupportedError) as excinfo:
            _ = local_fs.get_temp_dir("x-")
        assert excinfo.value.operation == "get_temp_dir"

    def test_unrooted_temp_file_uses_pattern(self, tmp_path: Path) -> None:
        driver = LocalDriver(_temp_dir=str(tmp_path))
        assert isinstance(driver, TempDriver)
        fs = Filesystem(driver)

        path = fs.get_temp_file("report-*.csv")

        name = os.path.basename(path)
        assert os.path.dirname(path) == str(tmp_path)
        assert name.startswith("report-") and name.endswith(".csv")
        assert fs.read_bytes(path) == b""

    def test_unrooted_temp_dir(self, tmp_path: Path) -> None:
        fs = Filesystem(LocalDriver(_temp_dir=str(tmp_path)))

        path = fs.get_temp_dir("work-")

        assert Path(path).is_dir()
        assert Path(path).parent == tmp_path
        assert Path(path).name.startswith("work-")

    def test_from_config_applies_temp_dir(self, tmp_path: Path) -> None:
        config = FilesystemConfig(temp_dir=str(tmp_path))
        fs = Filesystem.from_config(LocalDriver.from_config(config), config)

        with fs.temp_file() as path:
            assert Path(path).parent == tmp_path
        assert not Path(path).exists()


class TestOpenFlags:
    def test_read_write_keeps_existing_content(self, local_fs: Filesystem) -> None:
        local_fs.write_bytes("/f", b"abcdef")
        with local_fs.open_file("/f", OpenFlags.READ_WRITE) as handle:
            _ = handle.write(b"XY")
        assert local_fs.read_bytes("/f") == b"XYcdef"

    def test_sync_flag_is_accepted(self, local_fs: Filesystem) -> None:
        flags = OpenFlags.WRITE_ONLY.create().truncate().sync()
        with local_fs.open_file("/f", flags) as handle:
            _ = handle.write(b"synced")
        assert local_fs.read_bytes("/f") == b"synced"
