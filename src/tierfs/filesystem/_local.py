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

"""Host disk driver.

This module provides a full-tier driver backed by the host filesystem. With
a root directory set, every path is interpreted inside that root and checked
so it cannot escape via ``..`` segments or symlinks.

Example usage::

    from tierfs.filesystem import Filesystem, LocalDriver

    fs = Filesystem(LocalDriver(_root="/srv/data"))
    fs.write_string("/notes/today.txt", "hello")  # -> /srv/data/notes/today.txt
"""

from __future__ import annotations

import errno
import os
import shutil
import tempfile
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Literal

from ..config import FilesystemConfig
from ..errors import (
    AccessDeniedError,
    DirectoryNotExistsError,
    FileNotExistsError,
    FilesystemError,
    NotEmptyError,
    NotExistsError,
    NotSupportedError,
)
from ._path import SEPARATOR, abs_root
from ._types import FileInfo, OpenFlags

__all__ = ["LocalDriver"]

_Expect = Literal["file", "dir", "any"]


@dataclass(slots=True)
class LocalDriver:
    """Driver for the host filesystem, optionally sandboxed under a root.

    Unrooted drivers pass paths straight to the operating system. Rooted
    drivers treat every path as absolute within ``_root`` (``"../x"`` and
    ``"/x"`` both land on ``<root>/x``) and raise :class:`AccessDeniedError`
    when a symlink would lead outside. Temporary resources are only available
    on unrooted drivers.

    Directory listings are returned in the order the OS reports them.
    """

    _root: str | None = None
    _temp_dir: str | None = None

    @classmethod
    def from_config(
        cls, config: FilesystemConfig, *, root: str | None = None
    ) -> LocalDriver:
        """Create a driver using the temp directory from ``config``."""
        return cls(_root=root, _temp_dir=config.temp_dir)

    @property
    def root(self) -> str | None:
        """Sandbox root, or None for unrestricted host access."""
        return self._root

    def _resolve_path(self, path: str) -> Path:
        """Map a driver path to a host path.

        Raises:
            AccessDeniedError: If the resolved path escapes the root.
        """
        if self._root is None:
            return Path(path) if path else Path(".")

        root_path = Path(self._root).resolve()
        relative = abs_root(SEPARATOR, path).lstrip(SEPARATOR)
        if not relative:
            return root_path

        candidate = root_path / relative
        try:
            _ = candidate.resolve().relative_to(root_path)
        except ValueError:
            msg = f"Path escapes root directory: {path}"
            raise AccessDeniedError(path, msg) from None
        return candidate

    def _is_root(self, path: str) -> bool:
        return self._root is not None and not abs_root(SEPARATOR, path).strip(
            SEPARATOR
        )

    # --- Navigation ---

    def exists(self, path: str) -> bool:
        """Check if a path exists."""
        try:
            return self._resolve_path(path).exists()
        except AccessDeniedError:
            return False

    def is_file(self, path: str) -> bool:
        """Check if a path is a regular file."""
        try:
            return self._resolve_path(path).is_file()
        except AccessDeniedError:
            return False

    def is_dir(self, path: str) -> bool:
        """Check if a path is a directory."""
        try:
            return self._resolve_path(path).is_dir()
        except AccessDeniedError:
            return False

    def stat(self, path: str) -> FileInfo:
        """Get metadata for a path."""
        resolved = self._resolve_path(path)
        try:
            st = resolved.stat()
        except OSError as err:
            raise _translate(err, path, "any", "Could not stat path") from err
        is_dir = resolved.is_dir()
        if self._is_root(path):
            name = SEPARATOR
        else:
            name = Path(os.path.abspath(resolved)).name or SEPARATOR
        return FileInfo(name=name, size=0 if is_dir else st.st_size, is_dir=is_dir)

    def read_dir(self, path: str) -> Sequence[FileInfo]:
        """List directory contents in OS order."""
        resolved = self._resolve_path(path)
        entries: list[FileInfo] = []
        try:
            with os.scandir(resolved) as it:
                for entry in it:
                    is_dir = entry.is_dir()
                    size = 0 if is_dir else _entry_size(entry)
                    entries.append(FileInfo(name=entry.name, size=size, is_dir=is_dir))
        except OSError as err:
            raise _translate(
                err, path, "dir", "Failed to list directory content"
            ) from err
        return entries

    # --- Read ---

    def open_file(self, path: str, flags: OpenFlags) -> BinaryIO:
        """Open a native binary file handle."""
        resolved = self._resolve_path(path)
        try:
            fd = os.open(resolved, flags.to_os_flags(), 0o666)
        except OSError as err:
            raise _translate(err, path, "file", "Could not open file") from err
        try:
            return os.fdopen(fd, _python_mode(flags))
        except BaseException:
            os.close(fd)
            raise

    # --- Read-Write ---

    def create_directory(self, path: str) -> None:
        """Create a directory and any missing parents."""
        try:
            self._resolve_path(path).mkdir(parents=True, exist_ok=True)
        except OSError as err:
            raise _translate(err, path, "any", "Could not create directory") from err

    def delete_file(self, path: str) -> None:
        """Delete a file."""
        resolved = self._resolve_path(path)
        if resolved.is_dir() and not resolved.is_symlink():
            msg = f"Is a directory: {path}"
            raise FilesystemError(msg)
        try:
            resolved.unlink()
        except OSError as err:
            raise _translate(err, path, "file", "Could not delete file") from err

    def delete_directory(self, path: str, recursive: bool) -> None:
        """Delete a directory, recursively if requested."""
        if self._is_root(path):
            msg = "Cannot delete root directory"
            raise AccessDeniedError(path, msg)

        resolved = self._resolve_path(path)
        if not resolved.is_dir():
            raise DirectoryNotExistsError(path)
        try:
            if recursive:
                shutil.rmtree(resolved)
            else:
                resolved.rmdir()
        except OSError as err:
            if err.errno in {errno.ENOTEMPTY, errno.EEXIST}:
                raise NotEmptyError(path) from err
            raise _translate(err, path, "dir", "Could not delete directory") from err

    def move_file(self, src: str, dst: str) -> None:
        """Move a file, replacing ``dst`` if it exists."""
        source = self._resolve_path(src)
        target = self._resolve_path(dst)
        try:
            os.replace(source, target)
        except OSError as err:
            raise _translate(err, src, "file", "Could not move file") from err

    def move_dir(self, src: str, dst: str) -> None:
        """Move a directory."""
        source = self._resolve_path(src)
        target = self._resolve_path(dst)
        try:
            source.rename(target)
        except OSError as err:
            raise _translate(err, src, "dir", "Could not move directory") from err

    # --- Temp ---

    def get_temp_file(self, pattern: str) -> str:
        """Create an empty temporary file on the host."""
        if self._root is not None:
            raise NotSupportedError(
                "get_temp_file",
                "Cannot create temporary files on rooted local filesystems",
            )
        if "*" in pattern:
            prefix, _, suffix = pattern.rpartition("*")
        else:
            prefix, suffix = pattern, ""
        try:
            fd, name = tempfile.mkstemp(
                suffix=suffix, prefix=prefix, dir=self._temp_dir
            )
        except OSError as err:
            msg = "Failed to create temporary file"
            raise FilesystemError(msg) from err
        os.close(fd)
        return name

    def get_temp_dir(self, prefix: str) -> str:
        """Create an empty temporary directory on the host."""
        if self._root is not None:
            raise NotSupportedError(
                "get_temp_dir",
                "Cannot create temporary directories on rooted local filesystems",
            )
        try:
            return tempfile.mkdtemp(prefix=prefix, dir=self._temp_dir)
        except OSError as err:
            msg = "Failed to create temporary directory"
            raise FilesystemError(msg) from err


def _entry_size(entry: os.DirEntry[str]) -> int:
    try:
        return entry.stat().st_size
    except FileNotFoundError:
        # Dangling symlink: report the link itself.
        return entry.stat(follow_symlinks=False).st_size


def _python_mode(flags: OpenFlags) -> str:
    access = flags.access()
    append = flags.has(OpenFlags.APPEND)
    if access == OpenFlags.READ_WRITE:
        return "a+b" if append else "r+b"
    if access == OpenFlags.WRITE_ONLY:
        return "ab" if append else "wb"
    return "rb"


def _translate(err: OSError, path: str, expect: _Expect, message: str) -> FilesystemError:
    """Map an ``OSError`` onto the tierfs error taxonomy."""
    if isinstance(err, FileNotFoundError | NotADirectoryError) and expect == "dir":
        return DirectoryNotExistsError(path)
    if isinstance(err, FileNotFoundError):
        if expect == "file":
            return FileNotExistsError(path)
        return NotExistsError(path)
    if isinstance(err, PermissionError):
        return AccessDeniedError(path)
    return FilesystemError(f"{message}: {path}")
