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

"""Copy and move entries between two filesystems.

Every function takes a source filesystem and path followed by a destination
filesystem and path. Both may be the same instance. Operations abort on the
first error; nothing is rolled back and no partial result is reported.

Example::

    from tierfs.filesystem import Filesystem, InMemoryDriver, LocalDriver, copy

    disk = Filesystem(LocalDriver(_root="/srv/export"))
    memory = Filesystem(InMemoryDriver())
    copy(disk, "/reports", memory, "/reports")
"""

from __future__ import annotations

import shutil
from typing import TYPE_CHECKING

from ..errors import FilesystemError, NotExistsError, NotSupportedError
from ..logging import StructuredLogger, get_logger
from ._local import LocalDriver
from ._path import SEPARATOR, abs_in, abs_path, is_in, join
from ._types import DEFAULT_CHUNK_SIZE

if TYPE_CHECKING:
    from ._facade import Filesystem

__all__ = [
    "copy",
    "copy_all",
    "copy_dir",
    "copy_file",
    "move",
    "move_all",
    "move_dir",
    "move_file",
]

_logger: StructuredLogger = get_logger(__name__, context={"component": "interop"})


def _require_copy(src_fs: Filesystem, dst_fs: Filesystem, operation: str) -> None:
    if not src_fs.can_read():
        raise NotSupportedError(
            operation, "Source filesystem does not support reading"
        )
    if not dst_fs.can_write():
        raise NotSupportedError(
            operation, "Destination filesystem does not support writing"
        )


def _require_move(src_fs: Filesystem, dst_fs: Filesystem, operation: str) -> None:
    if not src_fs.can_write():
        raise NotSupportedError(
            operation, "Source filesystem does not support writing"
        )
    if not dst_fs.can_write():
        raise NotSupportedError(
            operation, "Destination filesystem does not support writing"
        )


def _anchored(fs: Filesystem, path: str) -> str:
    """Return ``path`` in the absolute form the driver of ``fs`` resolves it to."""
    driver = fs.driver
    if isinstance(driver, LocalDriver) and driver.root is None:
        return abs_path(path)
    return abs_in(SEPARATOR, path)


def _same_entry(src_fs: Filesystem, src: str, dst_fs: Filesystem, dst: str) -> bool:
    return src_fs is dst_fs and _anchored(src_fs, src) == _anchored(dst_fs, dst)


def _contains(fs: Filesystem, parent: str, path: str) -> bool:
    return is_in(_anchored(fs, path), _anchored(fs, parent))


# --- Copy ---


def copy(src_fs: Filesystem, src: str, dst_fs: Filesystem, dst: str) -> None:
    """Copy a file or a directory tree.

    Raises:
        NotExistsError: ``src`` is neither a file nor a directory.
    """
    _require_copy(src_fs, dst_fs, "copy")
    if src_fs.is_file(src):
        _copy_file(src_fs, src, dst_fs, dst)
        return
    if src_fs.is_dir(src):
        _copy_dir(src_fs, src, dst_fs, dst)
        return
    raise NotExistsError(src)


def copy_file(src_fs: Filesystem, src: str, dst_fs: Filesystem, dst: str) -> None:
    """Copy a single file, overwriting ``dst``."""
    _require_copy(src_fs, dst_fs, "copy_file")
    _copy_file(src_fs, src, dst_fs, dst)


def copy_dir(src_fs: Filesystem, src: str, dst_fs: Filesystem, dst: str) -> None:
    """Copy a directory tree to ``dst``, creating it if needed."""
    _require_copy(src_fs, dst_fs, "copy_dir")
    _copy_dir(src_fs, src, dst_fs, dst)


def copy_all(src_fs: Filesystem, src: str, dst_fs: Filesystem, dst: str) -> None:
    """Copy the content of directory ``src`` into existing directory ``dst``."""
    _require_copy(src_fs, dst_fs, "copy_all")
    _copy_all(src_fs, src, dst_fs, dst)


def _copy_file(src_fs: Filesystem, src: str, dst_fs: Filesystem, dst: str) -> None:
    if _same_entry(src_fs, src, dst_fs, dst):
        return
    _logger.debug(
        "Copying file.",
        event="filesystem.copy_file",
        context={"src": src, "dst": dst},
    )
    with src_fs.open(src) as reader, dst_fs.create_file(dst) as writer:
        try:
            shutil.copyfileobj(reader, writer, DEFAULT_CHUNK_SIZE)
        except FilesystemError:
            raise
        except OSError as err:
            msg = f"Failed to copy data from {src!r} to {dst!r}"
            raise FilesystemError(msg) from err


def _copy_dir(src_fs: Filesystem, src: str, dst_fs: Filesystem, dst: str) -> None:
    if src_fs is dst_fs and _contains(src_fs, src, dst):
        msg = f"Cannot copy directory {src!r} into itself ({dst!r})"
        raise FilesystemError(msg)
    dst_fs.create_directory(dst)
    _copy_all(src_fs, src, dst_fs, dst)


def _copy_all(src_fs: Filesystem, src: str, dst_fs: Filesystem, dst: str) -> None:
    for info in src_fs.read_dir(src):
        child_src = join(src, info.name)
        child_dst = join(dst, info.name)
        if info.is_dir:
            _copy_dir(src_fs, child_src, dst_fs, child_dst)
        else:
            _copy_file(src_fs, child_src, dst_fs, child_dst)


# --- Move ---


def move(src_fs: Filesystem, src: str, dst_fs: Filesystem, dst: str) -> None:
    """Move a file or a directory tree.

    Raises:
        NotExistsError: ``src`` is neither a file nor a directory.
    """
    _require_move(src_fs, dst_fs, "move")
    if src_fs.is_file(src):
        _move_file(src_fs, src, dst_fs, dst)
        return
    if src_fs.is_dir(src):
        _move_dir(src_fs, src, dst_fs, dst)
        return
    raise NotExistsError(src)


def move_file(src_fs: Filesystem, src: str, dst_fs: Filesystem, dst: str) -> None:
    """Copy a file to ``dst`` and delete the source."""
    _require_move(src_fs, dst_fs, "move_file")
    _move_file(src_fs, src, dst_fs, dst)


def move_dir(src_fs: Filesystem, src: str, dst_fs: Filesystem, dst: str) -> None:
    """Copy a directory tree to ``dst`` and delete the source tree."""
    _require_move(src_fs, dst_fs, "move_dir")
    _move_dir(src_fs, src, dst_fs, dst)


def move_all(src_fs: Filesystem, src: str, dst_fs: Filesystem, dst: str) -> None:
    """Move the content of directory ``src`` into ``dst``; ``src`` stays, empty."""
    _require_move(src_fs, dst_fs, "move_all")
    _copy_all(src_fs, src, dst_fs, dst)
    src_fs.clean_dir(src)


def _move_file(src_fs: Filesystem, src: str, dst_fs: Filesystem, dst: str) -> None:
    if _same_entry(src_fs, src, dst_fs, dst):
        return
    _copy_file(src_fs, src, dst_fs, dst)
    src_fs.delete_file(src)


def _move_dir(src_fs: Filesystem, src: str, dst_fs: Filesystem, dst: str) -> None:
    _copy_dir(src_fs, src, dst_fs, dst)
    src_fs.delete_directory(src, recursive=True)
