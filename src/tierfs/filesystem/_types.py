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

"""Core filesystem value types.

- ``FileInfo``: immutable metadata for one directory entry
- ``OpenFlags``: bitset describing how a file handle is obtained
- ``File``: protocol for an opened byte-stream handle

Constants:

- ``DEFAULT_LINE_SEPARATOR``: Separator used by ``write_lines`` ("\\n")
- ``DEFAULT_CHUNK_SIZE``: Buffer size for streamed copies (64KB)
"""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass
from typing import Final, Protocol, Self, runtime_checkable

from ._path import SEPARATOR

DEFAULT_LINE_SEPARATOR: Final[str] = "\n"
DEFAULT_CHUNK_SIZE: Final[int] = 65_536


@dataclass(slots=True, frozen=True)
class FileInfo:
    """Metadata for a single directory entry.

    Produced by a driver's ``stat`` and ``read_dir`` operations. Instances
    hold no reference back to the filesystem that created them.

    Attributes:
        name: Entry name without any path component (e.g. "main.py").
        size: Size in bytes. Meaningless for directories.
        is_dir: True if the entry is a directory.

    Example::

        for info in fs.read_dir("src"):
            if not info.is_dir and info.name.endswith(".py"):
                print(info.name, info.size)
    """

    name: str
    size: int
    is_dir: bool

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("FileInfo.name must not be empty.")
        if SEPARATOR in self.name and self.name != SEPARATOR:
            msg = f"FileInfo.name must not contain a path separator: {self.name!r}"
            raise ValueError(msg)

    @property
    def is_file(self) -> bool:
        """True if the entry is not a directory."""
        return not self.is_dir


_ACCESS_MASK: Final[int] = 0b11


class OpenFlags(enum.IntFlag):
    """How a file handle is obtained.

    Exactly one access mode (``READ_ONLY``, ``WRITE_ONLY``, ``READ_WRITE``)
    is combined with any number of modifiers. Modifiers can be chained::

        flags = OpenFlags.READ_WRITE.create().truncate()
        assert flags.is_read() and flags.is_write()
    """

    READ_ONLY = 0
    WRITE_ONLY = 1
    READ_WRITE = 2
    APPEND = 4
    CREATE = 8
    EXCLUSIVE = 16
    SYNC = 32
    TRUNCATE = 64

    def access(self) -> OpenFlags:
        """Return only the access-mode bits."""
        return OpenFlags(int(self) & _ACCESS_MASK)

    def is_read(self) -> bool:
        """True if the access mode permits reading."""
        return self.access() in {OpenFlags.READ_ONLY, OpenFlags.READ_WRITE}

    def is_write(self) -> bool:
        """True if the access mode permits writing."""
        return self.access() in {OpenFlags.WRITE_ONLY, OpenFlags.READ_WRITE}

    def append(self) -> OpenFlags:
        """Position writes at the end of the file."""
        return self | OpenFlags.APPEND

    def create(self) -> OpenFlags:
        """Create the file if it does not exist."""
        return self | OpenFlags.CREATE

    def exclusive(self) -> OpenFlags:
        """Fail if the file already exists (with ``create``)."""
        return self | OpenFlags.EXCLUSIVE

    def sync(self) -> OpenFlags:
        """Request synchronous writes."""
        return self | OpenFlags.SYNC

    def truncate(self) -> OpenFlags:
        """Truncate an existing file on open."""
        return self | OpenFlags.TRUNCATE

    def has(self, modifier: OpenFlags) -> bool:
        """True if every bit of ``modifier`` is set."""
        return int(self) & int(modifier) == int(modifier)

    def to_os_flags(self) -> int:
        """Translate to flags accepted by :func:`os.open`."""
        access = self.access()
        if access == OpenFlags.READ_WRITE:
            result = os.O_RDWR
        elif access == OpenFlags.WRITE_ONLY:
            result = os.O_WRONLY
        else:
            result = os.O_RDONLY
        for modifier, os_flag in (
            (OpenFlags.APPEND, os.O_APPEND),
            (OpenFlags.CREATE, os.O_CREAT),
            (OpenFlags.EXCLUSIVE, os.O_EXCL),
            (OpenFlags.SYNC, getattr(os, "O_SYNC", 0)),
            (OpenFlags.TRUNCATE, os.O_TRUNC),
        ):
            if self.has(modifier):
                result |= os_flag
        return result | getattr(os, "O_BINARY", 0)


@runtime_checkable
class File(Protocol):
    """An opened file handle exposing byte-stream read, write and close.

    Handles are scoped resources: callers close them on every exit path,
    usually with a ``with`` block. Native Python binary file objects satisfy
    this protocol.
    """

    def read(self, size: int = -1, /) -> bytes:
        """Read up to ``size`` bytes (-1 reads to EOF)."""
        ...

    def write(self, data: bytes, /) -> int:
        """Write ``data`` and return the number of bytes written."""
        ...

    def close(self) -> None:
        """Release the handle. Closing twice is a no-op."""
        ...

    def __enter__(self) -> Self:
        """Enter context manager."""
        ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Exit context manager, closing the handle."""
        ...


__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "DEFAULT_LINE_SEPARATOR",
    "File",
    "FileInfo",
    "OpenFlags",
]
