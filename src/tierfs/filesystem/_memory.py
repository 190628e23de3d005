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

"""In-memory driver.

A full-tier virtual backend keeping file content as bytes in a dictionary.
Directory listings preserve insertion order, which makes traversal order
under a stable sort fully predictable in tests.
"""

from __future__ import annotations

import io
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Self
from uuid import uuid4

from ..errors import (
    AccessDeniedError,
    DirectoryNotExistsError,
    FileNotExistsError,
    FilesystemError,
    NotEmptyError,
    NotExistsError,
)
from ._path import SEPARATOR, abs_in, base, dirname, is_in, join
from ._types import FileInfo, OpenFlags

__all__ = ["InMemoryDriver"]

_TEMP_ROOT = "/tmp"  # nosec: B108


# ---------------------------------------------------------------------------
# Internal Types
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class _Node:
    """A file (``content``) or directory (``children``, in insertion order)."""

    is_dir: bool
    content: bytes = b""
    children: dict[str, None] = field(default_factory=dict[str, None])


def _key(path: str) -> str:
    return abs_in(SEPARATOR, path)


# ---------------------------------------------------------------------------
# InMemoryDriver Implementation
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class InMemoryDriver:
    """Dictionary-backed driver implementing every capability tier.

    Paths are absolute within the virtual disk; relative paths are resolved
    against "/". Handles buffer writes and publish them on close.
    """

    _nodes: dict[str, _Node] = field(default_factory=dict[str, _Node])

    def __post_init__(self) -> None:
        _ = self._nodes.setdefault(SEPARATOR, _Node(is_dir=True))

    def _dir_node(self, key: str) -> _Node | None:
        node = self._nodes.get(key)
        return node if node is not None and node.is_dir else None

    def _attach(self, key: str, node: _Node) -> None:
        self._nodes[key] = node
        parent = self._nodes[dirname(key)]
        parent.children[base(key)] = None

    def _detach(self, key: str) -> None:
        for candidate in [k for k in self._nodes if k != key and is_in(k, key)]:
            del self._nodes[candidate]
        del self._nodes[key]
        _ = self._nodes[dirname(key)].children.pop(base(key), None)

    def _require_parent(self, key: str) -> None:
        parent = dirname(key)
        if self._dir_node(parent) is None:
            raise DirectoryNotExistsError(parent)

    # --- Navigation ---

    def exists(self, path: str) -> bool:
        """Check if a path exists."""
        return _key(path) in self._nodes

    def is_file(self, path: str) -> bool:
        """Check if a path is a file."""
        node = self._nodes.get(_key(path))
        return node is not None and not node.is_dir

    def is_dir(self, path: str) -> bool:
        """Check if a path is a directory."""
        return self._dir_node(_key(path)) is not None

    def stat(self, path: str) -> FileInfo:
        """Get metadata for a path."""
        key = _key(path)
        node = self._nodes.get(key)
        if node is None:
            raise NotExistsError(path)
        size = 0 if node.is_dir else len(node.content)
        return FileInfo(name=base(key), size=size, is_dir=node.is_dir)

    def read_dir(self, path: str) -> Sequence[FileInfo]:
        """List directory contents in insertion order."""
        key = _key(path)
        node = self._dir_node(key)
        if node is None:
            raise DirectoryNotExistsError(path)
        entries: list[FileInfo] = []
        for name in node.children:
            child = self._nodes[join(key, name)]
            size = 0 if child.is_dir else len(child.content)
            entries.append(FileInfo(name=name, size=size, is_dir=child.is_dir))
        return entries

    # --- Read ---

    def open_file(self, path: str, flags: OpenFlags) -> _MemoryFile:
        """Open a buffered handle on a virtual file."""
        key = _key(path)
        node = self._nodes.get(key)

        if node is not None and node.is_dir:
            msg = f"Is a directory: {path}"
            raise FilesystemError(msg)

        if node is None:
            if not flags.has(OpenFlags.CREATE):
                raise FileNotExistsError(path)
            self._require_parent(key)
            node = _Node(is_dir=False)
            self._attach(key, node)
        elif flags.has(OpenFlags.CREATE | OpenFlags.EXCLUSIVE):
            msg = f"File already exists: {path}"
            raise FilesystemError(msg)

        if flags.is_write() and flags.has(OpenFlags.TRUNCATE):
            node.content = b""

        return _MemoryFile(driver=self, key=key, flags=flags, initial=node.content)

    def commit(self, key: str, content: bytes) -> None:
        """Publish content written through a handle.

        Called by the handle on close. Content for a file deleted while the
        handle was open is dropped.
        """
        node = self._nodes.get(key)
        if node is not None and not node.is_dir:
            node.content = content

    # --- Read-Write ---

    def create_directory(self, path: str) -> None:
        """Create a directory and any missing parents."""
        key = _key(path)
        current = SEPARATOR
        for segment in key.split(SEPARATOR):
            if not segment:
                continue
            current = join(current, segment)
            node = self._nodes.get(current)
            if node is None:
                self._attach(current, _Node(is_dir=True))
            elif not node.is_dir:
                msg = f"A file exists at path: {current}"
                raise FilesystemError(msg)

    def delete_file(self, path: str) -> None:
        """Delete a file."""
        key = _key(path)
        node = self._nodes.get(key)
        if node is None:
            raise FileNotExistsError(path)
        if node.is_dir:
            msg = f"Is a directory: {path}"
            raise FilesystemError(msg)
        self._detach(key)

    def delete_directory(self, path: str, recursive: bool) -> None:
        """Delete a directory, recursively if requested."""
        key = _key(path)
        if key == SEPARATOR:
            msg = "Cannot delete root directory"
            raise AccessDeniedError(path, msg)
        node = self._dir_node(key)
        if node is None:
            raise DirectoryNotExistsError(path)
        if node.children and not recursive:
            raise NotEmptyError(path)
        self._detach(key)

    def move_file(self, src: str, dst: str) -> None:
        """Move a file, replacing ``dst`` if it is a file."""
        src_key, dst_key = _key(src), _key(dst)
        node = self._nodes.get(src_key)
        if node is None or node.is_dir:
            raise FileNotExistsError(src)
        if src_key == dst_key:
            return
        self._require_parent(dst_key)
        existing = self._nodes.get(dst_key)
        if existing is not None:
            if existing.is_dir:
                msg = f"Is a directory: {dst}"
                raise FilesystemError(msg)
            self._detach(dst_key)
        self._detach(src_key)
        self._attach(dst_key, node)

    def move_dir(self, src: str, dst: str) -> None:
        """Move a directory and everything below it."""
        src_key, dst_key = _key(src), _key(dst)
        if src_key == SEPARATOR:
            msg = "Cannot move root directory"
            raise AccessDeniedError(src, msg)
        if self._dir_node(src_key) is None:
            raise DirectoryNotExistsError(src)
        if is_in(dst_key, src_key):
            msg = f"Cannot move directory {src!r} into itself"
            raise FilesystemError(msg)
        if dst_key in self._nodes:
            msg = f"Destination already exists: {dst}"
            raise FilesystemError(msg)
        self._require_parent(dst_key)

        moved = {
            dst_key + key[len(src_key) :]: node
            for key, node in self._nodes.items()
            if is_in(key, src_key)
        }
        self._detach(src_key)
        self._nodes.update(moved)
        self._nodes[dirname(dst_key)].children[base(dst_key)] = None

    # --- Temp ---

    def get_temp_file(self, pattern: str) -> str:
        """Create an empty file below ``/tmp``."""
        self.create_directory(_TEMP_ROOT)
        token = uuid4().hex[:12]
        if "*" in pattern:
            prefix, _, suffix = pattern.rpartition("*")
            name = f"{prefix}{token}{suffix}"
        else:
            name = f"{pattern}{token}"
        key = join(_TEMP_ROOT, name)
        self._attach(key, _Node(is_dir=False))
        return key

    def get_temp_dir(self, prefix: str) -> str:
        """Create an empty directory below ``/tmp``."""
        self.create_directory(_TEMP_ROOT)
        key = join(_TEMP_ROOT, f"{prefix}{uuid4().hex[:12]}")
        self._attach(key, _Node(is_dir=True))
        return key


@dataclass(slots=True)
class _MemoryFile:
    """Handle over a copy of a file's bytes, committed back on close."""

    driver: InMemoryDriver
    key: str
    flags: OpenFlags
    initial: bytes
    _buffer: io.BytesIO = field(init=False)
    _closed: bool = field(default=False, init=False)

    def __post_init__(self) -> None:
        self._buffer = io.BytesIO(self.initial)
        if self.flags.has(OpenFlags.APPEND):
            _ = self._buffer.seek(0, io.SEEK_END)

    @property
    def closed(self) -> bool:
        """True if the handle has been closed."""
        return self._closed

    def _check_closed(self) -> None:
        if self._closed:
            msg = "I/O operation on closed file"
            raise ValueError(msg)

    def read(self, size: int = -1, /) -> bytes:
        """Read up to ``size`` bytes."""
        self._check_closed()
        if not self.flags.is_read():
            msg = "File not open for reading"
            raise io.UnsupportedOperation(msg)
        return self._buffer.read(size)

    def write(self, data: bytes, /) -> int:
        """Write bytes at the current position (or the end when appending)."""
        self._check_closed()
        if not self.flags.is_write():
            msg = "File not open for writing"
            raise io.UnsupportedOperation(msg)
        if self.flags.has(OpenFlags.APPEND):
            _ = self._buffer.seek(0, io.SEEK_END)
        return self._buffer.write(data)

    def __enter__(self) -> Self:
        """Enter context manager."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Exit context manager, committing and closing."""
        self.close()

    def close(self) -> None:
        """Commit written content to the driver and release the buffer."""
        if self._closed:
            return
        self._closed = True
        if self.flags.is_write():
            self.driver.commit(self.key, self._buffer.getvalue())
        self._buffer.close()
