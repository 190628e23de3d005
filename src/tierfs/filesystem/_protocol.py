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

"""Driver capability protocols.

A backend driver implements some prefix of four nested capability tiers:

=============  =====================  ==========================================
Tier           Protocol               Adds
=============  =====================  ==========================================
navigation     ``NavigationDriver``   exists, is_file, is_dir, stat, read_dir
read           ``ReadDriver``         open_file
read-write     ``ReadWriteDriver``    create_directory, delete_*, move_*
temp           ``TempDriver``         get_temp_file, get_temp_dir
=============  =====================  ==========================================

Each protocol is ``runtime_checkable`` so :class:`~tierfs.filesystem.Filesystem`
can probe a driver with ``isinstance`` once at construction and gate its
methods on the result. Drivers never need to inherit from these classes.

Core implementations:

- ``tierfs.filesystem.LocalDriver``: host disk, optionally rooted
- ``tierfs.filesystem.InMemoryDriver``: dictionary-backed virtual disk
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from ._types import File, FileInfo, OpenFlags


@runtime_checkable
class NavigationDriver(Protocol):
    """Lowest tier: inspect and list paths without reading file content."""

    def exists(self, path: str) -> bool:
        """Return True if a file or directory exists at ``path``.

        Missing paths return False rather than raising.
        """
        ...

    def is_file(self, path: str) -> bool:
        """Return True if ``path`` is an existing file."""
        ...

    def is_dir(self, path: str) -> bool:
        """Return True if ``path`` is an existing directory."""
        ...

    def stat(self, path: str) -> FileInfo:
        """Return metadata for ``path``.

        Raises:
            NotExistsError: Nothing exists at ``path``.
        """
        ...

    def read_dir(self, path: str) -> Sequence[FileInfo]:
        """List the entries of a directory in backend order.

        Raises:
            DirectoryNotExistsError: ``path`` is missing or not a directory.
        """
        ...


@runtime_checkable
class ReadDriver(NavigationDriver, Protocol):
    """Navigation plus opening file handles."""

    def open_file(self, path: str, flags: OpenFlags) -> File:
        """Open ``path`` according to ``flags``.

        Raises:
            FileNotExistsError: The file is missing and ``CREATE`` is not set.
        """
        ...


@runtime_checkable
class ReadWriteDriver(ReadDriver, Protocol):
    """Read access plus creating, deleting and moving entries."""

    def create_directory(self, path: str) -> None:
        """Create ``path`` and any missing parents. Existing is fine."""
        ...

    def delete_file(self, path: str) -> None:
        """Delete a file.

        Raises:
            FileNotExistsError: ``path`` does not exist.
        """
        ...

    def delete_directory(self, path: str, recursive: bool) -> None:
        """Delete a directory, with its content when ``recursive``.

        Raises:
            DirectoryNotExistsError: ``path`` does not exist.
            NotEmptyError: The directory has entries and ``recursive`` is False.
        """
        ...

    def move_file(self, src: str, dst: str) -> None:
        """Move a file to ``dst``, replacing an existing file."""
        ...

    def move_dir(self, src: str, dst: str) -> None:
        """Move a directory to ``dst``."""
        ...


@runtime_checkable
class TempDriver(ReadWriteDriver, Protocol):
    """Read-write access plus creation of temporary resources."""

    def get_temp_file(self, pattern: str) -> str:
        """Create an empty temporary file and return its path.

        ``pattern`` may contain one ``*`` replaced by a random string;
        otherwise the random string is appended.
        """
        ...

    def get_temp_dir(self, prefix: str) -> str:
        """Create an empty temporary directory and return its path."""
        ...


__all__ = [
    "NavigationDriver",
    "ReadDriver",
    "ReadWriteDriver",
    "TempDriver",
]
