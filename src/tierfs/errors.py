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

"""Base exception hierarchy for :mod:`tierfs`."""

from __future__ import annotations


class FilesystemError(Exception):
    """Base class for all tierfs exceptions.

    Also used directly as the generic filesystem error wrapping a lower-level
    cause (for example an ``OSError`` raised while copying data). The cause is
    attached with ``raise FilesystemError(...) from err`` so it stays
    available on ``__cause__``.

    Example:
        Catch any tierfs-specific error::

            try:
                fs.copy("a.txt", "b.txt")
            except FilesystemError as e:
                logger.error("Copy failed: %s", e)

    Note:
        Subclasses also inherit from the matching built-in exception type
        (``FileNotFoundError``, ``PermissionError``, ...) so callers written
        against the standard library keep working.
    """


class NotSupportedError(FilesystemError, NotImplementedError):
    """Raised when an operation needs a capability the backend lacks.

    The façade raises this before the driver is touched, so the failure is
    the same for every backend.

    Attributes:
        operation: Name of the attempted operation (e.g. ``"write_bytes"``).
    """

    def __init__(self, operation: str, message: str | None = None) -> None:
        self.operation = operation
        super().__init__(
            message or f"Operation {operation} is not supported by the filesystem"
        )


class NotExistsError(FilesystemError, FileNotFoundError):
    """Raised when nothing exists at a path.

    Attributes:
        path: The path that could not be resolved.
    """

    def __init__(self, path: str, message: str | None = None) -> None:
        self.path = path
        super().__init__(message or f"The path {path!r} does not exist")


class FileNotExistsError(NotExistsError):
    """Raised when an operation expected a file at a missing path."""

    def __init__(self, path: str) -> None:
        super().__init__(path, f"The file {path!r} does not exist")


class DirectoryNotExistsError(NotExistsError):
    """Raised when an operation expected a directory at a missing path."""

    def __init__(self, path: str) -> None:
        super().__init__(path, f"The directory {path!r} does not exist")


class NotEmptyError(FilesystemError):
    """Raised when deleting a populated directory without ``recursive``.

    The directory and its contents are left untouched.
    """

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"The directory {path!r} is not empty")


class AccessDeniedError(FilesystemError, PermissionError):
    """Raised when the backend refuses access to a path.

    Rooted drivers also raise this for paths that would escape the root.
    """

    def __init__(self, path: str, message: str | None = None) -> None:
        self.path = path
        super().__init__(message or f"Access to {path!r} denied")


class MalformedPathError(FilesystemError, ValueError):
    """Raised by the path utilities for paths violating their preconditions."""


__all__ = [
    "AccessDeniedError",
    "DirectoryNotExistsError",
    "FileNotExistsError",
    "FilesystemError",
    "MalformedPathError",
    "NotEmptyError",
    "NotExistsError",
    "NotSupportedError",
]
