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

"""Capability-gated filesystem façade.

:class:`Filesystem` wraps a single backend driver and exposes one uniform
API over it. The driver's capability tier is probed once at construction;
every operation checks the tier it needs and raises
:class:`~tierfs.errors.NotSupportedError` before touching the driver when
the tier is missing::

    fs = Filesystem(InMemoryDriver())
    fs.write_lines("/notes.txt", ["a", "b"])
    assert fs.read_lines("/notes.txt") == ["a", "b"]

    read_only = Filesystem(SomeReadOnlyDriver())
    read_only.write_bytes("/x", b"")  # raises NotSupportedError
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from typing import cast

from ..config import FilesystemConfig
from ..errors import FilesystemError, NotExistsError, NotSupportedError
from ..logging import StructuredLogger, get_logger
from . import _interop
from ._path import join
from ._protocol import NavigationDriver, ReadDriver, ReadWriteDriver, TempDriver
from ._types import DEFAULT_LINE_SEPARATOR, File, FileInfo, OpenFlags
from ._walk import EnterCallback, LeaveCallback, VisitCallback, WalkOptions, walk

__all__ = ["Filesystem"]

_CREATE_FLAGS = OpenFlags.READ_WRITE | OpenFlags.CREATE | OpenFlags.TRUNCATE


class Filesystem:
    """Uniform API over a driver of any capability tier.

    Args:
        driver: Backend implementing at least :class:`NavigationDriver`.
        line_separator: Separator joined between lines by :meth:`write_lines`.
        logger: Optional logger (plain or structured) receiving this
            instance's records.

    Raises:
        TypeError: ``driver`` satisfies none of the capability protocols.
        ValueError: ``line_separator`` is empty.
    """

    __slots__ = (
        "_can_navigate",
        "_can_read",
        "_can_temp",
        "_can_write",
        "_driver",
        "_line_separator",
        "_logger",
    )

    def __init__(
        self,
        driver: object,
        *,
        line_separator: str = DEFAULT_LINE_SEPARATOR,
        logger: logging.Logger | StructuredLogger | None = None,
    ) -> None:
        self._can_navigate = isinstance(driver, NavigationDriver)
        self._can_read = isinstance(driver, ReadDriver)
        self._can_write = isinstance(driver, ReadWriteDriver)
        self._can_temp = isinstance(driver, TempDriver)
        if not self._can_navigate:
            msg = (
                f"{type(driver).__name__} does not implement any filesystem "
                "driver interface"
            )
            raise TypeError(msg)
        if not line_separator:
            raise ValueError("line_separator must not be empty.")
        self._driver = driver
        self._line_separator = line_separator
        self._logger = get_logger(
            __name__,
            logger_override=logger,
            context={"driver": type(driver).__name__},
        )

    @classmethod
    def from_config(cls, driver: object, config: FilesystemConfig) -> Filesystem:
        """Create a façade applying the settings in ``config``."""
        return cls(driver, line_separator=config.line_separator)

    @property
    def driver(self) -> object:
        """The wrapped backend driver."""
        return self._driver

    @property
    def line_separator(self) -> str:
        """Separator used by :meth:`write_lines`."""
        return self._line_separator

    def __repr__(self) -> str:
        return f"Filesystem(driver={self._driver!r})"

    # -----------------------------------------------------------------------
    # Capabilities
    # -----------------------------------------------------------------------

    def can_navigate(self) -> bool:
        """True if paths can be inspected and listed."""
        return self._can_navigate

    def can_read(self) -> bool:
        """True if file handles can be opened for reading."""
        return self._can_read

    def can_write(self) -> bool:
        """True if entries can be created, changed and deleted."""
        return self._can_write

    def can_read_write(self) -> bool:
        """True if both reading and writing are supported."""
        return self._can_read and self._can_write

    def can_temp(self) -> bool:
        """True if temporary files and directories can be created."""
        return self._can_temp

    def can_all(self) -> bool:
        """True if the driver implements every capability tier."""
        return self.can_read_write() and self._can_temp

    def _navigator(self, operation: str) -> NavigationDriver:
        if not self._can_navigate:
            raise NotSupportedError(operation)
        return cast(NavigationDriver, self._driver)

    def _reader(self, operation: str) -> ReadDriver:
        if not self._can_read:
            raise NotSupportedError(operation)
        return cast(ReadDriver, self._driver)

    def _writer(self, operation: str) -> ReadWriteDriver:
        if not self._can_write:
            raise NotSupportedError(operation)
        return cast(ReadWriteDriver, self._driver)

    def _temp(self, operation: str) -> TempDriver:
        if not self._can_temp:
            raise NotSupportedError(operation)
        return cast(TempDriver, self._driver)

    # -----------------------------------------------------------------------
    # Navigation
    # -----------------------------------------------------------------------

    def exists(self, path: str) -> bool:
        """Return True if a file or directory exists at ``path``."""
        return self._navigator("exists").exists(path)

    def is_file(self, path: str) -> bool:
        """Return True if ``path`` is an existing file."""
        return self._navigator("is_file").is_file(path)

    def is_dir(self, path: str) -> bool:
        """Return True if ``path`` is an existing directory."""
        return self._navigator("is_dir").is_dir(path)

    def stat(self, path: str) -> FileInfo:
        """Return metadata for ``path``."""
        return self._navigator("stat").stat(path)

    def read_dir(self, path: str) -> Sequence[FileInfo]:
        """List a directory in backend order."""
        return self._navigator("read_dir").read_dir(path)

    # -----------------------------------------------------------------------
    # Reading
    # -----------------------------------------------------------------------

    def open(self, path: str) -> File:
        """Open an existing file read-only."""
        return self._reader("open").open_file(path, OpenFlags.READ_ONLY)

    def open_file(self, path: str, flags: OpenFlags) -> File:
        """Open a file with explicit flags.

        Reading access needs the read tier and writing access needs the
        write tier; ``READ_WRITE`` needs both.
        """
        if flags.is_read():
            _ = self._reader("open_file (read)")
        if flags.is_write():
            _ = self._writer("open_file (write)")
        return cast(ReadDriver, self._driver).open_file(path, flags)

    def read_bytes(self, path: str) -> bytes:
        """Return the complete content of a file."""
        driver = self._reader("read_bytes")
        with driver.open_file(path, OpenFlags.READ_ONLY) as handle:
            return handle.read()

    def read_string(self, path: str, encoding: str = "utf-8") -> str:
        """Return the content of a file decoded as text.

        Raises:
            FilesystemError: The content is not valid in ``encoding``.
        """
        _ = self._reader("read_string")
        data = self.read_bytes(path)
        try:
            return data.decode(encoding)
        except UnicodeDecodeError as err:
            msg = f"File {path!r} is not valid {encoding} text"
            raise FilesystemError(msg) from err

    def read_lines(self, path: str, encoding: str = "utf-8") -> list[str]:
        """Return the lines of a text file.

        ``\\r\\n`` and lone ``\\r`` are treated as ``\\n``. A trailing line
        terminator produces a trailing empty element, so
        ``"a\\nb\\n"`` reads as ``["a", "b", ""]``.
        """
        _ = self._reader("read_lines")
        text = self.read_string(path, encoding)
        return text.replace("\r\n", "\n").replace("\r", "\n").split("\n")

    # -----------------------------------------------------------------------
    # Writing
    # -----------------------------------------------------------------------

    def create_file(self, path: str) -> File:
        """Create or truncate a file and open it for reading and writing."""
        return self._writer("create_file").open_file(path, _CREATE_FLAGS)

    def write_bytes(self, path: str, data: bytes) -> None:
        """Replace the content of a file, creating it if needed."""
        driver = self._writer("write_bytes")
        with driver.open_file(path, _CREATE_FLAGS) as handle:
            _ = handle.write(data)

    def write_string(self, path: str, text: str, encoding: str = "utf-8") -> None:
        """Replace the content of a file with encoded ``text``."""
        _ = self._writer("write_string")
        self.write_bytes(path, text.encode(encoding))

    def write_lines(
        self, path: str, lines: Sequence[str], encoding: str = "utf-8"
    ) -> None:
        """Write ``lines`` joined by the configured separator.

        No separator is added after the last element; pass a trailing empty
        string to end the file with one.
        """
        _ = self._writer("write_lines")
        self.write_string(path, self._line_separator.join(lines), encoding)

    def create_directory(self, path: str) -> None:
        """Create a directory and any missing parents."""
        self._writer("create_directory").create_directory(path)

    def delete_file(self, path: str) -> None:
        """Delete a file."""
        self._writer("delete_file").delete_file(path)

    def delete_directory(self, path: str, recursive: bool = False) -> None:
        """Delete a directory.

        Raises:
            NotEmptyError: The directory has entries and ``recursive`` is
                False. Nothing is deleted in that case.
        """
        self._writer("delete_directory").delete_directory(path, recursive)

    def clean_dir(self, path: str) -> None:
        """Delete every entry inside ``path``, keeping the directory."""
        driver = self._writer("clean_dir")
        for info in driver.read_dir(path):
            child = join(path, info.name)
            if info.is_dir:
                driver.delete_directory(child, True)
            else:
                driver.delete_file(child)

    # -----------------------------------------------------------------------
    # Moving and copying
    # -----------------------------------------------------------------------

    def move_file(self, src: str, dst: str) -> None:
        """Move a file within this filesystem."""
        self._writer("move_file").move_file(src, dst)

    def move_dir(self, src: str, dst: str) -> None:
        """Move a directory within this filesystem."""
        self._writer("move_dir").move_dir(src, dst)

    def move(self, src: str, dst: str) -> None:
        """Move a file or directory within this filesystem.

        Raises:
            NotExistsError: ``src`` is neither a file nor a directory.
        """
        driver = self._writer("move")
        if driver.is_file(src):
            driver.move_file(src, dst)
            return
        if driver.is_dir(src):
            driver.move_dir(src, dst)
            return
        raise NotExistsError(src)

    def move_all(self, src: str, dst: str) -> None:
        """Move the content of directory ``src`` into directory ``dst``."""
        _ = self._writer("move_all")
        _interop.move_all(self, src, self, dst)

    def copy(self, src: str, dst: str) -> None:
        """Copy a file or a directory tree within this filesystem."""
        _ = self._writer("copy")
        _interop.copy(self, src, self, dst)

    def copy_file(self, src: str, dst: str) -> None:
        """Copy a file within this filesystem, overwriting ``dst``."""
        _ = self._writer("copy_file")
        _interop.copy_file(self, src, self, dst)

    def copy_dir(self, src: str, dst: str) -> None:
        """Copy a directory tree within this filesystem."""
        _ = self._writer("copy_dir")
        _interop.copy_dir(self, src, self, dst)

    def copy_all(self, src: str, dst: str) -> None:
        """Copy the content of directory ``src`` into directory ``dst``."""
        _ = self._writer("copy_all")
        _interop.copy_all(self, src, self, dst)

    # -----------------------------------------------------------------------
    # Temporary resources
    # -----------------------------------------------------------------------

    def get_temp_file(self, pattern: str = "") -> str:
        """Create an empty temporary file and return its path.

        The caller is responsible for deleting it.
        """
        return self._temp("get_temp_file").get_temp_file(pattern)

    def get_temp_dir(self, prefix: str = "") -> str:
        """Create an empty temporary directory and return its path.

        The caller is responsible for deleting it.
        """
        return self._temp("get_temp_dir").get_temp_dir(prefix)

    @contextmanager
    def temp_file(self, pattern: str = "") -> Iterator[str]:
        """Yield the path of a temporary file deleted when the block exits."""
        driver = self._temp("temp_file")
        path = driver.get_temp_file(pattern)
        try:
            yield path
        finally:
            self._discard(path, is_dir=False)

    @contextmanager
    def temp_dir(self, prefix: str = "") -> Iterator[str]:
        """Yield the path of a temporary directory removed when the block exits."""
        driver = self._temp("temp_dir")
        path = driver.get_temp_dir(prefix)
        try:
            yield path
        finally:
            self._discard(path, is_dir=True)

    def with_temp_file[T](self, pattern: str, fn: Callable[[str], T]) -> T:
        """Call ``fn`` with a temporary file path and return its result."""
        _ = self._temp("with_temp_file")
        with self.temp_file(pattern) as path:
            return fn(path)

    def with_temp_dir[T](self, prefix: str, fn: Callable[[str], T]) -> T:
        """Call ``fn`` with a temporary directory path and return its result."""
        _ = self._temp("with_temp_dir")
        with self.temp_dir(prefix) as path:
            return fn(path)

    def _discard(self, path: str, *, is_dir: bool) -> None:
        driver = cast(TempDriver, self._driver)
        try:
            if is_dir and driver.is_dir(path):
                driver.delete_directory(path, True)
            elif not is_dir and driver.is_file(path):
                driver.delete_file(path)
        except (FilesystemError, OSError) as err:
            self._logger.warning(
                "Failed to delete temporary resource.",
                event="filesystem.temp.cleanup_failed",
                context={"path": path, "error": repr(err)},
            )

    # -----------------------------------------------------------------------
    # Traversal
    # -----------------------------------------------------------------------

    def walk(
        self,
        root: str,
        *,
        visit: VisitCallback | None = None,
        enter: EnterCallback | None = None,
        leave: LeaveCallback | None = None,
        options: WalkOptions | None = None,
    ) -> None:
        """Walk the tree below ``root``. See :func:`tierfs.filesystem.walk`."""
        walk(self, root, visit=visit, enter=enter, leave=leave, options=options)
