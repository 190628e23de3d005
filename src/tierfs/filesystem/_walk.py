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

"""Recursive directory-tree walker.

The walker lists a directory through the façade, sorts the entries with the
configured comparator and drives up to three callbacks per entry:

``visit(dir, info, is_root)``
    Fired for every entry, files and directories alike.
``enter(dir, info, is_root) -> WalkAction | None``
    Fired before descending into a directory. Returning
    :attr:`WalkAction.SKIP` prunes that subtree; :attr:`WalkAction.STOP` ends
    the whole walk without an error.
``leave(dir, info, is_root)``
    Fired after a directory's subtree has been walked.

``dir`` is always the directory containing ``info``. Any exception raised by
a callback, or by listing a directory, aborts the walk and propagates to the
caller unchanged, so callers can compare it by identity with the exception
they raised.

Traversal is depth-first and recursive; the recursion depth equals the depth
of the tree and is bounded by the interpreter's recursion limit. Symlinked
directories are followed like ordinary ones.

Example::

    def show(directory: str, info: FileInfo, is_root: bool) -> None:
        print(join(directory, info.name))

    def prune(directory: str, info: FileInfo, is_root: bool) -> WalkAction:
        return WalkAction.SKIP if info.name == ".git" else WalkAction.CONTINUE

    fs.walk("/repo", visit=show, enter=prune)
"""

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..logging import StructuredLogger, get_logger
from ._path import clean, dirname, join
from ._sort import Comparator, order_default, sort_file_infos
from ._types import FileInfo

if TYPE_CHECKING:
    from ._facade import Filesystem

__all__ = [
    "EnterCallback",
    "LeaveCallback",
    "VisitCallback",
    "WalkAction",
    "WalkOptions",
    "walk",
]

_logger: StructuredLogger = get_logger(__name__, context={"component": "walk"})


class WalkAction(enum.Enum):
    """Decision returned by an ``enter`` callback."""

    CONTINUE = "continue"
    """Descend into the directory (same as returning None)."""

    SKIP = "skip"
    """Do not descend; continue with the directory's next sibling."""

    STOP = "stop"
    """End the walk immediately and successfully."""


type VisitCallback = Callable[[str, FileInfo, bool], None]
type EnterCallback = Callable[[str, FileInfo, bool], WalkAction | None]
type LeaveCallback = Callable[[str, FileInfo, bool], None]


@dataclass(slots=True, frozen=True)
class WalkOptions:
    """Options controlling a single walk.

    Attributes:
        skip_sub_dirs: List only the root's immediate children. No ``enter``
            or ``leave`` callbacks fire for them.
        visit_root_dir: Fire ``visit`` for the root itself, first, with
            ``is_root=True`` and the root's parent as ``dir``.
        enter_leave_callbacks_for_root: Bracket the whole walk with ``enter``
            and ``leave`` for the root, both with ``is_root=True``.
        visit_order: Comparator applied to each directory's entries.
    """

    skip_sub_dirs: bool = False
    visit_root_dir: bool = False
    enter_leave_callbacks_for_root: bool = False
    visit_order: Comparator = order_default


class _StopWalk(Exception):
    """Unwinds the recursion after an ``enter`` callback returned STOP."""


@dataclass(slots=True, frozen=True)
class _Walker:
    fs: Filesystem
    visit: VisitCallback | None
    enter: EnterCallback | None
    leave: LeaveCallback | None
    options: WalkOptions

    def run(self, root: str) -> None:
        bracket = self.options.enter_leave_callbacks_for_root
        wants_root_visit = self.options.visit_root_dir and self.visit is not None
        wants_root_bracket = bracket and (
            self.enter is not None or self.leave is not None
        )

        root_info: FileInfo | None = None
        if wants_root_visit or wants_root_bracket:
            root_info = self.fs.stat(root)
        parent = dirname(root)

        if wants_root_visit and self.visit is not None and root_info is not None:
            self.visit(parent, root_info, True)

        if bracket and self.enter is not None and root_info is not None:
            action = self.enter(parent, root_info, True)
            if action is WalkAction.SKIP:
                self._log_skip(root)
                return
            if action is WalkAction.STOP:
                raise _StopWalk

        self._walk_directory(root)

        if bracket and self.leave is not None and root_info is not None:
            self.leave(parent, root_info, True)

    def _walk_directory(self, directory: str) -> None:
        entries = sort_file_infos(self.fs.read_dir(directory), self.options.visit_order)
        for info in entries:
            if self.visit is not None:
                self.visit(directory, info, False)

            if not info.is_dir or self.options.skip_sub_dirs:
                continue

            if self.enter is not None:
                action = self.enter(directory, info, False)
                if action is WalkAction.SKIP:
                    self._log_skip(join(directory, info.name))
                    continue
                if action is WalkAction.STOP:
                    raise _StopWalk

            self._walk_directory(join(directory, info.name))

            if self.leave is not None:
                self.leave(directory, info, False)

    @staticmethod
    def _log_skip(path: str) -> None:
        _logger.debug(
            "Skipping subtree.",
            event="filesystem.walk.skip",
            context={"path": path},
        )


def walk(
    fs: Filesystem,
    root: str,
    *,
    visit: VisitCallback | None = None,
    enter: EnterCallback | None = None,
    leave: LeaveCallback | None = None,
    options: WalkOptions | None = None,
) -> None:
    """Walk the tree below ``root`` on ``fs``, driving the given callbacks.

    Args:
        fs: Filesystem to list directories through.
        root: Directory to start from.
        visit: Called for every entry.
        enter: Called before descending into a directory.
        leave: Called after a directory's subtree has been walked.
        options: Traversal options. Defaults to :class:`WalkOptions()`.

    Raises:
        DirectoryNotExistsError: ``root`` or a listed directory is missing.
        NotSupportedError: ``fs`` cannot navigate.
        Exception: Whatever a callback raised, unchanged.
    """
    root = clean(root)
    resolved = options if options is not None else WalkOptions()
    _logger.debug(
        "Starting walk.",
        event="filesystem.walk.start",
        context={
            "root": root,
            "skip_sub_dirs": resolved.skip_sub_dirs,
            "visit_root_dir": resolved.visit_root_dir,
            "enter_leave_callbacks_for_root": resolved.enter_leave_callbacks_for_root,
        },
    )
    walker = _Walker(fs=fs, visit=visit, enter=enter, leave=leave, options=resolved)
    try:
        walker.run(root)
    except _StopWalk:
        _logger.debug(
            "Walk stopped by callback.",
            event="filesystem.walk.stop",
            context={"root": root},
        )
