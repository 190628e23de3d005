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

"""Capability-tiered filesystem abstraction.

This package provides the :class:`Filesystem` façade that gives a uniform
API over backend drivers of differing capability (navigation only, read,
read-write, temporary resources), a recursive :func:`walk` with
visit/enter/leave callbacks, and the comparators that order its visits.

Example usage::

    from tierfs.filesystem import Filesystem, InMemoryDriver, WalkOptions

    fs = Filesystem(InMemoryDriver())
    fs.write_string("/docs/readme.txt", "hello")
    fs.walk("/", visit=lambda d, info, root: print(d, info.name))

Drivers provided here:

- ``LocalDriver``: host disk, optionally sandboxed under a root directory
- ``InMemoryDriver``: dictionary-backed virtual disk

Cross-filesystem copy and move helpers (``copy``, ``move``, ...) take a
source and a destination filesystem.
"""

from __future__ import annotations

from ._default import default_filesystem
from ._facade import Filesystem
from ._interop import (
    copy,
    copy_all,
    copy_dir,
    copy_file,
    move,
    move_all,
    move_dir,
    move_file,
)
from ._local import LocalDriver
from ._memory import InMemoryDriver
from ._path import (
    SEPARATOR,
    abs_in,
    abs_path,
    abs_root,
    base,
    base_no_ext,
    clean,
    dirname,
    ext,
    is_abs,
    is_in,
    join,
    no_ext,
)
from ._protocol import NavigationDriver, ReadDriver, ReadWriteDriver, TempDriver
from ._sort import (
    Comparator,
    compound_comparator,
    order_default,
    order_directories_first,
    order_files_first,
    order_lexicographic_asc,
    order_lexicographic_desc,
    sort_file_infos,
)
from ._types import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_LINE_SEPARATOR,
    File,
    FileInfo,
    OpenFlags,
)
from ._walk import (
    EnterCallback,
    LeaveCallback,
    VisitCallback,
    WalkAction,
    WalkOptions,
    walk,
)

__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "DEFAULT_LINE_SEPARATOR",
    "SEPARATOR",
    "Comparator",
    "EnterCallback",
    "File",
    "FileInfo",
    "Filesystem",
    "InMemoryDriver",
    "LeaveCallback",
    "LocalDriver",
    "NavigationDriver",
    "OpenFlags",
    "ReadDriver",
    "ReadWriteDriver",
    "TempDriver",
    "VisitCallback",
    "WalkAction",
    "WalkOptions",
    "abs_in",
    "abs_path",
    "abs_root",
    "base",
    "base_no_ext",
    "clean",
    "compound_comparator",
    "copy",
    "copy_all",
    "copy_dir",
    "copy_file",
    "default_filesystem",
    "dirname",
    "ext",
    "is_abs",
    "is_in",
    "join",
    "move",
    "move_all",
    "move_dir",
    "move_file",
    "no_ext",
    "order_default",
    "order_directories_first",
    "order_files_first",
    "order_lexicographic_asc",
    "order_lexicographic_desc",
    "sort_file_infos",
    "walk",
]
