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

"""Visit-order comparators for directory listings.

A comparator maps two entries to a negative number when the first should
come first, a positive number when the second should, and 0 when it has no
preference. Only the entry name and directory flag take part in ordering.

Comparators compose with :func:`compound_comparator`::

    order = compound_comparator(order_files_first, order_lexicographic_asc)
    entries = sort_file_infos(fs.read_dir("."), order)
"""

from __future__ import annotations

import functools
from collections.abc import Callable, Iterable

from ._types import FileInfo

type Comparator = Callable[[FileInfo, FileInfo], int]


def order_files_first(f1: FileInfo, f2: FileInfo) -> int:
    """Move files ahead of directories."""
    if not f1.is_dir and f2.is_dir:
        return -1
    if f1.is_dir and not f2.is_dir:
        return 1
    return 0


def order_directories_first(f1: FileInfo, f2: FileInfo) -> int:
    """Move directories ahead of files."""
    return -order_files_first(f1, f2)


def order_lexicographic_asc(f1: FileInfo, f2: FileInfo) -> int:
    """Order by name, "a" before "z" (code point order)."""
    if f1.name < f2.name:
        return -1
    if f1.name > f2.name:
        return 1
    return 0


def order_lexicographic_desc(f1: FileInfo, f2: FileInfo) -> int:
    """Order by name, "z" before "a"."""
    return -order_lexicographic_asc(f1, f2)


def compound_comparator(*comparators: Comparator) -> Comparator:
    """Chain comparators by priority; the first non-zero result wins.

    With no comparators (or when all return 0) entries are considered equal,
    which keeps their input order under a stable sort.
    """
    chain = tuple(comparators)

    def compare(f1: FileInfo, f2: FileInfo) -> int:
        for comparator in chain:
            order = comparator(f1, f2)
            if order != 0:
                return order
        return 0

    return compare


order_default: Comparator = compound_comparator(
    order_directories_first, order_lexicographic_asc
)
"""Directories first, then ascending by name."""


def sort_file_infos(
    files: Iterable[FileInfo], comparator: Comparator = order_default
) -> list[FileInfo]:
    """Return ``files`` sorted by ``comparator``.

    The sort is stable: entries the comparator considers equal keep the
    relative order in which the driver listed them.
    """
    return sorted(files, key=functools.cmp_to_key(comparator))


__all__ = [
    "Comparator",
    "compound_comparator",
    "order_default",
    "order_directories_first",
    "order_files_first",
    "order_lexicographic_asc",
    "order_lexicographic_desc",
    "sort_file_infos",
]
