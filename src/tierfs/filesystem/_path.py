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

"""Lexical path utilities shared by drivers and the façade.

All functions operate on ``/``-separated strings and never touch the disk,
except :func:`abs_path` which reads the process working directory.

Constants:
    SEPARATOR: The path separator used by every backend ("/").

Functions:
    join, clean: build and normalize paths
    base, base_no_ext, dirname, ext, no_ext: split paths into parts
    is_abs, abs_path, abs_in, abs_root: resolve paths to absolute form
    is_in: containment check usable for sandbox enforcement
"""

from __future__ import annotations

from pathlib import Path
from typing import Final

from ..errors import MalformedPathError

SEPARATOR: Final[str] = "/"


def clean(path: str) -> str:
    """Return the shortest lexically equivalent path.

    This function:
    - Collapses repeated separators and removes "." segments
    - Resolves ".." against the preceding segment
    - Drops ".." that would climb above the root of an absolute path
    - Keeps leading ".." of relative paths
    - Returns "." for an empty result

    Examples:
        >>> clean("/foo//bar/../baz/")
        '/foo/baz'
        >>> clean("../a/./b")
        '../a/b'
        >>> clean("/..")
        '/'
        >>> clean("")
        '.'
    """
    if not path:
        return "."
    rooted = path.startswith(SEPARATOR)
    result: list[str] = []
    for segment in path.split(SEPARATOR):
        if not segment or segment == ".":
            continue
        if segment == "..":
            if result and result[-1] != "..":
                _ = result.pop()
            elif not rooted:
                result.append(segment)
            continue
        result.append(segment)
    joined = SEPARATOR.join(result)
    if rooted:
        return SEPARATOR + joined
    return joined or "."


def join(*parts: str) -> str:
    """Join path parts with the separator and clean the result.

    Empty parts are ignored. Joining nothing (or only empty parts) yields "".
    """
    non_empty = [part for part in parts if part]
    if not non_empty:
        return ""
    return clean(SEPARATOR.join(non_empty))


def base(path: str) -> str:
    """Return the last element of ``path``.

    Trailing separators are ignored. The root yields "/", empty yields ".".
    """
    if not path:
        return "."
    stripped = path.rstrip(SEPARATOR)
    if not stripped:
        return SEPARATOR
    return stripped.rsplit(SEPARATOR, 1)[-1]


def dirname(path: str) -> str:
    """Return every element of ``path`` except the last, cleaned."""
    index = path.rfind(SEPARATOR)
    return clean(path[: index + 1])


def ext(path: str) -> str:
    """Return the extension of the last element, including the dot."""
    for index in range(len(path) - 1, -1, -1):
        char = path[index]
        if char == SEPARATOR:
            break
        if char == ".":
            return path[index:]
    return ""


def no_ext(path: str) -> str:
    """Return ``path`` without the extension reported by :func:`ext`."""
    extension = ext(path)
    return path[: len(path) - len(extension)]


def base_no_ext(path: str) -> str:
    """Return the last element of ``path`` without its extension."""
    return base(no_ext(path))


def is_abs(path: str) -> bool:
    """Return True when ``path`` is absolute."""
    return path.startswith(SEPARATOR)


def abs_path(path: str) -> str:
    """Resolve ``path`` against the process working directory."""
    return abs_in(Path.cwd().as_posix(), path)


def abs_in(wd: str, path: str) -> str:
    """Return ``path`` as seen from the working directory ``wd``.

    Raises:
        MalformedPathError: If ``wd`` is not absolute.
    """
    if not is_abs(wd):
        msg = f"The working directory must be an absolute path: {wd!r}"
        raise MalformedPathError(msg)
    if is_abs(path):
        return clean(path)
    return clean(join(wd, path))


def abs_root(root: str, path: str) -> str:
    """Resolve ``path`` inside ``root`` without ever leaving it.

    A relative path is joined onto ``root``. If that escapes (via ".."), the
    path is re-read as if it were absolute within ``root``, so ``"../etc"``
    under ``/srv`` becomes ``/srv/etc``.

    Raises:
        MalformedPathError: If ``root`` is not absolute or no interpretation
            of ``path`` stays inside it.
    """
    if not is_abs(root):
        msg = f"The root directory must be an absolute path: {root!r}"
        raise MalformedPathError(msg)

    candidate = clean(join(root, clean(path)))
    if is_in(candidate, root):
        return candidate

    candidate = clean(join(root, clean(SEPARATOR + path)))
    if is_in(candidate, root):
        return candidate

    msg = f"Path {path!r} escapes root {root!r}"
    raise MalformedPathError(msg)


def is_in(path: str, expected_parent: str) -> bool:
    """Return True when ``path`` equals or lies below ``expected_parent``.

    Both paths are cleaned and compared segment by segment, so ``/a/bc`` is
    not inside ``/a/b``.

    Raises:
        MalformedPathError: If either path is relative.
    """
    if not is_abs(path):
        msg = f"path must denote an absolute path: {path!r}"
        raise MalformedPathError(msg)
    if not is_abs(expected_parent):
        msg = f"expected_parent must denote an absolute path: {expected_parent!r}"
        raise MalformedPathError(msg)

    parts = _segments(path)
    expected_parts = _segments(expected_parent)
    if len(parts) < len(expected_parts):
        return False
    return parts[: len(expected_parts)] == expected_parts


def _segments(path: str) -> list[str]:
    return [segment for segment in clean(path).split(SEPARATOR) if segment]


__all__ = [
    "SEPARATOR",
    "abs_in",
    "abs_path",
    "abs_root",
    "base",
    "base_no_ext",
    "clean",
    "dirname",
    "ext",
    "is_abs",
    "is_in",
    "join",
    "no_ext",
]
