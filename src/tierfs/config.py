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

"""Environment-driven configuration for filesystem instances.

Only two knobs exist: the line separator used by ``write_lines`` and the
directory in which host drivers create temporary resources. Both can be set
explicitly or picked up from the environment::

    TIERFS_LINE_SEPARATOR='\\r\\n'   # escape sequences are decoded
    TIERFS_TEMP_DIR=/var/tmp/tierfs
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Final

__all__ = [
    "LINE_SEPARATOR_ENV",
    "TEMP_DIR_ENV",
    "FilesystemConfig",
]

LINE_SEPARATOR_ENV: Final[str] = "TIERFS_LINE_SEPARATOR"
TEMP_DIR_ENV: Final[str] = "TIERFS_TEMP_DIR"

_ESCAPES: Final[Mapping[str, str]] = {"\\r": "\r", "\\n": "\n", "\\t": "\t"}


@dataclass(slots=True, frozen=True)
class FilesystemConfig:
    """Settings applied when building a filesystem.

    Attributes:
        line_separator: Separator joined between lines by ``write_lines``.
        temp_dir: Base directory for temporary files and directories.
            ``None`` uses the platform default.
    """

    line_separator: str = "\n"
    temp_dir: str | None = None

    def __post_init__(self) -> None:
        if not self.line_separator:
            raise ValueError("line_separator must not be empty.")

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> FilesystemConfig:
        """Build a config from ``TIERFS_*`` environment variables."""

        env = env if env is not None else os.environ
        separator = env.get(LINE_SEPARATOR_ENV)
        temp_dir = env.get(TEMP_DIR_ENV) or None
        if separator is None:
            return cls(temp_dir=temp_dir)
        return cls(line_separator=_decode_escapes(separator), temp_dir=temp_dir)


def _decode_escapes(value: str) -> str:
    for escaped, literal in _ESCAPES.items():
        value = value.replace(escaped, literal)
    return value
