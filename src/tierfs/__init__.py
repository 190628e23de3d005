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

"""Capability-tiered filesystem abstraction with a callback-driven walker."""

from __future__ import annotations

from . import config, errors, filesystem, logging
from .config import FilesystemConfig
from .errors import (
    AccessDeniedError,
    DirectoryNotExistsError,
    FileNotExistsError,
    FilesystemError,
    MalformedPathError,
    NotEmptyError,
    NotExistsError,
    NotSupportedError,
)
from .filesystem import Filesystem, InMemoryDriver, LocalDriver, walk

__version__ = "0.1.0"

__all__ = [
    "AccessDeniedError",
    "DirectoryNotExistsError",
    "FileNotExistsError",
    "Filesystem",
    "FilesystemConfig",
    "FilesystemError",
    "InMemoryDriver",
    "LocalDriver",
    "MalformedPathError",
    "NotEmptyError",
    "NotExistsError",
    "NotSupportedError",
    "__version__",
    "config",
    "errors",
    "filesystem",
    "logging",
    "walk",
]
