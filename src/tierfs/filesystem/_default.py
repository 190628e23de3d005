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

"""Process-wide default filesystem."""

from __future__ import annotations

import functools

from ..config import FilesystemConfig
from ._facade import Filesystem
from ._local import LocalDriver

__all__ = ["default_filesystem"]


@functools.lru_cache(maxsize=1)
def default_filesystem() -> Filesystem:
    """Return a shared façade over the unrooted host disk.

    Created on first use from :meth:`FilesystemConfig.from_env` and cached
    for the lifetime of the process. Libraries should accept a
    :class:`Filesystem` argument instead of reaching for this.
    """
    config = FilesystemConfig.from_env()
    return Filesystem.from_config(LocalDriver.from_config(config), config)
