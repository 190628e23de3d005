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

from __future__ import annotations

from pathlib import Path

import pytest

from tierfs.filesystem import Filesystem, InMemoryDriver, LocalDriver


@pytest.fixture
def memory_fs() -> Filesystem:
    """Return a façade over an empty in-memory driver."""

    return Filesystem(InMemoryDriver())


@pytest.fixture
def local_fs(tmp_path: Path) -> Filesystem:
    """Return a façade over a local driver rooted at a fresh directory."""

    return Filesystem(LocalDriver(_root=str(tmp_path)))
