# Copyright 2015 Neil Armstrong <superna9999@gmail.com>
#
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

"""
Data models for device tree paths, properties and traversal results.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class PathType(Enum):
    """Kind of object a composed path refers to."""
    NODE = "node"
    PROPERTY = "property"


class PropertyType(Enum):
    """
    Semantic encoding of a property's raw bytes.

    Types:
    - SIMPLE: zero-length property, no payload
    - STRINGS: one or more NUL-terminated printable strings
    - WORDS: array of 32-bit big-endian cells
    - BYTES: opaque byte array
    """
    SIMPLE = "simple"
    STRINGS = "strings"
    WORDS = "words"
    BYTES = "bytes"


@dataclass(frozen=True)
class PropertyInfo:
    """Inferred type of a property buffer and its element count."""
    type: PropertyType
    count: Optional[int] = None  # None for SIMPLE

    @property
    def is_simple(self) -> bool:
        return self.type is PropertyType.SIMPLE


@dataclass
class NodeList:
    """Child names collected from one node listing."""
    names: List[str] = field(default_factory=list)
    missed: int = 0  # entries dropped because max was reached
    max: Optional[int] = None

    @property
    def count(self) -> int:
        """Number of names actually stored."""
        return len(self.names)


@dataclass(frozen=True)
class TreeEntry:
    """A single child found during a recursive walk."""
    path: str
    name: str
    kind: PathType
    depth: int = 0

    @property
    def full_path(self) -> str:
        """Path of the entry itself (parent path joined with name)."""
        from .paths import concat_path
        return concat_path(self.path, self.name)
