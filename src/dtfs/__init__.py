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
dtfs: Device Tree Filesystem Parser

Walks a device tree exported as a filesystem (such as /proc/device-tree) or
stored in a DTB blob, and decodes property values by inferring whether they
hold strings, 32-bit words or raw bytes.
"""

__version__ = "0.1.0"

# Export main components for easy access
from .models import PathType, PropertyType, PropertyInfo, NodeList, TreeEntry
from .paths import concat_path, check_path, read_property
from .props import (
    get_prop_type,
    is_printable_string,
    get_word,
    get_string,
    get_words,
    get_strings,
)
from .tree import list_children, collect_children, walk
from .store import BackingStore, FilesystemStore, DEFAULT_PATH
from .exceptions import (
    DtfsError,
    InvalidArgumentError,
    TreeIOError,
    PathNotFoundError,
    PathTypeError,
    TypeMismatchError,
    IndexOutOfRangeError,
    ParseError,
)

__all__ = [
    # Models
    'PathType',
    'PropertyType',
    'PropertyInfo',
    'NodeList',
    'TreeEntry',
    # Paths
    'concat_path',
    'check_path',
    'read_property',
    # Property decoding
    'get_prop_type',
    'is_printable_string',
    'get_word',
    'get_string',
    'get_words',
    'get_strings',
    # Traversal
    'list_children',
    'collect_children',
    'walk',
    # Backing stores
    'BackingStore',
    'FilesystemStore',
    'DEFAULT_PATH',
    # Exceptions
    'DtfsError',
    'InvalidArgumentError',
    'TreeIOError',
    'PathNotFoundError',
    'PathTypeError',
    'TypeMismatchError',
    'IndexOutOfRangeError',
    'ParseError',
]
