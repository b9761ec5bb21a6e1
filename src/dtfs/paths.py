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
Path composition and classification.

Paths are plain strings made of a non-empty base and an optional relative
part. Classification asks the backing store whether the composed path is a
node or a property.
"""

import logging
from typing import Optional

from .models import PathType
from .exceptions import InvalidArgumentError, PathTypeError
from .store import BackingStore, default_store

logger = logging.getLogger(__name__)


def concat_path(base: str, path: Optional[str] = None) -> str:
    """
    Join base and path with exactly one separator.

    Args:
        base: Base path, at least one character
        path: Path complement, may be None to designate base itself

    Returns:
        Composed path

    Raises:
        InvalidArgumentError: If base is None or empty
    """
    if not base:
        raise InvalidArgumentError("base path must be a non-empty string")
    if path is None:
        return base

    if base.endswith("/") and path.startswith("/"):
        return base + path[1:]
    if base.endswith("/") or path.startswith("/"):
        return base + path
    return f"{base}/{path}"


def check_path(base: str, path: Optional[str] = None,
               store: Optional[BackingStore] = None) -> PathType:
    """
    Determine whether a path designates a node or a property.

    Args:
        base: Base path, at least one character
        path: Path complement, may be None
        store: Backing store to query, defaults to the local filesystem

    Returns:
        PathType.NODE or PathType.PROPERTY

    Raises:
        InvalidArgumentError: If base is empty
        PathNotFoundError: If the composed path does not exist
        TreeIOError: If the backing store cannot stat the path
        PathTypeError: If the path exists but is neither kind
    """
    full_path = concat_path(base, path)
    if store is None:
        store = default_store()
    return store.stat(full_path)


def read_property(base: str, path: Optional[str] = None,
                  store: Optional[BackingStore] = None) -> bytes:
    """
    Read the raw bytes of a property.

    The composed path must classify as a property. A new bytes object is
    returned on every call.

    Raises:
        PathTypeError: If the path is a node
        PathNotFoundError, TreeIOError: On backing store failures
    """
    if store is None:
        store = default_store()

    full_path = concat_path(base, path)
    kind = store.stat(full_path)
    if kind is not PathType.PROPERTY:
        logger.debug("%s is a %s, not a property", full_path, kind.value)
        raise PathTypeError(f"{full_path} is not a property")

    return store.read_all(full_path)
