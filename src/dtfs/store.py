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
Backing stores for device tree hierarchies.

A backing store is the read-only source the rest of dtfs walks. It answers
three questions about a path and nothing else:

- stat(path): is it a node (container) or a property (blob)?
- list(path): which child names does a node hold?
- read_all(path): what are the raw bytes of a property?

FilesystemStore serves an OS-exported tree such as /proc/device-tree,
where nodes are directories and properties are regular files.
"""

import logging
import os
import stat as stat_mod
from typing import Iterator

from .models import PathType
from .exceptions import PathNotFoundError, PathTypeError, TreeIOError

logger = logging.getLogger(__name__)

DEFAULT_PATH = "/proc/device-tree"


class BackingStore:
    """Read-only hierarchical data source consumed by dtfs."""

    def stat(self, path: str) -> PathType:
        """Return whether path is a node or a property."""
        raise NotImplementedError

    def list(self, path: str) -> Iterator[str]:
        """
        Return an iterator over the child names of a node.

        Implementations must fail immediately when the node cannot be
        opened, not on the first iteration.
        """
        raise NotImplementedError

    def read_all(self, path: str) -> bytes:
        """Return the complete contents of a property."""
        raise NotImplementedError


def _translate_os_error(e: OSError, action: str, path: str) -> TreeIOError:
    if isinstance(e, FileNotFoundError):
        return PathNotFoundError(e.errno, f"{action} failed: {e.strerror}", path)
    return TreeIOError(e.errno, f"{action} failed: {e.strerror}", path)


class _DirNames:
    """
    Names of an open directory.

    The scandir handle is released when iteration is exhausted, on close(),
    or when the listing is dropped, whether or not iteration ever started.
    """

    def __init__(self, entries):
        self._entries = entries

    def __iter__(self):
        return self

    def __next__(self) -> str:
        try:
            entry = next(self._entries)
        except StopIteration:
            self.close()
            raise
        return entry.name

    def close(self):
        self._entries.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __del__(self):
        self.close()


class FilesystemStore(BackingStore):
    """Backing store over a directory hierarchy on the local filesystem."""

    def stat(self, path: str) -> PathType:
        try:
            st = os.stat(path)
        except OSError as e:
            logger.debug("stat failed for %s: %s", path, e)
            raise _translate_os_error(e, "stat", path) from e

        if stat_mod.S_ISDIR(st.st_mode):
            return PathType.NODE
        if stat_mod.S_ISREG(st.st_mode):
            return PathType.PROPERTY
        raise PathTypeError(f"{path} is neither a directory nor a regular file")

    def list(self, path: str) -> Iterator[str]:
        try:
            entries = os.scandir(path)
        except OSError as e:
            logger.debug("couldn't open directory %s: %s", path, e)
            raise _translate_os_error(e, "opendir", path) from e
        return _DirNames(entries)

    def read_all(self, path: str) -> bytes:
        try:
            with open(path, "rb") as f:
                size = os.fstat(f.fileno()).st_size
                data = f.read(size) if size > 0 else b""
        except OSError as e:
            logger.debug("read failed for %s: %s", path, e)
            raise _translate_os_error(e, "read", path) from e

        if len(data) != size:
            logger.debug("truncated read for %s: %d of %d bytes", path, len(data), size)
            raise TreeIOError(f"truncated read for {path}: got {len(data)} of {size} bytes")
        return data


def default_store() -> BackingStore:
    """Return the store used when callers do not supply one."""
    return FilesystemStore()
