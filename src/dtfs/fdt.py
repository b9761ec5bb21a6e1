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
Backing store over a flattened device tree blob (DTB).

Exposes the nodes and properties of a DTB with the same path layout the
kernel uses under /proc/device-tree, so the walker, the type inference and
the CLI work unchanged on a .dtb file.
"""

import logging
from typing import Iterator, List, Tuple

import libfdt

from .models import PathType
from .exceptions import ParseError, PathNotFoundError, TreeIOError
from .store import BackingStore

logger = logging.getLogger(__name__)


class FdtStore(BackingStore):
    """Read-only view of a DTB as a node/property hierarchy."""

    def __init__(self, dtb_data: bytes):
        try:
            self.fdt = libfdt.Fdt(bytes(dtb_data))
        except libfdt.FdtException as e:
            error_msg = f"FDT error: {e}"
            if hasattr(e, 'err'):
                error_msg += f" (error code: {e.err})"
            raise ParseError(f"Failed to parse DTB: {error_msg}") from e

    @classmethod
    def from_file(cls, dtb_path: str) -> "FdtStore":
        """Load a DTB file."""
        try:
            with open(dtb_path, 'rb') as f:
                dtb_data = f.read()
        except OSError as e:
            raise TreeIOError(f"Failed to read DTB file {dtb_path}: {e}") from e
        return cls(dtb_data)

    @staticmethod
    def _normalize(path: str) -> str:
        parts = [p for p in path.split('/') if p]
        return '/' + '/'.join(parts)

    @staticmethod
    def _split(path: str) -> Tuple[str, str]:
        parent, _, name = path.rpartition('/')
        return parent or '/', name

    def _node_offset(self, path: str) -> int:
        """Return the offset of the node at path, or a negative error code.

        libfdt matches a component without its unit address ("cpu" finds
        "cpu@0"), so the offset only counts when the node's own path is the
        one asked for.
        """
        try:
            offset = self.fdt.path_offset(path, libfdt.QUIET_NOTFOUND)
            if offset < 0 or self.fdt.get_path(offset) == path:
                return offset
        except libfdt.FdtException as e:
            raise TreeIOError(f"FDT lookup failed for {path}: {e}") from e
        return -libfdt.NOTFOUND

    def _property(self, path: str):
        """Return the libfdt Property at path, or None if there is none."""
        if path == '/':
            return None
        parent, name = self._split(path)
        parent_offset = self._node_offset(parent)
        if parent_offset < 0:
            return None
        try:
            prop = self.fdt.getprop(parent_offset, name, libfdt.QUIET_NOTFOUND)
        except libfdt.FdtException as e:
            raise TreeIOError(f"FDT property lookup failed for {path}: {e}") from e
        if isinstance(prop, int):
            return None
        return prop

    def stat(self, path: str) -> PathType:
        norm = self._normalize(path)
        if self._node_offset(norm) >= 0:
            return PathType.NODE
        if self._property(norm) is not None:
            return PathType.PROPERTY
        logger.debug("no node or property at %s", norm)
        raise PathNotFoundError(f"No such node or property: {path}")

    def list(self, path: str) -> Iterator[str]:
        norm = self._normalize(path)
        node_offset = self._node_offset(norm)
        if node_offset < 0:
            if self._property(norm) is not None:
                raise TreeIOError(f"Not a node: {path}")
            logger.debug("couldn't open node %s", norm)
            raise PathNotFoundError(f"No such node: {path}")
        return iter(self._child_names(node_offset))

    def _child_names(self, node_offset: int) -> List[str]:
        names = []
        try:
            prop_offset = self.fdt.first_property_offset(node_offset, libfdt.QUIET_NOTFOUND)
            while prop_offset >= 0:
                names.append(self.fdt.get_property_by_offset(prop_offset).name)
                prop_offset = self.fdt.next_property_offset(prop_offset, libfdt.QUIET_NOTFOUND)

            offset = self.fdt.first_subnode(node_offset, libfdt.QUIET_NOTFOUND)
            while offset >= 0:
                names.append(self.fdt.get_name(offset))
                offset = self.fdt.next_subnode(offset, libfdt.QUIET_NOTFOUND)
        except libfdt.FdtException as e:
            raise TreeIOError(f"Error iterating node contents: {e}") from e
        return names

    def read_all(self, path: str) -> bytes:
        norm = self._normalize(path)
        prop = self._property(norm)
        if prop is None:
            logger.debug("no property at %s", norm)
            raise PathNotFoundError(f"No such property: {path}")
        return bytes(prop)
