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
Tree walking over a backing store.

list_children() produces the direct children of one node and never recurses.
Recursion is left to the caller, which classifies each child with
check_path() and lists it again if it is a node. walk() is that recursion
packaged as a depth-first generator.
"""

import logging
from typing import Callable, Iterator, Optional, Tuple

from .models import NodeList, PathType, TreeEntry
from .exceptions import DtfsError, InvalidArgumentError
from .paths import concat_path, check_path
from .store import BackingStore, default_store

logger = logging.getLogger(__name__)

HIDDEN_PREFIX = "."


def list_children(base: str, node_path: Optional[str] = None,
                  store: Optional[BackingStore] = None) -> Iterator[Tuple[str, str]]:
    """
    List the subnodes and properties of a node.

    The node is opened before this function returns, so a missing or
    unreadable node raises here and nothing is ever yielded. Entries whose
    name starts with '.' are skipped. Order is whatever the store yields.

    Args:
        base: Base path, at least one character
        node_path: Path complement, may be None
        store: Backing store, defaults to the local filesystem

    Returns:
        Iterator of (parent_path, name) tuples, parent_path being the
        composed node path

    Raises:
        InvalidArgumentError: If base is empty
        PathNotFoundError, TreeIOError: If the node cannot be listed
    """
    if store is None:
        store = default_store()

    parent = concat_path(base, node_path)
    names = store.list(parent)
    return _VisibleChildren(parent, names)


class _VisibleChildren:
    """(parent, name) pairs of a store listing, hidden names skipped."""

    def __init__(self, parent: str, names: Iterator[str]):
        self.parent = parent
        self._names = names

    def __iter__(self):
        return self

    def __next__(self) -> Tuple[str, str]:
        for name in self._names:
            if not name.startswith(HIDDEN_PREFIX):
                return self.parent, name
        self.close()
        raise StopIteration

    def close(self):
        """Release the store listing, even if iteration never started."""
        close = getattr(self._names, "close", None)
        if close is not None:
            close()


def collect_children(base: str, node_path: Optional[str] = None,
                     max: Optional[int] = None,
                     store: Optional[BackingStore] = None) -> NodeList:
    """
    Collect child names of a node into a NodeList.

    At most max names are stored; further names are only counted in
    NodeList.missed. max=None stores every name.
    """
    if max is not None and max < 0:
        raise InvalidArgumentError(f"max must be >= 0, got {max}")

    result = NodeList(max=max)
    for _, name in list_children(base, node_path, store):
        if max is None or len(result.names) < max:
            result.names.append(name)
        else:
            result.missed += 1
    return result


def walk(base: str, node_path: Optional[str] = None,
         store: Optional[BackingStore] = None,
         onerror: Optional[Callable[[DtfsError], None]] = None) -> Iterator[TreeEntry]:
    """
    Walk a tree depth-first, yielding every node and property below a node.

    Each node entry is yielded before its own children. Failures to
    classify or list a child are handed to onerror (or logged when onerror
    is None) and the walk carries on with the next sibling. A failure to
    list the starting node is raised before anything is yielded.

    Args:
        base: Base path, at least one character
        node_path: Path complement of the starting node, may be None
        store: Backing store, defaults to the local filesystem
        onerror: Called with the exception for each skipped entry

    Returns:
        Iterator of TreeEntry, depth 0 for direct children of the start node
    """
    if store is None:
        store = default_store()

    root_children = list_children(base, node_path, store)
    return _walk_children(root_children, 0, store, onerror)


def _walk_children(children, depth, store, onerror) -> Iterator[TreeEntry]:
    for parent, name in children:
        try:
            kind = check_path(parent, name, store)
        except DtfsError as e:
            _report(e, onerror)
            continue

        entry = TreeEntry(path=parent, name=name, kind=kind, depth=depth)
        yield entry

        if kind is PathType.NODE:
            try:
                subchildren = list_children(parent, name, store)
            except DtfsError as e:
                _report(e, onerror)
                continue
            yield from _walk_children(subchildren, depth + 1, store, onerror)


def _report(error: DtfsError, onerror):
    if onerror is not None:
        onerror(error)
    else:
        logger.warning("skipping entry: %s", error)
