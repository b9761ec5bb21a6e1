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
Utility functions shared by the dtfs subcommands.

This module picks the backing store and root path for a command from its
options, and configures logging for the command line.
"""

import logging
import os
from typing import Optional

from .store import BackingStore, FilesystemStore, DEFAULT_PATH

ROOT_ENV_VAR = "DTFS_ROOT"


def open_store(dtb_path: Optional[str] = None) -> BackingStore:
    """
    Get the backing store for a command.

    Args:
        dtb_path: DTB file to read, None for the live filesystem

    Returns:
        FdtStore over the blob if dtb_path is given, FilesystemStore otherwise

    Raises:
        TreeIOError: If the DTB file cannot be read
        ParseError: If the DTB file is not a valid blob
    """
    if dtb_path:
        from .fdt import FdtStore
        return FdtStore.from_file(dtb_path)
    return FilesystemStore()


def resolve_root(root: Optional[str], dtb_path: Optional[str] = None) -> str:
    """
    Get the tree root for a command.

    An explicit root wins. A DTB is rooted at '/'. Otherwise the DTFS_ROOT
    environment variable, then /proc/device-tree.
    """
    if root:
        return root
    if dtb_path:
        return "/"
    return os.environ.get(ROOT_ENV_VAR) or DEFAULT_PATH


def setup_logging(debug: bool = False):
    """Send library log records to stderr, at debug level if requested."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
