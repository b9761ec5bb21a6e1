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
Text rendering of device tree nodes and properties.

Node lines are prefixed with '+', property lines with '|':

    + /proc/device-tree/cpus
    | /proc/device-tree/cpus/#address-cells (1) = <0x00000001>
    | /proc/device-tree/compatible (2) = "acme,board", "acme,soc"
    | /proc/device-tree/chosen/linux,booted-from-kexec
    | /proc/device-tree/serial/mac-address (6) = [0011223344ff]
"""

from typing import Optional

from .models import PropertyType
from .props import get_prop_type, get_strings, get_words


def format_node(path: str) -> str:
    """Format the line announcing a node."""
    return f"+ {path}"


def format_value(data: bytes, length: Optional[int] = None) -> Optional[str]:
    """
    Render a property value in device tree source notation.

    Returns:
        The rendered value, or None for a SIMPLE (empty) property
    """
    info = get_prop_type(data, length)

    if info.type is PropertyType.SIMPLE:
        return None
    if info.type is PropertyType.STRINGS:
        return ", ".join(f'"{s}"' for s in get_strings(data, length))
    if info.type is PropertyType.WORDS:
        words = " ".join(f"0x{w:08X}" for w in get_words(data, length))
        return f"<{words}>"

    raw = bytes(data) if length is None else bytes(data)[:length]
    return f"[{raw.hex()}]"


def format_property(path: str, data: bytes, length: Optional[int] = None) -> str:
    """Format the line describing a property and its decoded value."""
    info = get_prop_type(data, length)
    if info.is_simple:
        return f"| {path}"
    return f"| {path} ({info.count}) = {format_value(data, length)}"


def format_raw(data: bytes) -> str:
    """Render raw bytes as space-separated hex pairs."""
    return " ".join(f"{b:02x}" for b in data)
