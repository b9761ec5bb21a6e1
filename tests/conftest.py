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
Pytest configuration and fixtures for dtfs tests.
"""

import pytest
import sys
from pathlib import Path

# Add src to path for imports
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

import libfdt


SAMPLE_TREE = {
    'compatible': b'acme,board\x00acme,soc\x00',
    'model': b'Acme Evaluation Board\x00',
    '#address-cells': b'\x00\x00\x00\x01',
    '#size-cells': b'\x00\x00\x00\x01',
    'chosen': {
        'bootargs': b'console=ttyS0,115200\x00',
        'linux,booted-from-kexec': b'',
    },
    'cpus': {
        'cpu@0': {
            'device_type': b'cpu\x00',
            'reg': b'\x00\x00\x00\x00',
        },
        'cpu@1': {
            'device_type': b'cpu\x00',
            'reg': b'\x00\x00\x00\x01',
        },
    },
    'serial@10000000': {
        'mac-address': b'\x00\x11\x22\x33\x44\xff',
        'reg': b'\x10\x00\x00\x00\x00\x00\x10\x00',
    },
}


def make_tree(root: Path, layout: dict):
    """Create directories for dict values and files for bytes values."""
    root.mkdir(parents=True, exist_ok=True)
    for name, value in layout.items():
        if isinstance(value, dict):
            make_tree(root / name, value)
        else:
            (root / name).write_bytes(value)


def build_dtb(layout: dict) -> bytes:
    """Build a DTB with the same nodes and properties as a tree layout."""
    fdt_sw = libfdt.FdtSw()
    fdt_sw.finish_reservemap()

    def add_node(name, contents):
        fdt_sw.begin_node(name)
        for prop_name, value in contents.items():
            if not isinstance(value, dict):
                fdt_sw.property(prop_name, value)
        for node_name, value in contents.items():
            if isinstance(value, dict):
                add_node(node_name, value)
        fdt_sw.end_node()

    add_node('', layout)

    dtb = fdt_sw.as_fdt()
    dtb.pack()
    return bytes(dtb.as_bytearray())


@pytest.fixture
def dt_root(tmp_path):
    """An on-disk device tree laid out like /proc/device-tree."""
    root = tmp_path / "device-tree"
    make_tree(root, SAMPLE_TREE)
    # Hidden entries are never listed
    (root / ".hidden").write_bytes(b"secret\x00")
    return root


@pytest.fixture
def sample_dtb():
    """DTB bytes holding SAMPLE_TREE."""
    return build_dtb(SAMPLE_TREE)


@pytest.fixture
def dtb_file(tmp_path, sample_dtb):
    """DTB file holding SAMPLE_TREE."""
    path = tmp_path / "board.dtb"
    path.write_bytes(sample_dtb)
    return path


UNIT_ADDRESS_TREE = {
    'n': {
        'foo': b'',
        'foo@1': {
            'reg': b'\x00\x00\x00\x01',
        },
    },
    'cpus': {
        'cpu@0': {
            'reg': b'\x00\x00\x00\x00',
        },
    },
}


@pytest.fixture
def unit_address_dtb():
    """DTB where a property shares its name with a unit-addressed sibling."""
    return build_dtb(UNIT_ADDRESS_TREE)
