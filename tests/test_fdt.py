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
Tests for the DTB backing store.
"""

import pytest

from dtfs.fdt import FdtStore
from dtfs.models import PathType, PropertyInfo, PropertyType
from dtfs.paths import check_path, read_property
from dtfs.props import get_prop_type, get_strings, get_words
from dtfs.tree import list_children, walk
from dtfs.exceptions import ParseError, PathNotFoundError, TreeIOError


class TestFdtStore:
    """Test a DTB exposed as a node/property hierarchy."""

    def test_stat(self, sample_dtb):
        """Test node and property classification."""
        store = FdtStore(sample_dtb)
        assert store.stat("/") is PathType.NODE
        assert store.stat("/cpus") is PathType.NODE
        assert store.stat("/cpus/cpu@0") is PathType.NODE
        assert store.stat("/compatible") is PathType.PROPERTY
        assert store.stat("/cpus/cpu@0/reg") is PathType.PROPERTY

    def test_stat_normalizes_separators(self, sample_dtb):
        """Test that trailing and doubled separators are tolerated."""
        store = FdtStore(sample_dtb)
        assert store.stat("/cpus/") is PathType.NODE
        assert store.stat("//cpus//cpu@1") is PathType.NODE

    def test_stat_missing(self, sample_dtb):
        """Test that unknown paths raise PathNotFoundError."""
        store = FdtStore(sample_dtb)
        with pytest.raises(PathNotFoundError):
            store.stat("/no-such-node")
        with pytest.raises(PathNotFoundError):
            store.stat("/cpus/cpu@0/no-such-prop")

    def test_list(self, sample_dtb):
        """Test that properties and subnodes are both listed."""
        names = list(FdtStore(sample_dtb).list("/"))
        assert set(names) == {
            'compatible', 'model', '#address-cells', '#size-cells',
            'chosen', 'cpus', 'serial@10000000',
        }

    def test_list_property_fails(self, sample_dtb):
        """Test that a property cannot be listed."""
        with pytest.raises(TreeIOError):
            FdtStore(sample_dtb).list("/model")

    def test_list_missing_fails(self, sample_dtb):
        """Test that a missing node cannot be listed."""
        with pytest.raises(PathNotFoundError):
            FdtStore(sample_dtb).list("/missing")

    def test_read_all(self, sample_dtb):
        """Test reading raw property bytes."""
        store = FdtStore(sample_dtb)
        assert store.read_all("/compatible") == b"acme,board\x00acme,soc\x00"
        assert store.read_all("/chosen/linux,booted-from-kexec") == b""
        with pytest.raises(PathNotFoundError):
            store.read_all("/cpus")

    def test_invalid_blob(self):
        """Test that garbage is rejected."""
        with pytest.raises(ParseError):
            FdtStore(b"not a valid dtb")

    def test_from_file(self, dtb_file):
        """Test loading a DTB from disk."""
        store = FdtStore.from_file(str(dtb_file))
        assert store.stat("/serial@10000000") is PathType.NODE

    def test_from_missing_file(self, tmp_path):
        """Test that an unreadable file raises a store error."""
        with pytest.raises(TreeIOError):
            FdtStore.from_file(str(tmp_path / "missing.dtb"))


class TestFdtTraversal:
    """Test the walker and decoders on a DTB."""

    def test_list_children(self, sample_dtb):
        """Test listing composed with a base path."""
        store = FdtStore(sample_dtb)
        children = list(list_children("/", "cpus/cpu@0", store=store))
        assert sorted(children) == [("/cpus/cpu@0", "device_type"), ("/cpus/cpu@0", "reg")]

    def test_walk_matches_filesystem(self, sample_dtb, dt_root):
        """Test that a DTB and its exported directory walk the same way."""
        store = FdtStore(sample_dtb)
        dtb_entries = {
            (e.full_path, e.kind, e.depth) for e in walk("/", store=store)
        }
        fs_entries = {
            (e.full_path[len(str(dt_root)):], e.kind, e.depth) for e in walk(str(dt_root))
        }
        assert dtb_entries == fs_entries

    def test_decode_properties(self, sample_dtb):
        """Test type inference on DTB properties."""
        store = FdtStore(sample_dtb)

        compatible = read_property("/", "compatible", store=store)
        assert get_prop_type(compatible) == PropertyInfo(PropertyType.STRINGS, 2)
        assert get_strings(compatible) == ["acme,board", "acme,soc"]

        reg = read_property("/serial@10000000/reg", store=store)
        assert get_words(reg) == [0x10000000, 0x1000]

        mac = read_property("/serial@10000000", "mac-address", store=store)
        assert get_prop_type(mac) == PropertyInfo(PropertyType.BYTES, 6)

        flag = read_property("/chosen/linux,booted-from-kexec", store=store)
        assert get_prop_type(flag).type is PropertyType.SIMPLE

    def test_check_path(self, sample_dtb):
        """Test classification through check_path."""
        store = FdtStore(sample_dtb)
        assert check_path("/", "chosen", store=store) is PathType.NODE
        assert check_path("/chosen", "bootargs", store=store) is PathType.PROPERTY


class TestFdtUnitAddress:
    """Test that names must match exactly, unit address included."""

    def test_name_without_unit_address_is_missing(self, unit_address_dtb):
        """Test that "cpu" does not resolve to "cpu@0"."""
        store = FdtStore(unit_address_dtb)
        assert store.stat("/cpus/cpu@0") is PathType.NODE
        with pytest.raises(PathNotFoundError):
            store.stat("/cpus/cpu")
        with pytest.raises(PathNotFoundError):
            store.list("/cpus/cpu")
        with pytest.raises(PathNotFoundError):
            store.read_all("/cpus/cpu/reg")

    def test_property_beside_unit_addressed_node(self, unit_address_dtb):
        """Test that a property "foo" next to a node "foo@1" stays a property."""
        store = FdtStore(unit_address_dtb)
        assert store.stat("/n/foo") is PathType.PROPERTY
        assert store.stat("/n/foo@1") is PathType.NODE
        assert store.read_all("/n/foo") == b""
        with pytest.raises(TreeIOError):
            store.list("/n/foo")

    def test_walk_unit_address_tree(self, unit_address_dtb):
        """Test that the walk yields each entry once with its real kind."""
        store = FdtStore(unit_address_dtb)
        errors = []
        kinds = {e.full_path: e.kind for e in walk("/", store=store, onerror=errors.append)}
        assert kinds == {
            '/n': PathType.NODE,
            '/n/foo': PathType.PROPERTY,
            '/n/foo@1': PathType.NODE,
            '/n/foo@1/reg': PathType.PROPERTY,
            '/cpus': PathType.NODE,
            '/cpus/cpu@0': PathType.NODE,
            '/cpus/cpu@0/reg': PathType.PROPERTY,
        }
        assert errors == []
