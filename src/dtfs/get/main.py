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
Get subcommand implementation.

Prints a single property, either fully decoded, as raw hex, or one element
selected by index.
"""

import sys
from typing import Optional
import click

from ..exceptions import (
    DtfsError, IndexOutOfRangeError, ParseError, PathNotFoundError, TypeMismatchError
)
from ..formatter import format_property, format_raw
from ..models import PropertyType
from ..paths import concat_path, read_property
from ..props import get_prop_type, get_string, get_word
from ..utils import open_store, resolve_root


def format_element(data: bytes, index: int) -> str:
    """
    Render element index of a property according to its inferred type.

    Raises:
        TypeMismatchError: If the property is SIMPLE and has no elements
        IndexOutOfRangeError: If index is beyond the element count
    """
    info = get_prop_type(data)

    if info.type is PropertyType.STRINGS:
        return get_string(data, index)
    if info.type is PropertyType.WORDS:
        return f"0x{get_word(data, index):08X}"
    if info.type is PropertyType.BYTES:
        if index < 0 or index >= info.count:
            raise IndexOutOfRangeError(
                f"byte index {index} out of range for {info.count} bytes"
            )
        return f"0x{data[index]:02x}"

    raise TypeMismatchError("property is simple and has no elements")


@click.command(name='get')
@click.argument('path')
@click.option('--root', '-r', help='Tree root PATH is relative to')
@click.option('--dtb', type=click.Path(dir_okay=False), help='Read a DTB file instead of the live tree')
@click.option('--raw', is_flag=True, help='Print raw bytes as hex (not with --index)')
@click.option('--index', '-n', type=int, help='Print only element N')
def get(path: str, root: Optional[str], dtb: Optional[str], raw: bool, index: Optional[int]):
    """
    Print one property of a device tree.

    PATH is relative to the tree root, e.g. "cpus/cpu@0/reg".

    Examples:

        dtfs get compatible
        dtfs get cpus/cpu@0/reg --index 0
        dtfs get --dtb board.dtb model --raw
    """
    if raw and index is not None:
        raise click.UsageError("--raw and --index cannot be used together")

    try:
        store = open_store(dtb)
        base = resolve_root(root, dtb)
        full_path = concat_path(base, path)
        data = read_property(full_path, store=store)

        if index is not None:
            click.echo(format_element(data, index))
        elif raw:
            click.echo(format_raw(data))
        else:
            click.echo(format_property(full_path, data))

    except ParseError as e:
        click.echo(f"Parse error: {e}", err=True)
        sys.exit(4)
    except PathNotFoundError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(3)
    except DtfsError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == '__main__':
    get()
