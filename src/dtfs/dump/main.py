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
Dump subcommand implementation.

Walks a device tree from its root and prints every node and property,
decoding each property with the type inference heuristics.
"""

import sys
from typing import Optional
import click

from ..exceptions import DtfsError, ParseError
from ..formatter import format_node, format_property
from ..models import PathType
from ..paths import read_property
from ..tree import walk
from ..utils import open_store, resolve_root


def print_tree(root: str, store) -> int:
    """
    Print every node and property under root.

    Entries that cannot be classified, listed or read are reported on
    stderr and skipped.

    Returns:
        Number of entries skipped because of errors

    Raises:
        DtfsError: If root itself cannot be listed
    """
    skipped = 0

    def report(error: DtfsError):
        nonlocal skipped
        skipped += 1
        click.echo(f"Warning: {error}", err=True)

    for entry in walk(root, store=store, onerror=report):
        full_path = entry.full_path
        if entry.kind is PathType.NODE:
            click.echo(format_node(full_path))
            continue

        try:
            data = read_property(full_path, store=store)
        except DtfsError as e:
            report(e)
            continue
        click.echo(format_property(full_path, data))

    return skipped


@click.command(name='dump')
@click.argument('root', required=False)
@click.option('--dtb', type=click.Path(dir_okay=False), help='Read a DTB file instead of the live tree')
@click.option('--strict', is_flag=True, help='Exit with an error if any entry was skipped')
def dump(root: Optional[str], dtb: Optional[str], strict: bool):
    """
    Print a device tree recursively.

    ROOT defaults to $DTFS_ROOT or /proc/device-tree, or to / with --dtb.

    Examples:

        dtfs dump
        dtfs dump /sys/firmware/devicetree/base
        dtfs dump --dtb board.dtb
    """
    try:
        store = open_store(dtb)
        base = resolve_root(root, dtb)
        skipped = print_tree(base, store)
    except ParseError as e:
        click.echo(f"Parse error: {e}", err=True)
        sys.exit(4)
    except DtfsError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except KeyboardInterrupt:
        click.echo("\nOperation cancelled", err=True)
        sys.exit(130)

    if strict and skipped:
        click.echo(f"{skipped} entries skipped", err=True)
        sys.exit(1)


if __name__ == '__main__':
    dump()
