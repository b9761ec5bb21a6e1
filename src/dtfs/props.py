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
Property type inference and typed element accessors.

Device tree properties carry no type information; the encoding is guessed
from the bytes alone, in this order:

1. Empty buffer: SIMPLE (a boolean flag property).
2. A table of NUL-terminated printable strings filling the buffer exactly:
   STRINGS, one element per string.
3. Length a multiple of 4: WORDS, one element per big-endian 32-bit cell.
   No content inspection is done, so any aligned non-string blob lands here.
4. Anything else: BYTES, one element per byte.

The accessors re-run the inference on every call instead of trusting a
caller-supplied type, so using the wrong accessor raises TypeMismatchError.
"""

import struct
from typing import List, Optional, Union

from .models import PropertyInfo, PropertyType
from .exceptions import InvalidArgumentError, IndexOutOfRangeError, TypeMismatchError

Buffer = Union[bytes, bytearray, memoryview]

WORD_SIZE = 4
_WORD = struct.Struct(">I")


def _view(data: Optional[Buffer], length: Optional[int]) -> bytes:
    """Return the first length bytes of data, validating the arguments."""
    if data is None:
        raise InvalidArgumentError("property buffer must not be None")
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise InvalidArgumentError(
            f"property buffer must be bytes-like, got {type(data).__name__}"
        )
    data = bytes(data)
    if length is None:
        return data
    if length < 0 or length > len(data):
        raise InvalidArgumentError(
            f"length {length} out of range for a {len(data)}-byte buffer"
        )
    return data[:length]


def _is_printable(byte: int) -> bool:
    # C-locale isprint()
    return 0x20 <= byte < 0x7f


def _scan_strings(data: bytes) -> Optional[List[bytes]]:
    """Split data into printable NUL-terminated runs, or None if it is not a string table."""
    if not data or data[-1] != 0:
        return None

    runs = []
    pos = 0
    end = len(data)
    while pos < end:
        start = pos
        while pos < end and data[pos] != 0 and _is_printable(data[pos]):
            pos += 1
        # Stopped on a non-printable byte, or an empty run
        if data[pos] != 0 or pos == start:
            return None
        runs.append(data[start:pos])
        pos += 1
    return runs


def is_printable_string(data: Buffer, length: Optional[int] = None) -> bool:
    """Return True if the buffer is a valid table of printable NUL-terminated strings."""
    return _scan_strings(_view(data, length)) is not None


def get_prop_type(data: Buffer, length: Optional[int] = None) -> PropertyInfo:
    """
    Infer the encoding of a property buffer.

    Args:
        data: Raw property bytes
        length: Number of bytes of data to consider, defaults to all of it

    Returns:
        PropertyInfo with the type and element count (None for SIMPLE)
    """
    buf = _view(data, length)

    if len(buf) == 0:
        return PropertyInfo(PropertyType.SIMPLE)

    runs = _scan_strings(buf)
    if runs is not None:
        return PropertyInfo(PropertyType.STRINGS, len(runs))

    if len(buf) % WORD_SIZE == 0:
        return PropertyInfo(PropertyType.WORDS, len(buf) // WORD_SIZE)

    return PropertyInfo(PropertyType.BYTES, len(buf))


def _require(info: PropertyInfo, expected: PropertyType):
    if info.type is not expected:
        raise TypeMismatchError(
            f"property is {info.type.value}, not {expected.value}"
        )


def get_word(data: Buffer, n: int, length: Optional[int] = None) -> int:
    """
    Get the n-th 32-bit cell of a WORDS property, converted from big-endian.

    Raises:
        TypeMismatchError: If the buffer is not WORDS
        IndexOutOfRangeError: If (n + 1) * 4 exceeds the buffer length
    """
    buf = _view(data, length)
    _require(get_prop_type(buf), PropertyType.WORDS)

    if n < 0 or (n + 1) * WORD_SIZE > len(buf):
        raise IndexOutOfRangeError(
            f"word index {n} out of range for {len(buf) // WORD_SIZE} words"
        )
    return _WORD.unpack_from(buf, n * WORD_SIZE)[0]


def get_string(data: Buffer, n: int, length: Optional[int] = None) -> str:
    """
    Get the n-th string of a STRINGS property, without its terminator.

    Raises:
        TypeMismatchError: If the buffer is not STRINGS
        IndexOutOfRangeError: If n is not below the string count
    """
    buf = _view(data, length)
    runs = _scan_strings(buf)
    if runs is None:
        _require(get_prop_type(buf), PropertyType.STRINGS)

    if n < 0 or n >= len(runs):
        raise IndexOutOfRangeError(
            f"string index {n} out of range for {len(runs)} strings"
        )
    return runs[n].decode("ascii")


def get_words(data: Buffer, length: Optional[int] = None) -> List[int]:
    """Return every cell of a WORDS property."""
    buf = _view(data, length)
    info = get_prop_type(buf)
    _require(info, PropertyType.WORDS)
    return [value for (value,) in _WORD.iter_unpack(buf)]


def get_strings(data: Buffer, length: Optional[int] = None) -> List[str]:
    """Return every string of a STRINGS property."""
    buf = _view(data, length)
    runs = _scan_strings(buf)
    if runs is None:
        _require(get_prop_type(buf), PropertyType.STRINGS)
    return [run.decode("ascii") for run in runs]
