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
Exception classes for device tree filesystem access and property decoding.
"""


class DtfsError(Exception):
    """Base exception for all dtfs errors."""


class InvalidArgumentError(DtfsError, ValueError):
    """Raised when a caller passes an empty base path or an invalid buffer."""


class TreeIOError(OSError, DtfsError):
    """Raised when the backing store cannot stat, list or read a path."""


class PathNotFoundError(TreeIOError):
    """Raised when a composed path does not exist in the backing store."""


class PathTypeError(DtfsError):
    """Raised when a path is neither a node nor a property, or not the kind required."""


class TypeMismatchError(DtfsError, TypeError):
    """Raised when an accessor is used on a buffer of a different inferred type."""


class IndexOutOfRangeError(DtfsError, IndexError):
    """Raised when an element index exceeds the property's element count."""


class ParseError(DtfsError):
    """Raised when parsing a DTB blob fails."""
