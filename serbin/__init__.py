# Copyright 2025 Hathor Labs
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Binary serialization of typed Python values.

This module exports the types and functions that make up the public API, everything else is available from the
submodules.
"""

from serbin.codec import Reader, Writer, dump, dumps, load, loads
from serbin.exception import SerbinError, UnsupportedTypeError
from serbin.serialization import (
    BadDataError,
    ConstructionError,
    OutOfDataError,
    SerializationError,
    TrailingDataError,
    WriteError,
)
from serbin.serialization.adapters import MaxBytesExceededError
from serbin.shapes import Shape, make_shape
from serbin.types import (
    Array,
    Float32,
    Float64,
    Int8,
    Int16,
    Int32,
    Int64,
    Record,
    Shared,
    UInt8,
    UInt16,
    UInt32,
    UInt64,
    Unique,
    WideStr,
)
from serbin.version import __version__

__all__ = [
    'Array',
    'BadDataError',
    'ConstructionError',
    'Float32',
    'Float64',
    'Int8',
    'Int16',
    'Int32',
    'Int64',
    'MaxBytesExceededError',
    'OutOfDataError',
    'Reader',
    'Record',
    'SerbinError',
    'SerializationError',
    'Shape',
    'Shared',
    'TrailingDataError',
    'UInt8',
    'UInt16',
    'UInt32',
    'UInt64',
    'Unique',
    'UnsupportedTypeError',
    'WideStr',
    'WriteError',
    'Writer',
    '__version__',
    'dump',
    'dumps',
    'load',
    'loads',
    'make_shape',
]
