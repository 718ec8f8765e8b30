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

r"""
This module implements encoding of fixed-size native values (integers, floats and booleans) using `struct`.

Values are written exactly as the host stores them in memory: native byte order, native size, no alignment padding.
The `format` parameter is a single struct format code (`'b'`, `'H'`, `'q'`, `'d'`, `'?'`, ...).

>>> se = Serializer.build_bytes_serializer()
>>> encode_native(se, 1234, format='h')
>>> encode_native(se, 0.5, format='d')
>>> bytes(se.finalize()) == struct.pack('=hd', 1234, 0.5)
True

>>> de = Deserializer.build_bytes_deserializer(struct.pack('=hd', -1234, 0.125))
>>> decode_native(de, format='h')
-1234
>>> decode_native(de, format='d')
0.125
>>> de.finalize()

Out of range values are rejected before anything is written:

>>> se = Serializer.build_bytes_serializer()
>>> try:
...     encode_native(se, 256, format='B')
... except ValueError as e:
...     print(*e.args)
256 cannot be encoded with format 'B'
>>> se.cur_pos()
0

Arrays of values with the same format can be processed in a single block, which is the bulk-copy path:

>>> se = Serializer.build_bytes_serializer()
>>> encode_native_array(se, [1, 2, 3], format='i', count=3)
>>> data = bytes(se.finalize())
>>> data == struct.pack('=3i', 1, 2, 3)
True
>>> de = Deserializer.build_bytes_deserializer(data)
>>> decode_native_array(de, format='i', count=3)
[(1,), (2,), (3,)]

A record-like format with multiple codes is also supported, each item is returned as a tuple:

>>> data = struct.pack('=fdfd', 1.0, 2.0, 3.0, 4.0)
>>> de = Deserializer.build_bytes_deserializer(data)
>>> decode_native_array(de, format='fd', count=2)
[(1.0, 2.0), (3.0, 4.0)]
"""

import struct
from collections.abc import Sequence
from functools import lru_cache
from typing import Any

from serbin.serialization import Deserializer, Serializer
from serbin.serialization.consts import NATIVE_BYTE_ORDER


@lru_cache(maxsize=None)
def _get_struct(format: str) -> struct.Struct:
    return struct.Struct(NATIVE_BYTE_ORDER + format)


def native_size(format: str) -> int:
    """ Size in bytes of a value (or record of values) with the given format.

    >>> native_size('b'), native_size('q'), native_size('?d')
    (1, 8, 9)
    """
    return _get_struct(format).size


def encode_native(serializer: Serializer, value: Any, *, format: str) -> None:
    """ Encode a single value using the given struct format code.

    This modules's docstring has more details and examples.
    """
    try:
        data = _get_struct(format).pack(value)
    except (struct.error, OverflowError) as e:
        # XXX: floats out of range raise OverflowError instead of struct.error
        raise ValueError(f'{value!r} cannot be encoded with format {format!r}') from e
    serializer.write_bytes(data)


def decode_native(deserializer: Deserializer, *, format: str) -> Any:
    """ Decode a single value using the given struct format code.

    This modules's docstring has more details and examples.
    """
    st = _get_struct(format)
    data = deserializer.read_bytes(st.size)
    value, = st.unpack(data)
    return value


def encode_native_array(serializer: Serializer, flat_values: Sequence[Any], *, format: str, count: int) -> None:
    """ Encode `count` items of the given format with a single write.

    The `flat_values` must hold `count * len(format)` values, already flattened in order.
    """
    if count == 0:
        return
    array_format = f'{count}{format}' if len(format) == 1 else format * count
    try:
        data = _get_struct(array_format).pack(*flat_values)
    except (struct.error, OverflowError) as e:
        raise ValueError(f'values cannot be encoded as {count} items of format {format!r}') from e
    serializer.write_bytes(data)


def decode_native_array(deserializer: Deserializer, *, format: str, count: int) -> list[tuple[Any, ...]]:
    """ Decode `count` items of the given format with a single read, each item is returned as a tuple.
    """
    if count == 0:
        return []
    st = _get_struct(format)
    data = deserializer.read_bytes(st.size * count)
    return list(st.iter_unpack(data))
