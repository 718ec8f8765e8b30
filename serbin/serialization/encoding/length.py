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
This module implements the length prefix used by every variable-size value.

The length is a native unsigned machine word (`size_t`), so it is 8 bytes on 64-bit hosts and 4 bytes on 32-bit
hosts, in the host's byte order.

>>> se = Serializer.build_bytes_serializer()
>>> encode_length(se, 3)
>>> data = bytes(se.finalize())
>>> data == struct.pack('@N', 3)
True
>>> len(data) == LENGTH_PREFIX_SIZE
True

>>> de = Deserializer.build_bytes_deserializer(data)
>>> decode_length(de)
3
>>> de.finalize()

>>> se = Serializer.build_bytes_serializer()
>>> try:
...     encode_length(se, -1)
... except ValueError as e:
...     print(*e.args)
length cannot be negative
"""

import struct

from serbin.serialization import Deserializer, Serializer
from serbin.serialization.consts import LENGTH_PREFIX_FORMAT, LENGTH_PREFIX_SIZE

_LENGTH_STRUCT = struct.Struct(LENGTH_PREFIX_FORMAT)
MAX_LENGTH = 2 ** (8 * LENGTH_PREFIX_SIZE) - 1


def encode_length(serializer: Serializer, length: int) -> None:
    """ Encode a non-negative element count as a native machine word.
    """
    if length < 0:
        raise ValueError('length cannot be negative')
    if length > MAX_LENGTH:
        raise ValueError(f'length {length} does not fit in {LENGTH_PREFIX_SIZE} bytes')
    serializer.write_bytes(_LENGTH_STRUCT.pack(length))


def decode_length(deserializer: Deserializer) -> int:
    """ Decode an element count written by `encode_length`.
    """
    data = deserializer.read_bytes(LENGTH_PREFIX_SIZE)
    length, = _LENGTH_STRUCT.unpack(data)
    return length
