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
This module implements encoding of a character sequence: the character count followed by the raw character data.

Layout: [N: length prefix][N * char_width bytes]

The count is in characters, not bytes, so for a `char_width` of 2 the payload is twice the prefix value.

>>> import struct
>>> se = Serializer.build_bytes_serializer()
>>> encode_bytes(se, b'test')
>>> data = bytes(se.finalize())
>>> data == struct.pack('@N', 4) + b'test'
True

>>> de = Deserializer.build_bytes_deserializer(data)
>>> decode_bytes(de)
b'test'
>>> de.finalize()

>>> se = Serializer.build_bytes_serializer()
>>> encode_bytes(se, b'\x00a\x00b', char_width=2)
>>> bytes(se.finalize()) == struct.pack('@N', 2) + b'\x00a\x00b'
True

A payload that is not a whole number of characters cannot be encoded:

>>> se = Serializer.build_bytes_serializer()
>>> try:
...     encode_bytes(se, b'abc', char_width=2)
... except ValueError as e:
...     print(*e.args)
3 bytes is not a multiple of the character width 2

A truncated payload is detected:

>>> de = Deserializer.build_bytes_deserializer(struct.pack('@N', 10) + b'short')
>>> try:
...     decode_bytes(de)
... except OutOfDataError as e:
...     print(*e.args)
not enough bytes to read
"""

from serbin.serialization import Deserializer, OutOfDataError, Serializer  # noqa: F401
from serbin.serialization.types import Buffer

from .length import decode_length, encode_length


def encode_bytes(serializer: Serializer, data: Buffer, *, char_width: int = 1) -> None:
    """ Encodes a character sequence adding a length prefix that counts characters.

    This modules's docstring has more details and examples.
    """
    view = memoryview(data)
    size = view.nbytes
    if size % char_width:
        raise ValueError(f'{size} bytes is not a multiple of the character width {char_width}')
    encode_length(serializer, size // char_width)
    serializer.write_bytes(view)


def decode_bytes(deserializer: Deserializer, *, char_width: int = 1) -> bytes:
    """ Decodes a character sequence with a length prefix that counts characters.

    This modules's docstring has more details and examples.
    """
    count = decode_length(deserializer)
    return bytes(deserializer.read_bytes(count * char_width))
