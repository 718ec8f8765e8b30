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
This module implements wide string encoding: strings stored the way the host's `wchar_t` stores them.

On most unix hosts `wchar_t` is 4 bytes (utf-32), on windows it is 2 bytes (utf-16). The length prefix counts wide
characters, so on a 2-byte host a character outside the BMP counts as 2.

>>> import struct
>>> se = Serializer.build_bytes_serializer()
>>> encode_wide(se, 'Fang')
>>> data = bytes(se.finalize())
>>> data == struct.pack('@N', 4) + 'Fang'.encode(WCHAR_CODEC)
True
>>> len(data) == LENGTH_PREFIX_SIZE + 4 * WCHAR_SIZE
True

>>> de = Deserializer.build_bytes_deserializer(data)
>>> decode_wide(de)
'Fang'
>>> de.finalize()
"""

from serbin.serialization import BadDataError, Deserializer, Serializer
from serbin.serialization.consts import LENGTH_PREFIX_SIZE, WCHAR_CODEC, WCHAR_SIZE  # noqa: F401

from .bytes import decode_bytes, encode_bytes


def encode_wide(serializer: Serializer, value: str) -> None:
    """ Encodes a string as host wide characters, adding a length prefix.
    """
    assert isinstance(value, str)
    data = value.encode(WCHAR_CODEC)
    encode_bytes(serializer, data, char_width=WCHAR_SIZE)


def decode_wide(deserializer: Deserializer) -> str:
    """ Decodes a host wide character string with a length prefix.
    """
    data = decode_bytes(deserializer, char_width=WCHAR_SIZE)
    try:
        return data.decode(WCHAR_CODEC)
    except UnicodeDecodeError as e:
        raise BadDataError('invalid wide string') from e
