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
This module implements utf-8 string encoding with a length prefix.

It works exactly like bytes-encoding but the encoded byte-sequence is utf-8 and it takes/returns a `str`. The prefix
counts utf-8 code units, which are bytes.

>>> import struct
>>> se = Serializer.build_bytes_serializer()
>>> encode_utf8(se, 'Aurora')
>>> encode_utf8(se, 'π')
>>> data = bytes(se.finalize())
>>> data == struct.pack('@N', 6) + b'Aurora' + struct.pack('@N', 2) + b'\xcf\x80'
True

>>> de = Deserializer.build_bytes_deserializer(data)
>>> decode_utf8(de)
'Aurora'
>>> decode_utf8(de)
'π'
>>> de.finalize()

>>> de = Deserializer.build_bytes_deserializer(struct.pack('@N', 1) + b'\xff')
>>> try:
...     decode_utf8(de)
... except BadDataError as e:
...     print(*e.args)
invalid utf-8 string
"""

from serbin.serialization import BadDataError, Deserializer, Serializer

from .bytes import decode_bytes, encode_bytes


def encode_utf8(serializer: Serializer, value: str) -> None:
    """ Encodes a string using UTF-8 and adding a length prefix.

    This modules's docstring has more details and examples.
    """
    assert isinstance(value, str)
    data = value.encode('utf-8')
    encode_bytes(serializer, data)


def decode_utf8(deserializer: Deserializer) -> str:
    """ Decodes a UTF-8 string with a length prefix.

    This modules's docstring has more details and examples.
    """
    data = decode_bytes(deserializer)
    try:
        return data.decode('utf-8')
    except UnicodeDecodeError as e:
        raise BadDataError('invalid utf-8 string') from e
