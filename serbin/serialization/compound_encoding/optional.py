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
An optional value is encoded as a presence flag followed by the value when present.

Layout:

    [0x00] when None
    [0x01][value] when not None

>>> from serbin.serialization.encoding.native import encode_native, decode_native
>>> def encode_int(se, v): encode_native(se, v, format='i')
>>> def decode_int(de): return decode_native(de, format='i')
>>> se = Serializer.build_bytes_serializer()
>>> encode_optional(se, None, encode_int)
>>> encode_optional(se, 456, encode_int)
>>> data = bytes(se.finalize())
>>> data[:2]
b'\x00\x01'
>>> len(data)
6

>>> de = Deserializer.build_bytes_deserializer(data)
>>> str(decode_optional(de, decode_int))
'None'
>>> decode_optional(de, decode_int)
456
>>> de.finalize()

A flag byte other than 0 or 1 is rejected:

>>> de = Deserializer.build_bytes_deserializer(b'\x07')
>>> decode_optional(de, decode_int)
Traceback (most recent call last):
...
serbin.serialization.exceptions.BadDataError: b'\x07' is not a valid presence flag
"""

from typing import Optional, TypeVar

from serbin.serialization import Deserializer, Serializer
from serbin.serialization.encoding.bool import decode_bool, encode_bool

from . import Decoder, Encoder

T = TypeVar('T')


def encode_optional(serializer: Serializer, value: Optional[T], encoder: Encoder[T]) -> None:
    if value is None:
        encode_bool(serializer, False)
    else:
        encode_bool(serializer, True)
        encoder(serializer, value)


def decode_optional(deserializer: Deserializer, decoder: Decoder[T]) -> Optional[T]:
    has_value = decode_bool(deserializer)
    if has_value:
        return decoder(deserializer)
    else:
        return None
