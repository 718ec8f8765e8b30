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
Encoding a mapping is equivalent to encoding a collection of 2-tuples.

Layout: [N: length prefix][key_0][value_0]...[key_N-1][value_N-1]

Entries are written in the mapping's iteration order. When decoding, if the same key shows up more than once the last
entry wins, which is what building a `dict` from pairs does.

>>> import struct
>>> from serbin.serialization.encoding.utf8 import encode_utf8, decode_utf8
>>> from serbin.serialization.encoding.bool import encode_bool, decode_bool
>>> se = Serializer.build_bytes_serializer()
>>> encode_mapping(se, {'Aurora': True, 'Club': False}, encode_utf8, encode_bool)
>>> data = bytes(se.finalize())
>>> data == (
...     struct.pack('@N', 2) +
...     struct.pack('@N', 6) + b'Aurora' + b'\x01' +
...     struct.pack('@N', 4) + b'Club' + b'\x00'
... )
True

>>> de = Deserializer.build_bytes_deserializer(data)
>>> decode_mapping(de, decode_utf8, decode_bool, dict)
{'Aurora': True, 'Club': False}
>>> de.finalize()
"""

from collections.abc import Iterable, Mapping
from typing import Callable, TypeVar

from serbin.serialization import Deserializer, Serializer
from serbin.serialization.encoding.length import decode_length, encode_length

from . import Decoder, Encoder

KT = TypeVar('KT')
VT = TypeVar('VT')
R = TypeVar('R', bound=Mapping)


def encode_mapping(
    serializer: Serializer,
    values_mapping: Mapping[KT, VT],
    key_encoder: Encoder[KT],
    value_encoder: Encoder[VT],
) -> None:
    encode_length(serializer, len(values_mapping))
    for key, value in values_mapping.items():
        key_encoder(serializer, key)
        value_encoder(serializer, value)


def decode_mapping(
    deserializer: Deserializer,
    key_decoder: Decoder[KT],
    value_decoder: Decoder[VT],
    mapping_builder: Callable[[Iterable[tuple[KT, VT]]], R],
) -> R:
    size = decode_length(deserializer)
    return mapping_builder(
        (key_decoder(deserializer), value_decoder(deserializer))
        for _ in range(size)
    )
