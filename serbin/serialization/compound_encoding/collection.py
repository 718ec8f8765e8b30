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
A collection is basically any value that has a known size and is iterable.

Layout: [N: length prefix][value_0]...[value_N-1]

>>> import struct
>>> from serbin.serialization.encoding.utf8 import encode_utf8, decode_utf8
>>> se = Serializer.build_bytes_serializer()
>>> encode_collection(se, ['Dread', 'Fang'], encode_utf8)
>>> data = bytes(se.finalize())
>>> data == struct.pack('@N', 2) + struct.pack('@N', 5) + b'Dread' + struct.pack('@N', 4) + b'Fang'
True

When decoding, the builder can be any compatible collection, in the previous example a `list` was encoded, but when
decoding a `set` could be used, it only matters that the collection can be initialized with an `Iterable[T]`.

>>> de = Deserializer.build_bytes_deserializer(data)
>>> sorted(decode_collection(de, decode_utf8, set))
['Dread', 'Fang']
>>> de.finalize()
"""

from collections.abc import Collection, Iterable
from typing import Callable, TypeVar

from serbin.serialization import Deserializer, Serializer
from serbin.serialization.encoding.length import decode_length, encode_length

from . import Decoder, Encoder

T = TypeVar('T')
R = TypeVar('R', bound=Collection)


def encode_collection(serializer: Serializer, values: Collection[T], encoder: Encoder[T]) -> None:
    encode_length(serializer, len(values))
    for value in values:
        encoder(serializer, value)


def decode_collection(
    deserializer: Deserializer,
    decoder: Decoder[T],
    builder: Callable[[Iterable[T]], R],
) -> R:
    length = decode_length(deserializer)
    return builder(decoder(deserializer) for _ in range(length))
