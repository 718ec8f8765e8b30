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

from __future__ import annotations

from typing import ClassVar

from typing_extensions import Self, override

from serbin.serialization import Deserializer, Serializer
from serbin.serialization.encoding.bytes import decode_bytes, encode_bytes
from serbin.serialization.encoding.utf8 import decode_utf8, encode_utf8
from serbin.serialization.encoding.wide import decode_wide, encode_wide
from serbin.shapes.shape import Shape
from serbin.types import WideStr


class StrShape(Shape[str]):
    """ Represents builtin `str` values, stored as utf-8 with a count of utf-8 bytes.
    """

    _is_hashable = True

    @override
    @classmethod
    def _from_type(cls, type_: type[str], /, *, type_map: Shape.TypeMap) -> Self:
        if type_ is not str:
            raise TypeError('expected str type')
        return cls()

    @override
    def _check_value(self, value: str, /, *, deep: bool) -> None:
        if not isinstance(value, str):
            raise TypeError('expected str type')

    @override
    def _serialize(self, serializer: Serializer, value: str, /) -> None:
        encode_utf8(serializer, value)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> str:
        return decode_utf8(deserializer)


class WideStrShape(Shape[str]):
    """ Represents `WideStr` values, stored as host `wchar_t` characters with a count of characters.
    """

    _is_hashable = True

    @override
    @classmethod
    def _from_type(cls, type_: type[str], /, *, type_map: Shape.TypeMap) -> Self:
        if type_ is not WideStr:
            raise TypeError('expected WideStr type')
        return cls()

    @override
    def _check_value(self, value: str, /, *, deep: bool) -> None:
        if not isinstance(value, str):
            raise TypeError('expected str type')

    @override
    def _serialize(self, serializer: Serializer, value: str, /) -> None:
        encode_wide(serializer, value)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> str:
        return WideStr(decode_wide(deserializer))


class BytesShape(Shape[bytes]):
    """ Represents builtin `bytes` values, `bytearray` values are also accepted when encoding.
    """

    _is_hashable = True
    _accepted_types: ClassVar[tuple[type, ...]] = (bytes, bytearray, memoryview)

    @override
    @classmethod
    def _from_type(cls, type_: type[bytes], /, *, type_map: Shape.TypeMap) -> Self:
        if type_ is not bytes:
            raise TypeError('expected bytes type')
        return cls()

    @override
    def _check_value(self, value: bytes, /, *, deep: bool) -> None:
        if not isinstance(value, self._accepted_types):
            raise TypeError('expected bytes type')

    @override
    def _serialize(self, serializer: Serializer, value: bytes, /) -> None:
        encode_bytes(serializer, value)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> bytes:
        return decode_bytes(deserializer)
