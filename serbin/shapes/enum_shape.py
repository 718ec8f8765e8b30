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

from enum import IntEnum
from typing import TypeVar

from typing_extensions import Self, override

from serbin.serialization import BadDataError, Deserializer, Serializer
from serbin.serialization.encoding.native import decode_native, encode_native, native_size
from serbin.shapes.shape import Shape
from serbin.utils.typing import is_subclass

T = TypeVar('T', bound=IntEnum)

_ENUM_FORMAT = 'i'


class IntEnumShape(Shape[T]):
    """Shape for IntEnum subclasses, stored as a 32-bit signed integer.

    Unlike plain integers, the value read is validated against the enum members.
    """

    _is_hashable = True

    def __init__(self, enum_class: type[T]) -> None:
        self.enum_class = enum_class

    @override
    @classmethod
    def _from_type(cls, type_: type[T], /, *, type_map: Shape.TypeMap) -> Self:
        if not is_subclass(type_, IntEnum):
            raise TypeError('expected IntEnum subclass')
        return cls(type_)

    @override
    def fixed_size(self) -> int:
        return native_size(_ENUM_FORMAT)

    @override
    def __repr__(self) -> str:
        return f'{type(self).__name__}[{self.enum_class.__name__}]()'

    @override
    def _check_value(self, value: T, /, *, deep: bool) -> None:
        if not isinstance(value, self.enum_class):
            raise TypeError(f'expected {self.enum_class.__name__}')

    @override
    def _serialize(self, serializer: Serializer, value: T, /) -> None:
        encode_native(serializer, int(value), format=_ENUM_FORMAT)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> T:
        int_value = decode_native(deserializer, format=_ENUM_FORMAT)
        try:
            return self.enum_class(int_value)
        except ValueError as e:
            raise BadDataError(f'invalid {self.enum_class.__name__} value: {int_value}') from e
