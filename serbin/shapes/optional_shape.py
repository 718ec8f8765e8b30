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

from types import NoneType
from typing import TypeVar

from typing_extensions import Self, override

from serbin.exception import UnsupportedTypeError
from serbin.serialization import Deserializer, Serializer
from serbin.serialization.compound_encoding.optional import decode_optional, encode_optional
from serbin.shapes.shape import Shape
from serbin.shapes.utils import is_union
from serbin.utils.typing import get_args

V = TypeVar('V')


class OptionalShape(Shape[V | None]):
    """ Represents a value that is either `V` or `None`: a presence flag followed by the value when present.
    """

    __slots__ = ('_is_hashable', '_value')

    _value: Shape[V]

    def __init__(self, shape: Shape[V]) -> None:
        self._value = shape
        self._is_hashable = shape.is_hashable()

    @override
    @classmethod
    def _from_type(cls, type_: type[V | None], /, *, type_map: Shape.TypeMap) -> Self:
        if not is_union(type_):
            raise TypeError('expected type union')
        args = get_args(type_)
        assert args, 'union always has args'
        if len(args) != 2 or NoneType not in args:
            raise UnsupportedTypeError('type must be either `None | T` or `T | None`')
        not_none_type, = (arg for arg in args if arg is not NoneType)
        return cls(Shape.from_type(not_none_type, type_map=type_map))

    @override
    def children(self) -> tuple[Shape, ...]:
        return (self._value,)

    @override
    def _check_value(self, value: V | None, /, *, deep: bool) -> None:
        if value is None:
            return
        if deep:
            self._value._check_value(value, deep=True)

    @override
    def _serialize(self, serializer: Serializer, value: V | None, /) -> None:
        encode_optional(serializer, value, self._value.serialize)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> V | None:
        return decode_optional(deserializer, self._value.deserialize)
