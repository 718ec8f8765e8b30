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

from typing import Any, ClassVar, TypeVar

from typing_extensions import Self, override

from serbin.exception import UnsupportedTypeError
from serbin.serialization import Deserializer, Serializer
from serbin.serialization.compound_encoding.optional import decode_optional, encode_optional
from serbin.shapes.shape import Shape
from serbin.types import Shared, Unique, _Holder
from serbin.utils.typing import get_args, get_origin

T = TypeVar('T')


class _PointerShape(Shape[_Holder[T]]):
    """ Base class for ownership holders: a presence flag followed by the pointee, by value.

    The ownership kind is not on the wire, `Unique[T]` and `Shared[T]` produce the same bytes. A bare pointee (not
    wrapped in a holder) is accepted when encoding and treated as present, `None` is treated as empty.
    """

    __slots__ = ('_pointee',)

    _is_hashable = False
    # XXX: subclass must define this value:
    _holder_class: ClassVar[type[_Holder]]
    _pointee: Shape[T]

    def __init__(self, pointee: Shape[T]) -> None:
        self._pointee = pointee

    @override
    @classmethod
    def _from_type(cls, type_: type[_Holder[T]], /, *, type_map: Shape.TypeMap) -> Self:
        if get_origin(type_) is not cls._holder_class:
            raise TypeError(f'expected {cls._holder_class.__name__} type')
        args = get_args(type_)
        if len(args) != 1:
            raise UnsupportedTypeError(f'expected {cls._holder_class.__name__}[<type>]')
        pointee_type, = args
        return cls(Shape.from_type(pointee_type, type_map=type_map))

    @override
    def children(self) -> tuple[Shape, ...]:
        return (self._pointee,)

    def _get_pointee(self, value: Any) -> T | None:
        if isinstance(value, _Holder):
            return value.get()
        return value

    @override
    def _check_value(self, value: _Holder[T], /, *, deep: bool) -> None:
        pointee = self._get_pointee(value)
        if pointee is None:
            return
        if deep:
            self._pointee._check_value(pointee, deep=True)

    @override
    def _serialize(self, serializer: Serializer, value: _Holder[T], /) -> None:
        encode_optional(serializer, self._get_pointee(value), self._pointee.serialize)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> _Holder[T]:
        return self._holder_class(decode_optional(deserializer, self._pointee.deserialize))


class UniqueShape(_PointerShape[T]):
    """ Represents `Unique[T]` values.
    """
    _holder_class = Unique


class SharedShape(_PointerShape[T]):
    """ Represents `Shared[T]` values, each decoded holder gets its own copy of the pointee.
    """
    _holder_class = Shared
