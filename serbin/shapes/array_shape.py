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

from collections.abc import Sequence
from typing import TypeVar

from typing_extensions import Self, override

from serbin.exception import UnsupportedTypeError
from serbin.serialization import Deserializer, Serializer
from serbin.shapes.shape import Shape
from serbin.types import Array
from serbin.utils.typing import get_args, get_origin

T = TypeVar('T')


class ArrayShape(Shape[Array]):
    """ Represents `Array[T, N]` values: exactly N items and no count, the length is part of the type.

    Any sequence with the right length is accepted when encoding, decoding always produces an `Array[T, N]`.
    """

    __slots__ = ('_item', '_size', '_bulk', '_array_type')

    _is_hashable = False
    _item: Shape
    _size: int
    _bulk: bool
    _array_type: type[Array]

    def __init__(self, item_shape: Shape, size: int, /, *, array_type: type[Array], bulk: bool = True) -> None:
        self._item = item_shape
        self._size = size
        self._array_type = array_type
        self._bulk = bulk

    @override
    @classmethod
    def _from_type(cls, type_: type[Array], /, *, type_map: Shape.TypeMap) -> Self:
        if get_origin(type_) is not Array:
            raise TypeError('expected Array type')
        args = get_args(type_)
        if len(args) != 2:
            raise UnsupportedTypeError('expected Array[<type>, <length>]')
        item_type, size = args
        item_shape = Shape.from_type(item_type, type_map=type_map)
        return cls(item_shape, size, array_type=type_, bulk=type_map.bulk_copy)

    @override
    def fixed_size(self) -> int | None:
        item_size = self._item.fixed_size()
        if item_size is None:
            return None
        return item_size * self._size

    @override
    def children(self) -> tuple[Shape, ...]:
        return (self._item,)

    @override
    def __repr__(self) -> str:
        return f'{type(self).__name__}({self._item!r}, {self._size})'

    @override
    def _check_value(self, value: Array, /, *, deep: bool) -> None:
        if not isinstance(value, Sequence):
            raise TypeError('expected Sequence type')
        if len(value) != self._size:
            raise TypeError(f'expected {self._size} items, got {len(value)}')
        if deep:
            for i in value:
                self._item._check_value(i, deep=True)

    @override
    def _serialize(self, serializer: Serializer, value: Array, /) -> None:
        self._item.serialize_many(serializer, value, bulk=self._bulk)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> Array:
        return self._array_type(self._item.deserialize_many(deserializer, self._size, bulk=self._bulk))
