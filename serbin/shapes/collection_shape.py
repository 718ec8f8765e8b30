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

from abc import ABC, abstractmethod
from collections import deque
from collections.abc import Collection, Hashable, Iterable, Set
from typing import TypeVar

from typing_extensions import Self, override

from serbin.exception import UnsupportedTypeError
from serbin.serialization import Deserializer, Serializer
from serbin.serialization.compound_encoding.collection import decode_collection, encode_collection
from serbin.serialization.encoding.length import decode_length, encode_length
from serbin.shapes.shape import Shape
from serbin.shapes.utils import is_origin_hashable
from serbin.utils.typing import get_args, get_origin

T = TypeVar('T')
H = TypeVar('H', bound=Hashable)


class _CollectionShape(Shape[Collection[T]], ABC):
    """ Used as base for Shape classes that represent variable size collections: a count followed by the items.
    """
    __slots__ = ('_item',)

    _is_hashable = False
    _item: Shape[T]

    def __init__(self, item_shape: Shape[T], /) -> None:
        self._item = item_shape

    @abstractmethod
    def _build(self, items: Iterable[T]) -> Collection[T]:
        """ How to build the concrete collection from an iterable of items.
        """
        raise NotImplementedError

    @override
    @classmethod
    def _from_type(cls, type_: type[Collection[T]], /, *, type_map: Shape.TypeMap) -> Self:
        member_type = cls._get_member_type(type_)
        member_shape = Shape.from_type(member_type, type_map=type_map)
        return cls._build_shape(member_shape, type_map=type_map)

    @classmethod
    def _build_shape(cls, member_shape: Shape[T], /, *, type_map: Shape.TypeMap) -> Self:
        return cls(member_shape)

    @classmethod
    def _get_member_type(cls, type_: type[Collection[T]]) -> type[T]:
        origin_type: type = get_origin(type_) or type_
        if not issubclass(origin_type, Collection):
            raise TypeError('expected Collection type')
        args = get_args(type_)
        if not args or len(args) != 1:
            raise UnsupportedTypeError(f'expected {origin_type.__name__}[<type>]')
        return args[0]

    @override
    def children(self) -> tuple[Shape, ...]:
        return (self._item,)

    def _check_item(self, item: T) -> None:
        self._item._check_value(item, deep=True)

    @override
    def _check_value(self, value: Collection[T], /, *, deep: bool) -> None:
        if not isinstance(value, Collection):
            raise TypeError('expected Collection type')
        if deep:
            for i in value:
                self._check_item(i)

    @override
    def _serialize(self, serializer: Serializer, value: Collection[T], /) -> None:
        encode_collection(serializer, value, self._item.serialize)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> Collection[T]:
        return decode_collection(
            deserializer,
            self._item.deserialize,
            self._build,
        )


class _SequenceShape(_CollectionShape[T]):
    """ Base for ordered sequences, these use the bulk path when the item shape is trivially copyable.
    """
    __slots__ = ('_bulk',)

    _bulk: bool

    def __init__(self, item_shape: Shape[T], /, *, bulk: bool = True) -> None:
        super().__init__(item_shape)
        self._bulk = bulk

    @override
    @classmethod
    def _build_shape(cls, member_shape: Shape[T], /, *, type_map: Shape.TypeMap) -> Self:
        return cls(member_shape, bulk=type_map.bulk_copy)

    @override
    def _serialize(self, serializer: Serializer, value: Collection[T], /) -> None:
        encode_length(serializer, len(value))
        self._item.serialize_many(serializer, value, bulk=self._bulk)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> Collection[T]:
        count = decode_length(deserializer)
        return self._build(self._item.deserialize_many(deserializer, count, bulk=self._bulk))


class ListShape(_SequenceShape[T]):
    """ Represents builtin `list` values.
    """

    @override
    def _build(self, items: Iterable[T]) -> list[T]:
        return list(items)


class DequeShape(_SequenceShape[T]):
    """ Represents builtin `collections.deque` values.
    """

    @override
    def _build(self, items: Iterable[T]) -> deque[T]:
        return deque(items)


class SetShape(_CollectionShape[H]):
    """ Represents builtin `set` values.

    Items are written in the set's iteration order, when decoding they are inserted one by one so duplicates collapse.
    """

    @override
    def _build(self, items: Iterable[H]) -> Set[H]:
        return set(items)

    @override
    @classmethod
    def _get_member_type(cls, type_: type[Collection[T]]) -> type[T]:
        member_type = super()._get_member_type(type_)
        if not is_origin_hashable(member_type):
            raise UnsupportedTypeError(f'{member_type} is not hashable')
        return member_type

    @override
    @classmethod
    def _build_shape(cls, member_shape: Shape[T], /, *, type_map: Shape.TypeMap) -> Self:
        if not member_shape.is_hashable():
            raise UnsupportedTypeError(f'{member_shape} does not produce hashable values')
        return cls(member_shape)

    @override
    def _check_item(self, item: H) -> None:
        if not isinstance(item, Hashable):
            raise TypeError('expected Hashable type')
        super()._check_item(item)


class FrozenSetShape(SetShape[H]):
    """ Represents builtin `frozenset` values.
    """

    # XXX: SetShape already enforces H to be hashable, but is not itself hashable, a frozenset, however, is hashable
    _is_hashable = True

    @override
    def _build(self, items: Iterable[H]) -> frozenset[H]:
        return frozenset(items)
