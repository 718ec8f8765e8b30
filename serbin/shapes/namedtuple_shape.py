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

from collections.abc import Iterable
from typing import NamedTuple, TypeVar, get_type_hints

from typing_extensions import Self, override

from serbin.serialization import Deserializer, Serializer
from serbin.serialization.compound_encoding.tuple import decode_tuple, encode_tuple
from serbin.shapes.shape import Shape

N = TypeVar('N', bound=tuple)


class NamedTupleShape(Shape[N]):
    """ Represents `typing.NamedTuple` subclasses, encoded exactly like a fixed size tuple of its fields.
    """

    __slots__ = ('_is_hashable', '_args', '_actual_type')

    _args: tuple[Shape, ...]
    _actual_type: type[N]

    def __init__(self, namedtuple: type[N], args: Iterable[Shape]) -> None:
        self._actual_type = namedtuple
        self._args = tuple(args)
        self._is_hashable = all(arg_shape.is_hashable() for arg_shape in self._args)

    @override
    @classmethod
    def _from_type(cls, type_: type[N], /, *, type_map: Shape.TypeMap) -> Self:
        if not issubclass(type_, tuple) or NamedTuple not in getattr(type_, '__orig_bases__', tuple()):
            raise TypeError('expected NamedTuple type')
        hints = get_type_hints(type_)
        args = [hints[field_name] for field_name in type_._fields]  # type: ignore[attr-defined]
        return cls(type_, (Shape.from_type(arg, type_map=type_map) for arg in args))

    @override
    def fixed_size(self) -> int | None:
        sizes = [arg.fixed_size() for arg in self._args]
        if any(size is None for size in sizes):
            return None
        return sum(size for size in sizes if size is not None)

    @override
    def children(self) -> tuple[Shape, ...]:
        return self._args

    @override
    def __repr__(self) -> str:
        args = ', '.join(repr(arg) for arg in self._args)
        return f'{type(self).__name__}[{self._actual_type.__name__}]({args})'

    @override
    def _check_value(self, value: N, /, *, deep: bool) -> None:
        if not isinstance(value, tuple):
            raise TypeError('expected tuple or namedtuple')
        if len(value) != len(self._args):
            raise TypeError('wrong number of fields')
        if deep:
            for i, arg_shape in zip(value, self._args):
                arg_shape._check_value(i, deep=True)

    @override
    def _serialize(self, serializer: Serializer, value: N, /) -> None:
        encode_tuple(serializer, value, tuple(i.serialize for i in self._args))

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> N:
        return self._actual_type(*decode_tuple(deserializer, tuple(i.deserialize for i in self._args)))
