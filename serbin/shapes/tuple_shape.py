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

from collections.abc import Iterable, Sequence

from typing_extensions import Self, override

from serbin.exception import UnsupportedTypeError
from serbin.serialization import Deserializer, Serializer
from serbin.serialization.compound_encoding.tuple import decode_tuple, encode_tuple
from serbin.serialization.encoding.length import decode_length, encode_length
from serbin.shapes.shape import Shape
from serbin.utils.typing import get_args, get_origin


# XXX: we can't usefully describe the tuple type
class TupleShape(Shape[tuple]):
    """ Represents tuple values, which can either be homogeneous-type variable size or heterogeneous-type fixed size.

    A fixed size tuple (which includes pairs) is just its items back-to-back, with no count. A variable size tuple is a
    sequence, with a count and the bulk path when available.
    """

    __slots__ = ('_is_hashable', '_varsize', '_args', '_bulk')

    _varsize: bool
    # lists are allowed in tuples and it's still "hashable" it just fails in runtime
    _args: tuple[Shape, ...]
    _bulk: bool

    def __init__(self, args: Shape | Iterable[Shape], *, bulk: bool = True) -> None:
        self._bulk = bulk
        if isinstance(args, Shape):
            self._varsize = True
            self._args = (args,)
            self._is_hashable = args.is_hashable()
        else:
            self._varsize = False
            self._args = tuple(args)
            for arg in self._args:
                assert isinstance(arg, Shape)
            self._is_hashable = all(arg_shape.is_hashable() for arg_shape in self._args)

    @override
    @classmethod
    def _from_type(cls, type_: type[tuple], /, *, type_map: Shape.TypeMap) -> Self:
        origin_type: type = get_origin(type_) or type_
        if not issubclass(origin_type, tuple):
            raise TypeError('expected tuple type')
        if not hasattr(type_, '__args__'):
            raise UnsupportedTypeError('expected tuple[<args...>], use tuple[()] for the empty tuple')
        args = get_args(type_)
        if args and args[-1] is Ellipsis:
            if len(args) != 2:
                raise UnsupportedTypeError('ellipsis only allowed with one type: tuple[T, ...]')
            arg, _ellipsis = args
            return cls(Shape.from_type(arg, type_map=type_map), bulk=type_map.bulk_copy)
        else:
            return cls([Shape.from_type(arg, type_map=type_map) for arg in args], bulk=type_map.bulk_copy)

    @override
    def fixed_size(self) -> int | None:
        if self._varsize:
            return None
        sizes = [arg.fixed_size() for arg in self._args]
        if any(size is None for size in sizes):
            return None
        return sum(size for size in sizes if size is not None)

    @override
    def children(self) -> tuple[Shape, ...]:
        return self._args

    @override
    def __repr__(self) -> str:
        if self._varsize:
            return f'{type(self).__name__}({self._args[0]!r}, ...)'
        return super().__repr__()

    @override
    def _check_value(self, value: tuple, /, *, deep: bool) -> None:
        if not isinstance(value, Sequence):
            raise TypeError('expected tuple-like')
        if not self._varsize and len(value) != len(self._args):
            raise TypeError(f'wrong tuple size: expected {len(self._args)}, got {len(value)}')
        if deep:
            if self._varsize:
                arg_shape, = self._args
                for i in value:
                    arg_shape._check_value(i, deep=True)
            else:
                for i, arg_shape in zip(value, self._args):
                    arg_shape._check_value(i, deep=True)

    @override
    def _serialize(self, serializer: Serializer, value: tuple, /) -> None:
        if self._varsize:
            encode_length(serializer, len(value))
            self._args[0].serialize_many(serializer, value, bulk=self._bulk)
        else:
            encode_tuple(serializer, tuple(value), tuple(i.serialize for i in self._args))

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> tuple:
        if self._varsize:
            count = decode_length(deserializer)
            return tuple(self._args[0].deserialize_many(deserializer, count, bulk=self._bulk))
        else:
            return decode_tuple(deserializer, tuple(i.deserialize for i in self._args))
