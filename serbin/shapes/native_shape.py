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

from serbin.serialization import Deserializer, Serializer
from serbin.serialization.encoding.native import decode_native, encode_native, native_size
from serbin.shapes.shape import Shape
from serbin.utils.typing import is_subclass

N = TypeVar('N', int, float, bool)


class _NativeShape(Shape[N]):
    """ Base class for fixed-width values that are copied exactly as the host stores them.

    These are the building blocks of the bulk path: they are always trivially copyable.
    """

    _is_hashable = True
    # XXX: subclass must define these values:
    _format: ClassVar[str]
    _base_type: ClassVar[type]

    @override
    @classmethod
    def _from_type(cls, type_: type[N], /, *, type_map: Shape.TypeMap) -> Self:
        if not is_subclass(type_, cls._base_type):
            raise TypeError(f'expected {cls._base_type.__name__} type')
        return cls()

    @property
    @override
    def struct_format(self) -> str:
        return self._format

    @override
    def fixed_size(self) -> int:
        return native_size(self._format)

    @override
    def _serialize(self, serializer: Serializer, value: N, /) -> None:
        encode_native(serializer, value, format=self._format)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> N:
        return decode_native(deserializer, format=self._format)

    @override
    def _flatten(self, value: N, /) -> tuple[Any, ...]:
        return (value,)

    @override
    def _unflatten(self, items: tuple[Any, ...], /) -> N:
        value, = items
        return value


class _NativeIntShape(_NativeShape[int]):
    """ Base class for classes that represent builtin `int` values with a fixed size and signedness.
    """

    _base_type = int
    # XXX: subclass must define these values:
    _signed: ClassVar[bool]

    @classmethod
    def _upper_bound_value(cls) -> int:
        bits = native_size(cls._format) * 8
        if cls._signed:
            return 2**(bits - 1) - 1
        else:
            return 2**bits - 1

    @classmethod
    def _lower_bound_value(cls) -> int:
        bits = native_size(cls._format) * 8
        if cls._signed:
            return -(2**(bits - 1))
        else:
            return 0

    @override
    def _check_value(self, value: int, /, *, deep: bool) -> None:
        # XXX: bool is a subclass of int, but it has its own shape
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError('expected integer')
        if value > self._upper_bound_value():
            raise ValueError(f'{value} is above upper bound')
        if value < self._lower_bound_value():
            raise ValueError(f'{value} is below lower bound')


class Int8Shape(_NativeIntShape):
    _format = 'b'
    _signed = True


class Int16Shape(_NativeIntShape):
    _format = 'h'
    _signed = True


class Int32Shape(_NativeIntShape):
    _format = 'i'
    _signed = True


class Int64Shape(_NativeIntShape):
    _format = 'q'
    _signed = True


class UInt8Shape(_NativeIntShape):
    _format = 'B'
    _signed = False


class UInt16Shape(_NativeIntShape):
    _format = 'H'
    _signed = False


class UInt32Shape(_NativeIntShape):
    _format = 'I'
    _signed = False


class UInt64Shape(_NativeIntShape):
    _format = 'Q'
    _signed = False


class _NativeFloatShape(_NativeShape[float]):
    """ Base class for IEEE-754 floats, ints are accepted when encoding and always decoded as `float`.
    """

    _base_type = float

    @override
    def _check_value(self, value: float, /, *, deep: bool) -> None:
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            raise TypeError('expected float')


class Float32Shape(_NativeFloatShape):
    _format = 'f'


class Float64Shape(_NativeFloatShape):
    _format = 'd'


class BoolShape(_NativeShape[bool]):
    """ Represents builtin `bool` values as data, using one byte.

    Unlike presence flags, a bool read as data is not validated: any non-zero byte is `True`.
    """

    _format = '?'
    _base_type = bool

    @override
    @classmethod
    def _from_type(cls, type_: type[bool], /, *, type_map: Shape.TypeMap) -> Self:
        if type_ is not bool:
            raise TypeError('expected bool type')
        return cls()

    @override
    def _check_value(self, value: bool, /, *, deep: bool) -> None:
        if not isinstance(value, bool):
            raise TypeError('expected boolean')
