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
from typing import TYPE_CHECKING, Any, Generic, Iterable, NewType, TypeVar

from serbin.utils.typing import ParametrizedMixin, get_args

if TYPE_CHECKING:
    from serbin.codec import Reader, Writer

# Fixed-width numbers, to be used in annotations. Plain `int` and `float` are treated as `Int64` and `Float64`.
Int8 = NewType('Int8', int)
Int16 = NewType('Int16', int)
Int32 = NewType('Int32', int)
Int64 = NewType('Int64', int)
UInt8 = NewType('UInt8', int)
UInt16 = NewType('UInt16', int)
UInt32 = NewType('UInt32', int)
UInt64 = NewType('UInt64', int)
Float32 = NewType('Float32', float)
Float64 = NewType('Float64', float)

# A string stored with the host's wide characters instead of utf-8.
WideStr = NewType('WideStr', str)

T = TypeVar('T')


class Array(ParametrizedMixin, list):
    """A list with a length that is part of its type: `Array[T, N]` always holds exactly N items of type T.

    The length is known by both ends, so it is never written to the stream.

    >>> Array[int, 3]([1, 2, 3])
    [1, 2, 3]
    >>> Array[int, 3]([1, 2])
    Traceback (most recent call last):
    ...
    ValueError: Array[...] expected 3 items, got 2
    >>> Array[int, 3]([1, 2, 3]) == [1, 2, 3]
    True
    """

    @classmethod
    def __check_params__(cls, args: tuple[Any, ...], /) -> tuple[Any, ...]:
        if len(args) != 2:
            raise TypeError(f'{cls.__name__}[...] expects 2 arguments (item type and length); got {len(args)}')
        _item_type, size = args
        if not isinstance(size, int) or isinstance(size, bool) or size < 0:
            raise TypeError(f'{cls.__name__}[...] length must be a non-negative int, got {size!r}')
        return args

    def __init__(self, iterable: Iterable[Any] = (), /) -> None:
        super().__init__(iterable)
        args = get_args(type(self))
        if args and len(self) != args[1]:
            raise ValueError(f'{type(self).__name__}[...] expected {args[1]} items, got {len(self)}')


class _Holder(Generic[T]):
    """Base for the ownership holders, a holder is either empty or bound to exactly one value.

    An empty holder and a holder bound to `None` are the same thing.
    """

    __slots__ = ('_value',)

    def __init__(self, value: T | None = None, /) -> None:
        self._value = value

    def get(self) -> T | None:
        """Return the bound value, or None when empty."""
        return self._value

    def reset(self, value: T | None = None, /) -> None:
        """Bind a new value, or make the holder empty when called with no value."""
        self._value = value

    def __bool__(self) -> bool:
        return self._value is not None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, _Holder):
            return NotImplemented
        return self._value == other._value

    # mutable, so not hashable
    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        if self._value is None:
            return f'{type(self).__name__}()'
        return f'{type(self).__name__}({self._value!r})'


class Unique(_Holder[T]):
    """Exclusive ownership of an optional value.

    >>> p = Unique((67.0, 0.125678, 800009))
    >>> bool(p), p.get()
    (True, (67.0, 0.125678, 800009))
    >>> p.reset()
    >>> p
    Unique()
    """


class Shared(_Holder[T]):
    """Shared ownership of an optional value, multiple holders may be bound to the same object.

    On the wire it is identical to `Unique`, which means sharing is not preserved: decoding always produces a fresh
    value for each holder.
    """


class Record(ABC):
    """Base class for user types that define their own encoding.

    Subclasses must be constructible with no arguments. When decoding, an instance is created with `cls()` and then
    `read_from` fills it in. Both methods call back into the reader/writer for each field, in a fixed order, and
    return it so calls can be chained:

    >>> from serbin.codec import dumps, loads
    >>> class Point(Record):
    ...     def __init__(self) -> None:
    ...         self.x = 0
    ...         self.y = 0
    ...     def write_to(self, writer):
    ...         return writer.write(Int32, self.x).write(Int32, self.y)
    ...     def read_from(self, reader):
    ...         self.x = reader.read(Int32)
    ...         self.y = reader.read(Int32)
    ...         return reader
    ...
    >>> p = Point()
    >>> p.x, p.y = 3, -4
    >>> q = loads(Point, dumps(Point, p))
    >>> q.x, q.y
    (3, -4)
    """

    @abstractmethod
    def write_to(self, writer: Writer) -> Writer:
        raise NotImplementedError

    @abstractmethod
    def read_from(self, reader: Reader) -> Reader:
        raise NotImplementedError
