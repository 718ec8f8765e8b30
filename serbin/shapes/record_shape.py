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

import inspect
from typing import TypeVar

from typing_extensions import Self, override

from serbin.serialization import ConstructionError, Deserializer, Serializer
from serbin.shapes.shape import Shape
from serbin.types import Record
from serbin.utils.typing import is_subclass

R = TypeVar('R', bound=Record)


class RecordShape(Shape[R]):
    """ Represents `Record` subclasses, which delegate their encoding to `write_to` and `read_from`.

    The record gets a writer (or reader) over the same byte sink (or source), so the fields it writes are inline with
    the rest of the stream, with no framing around them.
    """

    __slots__ = ('_is_hashable', '_class', '_bulk')

    _class: type[R]
    _bulk: bool

    def __init__(self, class_: type[R], *, bulk: bool = True) -> None:
        self._class = class_
        self._bulk = bulk
        self._is_hashable = getattr(class_, '__hash__', None) is not None

    @override
    @classmethod
    def _from_type(cls, type_: type[R], /, *, type_map: Shape.TypeMap) -> Self:
        if not isinstance(type_, type) or not is_subclass(type_, Record):
            raise TypeError('expected Record subclass')
        if inspect.isabstract(type_):
            raise TypeError(f'{type_.__name__} does not implement write_to and read_from')
        return cls(type_, bulk=type_map.bulk_copy)

    @override
    def __repr__(self) -> str:
        return f'{type(self).__name__}[{self._class.__name__}]()'

    @override
    def _check_value(self, value: R, /, *, deep: bool) -> None:
        if not isinstance(value, self._class):
            raise TypeError(f'expected {self._class.__name__} instance')

    @override
    def _serialize(self, serializer: Serializer, value: R, /) -> None:
        from serbin.codec import Writer
        value.write_to(Writer(serializer, bulk_copy=self._bulk))

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> R:
        from serbin.codec import Reader
        try:
            value = self._class()
        except Exception as e:
            raise ConstructionError(f'could not construct {self._class.__name__}') from e
        value.read_from(Reader(deserializer, bulk_copy=self._bulk))
        return value
