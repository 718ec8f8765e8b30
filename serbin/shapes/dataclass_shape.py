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

"""
Dataclasses are supported with no extra code: their init fields are encoded in declaration order, with no framing.

A dataclass can also opt into the bulk path by declaring `__serbin_trivially_copyable__ = True`, this is only accepted
when every field is itself trivially copyable (fixed-width numbers, bools or other opted-in dataclasses). The packed
layout has no padding, so it is byte-identical to encoding field by field.
"""

from __future__ import annotations

from dataclasses import fields, is_dataclass
from typing import TYPE_CHECKING, Any, TypeVar, get_type_hints

from typing_extensions import Self, override

from serbin.exception import UnsupportedTypeError
from serbin.serialization import ConstructionError, Deserializer, Serializer
from serbin.shapes.shape import Shape

if TYPE_CHECKING:
    from _typeshed import DataclassInstance

D = TypeVar('D', bound='DataclassInstance')

TRIVIALLY_COPYABLE_ATTR = '__serbin_trivially_copyable__'


class DataclassShape(Shape[D]):
    __slots__ = ('_is_hashable', '_fields', '_class', '_struct_format')
    _fields: dict[str, Shape]
    _class: type[D]
    _struct_format: str | None

    def __init__(self, fields_: dict[str, Shape], class_: type[D], *, trivially_copyable: bool = False) -> None:
        self._fields = fields_
        self._class = class_
        self._is_hashable = (
            getattr(class_, '__hash__', None) is not None
            and all(field_shape.is_hashable() for field_shape in fields_.values())
        )
        self._struct_format = None
        if trivially_copyable:
            formats: list[str] = []
            for field_name, field_shape in fields_.items():
                if field_shape.struct_format is None:
                    raise UnsupportedTypeError(
                        f'{class_.__name__} is declared trivially copyable but field {field_name!r} is not'
                    )
                formats.append(field_shape.struct_format)
            self._struct_format = ''.join(formats)

    @override
    @classmethod
    def _from_type(cls, type_: type[D], /, *, type_map: Shape.TypeMap) -> Self:
        if not isinstance(type_, type) or not is_dataclass(type_):
            raise TypeError('expected a dataclass')
        hints = get_type_hints(type_)
        # XXX: the order is important, but `dict` and `fields` should have a stable order
        values: dict[str, Shape] = {}
        for field in fields(type_):
            if not field.init:
                continue
            values[field.name] = Shape.from_type(hints[field.name], type_map=type_map)
        trivially_copyable = bool(getattr(type_, TRIVIALLY_COPYABLE_ATTR, False))
        return cls(values, type_, trivially_copyable=trivially_copyable)

    @property
    @override
    def struct_format(self) -> str | None:
        return self._struct_format

    @override
    def fixed_size(self) -> int | None:
        sizes = [field_shape.fixed_size() for field_shape in self._fields.values()]
        if any(size is None for size in sizes):
            return None
        return sum(size for size in sizes if size is not None)

    @override
    def children(self) -> tuple[Shape, ...]:
        return tuple(self._fields.values())

    @override
    def __repr__(self) -> str:
        args = ', '.join(f'{name}={field_shape!r}' for name, field_shape in self._fields.items())
        return f'{type(self).__name__}[{self._class.__name__}]({args})'

    @override
    def _check_value(self, value: D, /, *, deep: bool) -> None:
        if not isinstance(value, self._class):
            raise TypeError(f'expected {self._class.__name__} instance')
        if deep:
            for field_name, field_shape in self._fields.items():
                field_shape._check_value(getattr(value, field_name), deep=True)

    @override
    def _serialize(self, serializer: Serializer, value: D, /) -> None:
        for field_name, field_shape in self._fields.items():
            field_shape.serialize(serializer, getattr(value, field_name))

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> D:
        kwargs: dict[str, Any] = {}
        for field_name, field_shape in self._fields.items():
            kwargs[field_name] = field_shape.deserialize(deserializer)
        return self._construct(kwargs)

    def _construct(self, kwargs: dict[str, Any]) -> D:
        try:
            return self._class(**kwargs)
        except Exception as e:
            raise ConstructionError(f'could not construct {self._class.__name__}') from e

    @override
    def _flatten(self, value: D, /) -> tuple[Any, ...]:
        items: list[Any] = []
        for field_name, field_shape in self._fields.items():
            items.extend(field_shape._flatten(getattr(value, field_name)))
        return tuple(items)

    @override
    def _unflatten(self, items: tuple[Any, ...], /) -> D:
        kwargs: dict[str, Any] = {}
        pos = 0
        for field_name, field_shape in self._fields.items():
            assert field_shape.struct_format is not None
            width = len(field_shape.struct_format)
            kwargs[field_name] = field_shape._unflatten(items[pos:pos + width])
            pos += width
        return self._construct(kwargs)
