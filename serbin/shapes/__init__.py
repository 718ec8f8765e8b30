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

from collections import OrderedDict, abc, deque
from dataclasses import dataclass
from enum import IntEnum
from functools import lru_cache
from types import UnionType
from typing import Any, NamedTuple, TypeVar, Union

from serbin.shapes.array_shape import ArrayShape
from serbin.shapes.chars_shape import BytesShape, StrShape, WideStrShape
from serbin.shapes.collection_shape import DequeShape, FrozenSetShape, ListShape, SetShape
from serbin.shapes.dataclass_shape import DataclassShape
from serbin.shapes.enum_shape import IntEnumShape
from serbin.shapes.map_shape import DictShape, OrderedDictShape
from serbin.shapes.namedtuple_shape import NamedTupleShape
from serbin.shapes.native_shape import (
    BoolShape,
    Float32Shape,
    Float64Shape,
    Int8Shape,
    Int16Shape,
    Int32Shape,
    Int64Shape,
    UInt8Shape,
    UInt16Shape,
    UInt32Shape,
    UInt64Shape,
)
from serbin.shapes.optional_shape import OptionalShape
from serbin.shapes.pointer_shape import SharedShape, UniqueShape
from serbin.shapes.record_shape import RecordShape
from serbin.shapes.shape import Shape
from serbin.shapes.tuple_shape import TupleShape
from serbin.shapes.utils import TypeAliasMap, TypeToShapeMap
from serbin.types import (
    Array,
    Float32,
    Float64,
    Int8,
    Int16,
    Int32,
    Int64,
    Record,
    Shared,
    UInt8,
    UInt16,
    UInt32,
    UInt64,
    Unique,
    WideStr,
)

__all__ = [
    'DEFAULT_TYPE_ALIAS_MAP',
    'DEFAULT_TYPE_MAP',
    'DEFAULT_TYPE_TO_SHAPE_MAP',
    'ESSENTIAL_TYPE_ALIAS_MAP',
    'ArrayShape',
    'BoolShape',
    'BytesShape',
    'DataclassShape',
    'DequeShape',
    'DictShape',
    'Float32Shape',
    'Float64Shape',
    'FrozenSetShape',
    'Int8Shape',
    'Int16Shape',
    'Int32Shape',
    'Int64Shape',
    'IntEnumShape',
    'ListShape',
    'NamedTupleShape',
    'OptionalShape',
    'OrderedDictShape',
    'RecordShape',
    'SetShape',
    'Shape',
    'SharedShape',
    'StrShape',
    'TupleShape',
    'TypeAliasMap',
    'TypeToShapeMap',
    'UInt8Shape',
    'UInt16Shape',
    'UInt32Shape',
    'UInt64Shape',
    'UniqueShape',
    'WideStrShape',
    'make_shape',
]

T = TypeVar('T')

# this is the minimum type-alias-map needed for everything to work as intended
ESSENTIAL_TYPE_ALIAS_MAP: TypeAliasMap = {
    Union: UnionType,
}

# plain numbers get the widest fixed-width type, abstract collections get a concrete one to be decoded as
DEFAULT_TYPE_ALIAS_MAP: TypeAliasMap = {
    **ESSENTIAL_TYPE_ALIAS_MAP,
    int: Int64,
    float: Float64,
    bytearray: bytes,
    abc.Sequence: list,
    abc.MutableSequence: list,
    abc.Set: frozenset,
    abc.MutableSet: set,
    abc.Mapping: dict,
    abc.MutableMapping: dict,
}

# Mapping between types and Shape classes.
DEFAULT_TYPE_TO_SHAPE_MAP: TypeToShapeMap = {
    # fixed-width numbers:
    bool: BoolShape,
    Int8: Int8Shape,
    Int16: Int16Shape,
    Int32: Int32Shape,
    Int64: Int64Shape,
    UInt8: UInt8Shape,
    UInt16: UInt16Shape,
    UInt32: UInt32Shape,
    UInt64: UInt64Shape,
    Float32: Float32Shape,
    Float64: Float64Shape,
    # character sequences:
    str: StrShape,
    bytes: BytesShape,
    WideStr: WideStrShape,
    # ownership:
    Unique: UniqueShape,
    Shared: SharedShape,
    # containers:
    list: ListShape,
    deque: DequeShape,
    tuple: TupleShape,
    Array: ArrayShape,
    set: SetShape,
    frozenset: FrozenSetShape,
    dict: DictShape,
    OrderedDict: OrderedDictShape,
    # other Python types:
    Union: OptionalShape,
    UnionType: OptionalShape,
    NamedTuple: NamedTupleShape,
    IntEnum: IntEnumShape,
    dataclass: DataclassShape,
    # user types:
    Record: RecordShape,
}

DEFAULT_TYPE_MAP = Shape.TypeMap(DEFAULT_TYPE_ALIAS_MAP, DEFAULT_TYPE_TO_SHAPE_MAP)
_NO_BULK_TYPE_MAP = DEFAULT_TYPE_MAP._replace(bulk_copy=False)


@lru_cache(maxsize=None)
def make_shape(type_: Any, /, *, bulk_copy: bool = True) -> Shape:
    """ Like Shape.from_type, but with the default maps and a cache, so each annotation is only resolved once.

    If you need to customize the mapping use `Shape.from_type` instead.

    >>> make_shape(dict[str, list[Int32 | None]])
    DictShape(StrShape(), ListShape(OptionalShape(Int32Shape())))
    >>> make_shape(tuple[Float32, Float64, int]).fixed_size()
    20
    >>> make_shape(list[int]) is make_shape(list[int])
    True
    """
    type_map = DEFAULT_TYPE_MAP if bulk_copy else _NO_BULK_TYPE_MAP
    return Shape.from_type(type_, type_map=type_map)
