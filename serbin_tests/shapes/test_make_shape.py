from collections import OrderedDict, deque
from collections.abc import Mapping, MutableSet, Sequence
from dataclasses import dataclass
from enum import IntEnum
from typing import NamedTuple, Optional, Union

import pytest

from serbin.exception import UnsupportedTypeError
from serbin.shapes import (
    DEFAULT_TYPE_ALIAS_MAP,
    DEFAULT_TYPE_MAP,
    ArrayShape,
    BoolShape,
    BytesShape,
    DataclassShape,
    DequeShape,
    DictShape,
    Float32Shape,
    Float64Shape,
    FrozenSetShape,
    Int8Shape,
    Int32Shape,
    Int64Shape,
    IntEnumShape,
    ListShape,
    NamedTupleShape,
    OptionalShape,
    OrderedDictShape,
    RecordShape,
    SetShape,
    Shape,
    SharedShape,
    StrShape,
    TupleShape,
    UInt16Shape,
    UniqueShape,
    WideStrShape,
    make_shape,
)
from serbin.shapes.utils import get_aliased_type
from serbin.types import Array, Float32, Float64, Int8, Int32, Record, Shared, UInt16, Unique, WideStr


class Color(IntEnum):
    RED = 1
    GREEN = 2


class Point(NamedTuple):
    x: Int32
    y: Int32


@dataclass
class Sample:
    name: str
    value: Float64


class Blob(Record):
    def write_to(self, writer):
        return writer

    def read_from(self, reader):
        return reader


class AbstractBlob(Record):
    pass


@pytest.mark.parametrize(
    ['type_', 'shape_class'],
    [
        (bool, BoolShape),
        (int, Int64Shape),
        (Int8, Int8Shape),
        (UInt16, UInt16Shape),
        (float, Float64Shape),
        (Float32, Float32Shape),
        (str, StrShape),
        (WideStr, WideStrShape),
        (bytes, BytesShape),
        (bytearray, BytesShape),
        (list[int], ListShape),
        (Sequence[int], ListShape),
        (deque[int], DequeShape),
        (tuple[int, ...], TupleShape),
        (tuple[int, str], TupleShape),
        (tuple[()], TupleShape),
        (Array[int, 4], ArrayShape),
        (set[str], SetShape),
        (MutableSet[str], SetShape),
        (frozenset[str], FrozenSetShape),
        (dict[str, bool], DictShape),
        (Mapping[str, bool], DictShape),
        (OrderedDict[str, bool], OrderedDictShape),
        (Int32 | None, OptionalShape),
        (Optional[str], OptionalShape),
        (Union[None, str], OptionalShape),
        (Unique[int], UniqueShape),
        (Shared[int], SharedShape),
        (Color, IntEnumShape),
        (Point, NamedTupleShape),
        (Sample, DataclassShape),
        (Blob, RecordShape),
    ]
)
def test_shape_class(type_, shape_class: type[Shape]) -> None:
    assert type(make_shape(type_)) is shape_class


def test_repr() -> None:
    assert repr(make_shape(dict[str, list[Int32 | None]])) == (
        'DictShape(StrShape(), ListShape(OptionalShape(Int32Shape())))'
    )
    assert repr(make_shape(tuple[int, ...])) == 'TupleShape(Int64Shape(), ...)'
    assert repr(make_shape(Array[Int8, 3])) == 'ArrayShape(Int8Shape(), 3)'
    assert repr(make_shape(Point)) == 'NamedTupleShape[Point](Int32Shape(), Int32Shape())'
    assert repr(make_shape(Sample)) == 'DataclassShape[Sample](name=StrShape(), value=Float64Shape())'
    assert repr(make_shape(Color)) == 'IntEnumShape[Color]()'
    assert repr(make_shape(Unique[tuple[Float32, Float64, int]])) == (
        'UniqueShape(TupleShape(Float32Shape(), Float64Shape(), Int64Shape()))'
    )


def test_make_shape_is_cached() -> None:
    assert make_shape(list[str]) is make_shape(list[str])
    assert make_shape(list[str]) is not make_shape(list[str], bulk_copy=False)


@pytest.mark.parametrize(
    ['type_', 'size'],
    [
        (bool, 1),
        (Int8, 1),
        (Int32, 4),
        (int, 8),
        (Float32, 4),
        (tuple[Float32, Float64, int], 20),
        (tuple[()], 0),
        (Array[Int32, 5], 20),
        (Array[str, 5], None),
        (Point, 8),
        (Color, 4),
        (str, None),
        (list[Int8], None),
        (tuple[Int8, ...], None),
        (Int32 | None, None),
    ]
)
def test_fixed_size(type_, size: int | None) -> None:
    assert make_shape(type_).fixed_size() == size


def test_trivially_copyable() -> None:
    assert make_shape(Int32).is_trivially_copyable()
    assert make_shape(bool).is_trivially_copyable()
    assert make_shape(Float64).is_trivially_copyable()
    assert not make_shape(str).is_trivially_copyable()
    assert not make_shape(Int32 | None).is_trivially_copyable()
    assert not make_shape(tuple[Int32, Int32]).is_trivially_copyable()
    assert not make_shape(Sample).is_trivially_copyable()


def test_hashable() -> None:
    assert make_shape(str).is_hashable()
    assert make_shape(tuple[int, str]).is_hashable()
    assert make_shape(frozenset[int]).is_hashable()
    assert not make_shape(list[int]).is_hashable()
    assert not make_shape(tuple[int, list[int]]).is_hashable()


@pytest.mark.parametrize(
    'type_',
    [
        complex,
        object,
        None,
        'list[int]',
        list,
        dict,
        tuple,
        Unique,
        Array,
        int | str,
        Union[int, str, None],
        set[list[int]],
        dict[list[int], int],
        set[tuple[int, list[int]]],
        tuple[int, int, ...],
        AbstractBlob,
    ]
)
def test_unsupported(type_) -> None:
    with pytest.raises(TypeError):
        make_shape(type_)


def test_unsupported_error_class() -> None:
    with pytest.raises(UnsupportedTypeError, match='type complex is not supported by any Shape class'):
        make_shape(complex)
    with pytest.raises(UnsupportedTypeError):
        make_shape(list)


def test_from_type_with_custom_map() -> None:
    # a map that only knows strings and lists, and aliases str to bytes
    type_map = Shape.TypeMap({str: bytes}, {bytes: BytesShape, list: ListShape})
    assert repr(Shape.from_type(list[str], type_map=type_map)) == 'ListShape(BytesShape())'
    with pytest.raises(UnsupportedTypeError):
        Shape.from_type(list[int], type_map=type_map)


def test_default_type_map_is_bulk() -> None:
    assert DEFAULT_TYPE_MAP.bulk_copy


def test_array_class_is_not_aliased() -> None:
    assert get_aliased_type(Array[int, 3], DEFAULT_TYPE_ALIAS_MAP, _verbose=False) is Array[int, 3]
    assert get_aliased_type(list[Array[int, 3]], DEFAULT_TYPE_ALIAS_MAP, _verbose=False) == list[Array[int, 3]]
    # the items still get the default aliases when the array's own shape is resolved
    assert repr(make_shape(Array[int, 3])) == 'ArrayShape(Int64Shape(), 3)'
