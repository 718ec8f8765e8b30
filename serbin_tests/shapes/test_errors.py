import struct
from dataclasses import dataclass
from enum import IntEnum

import pytest

from serbin.serialization import BadDataError, ConstructionError, OutOfDataError, TrailingDataError
from serbin.shapes import make_shape
from serbin.types import Array, Float32, Int8, Int32, Record, UInt8, Unique, WideStr


class Level(IntEnum):
    LOW = 0
    HIGH = 1


@dataclass
class Positive:
    value: Int32

    def __post_init__(self) -> None:
        if self.value <= 0:
            raise ValueError('must be positive')


class NeedsArgs(Record):
    def __init__(self, value: int) -> None:
        self.value = value

    def write_to(self, writer):
        return writer.write(Int32, self.value)

    def read_from(self, reader):
        self.value = reader.read(Int32)
        return reader


@pytest.mark.parametrize(
    ['type_', 'value', 'error'],
    [
        (Int8, 128, ValueError),
        (UInt8, -1, ValueError),
        (Int32, 1.5, TypeError),
        (Int32, '1', TypeError),
        (Int32, True, TypeError),
        (int, False, TypeError),
        (list[UInt8], [1, True], TypeError),
        (Float32, 'x', TypeError),
        (Float32, True, TypeError),
        (bool, 1, TypeError),
        (str, b'x', TypeError),
        (WideStr, 1, TypeError),
        (bytes, 'x', TypeError),
        (list[Int8], [1, 300], ValueError),
        (list[Int8], 'abc', TypeError),
        (set[str], {1, 2}, TypeError),
        (dict[str, Int8], {'a': 'b'}, TypeError),
        (dict[str, Int8], [('a', 1)], TypeError),
        (tuple[Int8, Int8], (1,), TypeError),
        (tuple[Int8, Int8], (1, 2, 3), TypeError),
        (Array[Int8, 2], [1, 2, 3], TypeError),
        (Int32 | None, 'x', TypeError),
        (Unique[Int8], Unique(1000), ValueError),
        (Level, 1, TypeError),
        (Positive, 1, TypeError),
    ]
)
def test_invalid_value(type_, value, error: type[Exception]) -> None:
    shape = make_shape(type_)
    with pytest.raises(error):
        shape.check_value(value)
    with pytest.raises(error):
        shape.to_bytes(value)


def test_check_value_ok() -> None:
    make_shape(dict[str, list[Int32 | None]]).check_value({'a': [None, 1]})
    make_shape(Unique[Int8]).check_value(Unique())


def test_invalid_presence_flag() -> None:
    shape = make_shape(Int32 | None)
    with pytest.raises(BadDataError):
        shape.from_bytes(b'\x02' + struct.pack('=i', 1))
    shape = make_shape(Unique[Int32])
    with pytest.raises(BadDataError):
        shape.from_bytes(b'\xff')


def test_invalid_enum_value() -> None:
    shape = make_shape(Level)
    with pytest.raises(BadDataError, match='invalid Level value: 7'):
        shape.from_bytes(struct.pack('=i', 7))


def test_invalid_utf8() -> None:
    shape = make_shape(list[str])
    data = struct.pack('@N', 1) + struct.pack('@N', 2) + b'\xc3\x28'
    with pytest.raises(BadDataError):
        shape.from_bytes(data)


def test_truncated_sequence() -> None:
    shape = make_shape(list[Int32 | None])
    data = shape.to_bytes([None, 456, 7890])
    for size in range(len(data)):
        with pytest.raises(OutOfDataError):
            shape.from_bytes(data[:size])


def test_truncated_bulk_sequence() -> None:
    for bulk_copy in (True, False):
        shape = make_shape(list[Int32], bulk_copy=bulk_copy)
        data = shape.to_bytes([1, 2, 3])
        with pytest.raises(OutOfDataError):
            shape.from_bytes(data[:-1])


def test_absurd_length_prefix() -> None:
    shape = make_shape(bytes)
    with pytest.raises(OutOfDataError):
        shape.from_bytes(struct.pack('@N', 2**40) + b'abc')


def test_trailing_data() -> None:
    shape = make_shape(Int8)
    with pytest.raises(TrailingDataError):
        shape.from_bytes(b'\x01\x02')


def test_dataclass_construction_fault() -> None:
    shape = make_shape(Positive)
    data = shape.to_bytes(Positive(1))
    with pytest.raises(ConstructionError):
        shape.from_bytes(struct.pack('=i', -1))
    assert shape.from_bytes(data) == Positive(1)


def test_record_construction_fault() -> None:
    shape = make_shape(NeedsArgs)
    data = shape.to_bytes(NeedsArgs(5))
    assert data == struct.pack('=i', 5)
    with pytest.raises(ConstructionError):
        shape.from_bytes(data)


def test_float32_overflow() -> None:
    shape = make_shape(Float32)
    # the type is right, only encoding finds out that it does not fit
    shape.check_value(1e39)
    with pytest.raises(ValueError):
        shape.to_bytes(1e39)
