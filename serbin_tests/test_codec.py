import io
import os
import struct

import pytest

from serbin import (
    Float32,
    Float64,
    Int32,
    Int64,
    MaxBytesExceededError,
    OutOfDataError,
    Reader,
    Record,
    SerializationError,
    TrailingDataError,
    Unique,
    Writer,
    dump,
    dumps,
    load,
    loads,
    make_shape,
)
from serbin.conf import SerbinSettings
from serbin.serialization import Deserializer, Serializer
from serbin_tests import unittest


class Custom(Record):
    def __init__(self) -> None:
        self.data: Unique[tuple[Float32, Float64, Int64]] = Unique((0.0, 0.0, 0))

    def write_to(self, writer: Writer) -> Writer:
        return writer.write(Unique[tuple[Float32, Float64, Int64]], self.data)

    def read_from(self, reader: Reader) -> Reader:
        self.data = reader.read(Unique[tuple[Float32, Float64, Int64]])
        return reader


class Pair(Record):
    """A record that writes two fields, one of them another record."""

    def __init__(self) -> None:
        self.name = ''
        self.custom = Custom()

    def write_to(self, writer: Writer) -> Writer:
        return writer.write(str, self.name).write(Custom, self.custom)

    def read_from(self, reader: Reader) -> Reader:
        self.name, self.custom = reader.read_many(str, Custom)
        return reader


class EndToEndTestCase(unittest.TestCase):
    def test_sequence_of_optional_integers(self) -> None:
        data = dumps(list[Int32 | None], [None, 456, 7890])
        self.assertEqual(loads(list[Int32 | None], data), [None, 456, 7890])

    def test_map(self) -> None:
        value = {'Aurora': True, 'Borealis': False, 'Club': True}
        data = dumps(dict[str, bool], value)
        self.assertEqual(loads(dict[str, bool], data), value)

    def test_record_with_owned_tuple(self) -> None:
        custom = Custom()
        custom.data.reset((67.0, 0.125678, 800009))
        data = dumps(Custom, custom)
        self.assertEqual(data, b'\x01' + struct.pack('=fdq', 67.0, 0.125678, 800009))

        result = loads(Custom, data)
        self.assertIsInstance(result, Custom)
        self.assertEqual(result.data.get(), (67.0, 0.125678, 800009))

    def test_record_with_empty_holder(self) -> None:
        custom = Custom()
        custom.data.reset()
        result = loads(Custom, dumps(Custom, custom))
        self.assertFalse(result.data)

    def test_nested_records(self) -> None:
        pair = Pair()
        pair.name = 'Club'
        pair.custom.data.reset((1.0, 2.0, 3))
        result = loads(Pair, dumps(Pair, pair))
        self.assertEqual(result.name, 'Club')
        self.assertEqual(result.custom.data.get(), (1.0, 2.0, 3))

    def test_truncated_stream(self) -> None:
        data = dumps(list[Int32 | None], [None, 456, 7890])
        # cut in the middle of the last element
        truncated = data[:-2]
        with self.assertRaises(OutOfDataError):
            loads(list[Int32 | None], truncated)

        reader = Reader(Deserializer.build_bytes_deserializer(truncated))
        with self.assertRaises(OutOfDataError):
            reader.read(list[Int32 | None])

    def test_trailing_data(self) -> None:
        data = dumps(str, 'Aurora') + b'\x00'
        with self.assertRaises(TrailingDataError):
            loads(str, data)

    def test_shape_instead_of_type(self) -> None:
        shape = make_shape(list[str])
        self.assertEqual(loads(shape, dumps(shape, ['a', 'b'])), ['a', 'b'])


class WriterReaderTestCase(unittest.TestCase):
    def test_chaining(self) -> None:
        se = Serializer.build_bytes_serializer()
        writer = Writer(se)
        self.assertIs(writer.write(str, 'Aurora'), writer)
        writer.write(bool, False).write(Int32, -1)
        data = bytes(se.finalize())

        reader = Reader(Deserializer.build_bytes_deserializer(data))
        self.assertEqual(reader.read(str), 'Aurora')
        self.assertEqual(reader.read_many(bool, Int32), (False, -1))
        self.assertTrue(reader.is_empty())
        reader.finalize()

    def test_values_are_concatenated(self) -> None:
        se = Serializer.build_bytes_serializer()
        Writer(se).write(Int32, 1).write(Int32, 2)
        self.assertEqual(bytes(se.finalize()), dumps(Int32, 1) + dumps(Int32, 2))

    def test_bulk_copy_follows_settings(self) -> None:
        se = Serializer.build_bytes_serializer()
        self.assertTrue(Writer(se).bulk_copy)
        self.assertFalse(Writer(se, settings=SerbinSettings(BULK_COPY=False)).bulk_copy)
        self.assertFalse(Writer(se, bulk_copy=False).bulk_copy)
        de = Deserializer.build_bytes_deserializer(b'')
        self.assertFalse(Reader(de, settings=SerbinSettings(BULK_COPY=False)).bulk_copy)

    def test_stream_writer(self) -> None:
        stream = io.BytesIO()
        with Writer(Serializer.build_stream_serializer(stream)) as writer:
            writer.write(list[Int32 | None], [None, 456, 7890])
        self.assertEqual(stream.getvalue(), dumps(list[Int32 | None], [None, 456, 7890]))

    def test_max_write_bytes(self) -> None:
        settings = SerbinSettings(MAX_WRITE_BYTES=4)
        self.assertEqual(dumps(Int32, 7, settings=settings), struct.pack('=i', 7))
        with self.assertRaises(MaxBytesExceededError):
            dumps(Int64, 7, settings=settings)

    def test_max_read_bytes(self) -> None:
        settings = SerbinSettings(MAX_READ_BYTES=16)
        data = dumps(bytes, b'x' * 100)
        with self.assertRaises(MaxBytesExceededError):
            loads(bytes, data, settings=settings)
        self.assertEqual(loads(bytes, dumps(bytes, b'x'), settings=settings), b'x')


class FileTestCase(unittest.TestCase):
    def setUp(self) -> None:
        super().setUp()
        self.path = os.path.join(self.mkdtemp(), 'test.bin')

    def test_dump_and_load(self) -> None:
        value = {'Aurora': True, 'Borealis': False, 'Club': True}
        dump(dict[str, bool], value, self.path)
        self.assertEqual(load(dict[str, bool], self.path), value)
        with open(self.path, 'rb') as fp:
            self.assertEqual(fp.read(), dumps(dict[str, bool], value))

    def test_multiple_values(self) -> None:
        custom = Custom()
        custom.data.reset((67.0, 0.125678, 800009))
        with Writer.open(self.path) as writer:
            writer.write(list[Int32 | None], [None, 456, 7890])
            writer.write(dict[str, bool], {'Aurora': True, 'Borealis': False, 'Club': True})
            writer.write(Custom, custom)

        with Reader.open(self.path) as reader:
            data0, data1, result = reader.read_many(list[Int32 | None], dict[str, bool], Custom)
            reader.finalize()
        self.assertEqual(data0, [None, 456, 7890])
        self.assertEqual(data1, {'Aurora': True, 'Borealis': False, 'Club': True})
        self.assertEqual(result.data.get(), (67.0, 0.125678, 800009))

    def test_open_truncates(self) -> None:
        dump(str, 'a long string to be replaced', self.path)
        dump(str, 'x', self.path)
        self.assertEqual(load(str, self.path), 'x')

    def test_load_trailing_data(self) -> None:
        with Writer.open(self.path) as writer:
            writer.write(Int32, 1).write(Int32, 2)
        with self.assertRaises(TrailingDataError):
            load(Int32, self.path)

    def test_load_truncated_file(self) -> None:
        dump(list[Int64], [1, 2, 3], self.path)
        with open(self.path, 'r+b') as fp:
            fp.truncate(os.path.getsize(self.path) - 1)
        with self.assertRaises(OutOfDataError):
            load(list[Int64], self.path)

    def test_load_absurd_length_prefix(self) -> None:
        with open(self.path, 'wb') as fp:
            fp.write(struct.pack('@N', 2**40) + b'abc')
        with self.assertRaises(OutOfDataError):
            load(bytes, self.path)

        # larger than any single read the platform allows
        with open(self.path, 'wb') as fp:
            fp.write(struct.pack('@N', 2**61) + b'\x01\x00\x00\x00')
        with self.assertRaises(OutOfDataError):
            load(list[Int32], self.path)

    def test_load_absurd_length_prefix_small_chunks(self) -> None:
        with open(self.path, 'wb') as fp:
            fp.write(struct.pack('@N', 100) + b'Aurora')
        settings = SerbinSettings(STREAM_BUFFER_SIZE=4)
        with self.assertRaises(OutOfDataError):
            load(bytes, self.path, settings=settings)

    def test_open_missing_file(self) -> None:
        missing = os.path.join(self.mkdtemp(), 'missing', 'file.bin')
        with self.assertRaises(SerializationError):
            Reader.open(missing)
        with self.assertRaises(SerializationError):
            Writer.open(missing)

    def test_reader_closes_file_on_error(self) -> None:
        dump(Int32, 1, self.path)
        reader = Reader.open(self.path)
        with pytest.raises(OutOfDataError):
            with reader:
                reader.read(Int64)
        # reading from a closed file is a fault, not a silent empty read
        with pytest.raises(SerializationError):
            reader.read(Int64)

    def test_max_write_bytes_on_file(self) -> None:
        settings = SerbinSettings(MAX_WRITE_BYTES=4)
        with self.assertRaises(MaxBytesExceededError):
            with Writer.open(self.path, settings=settings) as writer:
                writer.write(Int32, 1).write(Int32, 2)
        # whatever was written before the fault stays in the file
        self.assertEqual(load(Int32, self.path), 1)
