import io

import pytest

from serbin.serialization import (
    Deserializer,
    OutOfDataError,
    SerializationError,
    Serializer,
    TrailingDataError,
    WriteError,
)


class OneByteReader(io.RawIOBase):
    """A raw stream that returns at most one byte per read call."""

    def __init__(self, data: bytes) -> None:
        self._data = data
        self._pos = 0

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        if self._pos >= len(self._data) or not len(buffer):
            return 0
        buffer[0] = self._data[self._pos]
        self._pos += 1
        return 1


class ShortWriter(io.RawIOBase):
    """A raw stream that accepts at most `limit` bytes per write call."""

    def __init__(self, limit: int) -> None:
        self.limit = limit
        self.data = bytearray()

    def writable(self) -> bool:
        return True

    def write(self, b) -> int:
        chunk = bytes(memoryview(b)[:self.limit])
        self.data.extend(chunk)
        return len(chunk)


def test_stream_serializer_writes_through() -> None:
    stream = io.BytesIO()
    se = Serializer.build_stream_serializer(stream)
    se.write_byte(0x01)
    se.write_bytes(b'Fang')
    assert se.cur_pos() == 5
    se.close()
    # the stream is not owned, so it is only flushed
    assert not stream.closed
    assert stream.getvalue() == b'\x01Fang'


def test_stream_serializer_owns_stream() -> None:
    stream = io.BytesIO()
    se = Serializer.build_stream_serializer(stream, owns_stream=True)
    se.write_bytes(b'Fang')
    se.close()
    assert stream.closed
    # closing again is harmless
    se.close()


def test_stream_serializer_closed_stream() -> None:
    stream = io.BytesIO()
    stream.close()
    se = Serializer.build_stream_serializer(stream)
    with pytest.raises(WriteError):
        se.write_bytes(b'Fang')


def test_stream_serializer_short_write() -> None:
    stream = ShortWriter(limit=2)
    se = Serializer.build_stream_serializer(stream)
    se.write_bytes(b'ab')
    with pytest.raises(WriteError, match='short write: 2 of 4 bytes'):
        se.write_bytes(b'cdef')
    assert se.cur_pos() == 2


def test_stream_serializer_does_not_finalize() -> None:
    se = Serializer.build_stream_serializer(io.BytesIO())
    with pytest.raises(TypeError):
        se.finalize()


def test_stream_deserializer_reads() -> None:
    de = Deserializer.build_stream_deserializer(io.BytesIO(b'Elemental'))
    assert not de.is_empty()
    assert de.read_bytes(4) == b'Elem'
    assert de.read_byte() == ord('e')
    assert de.read_bytes(4) == b'ntal'
    assert de.is_empty()
    de.finalize()


def test_stream_deserializer_short_reads_are_joined() -> None:
    de = Deserializer.build_stream_deserializer(OneByteReader(b'Dread'))
    assert de.read_bytes(5) == b'Dread'
    assert de.is_empty()


def test_stream_deserializer_out_of_data() -> None:
    de = Deserializer.build_stream_deserializer(io.BytesIO(b'abc'))
    with pytest.raises(OutOfDataError):
        de.read_bytes(4)
    # a failed read does not consume anything
    assert de.read_bytes(3) == b'abc'
    with pytest.raises(OutOfDataError):
        de.read_byte()


def test_stream_deserializer_trailing_data() -> None:
    de = Deserializer.build_stream_deserializer(io.BytesIO(b'abc'))
    de.read_bytes(2)
    with pytest.raises(TrailingDataError):
        de.finalize()


def test_stream_deserializer_closed_stream() -> None:
    stream = io.BytesIO(b'abc')
    stream.close()
    de = Deserializer.build_stream_deserializer(stream)
    with pytest.raises(SerializationError):
        de.read_byte()


def test_stream_deserializer_owns_stream() -> None:
    stream = io.BytesIO(b'abc')
    de = Deserializer.build_stream_deserializer(stream, owns_stream=True)
    de.close()
    assert stream.closed

    stream = io.BytesIO(b'abc')
    de = Deserializer.build_stream_deserializer(stream)
    de.close()
    assert not stream.closed


class CountingReader(io.RawIOBase):
    """A raw stream over zeros that records the size of every read request."""

    def __init__(self, size: int) -> None:
        self.left = size
        self.requests: list[int] = []

    def readable(self) -> bool:
        return True

    def read(self, size: int = -1) -> bytes:
        self.requests.append(size)
        n = min(size, self.left)
        self.left -= n
        return bytes(n)


def test_stream_deserializer_reads_in_chunks() -> None:
    stream = CountingReader(10)
    de = Deserializer.build_stream_deserializer(stream, chunk_size=4)
    with pytest.raises(OutOfDataError):
        de.read_bytes(2**62)
    assert stream.requests == [4, 4, 4, 4]
    # the 10 bytes that were read are still available
    assert de.read_bytes(10) == bytes(10)
    assert de.is_empty()


def test_stream_deserializer_invalid_chunk_size() -> None:
    with pytest.raises(ValueError):
        Deserializer.build_stream_deserializer(io.BytesIO(), chunk_size=-1)
