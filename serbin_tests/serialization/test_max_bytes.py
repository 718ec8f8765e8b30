import io

import pytest

from serbin.serialization import Deserializer, Serializer
from serbin.serialization.adapters import MaxBytesDeserializer, MaxBytesExceededError, MaxBytesSerializer


def test_with_optional_max_bytes() -> None:
    se = Serializer.build_bytes_serializer()
    assert se.with_optional_max_bytes(None) is se
    assert isinstance(se.with_optional_max_bytes(10), MaxBytesSerializer)

    de = Deserializer.build_bytes_deserializer(b'')
    assert de.with_optional_max_bytes(None) is de
    assert isinstance(de.with_optional_max_bytes(10), MaxBytesDeserializer)


def test_serializer_budget() -> None:
    se = Serializer.build_bytes_serializer().with_max_bytes(5)
    se.write_bytes(b'abcd')
    assert se.bytes_left == 1
    se.write_byte(0x65)
    assert se.bytes_left == 0
    with pytest.raises(MaxBytesExceededError):
        se.write_byte(0x66)
    assert bytes(se.finalize()) == b'abcde'


def test_serializer_budget_is_checked_before_writing() -> None:
    stream = io.BytesIO()
    se = Serializer.build_stream_serializer(stream).with_max_bytes(3)
    with pytest.raises(MaxBytesExceededError, match='cannot write 4 bytes, only 3 left'):
        se.write_bytes(b'abcd')
    assert stream.getvalue() == b''
    assert se.cur_pos() == 0


def test_deserializer_budget() -> None:
    de = Deserializer.build_bytes_deserializer(b'abcdef').with_max_bytes(4)
    assert de.read_byte() == ord('a')
    assert bytes(de.read_bytes(3)) == b'bcd'
    with pytest.raises(MaxBytesExceededError):
        de.read_byte()


def test_deserializer_budget_is_checked_before_reading() -> None:
    de = Deserializer.build_stream_deserializer(io.BytesIO(b'abcdef')).with_max_bytes(4)
    with pytest.raises(MaxBytesExceededError, match='cannot read 5 bytes, only 4 left'):
        de.read_bytes(5)
    assert bytes(de.read_bytes(4)) == b'abcd'
    assert not de.is_empty()


def test_close_is_forwarded() -> None:
    stream = io.BytesIO()
    se = Serializer.build_stream_serializer(stream, owns_stream=True).with_max_bytes(3)
    se.close()
    assert stream.closed
