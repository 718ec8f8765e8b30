import struct

import pytest

from serbin.serialization import BadDataError, Deserializer, OutOfDataError, Serializer
from serbin.serialization.consts import LENGTH_PREFIX_SIZE, WCHAR_CODEC, WCHAR_SIZE
from serbin.serialization.encoding.bool import decode_bool, encode_bool
from serbin.serialization.encoding.bytes import decode_bytes, encode_bytes
from serbin.serialization.encoding.length import MAX_LENGTH, decode_length, encode_length
from serbin.serialization.encoding.native import decode_native, decode_native_array, encode_native, native_size
from serbin.serialization.encoding.utf8 import decode_utf8, encode_utf8
from serbin.serialization.encoding.wide import decode_wide, encode_wide


def _encode(encoder, *args, **kwargs) -> bytes:
    se = Serializer.build_bytes_serializer()
    encoder(se, *args, **kwargs)
    return bytes(se.finalize())


@pytest.mark.parametrize(
    ['fmt', 'lower_bound', 'upper_bound'],
    [
        ('b', -2**7, 2**7 - 1),
        ('B', 0, 2**8 - 1),
        ('h', -2**15, 2**15 - 1),
        ('H', 0, 2**16 - 1),
        ('i', -2**31, 2**31 - 1),
        ('I', 0, 2**32 - 1),
        ('q', -2**63, 2**63 - 1),
        ('Q', 0, 2**64 - 1),
    ]
)
def test_native_int_bounds(fmt: str, lower_bound: int, upper_bound: int) -> None:
    for value in (lower_bound, upper_bound):
        data = _encode(encode_native, value, format=fmt)
        assert data == struct.pack('=' + fmt, value)
        assert decode_native(Deserializer.build_bytes_deserializer(data), format=fmt) == value
    for value in (lower_bound - 1, upper_bound + 1):
        with pytest.raises(ValueError):
            _encode(encode_native, value, format=fmt)


def test_native_sizes_have_no_padding() -> None:
    assert native_size('?') == 1
    assert native_size('f') == 4
    assert native_size('d') == 8
    assert native_size('bq') == 9


def test_native_float32_rounds() -> None:
    data = _encode(encode_native, 0.1, format='f')
    value = decode_native(Deserializer.build_bytes_deserializer(data), format='f')
    assert value != 0.1
    assert value == struct.unpack('=f', struct.pack('=f', 0.1))[0]


def test_native_bool_as_data_is_not_validated() -> None:
    de = Deserializer.build_bytes_deserializer(b'\x02\x00')
    assert decode_native(de, format='?') is True
    assert decode_native(de, format='?') is False


def test_native_array_truncated() -> None:
    de = Deserializer.build_bytes_deserializer(struct.pack('=2i', 1, 2))
    with pytest.raises(OutOfDataError):
        decode_native_array(de, format='i', count=3)


def test_presence_flag() -> None:
    assert _encode(encode_bool, True) == b'\x01'
    assert _encode(encode_bool, False) == b'\x00'
    for invalid in (b'\x02', b'\xff'):
        with pytest.raises(BadDataError):
            decode_bool(Deserializer.build_bytes_deserializer(invalid))


def test_length_prefix() -> None:
    data = _encode(encode_length, 7890)
    assert len(data) == LENGTH_PREFIX_SIZE
    assert data == struct.pack('@N', 7890)
    assert decode_length(Deserializer.build_bytes_deserializer(data)) == 7890

    assert _encode(encode_length, MAX_LENGTH) == b'\xff' * LENGTH_PREFIX_SIZE
    with pytest.raises(ValueError):
        _encode(encode_length, MAX_LENGTH + 1)


def test_length_prefix_truncated() -> None:
    data = struct.pack('@N', 3)[:-1]
    with pytest.raises(OutOfDataError):
        decode_length(Deserializer.build_bytes_deserializer(data))


def test_bytes() -> None:
    data = _encode(encode_bytes, b'')
    assert data == struct.pack('@N', 0)
    assert decode_bytes(Deserializer.build_bytes_deserializer(data)) == b''

    data = _encode(encode_bytes, bytearray(b'\x00\xff'))
    assert data == struct.pack('@N', 2) + b'\x00\xff'


def test_utf8_counts_bytes() -> None:
    data = _encode(encode_utf8, 'áéí')
    assert data[:LENGTH_PREFIX_SIZE] == struct.pack('@N', 6)
    assert decode_utf8(Deserializer.build_bytes_deserializer(data)) == 'áéí'


def test_wide_counts_characters() -> None:
    value = 'Elemental'
    data = _encode(encode_wide, value)
    assert data == struct.pack('@N', len(value)) + value.encode(WCHAR_CODEC)
    assert decode_wide(Deserializer.build_bytes_deserializer(data)) == value


def test_wide_outside_bmp() -> None:
    value = 'a\U0001F600'
    data = _encode(encode_wide, value)
    payload = value.encode(WCHAR_CODEC)
    assert data == struct.pack('@N', len(payload) // WCHAR_SIZE) + payload
    assert decode_wide(Deserializer.build_bytes_deserializer(data)) == value


def test_wide_invalid() -> None:
    # a lone surrogate is never valid, in utf-16 nor in utf-32
    payload = (0xD800).to_bytes(WCHAR_SIZE, 'little' if WCHAR_CODEC.endswith('le') else 'big')
    data = struct.pack('@N', 1) + payload
    with pytest.raises(BadDataError):
        decode_wide(Deserializer.build_bytes_deserializer(data))
