import io

import pytest

from cidcodec.exceptions import (
    ParseError,
    VarintDecodeError,
)
from cidcodec.varint import (
    MAX_U64,
    MAX_VARINT_LEN_64,
    decode_uvarint,
    decode_uvarint_from_stream,
    decode_varint_with_size,
    encode_uvarint,
)

VARINT_CASES = [
    (0, b"\x00"),
    (1, b"\x01"),
    (127, b"\x7f"),
    (128, b"\x80\x01"),
    (255, b"\xff\x01"),
    (256, b"\x80\x02"),
    (0x0129, b"\xa9\x02"),
    (65535, b"\xff\xff\x03"),
    (65536, b"\x80\x80\x04"),
    (16777215, b"\xff\xff\xff\x07"),
    (16777216, b"\x80\x80\x80\x08"),
    (MAX_U64, b"\xff" * 9 + b"\x01"),
]


def test_encode_uvarint():
    """Test varint encoding with various values."""
    for value, expected in VARINT_CASES:
        result = encode_uvarint(value)
        assert result == expected, (
            f"Failed for value {value}: expected {expected.hex()}, got {result.hex()}"
        )


def test_decode_varint_with_size():
    """Test varint decoding with various values."""
    for expected, data in VARINT_CASES:
        value, size = decode_varint_with_size(data + b"tail")
        assert value == expected, (
            f"Failed for data {data.hex()}: expected {expected}, got {value}"
        )
        assert size == len(data)


def test_decode_uvarint_returns_remainder():
    assert decode_uvarint(b"\xa9\x02rest") == (0x0129, b"rest")
    assert decode_uvarint(b"\x01") == (1, b"")


@pytest.mark.parametrize("value", [-1, MAX_U64 + 1])
def test_encode_uvarint_out_of_range(value):
    with pytest.raises(ValueError):
        encode_uvarint(value)


def test_decode_empty():
    with pytest.raises(VarintDecodeError, match="Unexpected end of data"):
        decode_varint_with_size(b"")


def test_decode_truncated():
    with pytest.raises(VarintDecodeError):
        decode_varint_with_size(b"\x80")
    with pytest.raises(VarintDecodeError):
        decode_varint_with_size(b"\xff\xff")


@pytest.mark.parametrize("data", [b"\x80\x00", b"\x81\x00", b"\xff\x80\x00"])
def test_decode_rejects_non_minimal(data):
    with pytest.raises(VarintDecodeError, match="minimal"):
        decode_varint_with_size(data)


def test_decode_rejects_overlong():
    data = b"\x80" * MAX_VARINT_LEN_64 + b"\x01"
    with pytest.raises(VarintDecodeError, match="too long"):
        decode_varint_with_size(data)


def test_decode_rejects_values_above_64_bits():
    # 10 bytes, but the last one carries more than the single remaining bit
    data = b"\xff" * 9 + b"\x02"
    with pytest.raises(VarintDecodeError, match="64 bits"):
        decode_varint_with_size(data)


def test_varint_errors_are_parse_errors():
    with pytest.raises(ParseError):
        decode_uvarint(b"")


def test_decode_from_stream_reads_one_varint():
    stream = io.BytesIO(b"\xa9\x02\x01rest")
    assert decode_uvarint_from_stream(stream) == 0x0129
    assert decode_uvarint_from_stream(stream) == 1
    assert stream.read() == b"rest"


def test_decode_from_stream_errors():
    with pytest.raises(VarintDecodeError, match="Stream ended"):
        decode_uvarint_from_stream(io.BytesIO(b""))
    with pytest.raises(VarintDecodeError, match="Stream ended"):
        decode_uvarint_from_stream(io.BytesIO(b"\x80\x80"))
    with pytest.raises(VarintDecodeError, match="too long"):
        decode_uvarint_from_stream(io.BytesIO(b"\x80" * 12))
