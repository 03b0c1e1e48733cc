import math
from typing import BinaryIO

from cidcodec.exceptions import (
    VarintDecodeError,
)

# Unsigned LEB128(varint codec)
# Reference: https://github.com/multiformats/unsigned-varint

LOW_MASK = 2**7 - 1
HIGH_MASK = 2**7

MAX_U64 = 2**64 - 1

# A 64 bit integer never needs more than 10 varint bytes.
MAX_VARINT_LEN_64 = int(math.ceil(64 / 7))


def encode_uvarint(value: int) -> bytes:
    """Encode an unsigned integer as a varint."""
    if value < 0:
        raise ValueError("Cannot encode negative value as uvarint")
    if value > MAX_U64:
        raise ValueError(f"Cannot encode {value} as uvarint: exceeds 64 bits")

    result = bytearray()
    while value >= HIGH_MASK:
        result.append((value & LOW_MASK) | HIGH_MASK)
        value >>= 7
    result.append(value & LOW_MASK)
    return bytes(result)


def decode_varint_with_size(data: bytes) -> tuple[int, int]:
    """
    Decode a varint from the start of ``data`` and return both the value and the
    number of bytes consumed.

    Only the minimal encoding of a value up to 64 bits is accepted.

    Returns:
        Tuple[int, int]: (value, bytes_consumed)

    Raises:
        VarintDecodeError: If the input is empty or truncated, the value does not
            fit in 64 bits, or the encoding is not minimal.

    """
    if not data:
        raise VarintDecodeError("Unexpected end of data")

    result = 0
    for index, byte in enumerate(data):
        if index >= MAX_VARINT_LEN_64:
            raise VarintDecodeError("Varint too long")
        result |= (byte & LOW_MASK) << (7 * index)
        if not byte & HIGH_MASK:
            if byte == 0 and index > 0:
                raise VarintDecodeError("Varint is not minimally encoded")
            if result > MAX_U64:
                raise VarintDecodeError("Varint exceeds 64 bits")
            return result, index + 1

    raise VarintDecodeError("Unexpected end of data inside varint")


def decode_uvarint(data: bytes) -> tuple[int, bytes]:
    """Decode a varint and return it together with the unconsumed remainder."""
    value, size = decode_varint_with_size(data)
    return value, data[size:]


def decode_uvarint_from_stream(stream: BinaryIO) -> int:
    """Read exactly one varint from a binary stream."""
    buffer = bytearray()
    while True:
        byte_data = stream.read(1)
        if not byte_data:
            raise VarintDecodeError("Stream ended while reading varint")
        buffer += byte_data
        if not byte_data[0] & HIGH_MASK or len(buffer) > MAX_VARINT_LEN_64:
            break

    value, _ = decode_varint_with_size(bytes(buffer))
    return value
