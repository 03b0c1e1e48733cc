"""
Text alphabets for CIDs.

CIDv1 and later are written in multibase: a one character prefix selecting the
alphabet followed by the encoded bytes (py-multibase). CIDv0 predates
multibase and is bare base58btc with no prefix (base58).
"""

from enum import Enum

import base58
import multibase

from cidcodec.exceptions import (
    ParseBaseError,
)


class Base(str, Enum):
    BASE16 = "base16"
    BASE32HEX = "base32hex"
    BASE32 = "base32"
    BASE32Z = "base32z"
    BASE36 = "base36"
    BASE58FLICKR = "base58flickr"
    BASE58BTC = "base58btc"
    BASE64 = "base64"
    BASE64URL = "base64url"

    def __str__(self) -> str:
        return self.value


def to_base(base: "Base | str") -> Base:
    try:
        return Base(base)
    except ValueError as e:
        supported = ", ".join(b.value for b in Base)
        raise ValueError(
            f"Unsupported encoding {base!r}. Supported encodings: {supported}"
        ) from e


def encode(base: "Base | str", data: bytes) -> str:
    """Multibase-encode ``data``, including the alphabet prefix."""
    return multibase.encode(to_base(base).value, data).decode()


def decode(text: str) -> tuple[str, bytes]:
    """
    Decode a multibase string.

    Returns the name of the alphabet that was selected by the prefix and the
    decoded bytes. Any alphabet py-multibase knows is accepted here, not only
    the ones listed in :class:`Base`.
    """
    try:
        codec = multibase.get_codec(text)
        data = multibase.decode(text)
    except (ValueError, KeyError, TypeError) as e:
        raise ParseBaseError(f"Failed to parse multibase: {e}") from e
    return codec.encoding, bytes(data)


def b58encode(data: bytes) -> str:
    """Bare base58btc, as used by CIDv0."""
    return base58.b58encode(data).decode()


def b58decode(text: str) -> bytes:
    try:
        return base58.b58decode(text)
    except (ValueError, KeyError) as e:
        raise ParseBaseError(f"Failed to parse base58btc: {e}") from e
