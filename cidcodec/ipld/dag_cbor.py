"""
CIDs as DAG-CBOR links.

A link is the CID's binary form, prefixed with the raw-binary multibase
identity byte ``0x00``, stored as a byte string under CBOR tag 42. The
identity byte must not be omitted.

Reference: https://ipld.io/specs/codecs/dag-cbor/spec/#links
"""

from typing import Any

import cbor2

from cidcodec.cid import (
    Cid,
)
from cidcodec.exceptions import (
    ParseError,
)

CBOR_TAG_CID = 42
RAW_BINARY_MULTIBASE_IDENTITY = b"\x00"


def encode_cid(cid: Cid) -> cbor2.CBORTag:
    return cbor2.CBORTag(CBOR_TAG_CID, RAW_BINARY_MULTIBASE_IDENTITY + cid.to_bytes())


def decode_cid(value: cbor2.CBORTag | bytes) -> Cid:
    """
    Decode a link back into a :class:`Cid`.

    Accepts either the tagged value or the bare byte string inside it.
    """
    if isinstance(value, cbor2.CBORTag):
        if value.tag != CBOR_TAG_CID:
            raise ParseError(f"Unexpected CBOR tag {value.tag}, expected {CBOR_TAG_CID}")
        value = value.value

    if not isinstance(value, (bytes, bytearray)):
        raise ParseError(f"CID link must be a byte string, got {type(value).__name__}")
    if value[:1] != RAW_BINARY_MULTIBASE_IDENTITY:
        raise ParseError("raw binary multibase identity 0x00 must not be omitted")

    return Cid.from_bytes(bytes(value[1:]))


def default_encoder(encoder: cbor2.CBOREncoder, value: Any) -> None:
    """``default`` hook for :func:`cbor2.dumps` that writes CIDs as links."""
    if isinstance(value, Cid):
        encoder.encode(encode_cid(value))
        return
    raise cbor2.CBOREncodeError(f"cannot serialize type {type(value).__name__}")


def tag_hook(*args: Any) -> Any:
    """
    ``tag_hook`` for :func:`cbor2.loads` that turns tag 42 into a CID.

    cbor2 5.x calls the hook as ``(decoder, tag)`` and cbor2 6.x as
    ``(tag, immutable)``; the tag is whichever argument is a ``CBORTag``.
    """
    tag = next((arg for arg in args if isinstance(arg, cbor2.CBORTag)), None)
    if tag is None:
        raise TypeError("tag_hook called without a CBORTag argument")
    if tag.tag == CBOR_TAG_CID:
        return decode_cid(tag)
    return tag


def dumps(obj: Any) -> bytes:
    return cbor2.dumps(obj, default=default_encoder, canonical=True)


def loads(data: bytes) -> Any:
    return cbor2.loads(data, tag_hook=tag_hook)
