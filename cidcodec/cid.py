"""
The CID value type and its binary and text codecs.

Binary layouts::

    v0:  <0x12><0x20><32 byte sha2-256 digest>
    v1:  <version><codec><multihash>
    v2:  <version><codec><multihash><meta codec><meta multihash>

Every number except the raw digest bytes is an unsigned varint. CIDv0 has no
version or codec on the wire; it is the bare multihash, and its text form is
the bare base58btc encoding of that multihash.
"""

from functools import (
    total_ordering,
)
import logging
from typing import TYPE_CHECKING, BinaryIO

from cidcodec.base import (
    Base,
    b58decode,
    b58encode,
    decode as multibase_decode,
    encode as multibase_encode,
    to_base,
)
from cidcodec.codec import (
    Codec,
    decode_codec,
    encode_codec,
    name_for,
    validate_codec,
)
from cidcodec.digest import (
    Multihash,
)
from cidcodec.encoding_config import (
    get_default_encoding,
)
from cidcodec.exceptions import (
    BaseCidError,
    InputTooShortError,
    InvalidCidV0BaseError,
    InvalidCidV2MetadataError,
    InvalidCidVersionError,
    ParseBaseError,
    ParseHashError,
    TrailingBytesError,
    ValidationError,
)
from cidcodec.varint import (
    decode_uvarint,
    decode_uvarint_from_stream,
    encode_uvarint,
)
from cidcodec.version import (
    V0_CODEC,
    V0_HASH_CODE,
    V0_HASH_SIZE,
    Version,
    check_legal_combination,
)

if TYPE_CHECKING:
    from cidcodec.prefix import Prefix

logger = logging.getLogger("cidcodec.cid")

IPFS_DELIMITER = "/ipfs/"
# Shortest text accepted before any alphabet is even looked at.
MIN_TEXT_LEN = 2
MIN_BINARY_LEN = 2


def _to_version(version: int) -> Version:
    try:
        return Version(version)
    except ValueError as e:
        raise InvalidCidVersionError(version) from e


@total_ordering
class Cid:
    """
    A content identifier: version, content-type codec and multihash.

    Instances are immutable. Equality, ordering and hashing are defined over
    the canonical binary encoding, which is computed once at construction.
    """

    __slots__ = (
        "_version",
        "_codec",
        "_hash",
        "_meta_codec",
        "_meta_hash",
        "_bytes",
    )

    _version: Version
    _codec: int
    _hash: Multihash
    _meta_codec: int | None
    _meta_hash: Multihash | None
    _bytes: bytes

    def __init__(
        self,
        version: int,
        codec: int,
        hash: Multihash,
        *,
        meta_codec: int | None = None,
        meta_hash: Multihash | None = None,
        strict: bool = False,
    ) -> None:
        version = _to_version(version)
        codec = validate_codec(codec, strict)
        check_legal_combination(version, codec, hash.code, hash.size)

        if version == Version.V2:
            if meta_codec is None or meta_hash is None:
                raise InvalidCidV2MetadataError(
                    "CIDv2 requires a metadata codec and multihash"
                )
            meta_codec = validate_codec(meta_codec, strict)
        elif meta_codec is not None or meta_hash is not None:
            raise InvalidCidV2MetadataError(
                f"CIDv{int(version)} cannot carry a metadata multihash"
            )

        self._version = version
        self._codec = codec
        self._hash = hash
        self._meta_codec = meta_codec
        self._meta_hash = meta_hash
        self._bytes = self._encode()

    @classmethod
    def new_v0(cls, hash: Multihash) -> "Cid":
        """Create a CIDv0 from a 32 byte sha2-256 multihash."""
        return cls(Version.V0, V0_CODEC, hash)

    @classmethod
    def new_v1(cls, codec: int, hash: Multihash, strict: bool = False) -> "Cid":
        return cls(Version.V1, codec, hash, strict=strict)

    @classmethod
    def new_v2(
        cls,
        codec: int,
        hash: Multihash,
        meta_codec: int,
        meta_hash: Multihash,
        strict: bool = False,
    ) -> "Cid":
        return cls(
            Version.V2,
            codec,
            hash,
            meta_codec=meta_codec,
            meta_hash=meta_hash,
            strict=strict,
        )

    @classmethod
    def new(
        cls,
        version: int,
        codec: int,
        hash: Multihash,
        meta_codec: int | None = None,
        meta_hash: Multihash | None = None,
        strict: bool = False,
    ) -> "Cid":
        return cls(
            version,
            codec,
            hash,
            meta_codec=meta_codec,
            meta_hash=meta_hash,
            strict=strict,
        )

    @property
    def version(self) -> Version:
        return self._version

    @property
    def codec(self) -> int:
        return self._codec

    @property
    def codec_name(self) -> str | None:
        return name_for(self._codec)

    @property
    def hash(self) -> Multihash:
        return self._hash

    @property
    def meta_codec(self) -> int | None:
        return self._meta_codec

    @property
    def meta_hash(self) -> Multihash | None:
        return self._meta_hash

    def prefix(self) -> "Prefix":
        from cidcodec.prefix import Prefix

        return Prefix.from_cid(self)

    def into_v1(self) -> "Cid":
        """
        Return the CIDv1 equivalent of this CID.

        A CIDv0 becomes a dag-pb CIDv1 over the same multihash. CIDv1 is
        returned unchanged. CIDv2 cannot be narrowed without dropping its
        metadata and is rejected.
        """
        if self._version == Version.V0:
            return Cid.new_v1(Codec.DAG_PB, self._hash)
        if self._version == Version.V1:
            return self
        raise ValidationError("A CIDv2 cannot be converted to CIDv1")

    # Binary form

    def _encode(self) -> bytes:
        if self._version == Version.V0:
            return self._hash.to_bytes()

        buf = bytearray(encode_uvarint(self._version))
        buf += encode_codec(self._codec)
        buf += self._hash.to_bytes()
        if self._meta_codec is not None and self._meta_hash is not None:
            buf += encode_codec(self._meta_codec)
            buf += self._meta_hash.to_bytes()
        return bytes(buf)

    def to_bytes(self) -> bytes:
        return self._bytes

    def write_bytes(self, stream: BinaryIO) -> int:
        """Write the binary form to ``stream`` and return the number of bytes."""
        stream.write(self._bytes)
        return len(self._bytes)

    @classmethod
    def _read(cls, data: bytes, strict: bool) -> tuple["Cid", bytes]:
        if Version.is_v0_binary(data):
            # CIDv0 is the bare multihash; the digest is everything after the header
            mh, rest = Multihash.read(data)
            return cls(Version.V0, V0_CODEC, mh, strict=strict), rest

        raw_version, rest = decode_uvarint(data)
        version = Version.from_code(raw_version)
        codec, rest = decode_codec(rest)
        mh, rest = Multihash.read(rest)

        if version != Version.V2:
            return cls(version, codec, mh, strict=strict), rest

        meta_codec, rest = decode_codec(rest)
        meta_hash, rest = Multihash.read(rest)
        cid = cls(
            version,
            codec,
            mh,
            meta_codec=meta_codec,
            meta_hash=meta_hash,
            strict=strict,
        )
        return cid, rest

    @classmethod
    def from_bytes(cls, data: bytes, strict: bool = False) -> "Cid":
        """
        Decode a CID from its binary form.

        ``data`` must hold exactly one CID. With ``strict=True`` codecs outside
        the well-known table are rejected.
        """
        data = bytes(data)
        try:
            if len(data) < MIN_BINARY_LEN:
                raise InputTooShortError()
            cid, rest = cls._read(data, strict)
            if rest:
                raise TrailingBytesError(len(rest))
        except BaseCidError as e:
            logger.debug("Rejected binary CID %s: %s", data.hex(), e)
            raise
        return cid

    @classmethod
    def read_bytes(cls, stream: BinaryIO, strict: bool = False) -> "Cid":
        """
        Read one CID from a binary stream, consuming only its bytes.

        The first two varints are either the CIDv0 multihash header
        ``0x12 0x20`` or an explicit version followed by the codec.
        """
        first = decode_uvarint_from_stream(stream)
        second = decode_uvarint_from_stream(stream)
        if (first, second) == (V0_HASH_CODE, V0_HASH_SIZE):
            digest = stream.read(V0_HASH_SIZE)
            if len(digest) != V0_HASH_SIZE:
                raise ParseHashError(
                    f"CIDv0 digest truncated to {len(digest)} byte(s)"
                )
            return cls.new_v0(Multihash(V0_HASH_CODE, digest))

        version = Version.from_code(first)
        mh = Multihash.read_stream(stream)
        if version != Version.V2:
            return cls(version, second, mh, strict=strict)

        meta_codec = decode_uvarint_from_stream(stream)
        meta_hash = Multihash.read_stream(stream)
        return cls(
            version,
            second,
            mh,
            meta_codec=meta_codec,
            meta_hash=meta_hash,
            strict=strict,
        )

    # Text form

    def to_string(self, base: Base | str | None = None) -> str:
        """
        Encode the CID as text.

        CIDv0 is always bare base58btc; asking for any other base is an error.
        CIDv1 and CIDv2 are multibase encoded with ``base``, or with the
        configured default (base32) when ``base`` is omitted.
        """
        if self._version == Version.V0:
            if base is not None and to_base(base) != Base.BASE58BTC:
                raise InvalidCidV0BaseError(str(base))
            return b58encode(self._bytes)

        if base is None:
            base = get_default_encoding()
        return multibase_encode(base, self._bytes)

    @classmethod
    def from_string(cls, text: str, strict: bool = False) -> "Cid":
        """
        Decode a CID from text.

        Anything up to and including an ``/ipfs/`` path segment is ignored, so
        gateway URLs and IPFS paths are accepted as well as bare CIDs.
        """
        index = text.find(IPFS_DELIMITER)
        if index != -1:
            text = text[index + len(IPFS_DELIMITER) :]

        if len(text) < MIN_TEXT_LEN:
            raise InputTooShortError()

        if Version.is_v0_str(text):
            # A CIDv0 string is nothing but a base58btc multihash
            try:
                data = b58decode(text)
            except ParseBaseError as e:
                logger.debug("Rejected CIDv0 string %r: %s", text, e)
                raise ParseHashError(f"Invalid CIDv0 multihash: {e}") from e
            if not Version.is_v0_binary(data):
                raise ParseHashError("CIDv0 string does not hold a sha2-256 multihash")
            return cls.from_bytes(data, strict)

        try:
            _, data = multibase_decode(text)
        except ParseBaseError as e:
            logger.debug("Rejected CID string %r: %s", text, e)
            raise
        return cls.from_bytes(data, strict)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"<cidcodec.cid.Cid ({self!s})>"

    def __bytes__(self) -> bytes:
        return self._bytes

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cid):
            return NotImplemented
        return self._bytes == other._bytes

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Cid):
            return NotImplemented
        return self._bytes < other._bytes

    def __hash__(self) -> int:
        return hash(self._bytes)
