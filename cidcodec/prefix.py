"""
CID prefixes: all of a CID's metadata without the digest itself.

A prefix remembers how content was identified (version, codec, hash function
and digest length) so that new content can be identified the same way, e.g.
when a block is received without its CID and has to be re-identified.
"""

from dataclasses import (
    dataclass,
)
import logging

from cidcodec.cid import (
    Cid,
)
from cidcodec.codec import (
    validate_codec,
)
from cidcodec.digest import (
    Multihash,
    is_registered_hash,
)
from cidcodec.exceptions import (
    BaseCidError,
    DigestMismatchError,
    InvalidCidVersionError,
    TrailingBytesError,
    UnknownCodecError,
)
from cidcodec.varint import (
    decode_uvarint,
    encode_uvarint,
)
from cidcodec.version import (
    Version,
    check_legal_combination,
)

logger = logging.getLogger("cidcodec.prefix")


@dataclass(frozen=True)
class Prefix:
    """
    Metadata of a CID without the digest bytes.

    For CIDv0 and CIDv1, ``prefix.to_cid(cid.hash)`` rebuilds the original CID.
    A prefix holds nothing of a CIDv2 metadata multihash, so rebuilding a CIDv2
    also needs ``meta_codec`` and ``meta_hash`` passed to :meth:`to_cid`.

    Attributes:
        version: The CID version.
        codec: The content-type multicodec.
        mh_type: The multihash function code.
        mh_len: The digest length in bytes.

    """

    version: Version
    codec: int
    mh_type: int
    mh_len: int

    def __post_init__(self) -> None:
        try:
            version = Version(self.version)
        except ValueError as e:
            raise InvalidCidVersionError(self.version) from e
        object.__setattr__(self, "version", version)
        object.__setattr__(self, "codec", validate_codec(self.codec))
        if self.mh_len < 0:
            raise ValueError(f"Digest length must not be negative: {self.mh_len}")
        check_legal_combination(version, self.codec, self.mh_type, self.mh_len)

    @classmethod
    def from_cid(cls, cid: Cid) -> "Prefix":
        return cls(
            version=cid.version,
            codec=cid.codec,
            mh_type=cid.hash.code,
            mh_len=cid.hash.size,
        )

    def to_cid(
        self,
        hash: Multihash,
        truncate: bool = False,
        meta_codec: int | None = None,
        meta_hash: Multihash | None = None,
    ) -> Cid:
        """
        Combine the prefix with a digest into a CID.

        The digest must use the prefix's hash function. A digest longer than
        ``mh_len`` is only accepted with ``truncate=True``, in which case it is
        cut down to ``mh_len`` bytes. A CIDv2 prefix also needs the metadata
        codec and multihash.

        Raises:
            DigestMismatchError: If the hash function or length does not fit.

        """
        if hash.code != self.mh_type:
            raise DigestMismatchError(
                f"Digest uses hash function {hash.code:#x}, "
                f"prefix expects {self.mh_type:#x}"
            )
        if hash.size != self.mh_len:
            if not (truncate and hash.size > self.mh_len):
                raise DigestMismatchError(
                    f"Digest is {hash.size} byte(s) long, prefix expects {self.mh_len}"
                )
            hash = hash.truncate(self.mh_len)

        return Cid(
            self.version,
            self.codec,
            hash,
            meta_codec=meta_codec,
            meta_hash=meta_hash,
        )

    def sum(self, data: bytes) -> Cid:
        """Hash ``data`` the way this prefix describes and return its CID."""
        mh = Multihash.from_data(data, self.mh_type)
        return self.to_cid(mh, truncate=True)

    def to_bytes(self) -> bytes:
        return b"".join(
            (
                encode_uvarint(self.version),
                encode_uvarint(self.codec),
                encode_uvarint(self.mh_type),
                encode_uvarint(self.mh_len),
            )
        )

    @classmethod
    def from_bytes(cls, data: bytes, strict: bool = False) -> "Prefix":
        """
        Decode a prefix from its binary form.

        All four fields are always present, CIDv0 included. With
        ``strict=True`` the codec must be well known and the hash function must
        be registered with pymultihash.
        """
        data = bytes(data)
        try:
            raw_version, rest = decode_uvarint(data)
            codec, rest = decode_uvarint(rest)
            mh_type, rest = decode_uvarint(rest)
            mh_len, rest = decode_uvarint(rest)
            if rest:
                raise TrailingBytesError(len(rest))
            if strict:
                validate_codec(codec, strict=True)
                if not is_registered_hash(mh_type):
                    raise UnknownCodecError(mh_type)
            return cls(raw_version, codec, mh_type, mh_len)
        except BaseCidError as e:
            logger.debug("Rejected CID prefix %s: %s", data.hex(), e)
            raise

    def __bytes__(self) -> bytes:
        return self.to_bytes()
