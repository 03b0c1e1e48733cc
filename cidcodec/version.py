"""
CID versions and the rules that tie each version to its legal content.

CIDv0 carries no explicit version on the wire. It is recognised purely by
shape: a 34 byte binary form starting with the sha2-256 multihash header, or
a 46 character base58btc string starting with ``Qm``.
"""

from enum import IntEnum

from cidcodec.exceptions import (
    InvalidCidV0CodecError,
    InvalidCidV0MultihashError,
    InvalidCidVersionError,
)

# dag-pb multicodec, the only content type CIDv0 can reference
V0_CODEC = 0x70
# sha2-256 multihash code and its digest length
V0_HASH_CODE = 0x12
V0_HASH_SIZE = 32

V0_BINARY_PREFIX = bytes([V0_HASH_CODE, V0_HASH_SIZE])
V0_BINARY_LEN = len(V0_BINARY_PREFIX) + V0_HASH_SIZE
V0_STR_PREFIX = "Qm"
V0_STR_LEN = 46


class Version(IntEnum):
    V0 = 0
    V1 = 1
    V2 = 2

    @classmethod
    def from_code(cls, code: int) -> "Version":
        """
        Map an explicit wire version to a :class:`Version`.

        Version 0 is never written explicitly, so it is rejected here like any
        other unknown number.
        """
        if code == cls.V0:
            raise InvalidCidVersionError(code)
        try:
            return cls(code)
        except ValueError as e:
            raise InvalidCidVersionError(code) from e

    @staticmethod
    def is_v0_str(data: str) -> bool:
        """Check if the version of ``data`` string is CIDv0."""
        return len(data) == V0_STR_LEN and data.startswith(V0_STR_PREFIX)

    @staticmethod
    def is_v0_binary(data: bytes) -> bool:
        """Check if the version of ``data`` bytes is CIDv0."""
        return data[: len(V0_BINARY_PREFIX)] == V0_BINARY_PREFIX


def is_legal_combination(
    version: Version, codec: int, hash_code: int, hash_size: int = V0_HASH_SIZE
) -> bool:
    if version == Version.V0:
        return (
            codec == V0_CODEC
            and hash_code == V0_HASH_CODE
            and hash_size == V0_HASH_SIZE
        )
    return True


def check_legal_combination(
    version: Version, codec: int, hash_code: int, hash_size: int = V0_HASH_SIZE
) -> None:
    """
    Raise if ``codec`` and the multihash cannot be used with ``version``.

    Shared by direct construction and by parsing, so both paths enforce the
    same CIDv0 constraints.
    """
    if is_legal_combination(version, codec, hash_code, hash_size):
        return
    if codec != V0_CODEC:
        raise InvalidCidV0CodecError(codec)
    raise InvalidCidV0MultihashError(hash_code, hash_size)
