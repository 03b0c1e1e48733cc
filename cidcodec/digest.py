"""
Multihash digests as carried inside CIDs.

Hash functions and their registry come from ``pymultihash``. The framing here
is the varint one used by CIDs, ``varint(code) | varint(size) | digest``, so
codes and sizes beyond a single byte are read and written correctly.
"""

from typing import Any, BinaryIO

import multihash

from cidcodec.exceptions import (
    ParseHashError,
    TrailingBytesError,
    VarintDecodeError,
)
from cidcodec.varint import (
    MAX_U64,
    decode_uvarint,
    decode_uvarint_from_stream,
    encode_uvarint,
)

SHA2_256 = multihash.Func.sha2_256.value


def hash_name(code: int) -> str | None:
    """Return the pymultihash name for ``code``, e.g. ``'sha2-256'``."""
    try:
        func = multihash.FuncReg.get(code)
    except (KeyError, ValueError):
        return None
    func_name = getattr(func, "name", None)
    if func_name is None:
        return None
    return func_name.replace("_", "-")


def is_registered_hash(code: int) -> bool:
    return hash_name(code) is not None


class Multihash:
    """An immutable ``(code, digest)`` pair."""

    __slots__ = ("_code", "_digest")

    _code: int
    _digest: bytes

    def __init__(self, code: int, digest: bytes) -> None:
        if not 0 <= code <= MAX_U64:
            raise ValueError(f"Multihash code {code} is out of range")
        self._code = int(code)
        self._digest = bytes(digest)

    @property
    def code(self) -> int:
        return self._code

    @property
    def digest(self) -> bytes:
        return self._digest

    @property
    def size(self) -> int:
        return len(self._digest)

    @property
    def name(self) -> str | None:
        return hash_name(self._code)

    @classmethod
    def wrap(cls, code: int, digest: bytes) -> "Multihash":
        return cls(code, digest)

    @classmethod
    def from_data(cls, data: bytes, func: Any = SHA2_256) -> "Multihash":
        """
        Hash ``data`` with ``func``.

        ``func`` is anything pymultihash accepts as a hash function hint: a
        ``multihash.Func`` member, a numeric code or a name such as
        ``'sha2-256'``.
        """
        try:
            mh = multihash.digest(data, func)
        except (KeyError, ValueError) as e:
            raise ValueError(f"Unsupported hash function {func!r}") from e
        return cls.from_pymultihash(mh)

    @classmethod
    def from_pymultihash(cls, mh: "multihash.Multihash") -> "Multihash":
        func = mh.func
        code = func.value if isinstance(func, multihash.Func) else int(func)
        return cls(code, mh.digest)

    def to_pymultihash(self) -> "multihash.Multihash":
        return multihash.Multihash(self._code, self._digest)

    @classmethod
    def read(cls, data: bytes) -> tuple["Multihash", bytes]:
        """
        Read one multihash from the start of ``data``.

        Exactly as many digest bytes as the size field declares are consumed.
        Returns the multihash and the unconsumed remainder.
        """
        try:
            code, rest = decode_uvarint(data)
            size, rest = decode_uvarint(rest)
        except VarintDecodeError as e:
            raise ParseHashError(f"Invalid multihash header: {e}") from e
        if len(rest) < size:
            raise ParseHashError(
                f"Multihash declares {size} digest bytes, only {len(rest)} present"
            )
        return cls(code, rest[:size]), rest[size:]

    @classmethod
    def read_stream(cls, stream: BinaryIO) -> "Multihash":
        try:
            code = decode_uvarint_from_stream(stream)
            size = decode_uvarint_from_stream(stream)
        except VarintDecodeError as e:
            raise ParseHashError(f"Invalid multihash header: {e}") from e
        digest = stream.read(size)
        if len(digest) != size:
            raise ParseHashError(
                f"Multihash declares {size} digest bytes, only {len(digest)} present"
            )
        return cls(code, digest)

    @classmethod
    def from_bytes(cls, data: bytes) -> "Multihash":
        mh, rest = cls.read(data)
        if rest:
            raise TrailingBytesError(len(rest))
        return mh

    def to_bytes(self) -> bytes:
        return encode_uvarint(self._code) + encode_uvarint(self.size) + self._digest

    def truncate(self, size: int) -> "Multihash":
        """Return a multihash whose digest is cut down to ``size`` bytes."""
        if size >= self.size:
            return self
        return Multihash(self._code, self._digest[:size])

    def verify(self, data: bytes) -> bool:
        """Check whether ``data`` hashes to this (possibly truncated) digest."""
        computed = Multihash.from_data(data, self._code)
        return computed.digest[: self.size] == self._digest

    def __bytes__(self) -> bytes:
        return self.to_bytes()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Multihash):
            return NotImplemented
        return self._code == other._code and self._digest == other._digest

    def __hash__(self) -> int:
        return hash((self._code, self._digest))

    def __repr__(self) -> str:
        label = self.name or hex(self._code)
        return f"<cidcodec.digest.Multihash ({label}, {self._digest.hex()})>"
