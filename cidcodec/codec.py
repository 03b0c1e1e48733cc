"""
Multicodec content-type codes used by CIDs.

Codes are an open numeric space: any unsigned integer is structurally valid
in a CIDv1. The :class:`Codec` table only names the well-known ones. Callers
that need a closed table pass ``strict=True`` and get
:class:`~cidcodec.exceptions.UnknownCodecError` for anything else.
"""

from enum import IntEnum

from cidcodec.exceptions import (
    UnknownCodecError,
)
from cidcodec.varint import (
    MAX_U64,
    decode_uvarint,
    encode_uvarint,
)


class Codec(IntEnum):
    RAW = 0x55
    DAG_PB = 0x70
    DAG_CBOR = 0x71
    DAG_JSON = 0x0129
    GIT_RAW = 0x78
    ETH_BLOCK = 0x90
    ETH_BLOCK_LIST = 0x91
    ETH_TX_TRIE = 0x92
    ETH_TX = 0x93
    ETH_TX_RECEIPT_TRIE = 0x94
    ETH_TX_RECEIPT = 0x95
    ETH_STATE_TRIE = 0x96
    ETH_ACCOUNT_SNAPSHOT = 0x97
    ETH_STORAGE_TRIE = 0x98
    BTC_BLOCK = 0xB0
    BTC_TX = 0xB1
    ZEC_BLOCK = 0xC0
    ZEC_TX = 0xC1

    @property
    def tag(self) -> str:
        return _CODE_TO_NAME[self]


_CODE_TO_NAME: dict[int, str] = {
    Codec.RAW: "raw",
    Codec.DAG_PB: "dag-pb",
    Codec.DAG_CBOR: "dag-cbor",
    Codec.DAG_JSON: "dag-json",
    Codec.GIT_RAW: "git-raw",
    Codec.ETH_BLOCK: "eth-block",
    Codec.ETH_BLOCK_LIST: "eth-block-list",
    Codec.ETH_TX_TRIE: "eth-tx-trie",
    Codec.ETH_TX: "eth-tx",
    Codec.ETH_TX_RECEIPT_TRIE: "eth-tx-receipt-trie",
    Codec.ETH_TX_RECEIPT: "eth-tx-receipt",
    Codec.ETH_STATE_TRIE: "eth-state-trie",
    Codec.ETH_ACCOUNT_SNAPSHOT: "eth-account-snapshot",
    Codec.ETH_STORAGE_TRIE: "eth-storage-trie",
    Codec.BTC_BLOCK: "btc-block",
    Codec.BTC_TX: "btc-tx",
    Codec.ZEC_BLOCK: "zec-block",
    Codec.ZEC_TX: "zec-tx",
}
_NAME_TO_CODE: dict[str, int] = {name: code for code, name in _CODE_TO_NAME.items()}


def encode_codec(code: int) -> bytes:
    return encode_uvarint(code)


def decode_codec(data: bytes) -> tuple[int, bytes]:
    """Read a codec varint, returning ``(code, rest)``."""
    return decode_uvarint(data)


def name_for(code: int) -> str | None:
    """Return the multicodec name for ``code``, or ``None`` if it is not known."""
    return _CODE_TO_NAME.get(code)


def code_for(name: str) -> int:
    try:
        return _NAME_TO_CODE[name]
    except KeyError as e:
        raise ValueError(f"Unknown codec name {name!r}") from e


def is_known(code: int) -> bool:
    return code in _CODE_TO_NAME


def validate_codec(code: int, strict: bool = False) -> int:
    """
    Check that ``code`` can be used as a CID content type.

    Codes outside the unsigned 64 bit range are never valid. In strict mode the
    code must also be one of the entries of :class:`Codec`. Known codes are
    returned as the enum member.
    """
    if code < 0 or code > MAX_U64:
        raise UnknownCodecError(code)
    if code in _CODE_TO_NAME:
        return Codec(code)
    if strict:
        raise UnknownCodecError(code)
    return code


def list_codec_names() -> list[str]:
    return sorted(_NAME_TO_CODE)
