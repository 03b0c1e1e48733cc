class BaseCidError(Exception):
    pass


class ParseError(BaseCidError):
    """Raised when bytes or text cannot be decoded into a CID."""


class InputTooShortError(ParseError):
    def __init__(self, message: str = "Input too short") -> None:
        super().__init__(message)


class ParseBaseError(ParseError):
    """Raised when the multibase text form cannot be decoded."""


class ParseHashError(ParseError):
    """Raised when the embedded multihash is malformed or truncated."""


class VarintDecodeError(ParseError):
    """Raised on a truncated, overlong or non-minimal unsigned varint."""


class TrailingBytesError(ParseError):
    def __init__(self, remaining: int) -> None:
        super().__init__(f"{remaining} unconsumed byte(s) after CID")
        self.remaining = remaining


class ValidationError(BaseCidError):
    """Raised when something does not pass a validation check."""


class UnknownCodecError(ValidationError):
    def __init__(self, code: int) -> None:
        super().__init__(f"Unknown codec: {code:#x}")
        self.code = code


class InvalidCidVersionError(ValidationError):
    def __init__(self, version: int) -> None:
        super().__init__(f"Unrecognized CID version: {version}")
        self.version = version


class InvalidCidV0CodecError(ValidationError):
    def __init__(self, codec: int) -> None:
        super().__init__(f"CIDv0 requires the dag-pb codec, got {codec:#x}")
        self.codec = codec


class InvalidCidV0MultihashError(ValidationError):
    def __init__(self, hash_code: int, size: int) -> None:
        super().__init__(
            "CIDv0 requires a 32 byte sha2-256 multihash, "
            f"got code {hash_code:#x} with {size} byte(s)"
        )
        self.hash_code = hash_code
        self.size = size


class InvalidCidV0BaseError(ValidationError):
    def __init__(self, base: str) -> None:
        super().__init__(f"CIDv0 can only be encoded as base58btc, not {base}")
        self.base = base


class InvalidCidV2MetadataError(ValidationError):
    """Raised when metadata is missing for a CIDv2 or supplied for V0/V1."""


class DigestMismatchError(ValidationError):
    """Raised when a digest does not fit the prefix it is combined with."""
