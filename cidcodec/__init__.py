"""Content identifiers (CIDs): self-describing, versioned content addresses."""

from importlib.metadata import version as __version

from cidcodec.base import (
    Base,
)
from cidcodec.cid import (
    Cid,
)
from cidcodec.codec import (
    Codec,
)
from cidcodec.digest import (
    Multihash,
)
from cidcodec.encoding_config import (
    encoding_override,
    get_default_encoding,
    set_default_encoding,
)
from cidcodec.exceptions import (
    BaseCidError,
    ParseError,
    ValidationError,
)
from cidcodec.prefix import (
    Prefix,
)
from cidcodec.utils.logging import (
    setup_logging,
)
from cidcodec.version import (
    Version,
)

# Initialize logging configuration
setup_logging()

__version__ = __version("cidcodec")

__all__ = [
    "Base",
    "BaseCidError",
    "Cid",
    "Codec",
    "Multihash",
    "ParseError",
    "Prefix",
    "ValidationError",
    "Version",
    "encoding_override",
    "get_default_encoding",
    "set_default_encoding",
]
