"""
CIDs as DAG-JSON links.

A link is a JSON object with the single key ``"/"`` whose value is the CID's
string form: bare base58btc for CIDv0 and base32 multibase otherwise.

Reference: https://ipld.io/specs/codecs/dag-json/spec/#links
"""

import json
from typing import Any

from cidcodec.base import (
    Base,
)
from cidcodec.cid import (
    Cid,
)
from cidcodec.exceptions import (
    ParseError,
)
from cidcodec.version import (
    Version,
)

LINK_KEY = "/"


def encode_cid(cid: Cid) -> dict[str, str]:
    if cid.version == Version.V0:
        return {LINK_KEY: cid.to_string()}
    return {LINK_KEY: cid.to_string(Base.BASE32)}


def _is_link(obj: dict[str, Any]) -> bool:
    return len(obj) == 1 and isinstance(obj.get(LINK_KEY), str)


def decode_cid(obj: Any) -> Cid:
    if not isinstance(obj, dict) or not _is_link(obj):
        raise ParseError("expected a JSON object with the single key '/'")
    return Cid.from_string(obj[LINK_KEY])


def object_hook(obj: dict[str, Any]) -> Any:
    """``object_hook`` for :func:`json.loads` that turns links into CIDs."""
    if _is_link(obj):
        return decode_cid(obj)
    return obj


class CidJSONEncoder(json.JSONEncoder):
    def default(self, o: Any) -> Any:
        if isinstance(o, Cid):
            return encode_cid(o)
        return super().default(o)


def dumps(obj: Any) -> str:
    return json.dumps(obj, cls=CidJSONEncoder, separators=(",", ":"), sort_keys=True)


def loads(text: str | bytes) -> Any:
    return json.loads(text, object_hook=object_hook)
