"""IPLD data-model bridges for CIDs."""

from cidcodec.ipld import (
    dag_cbor,
    dag_json,
)

__all__ = [
    "dag_cbor",
    "dag_json",
]
