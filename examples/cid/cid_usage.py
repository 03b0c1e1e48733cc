#!/usr/bin/env python3

import logging

from cidcodec import (
    Base,
    Cid,
    Codec,
    Multihash,
    Prefix,
    encoding_override,
)
from cidcodec.ipld import (
    dag_cbor,
    dag_json,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
)
logger = logging.getLogger(__name__)


def main() -> None:
    data = b"Hello, IPFS!"
    mh = Multihash.from_data(data)

    cid_v0 = Cid.new_v0(mh)
    cid_v1_raw = Cid.new_v1(Codec.RAW, mh)
    cid_v1_dag_pb = cid_v0.into_v1()

    logger.info("CIDv0: %s", cid_v0)
    logger.info("CIDv1 (raw): %s", cid_v1_raw)
    logger.info("CIDv1 (dag-pb): %s", cid_v1_dag_pb)
    logger.info("CIDv1 (raw, base58btc): %s", cid_v1_raw.to_string(Base.BASE58BTC))

    with encoding_override("base36"):
        logger.info("CIDv1 (raw, default base36): %s", cid_v1_raw)

    logger.info("verify(data): %s", cid_v1_raw.hash.verify(data))
    logger.info("verify(b'bad'): %s", cid_v1_raw.hash.verify(b"bad"))

    for name, cid in [
        ("CIDv0", cid_v0),
        ("CIDv1 raw", cid_v1_raw),
        ("CIDv1 dag-pb", cid_v1_dag_pb),
    ]:
        logger.info(
            "%s: version=%s, codec=%s, hash=%s, binary=%s",
            name,
            int(cid.version),
            cid.codec_name,
            cid.hash.name,
            cid.to_bytes().hex(),
        )

    prefix = Prefix.from_cid(cid_v1_raw)
    logger.info("Prefix %s recomputes: %s", prefix, prefix.sum(data) == cid_v1_raw)

    parsed = Cid.from_string(f"https://ipfs.io/ipfs/{cid_v0}")
    logger.info("Parsed from gateway URL matches: %s", parsed == cid_v0)

    block = {"name": "hello", "links": [cid_v0, cid_v1_raw]}
    logger.info("DAG-CBOR: %s", dag_cbor.dumps(block).hex())
    logger.info("DAG-JSON: %s", dag_json.dumps(block))


if __name__ == "__main__":
    main()
