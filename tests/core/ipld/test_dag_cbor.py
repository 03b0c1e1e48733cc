import cbor2
import pytest

from cidcodec.cid import (
    Cid,
)
from cidcodec.exceptions import (
    ParseError,
)
from cidcodec.ipld import (
    dag_cbor,
)
from tests.factories import (
    arbitrary_cids,
)

V0_STR = "Qmf5Qzp6nGBku7CEn2UQx4mgN8TW69YUok36DrGa6NN893"
V0_HASH = bytes(
    [
        18, 32, 248, 175, 118, 33, 111, 145, 175, 205, 162, 241, 159, 194, 73,
        247, 191, 123, 200, 8, 195, 247, 188, 251, 25, 128, 235, 202, 135, 150,
        161, 75, 202, 70,
    ]
)  # fmt: skip
V1_STR = "bafkreie5qrjvaw64n4tjm6hbnm7fnqvcssfed4whsjqxzslbd3jwhsk3mm"


def test_v0_link():
    cid = Cid.from_string(V0_STR)
    assert cid.to_bytes() == V0_HASH

    encoded = dag_cbor.dumps(cid)
    # tag 42, byte string of 35 bytes, identity prefix, multihash
    assert encoded == bytes([216, 42, 88, 35, 0]) + V0_HASH
    assert dag_cbor.loads(encoded) == cid


def test_v1_link():
    cid = Cid.from_string(V1_STR)
    encoded = dag_cbor.dumps(cid)
    assert encoded[:9] == bytes([216, 42, 88, 37, 0, 1, 85, 18, 32])
    assert encoded[9:] == cid.hash.digest
    assert dag_cbor.loads(encoded) == cid


def test_encode_cid_tag():
    cid = Cid.from_string(V1_STR)
    tag = dag_cbor.encode_cid(cid)
    assert tag.tag == dag_cbor.CBOR_TAG_CID
    assert tag.value == b"\x00" + cid.to_bytes()
    assert dag_cbor.decode_cid(tag) == cid
    assert dag_cbor.decode_cid(tag.value) == cid


def test_nested_links():
    cids = arbitrary_cids(3)
    doc = {"links": cids, "name": "block", "size": 3}
    assert dag_cbor.loads(dag_cbor.dumps(doc)) == doc


def test_missing_identity_prefix():
    cid = Cid.from_string(V0_STR)
    data = cbor2.dumps(cbor2.CBORTag(42, cid.to_bytes()))
    with pytest.raises(ParseError, match="must not be omitted"):
        dag_cbor.loads(data)


def test_wrong_tag():
    cid = Cid.from_string(V0_STR)
    with pytest.raises(ParseError, match="Unexpected CBOR tag"):
        dag_cbor.decode_cid(cbor2.CBORTag(43, b"\x00" + cid.to_bytes()))


def test_non_bytes_payload():
    with pytest.raises(ParseError, match="byte string"):
        dag_cbor.decode_cid(cbor2.CBORTag(42, "not bytes"))


def test_other_tags_are_left_alone():
    value = dag_cbor.loads(cbor2.dumps(cbor2.CBORTag(4000, 1)))
    assert value == cbor2.CBORTag(4000, 1)


def test_unserializable_value():
    with pytest.raises(cbor2.CBOREncodeError):
        dag_cbor.dumps(object())


def test_tag_hook_call_signatures():
    cid = Cid.from_string(V0_STR)
    tag = dag_cbor.encode_cid(cid)
    # cbor2 5.x passes the decoder first, cbor2 6.x passes an immutable flag last
    assert dag_cbor.tag_hook(object(), tag) == cid
    assert dag_cbor.tag_hook(tag, False) == cid
    assert dag_cbor.tag_hook(tag, True) == cid


def test_links_in_containers_round_trip():
    cid = Cid.from_string(V0_STR)
    assert dag_cbor.loads(dag_cbor.dumps({"l": cid})) == {"l": cid}
    assert dag_cbor.loads(dag_cbor.dumps([cid, {"x": [cid]}])) == [cid, {"x": [cid]}]
