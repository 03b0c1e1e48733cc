import hashlib
import io

import multihash
import pytest

from cidcodec.digest import (
    SHA2_256,
    Multihash,
    hash_name,
    is_registered_hash,
)
from cidcodec.exceptions import (
    ParseHashError,
    TrailingBytesError,
)
from tests.factories import (
    MultihashFactory,
)


class TestMultihash:
    def test_from_data_sha2_256(self) -> None:
        mh = Multihash.from_data(b"foo")
        assert mh.code == SHA2_256 == 0x12
        assert mh.digest == hashlib.sha256(b"foo").digest()
        assert mh.size == 32
        assert mh.name == "sha2-256"

    def test_from_data_other_function(self) -> None:
        mh = Multihash.from_data(b"foo", multihash.Func.sha2_512)
        assert mh.code == 0x13
        assert mh.digest == hashlib.sha512(b"foo").digest()

    def test_from_data_unknown_function(self) -> None:
        with pytest.raises(ValueError, match="Unsupported hash function"):
            Multihash.from_data(b"foo", "no-such-hash")

    def test_to_bytes(self) -> None:
        mh = Multihash.from_data(b"foo")
        assert mh.to_bytes() == b"\x12\x20" + mh.digest
        assert bytes(mh) == mh.to_bytes()

    def test_multi_byte_code(self) -> None:
        # blake2b-256
        mh = Multihash(0xB220, bytes(32))
        assert mh.to_bytes().startswith(b"\xa0\xe4\x02\x20")
        assert Multihash.from_bytes(mh.to_bytes()) == mh

    def test_code_out_of_range(self) -> None:
        with pytest.raises(ValueError):
            Multihash(-1, b"")
        with pytest.raises(ValueError):
            Multihash(2**64, b"")

    def test_read_returns_remainder(self) -> None:
        mh = Multihash.from_data(b"foo")
        read, rest = Multihash.read(mh.to_bytes() + b"\x55")
        assert read == mh
        assert rest == b"\x55"

    def test_read_truncated_digest(self) -> None:
        data = Multihash.from_data(b"foo").to_bytes()
        with pytest.raises(ParseHashError, match="declares 32 digest bytes"):
            Multihash.read(data[:-1])

    def test_read_truncated_header(self) -> None:
        with pytest.raises(ParseHashError):
            Multihash.read(b"\x12")
        with pytest.raises(ParseHashError):
            Multihash.read(b"\xa0\xe4")

    def test_from_bytes_rejects_trailing_bytes(self) -> None:
        data = Multihash.from_data(b"foo").to_bytes()
        with pytest.raises(TrailingBytesError) as excinfo:
            Multihash.from_bytes(data + b"\x00\x00")
        assert excinfo.value.remaining == 2

    def test_read_stream(self) -> None:
        mh = MultihashFactory()
        stream = io.BytesIO(mh.to_bytes() + b"next")
        assert Multihash.read_stream(stream) == mh
        assert stream.read() == b"next"

    def test_read_stream_truncated(self) -> None:
        data = Multihash.from_data(b"foo").to_bytes()
        with pytest.raises(ParseHashError):
            Multihash.read_stream(io.BytesIO(data[:10]))

    def test_factory_round_trips(self) -> None:
        for mh in MultihashFactory.build_batch(15):
            assert Multihash.from_bytes(mh.to_bytes()) == mh

    def test_truncate(self) -> None:
        mh = Multihash.from_data(b"foo")
        short = mh.truncate(20)
        assert short.code == mh.code
        assert short.digest == mh.digest[:20]
        assert mh.truncate(32) is mh
        assert mh.truncate(64) is mh

    def test_verify(self) -> None:
        mh = Multihash.from_data(b"foo")
        assert mh.verify(b"foo")
        assert not mh.verify(b"bar")
        assert mh.truncate(16).verify(b"foo")

    def test_pymultihash_round_trip(self) -> None:
        mh = Multihash.from_data(b"foo")
        py_mh = mh.to_pymultihash()
        assert py_mh.digest == mh.digest
        assert Multihash.from_pymultihash(py_mh) == mh

    def test_equality_and_hash(self) -> None:
        a = Multihash(0x12, b"\x01" * 32)
        b = Multihash(0x12, b"\x01" * 32)
        c = Multihash(0x13, b"\x01" * 32)
        assert a == b
        assert hash(a) == hash(b)
        assert a != c
        assert len({a, b, c}) == 2

    def test_repr(self) -> None:
        mh = Multihash(0x12, b"\xab" * 32)
        assert repr(mh) == f"<cidcodec.digest.Multihash (sha2-256, {'ab' * 32})>"
        assert "0x1b00f" in repr(Multihash(0x1B00F, b""))


def test_hash_registry():
    assert hash_name(0x12) == "sha2-256"
    assert hash_name(0x13) == "sha2-512"
    assert is_registered_hash(0x12)
    assert not is_registered_hash(0x1B00F)
