"""
``cid`` command line tool.

``cid encode`` reads a binary multihash on stdin and prints its CID.
``cid decode`` reads a CID string on stdin and prints its parts.
"""

from __future__ import annotations

from argparse import ArgumentParser, ArgumentTypeError
from collections.abc import Sequence
import logging
import sys

from cidcodec.base import (
    Base,
    encode as multibase_encode,
)
from cidcodec.cid import (
    Cid,
)
from cidcodec.codec import (
    Codec,
    code_for,
    list_codec_names,
)
from cidcodec.digest import (
    SHA2_256,
    Multihash,
)
from cidcodec.exceptions import (
    BaseCidError,
)
from cidcodec.version import (
    Version,
)

logger = logging.getLogger("cidcodec.cli")

VERSION_CHOICES = ("auto", "v0", "v1")


def _codec_arg(value: str) -> int:
    try:
        return code_for(value)
    except ValueError as e:
        raise ArgumentTypeError(str(e)) from e


def resolve_version(choice: str, codec: int, hash: Multihash) -> Version:
    """
    Pick the CID version for ``encode``.

    ``auto`` keeps the legacy CIDv0 form whenever it is possible, that is for
    dag-pb content hashed with sha2-256, and uses CIDv1 otherwise.
    """
    if choice == "v0":
        return Version.V0
    if choice == "v1":
        return Version.V1
    if codec == Codec.DAG_PB and hash.code == SHA2_256:
        return Version.V0
    return Version.V1


def format_version(version: Version) -> str:
    return f"v{int(version)}"


def build_parser() -> ArgumentParser:
    """Build CLI parser."""
    parser = ArgumentParser(prog="cid", description="Encode and decode CIDs")
    subparsers = parser.add_subparsers(dest="mode", required=True)

    encode_parser = subparsers.add_parser(
        "encode", help="Read a binary multihash on stdin and print its CID"
    )
    encode_parser.add_argument(
        "-v",
        "--version",
        choices=VERSION_CHOICES,
        default="auto",
        help="CID version; auto picks v0 for dag-pb + sha2-256",
    )
    encode_parser.add_argument(
        "-c",
        "--codec",
        type=_codec_arg,
        default=Codec.DAG_PB,
        metavar="CODEC",
        help=f"Content codec, one of: {', '.join(list_codec_names())}",
    )
    encode_parser.add_argument(
        "-b",
        "--base",
        choices=[base.value for base in Base],
        default=None,
        help="Multibase for CIDv1 output (default: base32)",
    )

    subparsers.add_parser("decode", help="Read a CID on stdin and print its parts")
    return parser


def encode(version_choice: str, codec: int, base: str | None) -> str:
    data = sys.stdin.buffer.read()
    hash = Multihash.from_bytes(data)
    version = resolve_version(version_choice, codec, hash)
    cid = Cid.new(version, codec, hash)
    if version == Version.V0:
        return cid.to_string()
    return cid.to_string(base)


def decode() -> list[str]:
    text = sys.stdin.read().strip()
    cid = Cid.from_string(text)
    codec_name = cid.codec_name or hex(cid.codec)
    return [
        f"version: {format_version(cid.version)}",
        f"codec: {codec_name}",
        f"hash: {multibase_encode(Base.BASE58BTC, cid.hash.to_bytes())}",
    ]


def main(argv: Sequence[str] | None = None) -> int:
    """Run CLI and return process status code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        if args.mode == "encode":
            print(encode(args.version, args.codec, args.base), end="")
        else:
            for line in decode():
                print(line)
    except BaseCidError as e:
        logger.debug("cid %s failed", args.mode, exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
