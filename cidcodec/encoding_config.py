from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
import threading

from cidcodec.base import (
    Base,
    to_base,
)

_lock = threading.Lock()
_default_encoding: Base = Base.BASE32


def get_default_encoding() -> Base:
    """Return the multibase used by ``str(cid)`` for CIDv1 and later."""
    return _default_encoding


def set_default_encoding(encoding: Base | str) -> None:
    """
    Set the process-wide default multibase for CIDv1/CIDv2 text.

    CIDv0 is unaffected: it is always written as bare base58btc.

    Writes are protected by an internal lock.  Reads via
    :func:`get_default_encoding` are **not** locked, so a concurrent
    reader may briefly see a stale value.

    Parameters
    ----------
    encoding : Base | str
        A :class:`~cidcodec.base.Base` member or its name
        (e.g. ``'base32'``, ``'base58btc'``, ``'base64'``).

    Raises
    ------
    ValueError
        If *encoding* is not one of the supported alphabets.

    """
    global _default_encoding

    base = to_base(encoding)
    with _lock:
        _default_encoding = base


@contextmanager
def encoding_override(encoding: Base | str) -> Iterator[None]:
    """
    Temporarily override the default encoding within a ``with`` block.

    The previous encoding is restored when the block exits, even on exceptions.
    Only the writes are locked, so concurrent overrides from several threads
    can interleave. Pass ``base=`` to :meth:`Cid.to_string` explicitly when
    isolation matters.

    Example
    -------
    >>> with encoding_override("base58btc"):
    ...     str(cid)  # 'zb2rh...'
    ...
    >>> str(cid)      # back to 'bafk...'

    """
    previous = get_default_encoding()
    set_default_encoding(encoding)
    try:
        yield
    finally:
        with _lock:
            global _default_encoding
            _default_encoding = previous


def list_supported_encodings() -> list[str]:
    """Return a sorted list of all encoding names accepted for CID text."""
    return sorted(base.value for base in Base)
