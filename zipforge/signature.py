"""Checking of four-byte record signatures."""

from __future__ import annotations

from typing import BinaryIO

from .errors import UnexpectedHeaderError, UpstreamReadError


def assert_signature(reader: BinaryIO, expected: int) -> None:
    """Read a little-endian u32 and raise UnexpectedHeaderError unless it equals expected."""
    try:
        data = reader.read(4)
    except OSError as exc:
        raise UpstreamReadError(exc) from exc
    if data is None or len(data) < 4:
        raise UpstreamReadError(EOFError("failed to fill whole buffer"))
    actual = int.from_bytes(data, "little")
    if actual != expected:
        raise UnexpectedHeaderError(actual, expected)