"""Byte strings as stored in ZIP headers, with their encoding."""

from __future__ import annotations

from enum import Enum

from .errors import StringNotUtf8Error


class StringEncoding(Enum):
    """How the raw bytes of a ZipString are encoded."""

    UTF8 = "utf8"
    RAW = "raw"


class ZipString:
    """Raw header bytes plus their encoding and an optional native-codepage form."""

    __slots__ = ("_raw", "_encoding", "_alternative")

    def __init__(self, raw: bytes, encoding: StringEncoding) -> None:
        raw = bytes(raw)
        if encoding is StringEncoding.UTF8:
            try:
                raw.decode("utf-8")
            except UnicodeDecodeError:
                encoding = StringEncoding.RAW
        self._raw = raw
        self._encoding = encoding
        self._alternative: bytes | None = None

    @classmethod
    def from_str(cls, value: str) -> ZipString:
        """Build a UTF-8 string from text."""
        return cls(value.encode("utf-8"), StringEncoding.UTF8)

    @classmethod
    def new_with_alternative(cls, utf8: str, alternative: bytes) -> ZipString:
        """Build a UTF-8 string that also carries bytes in a native codepage."""
        result = cls.from_str(utf8)
        result._alternative = bytes(alternative)
        return result

    @property
    def raw(self) -> bytes:
        return self._raw

    @property
    def encoding(self) -> StringEncoding:
        return self._encoding

    @property
    def alternative(self) -> bytes | None:
        return self._alternative

    def __bytes__(self) -> bytes:
        return self._raw

    def as_str(self) -> str:
        """Return the text; raises StringNotUtf8Error unless the encoding is UTF-8."""
        if self._encoding is not StringEncoding.UTF8:
            raise StringNotUtf8Error()
        return self._raw.decode("utf-8")

    def is_utf8_without_alternative(self) -> bool:
        return self._encoding is StringEncoding.UTF8 and self._alternative is None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ZipString):
            return NotImplemented
        return (self._raw, self._encoding, self._alternative) == (
            other._raw,
            other._encoding,
            other._alternative,
        )

    def __hash__(self) -> int:
        return hash((self._raw, self._encoding, self._alternative))

    def __repr__(self) -> str:
        return (
            f"ZipString(raw={self._raw!r}, encoding={self._encoding.name}, "
            f"alternative={self._alternative!r})"
        )