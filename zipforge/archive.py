"""Archive-level data: stored entries and the ZIP file description."""

from __future__ import annotations

import io
import struct
from dataclasses import dataclass, field
from typing import Any, BinaryIO

from .entry import ZipEntry
from .errors import UpstreamReadError
from .signature import assert_signature
from .strings import ZipString

_LFH_SIGNATURE = 0x04034B50
_LFH_SIZE = 26
_LFH_LENGTHS = struct.Struct("<HH")
_LFH_LENGTHS_OFFSET = 22


class StoredZipEntry:
    """A ZipEntry together with where it is stored in a specific archive.

    Attributes of the wrapped entry can be read directly from this object.
    """

    def __init__(self, entry: ZipEntry, file_offset: int, header_size: int) -> None:
        self._entry = entry
        self._file_offset = file_offset
        self._header_size = header_size

    @property
    def entry(self) -> ZipEntry:
        return self._entry

    def header_offset(self) -> int:
        """Return the offset in bytes of the entry's local file header."""
        return self._file_offset

    def header_size(self) -> int:
        """Return the size of the header, filename and extra fields per the central directory."""
        return self._header_size

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        return getattr(self._entry, name)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StoredZipEntry):
            return NotImplemented
        return (self._entry, self._file_offset, self._header_size) == (
            other._entry,
            other._file_offset,
            other._header_size,
        )

    def __repr__(self) -> str:
        return (
            f"StoredZipEntry(entry={self._entry!r}, file_offset={self._file_offset}, "
            f"header_size={self._header_size})"
        )

    def _seek_to_data_offset(self, reader: BinaryIO) -> None:
        """Position reader at the first byte of the entry's data."""
        try:
            reader.seek(self._file_offset)
            assert_signature(reader, _LFH_SIGNATURE)
            header = reader.read(_LFH_SIZE)
            if header is None or len(header) < _LFH_SIZE:
                raise UpstreamReadError(EOFError("failed to fill whole buffer"))
            name_length, extra_length = _LFH_LENGTHS.unpack_from(header, _LFH_LENGTHS_OFFSET)
            reader.seek(name_length + extra_length, io.SEEK_CUR)
        except OSError as exc:
            raise UpstreamReadError(exc) from exc


@dataclass
class ZipFile:
    """The entries, comment and ZIP64 status of an archive."""

    entries: list[StoredZipEntry] = field(default_factory=list)
    zip64: bool = False
    comment: ZipString = field(default_factory=lambda: ZipString.from_str(""))


class ZipFileBuilder:
    """Chained construction of a ZipFile."""

    def __init__(self) -> None:
        self._comment = ZipString.from_str("")

    def comment(self, comment: ZipString | str) -> ZipFileBuilder:
        if not isinstance(comment, ZipString):
            comment = ZipString.from_str(comment)
        self._comment = comment
        return self

    def build(self) -> ZipFile:
        return ZipFile(entries=[], zip64=False, comment=self._comment)