"""ZIP entries: the metadata describing one member of an archive."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any

from .dates import ZipDateTime
from .strings import ZipString


class Compression(IntEnum):
    """Compression methods, valued by their ZIP method number."""

    STORED = 0
    DEFLATE = 8
    DEFLATE64 = 9
    BZ = 12
    LZMA = 14
    ZSTD = 93
    XZ = 95


class DeflateOption(Enum):
    """Named compression strengths; an int may be used instead for a precise level."""

    NORMAL = "normal"
    MAXIMUM = "maximum"
    FAST = "fast"
    SUPER = "super"


class AttributeCompatibility(IntEnum):
    """Host system whose conventions the external file attribute follows."""

    UNIX = 3


def _as_zip_string(value: ZipString | str) -> ZipString:
    if isinstance(value, ZipString):
        return value
    return ZipString.from_str(value)


def _empty_comment() -> ZipString:
    return ZipString.from_str("")


@dataclass
class ZipEntry:
    """Data about a single ZIP entry.

    The filename is stored exactly as found in the archive; sanitise it before
    using it as a path when the archive is not trusted.
    """

    filename: ZipString
    compression: Compression
    compression_level: DeflateOption | int = DeflateOption.NORMAL
    crc32: int = 0
    uncompressed_size: int = 0
    compressed_size: int = 0
    attribute_compatibility: AttributeCompatibility = AttributeCompatibility.UNIX
    last_modification_date: ZipDateTime = field(default_factory=ZipDateTime)
    internal_file_attribute: int = 0
    external_file_attribute: int = 0
    extra_fields: list[Any] = field(default_factory=list)
    comment: ZipString = field(default_factory=_empty_comment)
    data_descriptor: bool = False

    def unix_permissions(self) -> int | None:
        """Return the Unix mode bits, or None if the host is not Unix."""
        if self.attribute_compatibility is not AttributeCompatibility.UNIX:
            return None
        return (self.external_file_attribute >> 16) & 0xFFFF

    def is_dir(self) -> bool:
        """Return whether the entry is a directory; raises StringNotUtf8Error for raw names."""
        return self.filename.as_str().endswith("/")


class ZipEntryBuilder:
    """Chained construction of a ZipEntry."""

    def __init__(self, filename: ZipString | str, compression: Compression) -> None:
        self._entry = ZipEntry(_as_zip_string(filename), Compression(compression))

    def filename(self, filename: ZipString | str) -> ZipEntryBuilder:
        self._entry.filename = _as_zip_string(filename)
        return self

    def compression(self, compression: Compression) -> ZipEntryBuilder:
        self._entry.compression = Compression(compression)
        return self

    def size(self, compressed_size: int, uncompressed_size: int) -> ZipEntryBuilder:
        """Set a size hint written into the local file header of streamed entries."""
        compressed_size = int(compressed_size)
        uncompressed_size = int(uncompressed_size)
        if compressed_size < 0 or uncompressed_size < 0:
            raise ValueError("sizes must not be negative")
        self._entry.compressed_size = compressed_size
        self._entry.uncompressed_size = uncompressed_size
        return self

    def deflate_option(self, option: DeflateOption | int) -> ZipEntryBuilder:
        """Set the compression strength; it has no effect on stored entries."""
        if not isinstance(option, DeflateOption):
            option = int(option)
        self._entry.compression_level = option
        return self

    def attribute_compatibility(self, compatibility: AttributeCompatibility) -> ZipEntryBuilder:
        self._entry.attribute_compatibility = AttributeCompatibility(compatibility)
        return self

    def last_modification_date(self, date: ZipDateTime) -> ZipEntryBuilder:
        self._entry.last_modification_date = date
        return self

    def internal_file_attribute(self, attribute: int) -> ZipEntryBuilder:
        self._entry.internal_file_attribute = attribute & 0xFFFF
        return self

    def external_file_attribute(self, attribute: int) -> ZipEntryBuilder:
        self._entry.external_file_attribute = attribute & 0xFFFFFFFF
        return self

    def extra_fields(self, fields: list[Any]) -> ZipEntryBuilder:
        self._entry.extra_fields = list(fields)
        return self

    def comment(self, comment: ZipString | str) -> ZipEntryBuilder:
        self._entry.comment = _as_zip_string(comment)
        return self

    def unix_permissions(self, mode: int) -> ZipEntryBuilder:
        """Set the Unix mode bits; ignored unless the host compatibility is Unix."""
        if self._entry.attribute_compatibility is AttributeCompatibility.UNIX:
            self._entry.external_file_attribute = (self._entry.external_file_attribute & 0xFFFF) | (
                (mode & 0xFFFF) << 16
            )
        return self

    def build(self) -> ZipEntry:
        """Return the entry built so far; later builder calls do not change it."""
        return dataclasses.replace(self._entry, extra_fields=list(self._entry.extra_fields))