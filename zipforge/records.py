"""Fixed-layout ZIP records, extra fields and helpers shared by the writers."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Any, Iterable

from .entry import AttributeCompatibility, Compression, ZipEntry
from .errors import StringNotUtf8Error

LFH_SIGNATURE = 0x04034B50
CDH_SIGNATURE = 0x02014B50
DATA_DESCRIPTOR_SIGNATURE = 0x08074B50
EOCDR_SIGNATURE = 0x06054B50
ZIP64_EOCDR_SIGNATURE = 0x06064B50
ZIP64_EOCDL_SIGNATURE = 0x07064B50

NON_ZIP64_MAX_SIZE = 0xFFFFFFFF
NON_ZIP64_MAX_NUM_FILES = 0xFFFF

ZIP64_EXTENDED_INFORMATION_ID = 0x0001
INFO_ZIP_UNICODE_COMMENT_ID = 0x6375
INFO_ZIP_UNICODE_PATH_ID = 0x7075

SPEC_VERSION_MADE_BY = 63

_LFH = struct.Struct("<HHHHHIIIHH")
_CDR = struct.Struct("<HHHHHHIIIHHHHHII")
_EOCDR = struct.Struct("<HHHHIIH")
_ZIP64_EOCDR = struct.Struct("<QHHIIQQQQ")
_ZIP64_EOCDL = struct.Struct("<IQI")
_EXTRA_HEADER = struct.Struct("<HH")
_UNICODE_HEADER = struct.Struct("<HHBI")

_VERSION_BY_COMPRESSION = {
    Compression.STORED: 10,
    Compression.DEFLATE: 20,
    Compression.DEFLATE64: 21,
    Compression.BZ: 46,
    Compression.LZMA: 63,
    Compression.ZSTD: 63,
    Compression.XZ: 63,
}


@dataclass(frozen=True)
class GeneralPurposeFlag:
    """The general purpose bit flag of local and central headers."""

    data_descriptor: bool = False
    encrypted: bool = False
    filename_unicode: bool = False

    def to_int(self) -> int:
        value = 0
        if self.encrypted:
            value |= 0x0001
        if self.data_descriptor:
            value |= 0x0008
        if self.filename_unicode:
            value |= 0x0800
        return value


@dataclass
class LocalFileHeader:
    """A local file header, without its signature."""

    version: int
    flags: GeneralPurposeFlag
    compression: int
    mod_time: int
    mod_date: int
    crc: int
    compressed_size: int
    uncompressed_size: int
    file_name_length: int
    extra_field_length: int

    def to_bytes(self) -> bytes:
        return _LFH.pack(
            self.version,
            self.flags.to_int(),
            self.compression,
            self.mod_time,
            self.mod_date,
            self.crc,
            self.compressed_size,
            self.uncompressed_size,
            self.file_name_length,
            self.extra_field_length,
        )


@dataclass
class CentralDirectoryRecord:
    """A central directory file header, without its signature."""

    v_made_by: int
    v_needed: int
    flags: GeneralPurposeFlag
    compression: int
    mod_time: int
    mod_date: int
    crc: int
    compressed_size: int
    uncompressed_size: int
    file_name_length: int
    extra_field_length: int
    file_comment_length: int
    disk_start: int
    inter_attr: int
    exter_attr: int
    lh_offset: int

    def to_bytes(self) -> bytes:
        return _CDR.pack(
            self.v_made_by,
            self.v_needed,
            self.flags.to_int(),
            self.compression,
            self.mod_time,
            self.mod_date,
            self.crc,
            self.compressed_size,
            self.uncompressed_size,
            self.file_name_length,
            self.extra_field_length,
            self.file_comment_length,
            self.disk_start,
            self.inter_attr,
            self.exter_attr,
            self.lh_offset,
        )


@dataclass
class EndOfCentralDirectoryHeader:
    """The end of central directory record, without its signature."""

    disk_num: int
    start_cent_dir_disk: int
    num_of_entries_disk: int
    num_of_entries: int
    size_cent_dir: int
    cent_dir_offset: int
    file_comm_length: int

    def to_bytes(self) -> bytes:
        return _EOCDR.pack(
            self.disk_num,
            self.start_cent_dir_disk,
            self.num_of_entries_disk,
            self.num_of_entries,
            self.size_cent_dir,
            self.cent_dir_offset,
            self.file_comm_length,
        )


@dataclass
class Zip64EndOfCentralDirectoryRecord:
    """The ZIP64 end of central directory record, without its signature."""

    size_of_zip64_end_of_cd_record: int
    version_made_by: int
    version_needed_to_extract: int
    disk_number: int
    disk_number_start_of_cd: int
    num_entries_in_directory_on_disk: int
    num_entries_in_directory: int
    directory_size: int
    offset_of_start_of_directory: int

    def to_bytes(self) -> bytes:
        return _ZIP64_EOCDR.pack(
            self.size_of_zip64_end_of_cd_record,
            self.version_made_by,
            self.version_needed_to_extract,
            self.disk_number,
            self.disk_number_start_of_cd,
            self.num_entries_in_directory_on_disk,
            self.num_entries_in_directory,
            self.directory_size,
            self.offset_of_start_of_directory,
        )


@dataclass
class Zip64EndOfCentralDirectoryLocator:
    """The ZIP64 end of central directory locator, without its signature."""

    number_of_disk_with_start_of_zip64_end_of_central_directory: int
    relative_offset: int
    total_number_of_disks: int

    def to_bytes(self) -> bytes:
        return _ZIP64_EOCDL.pack(
            self.number_of_disk_with_start_of_zip64_end_of_central_directory,
            self.relative_offset,
            self.total_number_of_disks,
        )


@dataclass
class Zip64ExtendedInformationExtraField:
    """The ZIP64 extended information extra field; absent values are not written."""

    uncompressed_size: int | None = None
    compressed_size: int | None = None
    relative_header_offset: int | None = None
    disk_start_number: int | None = None
    header_id: int = ZIP64_EXTENDED_INFORMATION_ID

    def to_bytes(self) -> bytes:
        body = b"".join(
            struct.pack("<Q", value)
            for value in (self.uncompressed_size, self.compressed_size, self.relative_header_offset)
            if value is not None
        )
        if self.disk_start_number is not None:
            body += struct.pack("<I", self.disk_start_number)
        return _EXTRA_HEADER.pack(self.header_id, len(body)) + body


@dataclass
class InfoZipUnicodePathExtraField:
    """The Info-ZIP Unicode Path extra field (version 1)."""

    crc32: int = 0
    unicode: bytes = b""

    def to_bytes(self) -> bytes:
        return (
            _UNICODE_HEADER.pack(INFO_ZIP_UNICODE_PATH_ID, 5 + len(self.unicode), 1, self.crc32)
            + self.unicode
        )


@dataclass
class InfoZipUnicodeCommentExtraField:
    """The Info-ZIP Unicode Comment extra field (version 1)."""

    crc32: int = 0
    unicode: bytes = b""

    def to_bytes(self) -> bytes:
        return (
            _UNICODE_HEADER.pack(INFO_ZIP_UNICODE_COMMENT_ID, 5 + len(self.unicode), 1, self.crc32)
            + self.unicode
        )


@dataclass
class CentralDirectoryEntry:
    """A central directory header waiting to be written, with its entry."""

    header: CentralDirectoryRecord
    entry: ZipEntry


def extra_fields_to_bytes(fields: Iterable[Any]) -> bytes:
    """Serialise extra fields in order."""
    return b"".join(field.to_bytes() for field in fields)


def find_zip64_field(fields: Iterable[Any]) -> Zip64ExtendedInformationExtraField | None:
    """Return the first ZIP64 extended information field, or None."""
    return next((f for f in fields if isinstance(f, Zip64ExtendedInformationExtraField)), None)


def get_or_put_unicode_path_field(fields: list[Any]) -> InfoZipUnicodePathExtraField:
    """Return the Unicode Path field in fields, appending an empty one if absent."""
    for field in fields:
        if isinstance(field, InfoZipUnicodePathExtraField):
            return field
    created = InfoZipUnicodePathExtraField()
    fields.append(created)
    return created


def get_or_put_unicode_comment_field(fields: list[Any]) -> InfoZipUnicodeCommentExtraField:
    """Return the Unicode Comment field in fields, appending an empty one if absent."""
    for field in fields:
        if isinstance(field, InfoZipUnicodeCommentExtraField):
            return field
    created = InfoZipUnicodeCommentExtraField()
    fields.append(created)
    return created


def version_needed_to_extract(entry: ZipEntry) -> int:
    """Return the minimum specification version needed to extract entry."""
    version = _VERSION_BY_COMPRESSION.get(entry.compression, 20)
    try:
        if entry.is_dir():
            version = max(version, 20)
    except StringNotUtf8Error:
        pass
    if find_zip64_field(entry.extra_fields) is not None:
        version = max(version, 45)
    return version


def version_made_by() -> int:
    """Return the 'version made by' value: Unix host, specification 6.3."""
    return (int(AttributeCompatibility.UNIX) << 8) | SPEC_VERSION_MADE_BY