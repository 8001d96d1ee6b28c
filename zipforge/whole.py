"""Writing entries whose data is known in full up front."""

from __future__ import annotations

import dataclasses
import io
import zlib
from typing import Any

from .compressed import CompressedWriter
from .entry import Compression, DeflateOption, ZipEntry, ZipEntryBuilder
from .errors import (
    CommentTooLargeError,
    ExtraFieldTooLargeError,
    FileNameTooLargeError,
    UpstreamReadError,
    Zip64ErrorCase,
    Zip64NeededError,
)
from .records import (
    LFH_SIGNATURE,
    NON_ZIP64_MAX_NUM_FILES,
    NON_ZIP64_MAX_SIZE,
    CentralDirectoryEntry,
    CentralDirectoryRecord,
    GeneralPurposeFlag,
    LocalFileHeader,
    Zip64ExtendedInformationExtraField,
    extra_fields_to_bytes,
    get_or_put_unicode_comment_field,
    get_or_put_unicode_path_field,
    version_made_by,
    version_needed_to_extract,
)
from .strings import StringEncoding, ZipString

_U16_MAX = 0xFFFF


def compress(compression: Compression, data: bytes, level: DeflateOption | int | None = None) -> bytes:
    """Compress data in one go with the given method and level."""
    sink = io.BytesIO()
    writer = CompressedWriter(sink, compression, level)
    writer.write(data)
    writer.close()
    return sink.getvalue()


def _owned_entry(entry: ZipEntry | ZipEntryBuilder) -> ZipEntry:
    if isinstance(entry, ZipEntryBuilder):
        return entry.build()
    return dataclasses.replace(entry, extra_fields=list(entry.extra_fields))


def _basic(value: ZipString) -> bytes:
    return value.alternative if value.alternative is not None else value.raw


def _u16_length(data: bytes, error: type[Exception]) -> int:
    if len(data) > _U16_MAX:
        raise error()
    return len(data)


def _write_all(out: Any, data: bytes) -> None:
    view = memoryview(data)
    try:
        while view:
            written = out.write(view)
            if written is None:
                written = len(view)
            if written == 0:
                raise OSError("failed to write whole buffer")
            view = view[written:]
    except OSError as exc:
        raise UpstreamReadError(exc) from exc


def _apply_unicode_fields(entry: ZipEntry) -> bool:
    """Add Info-ZIP Unicode fields where needed; return whether names are plain UTF-8."""
    utf8_only = (
        entry.filename.is_utf8_without_alternative() and entry.comment.is_utf8_without_alternative()
    )
    if not utf8_only:
        for value, get_field in (
            (entry.filename, get_or_put_unicode_path_field),
            (entry.comment, get_or_put_unicode_comment_field),
        ):
            if value.encoding is StringEncoding.UTF8 and value.raw:
                field = get_field(entry.extra_fields)
                field.crc32 = zlib.crc32(_basic(value))
                field.unicode = value.raw
    return utf8_only


def write_entry_whole(writer: Any, entry: ZipEntry | ZipEntryBuilder, data: bytes) -> None:
    """Write a complete entry to a ZIP file writer and record its central directory header.

    The writer must provide ``writer`` (an offset-tracking output), ``cd_entries``,
    ``is_zip64`` and ``no_zip64``.
    """
    entry = _owned_entry(entry)
    data = bytes(data)
    if entry.compression is Compression.STORED:
        compressed = data
    else:
        compressed = compress(entry.compression, data, entry.compression_level)

    sizes_field: Zip64ExtendedInformationExtraField | None = None
    if len(data) > NON_ZIP64_MAX_SIZE or len(compressed) > NON_ZIP64_MAX_SIZE:
        if writer.no_zip64:
            raise Zip64NeededError(Zip64ErrorCase.LARGE_FILE)
        writer.is_zip64 = True
        sizes_field = Zip64ExtendedInformationExtraField(
            uncompressed_size=len(data), compressed_size=len(compressed)
        )
        lfh_uncompressed, lfh_compressed = NON_ZIP64_MAX_SIZE, NON_ZIP64_MAX_SIZE
    else:
        lfh_uncompressed, lfh_compressed = len(data), len(compressed)

    out = writer.writer
    offset = out.offset()
    central_only_field: Zip64ExtendedInformationExtraField | None = None
    if offset > NON_ZIP64_MAX_SIZE:
        if writer.no_zip64:
            raise Zip64NeededError(Zip64ErrorCase.LARGE_FILE)
        writer.is_zip64 = True
        if sizes_field is not None:
            sizes_field.relative_header_offset = offset
        else:
            central_only_field = Zip64ExtendedInformationExtraField(relative_header_offset=offset)
        lh_offset = NON_ZIP64_MAX_SIZE
    else:
        lh_offset = offset

    if sizes_field is not None:
        entry.extra_fields.append(sizes_field)

    utf8_only = _apply_unicode_fields(entry)

    filename_basic = _basic(entry.filename)
    comment_basic = _basic(entry.comment)
    extra_bytes = extra_fields_to_bytes(entry.extra_fields)

    local_header = LocalFileHeader(
        version=version_needed_to_extract(entry),
        flags=GeneralPurposeFlag(data_descriptor=False, encrypted=False, filename_unicode=utf8_only),
        compression=int(entry.compression),
        mod_time=entry.last_modification_date.time,
        mod_date=entry.last_modification_date.date,
        crc=zlib.crc32(data),
        compressed_size=lfh_compressed,
        uncompressed_size=lfh_uncompressed,
        file_name_length=_u16_length(filename_basic, FileNameTooLargeError),
        extra_field_length=_u16_length(extra_bytes, ExtraFieldTooLargeError),
    )

    header = CentralDirectoryRecord(
        v_made_by=version_made_by(),
        v_needed=local_header.version,
        flags=local_header.flags,
        compression=local_header.compression,
        mod_time=local_header.mod_time,
        mod_date=local_header.mod_date,
        crc=local_header.crc,
        compressed_size=local_header.compressed_size,
        uncompressed_size=local_header.uncompressed_size,
        file_name_length=local_header.file_name_length,
        extra_field_length=local_header.extra_field_length,
        file_comment_length=_u16_length(comment_basic, CommentTooLargeError),
        disk_start=0,
        inter_attr=entry.internal_file_attribute,
        exter_attr=entry.external_file_attribute,
        lh_offset=lh_offset,
    )

    _write_all(out, LFH_SIGNATURE.to_bytes(4, "little"))
    _write_all(out, local_header.to_bytes())
    _write_all(out, filename_basic)
    _write_all(out, extra_bytes)
    _write_all(out, compressed)

    if central_only_field is not None:
        entry.extra_fields.append(central_only_field)
        header.extra_field_length = _u16_length(
            extra_fields_to_bytes(entry.extra_fields), ExtraFieldTooLargeError
        )

    writer.cd_entries.append(CentralDirectoryEntry(header=header, entry=entry))
    if len(writer.cd_entries) > NON_ZIP64_MAX_NUM_FILES:
        if writer.no_zip64:
            raise Zip64NeededError(Zip64ErrorCase.TOO_MANY_FILES)
        writer.is_zip64 = True