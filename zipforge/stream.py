"""Writing entries whose size is not known until the data has been written."""

from __future__ import annotations

import struct
import zlib
from typing import Any

from .compressed import CompressedWriter
from .entry import ZipEntry, ZipEntryBuilder
from .errors import (
    CommentTooLargeError,
    ExtraFieldTooLargeError,
    FileNameTooLargeError,
    Zip64ErrorCase,
    Zip64NeededError,
)
from .offset import OffsetWriter
from .records import (
    DATA_DESCRIPTOR_SIGNATURE,
    LFH_SIGNATURE,
    NON_ZIP64_MAX_NUM_FILES,
    NON_ZIP64_MAX_SIZE,
    CentralDirectoryEntry,
    CentralDirectoryRecord,
    GeneralPurposeFlag,
    LocalFileHeader,
    Zip64ExtendedInformationExtraField,
    extra_fields_to_bytes,
    find_zip64_field,
    version_made_by,
    version_needed_to_extract,
)
from .whole import _apply_unicode_fields, _basic, _owned_entry, _u16_length, _write_all

_DESCRIPTOR = struct.Struct("<III")


class EntryStreamWriter:
    """Writes one entry's data as it arrives, finishing with a data descriptor.

    The local file header carries no CRC and placeholder sizes; ``close`` must be
    called (directly or by leaving a ``with`` block) or the archive is corrupt.
    """

    def __init__(self, writer: Any, entry: ZipEntry | ZipEntryBuilder) -> None:
        self._zip = writer
        self._entry = _owned_entry(entry)
        compressor = CompressedWriter(
            writer.writer, self._entry.compression, self._entry.compression_level
        )
        self._lfh_offset = writer.writer.offset()
        self._lfh = self._write_local_header()
        self._data_offset = writer.writer.offset()
        self._writer = OffsetWriter(compressor)
        self._crc = 0
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def _write_local_header(self) -> LocalFileHeader:
        entry = self._entry
        zip_writer = self._zip
        if not zip_writer.no_zip64:
            # A ZIP64 field is always emitted since the final size is unknown.
            zip_writer.is_zip64 = True
            entry.extra_fields.append(
                Zip64ExtendedInformationExtraField(
                    uncompressed_size=entry.uncompressed_size,
                    compressed_size=entry.compressed_size,
                )
            )
            lfh_compressed, lfh_uncompressed = NON_ZIP64_MAX_SIZE, NON_ZIP64_MAX_SIZE
        else:
            if entry.compressed_size > NON_ZIP64_MAX_SIZE or entry.uncompressed_size > NON_ZIP64_MAX_SIZE:
                raise Zip64NeededError(Zip64ErrorCase.LARGE_FILE)
            lfh_compressed, lfh_uncompressed = entry.compressed_size, entry.uncompressed_size

        utf8_only = _apply_unicode_fields(entry)
        filename_basic = _basic(entry.filename)
        extra_bytes = extra_fields_to_bytes(entry.extra_fields)

        header = LocalFileHeader(
            version=version_needed_to_extract(entry),
            flags=GeneralPurposeFlag(data_descriptor=True, encrypted=False, filename_unicode=utf8_only),
            compression=int(entry.compression),
            mod_time=entry.last_modification_date.time,
            mod_date=entry.last_modification_date.date,
            crc=entry.crc32,
            compressed_size=lfh_compressed,
            uncompressed_size=lfh_uncompressed,
            file_name_length=_u16_length(filename_basic, FileNameTooLargeError),
            extra_field_length=_u16_length(extra_bytes, ExtraFieldTooLargeError),
        )

        out = zip_writer.writer
        _write_all(out, LFH_SIGNATURE.to_bytes(4, "little"))
        _write_all(out, header.to_bytes())
        _write_all(out, filename_basic)
        _write_all(out, extra_bytes)
        return header

    def write(self, data: bytes) -> int:
        """Write uncompressed entry data; returns the number of bytes accepted."""
        if self._closed:
            raise ValueError("write to a closed entry writer")
        written = self._writer.write(data)
        self._crc = zlib.crc32(memoryview(data)[:written], self._crc)
        return written

    def flush(self) -> None:
        if self._closed:
            return
        self._writer.flush()

    def close(self) -> None:
        """Finish the data, write the data descriptor and record the central directory header."""
        if self._closed:
            raise ValueError("entry writer is already closed")
        self._closed = True
        self._writer.close()

        crc = self._crc
        uncompressed_size = self._writer.offset()
        out = self._zip.writer
        compressed_size = out.offset() - self._data_offset
        entry = self._entry

        if self._zip.no_zip64:
            if (
                uncompressed_size > NON_ZIP64_MAX_SIZE
                or compressed_size > NON_ZIP64_MAX_SIZE
                or self._lfh_offset > NON_ZIP64_MAX_SIZE
            ):
                raise Zip64NeededError(Zip64ErrorCase.LARGE_FILE)
            cd_compressed, cd_uncompressed, lh_offset = (
                compressed_size,
                uncompressed_size,
                self._lfh_offset,
            )
        else:
            field = find_zip64_field(entry.extra_fields)
            if field is None:
                entry.extra_fields.append(
                    Zip64ExtendedInformationExtraField(
                        uncompressed_size=uncompressed_size,
                        compressed_size=compressed_size,
                        relative_header_offset=self._lfh_offset,
                    )
                )
            else:
                field.uncompressed_size = uncompressed_size
                field.compressed_size = compressed_size
                field.relative_header_offset = self._lfh_offset
            self._lfh.extra_field_length = _u16_length(
                extra_fields_to_bytes(entry.extra_fields), ExtraFieldTooLargeError
            )
            cd_compressed = cd_uncompressed = lh_offset = NON_ZIP64_MAX_SIZE

        _write_all(
            out,
            DATA_DESCRIPTOR_SIGNATURE.to_bytes(4, "little")
            + _DESCRIPTOR.pack(crc, cd_compressed, cd_uncompressed),
        )

        comment_basic = _basic(entry.comment)
        header = CentralDirectoryRecord(
            v_made_by=version_made_by(),
            v_needed=self._lfh.version,
            flags=self._lfh.flags,
            compression=self._lfh.compression,
            mod_time=self._lfh.mod_time,
            mod_date=self._lfh.mod_date,
            crc=crc,
            compressed_size=cd_compressed,
            uncompressed_size=cd_uncompressed,
            file_name_length=self._lfh.file_name_length,
            extra_field_length=self._lfh.extra_field_length,
            file_comment_length=_u16_length(comment_basic, CommentTooLargeError),
            disk_start=0,
            inter_attr=entry.internal_file_attribute,
            exter_attr=entry.external_file_attribute,
            lh_offset=lh_offset,
        )

        self._zip.cd_entries.append(CentralDirectoryEntry(header=header, entry=entry))
        if len(self._zip.cd_entries) > NON_ZIP64_MAX_NUM_FILES:
            if self._zip.no_zip64:
                raise Zip64NeededError(Zip64ErrorCase.TOO_MANY_FILES)
            self._zip.is_zip64 = True

    def __enter__(self) -> EntryStreamWriter:
        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        if exc_type is None and not self._closed:
            self.close()