"""Writing complete ZIP archives to any binary writer."""

from __future__ import annotations

from typing import Any

from .entry import ZipEntry, ZipEntryBuilder
from .errors import CommentTooLargeError, Zip64ErrorCase, Zip64NeededError
from .offset import OffsetWriter
from .records import (
    CDH_SIGNATURE,
    EOCDR_SIGNATURE,
    NON_ZIP64_MAX_NUM_FILES,
    NON_ZIP64_MAX_SIZE,
    ZIP64_EOCDL_SIGNATURE,
    ZIP64_EOCDR_SIGNATURE,
    CentralDirectoryEntry,
    EndOfCentralDirectoryHeader,
    Zip64EndOfCentralDirectoryLocator,
    Zip64EndOfCentralDirectoryRecord,
    extra_fields_to_bytes,
    version_made_by,
)
from .stream import EntryStreamWriter
from .whole import _basic, _write_all
from .whole import write_entry_whole as _write_entry_whole

_U16_MAX = 0xFFFF


class ZipFileWriter:
    """Writes a ZIP archive into an inner binary writer.

    ``close`` must be called (directly or by leaving a ``with`` block) to write
    the central directory; without it the archive is corrupt.
    """

    def __init__(self, inner: Any) -> None:
        self.writer = OffsetWriter(inner)
        self.cd_entries: list[CentralDirectoryEntry] = []
        self.no_zip64 = False
        self.is_zip64 = False
        self._comment: bytes | None = None
        self._stream: EntryStreamWriter | None = None
        self._closed = False

    @property
    def inner(self) -> Any:
        """The wrapped writer; writing to it directly corrupts the archive's offsets."""
        return self.writer.inner

    @property
    def closed(self) -> bool:
        return self._closed

    def force_no_zip64(self) -> ZipFileWriter:
        """Refuse to write ZIP64 structures; raise Zip64NeededError when they would be needed."""
        self.no_zip64 = True
        return self

    def force_zip64(self) -> ZipFileWriter:
        """Always write the ZIP64 end of central directory structures."""
        self.is_zip64 = True
        return self

    def _ensure_ready(self) -> None:
        if self._closed:
            raise ValueError("ZIP file writer is closed")
        if self._stream is not None and not self._stream.closed:
            raise RuntimeError("an entry stream writer is still open")

    def write_entry_whole(self, entry: ZipEntry | ZipEntryBuilder, data: bytes) -> None:
        """Write an entry whose data is known in full."""
        self._ensure_ready()
        _write_entry_whole(self, entry, data)

    def write_entry_stream(self, entry: ZipEntry | ZipEntryBuilder) -> EntryStreamWriter:
        """Start an entry of unknown size, returning a writer for its data."""
        self._ensure_ready()
        self._stream = EntryStreamWriter(self, entry)
        return self._stream

    def comment(self, comment: str | bytes) -> None:
        """Set the archive comment."""
        data = comment.encode("utf-8") if isinstance(comment, str) else bytes(comment)
        if len(data) > _U16_MAX:
            raise CommentTooLargeError()
        self._comment = data

    def close(self) -> Any:
        """Write the central directory and end records; return the inner writer."""
        self._ensure_ready()
        self._closed = True
        out = self.writer
        cd_offset = out.offset()

        for cd_entry in self.cd_entries:
            entry = cd_entry.entry
            _write_all(
                out,
                CDH_SIGNATURE.to_bytes(4, "little")
                + cd_entry.header.to_bytes()
                + _basic(entry.filename)
                + extra_fields_to_bytes(entry.extra_fields)
                + _basic(entry.comment),
            )

        directory_size = out.offset() - cd_offset
        num_entries = len(self.cd_entries)
        if cd_offset > NON_ZIP64_MAX_SIZE:
            if self.no_zip64:
                raise Zip64NeededError(Zip64ErrorCase.LARGE_FILE)
            self.is_zip64 = True
            cd_offset_u32 = NON_ZIP64_MAX_SIZE
        else:
            cd_offset_u32 = cd_offset

        if self.is_zip64:
            eocdr_offset = out.offset()
            record = Zip64EndOfCentralDirectoryRecord(
                size_of_zip64_end_of_cd_record=44,
                version_made_by=version_made_by(),
                version_needed_to_extract=46,
                disk_number=0,
                disk_number_start_of_cd=0,
                num_entries_in_directory_on_disk=num_entries,
                num_entries_in_directory=num_entries,
                directory_size=directory_size,
                offset_of_start_of_directory=cd_offset,
            )
            _write_all(out, ZIP64_EOCDR_SIGNATURE.to_bytes(4, "little") + record.to_bytes())
            locator = Zip64EndOfCentralDirectoryLocator(
                number_of_disk_with_start_of_zip64_end_of_central_directory=0,
                relative_offset=eocdr_offset,
                total_number_of_disks=1,
            )
            _write_all(out, ZIP64_EOCDL_SIGNATURE.to_bytes(4, "little") + locator.to_bytes())

        entries_u16 = min(num_entries, NON_ZIP64_MAX_NUM_FILES)
        comment = self._comment or b""
        header = EndOfCentralDirectoryHeader(
            disk_num=0,
            start_cent_dir_disk=0,
            num_of_entries_disk=entries_u16,
            num_of_entries=entries_u16,
            size_cent_dir=min(directory_size, NON_ZIP64_MAX_SIZE),
            cent_dir_offset=cd_offset_u32,
            file_comm_length=len(comment),
        )
        _write_all(out, EOCDR_SIGNATURE.to_bytes(4, "little") + header.to_bytes() + comment)
        return self.writer.inner

    def __enter__(self) -> ZipFileWriter:
        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        if exc_type is None and not self._closed:
            self.close()