import io
import struct

import pytest

from zipforge.archive import StoredZipEntry, ZipFile, ZipFileBuilder
from zipforge.entry import Compression, ZipEntryBuilder
from zipforge.errors import UnexpectedHeaderError, UpstreamReadError
from zipforge.strings import ZipString

LFH_SIGNATURE = 0x04034B50


def _local_header(name: bytes, extra: bytes, data: bytes) -> bytes:
    fields = struct.pack(
        "<HHHHHIIIHH", 20, 0, 0, 0, 0, 0, len(data), len(data), len(name), len(extra)
    )
    return struct.pack("<I", LFH_SIGNATURE) + fields + name + extra + data


def _stored(offset=0, header_size=0, name="file.txt"):
    entry = ZipEntryBuilder(name, Compression.STORED).size(4, 4).build()
    return StoredZipEntry(entry, offset, header_size)


def test_stored_entry_offsets():
    stored = _stored(offset=17, header_size=93)
    assert stored.header_offset() == 17
    assert stored.header_size() == 93


def test_stored_entry_delegates_to_entry():
    stored = _stored(name="dir/")
    assert stored.filename.as_str() == "dir/"
    assert stored.compressed_size == 4
    assert stored.is_dir() is True
    assert stored.entry.compression is Compression.STORED


def test_stored_entry_unknown_attribute_raises():
    stored = _stored()
    sentinel = object()
    assert getattr(stored, "no_such_attribute", sentinel) is sentinel
    with pytest.raises(AttributeError, match="no_such_attribute"):
        getattr(stored, "no_such_attribute")


def test_seek_to_data_offset_skips_header_name_and_extra():
    prefix = b"junk-before-header"
    data = b"payload"
    blob = prefix + _local_header(b"name.txt", b"\x01\x02\x03", data) + b"tail"
    stored = _stored(offset=len(prefix))
    reader = io.BytesIO(blob)
    stored._seek_to_data_offset(reader)
    assert reader.read(len(data)) == data


def test_seek_to_data_offset_bad_signature():
    blob = struct.pack("<I", 0x02014B50) + bytes(40)
    stored = _stored(offset=0)
    with pytest.raises(UnexpectedHeaderError) as info:
        stored._seek_to_data_offset(io.BytesIO(blob))
    assert info.value.actual == 0x02014B50
    assert info.value.expected == LFH_SIGNATURE


def test_seek_to_data_offset_truncated_header():
    blob = struct.pack("<I", LFH_SIGNATURE) + bytes(10)
    stored = _stored(offset=0)
    with pytest.raises(UpstreamReadError):
        stored._seek_to_data_offset(io.BytesIO(blob))


def test_file_builder_defaults():
    built = ZipFileBuilder().build()
    assert built.entries == []
    assert built.zip64 is False
    assert built.comment.as_str() == ""


def test_file_builder_comment():
    built = ZipFileBuilder().comment(ZipString.from_str("archive note")).build()
    assert built.comment.as_str() == "archive note"


def test_file_builder_builds_independent_files():
    builder = ZipFileBuilder().comment("shared")
    first = builder.build()
    first.entries.append(_stored())
    second = builder.build()
    assert second.entries == []
    assert len(first.entries) == 1
    assert second.comment == first.comment


def test_zip_file_holds_entries():
    stored = _stored(offset=5)
    archive = ZipFile(entries=[stored], zip64=True)
    assert archive.entries[0].header_offset() == 5
    assert archive.zip64 is True