import bz2
import io
import lzma
import zlib

import pytest

from zipforge.compressed import CompressedWriter
from zipforge.entry import Compression, DeflateOption
from zipforge.errors import CompressionNotSupportedError, FeatureNotSupportedError
from zipforge.offset import OffsetWriter

DATA = b"foo bar" * 200

DECODERS = {
    Compression.STORED: lambda raw: raw,
    Compression.DEFLATE: lambda raw: zlib.decompress(raw, -zlib.MAX_WBITS),
    Compression.BZ: bz2.decompress,
    Compression.LZMA: lambda raw: lzma.decompress(raw, format=lzma.FORMAT_ALONE),
    Compression.XZ: lambda raw: lzma.decompress(raw, format=lzma.FORMAT_XZ),
}


@pytest.mark.parametrize("compression", list(DECODERS))
def test_round_trip(compression):
    sink = io.BytesIO()
    writer = CompressedWriter(sink, compression)
    assert writer.write(DATA[:500]) == 500
    assert writer.write(DATA[500:]) == len(DATA) - 500
    writer.close()
    assert DECODERS[compression](sink.getvalue()) == DATA


def test_stored_passes_bytes_through():
    sink = io.BytesIO()
    writer = CompressedWriter(sink, Compression.STORED)
    writer.write(b"foo bar")
    writer.close()
    assert sink.getvalue() == b"foo bar"


@pytest.mark.parametrize("compression", list(DECODERS))
def test_close_leaves_inner_writer_open(compression):
    sink = io.BytesIO()
    writer = CompressedWriter(sink, compression)
    writer.write(DATA)
    writer.close()
    assert sink.closed is False
    assert writer.closed is True


@pytest.mark.parametrize(
    "level", [DeflateOption.NORMAL, DeflateOption.MAXIMUM, DeflateOption.FAST, DeflateOption.SUPER, 0, 42]
)
@pytest.mark.parametrize(
    "compression", [Compression.DEFLATE, Compression.BZ, Compression.LZMA, Compression.XZ]
)
def test_levels_round_trip(compression, level):
    sink = io.BytesIO()
    writer = CompressedWriter(sink, compression, level)
    writer.write(DATA)
    writer.close()
    assert DECODERS[compression](sink.getvalue()) == DATA


def test_offset_writer_counts_compressed_bytes():
    sink = io.BytesIO()
    offset_writer = OffsetWriter(sink)
    writer = CompressedWriter(offset_writer, Compression.DEFLATE)
    writer.write(DATA)
    writer.close()
    assert offset_writer.offset() == len(sink.getvalue())
    assert offset_writer.offset() < len(DATA)


def test_deflate_flush_makes_data_decodable():
    sink = io.BytesIO()
    writer = CompressedWriter(sink, Compression.DEFLATE)
    writer.write(DATA)
    writer.flush()
    partial = zlib.decompressobj(-zlib.MAX_WBITS).decompress(sink.getvalue())
    assert partial == DATA


def test_write_after_close_raises():
    writer = CompressedWriter(io.BytesIO(), Compression.DEFLATE)
    writer.close()
    with pytest.raises(ValueError):
        writer.write(b"more")


def test_close_twice_writes_stream_once():
    sink = io.BytesIO()
    writer = CompressedWriter(sink, Compression.XZ)
    writer.write(DATA)
    writer.close()
    first = sink.getvalue()
    writer.close()
    assert sink.getvalue() == first


def test_deflate64_is_not_supported():
    with pytest.raises(FeatureNotSupportedError):
        CompressedWriter(io.BytesIO(), Compression.DEFLATE64)


def test_zstd_is_not_supported():
    with pytest.raises(CompressionNotSupportedError) as info:
        CompressedWriter(io.BytesIO(), Compression.ZSTD)
    assert info.value.compression == int(Compression.ZSTD)