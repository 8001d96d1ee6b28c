"""A writer that compresses entry data on its way to the archive."""

from __future__ import annotations

import bz2
import lzma
import zlib
from typing import Any

from .entry import Compression, DeflateOption
from .errors import (
    CompressionNotSupportedError,
    FeatureNotSupportedError,
    UpstreamReadError,
)

# (fastest, default, best, minimum, maximum) for each codec.
_LEVELS = {
    Compression.DEFLATE: (1, 6, 9, 0, 9),
    Compression.BZ: (1, 6, 9, 1, 9),
    Compression.LZMA: (0, 6, 9, 0, 9),
    Compression.XZ: (0, 6, 9, 0, 9),
}


def _resolve_level(compression: Compression, level: DeflateOption | int | None) -> int:
    fastest, default, best, low, high = _LEVELS[compression]
    if level is None or level is DeflateOption.NORMAL:
        return default
    if level is DeflateOption.MAXIMUM:
        return best
    if level in (DeflateOption.FAST, DeflateOption.SUPER):
        return fastest
    return min(max(int(level), low), high)


def _make_compressor(compression: Compression, level: DeflateOption | int | None) -> Any:
    if compression is Compression.STORED:
        return None
    if compression is Compression.DEFLATE64:
        raise FeatureNotSupportedError("writing deflate64")
    if compression not in _LEVELS:
        raise CompressionNotSupportedError(int(compression))
    resolved = _resolve_level(compression, level)
    if compression is Compression.DEFLATE:
        return zlib.compressobj(resolved, zlib.DEFLATED, -zlib.MAX_WBITS)
    if compression is Compression.BZ:
        return bz2.BZ2Compressor(resolved)
    if compression is Compression.LZMA:
        return lzma.LZMACompressor(format=lzma.FORMAT_ALONE, preset=resolved)
    return lzma.LZMACompressor(format=lzma.FORMAT_XZ, preset=resolved)


class CompressedWriter:
    """Compresses written data into an inner writer.

    Closing finishes the compressed stream but leaves the inner writer open.
    """

    def __init__(
        self,
        writer: Any,
        compression: Compression,
        level: DeflateOption | int | None = None,
    ) -> None:
        self.inner = writer
        self.compression = Compression(compression)
        self._compressor = _make_compressor(self.compression, level)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def _emit(self, chunk: bytes) -> None:
        view = memoryview(chunk)
        try:
            while view:
                written = self.inner.write(view)
                if written is None:
                    written = len(view)
                if written == 0:
                    raise OSError("failed to write whole buffer")
                view = view[written:]
        except OSError as exc:
            raise UpstreamReadError(exc) from exc

    def write(self, data: bytes) -> int:
        """Accept uncompressed data; returns the number of bytes accepted."""
        if self._closed:
            raise ValueError("write to a closed CompressedWriter")
        data = bytes(data)
        if self._compressor is None:
            self._emit(data)
        else:
            self._emit(self._compressor.compress(data))
        return len(data)

    def flush(self) -> None:
        """Push out buffered output where the codec allows it, then flush the inner writer."""
        if self._closed:
            return
        if self.compression is Compression.DEFLATE:
            self._emit(self._compressor.flush(zlib.Z_SYNC_FLUSH))
        inner_flush = getattr(self.inner, "flush", None)
        if inner_flush is not None:
            try:
                inner_flush()
            except OSError as exc:
                raise UpstreamReadError(exc) from exc

    def close(self) -> None:
        """Finish the compressed stream without closing the inner writer."""
        if self._closed:
            return
        if self._compressor is not None:
            self._emit(self._compressor.flush())
        self._closed = True