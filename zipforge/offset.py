"""A writer wrapper that counts the bytes written through it."""

from __future__ import annotations

from typing import Any


class OffsetWriter:
    """Forwards writes to an inner writer and tracks the byte offset."""

    def __init__(self, inner: Any) -> None:
        self.inner = inner
        self._offset = 0

    def write(self, data: bytes) -> int:
        """Write data, returning the number of bytes the inner writer accepted."""
        written = self.inner.write(data)
        if written is None:
            written = len(data)
        self._offset += written
        return written

    def flush(self) -> None:
        flush = getattr(self.inner, "flush", None)
        if flush is not None:
            flush()

    def close(self) -> None:
        close = getattr(self.inner, "close", None)
        if close is not None:
            close()

    def offset(self) -> int:
        """Return the number of bytes written so far."""
        return self._offset