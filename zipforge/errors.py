"""Exceptions raised while reading or writing ZIP archives."""

from __future__ import annotations

from enum import Enum


class Zip64ErrorCase(Enum):
    """Why an archive would have needed ZIP64 structures."""

    TOO_MANY_FILES = "too_many_files"
    LARGE_FILE = "large_file"

    def __str__(self) -> str:
        if self is Zip64ErrorCase.TOO_MANY_FILES:
            return "More than 65536 files in archive"
        return "File is larger than 4 GiB"


class ZipError(Exception):
    """Base class of every error raised by this package."""


class FeatureNotSupportedError(ZipError):
    """A ZIP feature that this package does not handle was requested."""

    def __init__(self, feature: str) -> None:
        self.feature = feature
        super().__init__(f"feature not supported: '{feature}'")


class CompressionNotSupportedError(ZipError):
    """An unknown or unsupported compression method was found."""

    def __init__(self, compression: int) -> None:
        self.compression = compression
        super().__init__(f"compression not supported: {compression}")


class AttributeCompatibilityNotSupportedError(ZipError):
    """An unknown host attribute compatibility value was found."""

    def __init__(self, compatibility: int) -> None:
        self.compatibility = compatibility
        super().__init__(f"host attribute compatibility not supported: {compatibility}")


class Zip64NeededError(ZipError):
    """ZIP64 structures are required but were forbidden by the writer."""

    def __init__(self, case: Zip64ErrorCase) -> None:
        self.case = case
        super().__init__(
            "attempted to write a ZIP file with force_no_zip64 when ZIP64 is needed: " f"{case}"
        )


class ExtraFieldTooLargeError(ZipError):
    """The extra fields do not fit in a 16-bit length."""

    def __init__(self) -> None:
        super().__init__("extra fields exceeded maximum size")


class CommentTooLargeError(ZipError):
    """A comment does not fit in a 16-bit length."""

    def __init__(self) -> None:
        super().__init__("comment exceeded maximum size")


class FileNameTooLargeError(ZipError):
    """A filename does not fit in a 16-bit length."""

    def __init__(self) -> None:
        super().__init__("filename exceeded maximum size")


class StringNotUtf8Error(ZipError):
    """Raw bytes that are not UTF-8 were asked for as text."""

    def __init__(self) -> None:
        super().__init__("attempted to convert non-UTF8 bytes to a string/str")


class UnexpectedHeaderError(ZipError):
    """A four-byte signature did not match the one expected."""

    def __init__(self, actual: int, expected: int) -> None:
        self.actual = actual
        self.expected = expected
        super().__init__(
            f"Encountered an unexpected header (actual: {actual:#x}, expected: {expected:#x})."
        )


class UpstreamReadError(ZipError):
    """The underlying reader or writer failed."""

    def __init__(self, error: BaseException) -> None:
        self.error = error
        super().__init__(f"an upstream reader returned an error: {error}")


class EntryIndexOutOfBoundsError(ZipError):
    """An entry index beyond the end of the archive was requested."""

    def __init__(self) -> None:
        super().__init__("entry index was out of bounds")