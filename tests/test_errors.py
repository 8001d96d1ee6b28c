import pytest

from zipforge.errors import (
    AttributeCompatibilityNotSupportedError,
    CommentTooLargeError,
    CompressionNotSupportedError,
    EntryIndexOutOfBoundsError,
    ExtraFieldTooLargeError,
    FeatureNotSupportedError,
    FileNameTooLargeError,
    StringNotUtf8Error,
    UnexpectedHeaderError,
    UpstreamReadError,
    Zip64ErrorCase,
    Zip64NeededError,
    ZipError,
)


@pytest.mark.parametrize(
    "case, message",
    [
        (Zip64ErrorCase.TOO_MANY_FILES, "More than 65536 files in archive"),
        (Zip64ErrorCase.LARGE_FILE, "File is larger than 4 GiB"),
    ],
)
def test_zip64_case_messages(case, message):
    assert case.__str__() == message
    assert str(Zip64NeededError(case)).endswith(message)


def test_zip64_needed_carries_case():
    err = Zip64NeededError(Zip64ErrorCase.LARGE_FILE)
    assert err.case is Zip64ErrorCase.LARGE_FILE
    assert str(err).endswith(str(Zip64ErrorCase.LARGE_FILE))
    assert str(err).startswith("attempted to write a ZIP file with force_no_zip64")


def test_unexpected_header_formats_hex():
    err = UnexpectedHeaderError(0x1234, 0xABCD)
    assert err.actual == 0x1234
    assert err.expected == 0xABCD
    assert f"actual: {0x1234:#x}" in str(err)
    assert f"expected: {0xABCD:#x}" in str(err)


@pytest.mark.parametrize(
    "error, message",
    [
        (ExtraFieldTooLargeError(), "extra fields exceeded maximum size"),
        (CommentTooLargeError(), "comment exceeded maximum size"),
        (FileNameTooLargeError(), "filename exceeded maximum size"),
        (StringNotUtf8Error(), "attempted to convert non-UTF8 bytes to a string/str"),
        (EntryIndexOutOfBoundsError(), "entry index was out of bounds"),
    ],
)
def test_fixed_messages(error, message):
    assert str(error) == message


def test_parameterised_messages_include_value():
    assert "'encryption'" in str(FeatureNotSupportedError("encryption"))
    assert str(CompressionNotSupportedError(99)).endswith("99")
    assert str(AttributeCompatibilityNotSupportedError(7)).endswith("7")


def test_upstream_wraps_cause():
    cause = OSError("disk gone")
    err = UpstreamReadError(cause)
    assert err.error is cause
    assert "disk gone" in str(err)


@pytest.mark.parametrize(
    "error, fragment",
    [
        (UnexpectedHeaderError(1, 2), "actual: 0x1, expected: 0x2"),
        (Zip64NeededError(Zip64ErrorCase.TOO_MANY_FILES), "More than 65536 files in archive"),
        (FeatureNotSupportedError("spanning"), "feature not supported: 'spanning'"),
        (CompressionNotSupportedError(12), "compression not supported: 12"),
        (AttributeCompatibilityNotSupportedError(3), "host attribute compatibility not supported: 3"),
        (ExtraFieldTooLargeError(), "extra fields exceeded maximum size"),
        (UpstreamReadError(OSError("short read")), "short read"),
    ],
)
def test_all_are_zip_errors(error, fragment):
    assert isinstance(error, ZipError)
    assert fragment in str(error)
    with pytest.raises(ZipError, match=fragment.replace("(", r"\(").replace(")", r"\)")):
        raise error