import pytest

from zipforge.errors import StringNotUtf8Error
from zipforge.strings import StringEncoding, ZipString

ALT = b"\xD6\xD0\xCe\xC4.txt"
NAME = "\u4E2D\u6587.txt"


def test_from_str_round_trip():
    s = ZipString.from_str("foo.bar")
    assert s.as_str() == "foo.bar"
    assert s.raw == b"foo.bar"
    assert s.encoding is StringEncoding.UTF8
    assert s.alternative is None


def test_invalid_utf8_falls_back_to_raw():
    s = ZipString(b"\xff\xfe", StringEncoding.UTF8)
    assert s.encoding is StringEncoding.RAW
    with pytest.raises(StringNotUtf8Error):
        s.as_str()


def test_valid_utf8_kept():
    s = ZipString(NAME.encode("utf-8"), StringEncoding.UTF8)
    assert s.encoding is StringEncoding.UTF8
    assert s.as_str() == NAME


def test_raw_encoding_never_decodes():
    s = ZipString(b"plain", StringEncoding.RAW)
    with pytest.raises(StringNotUtf8Error):
        s.as_str()
    assert bytes(s) == b"plain"


def test_alternative():
    s = ZipString.new_with_alternative(NAME, ALT)
    assert s.as_str() == NAME
    assert s.alternative == ALT
    assert not s.is_utf8_without_alternative()


def test_is_utf8_without_alternative():
    assert ZipString.from_str("a").is_utf8_without_alternative()
    assert not ZipString(b"a", StringEncoding.RAW).is_utf8_without_alternative()


def test_equality_and_hash():
    a = ZipString.from_str("x")
    b = ZipString(b"x", StringEncoding.UTF8)
    assert a == b
    assert hash(a) == hash(b)
    assert a != ZipString(b"x", StringEncoding.RAW)