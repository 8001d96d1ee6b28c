import io

from zipforge.offset import OffsetWriter


def test_basic():
    writer = OffsetWriter(io.BytesIO())
    assert writer.offset() == 0

    writer.write(b"Foo. Bar. Foo. Bar.")
    assert writer.offset() == 19

    writer.write(b"Foo. Foo.")
    assert writer.offset() == 28

    writer.write(b"Bar. Bar.")
    assert writer.offset() == 37


def test_data_reaches_inner():
    inner = io.BytesIO()
    writer = OffsetWriter(inner)
    writer.write(b"abc")
    writer.write(b"def")
    writer.flush()
    assert inner.getvalue() == b"abcdef"
    assert writer.offset() == len(inner.getvalue())


def test_partial_writes_counted():
    class Partial:
        def write(self, data):
            return min(len(data), 2)

    writer = OffsetWriter(Partial())
    assert writer.write(b"hello") == 2
    assert writer.offset() == 2


def test_close_closes_inner():
    inner = io.BytesIO()
    writer = OffsetWriter(inner)
    writer.close()
    assert inner.closed