# zipforge

A small library for writing ZIP archives to any binary file-like object.

- Write entries whose data is known up front (`write_entry_whole`) or stream
  entries of unknown size through a data descriptor (`write_entry_stream`).
- Stored, Deflate, bzip2, LZMA and XZ compression, all from the standard
  library (`zlib`, `bz2`, `lzma`).
- ZIP64 support: switched on automatically when an archive needs it, forced on
  with `force_zip64()`, or forbidden with `force_no_zip64()`, in which case a
  `Zip64NeededError` is raised.
- Info-ZIP Unicode path and comment extra fields for names and comments that
  carry a legacy-encoded alternative alongside their UTF-8 form.
- MS-DOS timestamps through `ZipDateTime` and `ZipDateTimeBuilder`.

No third-party packages are needed.

## Installing

```
pip install zipforge
```

## Writing an archive

```python
import io

from zipforge.entry import Compression, ZipEntryBuilder
from zipforge.writer import ZipFileWriter

buffer = io.BytesIO()
writer = ZipFileWriter(buffer)

entry = ZipEntryBuilder("foo.txt", Compression.DEFLATE)
writer.write_entry_whole(entry, b"This is an example file.")

with writer.write_entry_stream(ZipEntryBuilder("bar.txt", Compression.STORED)) as stream:
    stream.write(b"Streamed ")
    stream.write(b"content.")

writer.close()
archive_bytes = buffer.getvalue()
```

`write_entry_whole` and `write_entry_stream` accept either a `ZipEntryBuilder`
or a built `ZipEntry`. Only one stream writer may be open at a time; starting
another entry or closing the archive while one is open raises `RuntimeError`.
Leaving the stream's `with` block without an error calls its `close()`, which
writes the data descriptor and records the central directory header.

`ZipFileWriter.close()` writes the central directory, the ZIP64 end records
when needed, and the end-of-central-directory record, then returns the inner
writer. `ZipFileWriter` is also a context manager that does this on leaving the
`with` block without an error:

```python
with ZipFileWriter(buffer) as writer:
    writer.comment("archive comment")
    writer.write_entry_whole(ZipEntryBuilder("a.txt", Compression.STORED), b"a")
```

Streamed entries always carry a ZIP64 extended information field unless
`force_no_zip64()` was set, so such archives end with ZIP64 end records.

## Entry options

```python
from zipforge.dates import ZipDateTimeBuilder
from zipforge.entry import AttributeCompatibility, Compression, DeflateOption, ZipEntryBuilder

when = ZipDateTimeBuilder().year(2024).month(3).day(2).hour(12).minute(30).build()
entry = (
    ZipEntryBuilder("script.sh", Compression.DEFLATE)
    .deflate_option(DeflateOption.MAXIMUM)
    .attribute_compatibility(AttributeCompatibility.UNIX)
    .unix_permissions(0o755)
    .last_modification_date(when)
    .comment("an executable")
    .build()
)
```

`deflate_option` takes a `DeflateOption` or an integer level, which is clamped
to the codec's range. `size(compressed, uncompressed)` sets a size hint written
into the local header of a streamed entry.

`ZipDateTime.from_datetime` packs a `datetime` (aware values are converted to
UTC) and `as_datetime` returns a UTC `datetime`. Seconds are kept to a
two-second grid.

Names with a legacy encoding alongside the UTF-8 form:

```python
from zipforge.strings import ZipString

name = ZipString.new_with_alternative("中文.txt", b"\xd6\xd0\xce\xc4.txt")
```

The alternative bytes go into the headers and the UTF-8 form into an Info-ZIP
Unicode Path extra field.

## Errors

Every error derives from `zipforge.errors.ZipError`:

- `Zip64NeededError` when `force_no_zip64()` is set and an entry is larger than
  4 GiB or the archive holds more than 65535 entries; its `case` is a
  `Zip64ErrorCase`.
- `FileNameTooLargeError`, `CommentTooLargeError`, `ExtraFieldTooLargeError`
  when a value does not fit a 16-bit length.
- `StringNotUtf8Error` from `ZipString.as_str()` on raw, non-UTF-8 bytes.
- `CompressionNotSupportedError` for Zstandard and
  `FeatureNotSupportedError` for Deflate64, which cannot be written.
- `UpstreamReadError` wrapping an `OSError` from the underlying writer.

## What it does not do

zipforge only writes archives. It has no reader: it cannot list, extract or
verify the contents of an existing ZIP file. It does not encrypt entries,
cannot write Zstandard or Deflate64 data, and has no command-line tool.