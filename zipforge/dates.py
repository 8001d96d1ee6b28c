"""MS-DOS date and time values as stored in ZIP headers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone


@dataclass(frozen=True)
class ZipDateTime:
    """A packed MS-DOS date and time (two-second granularity)."""

    date: int = 0
    time: int = 0

    def year(self) -> int:
        return ((self.date & 0xFE00) >> 9) + 1980

    def month(self) -> int:
        return (self.date & 0x1E0) >> 5

    def day(self) -> int:
        return self.date & 0x1F

    def hour(self) -> int:
        return (self.time & 0xF800) >> 11

    def minute(self) -> int:
        return (self.time & 0x7E0) >> 5

    def second(self) -> int:
        return (self.time & 0x1F) << 1

    @classmethod
    def from_datetime(cls, dt: datetime) -> ZipDateTime:
        """Pack a datetime; aware values are converted to UTC, naive ones taken as UTC."""
        if dt.tzinfo is not None:
            dt = dt.astimezone(timezone.utc)
        return (
            ZipDateTimeBuilder()
            .year(dt.year)
            .month(dt.month)
            .day(dt.day)
            .hour(dt.hour)
            .minute(dt.minute)
            .second(dt.second)
            .build()
        )

    def as_datetime(self) -> datetime:
        """Return a UTC datetime; raises ValueError if the fields are not a valid date."""
        return datetime(
            self.year(),
            self.month(),
            self.day(),
            self.hour(),
            self.minute(),
            self.second(),
            tzinfo=timezone.utc,
        )


class ZipDateTimeBuilder:
    """Chained construction of a ZipDateTime."""

    def __init__(self) -> None:
        self._date = 0
        self._time = 0

    def year(self, year: int) -> ZipDateTimeBuilder:
        self._date |= ((year - 1980) << 9) & 0xFE00
        return self

    def month(self, month: int) -> ZipDateTimeBuilder:
        self._date |= (month << 5) & 0x1E0
        return self

    def day(self, day: int) -> ZipDateTimeBuilder:
        self._date |= day & 0x1F
        return self

    def hour(self, hour: int) -> ZipDateTimeBuilder:
        self._time |= (hour << 11) & 0xF800
        return self

    def minute(self, minute: int) -> ZipDateTimeBuilder:
        self._time |= (minute << 5) & 0x7E0
        return self

    def second(self, second: int) -> ZipDateTimeBuilder:
        """Set the second; odd values are rounded down to the two-second grid."""
        self._time |= (second >> 1) & 0x1F
        return self

    def build(self) -> ZipDateTime:
        return ZipDateTime(self._date, self._time)