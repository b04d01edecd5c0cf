"""Calendar and clock helpers for the summer timetable (June to September)."""

from __future__ import annotations

from dataclasses import dataclass

_MINUTES_PER_DAY = 24 * 60

# Days that come before the first of each month, counted from June 1st = day 1.
_MONTH_OFFSETS = {"6": 0, "7": 30, "8": 61, "9": 92}


def datify(text: str) -> int:
    """Turn an ``MM-DD`` date into a day number (06-01 is 1), or -1 for an unknown month."""
    if len(text) < 5:
        return -1
    offset = _MONTH_OFFSETS.get(text[1])
    if offset is None:
        return -1
    return offset + int(text[3:5])


def _two_digits(value: int) -> str:
    return f"{value // 10}{value % 10}"


def format_date(day: int) -> str:
    """Render a day number as ``MM-DD``; non-positive days render as ``xx-xx``."""
    if day <= 0:
        return "xx-xx"
    if day <= 30:
        return "06-" + _two_digits(day)
    if day <= 61:
        return "07-" + _two_digits(day - 30)
    if day <= 92:
        return "08-" + _two_digits(day - 61)
    return "09-" + _two_digits(day - 92)


def format_clock(minutes: int) -> str:
    """Render minutes past midnight as ``HH:MM``; negative values render as ``xx:xx``."""
    if minutes < 0:
        return "xx:xx"
    return _two_digits(minutes // 60) + ":" + _two_digits(minutes % 60)


def parse_clock(text: str) -> Time:
    """Parse an ``HH:MM`` clock reading into a time on day 0."""
    hours = int(text[0:2])
    mins = int(text[3:5])
    return Time(0, hours * 60 + mins)


@dataclass(frozen=True)
class Time:
    """A moment given as a day number and minutes past midnight."""

    date: int = 0
    time: int = 0

    @classmethod
    def none(cls) -> Time:
        """The placeholder moment used where a train neither arrives nor leaves."""
        return cls(-1, -1)

    @property
    def is_none(self) -> bool:
        return self.time == -1

    def plus(self, minutes: int) -> Time:
        """Return the moment ``minutes`` later, rolling over into following days."""
        if self.time == -1:
            return self
        total = self.time + minutes
        return Time(self.date + total // _MINUTES_PER_DAY, total % _MINUTES_PER_DAY)

    def shift_days(self, days: int) -> Time:
        """Return the same clock time ``days`` later."""
        return Time(self.date + days, self.time)

    def __sub__(self, other: Time) -> int:
        """Minutes elapsed from ``other`` to this moment."""
        return (self.date - other.date) * _MINUTES_PER_DAY + (self.time - other.time)

    def __str__(self) -> str:
        return f"{format_date(self.date)} {format_clock(self.time)}"