"""Shared date and time utilities.

Provides weekday-letter parsing and the immutable ``DateFormats`` bundle
used to turn command literals into ``datetime`` values.
"""
from __future__ import annotations

import datetime as _dt
from dataclasses import dataclass
from typing import FrozenSet

from .constants import (
    ALL_DAY_END,
    ALL_DAY_START,
    FMT_DATETIME,
    FMT_DAY,
    FMT_EXPORT_DATE,
    FMT_EXPORT_TIME,
    FMT_TIME,
)

__all__ = [
    "DAY_LETTERS",
    "DateFormats",
    "all_day_bounds",
    "parse_weekdays",
    "weekday_letters",
]

# Single-letter weekday codes to Python weekday numbers (Mon=0).
# T is Tuesday and R is Thursday; S is Saturday and U is Sunday.
DAY_LETTERS = {
    "M": 0,
    "T": 1,
    "W": 2,
    "R": 3,
    "F": 4,
    "S": 5,
    "U": 6,
}


def parse_weekdays(spec: str) -> FrozenSet[int]:
    """Parse a contiguous weekday-letter string into Python weekday numbers.

    Unrecognized letters are skipped, so the result may be empty.

    Examples:
        'MWF' -> {0, 2, 4}
        'TR'  -> {1, 3}
        'xyz' -> set()
    """
    return frozenset(DAY_LETTERS[c] for c in (spec or "") if c in DAY_LETTERS)


def weekday_letters(days: FrozenSet[int]) -> str:
    """Inverse of :func:`parse_weekdays`, Monday first."""
    by_num = {v: k for k, v in DAY_LETTERS.items()}
    return "".join(by_num[d] for d in sorted(days))


def all_day_bounds(day: _dt.date) -> tuple[_dt.datetime, _dt.datetime]:
    """Return the (00:00, 23:59) pair that marks an all-day event."""
    start = _dt.datetime.combine(day, _dt.time(*ALL_DAY_START))
    end = _dt.datetime.combine(day, _dt.time(*ALL_DAY_END))
    return start, end


@dataclass(frozen=True)
class DateFormats:
    """Textual formats for command literals and rendered output.

    Built once and handed around by reference; parsing raises ``ValueError``
    for malformed literals and callers decide how to surface that.
    """

    datetime_fmt: str = FMT_DATETIME
    date_fmt: str = FMT_DAY
    time_fmt: str = FMT_TIME
    export_date_fmt: str = FMT_EXPORT_DATE
    export_time_fmt: str = FMT_EXPORT_TIME

    def parse_datetime(self, text: str) -> _dt.datetime:
        return _dt.datetime.strptime(text, self.datetime_fmt)

    def parse_date(self, text: str) -> _dt.date:
        return _dt.datetime.strptime(text, self.date_fmt).date()

    def format_time(self, value: _dt.datetime) -> str:
        return value.strftime(self.time_fmt)
