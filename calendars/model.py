"""Event record and the closed set of editable event fields.

A recurring series is not a separate type: the recurrence expander emits a
batch of ordinary ``Event`` values that happen to share a name.
"""
from __future__ import annotations

import datetime as _dt
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from core.constants import ALL_DAY_END, ALL_DAY_START


def parse_bool(value: Optional[str]) -> bool:
    """Case-insensitive 'true' is True; anything else is False."""
    return (value or "").lower() == "true"


class EventField(str, Enum):
    NAME = "name"
    DESCRIPTION = "description"
    LOCATION = "location"
    IS_PUBLIC = "ispublic"

    @classmethod
    def parse(cls, text: str) -> Optional["EventField"]:
        """Return the field for a property name, or None when unrecognized."""
        try:
            return cls((text or "").strip().lower())
        except ValueError:
            return None


@dataclass
class Event:
    """One concrete occurrence; end >= start is the caller's responsibility."""

    name: str
    start: _dt.datetime
    end: _dt.datetime
    description: str = ""
    location: str = ""
    is_public: bool = True

    @property
    def is_all_day(self) -> bool:
        return (
            (self.start.hour, self.start.minute) == ALL_DAY_START
            and (self.end.hour, self.end.minute) == ALL_DAY_END
        )

    @property
    def duration(self) -> _dt.timedelta:
        return self.end - self.start

    def overlaps(self, start: _dt.datetime, end: _dt.datetime) -> bool:
        """True unless one interval ends strictly before the other begins."""
        return not (end < self.start or start > self.end)

    def contains(self, instant: _dt.datetime) -> bool:
        return self.start <= instant <= self.end

    def shifted(self, offset: _dt.timedelta) -> "Event":
        """Copy moved by ``offset``; duration and other fields are kept."""
        return replace(self, start=self.start + offset, end=self.end + offset)

    def apply(self, field: EventField, value: str) -> None:
        if field is EventField.NAME:
            self.name = value
        elif field is EventField.DESCRIPTION:
            self.description = value
        elif field is EventField.LOCATION:
            self.location = value
        elif field is EventField.IS_PUBLIC:
            self.is_public = parse_bool(value)
