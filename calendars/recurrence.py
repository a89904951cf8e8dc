"""Weekly recurrence expansion.

A rule is a weekday set plus exactly one terminator: an occurrence count or
an inclusive ``until`` instant. Expansion walks forward one calendar day at a
time from the template's start date and emits an ``Event`` on every matching
weekday, keeping the template's clock times.
"""
from __future__ import annotations

import datetime as _dt
from dataclasses import dataclass, replace
from typing import FrozenSet, Iterator, List, Optional

from .model import Event


@dataclass(frozen=True)
class RecurrenceRule:
    """Weekdays use Python numbering (Mon=0 .. Sun=6)."""

    weekdays: FrozenSet[int]
    occurrences: Optional[int] = None
    until: Optional[_dt.datetime] = None

    def __post_init__(self) -> None:
        if (self.occurrences is None) == (self.until is None):
            raise ValueError("RecurrenceRule needs exactly one of occurrences or until")
        if not self.weekdays:
            raise ValueError("RecurrenceRule needs at least one weekday")
        if self.occurrences is not None and self.occurrences < 0:
            raise ValueError("Occurrence count cannot be negative.")


def _occurrence(template: Event, day: _dt.date) -> Event:
    return replace(
        template,
        start=_dt.datetime.combine(day, template.start.time()),
        end=_dt.datetime.combine(day, template.end.time()),
    )


def _matching_days(start: _dt.date, weekdays: FrozenSet[int]) -> Iterator[_dt.date]:
    d = start
    while True:
        if d.weekday() in weekdays:
            yield d
        if d == _dt.date.max:
            return
        d = d + _dt.timedelta(days=1)


def expand_occurrences(template: Event, rule: RecurrenceRule) -> List[Event]:
    """Expand ``template`` into concrete occurrences, dates strictly increasing.

    Count mode stops once ``rule.occurrences`` events were emitted (0 yields
    nothing). Until mode stops when a scanned day's midnight is after
    ``rule.until``, so the whole ``until`` day is inclusive.

    Raises OverflowError when a count series would run past ``date.max``.
    """
    out: List[Event] = []
    first = template.start.date()
    if rule.occurrences is not None:
        if rule.occurrences == 0:
            return out
        for day in _matching_days(first, rule.weekdays):
            out.append(_occurrence(template, day))
            if len(out) >= rule.occurrences:
                return out
        raise OverflowError(f"only {len(out)} of {rule.occurrences} occurrences fit before {_dt.date.max}")

    assert rule.until is not None
    for day in _matching_days(first, rule.weekdays):
        if _dt.datetime.combine(day, _dt.time()) > rule.until:
            break
        out.append(_occurrence(template, day))
    return out
