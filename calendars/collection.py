"""A named, timezone-labelled collection of events.

Insertion order is the only order. Events are addressed by (name, start, end)
or looser subsets of it; several events may share any of those values and the
bulk edit scopes intentionally touch every match.
"""
from __future__ import annotations

import datetime as _dt
import logging
from typing import Iterable, List, Optional

from .errors import ConflictError
from .model import Event, EventField

LOG = logging.getLogger(__name__)


class Calendar:
    def __init__(self, name: str, timezone: str, events: Optional[Iterable[Event]] = None) -> None:
        self.name = name
        # Informational label only; no arithmetic depends on it.
        self.timezone = timezone
        self._events: List[Event] = list(events or [])

    def __repr__(self) -> str:
        return f"Calendar(name={self.name!r}, timezone={self.timezone!r}, events={len(self._events)})"

    def __len__(self) -> int:
        return len(self._events)

    @property
    def events(self) -> List[Event]:
        """Snapshot of the events in insertion order."""
        return list(self._events)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def find_conflict(self, event: Event) -> Optional[Event]:
        for existing in self._events:
            if existing.overlaps(event.start, event.end):
                return existing
        return None

    def add_event(self, event: Event, auto_decline: bool = False) -> None:
        """Append ``event``; with ``auto_decline`` an overlap raises ConflictError instead."""
        if auto_decline:
            clash = self.find_conflict(event)
            if clash is not None:
                LOG.debug("Declined %r on %s: overlaps %r", event.name, self.name, clash.name)
                raise ConflictError(event.name, clash.name)
        self._events.append(event)
        LOG.debug("Added %r (%s -> %s) to %s", event.name, event.start, event.end, self.name)

    def add_events(self, events: Iterable[Event], auto_decline: bool = False) -> int:
        """Add events one at a time in order and return how many were added.

        With ``auto_decline`` the first overlap raises ConflictError; events
        added before it stay in the calendar.
        """
        added = 0
        for ev in events:
            self.add_event(ev, auto_decline)
            added += 1
        return added

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def events_on(self, day: _dt.date) -> List[Event]:
        return [e for e in self._events if e.start.date() == day]

    def events_between(self, start: _dt.datetime, end: _dt.datetime) -> List[Event]:
        return [e for e in self._events if e.overlaps(start, end)]

    def is_busy(self, instant: _dt.datetime) -> bool:
        return any(e.contains(instant) for e in self._events)

    def find_by_name_and_start(self, name: str, start: _dt.datetime) -> Optional[Event]:
        for e in self._events:
            if e.name == name and e.start == start:
                return e
        return None

    # ------------------------------------------------------------------
    # Property edits
    # ------------------------------------------------------------------

    def _edit(self, matches: List[Event], prop: str, value: str) -> int:
        field = EventField.parse(prop)
        if field is None:
            LOG.debug("Ignoring unknown property %r on %d event(s)", prop, len(matches))
        else:
            for ev in matches:
                ev.apply(field, value)
        return len(matches)

    def edit_single(self, prop: str, name: str, start: _dt.datetime, end: _dt.datetime, value: str) -> bool:
        """Edit the first event matching (name, start, end); report whether one matched."""
        for ev in self._events:
            if ev.name == name and ev.start == start and ev.end == end:
                self._edit([ev], prop, value)
                return True
        return False

    def edit_from(self, prop: str, name: str, start: _dt.datetime, value: str) -> int:
        matches = [e for e in self._events if e.name == name and e.start == start]
        return self._edit(matches, prop, value)

    def edit_all(self, prop: str, name: str, value: str) -> int:
        matches = [e for e in self._events if e.name == name]
        return self._edit(matches, prop, value)
