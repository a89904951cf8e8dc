"""Text rendering for query results."""
from __future__ import annotations

from typing import List

from core.date_utils import DateFormats

from .model import Event


def _span(event: Event, formats: DateFormats) -> str:
    return f"({formats.format_time(event.start)} to {formats.format_time(event.end)})"


def events_on(label: str, events: List[Event], formats: DateFormats) -> str:
    if not events:
        return f"No events on {label}"
    lines = [f"Events on {label}:"]
    for e in events:
        if e.is_all_day:
            lines.append(f" - {e.name} All Day Event  at {e.location}")
        else:
            lines.append(f" - {e.name} {_span(e, formats)} at {e.location}")
    return "\n".join(lines) + "\n"


def events_between(start_label: str, end_label: str, events: List[Event], formats: DateFormats) -> str:
    if not events:
        return f"No events between {start_label} and {end_label}"
    lines = [f"Events from {start_label} to {end_label}:"]
    lines.extend(f" - {e.name} {_span(e, formats)} at {e.location}" for e in events)
    return "\n".join(lines) + "\n"


def busy_status(label: str, busy: bool) -> str:
    return f"Status at {label}: {'Busy' if busy else 'Available'}"
