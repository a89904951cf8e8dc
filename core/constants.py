"""Shared constants used across the calendar CLI.

Date/time formats live here so parsing and rendering agree on a single
textual shape; nothing else in the tree should spell out a strftime
pattern for these.
"""

from __future__ import annotations

# -----------------------------------------------------------------------------
# Date/time literal formats (command language)
# -----------------------------------------------------------------------------

# yyyy-MM-dd'T'HH:mm
FMT_DATETIME = "%Y-%m-%dT%H:%M"
# yyyy-MM-dd
FMT_DAY = "%Y-%m-%d"
# HH:mm
FMT_TIME = "%H:%M"

# -----------------------------------------------------------------------------
# Export formats (Google Calendar CSV)
# -----------------------------------------------------------------------------

FMT_EXPORT_DATE = "%m/%d/%Y"
FMT_EXPORT_TIME = "%H:%M"

EXPORT_HEADER = [
    "Subject",
    "Start Date",
    "Start Time",
    "End Date",
    "End Time",
    "All Day Event",
    "Description",
    "Location",
    "Private",
]

# -----------------------------------------------------------------------------
# All-day convention: 00:00 start, 23:59 end on the same day
# -----------------------------------------------------------------------------

ALL_DAY_START = (0, 0)
ALL_DAY_END = (23, 59)

# -----------------------------------------------------------------------------
# CLI defaults
# -----------------------------------------------------------------------------

DEFAULT_CALENDAR_NAME = "Default"
DEFAULT_TIMEZONE = "America/New_York"
DEFAULT_LOG_LEVEL = "WARNING"
EXIT_KEYWORD = "exit"
