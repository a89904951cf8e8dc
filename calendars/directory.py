"""Registry of calendars keyed by (case-sensitive) name."""
from __future__ import annotations

import logging
from typing import Dict, List

from .collection import Calendar
from .errors import CalendarNotFoundError, DuplicateCalendarError, InvalidCommandError

LOG = logging.getLogger(__name__)


class CalendarDirectory:
    """Owns every calendar plus the active-calendar reference.

    The directory is created with one calendar so that ``active`` always
    points at an existing entry.
    """

    def __init__(self, default_name: str, default_timezone: str) -> None:
        self._calendars: Dict[str, Calendar] = {}
        self._active = self.create(default_name, default_timezone)

    def __contains__(self, name: str) -> bool:
        return name in self._calendars

    @property
    def names(self) -> List[str]:
        return list(self._calendars)

    @property
    def active(self) -> Calendar:
        return self._active

    def create(self, name: str, timezone: str) -> Calendar:
        if name in self._calendars:
            raise DuplicateCalendarError(name)
        cal = Calendar(name, timezone)
        self._calendars[name] = cal
        LOG.debug("Created calendar %r (%s)", name, timezone)
        return cal

    def get(self, name: str) -> Calendar:
        try:
            return self._calendars[name]
        except KeyError:
            raise CalendarNotFoundError(name) from None

    def use(self, name: str) -> Calendar:
        self._active = self.get(name)
        LOG.debug("Active calendar is now %r", name)
        return self._active

    def edit(self, name: str, prop: str, value: str) -> Calendar:
        """Rename a calendar or change its timezone label.

        Renaming keeps the same ``Calendar`` object, so an active calendar stays active.
        """
        cal = self.get(name)
        key = prop.lower()
        if key == "name":
            if value == name:
                return cal
            if value in self._calendars:
                raise DuplicateCalendarError(value)
            # Rebuild to keep the directory's insertion order stable.
            self._calendars = {value if k == name else k: v for k, v in self._calendars.items()}
            cal.name = value
            LOG.debug("Renamed calendar %r -> %r", name, value)
        elif key == "timezone":
            cal.timezone = value
            LOG.debug("Calendar %r timezone -> %s", name, value)
        else:
            raise InvalidCommandError(f"unknown calendar property '{prop}'")
        return cal
