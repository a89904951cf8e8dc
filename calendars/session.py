"""Per-interpreter state threaded through every dispatch call."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from core.date_utils import DateFormats

from .collection import Calendar
from .config import Settings
from .directory import CalendarDirectory


@dataclass
class Session:
    directory: CalendarDirectory
    formats: DateFormats = field(default_factory=DateFormats)
    export_dir: Optional[Path] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "Session":
        return cls(
            directory=CalendarDirectory(settings.default_calendar, settings.default_timezone),
            export_dir=settings.export_dir,
        )

    @property
    def active(self) -> Calendar:
        return self.directory.active
