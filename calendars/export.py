"""CSV export in the Google Calendar import layout."""
from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Iterable, List, Optional

from core.constants import EXPORT_HEADER
from core.date_utils import DateFormats

from .model import Event

LOG = logging.getLogger(__name__)


def _flag(value: bool) -> str:
    return "True" if value else "False"


def event_row(event: Event, formats: DateFormats) -> List[str]:
    """One CSV row; all-day events leave both time columns blank."""
    all_day = event.is_all_day
    return [
        event.name,
        event.start.strftime(formats.export_date_fmt),
        "" if all_day else event.start.strftime(formats.export_time_fmt),
        event.end.strftime(formats.export_date_fmt),
        "" if all_day else event.end.strftime(formats.export_time_fmt),
        _flag(all_day),
        event.description,
        event.location,
        _flag(not event.is_public),
    ]


def export_csv(
    events: Iterable[Event],
    filename: str,
    *,
    formats: Optional[DateFormats] = None,
    base_dir: Optional[Path] = None,
) -> str:
    """Write ``events`` to ``filename`` and return the absolute output path.

    Relative filenames resolve against ``base_dir`` (default: the working directory).
    """
    fmts = formats or DateFormats()
    target = Path(filename).expanduser()
    if not target.is_absolute() and base_dir is not None:
        target = base_dir / target
    target = target.absolute()
    target.parent.mkdir(parents=True, exist_ok=True)

    count = 0
    with target.open("w", encoding="utf-8", newline="") as fh:
        writer = csv.writer(fh, lineterminator="\n")
        writer.writerow(EXPORT_HEADER)
        for ev in events:
            writer.writerow(event_row(ev, fmts))
            count += 1
    LOG.debug("Exported %d event(s) to %s", count, target)
    return str(target)
