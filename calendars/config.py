"""Settings for the calendar CLI.

Values come from an optional YAML file and are then overridden by
``CALENDARS_*`` environment variables.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from core.constants import DEFAULT_CALENDAR_NAME, DEFAULT_LOG_LEVEL, DEFAULT_TIMEZONE
from core.yamlio import load_config

CONFIG_ENV = "CALENDARS_CONFIG"

# YAML key -> environment variable
_ENV_OVERRIDES = {
    "default_calendar": "CALENDARS_DEFAULT_CALENDAR",
    "timezone": "CALENDARS_TIMEZONE",
    "export_dir": "CALENDARS_EXPORT_DIR",
    "log_level": "CALENDARS_LOG_LEVEL",
}


@dataclass(frozen=True)
class Settings:
    default_calendar: str = DEFAULT_CALENDAR_NAME
    default_timezone: str = DEFAULT_TIMEZONE
    export_dir: Path = field(default_factory=Path.cwd)
    log_level: str = DEFAULT_LOG_LEVEL


def _coerce_str(v: Any) -> Optional[str]:
    if v is None:
        return None
    s = str(v).strip()
    return s if s else None


def load_settings(path: Optional[str] = None, environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from ``path`` (or $CALENDARS_CONFIG) plus env overrides."""
    env = os.environ if environ is None else environ
    raw: Dict[str, Any] = dict(load_config(path or env.get(CONFIG_ENV)))
    for key, var in _ENV_OVERRIDES.items():
        if _coerce_str(env.get(var)):
            raw[key] = env[var]

    defaults = Settings()
    export_dir = _coerce_str(raw.get("export_dir"))
    return Settings(
        default_calendar=_coerce_str(raw.get("default_calendar")) or defaults.default_calendar,
        default_timezone=_coerce_str(raw.get("timezone")) or defaults.default_timezone,
        export_dir=Path(export_dir).expanduser() if export_dir else defaults.export_dir,
        log_level=(_coerce_str(raw.get("log_level")) or defaults.log_level).upper(),
    )
