"""Process-wide logging setup for the calendar CLI."""
from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

__all__ = ["configure_logging", "LOG_FORMAT"]

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_handler: Optional[logging.Handler] = None


def configure_logging(level: str = "WARNING", *, verbose: bool = False, stream: Optional[TextIO] = None) -> None:
    """Attach one stderr handler to the root logger; repeat calls only adjust the level."""
    global _handler

    resolved = logging.DEBUG if verbose else getattr(logging, (level or "WARNING").upper(), logging.WARNING)
    root = logging.getLogger()
    root.setLevel(resolved)
    if _handler is not None:
        return

    _handler = logging.StreamHandler(stream or sys.stderr)
    _handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=_DATE_FORMAT))
    root.addHandler(_handler)
    logging.getLogger(__name__).debug("Logging configured at %s", logging.getLevelName(resolved))
