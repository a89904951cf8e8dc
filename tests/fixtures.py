"""Shared test fixtures and utilities.

This module provides common helpers to simplify testing across the
calendars test suite.
"""

from __future__ import annotations

import datetime as _dt
import io
import os
import subprocess
import sys
import tempfile
from contextlib import contextmanager, redirect_stdout
from pathlib import Path
from typing import Optional, Sequence

REPO_ROOT = Path(__file__).resolve().parents[1]


# -----------------------------------------------------------------------------
# Path helpers
# -----------------------------------------------------------------------------


def repo_root() -> Path:
    return REPO_ROOT


def bin_path(name: str) -> Path:
    return REPO_ROOT / "bin" / name


def run(cmd: Sequence[str], cwd: Optional[str] = None, stdin: Optional[str] = None):
    return subprocess.run(  # noqa: S603
        cmd, cwd=cwd, input=stdin, stdout=subprocess.PIPE, stderr=subprocess.PIPE, text=True
    )


def run_bin(name: str, *args: str, stdin: Optional[str] = None):
    """Run a bin/ wrapper with the current interpreter."""
    return run([sys.executable, str(bin_path(name)), *args], cwd=str(REPO_ROOT), stdin=stdin)


# -----------------------------------------------------------------------------
# File helpers
# -----------------------------------------------------------------------------


def write_yaml(data: dict, dir: Optional[str] = None, filename: str = "config.yaml") -> str:
    """Write a dict to a temporary YAML file, return the path."""
    import yaml

    td = dir or tempfile.mkdtemp()
    p = os.path.join(td, filename)
    with open(p, "w", encoding="utf-8") as fh:
        yaml.safe_dump(data, fh, sort_keys=False)
    return p


def write_script(lines: Sequence[str], dir: Optional[str] = None, filename: str = "commands.txt") -> Path:
    """Write command lines to a temporary script file, return the path."""
    td = Path(dir or tempfile.mkdtemp())
    p = td / filename
    p.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return p


# -----------------------------------------------------------------------------
# Output capture helpers
# -----------------------------------------------------------------------------


@contextmanager
def capture_stdout():
    """Context manager that captures stdout and yields a StringIO buffer."""
    buf = io.StringIO()
    with redirect_stdout(buf):
        yield buf


def make_writer(fmt: str = "text", quiet: bool = False):
    """Return (writer, out, err) with both streams backed by StringIO."""
    from core.cli_output import OutputConfig, OutputFormat, OutputWriter

    out, err = io.StringIO(), io.StringIO()
    cfg = OutputConfig(format=OutputFormat(fmt), quiet=quiet, file=out, err_file=err)
    return OutputWriter(cfg), out, err


# -----------------------------------------------------------------------------
# Domain helpers
# -----------------------------------------------------------------------------


def dt(text: str) -> _dt.datetime:
    """Parse a ``yyyy-MM-ddTHH:mm`` literal."""
    return _dt.datetime.strptime(text, "%Y-%m-%dT%H:%M")


def make_event(name: str = "Standup", start: str = "2025-03-03T09:00", end: str = "2025-03-03T10:00", **kwargs):
    from calendars.model import Event

    return Event(name, dt(start), dt(end), **kwargs)


def make_session(export_dir: Optional[Path] = None):
    """Session with the stock default calendar active."""
    from calendars.config import Settings
    from calendars.session import Session

    settings = Settings(export_dir=export_dir or Path(tempfile.mkdtemp()))
    return Session.from_settings(settings)
