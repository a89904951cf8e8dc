"""Failure kinds raised by the calendar model and command dispatch.

Every error derives from ``CalendarError`` (itself a ``core.cli_errors.CLIError``)
so the command loop can report any of them with one ``except`` clause.
"""
from __future__ import annotations

from typing import Optional

from core.cli_errors import CLIError, ExitCode


class CalendarError(CLIError):
    """Base class for calendar command failures."""

    def __init__(self, message: str, code: ExitCode = ExitCode.ERROR, hint: Optional[str] = None):
        super().__init__(message, code, hint)


class MissingParameterError(CalendarError):
    """A required token is absent."""

    def __init__(self, parameter: str):
        self.parameter = parameter
        super().__init__(f"Missing parameter: {parameter}", ExitCode.USAGE)


class InvalidTokenError(CalendarError):
    """A keyword was expected at a position but something else was found."""

    def __init__(self, expected: str, found: Optional[str] = None):
        self.expected = expected
        self.found = found
        if found is None:
            message = f"Expected '{expected}' but reached end of command"
        else:
            message = f"Expected '{expected}' but found '{found}'"
        super().__init__(message, ExitCode.USAGE)


class InvalidCommandError(CalendarError):
    """Unrecognized command, sub-command or recurrence terminator."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Invalid command: {detail}", ExitCode.USAGE)


class InvalidValueError(CalendarError):
    """A literal (date, date-time, count) could not be parsed."""

    def __init__(self, parameter: str, value: str, expected: str):
        self.parameter = parameter
        self.value = value
        super().__init__(f"Invalid {parameter} '{value}': expected {expected}", ExitCode.USAGE)


class IllegalArgumentError(CalendarError):
    """A well-formed value that the operation does not accept."""

    def __init__(self, message: str):
        super().__init__(message, ExitCode.USAGE)


class ConflictError(CalendarError):
    """An auto-declined insert overlapped an existing event."""

    def __init__(self, name: str, existing: str):
        self.name = name
        self.existing = existing
        super().__init__(f"Event conflict detected: '{name}' overlaps '{existing}'")


class EventNotFoundError(CalendarError):
    """No event matched an edit or copy."""

    def __init__(self, message: str):
        super().__init__(message, ExitCode.NOT_FOUND)


class CalendarNotFoundError(CalendarError):
    """A named calendar is not in the directory."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Calendar {name} not found.", ExitCode.NOT_FOUND)


class DuplicateCalendarError(CalendarError):
    """A calendar with the requested name already exists."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Calendar with name {name} already exists.")


__all__ = [
    "CalendarError",
    "CalendarNotFoundError",
    "ConflictError",
    "DuplicateCalendarError",
    "EventNotFoundError",
    "IllegalArgumentError",
    "InvalidCommandError",
    "InvalidTokenError",
    "InvalidValueError",
    "MissingParameterError",
]
