"""Command dispatch: one tokenized command line in, one result string out.

Grammar (keywords case-insensitive; dates ``yyyy-MM-dd``, date-times
``yyyy-MM-ddTHH:mm``)::

    create event [--autodecline] <name> from <start> to <end> [repeats <days> (for <N> times | until <end>)]
    create event [--autodecline] <name> on <date> [repeats <days> (for <N> times | until <date>)]
    create calendar --name <name> --timezone <tz>
    edit event <property> <name> from <start> to <end> with <value>
    edit events <property> <name> from <start> with <value>
    edit events <property> <name> <value>
    edit calendar --name <name> --property <property> <value>
    use calendar --name <name>
    copy event <name> on <start> --target <calendar> to <start>
    copy events on <date> --target <calendar> to <start>
    copy events between <date> and <date> --target <calendar> to <date>
    print events on <date>
    print events from <start> to <end>
    export cal <filename>
    show status on <start>

Parsing is strictly positional. Failures are raised as ``CalendarError``
subclasses and left for the command loop to report.
"""
from __future__ import annotations

import datetime as _dt
import logging
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from core.date_utils import all_day_bounds, parse_weekdays, weekday_letters

from . import render
from .errors import (
    CalendarError,
    EventNotFoundError,
    IllegalArgumentError,
    InvalidCommandError,
    InvalidTokenError,
    InvalidValueError,
    MissingParameterError,
)
from .export import export_csv
from .model import Event
from .recurrence import RecurrenceRule, expand_occurrences
from .session import Session

LOG = logging.getLogger(__name__)

AUTODECLINE = "--autodecline"


class TokenCursor:
    """Positional reader over a command's tokens."""

    def __init__(self, tokens: Sequence[str]) -> None:
        self._tokens = list(tokens)
        self._pos = 0

    def peek(self) -> Optional[str]:
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return None

    def take(self, parameter: str) -> str:
        """Consume the next token, or raise MissingParameterError naming ``parameter``."""
        tok = self.peek()
        if tok is None:
            raise MissingParameterError(parameter)
        self._pos += 1
        return tok

    def expect(self, keyword: str) -> None:
        tok = self.peek()
        if tok is None or tok.lower() != keyword:
            raise InvalidTokenError(keyword, tok)
        self._pos += 1

    def accept(self, keyword: str) -> bool:
        tok = self.peek()
        if tok is not None and tok.lower() == keyword:
            self._pos += 1
            return True
        return False

    def finish(self) -> None:
        tok = self.peek()
        if tok is not None:
            raise InvalidCommandError(f"unexpected token '{tok}'")


# ----------------------------------------------------------------------
# Literal parsing
# ----------------------------------------------------------------------


def _datetime(cur: TokenCursor, session: Session, parameter: str) -> Tuple[str, _dt.datetime]:
    text = cur.take(parameter)
    try:
        return text, session.formats.parse_datetime(text)
    except ValueError:
        raise InvalidValueError(parameter, text, "yyyy-MM-ddTHH:mm") from None


def _date(cur: TokenCursor, session: Session, parameter: str) -> Tuple[str, _dt.date]:
    text = cur.take(parameter)
    try:
        return text, session.formats.parse_date(text)
    except ValueError:
        raise InvalidValueError(parameter, text, "yyyy-MM-dd") from None


def _count(cur: TokenCursor) -> int:
    text = cur.take("occurrence count")
    try:
        return int(text)
    except ValueError:
        raise InvalidValueError("occurrence count", text, "an integer") from None


# ----------------------------------------------------------------------
# create
# ----------------------------------------------------------------------


def _create(cur: TokenCursor, session: Session) -> str:
    target = cur.take("create target (event or calendar)")
    kind = target.lower()
    if kind == "calendar":
        return _create_calendar(cur, session)
    if kind == "event":
        return _create_event(cur, session)
    raise InvalidCommandError(f"create {target}")


def _create_calendar(cur: TokenCursor, session: Session) -> str:
    cur.expect("--name")
    name = cur.take("calendar name")
    cur.expect("--timezone")
    timezone = cur.take("timezone")
    cur.finish()
    session.directory.create(name, timezone)
    return f"Calendar created: {name} with timezone {timezone}"


def _create_event(cur: TokenCursor, session: Session) -> str:
    auto_decline = cur.accept(AUTODECLINE)
    name = cur.take("event name")
    mode = cur.take("'from' or 'on'")
    if mode.lower() == "from":
        all_day = False
        _, start = _datetime(cur, session, "start date-time")
        cur.expect("to")
        _, end = _datetime(cur, session, "end date-time")
    elif mode.lower() == "on":
        all_day = True
        _, day = _date(cur, session, "date")
        start, end = all_day_bounds(day)
    else:
        raise InvalidCommandError(f"expected 'from' or 'on' but found '{mode}'")
    template = Event(name, start, end)
    label = "all day" if all_day else "timed"

    if not cur.accept("repeats"):
        auto_decline = cur.accept(AUTODECLINE) or auto_decline
        cur.finish()
        session.active.add_event(template, auto_decline)
        return f"Single {label} event created: {name}"

    days_text = cur.take("weekdays")
    terminator = cur.take("'for' or 'until'")
    if terminator.lower() == "for":
        count = _count(cur)
        cur.expect("times")
        auto_decline = cur.accept(AUTODECLINE) or auto_decline
        cur.finish()
        if count < 0:
            raise IllegalArgumentError("Occurrence count cannot be negative.")
        if count > 0:
            rule = RecurrenceRule(_weekdays(days_text), occurrences=count)
            LOG.debug("Expanding %r on %s for %d occurrence(s)", name, weekday_letters(rule.weekdays), count)
            session.active.add_events(_expand(template, rule), auto_decline)
        return f"Recurring {label} event created with {count} occurrences."

    if terminator.lower() == "until":
        if all_day:
            until_text, until_day = _date(cur, session, "until date")
            until = all_day_bounds(until_day)[1]
        else:
            until_text, until = _datetime(cur, session, "until date-time")
        auto_decline = cur.accept(AUTODECLINE) or auto_decline
        cur.finish()
        rule = RecurrenceRule(_weekdays(days_text), until=until)
        LOG.debug("Expanding %r on %s until %s", name, weekday_letters(rule.weekdays), until)
        session.active.add_events(_expand(template, rule), auto_decline)
        return f"Recurring {label} event created until {until_text}."

    raise InvalidCommandError(f"recurring specification '{terminator}'")


def _expand(template: Event, rule: RecurrenceRule) -> List[Event]:
    try:
        return expand_occurrences(template, rule)
    except OverflowError:
        raise IllegalArgumentError(f"Recurring event {template.name} runs past the last supported date.") from None


def _weekdays(text: str) -> frozenset:
    days = parse_weekdays(text)
    if not days:
        raise IllegalArgumentError(f"No valid weekdays in '{text}' (use letters from MTWRFSU)")
    return days


# ----------------------------------------------------------------------
# edit
# ----------------------------------------------------------------------


def _edit(cur: TokenCursor, session: Session) -> str:
    target = cur.take("edit target (event, events or calendar)")
    kind = target.lower()
    if kind == "calendar":
        return _edit_calendar(cur, session)
    if kind == "event":
        return _edit_event(cur, session)
    if kind == "events":
        return _edit_events(cur, session)
    raise InvalidCommandError(f"edit {target}")


def _edit_calendar(cur: TokenCursor, session: Session) -> str:
    cur.expect("--name")
    name = cur.take("calendar name")
    cur.expect("--property")
    prop = cur.take("property")
    value = cur.take("new value")
    cur.finish()
    session.directory.edit(name, prop, value)
    return f"Calendar {name} updated: {prop} = {value}"


def _edit_event(cur: TokenCursor, session: Session) -> str:
    prop = cur.take("property")
    name = cur.take("event name")
    cur.expect("from")
    _, start = _datetime(cur, session, "start date-time")
    cur.expect("to")
    _, end = _datetime(cur, session, "end date-time")
    cur.expect("with")
    value = cur.take("new value")
    cur.finish()
    if not session.active.edit_single(prop, name, start, end, value):
        raise EventNotFoundError("No matching event found for editing.")
    return "Single event edited."


def _edit_events(cur: TokenCursor, session: Session) -> str:
    prop = cur.take("property")
    name = cur.take("event name")
    if cur.accept("from"):
        start_text, start = _datetime(cur, session, "start date-time")
        cur.expect("with")
        value = cur.take("new value")
        cur.finish()
        if session.active.edit_from(prop, name, start, value) == 0:
            raise EventNotFoundError("No matching events found")
        return f"Events starting at {start_text} edited."

    value = cur.take("new value")
    cur.finish()
    if session.active.edit_all(prop, name, value) == 0:
        raise EventNotFoundError("No matching events found")
    return f"All events with name {name} edited."


# ----------------------------------------------------------------------
# use
# ----------------------------------------------------------------------


def _use(cur: TokenCursor, session: Session) -> str:
    cur.expect("calendar")
    cur.expect("--name")
    name = cur.take("calendar name")
    cur.finish()
    session.directory.use(name)
    return f"Using calendar: {name}"


# ----------------------------------------------------------------------
# copy
# ----------------------------------------------------------------------


def _shift_to(events: List[Event], anchor: _dt.datetime) -> List[Event]:
    """Move events so the earliest starts at ``anchor``, keeping relative spacing."""
    offset = anchor - min(e.start for e in events)
    try:
        return [e.shifted(offset) for e in events]
    except OverflowError:
        raise IllegalArgumentError(f"Copying to {anchor:%Y-%m-%dT%H:%M} runs past the last supported date.") from None


def _target(cur: TokenCursor) -> str:
    cur.expect("--target")
    return cur.take("target calendar")


def _copy(cur: TokenCursor, session: Session) -> str:
    target = cur.take("copy target (event or events)")
    kind = target.lower()
    if kind == "event":
        return _copy_event(cur, session)
    if kind == "events":
        scope = cur.take("'on' or 'between'")
        if scope.lower() == "on":
            return _copy_events_on(cur, session)
        if scope.lower() == "between":
            return _copy_events_between(cur, session)
        raise InvalidCommandError(f"copy events {scope}")
    raise InvalidCommandError(f"copy {target}")


def _copy_event(cur: TokenCursor, session: Session) -> str:
    name = cur.take("event name")
    cur.expect("on")
    source_text, source = _datetime(cur, session, "source date-time")
    cal_name = _target(cur)
    cur.expect("to")
    _, anchor = _datetime(cur, session, "target date-time")
    cur.finish()
    event = session.active.find_by_name_and_start(name, source)
    if event is None:
        raise EventNotFoundError(f"Event {name} not found at {source_text}")
    target = session.directory.get(cal_name)
    target.add_events(_shift_to([event], anchor), auto_decline=True)
    return f"Event {name} copied to calendar {cal_name}."


def _copy_events_on(cur: TokenCursor, session: Session) -> str:
    day_text, day = _date(cur, session, "date")
    cal_name = _target(cur)
    cur.expect("to")
    _, anchor = _datetime(cur, session, "target date-time")
    cur.finish()
    events = session.active.events_on(day)
    if not events:
        raise EventNotFoundError(f"No events on {day_text} to copy.")
    target = session.directory.get(cal_name)
    target.add_events(_shift_to(events, anchor), auto_decline=True)
    return f"Events on {day_text} copied to calendar {cal_name}."


def _copy_events_between(cur: TokenCursor, session: Session) -> str:
    first_text, first = _date(cur, session, "start date")
    cur.expect("and")
    last_text, last = _date(cur, session, "end date")
    cal_name = _target(cur)
    cur.expect("to")
    _, anchor_day = _date(cur, session, "target date")
    cur.finish()
    window_start, _ = all_day_bounds(first)
    _, window_end = all_day_bounds(last)
    events = session.active.events_between(window_start, window_end)
    if not events:
        raise EventNotFoundError(f"No events between {first_text} and {last_text} to copy.")
    target = session.directory.get(cal_name)
    target.add_events(_shift_to(events, all_day_bounds(anchor_day)[0]), auto_decline=True)
    return f"Events between {first_text} and {last_text} copied to calendar {cal_name}."


# ----------------------------------------------------------------------
# print / export / show
# ----------------------------------------------------------------------


def _print(cur: TokenCursor, session: Session) -> str:
    cur.expect("events")
    scope = cur.take("'on' or 'from'")
    if scope.lower() == "on":
        day_text, day = _date(cur, session, "date")
        cur.finish()
        return render.events_on(day_text, session.active.events_on(day), session.formats)
    if scope.lower() == "from":
        start_text, start = _datetime(cur, session, "start date-time")
        cur.expect("to")
        end_text, end = _datetime(cur, session, "end date-time")
        cur.finish()
        return render.events_between(start_text, end_text, session.active.events_between(start, end), session.formats)
    raise InvalidCommandError(f"print events {scope}")


def _export(cur: TokenCursor, session: Session) -> str:
    cur.expect("cal")
    filename = cur.take("filename")
    cur.finish()
    try:
        path = export_csv(session.active.events, filename, formats=session.formats, base_dir=session.export_dir)
    except OSError as exc:
        raise CalendarError(f"Could not export to {filename}: {exc.strerror or exc}") from exc
    return f"Calendar exported to CSV at: {path}"


def _show(cur: TokenCursor, session: Session) -> str:
    cur.expect("status")
    cur.expect("on")
    text, instant = _datetime(cur, session, "date-time")
    cur.finish()
    return render.busy_status(text, session.active.is_busy(instant))


Handler = Callable[[TokenCursor, Session], str]

COMMANDS: Dict[str, Handler] = {
    "create": _create,
    "edit": _edit,
    "use": _use,
    "copy": _copy,
    "print": _print,
    "export": _export,
    "show": _show,
}


def dispatch(tokens: Sequence[str], session: Session) -> str:
    """Run one tokenized command against ``session`` and return its result text."""
    if not tokens:
        raise MissingParameterError("command")
    handler = COMMANDS.get(tokens[0].lower())
    if handler is None:
        raise InvalidCommandError(tokens[0])
    LOG.debug("Dispatching %s on calendar %r", " ".join(tokens), session.active.name)
    return handler(TokenCursor(tokens[1:]), session)
