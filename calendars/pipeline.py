"""Command loops: headless script pipeline and the interactive prompt."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, TextIO

from core.cli_errors import ExitCode
from core.cli_output import OutputFormat, OutputWriter
from core.constants import EXIT_KEYWORD
from core.pipeline import BaseProducer, SafeProcessor

from .dispatch import dispatch
from .errors import CalendarError
from .session import Session

LOG = logging.getLogger(__name__)

EXIT_MESSAGE = "Exiting Calendar App."
DEFAULT_PROMPT = "Enter command: "


def tokenize(line: str) -> List[str]:
    return line.split()


def is_exit(line: str) -> bool:
    return line.strip().lower() == EXIT_KEYWORD


@dataclass
class ScriptRequest:
    path: Path
    session: Session


@dataclass
class ScriptResult:
    lines: List[str] = field(default_factory=list)
    failed_line: Optional[int] = None
    exit_code: int = ExitCode.SUCCESS


class ScriptProcessor(SafeProcessor[ScriptRequest, ScriptResult]):
    """Run a command file line by line, stopping at ``exit`` or the first failure.

    Line numbers count blank lines too, so reported positions match the file.
    """

    def _process_safe(self, payload: ScriptRequest) -> ScriptResult:
        result = ScriptResult()
        try:
            text = Path(payload.path).read_text(encoding="utf-8")
        except OSError as exc:
            LOG.debug("Cannot read script %s: %s", payload.path, exc)
            result.lines.append(f"Headless mode terminated due to error: {exc.strerror or exc}")
            result.exit_code = ExitCode.ERROR
            return result

        for lineno, raw in enumerate(text.splitlines(), start=1):
            line = raw.strip()
            if not line:
                continue
            result.lines.append(f"Processing command ({lineno}): {line}")
            if is_exit(line):
                result.lines.append(EXIT_MESSAGE)
                break
            try:
                output = dispatch(tokenize(line), payload.session)
            except CalendarError as exc:
                LOG.debug("Script %s stopped at line %d: %s", payload.path, lineno, exc)
                result.lines.append(f"Error at line {lineno}: {exc}")
                result.failed_line = lineno
                result.exit_code = int(exc.code)
                break
            result.lines.append(output.rstrip("\n"))
        return result


class ScriptProducer(BaseProducer):
    def __init__(self, writer: Optional[OutputWriter] = None) -> None:
        self._writer = writer or OutputWriter()

    def _emit(self, line: str) -> None:
        self._writer.print(line)

    def _produce_success(self, payload: ScriptResult, diagnostics: Optional[Dict[str, Any]]) -> None:
        if self._writer.config.format == OutputFormat.TEXT:
            for line in payload.lines:
                self._emit(line)
            return
        self._writer.print_data({
            "lines": payload.lines,
            "failed_line": payload.failed_line,
            "exit_code": int(payload.exit_code),
        })


def run_interactive(
    session: Session,
    stdin: TextIO,
    writer: OutputWriter,
    *,
    prompt: Optional[str] = None,
) -> int:
    """Read commands until EOF or ``exit``; failures are reported and the loop continues."""
    while True:
        if prompt:
            writer.print(prompt, end="", flush=True)
        raw = stdin.readline()
        if not raw:
            break
        line = raw.strip()
        if not line:
            continue
        if is_exit(line):
            writer.print(EXIT_MESSAGE)
            break
        try:
            output = dispatch(tokenize(line), session)
        except CalendarError as exc:
            LOG.debug("Command failed: %s", exc)
            writer.print(f"Error: {exc}")
            continue
        writer.print_result(line, output)
    return ExitCode.SUCCESS
