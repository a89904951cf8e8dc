"""Calendar command interpreter CLI using the CLIApp framework.

Commands:
  interactive          read commands from stdin until EOF or ``exit``
  headless <file>      run a command file, stopping at the first failure
  exec <words...>      run a single command and print its result
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from core.cli_framework import CLIApp
from core.logging_setup import configure_logging
from core.pipeline import run_pipeline

from . import __version__
from .config import load_settings
from .dispatch import dispatch
from .pipeline import (
    DEFAULT_PROMPT,
    ScriptProcessor,
    ScriptProducer,
    ScriptRequest,
    run_interactive,
    tokenize,
)
from .session import Session


def _session(args: argparse.Namespace) -> Session:
    settings = load_settings(getattr(args, "config", None))
    configure_logging(settings.log_level, verbose=getattr(args, "verbose", False))
    return Session.from_settings(settings)


app = CLIApp(
    "calendars",
    "Multi-calendar event manager driven by a small command language",
    version=__version__,
    epilog="Example: calendars exec create event Standup from 2025-03-03T09:00 to 2025-03-03T09:15",
    context_factory=_session,
)


@app.command("interactive", help="Read commands from stdin")
def cmd_interactive(args: argparse.Namespace) -> int:
    prompt = DEFAULT_PROMPT if sys.stdin.isatty() else None
    return run_interactive(args._context, sys.stdin, args._output, prompt=prompt)


@app.command("headless", help="Run commands from a file")
@app.argument("file", help="Path to the command file")
def cmd_headless(args: argparse.Namespace) -> int:
    request = ScriptRequest(path=Path(args.file), session=args._context)
    return run_pipeline(request, ScriptProcessor(), ScriptProducer(args._output))


@app.command("exec", help="Run a single command")
@app.argument("words", nargs=argparse.REMAINDER, help="Command words, e.g. print events on 2025-03-03")
def cmd_exec(args: argparse.Namespace) -> int:
    tokens = tokenize(" ".join(args.words))
    result = dispatch(tokens, args._context)
    args._output.print_result(" ".join(tokens), result)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the calendars CLI."""
    return app.run(argv)


if __name__ == "__main__":
    raise SystemExit(main())
