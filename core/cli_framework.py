"""CLI application framework.

Provides a declarative way to build CLI applications with:
- Command registration via decorators
- Automatic argument parsing
- Consistent error handling
- Output formatting
- Common arguments (--verbose, --quiet, --output, --config)
"""
from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, TextIO

from .cli_errors import CLIError, ExitCode, handle_error
from .cli_output import OutputConfig, OutputFormat, OutputWriter


CommandFunc = Callable[[argparse.Namespace], int]
ContextFactory = Callable[[argparse.Namespace], Any]


@dataclass
class Argument:
    """Definition of a CLI argument."""
    name_or_flags: tuple
    kwargs: Dict[str, Any] = field(default_factory=dict)


@dataclass
class CommandDef:
    """Definition of a CLI command."""
    name: str
    func: CommandFunc
    help: str = ""
    description: str = ""
    arguments: List[Argument] = field(default_factory=list)
    aliases: List[str] = field(default_factory=list)


class CLIApp:
    """Base class for CLI applications.

    Commands receive the parsed namespace with two extras attached:
    ``args._output`` (an OutputWriter) and ``args._context`` (whatever
    ``context_factory`` built from the common flags, or None).

    Example usage:
        app = CLIApp("calendars", "Calendar command interpreter", context_factory=build_session)

        @app.command("exec", help="Run one command")
        @app.argument("words", nargs=argparse.REMAINDER)
        def cmd_exec(args):
            args._output.print(dispatch(args.words, args._context))
            return 0

        if __name__ == "__main__":
            app.main()
    """

    def __init__(
        self,
        name: str,
        description: str = "",
        *,
        version: Optional[str] = None,
        epilog: Optional[str] = None,
        add_common_args: bool = True,
        context_factory: Optional[ContextFactory] = None,
    ):
        self.name = name
        self.description = description
        self.version = version
        self.epilog = epilog
        self.add_common_args = add_common_args
        self.context_factory = context_factory

        self._commands: Dict[str, CommandDef] = {}
        self._parser: Optional[argparse.ArgumentParser] = None
        self._pending_arguments: List[Argument] = []

    def command(
        self,
        name: str,
        *,
        help: str = "",
        description: str = "",
        aliases: Optional[List[str]] = None,
    ) -> Callable[[CommandFunc], CommandFunc]:
        """Decorator to register a command."""
        def decorator(func: CommandFunc) -> CommandFunc:
            # Collect any pending arguments from @argument decorators
            arguments = list(reversed(self._pending_arguments))
            self._pending_arguments.clear()
            self._commands[name] = CommandDef(
                name=name,
                func=func,
                help=help,
                description=description or help,
                arguments=arguments,
                aliases=aliases or [],
            )
            return func
        return decorator

    def argument(
        self,
        *name_or_flags: str,
        **kwargs: Any,
    ) -> Callable[[CommandFunc], CommandFunc]:
        """Decorator to add an argument to the next command.

        Must be used BEFORE the @command decorator (decorators apply bottom-up).
        """
        def decorator(func: CommandFunc) -> CommandFunc:
            self._pending_arguments.append(Argument(name_or_flags, kwargs))
            return func
        return decorator

    def build_parser(self) -> argparse.ArgumentParser:
        """Build the argument parser."""
        parser = argparse.ArgumentParser(
            prog=self.name,
            description=self.description,
            epilog=self.epilog,
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        if self.version:
            parser.add_argument(
                "--version", "-V",
                action="version",
                version=f"%(prog)s {self.version}",
            )

        if self.add_common_args:
            self._add_common_arguments(parser)

        if self._commands:
            subparsers = parser.add_subparsers(dest="command", metavar="<command>")
            for cmd_def in self._commands.values():
                cmd_parser = subparsers.add_parser(
                    cmd_def.name,
                    help=cmd_def.help,
                    description=cmd_def.description,
                    aliases=cmd_def.aliases,
                )
                for arg in cmd_def.arguments:
                    cmd_parser.add_argument(*arg.name_or_flags, **arg.kwargs)
                cmd_parser.set_defaults(_cmd_func=cmd_def.func)

        self._parser = parser
        return parser

    def _add_common_arguments(self, parser: argparse.ArgumentParser) -> None:
        """Add common arguments to the parser."""
        parser.add_argument(
            "--config", "-c",
            help="Path to a YAML settings file",
        )
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Enable verbose output and debug logging",
        )
        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Suppress non-essential output",
        )
        parser.add_argument(
            "--output", "-o",
            choices=[f.value for f in OutputFormat],
            default="text",
            help="Output format (default: text)",
        )

    def run(
        self,
        argv: Optional[Sequence[str]] = None,
        *,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
    ) -> int:
        """Run the CLI application and return the exit code."""
        parser = self._parser or self.build_parser()
        args = parser.parse_args(argv)

        output_config = OutputConfig(
            format=OutputFormat(getattr(args, "output", "text")),
            verbose=getattr(args, "verbose", False),
            quiet=getattr(args, "quiet", False),
            file=stdout,
            err_file=stderr,
        )
        args._output = OutputWriter(output_config)

        cmd_func = getattr(args, "_cmd_func", None)
        if cmd_func is None:
            parser.print_help(file=output_config.stream)
            return ExitCode.USAGE

        try:
            args._context = self.context_factory(args) if self.context_factory else None
            return int(cmd_func(args))
        except CLIError as e:
            return handle_error(e, verbose=output_config.verbose, stream=output_config.err_stream)
        except KeyboardInterrupt:
            print("\nInterrupted.", file=output_config.err_stream)
            return ExitCode.INTERRUPTED
        except Exception as e:
            return handle_error(e, verbose=output_config.verbose, stream=output_config.err_stream)

    def main(self, argv: Optional[Sequence[str]] = None) -> None:
        """Run the CLI and exit with the return code."""
        sys.exit(self.run(argv))
