"""CLI output formatting utilities.

Command results are human-readable strings; ``OutputWriter`` routes them to
stdout as plain text, or wraps them in a small mapping for JSON/YAML.
"""
from __future__ import annotations

import json
import sys
from dataclasses import asdict, dataclass, is_dataclass
from enum import Enum
from typing import Any, Optional, TextIO

import yaml


class OutputFormat(str, Enum):
    """Output format options."""
    TEXT = "text"
    JSON = "json"
    YAML = "yaml"


@dataclass
class OutputConfig:
    """Configuration for output formatting."""
    format: OutputFormat = OutputFormat.TEXT
    verbose: bool = False
    quiet: bool = False
    file: Optional[TextIO] = None
    err_file: Optional[TextIO] = None

    @property
    def stream(self) -> TextIO:
        """Get the output stream."""
        return self.file or sys.stdout

    @property
    def err_stream(self) -> TextIO:
        return self.err_file or sys.stderr


class OutputWriter:
    """Handles formatted output for CLI commands."""

    def __init__(self, config: Optional[OutputConfig] = None):
        self.config = config or OutputConfig()

    def print(self, *args, **kwargs) -> None:
        """Print to the configured output stream."""
        if self.config.quiet:
            return
        kwargs.setdefault("file", self.config.stream)
        print(*args, **kwargs)

    def print_result(self, command: str, result: str) -> None:
        """Print one command's result in the configured format."""
        if self.config.format == OutputFormat.TEXT:
            self.print(result.rstrip("\n"))
            return
        self.print_data({"command": command, "result": result.rstrip("\n").split("\n")})

    def print_data(self, data: Any) -> None:
        """Print data in the configured format."""
        fmt = self.config.format
        if fmt == OutputFormat.JSON:
            self.print(json.dumps(self._normalize(data), indent=2, default=str))
        elif fmt == OutputFormat.YAML:
            self.print(yaml.safe_dump(self._normalize(data), default_flow_style=False, sort_keys=False).rstrip("\n"))
        elif isinstance(data, dict):
            for key, value in data.items():
                self.print(f"{key}: {value}")
        else:
            self.print(str(data))

    def _normalize(self, data: Any) -> Any:
        """Normalize data for JSON/YAML serialization."""
        if is_dataclass(data) and not isinstance(data, type):
            return asdict(data)
        if isinstance(data, dict):
            return {k: self._normalize(v) for k, v in data.items()}
        if isinstance(data, (list, tuple)):
            return [self._normalize(v) for v in data]
        if isinstance(data, Enum):
            return data.value
        return data
