"""Shared consumer/processor/producer scaffolding."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Generic, Optional, TypeVar


ResultT = TypeVar("ResultT")
RequestT = TypeVar("RequestT")
T = TypeVar("T")
R = TypeVar("R")


@dataclass
class ResultEnvelope(Generic[ResultT]):
    status: str
    payload: Optional[ResultT] = None
    diagnostics: Optional[dict[str, Any]] = None

    def ok(self) -> bool:
        return self.status.lower() == "success"


class RequestConsumer(Generic[RequestT]):
    """Generic consumer that stores a request and hands it back on consume()."""

    def __init__(self, request: RequestT) -> None:
        self._request = request

    def consume(self) -> RequestT:  # pragma: no cover - trivial
        return self._request


class BaseProducer:
    """Base class for pipeline producers with common error handling.

    Subclasses override _produce_success(); failed envelopes print their
    diagnostic message through ``_emit``.
    """

    def produce(self, result: ResultEnvelope) -> None:
        """Template method: handle errors, delegate success to subclass."""
        if not result.ok():
            msg = (result.diagnostics or {}).get("message")
            if msg:
                self._emit(msg)
            return
        if result.payload is not None:
            self._produce_success(result.payload, result.diagnostics)

    def _produce_success(self, payload: Any, diagnostics: Optional[Dict[str, Any]]) -> None:
        """Override in subclass to handle successful result output."""
        raise NotImplementedError("Subclass must implement _produce_success")

    def _emit(self, line: str) -> None:
        print(line)


class SafeProcessor(Generic[T, R]):
    """Base processor with automatic error handling wrapper.

    Subclasses override _process_safe(); any exception becomes an error
    envelope carrying the message and, when present, the error's exit code.
    """

    def process(self, payload: T) -> ResultEnvelope[R]:
        """Wrap _process_safe with error handling."""
        try:
            result = self._process_safe(payload)
            return ResultEnvelope(status="success", payload=result)
        except Exception as e:
            diagnostics: Dict[str, Any] = {"message": str(e)}
            code = getattr(e, "code", None)
            if code is not None:
                diagnostics["code"] = int(code)
            return ResultEnvelope(status="error", diagnostics=diagnostics)

    def _process_safe(self, payload: T) -> R:
        """Override to implement processing logic without error handling boilerplate."""
        raise NotImplementedError("Subclass must implement _process_safe")


def run_pipeline(request: Any, processor: SafeProcessor, producer: BaseProducer) -> int:
    """Process a request, produce its output and return the CLI exit code.

    Returns 0 on success; failures use the payload's exit_code when the
    processor finished, else the diagnostics code (default 2).
    """
    envelope = processor.process(RequestConsumer(request).consume())
    producer.produce(envelope)
    if envelope.ok():
        return int(getattr(envelope.payload, "exit_code", 0) or 0)
    return int((envelope.diagnostics or {}).get("code", 2))
