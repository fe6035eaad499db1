import logging
import typing
from starlette.types import Scope

from methodoverride.methods import ERROR_SINK_SCOPE_KEY

__all__ = ["ErrorSink", "LoggingErrorSink", "StreamErrorSink", "get_error_sink"]


class ErrorSink(typing.Protocol):  # pragma: nocover
    """Receives non-fatal diagnostics. Writing must never abort the request."""

    def write(self, text: str) -> typing.Any:
        ...


class LoggingErrorSink:
    def __init__(self, logger: logging.Logger | None = None, level: int = logging.WARNING) -> None:
        self.logger = logger or logging.getLogger(__name__)
        self.level = level

    def write(self, text: str) -> None:
        self.logger.log(self.level, text.rstrip("\n"))


class StreamErrorSink:
    """Write diagnostics into a text stream, one per line. Handy with sys.stderr."""

    def __init__(self, stream: typing.TextIO) -> None:
        self.stream = stream

    def write(self, text: str) -> None:
        self.stream.write(text if text.endswith("\n") else text + "\n")


def get_error_sink(scope: Scope, default: ErrorSink) -> ErrorSink:
    """Return the sink the hosting server attached to the scope, or the default one."""
    sink = scope.get(ERROR_SINK_SCOPE_KEY)
    return typing.cast(ErrorSink, sink) if sink is not None else default
