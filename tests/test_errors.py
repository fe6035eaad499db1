import io
import logging
import pytest

from methodoverride.errors import LoggingErrorSink, StreamErrorSink, get_error_sink
from tests.conftest import ScopeFactory
from tests.utils import ListErrorSink


def test_logging_error_sink(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="methodoverride"):
        LoggingErrorSink().write("Bad request content body\n")
    assert caplog.records[0].levelno == logging.WARNING
    assert caplog.records[0].name == "methodoverride.errors"
    assert caplog.messages == ["Bad request content body"]


def test_logging_error_sink_custom_logger(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger("app.errors")
    with caplog.at_level(logging.INFO, logger="app.errors"):
        LoggingErrorSink(logger, level=logging.INFO).write("message")
    assert caplog.records[0].name == "app.errors"
    assert caplog.records[0].levelno == logging.INFO


def test_stream_error_sink_appends_newline() -> None:
    stream = io.StringIO()
    sink = StreamErrorSink(stream)
    sink.write("one")
    sink.write("two\n")
    assert stream.getvalue() == "one\ntwo\n"


def test_get_error_sink(scope_factory: ScopeFactory) -> None:
    default = ListErrorSink()
    scoped = ListErrorSink()
    assert get_error_sink(scope_factory(), default) is default
    assert get_error_sink(scope_factory(error_sink=scoped), default) is scoped
