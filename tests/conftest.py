import pytest
import typing
from starlette.types import Scope

from tests.utils import CapturingApp, ListErrorSink


class ScopeFactory(typing.Protocol):  # pragma: nocover
    def __call__(
        self,
        method: str = "POST",
        headers: dict[str, str] | None = None,
        **kwargs: typing.Any,
    ) -> Scope:
        ...


@pytest.fixture
def error_sink() -> ListErrorSink:
    return ListErrorSink()


@pytest.fixture
def capturing_app() -> CapturingApp:
    return CapturingApp()


@pytest.fixture
def scope_factory() -> ScopeFactory:
    def factory(method: str = "POST", headers: dict[str, str] | None = None, **kwargs: typing.Any) -> Scope:
        return {
            "type": "http",
            "http_version": "1.1",
            "method": method,
            "path": "/",
            "query_string": b"",
            "headers": [(key.lower().encode(), value.encode()) for key, value in (headers or {}).items()],
            **kwargs,
        }

    return factory
