import logging
import typing
from starlette.datastructures import Headers
from starlette.types import ASGIApp, Receive, Scope, Send

from methodoverride.decoders import BodyRecorder, Failed, FormDecoder, Found
from methodoverride.errors import ErrorSink, LoggingErrorSink, get_error_sink
from methodoverride.exceptions import InvalidOverrideToken
from methodoverride.methods import (
    ALLOWED_METHODS,
    HTTP_METHOD_OVERRIDE_HEADER,
    HTTP_METHODS,
    METHOD_OVERRIDE_PARAM_KEY,
    ORIGINAL_METHOD_SCOPE_KEY,
)

logger = logging.getLogger(__name__)


def normalize_method(value: typing.Any) -> str:
    """Upper-case an override token. Raises InvalidOverrideToken for anything that is not text."""
    if isinstance(value, bytes):
        try:
            value = value.decode("ascii")
        except UnicodeDecodeError as ex:
            raise InvalidOverrideToken(InvalidOverrideToken.message) from ex

    if not isinstance(value, str):
        raise InvalidOverrideToken(InvalidOverrideToken.message)
    return value.upper()


class MethodOverrideMiddleware:
    """
    Let clients that can only send POST request another method.

    The method is read from the `_method` form field, then from the `X-Http-Method-Override` header.
    When the value names a known HTTP method, `scope["method"]` is replaced and the previous value
    is kept in `scope["original_method"]`. Anything else leaves the request as is.
    Problems with the request body are reported to the error sink and never fail the request.
    """

    allowed_methods: frozenset[str] = ALLOWED_METHODS

    def __init__(
        self,
        app: ASGIApp,
        *,
        allowed_methods: typing.Iterable[str] | None = None,
        param_key: str = METHOD_OVERRIDE_PARAM_KEY,
        header_name: str = HTTP_METHOD_OVERRIDE_HEADER,
        max_body_size: int | None = 8 * 1024**2,
        read_timeout: float | None = 30,
        error_sink: ErrorSink | None = None,
    ) -> None:
        self.app = app
        if allowed_methods is not None:
            self.allowed_methods = frozenset(method.upper() for method in allowed_methods)
        self.param_key = param_key
        self.header_name = header_name.lower()
        self.decoder = FormDecoder(max_length=max_body_size, read_timeout=read_timeout)
        self.error_sink = error_sink if error_sink is not None else LoggingErrorSink()

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            return await self.app(scope, receive, send)

        if scope["method"] not in self.allowed_methods:
            return await self.app(scope, receive, send)

        method, receive = await self.method_override(scope, receive)
        if method in HTTP_METHODS:
            logger.debug("Overriding request method %s -> %s.", scope["method"], method)
            scope[ORIGINAL_METHOD_SCOPE_KEY] = scope["method"]
            scope["method"] = method

        await self.app(scope, receive, send)

    async def method_override(self, scope: Scope, receive: Receive) -> tuple[str | None, Receive]:
        """
        Compute the normalized override token for the request.

        The token is not validated against known methods. Returns the token (or None) and
        the receive callable that must be passed to the next app.
        """
        errors = get_error_sink(scope, self.error_sink)
        recorder = BodyRecorder(receive)
        result = await self.decoder.decode_form_field(scope, recorder.receive, self.param_key)

        candidate: typing.Any = None
        if isinstance(result, Found):
            candidate = result.value
        else:
            if isinstance(result, Failed):
                logger.debug("Could not decode request body: %s", result.error)
                errors.write(result.error.message)
            candidate = Headers(scope=scope).get(self.header_name)

        if candidate is None:
            return None, recorder.replay()

        try:
            return normalize_method(candidate), recorder.replay()
        except InvalidOverrideToken as ex:
            errors.write(ex.message)
            return None, recorder.replay()
