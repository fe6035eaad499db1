from methodoverride.decoders import Failed, FieldResult, FormDecoder, Found, Missing
from methodoverride.errors import ErrorSink, LoggingErrorSink, StreamErrorSink
from methodoverride.exceptions import BodyReadError, FormDecodeError, InvalidOverrideToken, MethodOverrideError
from methodoverride.methods import (
    ALLOWED_METHODS,
    HTTP_METHOD_OVERRIDE_HEADER,
    HTTP_METHODS,
    METHOD_OVERRIDE_PARAM_KEY,
)
from methodoverride.middleware import MethodOverrideMiddleware, normalize_method
from methodoverride.requests import Request, get_original_method

__all__ = [
    "ALLOWED_METHODS",
    "HTTP_METHODS",
    "HTTP_METHOD_OVERRIDE_HEADER",
    "METHOD_OVERRIDE_PARAM_KEY",
    "MethodOverrideMiddleware",
    "normalize_method",
    "Request",
    "get_original_method",
    "FormDecoder",
    "FieldResult",
    "Found",
    "Missing",
    "Failed",
    "ErrorSink",
    "LoggingErrorSink",
    "StreamErrorSink",
    "MethodOverrideError",
    "FormDecodeError",
    "BodyReadError",
    "InvalidOverrideToken",
]
