class MethodOverrideError(Exception):
    """Base class for all method override errors."""


class FormDecodeError(MethodOverrideError):
    """Raised when the request body cannot be parsed as form data."""

    message = "Invalid or incomplete POST params"


class BodyReadError(MethodOverrideError):
    """The request body stream ended unexpectedly or did not complete in time."""

    message = "Bad request content body"


class InvalidOverrideToken(MethodOverrideError):
    """Override value cannot be converted into a method name."""

    message = "Invalid string for method"
