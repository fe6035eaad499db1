HTTP_METHODS = frozenset(["GET", "HEAD", "PUT", "POST", "DELETE", "OPTIONS", "PATCH", "LINK", "UNLINK"])
"""Methods a request may be overridden to."""

ALLOWED_METHODS = frozenset(["POST"])
"""Methods eligible for an override."""

METHOD_OVERRIDE_PARAM_KEY = "_method"
HTTP_METHOD_OVERRIDE_HEADER = "x-http-method-override"
ORIGINAL_METHOD_SCOPE_KEY = "original_method"
ERROR_SINK_SCOPE_KEY = "error_sink"
