"""Exceptions raised while servicing a connection."""


class WebServerError(Exception):
    """Base class for per-connection failures."""


class RequestReadError(WebServerError):
    """Raised when request lines cannot be read or the GET line is malformed."""


class UnsupportedResource(WebServerError):
    """Raised when the requested path has no recognised extension."""

    def __init__(self, requested_path):
        super().__init__(f"Unsupported resource: {requested_path!r}")
        self.requested_path = requested_path


class StreamError(WebServerError):
    """Raised when the response body cannot be transferred."""
