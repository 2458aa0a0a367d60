"""
Error types raised by SwishMe services and handlers.

Each error carries the HTTP status it maps to; the API layer turns any
SwishMeError into a JSON error response with that status.
"""


class SwishMeError(Exception):
    """Base error with an associated HTTP status code."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class MethodNotAllowed(SwishMeError):
    status_code = 405


class AuthenticationError(SwishMeError):
    """Inbound request did not carry the shared Slack token."""

    status_code = 401


class FormatError(SwishMeError):
    """User-supplied text or URL path did not have the expected shape."""

    status_code = 400


class DecodeError(SwishMeError):
    """Token could not be decrypted or did not hold a valid payment request."""

    status_code = 400


class UpstreamError(SwishMeError):
    """The Swish QR API failed or answered with an unexpected status."""

    status_code = 502


class InternalError(SwishMeError):
    status_code = 500
