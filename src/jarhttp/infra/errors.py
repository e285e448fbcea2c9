"""
Exception types raised by jarhttp.

Transport failures are not listed here: they propagate from the HTTP backend
unchanged (see ``BaseSession.transport_errors``).
"""

__all__ = [
    "JarHttpError",
    "CookieError",
    "ForeignCookieError",
    "MalformedCookieError",
    "EncodingError",
]


class JarHttpError(Exception):
    """Base class for all jarhttp errors."""


class CookieError(JarHttpError, ValueError):
    """A ``Set-Cookie`` header could not be turned into a cookie."""


class ForeignCookieError(CookieError):
    """The ``Domain`` attribute does not scope to the request host."""


class MalformedCookieError(CookieError):
    """The header has no usable ``name=value`` pair."""


class EncodingError(JarHttpError, ValueError):
    """Request text cannot be encoded with the configured charset."""
