"""Errors raised by a single reverse geocoding call."""


class GeocodeError(Exception):
    """Base class for every failure of a reverse geocoding call."""


class TransportError(GeocodeError):
    """The HTTP request itself failed (DNS, connect, timeout)."""


class DecodeError(GeocodeError):
    """The response body is not JSON or does not have the expected shape."""


class ProviderError(GeocodeError):
    """AMap answered with a non-success status."""

    def __init__(self, info, infocode):
        self.info = info
        self.infocode = infocode
        super().__init__(f"{info}({infocode})")


class ValidationError(GeocodeError):
    """The response decoded fine but cannot be turned into an address."""


class WaitCancelled(GeocodeError):
    """The rate limiter wait was aborted before a token was granted."""
