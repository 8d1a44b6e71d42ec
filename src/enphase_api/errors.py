"""Exceptions raised by the Entrez and Envoy clients."""

from __future__ import annotations


class EnphaseError(Exception):
    """Base class for every error raised by :mod:`enphase_api`.

    Subclasses prefix the message with their kind, so ``str(err)`` reads
    e.g. ``"Authentication failed: JWT check failed: ..."``.
    """

    prefix = ""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"{self.prefix}{message}" if self.prefix else message)


class TransportError(EnphaseError):
    """The HTTP exchange did not complete (DNS, connection, TLS, timeout).

    The underlying :mod:`aiohttp` error is available as ``__cause__``.
    """

    prefix = "HTTP request failed: "


class InvalidResponseError(EnphaseError):
    """The server answered, but not in the shape the client expects."""

    prefix = "Invalid API response: "


class AuthenticationError(EnphaseError):
    """The Envoy rejected the bearer token."""

    prefix = "Authentication failed: "


class ConfigurationError(EnphaseError):
    """Required configuration (an environment variable) is missing."""

    prefix = "Configuration error: "


class JsonError(EnphaseError, ValueError):
    """A device response body could not be decoded as the expected JSON."""

    prefix = "JSON parsing error: "


class EnphaseIOError(EnphaseError, OSError):
    """Local I/O failure."""

    prefix = "I/O error: "
