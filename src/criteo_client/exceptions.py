"""Custom exception hierarchy for the Criteo client."""
from __future__ import annotations

from typing import Any


class CriteoError(RuntimeError):
    """Base error for Criteo API failures."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        details: Any | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class TransportError(CriteoError):
    """Raised when the HTTP exchange itself fails (timeout, connection, TLS)."""


class AuthenticationError(CriteoError):
    """Raised when the client-credentials exchange does not yield a token."""


class RequestError(CriteoError):
    """Raised when the API answers with a status outside 200-299."""

    @property
    def is_unauthorized(self) -> bool:
        return self.status_code == 401


class UnexpectedResponseError(CriteoError):
    """Raised when the API returns a payload that cannot be parsed."""


class ResponseWriteError(CriteoError):
    """Raised when a response body cannot be written to disk."""
