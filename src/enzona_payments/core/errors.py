"""
Error taxonomy for the Enzona client and the status classifier.

Every failure raised by the library is an :class:`EnzonaError` tagged with an
:class:`ErrorKind`, so callers can branch on ``exc.kind`` (or catch the
concrete subclass) instead of matching message strings.
"""

from __future__ import annotations

import enum
from typing import Mapping, Optional

import requests
from urllib3.exceptions import ReadTimeoutError

__all__ = [
    "AuthError",
    "CancelledError",
    "DecodeError",
    "EnzonaError",
    "ErrorKind",
    "NetworkError",
    "NotFoundError",
    "RateLimitedError",
    "ServerError",
    "TimeoutError",
    "UnknownStatusError",
    "ValidationError",
    "classify",
    "is_timeout",
]


class ErrorKind(str, enum.Enum):
    AUTH = "auth"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    RATE_LIMITED = "rate_limited"
    SERVER = "server"
    UNKNOWN_STATUS = "unknown_status"
    DECODE = "decode"
    NETWORK = "network"
    TIMEOUT = "timeout"
    CANCELLED = "cancelled"


_RETRYABLE_KINDS = frozenset(
    {ErrorKind.SERVER, ErrorKind.RATE_LIMITED, ErrorKind.NETWORK, ErrorKind.TIMEOUT}
)


class EnzonaError(Exception):
    """Base class for every error surfaced by the client."""

    kind: ErrorKind = ErrorKind.UNKNOWN_STATUS

    def __init__(
        self,
        message: str,
        *,
        http_status: Optional[int] = None,
        raw_body: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.http_status = http_status
        self.raw_body = raw_body
        self.cause = cause

    @property
    def retryable(self) -> bool:
        """Hint only: the client itself never retries."""
        return self.kind in _RETRYABLE_KINDS

    def __str__(self) -> str:
        if self.http_status is None:
            return self.message
        return f"{self.message} (HTTP {self.http_status})"

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(kind={self.kind.value!r}, "
            f"http_status={self.http_status!r}, message={self.message!r})"
        )


class AuthError(EnzonaError):
    kind = ErrorKind.AUTH

    def __init__(self, message: str, *, during_token_exchange: bool = False, **kwargs) -> None:
        super().__init__(message, **kwargs)
        self.during_token_exchange = during_token_exchange


class ValidationError(EnzonaError):
    kind = ErrorKind.VALIDATION


class NotFoundError(EnzonaError):
    kind = ErrorKind.NOT_FOUND


class RateLimitedError(EnzonaError):
    kind = ErrorKind.RATE_LIMITED

    def __init__(self, message: str, *, retry_after: Optional[float] = None, **kwargs) -> None:
        super().__init__(message, **kwargs)
        self.retry_after = retry_after


class ServerError(EnzonaError):
    kind = ErrorKind.SERVER


class UnknownStatusError(EnzonaError):
    kind = ErrorKind.UNKNOWN_STATUS


class DecodeError(EnzonaError):
    kind = ErrorKind.DECODE


class NetworkError(EnzonaError):
    kind = ErrorKind.NETWORK


class TimeoutError(NetworkError):  # noqa: A001 - part of the public taxonomy
    kind = ErrorKind.TIMEOUT


class CancelledError(EnzonaError):
    kind = ErrorKind.CANCELLED


def _retry_after(headers: Optional[Mapping[str, str]]) -> Optional[float]:
    if not headers:
        return None
    value = headers.get("Retry-After")
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        # HTTP-date form is not interpreted
        return None


def classify(
    status: int,
    body: str,
    headers: Optional[Mapping[str, str]] = None,
) -> Optional[EnzonaError]:
    """
    Map a resource-server response onto the error taxonomy.

    Returns ``None`` for any 2xx status. The raw body is kept verbatim on the
    returned error because the API's diagnostic payload has no fixed schema.
    """
    if 200 <= status < 300:
        return None

    details = {"http_status": status, "raw_body": body}
    if status in (401, 403):
        return AuthError("Request rejected by the payment API", **details)
    if status in (400, 422):
        return ValidationError("Request failed validation", **details)
    if status == 404:
        return NotFoundError("Resource not found", **details)
    if status == 429:
        return RateLimitedError(
            "Rate limit exceeded", retry_after=_retry_after(headers), **details
        )
    if 500 <= status < 600:
        return ServerError("Payment API server error", **details)
    return UnknownStatusError("Unexpected response status", **details)


def is_timeout(exc: BaseException) -> bool:
    """
    True for ``requests`` timeouts, including a read timeout hit while the body
    is consumed, which ``requests`` reports as a ``ConnectionError``.
    """
    if isinstance(exc, requests.Timeout):
        return True
    if isinstance(exc, requests.ConnectionError) and exc.args:
        return isinstance(exc.args[0], ReadTimeoutError)
    return False
