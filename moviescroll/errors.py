"""Typed failures raised by the catalog transport.

Controllers never inspect HTTP details directly. Every transport failure is
translated into one of the :class:`CatalogError` subclasses below and stored
on the owning accumulator as an :class:`ErrorInfo` snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred."

ErrorKind = Literal["network", "http_status", "decode", "timeout", "unexpected"]


@dataclass(frozen=True, slots=True)
class ErrorInfo:
    """User-displayable description of the most recent failed fetch."""

    kind: ErrorKind
    message: str
    retryable: bool = True
    status_code: int | None = None


class CatalogError(Exception):
    """Base class for catalog transport failures."""

    kind: ErrorKind = "unexpected"
    retryable: bool = True

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def to_info(self) -> ErrorInfo:
        return ErrorInfo(kind=self.kind, message=self.message, retryable=self.retryable)


class CatalogNetworkError(CatalogError):
    """The request never produced an HTTP response."""

    kind = "network"


class CatalogTimeoutError(CatalogError):
    """The transport gave up waiting for a response."""

    kind = "timeout"


class CatalogHTTPStatusError(CatalogError):
    """The server answered with a non-2xx status."""

    kind = "http_status"

    def __init__(self, status_code: int, message: str | None = None) -> None:
        self.status_code = status_code
        super().__init__(message or f"HTTP error: {status_code}.")
        # Client errors other than throttling will not succeed on retry.
        self.retryable = status_code >= 500 or status_code == 429

    def to_info(self) -> ErrorInfo:
        return ErrorInfo(
            kind=self.kind,
            message=self.message,
            retryable=self.retryable,
            status_code=self.status_code,
        )


class CatalogDecodeError(CatalogError):
    """The response body could not be parsed into catalog records."""

    kind = "decode"
    retryable = False
