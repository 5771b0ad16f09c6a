"""xivoice exception system.

Every failure surfaced by the HTTP client is one of a small closed set of
exception types, so tool handlers can branch on the type instead of probing
for optional attributes:

- ``XiConfigError``: missing or invalid configuration (fatal at startup)
- ``XiRequestError``: a request ultimately failed (``status_code`` set when the
  API answered, ``None`` for transport faults via ``XiNetworkError``)
- ``XiDecodeError``: a successful response could not be parsed

Each exception carries structured hints for the user.
"""

from __future__ import annotations

import logging
from typing import Any, ClassVar

from xivoice.shared.hints import (
    API_KEY_MISSING,
    INVALID_CONFIG,
    NETWORK_UNREACHABLE,
    PERMISSION_DENIED,
    RATE_LIMIT_HIT,
    SERVICE_UNAVAILABLE,
    Hint,
)

logger = logging.getLogger(__name__)


class XiException(Exception):
    """Base exception class for all xivoice errors."""

    # Subclasses can override this class attribute
    default_hints: ClassVar[list[Hint]] = []

    def __init__(
        self,
        message: str = "",
        response_json: Any | None = None,
        *,
        hints: list[Hint] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.response_json = response_json
        # If hints not provided, use defaults defined by subclass
        self.hints: list[Hint] = hints if hints is not None else list(self.default_hints)

    def __str__(self) -> str:
        return self.message


class XiConfigError(XiException):
    """Invalid or missing configuration, e.g. no API key."""

    default_hints: ClassVar[list[Hint]] = [INVALID_CONFIG]


class XiRequestError(XiException):
    """A request to the ElevenLabs API failed.

    Attributes:
        status_code: HTTP status of the failing response, or None for a
            transport-level fault.
        terminal: False only while the retry loop still holds the error;
            every error raised to a caller is terminal.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        *,
        terminal: bool = True,
        response_text: str | None = None,
        response_json: Any | None = None,
        hints: list[Hint] | None = None,
    ) -> None:
        self.status_code = status_code
        self.terminal = terminal
        self.response_text = response_text
        if hints is None:
            hints = _hints_for_status(status_code)
        super().__init__(message, response_json, hints=hints)

    @property
    def transient(self) -> bool:
        """Whether the failure belongs to a category that is retried."""
        return is_retryable_status(self.status_code)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(message={self.message!r}, "
            f"status_code={self.status_code!r}, terminal={self.terminal!r})"
        )


class XiNetworkError(XiRequestError):
    """Network connection issue; the request never produced a response."""

    default_hints: ClassVar[list[Hint]] = [NETWORK_UNREACHABLE]

    def __init__(self, message: str, *, terminal: bool = True) -> None:
        super().__init__(message, None, terminal=terminal, hints=list(self.default_hints))


class XiCancelledError(XiRequestError):
    """The caller cancelled the request between attempts."""


class XiDecodeError(XiException):
    """A successful (2xx) response body could not be parsed into the declared shape.

    This indicates a contract mismatch between what the caller expected and
    what the API returned. It is never retried.
    """

    def __init__(self, message: str, response_text: str | None = None) -> None:
        self.response_text = response_text
        super().__init__(message)

    def __str__(self) -> str:
        if self.response_text:
            snippet = self.response_text[:200]
            return f"{self.message} | Response: {snippet}"
        return self.message


def is_retryable_status(status_code: int | None) -> bool:
    """Transport faults (no status), 429 and every 5xx are transient."""
    return status_code is None or status_code == 429 or status_code >= 500


def _hints_for_status(status_code: int | None) -> list[Hint]:
    if status_code == 401:
        return [API_KEY_MISSING]
    if status_code == 403:
        return [PERMISSION_DENIED]
    if status_code == 429:
        return [RATE_LIMIT_HIT]
    if status_code is not None and status_code >= 500:
        return [SERVICE_UNAVAILABLE]
    return []
