"""
HTTP client for the ElevenLabs API.

All tool calls funnel through one ``XiClient``. A logical request is a
``RequestDescriptor``; ``XiClient.execute`` runs it to completion, absorbing
transient failures (transport faults, 429, 5xx) with exponential backoff, and
either returns the decoded payload or raises a typed error from
``xivoice.shared.exceptions``.
"""

from __future__ import annotations

import asyncio
import json
import logging
import threading
from typing import TYPE_CHECKING, Any, Literal

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from xivoice.constants import API_KEY_HEADER, ELEVENLABS_API_BASE, ERROR_MESSAGES
from xivoice.shared.exceptions import (
    XiCancelledError,
    XiConfigError,
    XiDecodeError,
    XiNetworkError,
    XiRequestError,
    is_retryable_status,
)
from xivoice.shared.hints import API_KEY_MISSING

if TYPE_CHECKING:
    from xivoice.settings import Settings

# Set up logger
logger = logging.getLogger("xivoice.http")

# Music generation can take several minutes.
_DEFAULT_TIMEOUT = 600.0
_DEFAULT_LIMITS = httpx.Limits(
    max_connections=100,
    max_keepalive_connections=20,
    keepalive_expiry=10.0,
)

HttpMethod = Literal["GET", "POST", "PUT", "DELETE"]
ResponseType = Literal["json", "bytes"]


class ClientConfig(BaseModel):
    """Immutable client configuration, built once at process start."""

    model_config = ConfigDict(frozen=True)

    api_key: str | None = Field(default=None, repr=False)
    max_retries: int = Field(default=3, ge=0)
    retry_delay_ms: int = Field(default=1000, ge=0)

    @classmethod
    def from_settings(cls, settings: Settings) -> ClientConfig:
        return cls(
            api_key=settings.api_key,
            max_retries=settings.max_retries,
            retry_delay_ms=settings.retry_delay_ms,
        )


class RequestDescriptor(BaseModel):
    """One logical request: where to send it, what to send, how to decode the answer."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(min_length=1, description="Path relative to the API base URL")
    method: HttpMethod = "GET"
    body: Any | None = None
    headers: dict[str, str] = Field(default_factory=dict)
    response_type: ResponseType = "json"

    @model_validator(mode="after")
    def _no_body_on_get(self) -> RequestDescriptor:
        if self.method == "GET" and self.body is not None:
            raise ValueError("GET requests cannot carry a body")
        return self


def backoff_delay_ms(attempt: int, retry_delay_ms: int) -> int:
    """Delay after the zero-based ``attempt`` failed: base, 2*base, 4*base, ..."""
    return (2**attempt) * retry_delay_ms


def format_error_message(status_code: int, detail: str | None = None) -> str:
    base_message = ERROR_MESSAGES.get(status_code, f"HTTP Error {status_code}")
    return f"{base_message}: {detail}" if detail else base_message


async def _handle_retry(
    attempt: int,
    retry_delay_ms: int,
    url: str,
    error_msg: str,
    cancel: asyncio.Event | None = None,
) -> bool:
    """Log and wait before the next attempt.

    Returns False when ``cancel`` was set during the wait.
    """
    delay_ms = backoff_delay_ms(attempt, retry_delay_ms)
    logger.warning(
        "%s from %s, retrying in %dms (attempt %d)",
        error_msg,
        url,
        delay_ms,
        attempt + 1,
    )
    if cancel is None:
        await asyncio.sleep(delay_ms / 1000)
        return True

    try:
        await asyncio.wait_for(cancel.wait(), timeout=delay_ms / 1000)
    except TimeoutError:
        return True
    return False


def _create_default_async_client() -> httpx.AsyncClient:
    """Create a default httpx AsyncClient with standard configuration."""
    return httpx.AsyncClient(
        timeout=_DEFAULT_TIMEOUT,
        limits=_DEFAULT_LIMITS,
    )


def _extract_detail(data: Any) -> str | None:
    """Pull ``detail.message`` out of an ElevenLabs error body."""
    if not isinstance(data, dict):
        return None
    detail = data.get("detail")
    if isinstance(detail, dict) and detail.get("message"):
        return str(detail["message"])
    return None


def _classify_response(response: httpx.Response) -> XiRequestError:
    status_code = response.status_code
    response_text = response.text

    response_json = None
    try:
        response_json = json.loads(response_text)
    except ValueError:
        detail: str | None = response_text
    else:
        detail = _extract_detail(response_json)

    return XiRequestError(
        format_error_message(status_code, detail),
        status_code,
        terminal=not is_retryable_status(status_code),
        response_text=response_text,
        response_json=response_json,
    )


def _decode(response: httpx.Response, response_type: ResponseType) -> Any:
    if response_type == "bytes":
        return response.content
    try:
        return response.json()
    except ValueError as e:
        raise XiDecodeError(
            f"Failed to decode JSON response: {e!s}", response_text=response.text
        ) from None


def _cancelled(last_error: XiRequestError | None) -> XiCancelledError:
    status_code = last_error.status_code if last_error else None
    reason = f" after: {last_error.message}" if last_error else ""
    return XiCancelledError(f"Request cancelled{reason}", status_code)


class XiClient:
    """Authenticated ElevenLabs client with exponential-backoff retry.

    The client only holds immutable configuration, so concurrent ``execute``
    calls are independent of each other.

    Args:
        config: Credentials and retry policy.
        base_url: API root the descriptor paths are appended to.
        client: Optional custom httpx.AsyncClient. It is reused for every
            request and never closed here. Without one, a default client is
            created per logical request and closed afterwards.

    Raises:
        XiConfigError: If the API key is empty or missing.
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        base_url: str = ELEVENLABS_API_BASE,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        if not config.api_key:
            raise XiConfigError(
                "ElevenLabs API key is required but not provided",
                hints=[API_KEY_MISSING],
            )
        self.config = config
        self.base_url = base_url.rstrip("/")
        self._client = client

    @property
    def max_retries(self) -> int:
        return self.config.max_retries

    @property
    def retry_delay_ms(self) -> int:
        return self.config.retry_delay_ms

    def _build_headers(self, descriptor: RequestDescriptor) -> httpx.Headers:
        headers = httpx.Headers({API_KEY_HEADER: self.config.api_key or ""})
        # Caller headers replace defaults case-insensitively
        headers.update(descriptor.headers)
        if descriptor.body is not None and "content-type" not in headers:
            headers["Content-Type"] = "application/json"
        return headers

    async def execute(
        self, descriptor: RequestDescriptor, *, cancel: asyncio.Event | None = None
    ) -> Any:
        """
        Run one logical request to completion.

        Args:
            descriptor: What to send and how to decode the answer.
            cancel: Optional event; when set, the loop stops between attempts.

        Returns:
            The parsed JSON payload, or the raw body bytes when
            ``descriptor.response_type == "bytes"``.

        Raises:
            XiRequestError: Non-retryable status, or retries exhausted on 429/5xx.
            XiNetworkError: Transport faults on every attempt.
            XiDecodeError: A 2xx body that is not valid JSON.
            XiCancelledError: ``cancel`` was set before the request finished.
        """
        url = f"{self.base_url}{descriptor.path}"
        headers = self._build_headers(descriptor)
        max_retries = self.config.max_retries
        last_error: XiRequestError | None = None

        client = self._client
        should_close_client = client is None
        if client is None:
            client = _create_default_async_client()

        try:
            for attempt in range(max_retries + 1):
                if cancel is not None and cancel.is_set():
                    raise _cancelled(last_error)

                try:
                    response = await client.request(
                        descriptor.method, url, json=descriptor.body, headers=headers
                    )
                except httpx.RequestError as e:
                    if attempt < max_retries:
                        last_error = XiNetworkError(f"Network error: {e!s}", terminal=False)
                        if not await _handle_retry(
                            attempt, self.config.retry_delay_ms, url, f"Network error ({e!s})", cancel
                        ):
                            raise _cancelled(last_error) from None
                        continue
                    raise XiNetworkError(
                        f"Network error after {max_retries + 1} attempts: {e!s}"
                    ) from None

                if not response.is_success:
                    error = _classify_response(response)
                    if error.transient and attempt < max_retries:
                        last_error = error
                        if not await _handle_retry(
                            attempt,
                            self.config.retry_delay_ms,
                            url,
                            f"Received status {response.status_code}",
                            cancel,
                        ):
                            raise _cancelled(last_error)
                        continue
                    error.terminal = True
                    raise error

                return _decode(response, descriptor.response_type)
        finally:
            if should_close_client:
                await client.aclose()

        # The loop always returns or raises; kept for type checkers.
        raise last_error or XiRequestError("Request failed after all retries")

    async def request(
        self,
        path: str,
        *,
        method: HttpMethod = "GET",
        body: Any | None = None,
        headers: dict[str, str] | None = None,
        response_type: ResponseType = "json",
        cancel: asyncio.Event | None = None,
    ) -> Any:
        """Keyword form of :meth:`execute`."""
        descriptor = RequestDescriptor(
            path=path,
            method=method,
            body=body,
            headers=headers or {},
            response_type=response_type,
        )
        return await self.execute(descriptor, cancel=cancel)

    async def get(self, path: str, *, response_type: ResponseType = "json") -> Any:
        return await self.request(path, method="GET", response_type=response_type)

    async def post(self, path: str, body: Any, *, response_type: ResponseType = "json") -> Any:
        return await self.request(path, method="POST", body=body, response_type=response_type)

    async def post_for_bytes(self, path: str, body: Any) -> bytes:
        """POST and return the raw response body, e.g. generated audio."""
        return await self.request(path, method="POST", body=body, response_type="bytes")

    generate_audio = post_for_bytes


# Process-wide instance, built on first use
_client_instance: XiClient | None = None
_client_lock = threading.Lock()


def _create_client_from_env() -> XiClient:
    from xivoice.settings import get_settings

    try:
        settings = get_settings()
    except ValidationError as e:
        raise XiConfigError(f"Invalid configuration: {e}") from None

    if not settings.api_key:
        raise XiConfigError(
            "ELEVENLABS_API_KEY environment variable is required",
            hints=[API_KEY_MISSING],
        )
    return XiClient(ClientConfig.from_settings(settings))


def get_client() -> XiClient:
    """Return the process-wide client, creating it from the environment on first use.

    Raises:
        XiConfigError: If the API key is missing or the retry settings are invalid.
    """
    global _client_instance
    if _client_instance is None:
        with _client_lock:
            if _client_instance is None:
                _client_instance = _create_client_from_env()
    return _client_instance


def reset_client() -> None:
    """Drop the process-wide client so the next access re-reads the environment."""
    global _client_instance
    with _client_lock:
        _client_instance = None
