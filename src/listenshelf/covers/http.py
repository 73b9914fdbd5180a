# ABOUTME: HTTP client abstraction for cover source API calls and image downloads.
# ABOUTME: Provides rate limiting, retry with backoff, and injectable transport for testing.

import logging
import time
from typing import Any, Protocol, runtime_checkable

import httpx

logger = logging.getLogger(__name__)

_RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}


class CoverFetchError(Exception):
    """Raised when an HTTP request to a cover source fails."""


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for HTTP GET operations against cover sources."""

    def get(self, url: str, params: dict[str, str] | None = None) -> dict[str, Any]: ...

    def get_bytes(self, url: str, params: dict[str, str] | None = None) -> bytes: ...


class ShelfHttpClient:
    """HTTP client with rate limiting and retry for cover source calls.

    Wraps httpx.Client with configurable request intervals and retry logic
    for transient failures (429, 5xx). Redirects are followed, since the
    cover endpoints answer with a redirect to the image host.
    """

    def __init__(
        self,
        *,
        min_request_interval: float = 0.1,
        max_retries: int = 3,
        retry_delay: float = 1.0,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        client_kwargs: dict[str, Any] = {
            "headers": {"User-Agent": "listenshelf/0.1.0"},
            "timeout": timeout,
            "follow_redirects": True,
        }
        if transport is not None:
            client_kwargs["transport"] = transport
        self._client = httpx.Client(**client_kwargs)
        self._min_interval = min_request_interval
        self._max_retries = max_retries
        self._retry_delay = retry_delay
        self._last_request_time: float = 0.0

    def get(self, url: str, params: dict[str, str] | None = None) -> dict[str, Any]:
        """Send a GET request and parse the JSON body.

        Raises:
            CoverFetchError: On HTTP errors, exhausted retries, or a body that
                is not a JSON object.
        """
        response = self._request(url, params)
        try:
            data = response.json()
        except ValueError as exc:
            raise CoverFetchError(f"Malformed JSON from {url}: {exc}") from exc
        if not isinstance(data, dict):
            raise CoverFetchError(f"Unexpected JSON payload from {url}")
        return data

    def get_bytes(self, url: str, params: dict[str, str] | None = None) -> bytes:
        """Send a GET request and return the raw body (used for images).

        Raises:
            CoverFetchError: On HTTP errors or exhausted retries.
        """
        return self._request(url, params).content

    def close(self) -> None:
        self._client.close()

    def _request(self, url: str, params: dict[str, str] | None) -> httpx.Response:
        """Send a GET request with rate limiting and retry."""
        self._rate_limit()

        attempts = 1 + self._max_retries
        last_status = 0
        for attempt in range(attempts):
            try:
                response = self._client.get(url, params=params)
                last_status = response.status_code
            except (httpx.HTTPError, httpx.InvalidURL) as exc:
                raise CoverFetchError(f"Request failed: {url}: {exc}") from exc

            if response.status_code == 200:
                return response

            if response.status_code not in _RETRYABLE_STATUS_CODES:
                raise CoverFetchError(f"HTTP {response.status_code} from {url}")

            if attempt < attempts - 1:
                delay = self._retry_delay * (2**attempt)
                logger.warning(
                    "HTTP %d from %s, retrying in %.1fs (attempt %d/%d)",
                    response.status_code,
                    url,
                    delay,
                    attempt + 1,
                    self._max_retries,
                )
                time.sleep(delay)

        raise CoverFetchError(f"HTTP {last_status} from {url} after {attempts} attempts")

    def _rate_limit(self) -> None:
        """Sleep if needed to maintain minimum interval between requests."""
        if self._min_interval <= 0:
            return
        now = time.monotonic()
        elapsed = now - self._last_request_time
        if elapsed < self._min_interval and self._last_request_time > 0:
            time.sleep(self._min_interval - elapsed)
        self._last_request_time = time.monotonic()
