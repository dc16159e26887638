# ABOUTME: HTTP client abstraction for book search API calls.
# ABOUTME: Wraps httpx with a User-Agent, a timeout, and an injectable transport for testing.

import logging
from typing import Any, Protocol, runtime_checkable

import httpx

from bookinfo import __version__
from bookinfo.errors import BookinfoError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


class MetadataFetchError(BookinfoError):
    """Raised when an HTTP request to a book search API fails."""


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for HTTP GET operations against metadata APIs."""

    def get(self, url: str, params: dict[str, str] | None = None) -> dict[str, Any]: ...


class BookinfoHttpClient:
    """HTTP client for book search API calls.

    Wraps httpx.Client. Requests are sent once; any transport error, non-200
    status or undecodable body becomes a MetadataFetchError. The underlying
    httpx.Client is safe to share between threads.
    """

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        client_kwargs: dict[str, Any] = {
            "headers": {"User-Agent": f"bookinfo/{__version__}"},
            "timeout": timeout,
        }
        if transport is not None:
            client_kwargs["transport"] = transport
        self._client = httpx.Client(**client_kwargs)

    def get(self, url: str, params: dict[str, str] | None = None) -> dict[str, Any]:
        """Send a GET request and decode the JSON body.

        Args:
            url: The URL to request.
            params: Optional query parameters.

        Returns:
            Parsed JSON response body.

        Raises:
            MetadataFetchError: On transport errors, non-200 responses or
                bodies that are not a JSON object.
        """
        try:
            response = self._client.get(url, params=params)
        except httpx.HTTPError as exc:
            raise MetadataFetchError(f"Request failed: {url}: {exc}") from exc

        if response.status_code != 200:
            logger.debug("HTTP %d from %s: %s", response.status_code, url, response.text[:200])
            raise MetadataFetchError(f"HTTP {response.status_code} from {url}")

        try:
            data = response.json()
        except ValueError as exc:
            raise MetadataFetchError(f"Invalid JSON from {url}: {exc}") from exc

        if not isinstance(data, dict):
            raise MetadataFetchError(f"Unexpected response shape from {url}")
        return data

    def close(self) -> None:
        """Release pooled connections."""
        self._client.close()

    def __enter__(self) -> "BookinfoHttpClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
