"""
HTTP Fetcher - httpx-backed byte transport.

Performs one bounded GET per call. Any network failure or non-200 status
becomes a TransportError; there are no retries.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from src.itinerary_aggregator.exceptions import TransportError
from src.itinerary_aggregator.schemas.cancellation import CancellationToken

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 5.0

# Bytes of an error body kept on the TransportError
ERROR_SNIPPET_BYTES = 8 << 10


class HttpFetcher:
    """
    Byte fetcher over a synchronous httpx client.

    The effective timeout is the smaller of the configured timeout and the
    time left on the caller's token.

    Attributes:
        _timeout: Per-request timeout in seconds.
        _client: Injected or lazily created httpx client.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        client: Optional[httpx.Client] = None,
    ) -> None:
        """
        Initialize the fetcher.

        Args:
            timeout: Per-request timeout in seconds.
            client: Custom httpx client. If None, one is created on first use.
        """
        if timeout <= 0:
            raise ValueError(f"timeout must be > 0, got {timeout}")
        self._timeout = timeout
        self._client = client

    def _get_client(self) -> httpx.Client:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.Client(headers={"Accept": "application/json"})
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None and not self._client.is_closed:
            self._client.close()
            self._client = None

    def _effective_timeout(self, token: Optional[CancellationToken]) -> float:
        if token is None:
            return self._timeout
        remaining = token.remaining()
        if remaining is None:
            return self._timeout
        return min(self._timeout, remaining)

    def fetch(self, url: str, token: Optional[CancellationToken] = None) -> bytes:
        """
        GET `url` and return the body.

        Args:
            url: Absolute URL.
            token: Cancellation signal checked before the request.

        Returns:
            Response body bytes.

        Raises:
            TransportError: On network failure, timeout or non-200 status.
            QueryCancelledError: If the token already fired.
        """
        if token is not None:
            token.raise_if_cancelled()

        timeout = self._effective_timeout(token)
        logger.debug("GET %s (timeout %.2fs)", url, timeout)

        try:
            response = self._get_client().get(url, timeout=timeout)
        except httpx.HTTPError as e:
            logger.warning("GET %s failed: %s", url, e)
            raise TransportError(url, f"do request: {e}") from e

        if response.status_code != httpx.codes.OK:
            snippet = response.content[:ERROR_SNIPPET_BYTES].decode("utf-8", errors="replace")
            logger.warning("GET %s returned status %d", url, response.status_code)
            raise TransportError(
                url,
                f"unexpected status {response.status_code}: {snippet}",
                status_code=response.status_code,
            )

        return response.content
