"""
Byte Fetcher port interface.

Defines the transport contract the pipeline uses to pull raw source payloads.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    from src.itinerary_aggregator.schemas.cancellation import CancellationToken


@runtime_checkable
class ByteFetcher(Protocol):
    """
    Protocol for a timed GET returning the response body.

    Implementations:
    - HttpFetcher: httpx client with a bounded timeout
    """

    def fetch(self, url: str, token: Optional[CancellationToken] = None) -> bytes:
        """
        Fetch `url` and return the raw body.

        Args:
            url: Absolute URL to GET.
            token: Cancellation signal; its deadline caps the request timeout.

        Returns:
            Response body bytes.

        Raises:
            TransportError: On network failure or any non-success status.
            QueryCancelledError: If the token fired before the request.
        """
        ...
