"""
Custom exceptions for the itinerary aggregator.

Provides a closed hierarchy of exceptions so callers can tell a broken
upstream apart from a query that simply matched nothing.
"""

from typing import Optional


class AggregatorError(Exception):
    """Base exception for all itinerary aggregator errors."""

    pass


class DecodeError(AggregatorError):
    """Raised when a source payload is malformed or misses a required field."""

    def __init__(self, source: str, message: str) -> None:
        self.source = source
        self.message = message
        super().__init__(f"{source}: {message}")


class TransportError(AggregatorError):
    """Raised when fetching a source fails or returns a non-success status."""

    def __init__(
        self,
        url: str,
        message: str = "",
        status_code: Optional[int] = None,
    ) -> None:
        self.url = url
        self.status_code = status_code
        if not message and status_code is not None:
            message = f"unexpected status {status_code}"
        self.message = message or "request failed"
        super().__init__(f"{url}: {self.message}")


class NotFoundError(AggregatorError):
    """Base exception for queries that matched nothing."""

    pass


class FlightNotFoundError(NotFoundError):
    """Raised when a single-result query finds no flight."""

    def __init__(self, message: str = "flight not found") -> None:
        super().__init__(message)


class FlightsNotFoundError(NotFoundError):
    """Raised when a multi-result query finds no flights across all sources."""

    def __init__(self, message: str = "flights not found") -> None:
        super().__init__(message)


class QueryCancelledError(AggregatorError):
    """Raised when the caller cancelled the query or its deadline passed."""

    def __init__(self, message: str = "query cancelled") -> None:
        super().__init__(message)
