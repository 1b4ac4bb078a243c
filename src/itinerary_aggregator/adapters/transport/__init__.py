"""
Transport adapters for fetching raw source payloads.
"""

from src.itinerary_aggregator.adapters.transport.http_fetcher import HttpFetcher

__all__ = [
    "HttpFetcher",
]
