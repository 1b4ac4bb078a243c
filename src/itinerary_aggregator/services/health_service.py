"""
Health Service - upstream availability check.

Reports healthy only when both upstreams answer their base URL with 200.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from src.itinerary_aggregator.config import AggregatorConfig
from src.itinerary_aggregator.exceptions import AggregatorError
from src.itinerary_aggregator.ports.byte_fetcher import ByteFetcher
from src.itinerary_aggregator.schemas.cancellation import CancellationToken

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HealthStatus:
    """Outcome of a health check, mirrored as the HTTP status."""

    status: int
    message: str

    @classmethod
    def ok(cls) -> HealthStatus:
        return cls(status=200, message="Health Ok")

    @classmethod
    def not_ok(cls) -> HealthStatus:
        return cls(status=503, message="Health Not Ok")

    @property
    def is_healthy(self) -> bool:
        return self.status == 200


class HealthService:
    """
    Checks that both upstream sources are reachable.

    Attributes:
        _config: Upstream locations.
        _fetcher: Transport used for the probes.
    """

    def __init__(self, config: AggregatorConfig, fetcher: ByteFetcher) -> None:
        self._config = config
        self._fetcher = fetcher

    def check(self, token: Optional[CancellationToken] = None) -> HealthStatus:
        """Probe each upstream in order; the first failure short-circuits."""
        for url in (self._config.flights_base_url, self._config.flight_to_book_base_url):
            if not url:
                logger.warning("Health check: upstream URL not configured")
                return HealthStatus.not_ok()
            try:
                self._fetcher.fetch(url, token)
            except AggregatorError as e:
                logger.warning("Health check failed for %s: %s", url, e)
                return HealthStatus.not_ok()
        return HealthStatus.ok()
