"""
Domain services for the itinerary aggregator.

Services compute derived metrics over merged flights and report on the
health of the upstream sources.
"""

from src.itinerary_aggregator.services.health_service import HealthService, HealthStatus
from src.itinerary_aggregator.services.ranking_service import (
    FlightRankingService,
    SortOrder,
)

__all__ = ["FlightRankingService", "HealthService", "HealthStatus", "SortOrder"]
