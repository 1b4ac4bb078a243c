"""
Repository adapters for per-source and aggregated flight queries.
"""

from src.itinerary_aggregator.adapters.repositories.multi_repo import (
    MultiFlightsRepository,
)
from src.itinerary_aggregator.adapters.repositories.source_repo import (
    SourceFlightsRepository,
)
from src.itinerary_aggregator.adapters.repositories.upstream_repo import (
    UpstreamFlightsRepository,
)

__all__ = [
    "MultiFlightsRepository",
    "SourceFlightsRepository",
    "UpstreamFlightsRepository",
]
