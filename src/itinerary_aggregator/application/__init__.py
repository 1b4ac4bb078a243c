"""
Application layer for the itinerary aggregator.

This layer provides the public API for the aggregation engine.
It acts as a facade, handling dependency initialization and building a
fresh query pipeline per call.
"""

from src.itinerary_aggregator.application.aggregate_flights import (
    FlightAggregator,
    SourceSpec,
)

__all__ = ["FlightAggregator", "SourceSpec"]
