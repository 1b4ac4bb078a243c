"""
Schema definitions for the itinerary aggregator.

Frozen dataclasses as the canonical data contracts.
"""

from .cancellation import CancellationToken
from .flight import Flight, Flights, Segment, Total

__all__ = [
    # Itinerary records
    "Flight",
    "Flights",
    "Segment",
    "Total",
    # Query control
    "CancellationToken",
]
