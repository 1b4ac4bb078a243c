"""
Source decoders translating upstream JSON schemas into canonical flights.
"""

from src.itinerary_aggregator.adapters.sources.flight_to_book_source import (
    decode_flight_to_book,
)
from src.itinerary_aggregator.adapters.sources.flights_source import decode_flights

__all__ = [
    "decode_flight_to_book",
    "decode_flights",
]
