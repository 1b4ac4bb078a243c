"""
Port interfaces for the itinerary aggregator.

Ports define the abstract interfaces (Protocols) that the domain layer uses
to communicate with upstream sources. This follows the Ports and Adapters
(Hexagonal) architecture pattern.
"""

from src.itinerary_aggregator.ports.byte_fetcher import ByteFetcher
from src.itinerary_aggregator.ports.flights_decoder import FlightsDecoder
from src.itinerary_aggregator.ports.flights_repository import FlightsRepository

__all__ = [
    "ByteFetcher",
    "FlightsDecoder",
    "FlightsRepository",
]
