"""
Flights Decoder port interface.

A decoder translates one upstream's JSON schema into canonical flights.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from src.itinerary_aggregator.schemas.flight import Flights


@runtime_checkable
class FlightsDecoder(Protocol):
    """
    Protocol for schema decoders, one per upstream source.

    Implementations:
    - decode_flights: flat per-leg records (source "flights")
    - decode_flight_to_book: nested traveler/segments/total records
      (source "flight_to_book")
    """

    def __call__(self, payload: bytes) -> Flights:
        """
        Decode a raw payload.

        Returns:
            Validated flights tagged with the decoder's provenance.

        Raises:
            DecodeError: If the payload is malformed, misses a required
                field or carries a malformed timestamp.
        """
        ...
