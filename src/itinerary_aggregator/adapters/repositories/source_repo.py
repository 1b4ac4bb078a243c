"""
Source Flights Repository - read-only store over one decoded source.

Every query is a linear scan with exact-match comparison. The store is
built per request from freshly fetched bytes and discarded afterwards.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from src.itinerary_aggregator.exceptions import FlightNotFoundError
from src.itinerary_aggregator.ports.flights_decoder import FlightsDecoder
from src.itinerary_aggregator.schemas.cancellation import CancellationToken
from src.itinerary_aggregator.schemas.flight import Flight, Flights

logger = logging.getLogger(__name__)


def _check(token: Optional[CancellationToken]) -> None:
    if token is not None:
        token.raise_if_cancelled()


class SourceFlightsRepository:
    """
    In-memory repository over a single source's flights.

    Single-result queries raise FlightNotFoundError on a miss; multi-result
    queries return an empty list. Returned lists are always fresh copies.

    Attributes:
        _flights: Decoded flights in source order (immutable tuple).
        _source: Provenance tag of the wrapped source.

    Usage:
        >>> repo = SourceFlightsRepository.from_payload(body, decode_flights)
        >>> repo.find_by_id("1")
    """

    def __init__(self, flights: Iterable[Flight], source: str = "") -> None:
        """
        Initialize the repository.

        Args:
            flights: Normalized flights from one adapter.
            source: Provenance tag (used for logging only).
        """
        self._flights = tuple(flights)
        self._source = source

    @classmethod
    def from_payload(
        cls,
        payload: bytes,
        decoder: FlightsDecoder,
        source: str = "",
    ) -> SourceFlightsRepository:
        """
        Build a repository by decoding a raw payload.

        Raises:
            DecodeError: If the decoder rejects the payload.
        """
        flights = decoder(payload)
        return cls(flights, source=source)

    @property
    def source(self) -> str:
        return self._source

    def __len__(self) -> int:
        return len(self._flights)

    def list_flights(self, token: Optional[CancellationToken] = None) -> Flights:
        _check(token)
        return list(self._flights)

    def find_by_id(
        self, flight_id: str, token: Optional[CancellationToken] = None
    ) -> Flight:
        _check(token)
        for flight in self._flights:
            if flight.id == flight_id:
                return flight
        raise FlightNotFoundError(f"flight {flight_id!r} not found in {self._source or 'source'}")

    def find_by_number(
        self, number: str, token: Optional[CancellationToken] = None
    ) -> Flight:
        _check(token)
        for flight in self._flights:
            for seg in flight.segments:
                if seg.flight_number == number:
                    return flight
        raise FlightNotFoundError(
            f"flight number {number!r} not found in {self._source or 'source'}"
        )

    def find_by_passenger(
        self, passenger_name: str, token: Optional[CancellationToken] = None
    ) -> Flights:
        _check(token)
        return [f for f in self._flights if f.passenger_name == passenger_name]

    def find_by_destination(
        self,
        departure: str,
        arrival: str,
        token: Optional[CancellationToken] = None,
    ) -> Flights:
        """Match flights with at least one segment flying departure -> arrival."""
        _check(token)
        return [
            f
            for f in self._flights
            if any(s.departure == departure and s.arrival == arrival for s in f.segments)
        ]

    def find_by_price(
        self, price: float, token: Optional[CancellationToken] = None
    ) -> Flights:
        """Exact float equality on the total amount, no tolerance."""
        _check(token)
        return [f for f in self._flights if f.total.amount == price]
