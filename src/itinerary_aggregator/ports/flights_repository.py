"""
Flights Repository port interface.

Defines the capability set every itinerary store offers, whether it wraps a
single source or aggregates several of them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    from src.itinerary_aggregator.schemas.cancellation import CancellationToken
    from src.itinerary_aggregator.schemas.flight import Flight, Flights


@runtime_checkable
class FlightsRepository(Protocol):
    """
    Protocol for read-only itinerary queries.

    Implementations:
    - SourceFlightsRepository: linear scans over one decoded source
    - MultiFlightsRepository: fan-out and merge over several repositories

    Single-result queries raise FlightNotFoundError on a miss. Whether
    multi-result queries return [] or raise FlightsNotFoundError on a miss
    depends on the implementation.
    """

    def list_flights(self, token: Optional[CancellationToken] = None) -> Flights:
        """
        Return every flight as a new list.

        Args:
            token: Cancellation signal checked before work starts.

        Returns:
            Copy of the stored flights; mutating it never affects the store.
        """
        ...

    def find_by_id(
        self, flight_id: str, token: Optional[CancellationToken] = None
    ) -> Flight:
        """
        Return the flight with the given booking id.

        Raises:
            FlightNotFoundError: If no flight has this id.
        """
        ...

    def find_by_number(
        self, number: str, token: Optional[CancellationToken] = None
    ) -> Flight:
        """
        Return the first flight with a segment flown under `number`.

        Raises:
            FlightNotFoundError: If no segment carries this flight number.
        """
        ...

    def find_by_passenger(
        self, passenger_name: str, token: Optional[CancellationToken] = None
    ) -> Flights:
        """Return flights booked for exactly this passenger name."""
        ...

    def find_by_destination(
        self,
        departure: str,
        arrival: str,
        token: Optional[CancellationToken] = None,
    ) -> Flights:
        """Return flights with a segment from `departure` to `arrival`."""
        ...

    def find_by_price(
        self, price: float, token: Optional[CancellationToken] = None
    ) -> Flights:
        """Return flights whose total amount equals `price` exactly."""
        ...
