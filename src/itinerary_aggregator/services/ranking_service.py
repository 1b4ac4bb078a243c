"""
Ranking Service - derived metrics and orderings over merged flights.

Orderings are stable: equal keys keep their input order. They operate on an
already-merged collection and never touch sources directly; the service
class only lists through the aggregating repository.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from enum import Enum
from typing import Callable, Dict, Optional, Sequence

from src.itinerary_aggregator.ports.flights_repository import FlightsRepository
from src.itinerary_aggregator.schemas.cancellation import CancellationToken
from src.itinerary_aggregator.schemas.flight import Flight, Flights

logger = logging.getLogger(__name__)


def total_travel_time(flight: Flight) -> timedelta:
    """
    Elapsed time from the first departure to the last arrival.

    Layovers between segments are part of the elapsed time but do not
    change the key: only the first departure and last arrival matter.

    Returns:
        Duration, or timedelta(0) for a flight without segments.
    """
    if not flight.segments:
        return timedelta(0)
    return flight.segments[-1].arrive_time - flight.segments[0].depart_time


def sort_by_price(flights: Sequence[Flight]) -> Flights:
    """Stable ascending sort on total amount."""
    return sorted(flights, key=lambda f: f.total.amount)


def sort_by_travel_time(flights: Sequence[Flight]) -> Flights:
    """Stable ascending sort on total travel time."""
    return sorted(flights, key=total_travel_time)


def sort_by_departure_date(flights: Sequence[Flight]) -> Flights:
    """
    Stable ascending sort on the first segment's departure time.

    A flight without segments compares neither before nor after any other
    flight, so it stays at its original index. Flights with segments are
    stably sorted into the remaining positions.

    Example:
        [A(dep 10:00), Z(no segments), B(dep 08:00)] -> [B, Z, A]
    """
    result = list(flights)
    slots = [i for i, f in enumerate(result) if f.segments]
    ordered = sorted((result[i] for i in slots), key=lambda f: f.segments[0].depart_time)
    for slot, flight in zip(slots, ordered):
        result[slot] = flight
    return result


class SortOrder(Enum):
    """Named orderings exposed to the boundary."""

    PRICE = "price"
    TRAVEL_TIME = "time"
    DEPARTURE_DATE = "departure"

    @classmethod
    def parse(cls, value: str) -> SortOrder:
        """
        Resolve a user-supplied ordering name, case-insensitively.

        Raises:
            ValueError: If the name is empty or unknown.
        """
        key = (value or "").strip().lower()
        if not key:
            raise ValueError("missing sort type")
        try:
            return _SORT_ALIASES[key]
        except KeyError:
            raise ValueError(f"invalid sort type: {value}") from None


_SORT_ALIASES: Dict[str, SortOrder] = {
    "price": SortOrder.PRICE,
    "time": SortOrder.TRAVEL_TIME,
    "timetravel": SortOrder.TRAVEL_TIME,
    "duration": SortOrder.TRAVEL_TIME,
    "departure": SortOrder.DEPARTURE_DATE,
    "depart": SortOrder.DEPARTURE_DATE,
    "departure_date": SortOrder.DEPARTURE_DATE,
}

_SORTERS: Dict[SortOrder, Callable[[Sequence[Flight]], Flights]] = {
    SortOrder.PRICE: sort_by_price,
    SortOrder.TRAVEL_TIME: sort_by_travel_time,
    SortOrder.DEPARTURE_DATE: sort_by_departure_date,
}


class FlightRankingService:
    """
    Lists the merged flight set and applies one of the named orderings.

    This service is stateless; the repository it wraps is request-scoped.

    Attributes:
        _repository: Aggregating repository to list from.
    """

    def __init__(self, repository: FlightsRepository) -> None:
        self._repository = repository

    def rank(
        self, order: SortOrder, token: Optional[CancellationToken] = None
    ) -> Flights:
        """
        List all flights and sort them by `order`.

        Raises:
            DecodeError, TransportError: Propagated from the listing.
            QueryCancelledError: If the token fires.
        """
        flights = self._repository.list_flights(token)
        ranked = _SORTERS[order](flights)
        logger.debug("Ranked %d flights by %s", len(ranked), order.value)
        return ranked

    def by_price(self, token: Optional[CancellationToken] = None) -> Flights:
        return self.rank(SortOrder.PRICE, token)

    def by_travel_time(self, token: Optional[CancellationToken] = None) -> Flights:
        return self.rank(SortOrder.TRAVEL_TIME, token)

    def by_departure_date(self, token: Optional[CancellationToken] = None) -> Flights:
        return self.rank(SortOrder.DEPARTURE_DATE, token)
