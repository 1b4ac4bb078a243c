"""
Multi Flights Repository - fan-out and merge over several sources.

Registration order is priority order. Merge rules per operation family:

- list_flights: every source, concatenated; any error aborts.
- find_by_id / find_by_number: first structurally valid hit wins and later
  sources are skipped; a soft miss moves on to the next source; a hard
  error aborts; all misses -> FlightNotFoundError.
- find_by_passenger / find_by_destination / find_by_price: every source is
  visited; soft misses contribute nothing; a hard error aborts; an empty
  merge -> FlightsNotFoundError.

Merged results keep source-visit order, then each source's scan order.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence

from src.itinerary_aggregator.exceptions import (
    FlightNotFoundError,
    FlightsNotFoundError,
    NotFoundError,
)
from src.itinerary_aggregator.ports.flights_repository import FlightsRepository
from src.itinerary_aggregator.schemas.cancellation import CancellationToken
from src.itinerary_aggregator.schemas.flight import Flight, Flights

logger = logging.getLogger(__name__)

SingleQuery = Callable[[FlightsRepository], Flight]
MultiQuery = Callable[[FlightsRepository], Flights]


def _check(token: Optional[CancellationToken]) -> None:
    if token is not None:
        token.raise_if_cancelled()


class MultiFlightsRepository:
    """
    Aggregating repository; the single entry point all queries run against.

    Holds no state beyond the ordered list of wrapped repositories, so one
    instance is built per request and thrown away afterwards.

    Attributes:
        _repos: Wrapped repositories in priority order.
    """

    def __init__(self, *repos: FlightsRepository) -> None:
        self._repos: List[FlightsRepository] = list(repos)

    @property
    def repositories(self) -> Sequence[FlightsRepository]:
        return tuple(self._repos)

    # -------------------------------
    # Fan-out helpers
    # -------------------------------

    def _first_hit(
        self,
        query: SingleQuery,
        token: Optional[CancellationToken],
        description: str,
    ) -> Flight:
        """Visit sources in priority order and return the first valid hit."""
        _check(token)
        for i, repo in enumerate(self._repos):
            _check(token)
            try:
                flight = query(repo)
            except NotFoundError:
                logger.debug("Source %d: no match for %s", i, description)
                continue
            except Exception as e:
                logger.warning("Source %d failed for %s: %s", i, description, e)
                raise

            # An empty id is not a usable record, treat it as a miss
            if flight is not None and flight.id:
                logger.debug("Source %d: hit for %s", i, description)
                return flight
            logger.debug("Source %d: empty record for %s", i, description)

        raise FlightNotFoundError(f"flight not found: {description}")

    def _merge_all(
        self,
        query: MultiQuery,
        token: Optional[CancellationToken],
        description: str,
    ) -> Flights:
        """Visit every source and concatenate their contributions."""
        _check(token)
        merged: Flights = []
        for i, repo in enumerate(self._repos):
            _check(token)
            try:
                found = query(repo)
            except NotFoundError:
                logger.debug("Source %d: no matches for %s", i, description)
                continue
            except Exception as e:
                logger.warning("Source %d failed for %s: %s", i, description, e)
                raise
            merged.extend(found)

        if not merged:
            raise FlightsNotFoundError(f"flights not found: {description}")

        logger.debug("Merged %d flights for %s", len(merged), description)
        return merged

    # -------------------------------
    # FlightsRepository
    # -------------------------------

    def list_flights(self, token: Optional[CancellationToken] = None) -> Flights:
        """
        Concatenate every source's flights in registration order.

        Raises:
            DecodeError, TransportError: If any source fails; no partial
                result is returned.
            QueryCancelledError: If the token fires.
        """
        _check(token)
        merged: Flights = []
        for i, repo in enumerate(self._repos):
            _check(token)
            try:
                merged.extend(repo.list_flights(token))
            except Exception as e:
                logger.warning("Source %d failed to list flights: %s", i, e)
                raise
        return merged

    def find_by_id(
        self, flight_id: str, token: Optional[CancellationToken] = None
    ) -> Flight:
        return self._first_hit(
            lambda repo: repo.find_by_id(flight_id, token),
            token,
            f"id={flight_id!r}",
        )

    def find_by_number(
        self, number: str, token: Optional[CancellationToken] = None
    ) -> Flight:
        return self._first_hit(
            lambda repo: repo.find_by_number(number, token),
            token,
            f"number={number!r}",
        )

    def find_by_passenger(
        self, passenger_name: str, token: Optional[CancellationToken] = None
    ) -> Flights:
        return self._merge_all(
            lambda repo: repo.find_by_passenger(passenger_name, token),
            token,
            f"passenger={passenger_name!r}",
        )

    def find_by_destination(
        self,
        departure: str,
        arrival: str,
        token: Optional[CancellationToken] = None,
    ) -> Flights:
        return self._merge_all(
            lambda repo: repo.find_by_destination(departure, arrival, token),
            token,
            f"destination={departure}->{arrival}",
        )

    def find_by_price(
        self, price: float, token: Optional[CancellationToken] = None
    ) -> Flights:
        return self._merge_all(
            lambda repo: repo.find_by_price(price, token),
            token,
            f"price={price}",
        )
