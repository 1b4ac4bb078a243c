"""
Upstream Flights Repository - fetch-on-first-use source repository.

Wraps one upstream (URL + decoder). The first query fetches and decodes the
payload once; later queries in the same request reuse the decoded store.
Sources the aggregator never consults are never fetched.
"""

from __future__ import annotations

import logging
from typing import Optional

from src.itinerary_aggregator.adapters.repositories.source_repo import (
    SourceFlightsRepository,
)
from src.itinerary_aggregator.ports.byte_fetcher import ByteFetcher
from src.itinerary_aggregator.ports.flights_decoder import FlightsDecoder
from src.itinerary_aggregator.schemas.cancellation import CancellationToken
from src.itinerary_aggregator.schemas.flight import Flight, Flights

logger = logging.getLogger(__name__)


class UpstreamFlightsRepository:
    """
    Request-scoped repository that loads its source lazily.

    Not thread-safe; one instance belongs to one request pipeline.

    Attributes:
        _source: Provenance tag of the upstream.
        _url: Endpoint to fetch.
        _fetcher: Transport used for the single fetch.
        _decoder: Schema decoder for this upstream.
        _store: Decoded repository, None until first use.
    """

    def __init__(
        self,
        source: str,
        url: str,
        fetcher: ByteFetcher,
        decoder: FlightsDecoder,
    ) -> None:
        self._source = source
        self._url = url
        self._fetcher = fetcher
        self._decoder = decoder
        self._store: Optional[SourceFlightsRepository] = None

    @property
    def source(self) -> str:
        return self._source

    @property
    def is_loaded(self) -> bool:
        return self._store is not None

    def _load(self, token: Optional[CancellationToken]) -> SourceFlightsRepository:
        """
        Fetch and decode the upstream payload on first use.

        Raises:
            TransportError: If the fetch fails.
            DecodeError: If the payload does not decode.
        """
        if self._store is None:
            payload = self._fetcher.fetch(self._url, token)
            self._store = SourceFlightsRepository.from_payload(
                payload, self._decoder, source=self._source
            )
            logger.debug("Loaded %d flights from %s", len(self._store), self._source)
        return self._store

    def list_flights(self, token: Optional[CancellationToken] = None) -> Flights:
        return self._load(token).list_flights(token)

    def find_by_id(
        self, flight_id: str, token: Optional[CancellationToken] = None
    ) -> Flight:
        return self._load(token).find_by_id(flight_id, token)

    def find_by_number(
        self, number: str, token: Optional[CancellationToken] = None
    ) -> Flight:
        return self._load(token).find_by_number(number, token)

    def find_by_passenger(
        self, passenger_name: str, token: Optional[CancellationToken] = None
    ) -> Flights:
        return self._load(token).find_by_passenger(passenger_name, token)

    def find_by_destination(
        self,
        departure: str,
        arrival: str,
        token: Optional[CancellationToken] = None,
    ) -> Flights:
        return self._load(token).find_by_destination(departure, arrival, token)

    def find_by_price(
        self, price: float, token: Optional[CancellationToken] = None
    ) -> Flights:
        return self._load(token).find_by_price(price, token)
