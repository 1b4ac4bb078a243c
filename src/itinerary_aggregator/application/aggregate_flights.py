"""
FlightAggregator Use Case - Public API for itinerary queries.

This module provides the main entry point for the aggregator. It acts as a
Facade/Factory: every call builds a fresh, request-scoped pipeline
(fetch -> decode -> aggregate -> rank) and discards it afterwards, so no
state is shared between requests.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from src.itinerary_aggregator.adapters.repositories.multi_repo import (
    MultiFlightsRepository,
)
from src.itinerary_aggregator.adapters.repositories.upstream_repo import (
    UpstreamFlightsRepository,
)
from src.itinerary_aggregator.adapters.sources.flight_to_book_source import (
    SOURCE_NAME as FLIGHT_TO_BOOK_SOURCE,
)
from src.itinerary_aggregator.adapters.sources.flight_to_book_source import (
    decode_flight_to_book,
)
from src.itinerary_aggregator.adapters.sources.flights_source import (
    SOURCE_NAME as FLIGHTS_SOURCE,
)
from src.itinerary_aggregator.adapters.sources.flights_source import decode_flights
from src.itinerary_aggregator.adapters.transport.http_fetcher import HttpFetcher
from src.itinerary_aggregator.config import AggregatorConfig
from src.itinerary_aggregator.ports.byte_fetcher import ByteFetcher
from src.itinerary_aggregator.ports.flights_decoder import FlightsDecoder
from src.itinerary_aggregator.schemas.cancellation import CancellationToken
from src.itinerary_aggregator.schemas.flight import Flight, Flights
from src.itinerary_aggregator.services.ranking_service import (
    FlightRankingService,
    SortOrder,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourceSpec:
    """
    One upstream source registration.

    Attributes:
        name: Provenance tag.
        url: Endpoint serving the source payload.
        decoder: Schema decoder for the payload.
    """

    name: str
    url: str
    decoder: FlightsDecoder


def default_sources(config: AggregatorConfig) -> List[SourceSpec]:
    """Both upstreams in priority order: "flights" first, then "flight_to_book"."""
    return [
        SourceSpec(name=FLIGHTS_SOURCE, url=config.flights_url, decoder=decode_flights),
        SourceSpec(
            name=FLIGHT_TO_BOOK_SOURCE,
            url=config.flight_to_book_url,
            decoder=decode_flight_to_book,
        ),
    ]


class FlightAggregator:
    """
    Public API for querying itineraries across all upstream sources.

    Example usage:
        >>> aggregator = FlightAggregator(AggregatorConfig.from_env())
        >>> token = CancellationToken.with_timeout(10.0)
        >>> flight = aggregator.find_by_id("1", token)
        >>> cheapest = aggregator.sort_by_price(token)

    Attributes:
        _config: Upstream locations and timeouts.
        _fetcher: Transport shared across calls (it holds no query state).
        _sources: Registered sources in priority order.
    """

    def __init__(
        self,
        config: AggregatorConfig,
        fetcher: Optional[ByteFetcher] = None,
        sources: Optional[Sequence[SourceSpec]] = None,
    ) -> None:
        """
        Initialize the aggregator with optional custom dependencies.

        Args:
            config: Upstream locations and timeouts.
            fetcher: Custom transport. If None, uses HttpFetcher.
            sources: Custom source registrations. If None, uses both
                default upstreams from `config`.
        """
        self._config = config
        self._fetcher = fetcher or HttpFetcher(timeout=config.request_timeout)
        self._sources = list(sources) if sources is not None else default_sources(config)

        logger.info(
            "FlightAggregator initialized with sources: %s",
            ", ".join(s.name for s in self._sources),
        )

    @property
    def config(self) -> AggregatorConfig:
        return self._config

    @property
    def fetcher(self) -> ByteFetcher:
        return self._fetcher

    def new_token(self) -> CancellationToken:
        """Token carrying the configured per-query deadline."""
        return CancellationToken.with_timeout(self._config.query_timeout)

    def build_repository(self) -> MultiFlightsRepository:
        """Build a fresh request-scoped aggregating repository."""
        return MultiFlightsRepository(
            *(
                UpstreamFlightsRepository(
                    source=spec.name,
                    url=spec.url,
                    fetcher=self._fetcher,
                    decoder=spec.decoder,
                )
                for spec in self._sources
            )
        )

    # -------------------------------
    # Queries
    # -------------------------------

    def list_flights(self, token: Optional[CancellationToken] = None) -> Flights:
        return self.build_repository().list_flights(token)

    def find_by_id(
        self, flight_id: str, token: Optional[CancellationToken] = None
    ) -> Flight:
        return self.build_repository().find_by_id(flight_id, token)

    def find_by_number(
        self, number: str, token: Optional[CancellationToken] = None
    ) -> Flight:
        return self.build_repository().find_by_number(number, token)

    def find_by_passenger(
        self, passenger_name: str, token: Optional[CancellationToken] = None
    ) -> Flights:
        return self.build_repository().find_by_passenger(passenger_name, token)

    def find_by_destination(
        self,
        departure: str,
        arrival: str,
        token: Optional[CancellationToken] = None,
    ) -> Flights:
        return self.build_repository().find_by_destination(departure, arrival, token)

    def find_by_price(
        self, price: float, token: Optional[CancellationToken] = None
    ) -> Flights:
        return self.build_repository().find_by_price(price, token)

    # -------------------------------
    # Orderings
    # -------------------------------

    def sorted_flights(
        self, order: SortOrder, token: Optional[CancellationToken] = None
    ) -> Flights:
        return FlightRankingService(self.build_repository()).rank(order, token)

    def sort_by_price(self, token: Optional[CancellationToken] = None) -> Flights:
        return self.sorted_flights(SortOrder.PRICE, token)

    def sort_by_travel_time(self, token: Optional[CancellationToken] = None) -> Flights:
        return self.sorted_flights(SortOrder.TRAVEL_TIME, token)

    def sort_by_departure_date(
        self, token: Optional[CancellationToken] = None
    ) -> Flights:
        return self.sorted_flights(SortOrder.DEPARTURE_DATE, token)
