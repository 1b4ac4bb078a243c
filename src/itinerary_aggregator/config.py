"""
Configuration for the itinerary aggregator.

Configuration is an explicit frozen value passed into constructors. Nothing
in the core reads the environment or holds process-wide settings.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

FLIGHTS_ENDPOINT = "flights"
FLIGHT_TO_BOOK_ENDPOINT = "flight_to_book"


@dataclass(frozen=True)
class AggregatorConfig:
    """
    Upstream locations and timeouts.

    Attributes:
        flights_base_url: Base URL of the "flights" upstream, with trailing slash.
        flight_to_book_base_url: Base URL of the "flight_to_book" upstream.
        request_timeout: Per-fetch timeout in seconds.
        query_timeout: Deadline for a whole inbound query in seconds.
        server_port: Port the HTTP boundary listens on.
    """

    flights_base_url: str = ""
    flight_to_book_base_url: str = ""
    request_timeout: float = 5.0
    query_timeout: float = 10.0
    server_port: int = 8080

    def __post_init__(self) -> None:
        """Validate timeouts after initialization."""
        if self.request_timeout <= 0:
            raise ValueError(f"request_timeout must be > 0, got {self.request_timeout}")
        if self.query_timeout <= 0:
            raise ValueError(f"query_timeout must be > 0, got {self.query_timeout}")

    @property
    def flights_url(self) -> str:
        """Endpoint serving flat per-leg records."""
        return self.flights_base_url + FLIGHTS_ENDPOINT

    @property
    def flight_to_book_url(self) -> str:
        """Endpoint serving nested booking records."""
        return self.flight_to_book_base_url + FLIGHT_TO_BOOK_ENDPOINT

    @classmethod
    def from_env(
        cls,
        env: Optional[Mapping[str, str]] = None,
        dotenv_path: Optional[str] = None,
    ) -> AggregatorConfig:
        """
        Build configuration from environment variables.

        Loads a .env file first (existing variables win), then reads
        JSERVER1_NAME/JSERVER1_PORT for the "flights" upstream,
        JSERVER2_NAME/JSERVER2_PORT for the "flight_to_book" upstream,
        SERVER_PORT, REQUEST_TIMEOUT and QUERY_TIMEOUT.

        Args:
            env: Mapping to read instead of os.environ (no .env loading).
            dotenv_path: Explicit .env path. If None, python-dotenv searches.

        Returns:
            Validated AggregatorConfig. A base URL stays empty when its
            host or port variable is missing.
        """
        if env is None:
            load_dotenv(dotenv_path)
            env = os.environ

        config = cls(
            flights_base_url=_base_url(env.get("JSERVER1_NAME"), env.get("JSERVER1_PORT")),
            flight_to_book_base_url=_base_url(
                env.get("JSERVER2_NAME"), env.get("JSERVER2_PORT")
            ),
            request_timeout=float(env.get("REQUEST_TIMEOUT") or cls.request_timeout),
            query_timeout=float(env.get("QUERY_TIMEOUT") or cls.query_timeout),
            server_port=int(env.get("SERVER_PORT") or cls.server_port),
        )

        logger.info("flights upstream: '%s'", config.flights_base_url)
        logger.info("flight_to_book upstream: '%s'", config.flight_to_book_base_url)
        if not config.flights_base_url or not config.flight_to_book_base_url:
            logger.warning("Upstream URLs not fully configured - fetches will fail")

        return config


def _base_url(name: Optional[str], port: Optional[str]) -> str:
    if not name or not port:
        return ""
    return f"http://{name}:{port}/"
