"""
Shared fixtures for itinerary aggregator tests.

Provides canonical flight factories and raw upstream payloads for both
source schemas.
"""

import json
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional

import pytest

from src.itinerary_aggregator.schemas.flight import Flight, Segment, Total

BASE_TIME = datetime(2025, 3, 10, 8, 0, tzinfo=timezone.utc)


@pytest.fixture
def base_time() -> datetime:
    return BASE_TIME


@pytest.fixture
def make_segment() -> Callable[..., Segment]:
    """Factory for segments departing `depart_offset_h` hours after BASE_TIME."""

    def _make(
        flight_number: str = "AA100",
        departure: str = "JFK",
        arrival: str = "LAX",
        depart_offset_h: float = 0.0,
        duration_h: float = 5.0,
    ) -> Segment:
        depart = BASE_TIME + timedelta(hours=depart_offset_h)
        return Segment(
            flight_number=flight_number,
            departure=departure,
            arrival=arrival,
            depart_time=depart,
            arrive_time=depart + timedelta(hours=duration_h),
        )

    return _make


@pytest.fixture
def make_flight(make_segment) -> Callable[..., Flight]:
    """Factory for flights with sensible defaults."""

    def _make(
        id: str = "1",
        price: float = 500.0,
        passenger_name: str = "John Doe",
        source: str = "flights",
        segments: Optional[List[Segment]] = None,
        status: str = "confirmed",
    ) -> Flight:
        if segments is None:
            segments = [make_segment()]
        return Flight.create(
            id=id,
            status=status,
            passenger_name=passenger_name,
            segments=segments,
            total=Total(amount=price, currency="USD"),
            source=source,
        )

    return _make


@pytest.fixture
def flights_records() -> list:
    """Flat records as served by the "flights" upstream."""
    return [
        {
            "bookingId": "1",
            "status": "confirmed",
            "passengerName": "John Doe",
            "flightNumber": "AA100",
            "departureAirport": "JFK",
            "arrivalAirport": "LAX",
            "departureTime": "2025-03-10T08:00:00Z",
            "arrivalTime": "2025-03-10T13:00:00Z",
            "price": 500.0,
            "currency": "USD",
        },
        {
            "bookingId": "3",
            "status": "pending",
            "passengerName": "Jane Roe",
            "flightNumber": "DL300",
            "departureAirport": "JFK",
            "arrivalAirport": "SFO",
            "departureTime": "2025-03-11T09:30:00+02:00",
            "arrivalTime": "2025-03-11T15:45:00+02:00",
            "price": 420.5,
            "currency": "USD",
        },
    ]


@pytest.fixture
def flights_payload(flights_records) -> bytes:
    return json.dumps(flights_records).encode()


@pytest.fixture
def flight_to_book_records() -> list:
    """Nested records as served by the "flight_to_book" upstream."""
    return [
        {
            "reference": "2",
            "status": "confirmed",
            "traveler": {"firstName": "Alice", "lastName": "Smith"},
            "segments": [
                {
                    "flight": {
                        "number": "UA200",
                        "from": "JFK",
                        "to": "ORD",
                        "depart": "2025-03-09T07:00:00Z",
                        "arrive": "2025-03-09T09:30:00Z",
                    }
                },
                {
                    "flight": {
                        "number": "UA201",
                        "from": "ORD",
                        "to": "SFO",
                        "depart": "2025-03-09T11:00:00Z",
                        "arrive": "2025-03-09T14:00:00Z",
                    }
                },
            ],
            "total": {"amount": 300.0, "currency": "USD"},
        },
    ]


@pytest.fixture
def flight_to_book_payload(flight_to_book_records) -> bytes:
    return json.dumps(flight_to_book_records).encode()
