"""
Tests for the "flights" source decoder.

Tests cover:
- Field mapping into single-segment flights
- Passenger name passthrough
- Schema validation failures (missing columns, bad price)
- Whole-call failure on one malformed timestamp
"""

import json
from datetime import datetime, timezone

import pytest

from src.itinerary_aggregator.adapters.sources.flights_source import (
    SOURCE_NAME,
    decode_flights,
)
from src.itinerary_aggregator.exceptions import DecodeError


def _encode(records) -> bytes:
    return json.dumps(records).encode()


class TestDecodeFlights:
    """Tests for decode_flights."""

    def test_maps_all_fields(self, flights_payload):
        flights = decode_flights(flights_payload)

        assert len(flights) == 2
        first = flights[0]
        assert first.id == "1"
        assert first.status == "confirmed"
        assert first.passenger_name == "John Doe"
        assert first.total.amount == 500.0
        assert first.total.currency == "USD"
        assert first.source == SOURCE_NAME == "flights"

        assert first.num_segments == 1
        seg = first.segments[0]
        assert seg.flight_number == "AA100"
        assert seg.departure == "JFK"
        assert seg.arrival == "LAX"
        assert seg.depart_time == datetime(2025, 3, 10, 8, 0, tzinfo=timezone.utc)
        assert seg.arrive_time == datetime(2025, 3, 10, 13, 0, tzinfo=timezone.utc)

    def test_preserves_payload_order(self, flights_payload):
        flights = decode_flights(flights_payload)
        assert [f.id for f in flights] == ["1", "3"]

    def test_price_is_float(self, flights_payload):
        flights = decode_flights(flights_payload)
        assert isinstance(flights[1].total.amount, float)
        assert flights[1].total.amount == 420.5

    def test_passenger_name_used_verbatim(self, flights_records):
        flights_records[0]["passengerName"] = "  John Doe "

        flights = decode_flights(_encode(flights_records))

        assert flights[0].passenger_name == "  John Doe "

    def test_accepts_envelope(self, flights_records):
        flights = decode_flights(_encode({"flights": flights_records}))
        assert len(flights) == 2

    def test_empty_payload(self):
        assert decode_flights(b"[]") == []

    def test_missing_required_column(self, flights_records):
        for record in flights_records:
            del record["bookingId"]

        with pytest.raises(DecodeError, match="schema validation failed"):
            decode_flights(_encode(flights_records))

    def test_missing_price_in_one_record(self, flights_records):
        del flights_records[1]["price"]

        with pytest.raises(DecodeError) as exc_info:
            decode_flights(_encode(flights_records))
        assert exc_info.value.source == "flights"

    def test_non_numeric_price(self, flights_records):
        flights_records[0]["price"] = "five hundred"

        with pytest.raises(DecodeError):
            decode_flights(_encode(flights_records))

    def test_single_bad_timestamp_fails_whole_decode(self, flights_records):
        """No partial ingestion: the valid first record is not returned."""
        flights_records[1]["arrivalTime"] = "2025-03-11 15:45"

        with pytest.raises(DecodeError, match="arrivalTime"):
            decode_flights(_encode(flights_records))

    def test_invalid_json(self):
        with pytest.raises(DecodeError, match="invalid JSON"):
            decode_flights(b"not json")

    def test_integer_prices_widen_to_float(self, flights_records):
        flights_records[0]["price"] = 500
        flights_records[1]["price"] = 420

        flights = decode_flights(_encode(flights_records))

        assert [f.total.amount for f in flights] == [500.0, 420.0]
        assert all(isinstance(f.total.amount, float) for f in flights)


class TestDecodeFlightsRejectsMistypedFields:
    """Mistyped values fail validation instead of being coerced."""

    @pytest.mark.parametrize(
        "field,value",
        [
            ("price", True),
            ("price", "500"),
            ("bookingId", 7),
            ("passengerName", {"a": 1}),
            ("departureAirport", ["JFK"]),
        ],
    )
    def test_rejected(self, flights_records, field, value):
        flights_records[0][field] = value

        with pytest.raises(DecodeError, match="schema validation failed"):
            decode_flights(_encode(flights_records))

    def test_all_boolean_prices(self, flights_records):
        for record in flights_records:
            record["price"] = False

        with pytest.raises(DecodeError):
            decode_flights(_encode(flights_records))

    def test_all_integer_booking_ids(self, flights_records):
        for i, record in enumerate(flights_records):
            record["bookingId"] = i

        with pytest.raises(DecodeError):
            decode_flights(_encode(flights_records))
