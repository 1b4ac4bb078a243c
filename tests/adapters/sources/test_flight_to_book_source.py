"""
Tests for the "flight_to_book" source decoder.

Tests cover:
- Nested field mapping and segment order
- Trimmed "First Last" passenger names
- Required-field validation
- Whole-call failure on one malformed timestamp
"""

import json

import pytest

from src.itinerary_aggregator.adapters.sources.flight_to_book_source import (
    SOURCE_NAME,
    Traveler,
    decode_flight_to_book,
    passenger_name,
)
from src.itinerary_aggregator.exceptions import DecodeError


def _encode(records) -> bytes:
    return json.dumps(records).encode()


class TestPassengerName:
    """Tests for the flight_to_book passenger name policy."""

    def test_joins_with_space(self):
        traveler = Traveler(firstName="Alice", lastName="Smith")
        assert passenger_name(traveler) == "Alice Smith"

    def test_trims_parts(self):
        traveler = Traveler(firstName="  Alice ", lastName=" Smith  ")
        assert passenger_name(traveler) == "Alice Smith"

    def test_missing_last_name_has_no_trailing_space(self):
        traveler = Traveler(firstName="Alice", lastName="")
        assert passenger_name(traveler) == "Alice"


class TestDecodeFlightToBook:
    """Tests for decode_flight_to_book."""

    def test_maps_nested_fields(self, flight_to_book_payload):
        flights = decode_flight_to_book(flight_to_book_payload)

        assert len(flights) == 1
        flight = flights[0]
        assert flight.id == "2"
        assert flight.status == "confirmed"
        assert flight.passenger_name == "Alice Smith"
        assert flight.total.amount == 300.0
        assert flight.total.currency == "USD"
        assert flight.source == SOURCE_NAME == "flight_to_book"

    def test_keeps_segment_order(self, flight_to_book_payload):
        flight = decode_flight_to_book(flight_to_book_payload)[0]

        assert [s.flight_number for s in flight.segments] == ["UA200", "UA201"]
        assert flight.segments[0].departure == "JFK"
        assert flight.segments[0].arrival == "ORD"
        assert flight.segments[1].departure == "ORD"
        assert flight.segments[1].arrival == "SFO"

    def test_accepts_envelope(self, flight_to_book_records):
        flights = decode_flight_to_book(_encode({"flight_to_book": flight_to_book_records}))
        assert len(flights) == 1

    def test_record_without_segments(self, flight_to_book_records):
        del flight_to_book_records[0]["segments"]

        flight = decode_flight_to_book(_encode(flight_to_book_records))[0]

        assert flight.segments == ()

    def test_missing_reference(self, flight_to_book_records):
        del flight_to_book_records[0]["reference"]

        with pytest.raises(DecodeError, match="record 0"):
            decode_flight_to_book(_encode(flight_to_book_records))

    def test_missing_traveler(self, flight_to_book_records):
        del flight_to_book_records[0]["traveler"]

        with pytest.raises(DecodeError) as exc_info:
            decode_flight_to_book(_encode(flight_to_book_records))
        assert exc_info.value.source == "flight_to_book"

    def test_missing_total_amount(self, flight_to_book_records):
        del flight_to_book_records[0]["total"]["amount"]

        with pytest.raises(DecodeError):
            decode_flight_to_book(_encode(flight_to_book_records))

    def test_single_bad_timestamp_fails_whole_decode(self, flight_to_book_records):
        good = json.loads(json.dumps(flight_to_book_records[0]))
        good["reference"] = "4"
        flight_to_book_records[0]["segments"][1]["flight"]["depart"] = "yesterday"
        flight_to_book_records.insert(0, good)

        with pytest.raises(DecodeError, match="depart"):
            decode_flight_to_book(_encode(flight_to_book_records))

    def test_integer_amount_widens_to_float(self, flight_to_book_records):
        flight_to_book_records[0]["total"]["amount"] = 300

        flight = decode_flight_to_book(_encode(flight_to_book_records))[0]

        assert flight.total.amount == 300.0
        assert isinstance(flight.total.amount, float)


class TestDecodeFlightToBookRejectsMistypedFields:
    """Mistyped values fail validation instead of being coerced."""

    @pytest.mark.parametrize("amount", ["500", True, None])
    def test_mistyped_amount(self, flight_to_book_records, amount):
        flight_to_book_records[0]["total"]["amount"] = amount

        with pytest.raises(DecodeError, match="record 0"):
            decode_flight_to_book(_encode(flight_to_book_records))

    def test_numeric_reference(self, flight_to_book_records):
        flight_to_book_records[0]["reference"] = 2

        with pytest.raises(DecodeError):
            decode_flight_to_book(_encode(flight_to_book_records))

    def test_object_first_name(self, flight_to_book_records):
        flight_to_book_records[0]["traveler"]["firstName"] = {"a": 1}

        with pytest.raises(DecodeError):
            decode_flight_to_book(_encode(flight_to_book_records))

    def test_numeric_flight_number(self, flight_to_book_records):
        flight_to_book_records[0]["segments"][0]["flight"]["number"] = 200

        with pytest.raises(DecodeError):
            decode_flight_to_book(_encode(flight_to_book_records))
