"""
Flight-to-book source decoder - nested booking records to canonical flights.

The "flight_to_book" upstream nests the traveler, the ordered legs and the
price in sub-objects. Records are validated with pydantic models and the
legs are kept in upstream order.
"""

import logging
from typing import List

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictStr, ValidationError

from src.itinerary_aggregator.adapters.sources.parsing import (
    load_records,
    parse_timestamp,
)
from src.itinerary_aggregator.exceptions import DecodeError
from src.itinerary_aggregator.schemas.flight import Flight, Flights, Segment, Total

logger = logging.getLogger(__name__)

SOURCE_NAME = "flight_to_book"


# -------------------------------
# Pydantic models for the upstream shape
# -------------------------------
# Strict field types: a mistyped value is rejected, never coerced.

class Traveler(BaseModel):
    first_name: StrictStr = Field(alias="firstName")
    last_name: StrictStr = Field(alias="lastName")


class FlightLeg(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    number: StrictStr
    from_: StrictStr = Field(alias="from")
    to: StrictStr
    depart: StrictStr
    arrive: StrictStr


class SegmentEntry(BaseModel):
    flight: FlightLeg


class BookingTotal(BaseModel):
    amount: StrictFloat
    currency: StrictStr


class FlightToBookRecord(BaseModel):
    reference: StrictStr
    status: StrictStr
    traveler: Traveler
    segments: List[SegmentEntry] = Field(default_factory=list)
    total: BookingTotal


def passenger_name(traveler: Traveler) -> str:
    """Join first and last name with a single space, trimmed."""
    return f"{traveler.first_name.strip()} {traveler.last_name.strip()}".strip()


def decode_flight_to_book(payload: bytes) -> Flights:
    """
    Decode a "flight_to_book" payload into canonical flights.

    Args:
        payload: Raw JSON body, an array of nested records or
            {"flight_to_book": [...]}.

    Returns:
        One Flight per record, in payload order, tagged with source
        "flight_to_book".

    Raises:
        DecodeError: On invalid JSON, a missing or mistyped required field
            or any malformed timestamp.
    """
    records = load_records(payload, SOURCE_NAME, SOURCE_NAME)

    out: Flights = []
    for i, raw in enumerate(records):
        try:
            record = FlightToBookRecord.model_validate(raw)
        except ValidationError as e:
            raise DecodeError(SOURCE_NAME, f"record {i}: {e}") from e

        segments = []
        for entry in record.segments:
            leg = entry.flight
            segments.append(
                Segment(
                    flight_number=leg.number,
                    departure=leg.from_,
                    arrival=leg.to,
                    depart_time=parse_timestamp(leg.depart, SOURCE_NAME, "depart"),
                    arrive_time=parse_timestamp(leg.arrive, SOURCE_NAME, "arrive"),
                )
            )

        out.append(
            Flight.create(
                id=record.reference,
                status=record.status,
                passenger_name=passenger_name(record.traveler),
                segments=segments,
                total=Total(
                    amount=float(record.total.amount), currency=record.total.currency
                ),
                source=SOURCE_NAME,
            )
        )

    logger.info("Decoded %d flights from %s source", len(out), SOURCE_NAME)
    return out
