"""
Flights source decoder - flat per-leg records to canonical flights.

The "flights" upstream sends one flat record per booking, each describing a
single leg. The batch is validated against FlightsRecordSchema at the
boundary and every record becomes a one-segment Flight.
"""

import logging

import pandas as pd
import pandera as pa
from pandera.typing import Series

from src.itinerary_aggregator.adapters.sources.parsing import (
    load_records,
    parse_timestamp,
)
from src.itinerary_aggregator.exceptions import DecodeError
from src.itinerary_aggregator.schemas.flight import Flight, Flights, Segment, Total

logger = logging.getLogger(__name__)

SOURCE_NAME = "flights"


class FlightsRecordSchema(pa.DataFrameModel):
    """
    Required fields of a flat "flights" record.

    Columns use the upstream camelCase names via aliases. Extra columns
    are allowed and ignored. Values are not coerced: a mistyped field
    fails validation.
    """

    booking_id: Series[str] = pa.Field(
        alias="bookingId",
        nullable=False,
        description="Booking identifier, unique within this source",
    )
    status: Series[str] = pa.Field(
        nullable=False,
        description="Booking status",
    )
    passenger_name: Series[str] = pa.Field(
        alias="passengerName",
        nullable=False,
        description="Passenger name, used verbatim",
    )
    flight_number: Series[str] = pa.Field(
        alias="flightNumber",
        nullable=False,
        description="Carrier flight number",
    )
    departure_airport: Series[str] = pa.Field(
        alias="departureAirport",
        nullable=False,
        description="Departure airport IATA code",
    )
    arrival_airport: Series[str] = pa.Field(
        alias="arrivalAirport",
        nullable=False,
        description="Arrival airport IATA code",
    )
    departure_time: Series[str] = pa.Field(
        alias="departureTime",
        nullable=False,
        description="RFC 3339 departure timestamp",
    )
    arrival_time: Series[str] = pa.Field(
        alias="arrivalTime",
        nullable=False,
        description="RFC 3339 arrival timestamp",
    )
    price: Series[float] = pa.Field(
        nullable=False,
        description="Total price",
    )
    currency: Series[str] = pa.Field(
        nullable=False,
        description="Currency code",
    )

    class Config:
        strict = False
        coerce = False
        name = "FlightsRecordSchema"
        description = "Flat per-leg booking record from the flights upstream"


def _widen_integer_prices(df: pd.DataFrame) -> pd.DataFrame:
    """JSON integer prices load as int64; widen them to float before validation."""
    if "price" in df.columns and pd.api.types.is_integer_dtype(df["price"]):
        df = df.assign(price=df["price"].astype(float))
    return df


def decode_flights(payload: bytes) -> Flights:
    """
    Decode a "flights" payload into canonical flights.

    Args:
        payload: Raw JSON body, an array of flat records or
            {"flights": [...]}.

    Returns:
        One single-segment Flight per record, in payload order,
        tagged with source "flights".

    Raises:
        DecodeError: On invalid JSON, a missing, null or mistyped required
            field (including a string or boolean price) or any malformed
            timestamp.
    """
    records = load_records(payload, SOURCE_NAME, SOURCE_NAME)
    if not records:
        return []

    try:
        df = FlightsRecordSchema.validate(
            _widen_integer_prices(pd.DataFrame.from_records(records))
        )
    except (pa.errors.SchemaError, pa.errors.SchemaErrors) as e:
        raise DecodeError(SOURCE_NAME, f"schema validation failed: {e}") from e

    out: Flights = []
    for row in df.to_dict("records"):
        depart = parse_timestamp(row["departureTime"], SOURCE_NAME, "departureTime")
        arrive = parse_timestamp(row["arrivalTime"], SOURCE_NAME, "arrivalTime")

        segment = Segment(
            flight_number=str(row["flightNumber"]),
            departure=str(row["departureAirport"]),
            arrival=str(row["arrivalAirport"]),
            depart_time=depart,
            arrive_time=arrive,
        )
        out.append(
            Flight.create(
                id=str(row["bookingId"]),
                status=str(row["status"]),
                passenger_name=str(row["passengerName"]),
                segments=[segment],
                total=Total(amount=float(row["price"]), currency=str(row["currency"])),
                source=SOURCE_NAME,
            )
        )

    logger.info("Decoded %d flights from %s source", len(out), SOURCE_NAME)
    return out
