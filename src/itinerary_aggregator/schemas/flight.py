"""
Canonical itinerary records.

Every upstream schema is normalized into these immutable value records.
They are built fresh from fetched bytes on every query and never outlive it.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import List, Sequence, Tuple


@dataclass(frozen=True)
class Total:
    """Price of an itinerary in a single currency."""

    amount: float
    currency: str


@dataclass(frozen=True)
class Segment:
    """
    One flown leg of an itinerary.

    Attributes:
        flight_number: Carrier flight number (e.g., 'AA100').
        departure: Departure airport IATA code.
        arrival: Arrival airport IATA code.
        depart_time: Timezone-aware departure timestamp.
        arrive_time: Timezone-aware arrival timestamp.
    """

    flight_number: str
    departure: str
    arrival: str
    depart_time: datetime
    arrive_time: datetime


@dataclass(frozen=True)
class Flight:
    """
    Immutable representation of one passenger booking.

    Segments are ordered by travel sequence. The id is only unique within
    its source, so (source, id) is the real identity of a record.

    Attributes:
        id: Booking identifier assigned by the upstream source.
        status: Booking status as reported upstream.
        passenger_name: Passenger name built by the source adapter.
        segments: Legs in travel order.
        total: Total price.
        source: Provenance tag of the upstream this record came from.
    """

    id: str
    status: str
    passenger_name: str
    segments: Tuple[Segment, ...]
    total: Total
    source: str

    @classmethod
    def create(
        cls,
        id: str,
        status: str,
        passenger_name: str,
        segments: Sequence[Segment],
        total: Total,
        source: str,
    ) -> "Flight":
        """
        Factory method that freezes the segment sequence.

        Args:
            id: Booking identifier.
            status: Booking status.
            passenger_name: Passenger name.
            segments: Legs in travel order (converted to a tuple).
            total: Total price.
            source: Provenance tag.

        Returns:
            New Flight instance.
        """
        return cls(
            id=id,
            status=status,
            passenger_name=passenger_name,
            segments=tuple(segments),
            total=total,
            source=source,
        )

    @property
    def identity(self) -> Tuple[str, str]:
        """Cross-source identity key."""
        return (self.source, self.id)

    @property
    def num_segments(self) -> int:
        return len(self.segments)

    @property
    def departure_time(self) -> datetime:
        """Effective departure (first segment)."""
        if not self.segments:
            raise ValueError("Flight has no segments")
        return self.segments[0].depart_time

    @property
    def arrival_time(self) -> datetime:
        """Effective arrival (last segment)."""
        if not self.segments:
            raise ValueError("Flight has no segments")
        return self.segments[-1].arrive_time


# Type alias for clarity in function signatures
Flights = List[Flight]
