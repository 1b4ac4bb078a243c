"""
Shared parsing helpers for source decoders.

Both upstreams send JSON arrays of records (optionally wrapped in an
envelope object) and RFC 3339 timestamps. A malformed timestamp anywhere in
a payload fails the whole decode.
"""

import json
import re
from datetime import datetime
from typing import Any, Dict, List

from src.itinerary_aggregator.exceptions import DecodeError

# RFC 3339 date-time: 2024-06-15T09:30:00Z, 2024-06-15T09:30:00.250+02:00
RFC3339_PATTERN = re.compile(
    r"^(?P<base>\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<fraction>\d+))?"
    r"(?P<offset>Z|z|[+-]\d{2}:\d{2})$"
)


def parse_timestamp(value: Any, source: str, field: str) -> datetime:
    """
    Parse an RFC 3339 timestamp into a timezone-aware datetime.

    Only the fixed RFC 3339 layout is accepted; date-only strings, naive
    times and other ISO 8601 variants are rejected.

    Args:
        value: Raw field value from the payload.
        source: Provenance tag, used in the error message.
        field: Field name, used in the error message.

    Returns:
        Timezone-aware datetime.

    Raises:
        DecodeError: If the value is not an RFC 3339 string.

    Examples:
        >>> parse_timestamp("2024-06-15T09:30:00Z", "flights", "departureTime")
        datetime.datetime(2024, 6, 15, 9, 30, tzinfo=datetime.timezone.utc)
    """
    if not isinstance(value, str):
        raise DecodeError(source, f"parse {field}: expected RFC 3339 string, got {value!r}")

    match = RFC3339_PATTERN.match(value)
    if match is None:
        raise DecodeError(source, f"parse {field}: invalid RFC 3339 timestamp {value!r}")

    # Normalize fraction to microseconds and "Z" to an explicit offset so
    # fromisoformat accepts it on every supported interpreter
    fraction = (match.group("fraction") or "")[:6].ljust(6, "0")
    offset = match.group("offset")
    if offset in ("Z", "z"):
        offset = "+00:00"

    try:
        return datetime.fromisoformat(f"{match.group('base')}.{fraction}{offset}")
    except ValueError as e:
        raise DecodeError(source, f"parse {field}: {e}") from e


def load_records(payload: bytes, envelope_key: str, source: str) -> List[Dict[str, Any]]:
    """
    Decode a JSON payload into a list of record objects.

    Accepts either a bare JSON array or an object wrapping the array under
    `envelope_key`.

    Args:
        payload: Raw response body.
        envelope_key: Key of the wrapping object (e.g., 'flights').
        source: Provenance tag, used in error messages.

    Returns:
        List of record dicts in payload order.

    Raises:
        DecodeError: If the body is not JSON or not an array of objects.
    """
    try:
        data = json.loads(payload)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DecodeError(source, f"invalid JSON: {e}") from e

    if isinstance(data, dict) and envelope_key in data:
        data = data[envelope_key]

    if not isinstance(data, list):
        raise DecodeError(
            source, f"expected a JSON array of records, got {type(data).__name__}"
        )

    for i, record in enumerate(data):
        if not isinstance(record, dict):
            raise DecodeError(
                source, f"record {i}: expected an object, got {type(record).__name__}"
            )

    return data
