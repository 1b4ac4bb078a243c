"""
Cancellation signal passed through every query.

A token carries an explicit cancel flag and an optional monotonic deadline.
The aggregator checks it before each unit of work and aborts promptly once
either has fired.
"""

from __future__ import annotations

import threading
import time
from typing import Optional

from src.itinerary_aggregator.exceptions import QueryCancelledError


class CancellationToken:
    """
    Caller-owned cancellation and deadline signal.

    Thread-safe: the boundary may cancel from another thread while the
    pipeline is running.

    Attributes:
        _event: Set once cancel() is called.
        _deadline: time.monotonic() value after which the token is expired.
    """

    def __init__(self, deadline: Optional[float] = None) -> None:
        self._event = threading.Event()
        self._deadline = deadline

    @classmethod
    def with_timeout(cls, seconds: float) -> CancellationToken:
        """Create a token that expires `seconds` from now."""
        if seconds < 0:
            raise ValueError(f"seconds must be >= 0, got {seconds}")
        return cls(deadline=time.monotonic() + seconds)

    @classmethod
    def never(cls) -> CancellationToken:
        """Create a token that only fires on explicit cancel()."""
        return cls()

    def cancel(self) -> None:
        self._event.set()

    @property
    def deadline(self) -> Optional[float]:
        return self._deadline

    @property
    def cancelled(self) -> bool:
        """True once cancel() was called or the deadline has passed."""
        if self._event.is_set():
            return True
        return self._deadline is not None and time.monotonic() >= self._deadline

    def remaining(self) -> Optional[float]:
        """Seconds left until the deadline, or None when there is no deadline."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def raise_if_cancelled(self) -> None:
        """
        Abort the current operation if the token has fired.

        Raises:
            QueryCancelledError: If cancelled or past the deadline.
        """
        if self._event.is_set():
            raise QueryCancelledError("query cancelled")
        if self._deadline is not None and time.monotonic() >= self._deadline:
            raise QueryCancelledError("query deadline exceeded")
