"""
OrderDesk Core Time - Clock
===========================
Source of the created/fulfilled/invoiced timestamps on orders.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Protocol


class Clock(Protocol):
    def now_utc(self) -> datetime:
        ...


class SystemClock:

    def now_utc(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """Always returns the same aware instant; used to pin order timestamps."""

    def __init__(self, instant: datetime) -> None:
        if instant.tzinfo is None:
            raise ValueError("FixedClock needs an aware datetime.")
        self._instant = instant

    def now_utc(self) -> datetime:
        return self._instant
