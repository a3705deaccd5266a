from __future__ import annotations

from datetime import datetime, timezone

import pytest

from core.time import FixedClock, SystemClock


def test_system_clock_is_utc_aware() -> None:
    assert SystemClock().now_utc().tzinfo is timezone.utc


def test_fixed_clock_pins_the_instant() -> None:
    instant = datetime(2026, 2, 1, 9, 30, tzinfo=timezone.utc)
    clock = FixedClock(instant)
    assert clock.now_utc() == instant
    assert clock.now_utc() == clock.now_utc()


def test_fixed_clock_rejects_naive_datetime() -> None:
    with pytest.raises(ValueError):
        FixedClock(datetime(2026, 2, 1, 9, 30))
