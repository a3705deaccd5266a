"""
OrderDesk Core Time - Public API
================================
Injectable clock for order timestamps.
"""

from core.time.clock import Clock, FixedClock, SystemClock

__all__ = [
    "Clock",
    "FixedClock",
    "SystemClock",
]
