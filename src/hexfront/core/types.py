"""Core type definitions for hexfront."""

import time
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import TypeAlias

Clock: TypeAlias = Callable[[], int]
"""Zero-argument callable returning the current time as integer epoch milliseconds.

Every time-dependent component takes a Clock so tests can drive time explicitly.
"""

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
_ONE_MS = timedelta(milliseconds=1)


def system_clock_ms() -> int:
    """Wall-clock time in integer epoch milliseconds."""
    return time.time_ns() // 1_000_000


def epoch_ms(moment: datetime) -> int:
    """Convert an aware datetime to integer epoch milliseconds.

    Uses timedelta floor division, so the result is exact at millisecond
    resolution (no float rounding).
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return (moment - EPOCH) // _ONE_MS


def from_epoch_ms(value: int) -> datetime:
    """Inverse of epoch_ms."""
    return EPOCH + timedelta(milliseconds=value)
