"""Tests for the cooldown limiter."""

import pytest

from hexfront.cache import CooldownLimiter


def test_first_event_always_admitted(clock) -> None:
    limiter = CooldownLimiter(5_000, clock)
    assert limiter.try_acquire()
    assert limiter.last_admitted_at == clock()


def test_events_inside_cooldown_dropped(clock) -> None:
    limiter = CooldownLimiter(5_000, clock)
    limiter.try_acquire()

    clock.advance(4_999)
    assert not limiter.try_acquire()
    assert limiter.dropped_count == 1

    clock.advance(1)
    assert limiter.try_acquire()


def test_dropped_events_do_not_extend_cooldown(clock) -> None:
    limiter = CooldownLimiter(5_000, clock)
    limiter.try_acquire()
    for _ in range(4):
        clock.advance(1_000)
        limiter.try_acquire()

    clock.advance(1_000)
    assert limiter.try_acquire()


def test_reset(clock) -> None:
    limiter = CooldownLimiter(5_000, clock)
    limiter.try_acquire()
    limiter.try_acquire()

    limiter.reset()

    assert limiter.try_acquire()
    assert limiter.dropped_count == 0


def test_zero_cooldown_admits_everything(clock) -> None:
    limiter = CooldownLimiter(0, clock)
    assert all(limiter.try_acquire() for _ in range(3))


def test_negative_cooldown_rejected() -> None:
    with pytest.raises(ValueError):
        CooldownLimiter(-1)
