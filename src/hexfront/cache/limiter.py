"""Cooldown limiter: admit one event, drop the rest until the cooldown passes."""

from __future__ import annotations

from hexfront.core.types import Clock, system_clock_ms


class CooldownLimiter:
    """Drops events arriving within ``cooldown_ms`` of the last admitted one.

    Dropped events are not deferred or queued. The first event is always
    admitted.

    Args:
        cooldown_ms: Minimum gap between admitted events.
        clock: Epoch-millisecond clock.
    """

    def __init__(self, cooldown_ms: int, clock: Clock | None = None) -> None:
        if cooldown_ms < 0:
            raise ValueError(f"cooldown_ms must be >= 0, got {cooldown_ms}")
        self._cooldown_ms = cooldown_ms
        self._clock = clock or system_clock_ms
        self._last_admitted: int | None = None
        self._dropped = 0

    def try_acquire(self) -> bool:
        """Admit the event now if the cooldown has elapsed."""
        now = self._clock()
        if self._last_admitted is not None and now - self._last_admitted < self._cooldown_ms:
            self._dropped += 1
            return False
        self._last_admitted = now
        return True

    def reset(self) -> None:
        self._last_admitted = None
        self._dropped = 0

    @property
    def cooldown_ms(self) -> int:
        return self._cooldown_ms

    @property
    def last_admitted_at(self) -> int | None:
        return self._last_admitted

    @property
    def dropped_count(self) -> int:
        return self._dropped
