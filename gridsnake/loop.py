"""
loop.py — Tick scheduler.

Variable-cadence stepping sampled once per rendered frame: a tick is due
when at least one period has passed since the last tick. At most one tick
fires per frame and time beyond that is dropped, never caught up.
"""

from .config import BOOST_DIVISOR


class TickScheduler:
    def __init__(self, base_period_ms: int):
        self.base_period_ms = base_period_ms
        self.boosted: bool = False
        self.last_tick_ms: int = 0

    @property
    def period(self) -> float:
        if self.boosted:
            return self.base_period_ms / BOOST_DIVISOR
        return float(self.base_period_ms)

    def set_base_period(self, period_ms: int) -> None:
        self.base_period_ms = period_ms

    def set_boost(self, held: bool) -> None:
        self.boosted = held

    def restart(self, now_ms: int) -> None:
        """Next tick becomes due one full period after `now_ms`."""
        self.last_tick_ms = now_ms

    def due(self, now_ms: int) -> bool:
        """True (and the clock is re-armed) when a tick should fire this frame."""
        if now_ms - self.last_tick_ms >= self.period:
            self.last_tick_ms = now_ms
            return True
        return False
