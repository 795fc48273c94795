"""Deterministic clocks for run headers."""

from collections.abc import Callable
from datetime import datetime, timedelta, timezone

T0 = datetime(2024, 1, 1, 0, 0, 0, tzinfo=timezone.utc)


def ticking_clock(
    start: datetime = T0, step: timedelta = timedelta(seconds=1)
) -> Callable[[], datetime]:
    """Return a clock yielding start, start+step, start+2*step, ..."""
    state = {"now": start - step}

    def clock() -> datetime:
        state["now"] += step
        return state["now"]

    return clock
