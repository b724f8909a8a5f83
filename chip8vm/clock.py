"""Fixed-period catch-up scheduling.

The last-fired timestamp is only ever advanced by whole periods, never reset
to `now`, so the schedule keeps its phase however irregularly it is polled.
"""

from typing import Callable, Optional


def catch_up(period: float, last: float, now: float) -> tuple[int, float]:
    """Number of whole periods elapsed since `last`, and the advanced timestamp."""
    if now - last < period:
        return 0, last
    count = int((now - last) // period)
    return count, last + count * period


class PeriodicScheduler:
    """Fires a callback once per elapsed period.

    Args:
        period: Period in seconds.
        max_catch_up: Optional cap on callbacks fired by a single `advance`.
            Whole periods beyond the cap are skipped without firing.
    """

    def __init__(self, period: float, max_catch_up: Optional[int] = None):
        if period <= 0:
            raise ValueError(f"Scheduler period must be positive, got {period}")
        if max_catch_up is not None and max_catch_up < 1:
            raise ValueError(f"max_catch_up must be at least 1, got {max_catch_up}")
        self.period = period
        self.max_catch_up = max_catch_up
        self.last: Optional[float] = None
        self.dropped = 0

    @classmethod
    def from_frequency(cls, frequency: float, max_catch_up: Optional[int] = None) -> "PeriodicScheduler":
        if frequency <= 0:
            raise ValueError(f"Frequency must be positive, got {frequency}")
        return cls(1.0 / frequency, max_catch_up)

    def reset(self) -> None:
        self.last = None
        self.dropped = 0

    def advance(self, now: float, callback: Callable[[], None]) -> int:
        """Run `callback` for every whole period since the last fire.

        An exception from `callback` propagates as is; periods completed
        before it stay consumed.
        """
        if self.last is None:
            callback()
            self.last = now
            return 1

        fired = 0
        while now - self.last >= self.period:
            if self.max_catch_up is not None and fired >= self.max_catch_up:
                skipped, self.last = catch_up(self.period, self.last, now)
                self.dropped += skipped
                break
            callback()
            self.last += self.period
            fired += 1
        return fired
