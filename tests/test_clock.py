"""Tests for the fixed-period catch-up scheduler."""

import pytest
from chip8vm import PeriodicScheduler, catch_up


class Counter:
    def __init__(self, fail_at=None):
        self.calls = 0
        self.fail_at = fail_at

    def __call__(self):
        if self.fail_at is not None and self.calls == self.fail_at:
            raise RuntimeError("boom")
        self.calls += 1


class TestCatchUp:

    def test_no_period_elapsed(self):
        assert catch_up(1.0, 10.0, 10.5) == (0, 10.0)

    def test_whole_periods(self):
        assert catch_up(1.0, 10.0, 13.5) == (3, 13.0)

    def test_exact_boundary(self):
        assert catch_up(0.5, 0.0, 1.0) == (2, 1.0)


class TestPeriodicScheduler:

    def test_first_advance_fires_once(self):
        counter = Counter()
        scheduler = PeriodicScheduler(1.0)
        assert scheduler.advance(10.0, counter) == 1
        assert counter.calls == 1
        assert scheduler.last == 10.0

    def test_fires_floor_of_elapsed_periods(self):
        counter = Counter()
        scheduler = PeriodicScheduler(1.0)
        scheduler.advance(10.0, counter)
        assert scheduler.advance(13.5, counter) == 3
        assert counter.calls == 4
        # Half a period stays banked for the next call
        assert scheduler.last == 13.0
        assert scheduler.advance(14.0, counter) == 1

    def test_phase_preserved_across_irregular_polls(self):
        counter = Counter()
        scheduler = PeriodicScheduler(0.25)
        scheduler.advance(0.0, counter)
        for now in (0.1, 0.3, 0.45, 0.8, 1.0):
            scheduler.advance(now, counter)
        assert counter.calls == 5
        assert scheduler.last == 1.0

    def test_no_fire_before_period(self):
        counter = Counter()
        scheduler = PeriodicScheduler(1.0)
        scheduler.advance(0.0, counter)
        assert scheduler.advance(0.99, counter) == 0
        assert counter.calls == 1

    def test_failure_propagates_and_keeps_progress(self):
        counter = Counter(fail_at=3)
        scheduler = PeriodicScheduler(1.0)
        scheduler.advance(0.0, counter)
        with pytest.raises(RuntimeError):
            scheduler.advance(5.0, counter)
        # Two periods completed before the failing one
        assert counter.calls == 3
        assert scheduler.last == 2.0

    def test_first_call_failure_leaves_scheduler_unstarted(self):
        scheduler = PeriodicScheduler(1.0)
        with pytest.raises(RuntimeError):
            scheduler.advance(0.0, Counter(fail_at=0))
        assert scheduler.last is None

    def test_max_catch_up_skips_whole_periods(self):
        counter = Counter()
        scheduler = PeriodicScheduler(1.0, max_catch_up=2)
        scheduler.advance(0.0, counter)
        assert scheduler.advance(10.5, counter) == 2
        assert counter.calls == 3
        assert scheduler.dropped == 8
        assert scheduler.last == 10.0

    def test_from_frequency(self):
        assert PeriodicScheduler.from_frequency(4.0).period == 0.25

    @pytest.mark.parametrize("period", [0, -1.0])
    def test_invalid_period(self, period):
        with pytest.raises(ValueError):
            PeriodicScheduler(period)

    def test_reset(self):
        counter = Counter()
        scheduler = PeriodicScheduler(1.0)
        scheduler.advance(0.0, counter)
        scheduler.reset()
        assert scheduler.advance(100.0, counter) == 1
        assert counter.calls == 2
