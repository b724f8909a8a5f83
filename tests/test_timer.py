"""Tests for the delay/sound timers."""

import pytest
from chip8vm import Timer


class TestTimer:

    @pytest.mark.parametrize("start", [0, 1, 60, 255])
    def test_counts_down_to_zero_and_stays(self, start):
        timer = Timer().set(start)
        for _ in range(start):
            timer = timer.tick()
        assert timer.get() == 0

        for _ in range(5):
            timer = timer.tick()
        assert timer.get() == 0

    def test_rearm_while_counting(self):
        timer = Timer().set(10).tick().tick()
        assert timer.get() == 8
        timer = timer.set(30)
        assert timer.get() == 30

    def test_set_masks_to_byte(self):
        assert Timer().set(0x1FF).get() == 0xFF
