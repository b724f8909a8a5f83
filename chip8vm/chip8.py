"""The CHIP-8 virtual machine: ROM loading and clock-driven execution."""

import math
import time
from dataclasses import dataclass, field
from typing import Optional, Sequence

from chip8vm.clock import PeriodicScheduler
from chip8vm.constants import (
    CPU_FREQUENCY, FALLBACK_SEED, FONT_BASE, FONT_DATA, NUM_KEYS, PAD_MAPPINGS,
    PROGRAM_START, SCREEN_HEIGHT, SCREEN_WIDTH, TIMER_FREQUENCY,
)
from chip8vm.cpu import cycle
from chip8vm.crc16 import Crc16
from chip8vm.errors import InvalidDisplayDimensions, InvalidKeyVectorLength
from chip8vm.logging import ConsoleLogger, get_logger
from chip8vm.memory import create_memory
from chip8vm.rng import RandomGenerator
from chip8vm.screen import PixelScreen, Screen
from chip8vm.state import Bus, CpuState, create_bus, init_cpu

_LABEL_TO_KEY = dict(PAD_MAPPINGS)


@dataclass
class HostIO:
    """What the host lends the VM on every clock: screen, key states, buzzer."""
    screen: Screen = field(default_factory=PixelScreen)
    keys: Sequence[bool] = field(default_factory=lambda: [False] * NUM_KEYS)
    buzzer: bool = False


def key_for_label(label: str) -> Optional[int]:
    """CHIP-8 key index for a keyboard label such as 'q', or None."""
    return _LABEL_TO_KEY.get(label.lower())


class Chip8:
    """CHIP-8 virtual machine.

    Owns memory, RNG, timers and processor state. The host calls `clock` from
    its frame loop; CPU cycles and 60 Hz timer ticks are scheduled
    independently from the frame rate.

    Args:
        frequency: CPU frequency in hertz (default 500).
        logger: Logger for load and scheduling messages.
        max_catch_up: Optional cap on CPU cycles run per clock. Timer ticks get
            the same span of machine time, so both stay in step after a stall.
    """

    def __init__(
        self,
        frequency: Optional[float] = None,
        logger: Optional[ConsoleLogger] = None,
        max_catch_up: Optional[int] = None,
    ):
        self.frequency = CPU_FREQUENCY if frequency is None else frequency
        self.logger = logger if logger is not None else get_logger()
        self.screen_size = (SCREEN_WIDTH, SCREEN_HEIGHT)
        self.mapping = tuple(label for label, _ in sorted(PAD_MAPPINGS, key=lambda m: m[1]))

        self.cpu: CpuState = init_cpu(PROGRAM_START, FONT_BASE)
        self.bus: Bus = create_bus()
        self.seed: Optional[int] = None

        self.clock_cpu = PeriodicScheduler.from_frequency(self.frequency, max_catch_up)
        timer_catch_up = None
        if max_catch_up is not None:
            timer_catch_up = max(1, math.ceil(max_catch_up * TIMER_FREQUENCY / self.frequency))
        self.clock_60hz = PeriodicScheduler.from_frequency(TIMER_FREQUENCY, timer_catch_up)

    def load_rom(self, rom: bytes, seed: Optional[int] = None) -> int:
        """Load font sprites and `rom`, seed the RNG, and reset the CPU.

        The seed defaults to the CRC-16 of the ROM. Returns the seed in use.
        Nothing changes if the ROM does not fit or the seed is zero.
        """
        rom = bytes(rom)
        memory = create_memory().write_block(FONT_BASE, FONT_DATA)
        memory = memory.write_block(PROGRAM_START, rom)
        checksum = Crc16.at_once(rom)

        if seed is None:
            seed = checksum if checksum != 0 else FALLBACK_SEED
            self.logger.debug(f"Derived seed 0x{seed:04X} from ROM checksum 0x{checksum:04X}")
        rng = RandomGenerator().seed(seed)

        self.cpu = init_cpu(PROGRAM_START, FONT_BASE)
        self.bus = create_bus(memory=memory, rng=rng)
        self.seed = seed
        self.resync()

        self.logger.info(f"Loaded {len(rom)}-byte ROM at 0x{PROGRAM_START:03X} (seed 0x{seed:04X})")
        return seed

    def clock(self, io: HostIO, now: Optional[float] = None) -> None:
        """Advance the machine to `now` (defaults to the monotonic clock)."""
        self._attach(io)
        if now is None:
            now = time.monotonic()

        dropped = self.clock_cpu.dropped + self.clock_60hz.dropped
        self.clock_cpu.advance(now, self._cycle)
        self.clock_60hz.advance(now, self._tick_timers)
        dropped = self.clock_cpu.dropped + self.clock_60hz.dropped - dropped
        if dropped:
            self.logger.warning(f"Host stalled: skipped {dropped} scheduled ticks")

        io.buzzer = self.bus.sound_timer.get() > 0

    def resync(self) -> None:
        """Forget scheduler phase so the next clock does not catch up on idle time."""
        self.clock_cpu.reset()
        self.clock_60hz.reset()

    def step(self, io: HostIO) -> None:
        """Run exactly one CPU cycle, bypassing the schedulers."""
        self._attach(io)
        self._cycle()

    def get_mapping(self) -> tuple[str, ...]:
        """Keyboard labels ordered by CHIP-8 key index."""
        return self.mapping

    def get_screen_size(self) -> tuple[int, int]:
        return self.screen_size

    def _attach(self, io: HostIO) -> None:
        size = tuple(io.screen.size())
        if size != self.screen_size:
            raise InvalidDisplayDimensions(self.screen_size, size)
        if len(io.keys) != len(self.mapping):
            raise InvalidKeyVectorLength(len(self.mapping), len(io.keys))
        self.bus = self.bus.replace(screen=io.screen, keys=tuple(bool(k) for k in io.keys))

    def _cycle(self) -> None:
        self.cpu, self.bus = cycle(self.cpu, self.bus)

    def _tick_timers(self) -> None:
        self.bus = self.bus.replace(
            delay_timer=self.bus.delay_timer.tick(),
            sound_timer=self.bus.sound_timer.tick(),
        )
