"""Command line entry point: run a ROM in a window or headless."""

import argparse
import math
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from chip8vm.chip8 import Chip8, HostIO
from chip8vm.constants import CPU_FREQUENCY
from chip8vm.errors import Chip8Error
from chip8vm.logging import ConsoleLogger, LEVELS, build_progress_bar
from chip8vm.rendering import (
    COLOR_SCHEMES, Color, DEFAULT_BACKGROUND, DEFAULT_FOREGROUND, create_color_scheme, create_video, save_screenshot,
)

SCALES = (1, 2, 4, 8, 16)

# Host frames of backlog replayed after a stall before ticks are skipped
CATCH_UP_FRAMES = 2


@dataclass
class EmulatorOptions:
    rom: Path
    bg: Color = DEFAULT_BACKGROUND
    fg: Color = DEFAULT_FOREGROUND
    scheme: str = "default"
    fps: int = 30
    freq: Optional[float] = None
    scale: int = 8
    seed: Optional[int] = None
    max_catch_up: Optional[int] = None
    headless: bool = False
    frames: int = 600
    record: Optional[Path] = None
    screenshot: Optional[Path] = None
    log_level: str = "INFO"


def parse_seed(src: str) -> int:
    """Parse a seed given as 0xXXXX."""
    error = argparse.ArgumentTypeError(f"invalid seed '{src}', expected format is 0xXXXX")
    if not src.startswith("0x"):
        raise error
    try:
        value = int(src[2:], 16)
    except ValueError:
        raise error from None
    if not 0 <= value <= 0xFFFF:
        raise error
    return value


def parse_color(src: str) -> Color:
    """Parse a color given as #RRGGBB."""
    error = argparse.ArgumentTypeError(f"invalid color '{src}', expected format is #RRGGBB")
    if not src.startswith("#") or len(src) != 7:
        raise error
    try:
        value = int(src[1:], 16)
    except ValueError:
        raise error from None
    return (value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF


def _positive_int(src: str) -> int:
    value = int(src)
    if value <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {src}")
    return value


def _positive_float(src: str) -> float:
    value = float(src)
    if value <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive number, got {src}")
    return value


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chip8vm",
        description="Another CHIP-8 toy emulator",
    )
    parser.add_argument("rom", type=Path, help="Path to CHIP-8 ROM to run")
    parser.add_argument("--bg", type=parse_color, default=None,
                        help="Window background color (format: #RRGGBB, default from --scheme)")
    parser.add_argument("--fg", type=parse_color, default=None,
                        help="Window foreground color (format: #RRGGBB, default from --scheme)")
    parser.add_argument("--scheme", choices=list(COLOR_SCHEMES), default="default",
                        help="Named color scheme for --fg/--bg")
    parser.add_argument("--fps", type=_positive_int, default=30, help="Window framerate")
    parser.add_argument("--freq", type=_positive_float, default=None,
                        help="CPU frequency in hertz (default: 500)")
    parser.add_argument("--scale", type=int, choices=SCALES, default=8, help="Window scale")
    parser.add_argument("--seed", type=parse_seed, default=None,
                        help="CPU PRNG seed (in hexadecimal, 0xXXXX)")
    parser.add_argument("--max-catch-up", type=_positive_int, default=None,
                        help="Most CPU cycles replayed per frame after a stall "
                             f"(default: {CATCH_UP_FRAMES} frames worth)")
    parser.add_argument("--headless", action="store_true",
                        help="Run without a window on a simulated clock")
    parser.add_argument("--frames", type=_positive_int, default=600,
                        help="Frames to emulate in headless mode (default: 600)")
    parser.add_argument("--record", type=Path, default=None,
                        help="Headless only: save the run as an MP4 video")
    parser.add_argument("--screenshot", type=Path, default=None,
                        help="Headless only: save the final screen as an image")
    parser.add_argument("--log-level", choices=LEVELS, default="INFO", help="Console log level")
    return parser


def parse_options(argv: Optional[List[str]] = None) -> EmulatorOptions:
    args = build_arg_parser().parse_args(argv)
    on_color, off_color = create_color_scheme(args.scheme)
    if args.fg is None:
        args.fg = on_color
    if args.bg is None:
        args.bg = off_color
    return EmulatorOptions(**vars(args))


def default_catch_up(frequency: float, fps: float) -> int:
    """CPU cycles covering `CATCH_UP_FRAMES` host frames."""
    return max(1, math.ceil(frequency * CATCH_UP_FRAMES / fps))


def build_vm(options: EmulatorOptions, logger: ConsoleLogger) -> Chip8:
    """Machine with its stall guard sized to the host frame rate."""
    frequency = CPU_FREQUENCY if options.freq is None else options.freq
    max_catch_up = options.max_catch_up
    if max_catch_up is None:
        max_catch_up = default_catch_up(frequency, options.fps)
    return Chip8(frequency=frequency, logger=logger, max_catch_up=max_catch_up)


def run_headless(vm: Chip8, options: EmulatorOptions, io: Optional[HostIO] = None) -> HostIO:
    """Emulate `options.frames` frames at `options.fps` without sleeping.

    The machine sees frame timestamps (frame / fps), so a run is reproducible
    for a given ROM, seed and frequency.
    """
    io = io if io is not None else HostIO()
    frames = []

    with build_progress_bar(options.frames, disable=not vm.logger.is_enabled_for("INFO")) as progress:
        for frame in range(options.frames):
            vm.clock(io, now=frame / options.fps)
            if options.record is not None:
                frames.append(io.screen.get_pixels())
            progress.update(1)
    vm.logger.info(f"Emulated {options.frames} frames ({options.frames / options.fps:.2f}s of machine time)")

    if options.record is not None:
        create_video(frames, str(options.record), fps=options.fps, scale=options.scale,
                     on_color=options.fg, off_color=options.bg)
        vm.logger.info(f"Saved video to {options.record}")
    if options.screenshot is not None:
        save_screenshot(io.screen, str(options.screenshot), scale=options.scale,
                        on_color=options.fg, off_color=options.bg)
        vm.logger.info(f"Saved screenshot to {options.screenshot}")
    return io


def main(argv: Optional[List[str]] = None) -> int:
    options = parse_options(argv)
    logger = ConsoleLogger("chip8", log_level=options.log_level)

    try:
        rom = options.rom.read_bytes()
    except OSError as exc:
        logger.error(f"Cannot read ROM {options.rom}: {exc}")
        return 1

    vm = build_vm(options, logger)
    try:
        seed = vm.load_rom(rom, options.seed)
        logger.log_config("Starting CHIP-8", {
            "rom": options.rom.name,
            "frequency": vm.frequency,
            "max catch-up": vm.clock_cpu.max_catch_up,
            "seed": f"0x{seed:04X}",
            "mode": "headless" if options.headless else "window",
        })
        if options.headless:
            run_headless(vm, options)
        else:
            from chip8vm.frontend import Window

            Window(vm, scale=options.scale, fps=options.fps, fg=options.fg, bg=options.bg, logger=logger).run()
    except Chip8Error as exc:
        logger.error(f"Error: {exc}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
