"""Pygame host window: video, keyboard and buzzer around a Chip8 machine."""

import os
from typing import Dict, Optional

import numpy as np

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
import pygame

from chip8vm.chip8 import Chip8, HostIO
from chip8vm.logging import ConsoleLogger
from chip8vm.rendering import Color, DEFAULT_BACKGROUND, DEFAULT_FOREGROUND, chip8_display_to_rgb

WINDOW_TITLE = "CHIP-8 Emulator"
WINDOW_SCALE = 8
WINDOW_FRAMERATE = 30

AUDIO_RATE = 44100
BUZZER_PITCH = 440.0
BUZZER_VOLUME = 0.1


def square_wave(pitch: float = BUZZER_PITCH, rate: int = AUDIO_RATE, volume: float = BUZZER_VOLUME) -> np.ndarray:
    """One period of a 16-bit mono square wave."""
    samples = max(int(rate / pitch), 2)
    wave = np.where(np.arange(samples) < samples // 2, 1.0, -1.0)
    return (wave * volume * 32767).astype(np.int16)


class Window:
    """Owns the pygame window and feeds a Chip8 machine once per frame.

    Keys are bound through the machine's label table, so the pad follows the
    1234 / qwer / asdf / zxcv layout. ESC quits, F1 pauses.
    """

    def __init__(
        self,
        vm: Chip8,
        scale: int = WINDOW_SCALE,
        fps: int = WINDOW_FRAMERATE,
        fg: Color = DEFAULT_FOREGROUND,
        bg: Color = DEFAULT_BACKGROUND,
        logger: Optional[ConsoleLogger] = None,
    ):
        self.vm = vm
        self.scale = scale
        self.fps = fps
        self.fg = fg
        self.bg = bg
        self.logger = logger if logger is not None else vm.logger
        self.io = HostIO()
        self.paused = False
        self.is_open = False

        width, height = vm.get_screen_size()
        pygame.init()
        self.surface = pygame.display.set_mode((width * scale, height * scale))
        pygame.display.set_caption(WINDOW_TITLE)
        self.mappings: Dict[int, int] = {
            pygame.key.key_code(label): index for index, label in enumerate(vm.get_mapping())
        }

        self.buzzer = self._open_audio()
        self.is_playing = False

    def _open_audio(self) -> Optional["pygame.mixer.Sound"]:
        try:
            pygame.mixer.init(frequency=AUDIO_RATE, size=-16, channels=1)
        except pygame.error as exc:
            self.logger.warning(f"Audio disabled: {exc}")
            return None
        return pygame.mixer.Sound(buffer=square_wave().tobytes())

    def handle_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.is_open = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.is_open = False
                elif event.key == pygame.K_F1:
                    self.paused = not self.paused
                    if not self.paused:
                        self.vm.resync()
                    self.logger.info("Paused" if self.paused else "Resumed")
                elif event.key in self.mappings:
                    self.io.keys[self.mappings[event.key]] = True
            elif event.type == pygame.KEYUP:
                if event.key in self.mappings:
                    self.io.keys[self.mappings[event.key]] = False

    def update_audio(self) -> None:
        if self.buzzer is None or self.io.buzzer == self.is_playing:
            return
        if self.io.buzzer:
            self.buzzer.play(loops=-1)
        else:
            self.buzzer.stop()
        self.is_playing = self.io.buzzer

    def render(self) -> None:
        rgb = chip8_display_to_rgb(self.io.screen, self.scale, self.fg, self.bg)
        # surfarray expects (width, height, 3)
        frame = pygame.surfarray.make_surface(rgb.transpose(1, 0, 2))
        self.surface.blit(frame, (0, 0))
        pygame.display.flip()

    def run(self) -> None:
        """Main loop; machine errors propagate to the caller after cleanup."""
        clock = pygame.time.Clock()
        self.is_open = True
        try:
            while self.is_open:
                self.handle_events()
                if not self.paused:
                    self.vm.clock(self.io)
                self.update_audio()
                self.render()
                clock.tick(self.fps)
        finally:
            pygame.quit()
