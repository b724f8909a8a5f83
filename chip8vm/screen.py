"""Monochrome screen capability used by the CPU.

The host owns the pixel storage. The CPU only sees the `Screen` interface, so
a host can hand in any layout by implementing the four accessors (or by
overriding `clear`/`draw` directly).
"""

import abc

import numpy as np

from chip8vm.constants import SCREEN_WIDTH, SCREEN_HEIGHT

_SPRITE_COLUMNS = np.arange(8)


def sprite_bits(byte: int) -> np.ndarray:
    """Expand a sprite row into 8 booleans, most significant bit first."""
    return np.unpackbits(np.array([byte & 0xFF], dtype=np.uint8)).astype(np.bool_)


class Screen(abc.ABC):
    """Pixel buffer of shape (width, height), indexed [x, y]."""

    @abc.abstractmethod
    def get_pixels(self) -> np.ndarray:
        ...

    @abc.abstractmethod
    def set_pixels(self, pixels: np.ndarray) -> None:
        ...

    @abc.abstractmethod
    def get_width(self) -> int:
        ...

    @abc.abstractmethod
    def get_height(self) -> int:
        ...

    def clear(self) -> None:
        """Turn every pixel off."""
        self.set_pixels(np.zeros_like(self.get_pixels()))

    def draw(self, x: int, y: int, byte: int) -> bool:
        """XOR one sprite row at (x, y), wrapping around both edges.

        Returns True if a pixel that was on has been turned off.
        """
        width, height = self.get_width(), self.get_height()
        columns = (x + _SPRITE_COLUMNS) % width
        row = y % height

        pixels = np.array(self.get_pixels(), dtype=np.bool_)
        old = pixels[columns, row]
        bits = sprite_bits(byte)

        pixels[columns, row] = old ^ bits
        self.set_pixels(pixels)
        return bool(np.any(old & bits))

    def size(self) -> tuple[int, int]:
        return self.get_width(), self.get_height()


class PixelScreen(Screen):
    """Screen backed by a boolean numpy array.

    `draw` replaces the array rather than mutating it, so a previously
    returned `pixels` stays a valid snapshot.
    """

    def __init__(self, width: int = SCREEN_WIDTH, height: int = SCREEN_HEIGHT):
        self._pixels = np.zeros((width, height), dtype=np.bool_)

    def get_pixels(self) -> np.ndarray:
        return self._pixels

    def set_pixels(self, pixels: np.ndarray) -> None:
        self._pixels = pixels

    def get_width(self) -> int:
        return self._pixels.shape[0]

    def get_height(self) -> int:
        return self._pixels.shape[1]

    @property
    def pixels(self) -> np.ndarray:
        return self._pixels

    def __repr__(self) -> str:
        return f"PixelScreen({self.get_width()}x{self.get_height()}, lit={int(np.sum(self._pixels))})"
