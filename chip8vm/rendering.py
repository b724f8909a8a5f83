"""Host-side rendering of CHIP-8 screens: RGB frames, screenshots and videos."""

from typing import Dict, Sequence, Tuple, Union

import cv2
import numpy as np
from PIL import Image

from chip8vm.screen import Screen

Color = Tuple[int, int, int]

DEFAULT_FOREGROUND: Color = (0xD5, 0xC4, 0xA1)
DEFAULT_BACKGROUND: Color = (0x28, 0x28, 0x28)


def _pixels(display: Union[Screen, np.ndarray]) -> np.ndarray:
    if isinstance(display, Screen):
        display = display.get_pixels()
    return np.array(display, dtype=np.bool_)


def chip8_display_to_rgb(
    display: Union[Screen, np.ndarray],
    scale: int = 8,
    on_color: Color = DEFAULT_FOREGROUND,
    off_color: Color = DEFAULT_BACKGROUND,
) -> np.ndarray:
    """Convert a CHIP-8 screen to an RGB array with optional upscaling.

    Args:
        display: Screen, or boolean array of shape (width, height)
        scale: Upscaling factor for better visibility (default: 8x)
        on_color: RGB color for "on" pixels
        off_color: RGB color for "off" pixels

    Returns:
        RGB array of shape (height*scale, width*scale, 3) with uint8 values
    """
    # (width, height) -> (height, width)
    pixels = _pixels(display).T
    height, width = pixels.shape

    rgb_frame = np.zeros((height, width, 3), dtype=np.uint8)
    rgb_frame[pixels] = on_color
    rgb_frame[~pixels] = off_color

    # Nearest neighbor upscaling
    if scale > 1:
        rgb_frame = np.repeat(np.repeat(rgb_frame, scale, axis=0), scale, axis=1)

    return rgb_frame


COLOR_SCHEMES: Dict[str, Tuple[Color, Color]] = {
    "default": (DEFAULT_FOREGROUND, DEFAULT_BACKGROUND),
    "classic": ((0, 255, 0), (0, 0, 0)),
    "amber": ((255, 176, 0), (0, 0, 0)),
    "white": ((255, 255, 255), (0, 0, 0)),
    "blue": ((0, 255, 255), (0, 0, 64)),
}


def create_color_scheme(scheme: str = "default") -> Tuple[Color, Color]:
    """(on_color, off_color) for a named scheme, see `COLOR_SCHEMES`."""
    if scheme not in COLOR_SCHEMES:
        raise ValueError(f"Unknown color scheme '{scheme}'. Available: {list(COLOR_SCHEMES)}")
    return COLOR_SCHEMES[scheme]


def save_screenshot(
    display: Union[Screen, np.ndarray],
    filename: str,
    scale: int = 8,
    on_color: Color = DEFAULT_FOREGROUND,
    off_color: Color = DEFAULT_BACKGROUND,
) -> None:
    """Write the current screen to an image file (format from the extension)."""
    Image.fromarray(chip8_display_to_rgb(display, scale, on_color, off_color)).save(filename)


def create_video(
    frames: Sequence[np.ndarray],
    filename: str,
    fps: float = 60.0,
    scale: int = 8,
    on_color: Color = DEFAULT_FOREGROUND,
    off_color: Color = DEFAULT_BACKGROUND,
    persistence: bool = True,
) -> None:
    """Save a sequence of (width, height) screens as an MP4 video.

    Args:
        frames: Boolean screens, one per video frame
        filename: Output MP4 file
        fps: Video frame rate
        scale: Upscaling factor
        on_color: RGB color for "on" pixels
        off_color: RGB color for "off" pixels
        persistence: Enable phosphor screen simulation (smooth fading)
    """
    if len(frames) == 0:
        raise ValueError("No frames to record")

    width, height = np.asarray(frames[0]).shape
    on = np.array(on_color, dtype=np.float32)
    off = np.array(off_color, dtype=np.float32)

    fourcc = cv2.VideoWriter_fourcc(*"mp4v")
    writer = cv2.VideoWriter(filename, fourcc, fps, (width * scale, height * scale))

    glow = np.zeros((width, height), dtype=np.float32)
    decay = 0.8

    try:
        for frame_display in frames:
            lit = np.asarray(frame_display, dtype=np.float32)
            if persistence:
                glow = np.clip(glow * decay + lit, 0.0, 1.0)
                lit = glow

            # Interpolate between colors, (width, height) -> (height, width, 3)
            frame = (off + lit.T[:, :, None] * (on - off)).astype(np.uint8)
            if scale > 1:
                frame = np.repeat(np.repeat(frame, scale, axis=0), scale, axis=1)
            writer.write(cv2.cvtColor(frame, cv2.COLOR_RGB2BGR))
    finally:
        writer.release()
