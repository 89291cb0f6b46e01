"""Framebuffer to RGB conversion for hosts that present the display."""

from typing import Tuple

import jax.numpy as jnp
import numpy as np

Color = Tuple[int, int, int]

COLOR_SCHEMES = {
    "classic": ((0, 255, 0), (0, 0, 0)),  # Green on black
    "amber": ((255, 176, 0), (0, 0, 0)),  # Amber on black
    "white": ((255, 255, 255), (0, 0, 0)),  # White on black
    "blue": ((0, 255, 255), (0, 0, 64)),  # Cyan on dark blue
    "retro": ((255, 255, 0), (64, 0, 64)),  # Yellow on purple
}


def create_color_scheme(scheme: str = "classic") -> Tuple[Color, Color]:
    """Get predefined color schemes for CHIP-8 rendering.

    Args:
        scheme: Color scheme name ("classic", "amber", "white", "blue", "retro")

    Returns:
        Tuple of (on_color, off_color) as RGB tuples
    """
    if scheme not in COLOR_SCHEMES:
        raise ValueError(
            f"Unknown color scheme '{scheme}'. Available: {list(COLOR_SCHEMES.keys())}"
        )
    return COLOR_SCHEMES[scheme]


def chip8_display_to_rgb(
    display: jnp.ndarray,
    scale: int = 8,
    on_color: Color = (0, 255, 0),
    off_color: Color = (0, 0, 0),
) -> np.ndarray:
    """Convert CHIP-8 boolean display to RGB array with optional upscaling.

    Args:
        display: Boolean array of shape (64, 32) indexed [x, y]
        scale: Integer upscaling factor, each pixel becomes a scale x scale block
        on_color: RGB color for lit pixels
        off_color: RGB color for dark pixels

    Returns:
        RGB array of shape (32*scale, 64*scale, 3) with uint8 values
    """
    if scale < 1:
        raise ValueError(f"scale must be a positive integer, got {scale}")

    # (x, y) storage -> (row, column) image
    pixels = np.asarray(display, dtype=np.bool_).T
    height, width = pixels.shape

    rgb_frame = np.empty((height, width, 3), dtype=np.uint8)
    rgb_frame[pixels] = on_color
    rgb_frame[~pixels] = off_color

    if scale > 1:
        rgb_frame = np.repeat(np.repeat(rgb_frame, scale, axis=0), scale, axis=1)

    return rgb_frame
