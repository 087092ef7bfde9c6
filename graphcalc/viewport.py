"""
Coordinate transforms between mathematical space and screen pixels.

The origin sits at the centre of the viewport shifted by the pan offsets;
screen y grows downward, so mathematical y is inverted. All functions are pure.
"""
from typing import NamedTuple, Tuple

from graphcalc import config


class Viewport(NamedTuple):
    width: int = config.DEFAULT_VIEWPORT_WIDTH
    height: int = config.DEFAULT_VIEWPORT_HEIGHT
    pixels_per_unit: float = config.DEFAULT_PIXELS_PER_UNIT
    pan_offset_x: int = 0
    pan_offset_y: int = 0

    def visible_range(self) -> Tuple[float, float]:
        return visible_range(self.width, self.pixels_per_unit, self.pan_offset_x)


def math_to_pixel(
    x: float,
    y: float,
    viewport_width: int,
    viewport_height: int,
    pixels_per_unit: float,
    pan_offset_x: int,
    pan_offset_y: int,
) -> Tuple[int, int]:
    """Map a mathematical point to integer pixel coordinates (truncated toward zero)."""
    px = int(viewport_width / 2.0 + x * pixels_per_unit + pan_offset_x)
    py = int(viewport_height / 2.0 - y * pixels_per_unit - pan_offset_y)
    return px, py


def pixel_to_math(
    px: float,
    py: float,
    viewport_width: int,
    viewport_height: int,
    pixels_per_unit: float,
    pan_offset_x: int,
    pan_offset_y: int,
) -> Tuple[float, float]:
    """Inverse of math_to_pixel, without the truncation; used for hover coordinates."""
    if pixels_per_unit <= 0:
        raise ValueError("pixels_per_unit must be positive")
    x = (px - viewport_width / 2.0 - pan_offset_x) / pixels_per_unit
    y = (viewport_height / 2.0 - py - pan_offset_y) / pixels_per_unit
    return x, y


def visible_range(viewport_width: int, pixels_per_unit: float, pan_offset_x: int) -> Tuple[float, float]:
    """The mathematical x-interval covered by pixel columns 0 .. viewport_width."""
    if pixels_per_unit <= 0:
        raise ValueError("pixels_per_unit must be positive")
    x_min = (0 - viewport_width / 2.0 - pan_offset_x) / pixels_per_unit
    x_max = (viewport_width - viewport_width / 2.0 - pan_offset_x) / pixels_per_unit
    return x_min, x_max
