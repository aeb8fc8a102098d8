# services/colors.py
from __future__ import annotations

from typing import NamedTuple


class Color(NamedTuple):
    red: int
    green: int
    blue: int
    alpha: int = 255


class RGB(NamedTuple):
    red: int
    green: int
    blue: int


PRIMARY = Color(103, 60, 79, 255)
SECONDARY = Color(103, 60, 79, 220)


def flatten(color: Color) -> RGB:
    """
    Composite a translucent colour over a white page.
    PDF fills have no alpha here, so each channel is blended toward 255.
    """
    alpha = color.alpha / 255.0
    white = int(255 * (1.0 - alpha))
    return RGB(
        int(color.red * alpha) + white,
        int(color.green * alpha) + white,
        int(color.blue * alpha) + white,
    )


def to_unit(rgb: RGB) -> tuple:
    """reportlab takes colour channels as 0..1 floats."""
    return rgb.red / 255.0, rgb.green / 255.0, rgb.blue / 255.0
