"""Hex colour helpers shared by the generator and the exporters."""
from __future__ import annotations

import math
import re
from typing import Tuple

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")


def is_hex_color(value: object) -> bool:
    return isinstance(value, str) and bool(_HEX_COLOR.match(value))


def parse_hex_color(value: str) -> Tuple[int, int, int]:
    """Decode ``#rrggbb`` into its 0-255 channels."""

    if not is_hex_color(value):
        raise ValueError(f"Invalid hex colour {value!r}, expected '#rrggbb'")
    return int(value[1:3], 16), int(value[3:5], 16), int(value[5:7], 16)


def format_hex_color(red: int, green: int, blue: int) -> str:
    return f"#{red:02x}{green:02x}{blue:02x}"


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _clamp_channel(value: int) -> int:
    return max(0, min(255, value))


def interpolate_color(color_a: str, color_b: str, t: float) -> str:
    """Blend two hex colours linearly in RGB space.

    ``t`` is not clamped, but every resulting channel is clamped to
    ``[0, 255]`` so extrapolation still yields a valid colour.
    """

    start = parse_hex_color(color_a)
    end = parse_hex_color(color_b)
    channels = [
        _clamp_channel(_round_half_up(a + (b - a) * t))
        for a, b in zip(start, end)
    ]
    return format_hex_color(*channels)


def hex_to_unit_rgb(value: str) -> Tuple[float, float, float]:
    """Return the colour as three floats in ``[0, 1]``."""

    red, green, blue = parse_hex_color(value)
    return red / 255.0, green / 255.0, blue / 255.0
