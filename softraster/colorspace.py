"""Conversion between RGB and HSV colours."""

from __future__ import annotations

from typing import Sequence

Triple = tuple[float, float, float]


def rgb_to_hsv(rgb: Sequence[float]) -> Triple:
    """Convert ``(r, g, b)`` in 0..1 to ``(h, s, v)``; hue in degrees 0..360."""
    r, g, b = rgb
    lowest = min(r, g, b)
    highest = max(r, g, b)
    value = highest
    delta = highest - lowest
    if delta < 0.00001:
        return (0.0, 0.0, value)
    if highest <= 0.0:
        return (float("nan"), 0.0, value)
    saturation = delta / highest
    if r >= highest:
        hue = (g - b) / delta
        if hue < 0:
            hue += 6
    elif g >= highest:
        hue = 2.0 + (b - r) / delta
    else:
        hue = 4.0 + (r - g) / delta
    return (hue * 60.0, saturation, value)


def hsv_to_rgb(hsv: Sequence[float]) -> Triple:
    """Convert ``(h, s, v)`` with hue in degrees to ``(r, g, b)``."""
    hue, saturation, value = hsv
    if saturation <= 0.0:
        return (value, value, value)
    hh = (hue % 360.0) / 60.0
    sector = int(hh)
    fraction = hh - sector
    p = value * (1.0 - saturation)
    q = value * (1.0 - saturation * fraction)
    t = value * (1.0 - saturation * (1.0 - fraction))
    sectors = {
        0: (value, t, p),
        1: (q, value, p),
        2: (p, value, t),
        3: (p, q, value),
        4: (t, p, value),
    }
    return sectors.get(sector, (value, p, q))