"""Colours, render settings and the colour arithmetic used while drawing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Sequence


def _byte(value: float) -> int:
    """Truncate to an integer and clamp into the range of one colour channel."""
    return max(0, min(255, int(value)))


@dataclass
class RenderSettings:
    """Switches and limits that steer how drawing is done.

    ``check_opacity`` keeps fully transparent texture pixels from being drawn.
    ``multiply_size`` makes texture lookups take coordinates in 0..1 that are
    scaled by the texture size, and ``wrap`` makes such coordinates repeat.
    """

    check_opacity: bool = True
    backface_culling: bool = True
    clockwise: bool = False
    min_distance: float = 0.1
    max_distance: float = 256.0
    multiply_size: bool = True
    wrap: bool = True


RENDER_SETTINGS = RenderSettings()


@dataclass(frozen=True)
class Color:
    """An 8-bit colour with alpha; stored in memory as blue, green, red, alpha."""

    r: int
    g: int
    b: int
    a: int = 255

    TRANSPARENT: ClassVar[Color]

    def __post_init__(self) -> None:
        for name in ("r", "g", "b", "a"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise TypeError(f"channel {name} must be an int, not {type(value).__name__}")
            if not 0 <= value <= 255:
                raise ValueError(f"channel {name} out of range 0..255: {value}")

    @property
    def channels(self) -> tuple[int, int, int, int]:
        """The channels in memory order: blue, green, red, alpha."""
        return (self.b, self.g, self.r, self.a)

    @classmethod
    def from_channels(cls, channels: Sequence[int]) -> Color:
        """Build a colour from channels in memory order: blue, green, red, alpha."""
        b, g, r, a = channels
        return cls(r, g, b, a)

    def lerp(self, other: Color, weight: float) -> Color:
        """Blend towards ``other``; weight 0 gives this colour, 1 gives ``other``."""
        return Color(
            _byte(self.r + (other.r - self.r) * weight),
            _byte(self.g + (other.g - self.g) * weight),
            _byte(self.b + (other.b - self.b) * weight),
            _byte(self.a + (other.a - self.a) * weight),
        )

    def lit(self, light: Sequence[float], keep_alpha: bool) -> Color:
        """Multiply red, green and blue by a light level ``(r, g, b)``.

        The alpha is kept when ``keep_alpha`` is true, otherwise the result is opaque.
        """
        lr, lg, lb = light
        return Color(
            _byte(self.r * lr),
            _byte(self.g * lg),
            _byte(self.b * lb),
            self.a if keep_alpha else 255,
        )

    def scaled(self, multiplier: float) -> Color:
        """Multiply every channel, alpha included, by ``multiplier``."""
        return Color(
            _byte(self.r * multiplier),
            _byte(self.g * multiplier),
            _byte(self.b * multiplier),
            _byte(self.a * multiplier),
        )

    @staticmethod
    def average(*args: Color) -> Color:
        """Return the channel-wise average of the colours, rounded down."""
        if not args:
            raise ValueError("average needs at least one colour")
        count = len(args)
        return Color(
            sum(c.r for c in args) // count,
            sum(c.g for c in args) // count,
            sum(c.b for c in args) // count,
            sum(c.a for c in args) // count,
        )


Color.TRANSPARENT = Color(0, 0, 0, 0)