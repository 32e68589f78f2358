"""Square textures with a chain of half-resolution levels."""

from __future__ import annotations

from typing import Sequence

from softraster.color import RENDER_SETTINGS, Color


class SquareTexture:
    """A power-of-two square texture and its successively averaged smaller levels.

    Level 0 is 1x1; each next level doubles the width. ``level`` picks the one
    that ``get_color`` samples.
    """

    def __init__(self, colors: Sequence[Color] | None = None, width: int = 0) -> None:
        self.levels: list[list[Color]] = []
        self.res = 0
        self.level = 0
        if colors is not None:
            self.load(colors, width)

    def __repr__(self) -> str:
        return f"SquareTexture(res={self.res}, level={self.level})"

    def load(self, colors: Sequence[Color], width: int) -> None:
        """Copy a ``width`` by ``width`` texture and build its smaller levels."""
        if width < 1 or width & (width - 1):
            raise ValueError(f"width must be a power of two, got {width}")
        if len(colors) != width * width:
            raise ValueError(f"expected {width * width} colours, got {len(colors)}")
        levels = [list(colors)]
        size = width
        while size > 1:
            half = size // 2
            source = levels[0]
            levels.insert(
                0,
                [
                    Color.average(
                        source[2 * x + 2 * y * size],
                        source[2 * x + 1 + 2 * y * size],
                        source[2 * x + (2 * y + 1) * size],
                        source[2 * x + 1 + (2 * y + 1) * size],
                    )
                    for y in range(half)
                    for x in range(half)
                ],
            )
            size = half
        self.levels = levels
        self.res = len(levels)
        self.level = self.res - 1

    def level_colors(self, level: int) -> list[Color]:
        """The colours of one level, row by row."""
        if not 0 <= level < self.res:
            raise IndexError(f"level {level} outside 0..{self.res - 1}")
        return list(self.levels[level])

    def get_color(self, pos: Sequence[float]) -> Color:
        """Sample the current level, following the render settings."""
        if not 0 <= self.level < self.res:
            raise IndexError(f"level {self.level} outside 0..{self.res - 1}")
        width = 1 << self.level
        x, y = pos
        settings = RENDER_SETTINGS
        if settings.multiply_size:
            if settings.wrap:
                x %= 1.0
                y %= 1.0
            px, py = int(x * width), int(y * width)
        else:
            px, py = int(x), int(y)
        if not (0 <= px < width and 0 <= py < width):
            raise IndexError(f"texel ({px}, {py}) outside {width}x{width} level")
        return self.levels[self.level][px + py * width]