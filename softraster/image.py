"""In-memory images that can be loaded, saved and sampled as textures."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from PIL import Image as PILImage

from softraster.color import RENDER_SETTINGS, Color

_FORMATS = {"png": "PNG", "bmp": "BMP"}


class Image:
    """A grid of colours stored row by row, top row first."""

    def __init__(
        self,
        width: int,
        height: int,
        colors: list[Color] | None = None,
        channel_count: int = 4,
    ) -> None:
        if width < 0 or height < 0:
            raise ValueError("image size cannot be negative")
        if colors is None:
            colors = [Color.TRANSPARENT] * (width * height)
        elif len(colors) != width * height:
            raise ValueError(
                f"expected {width * height} colours for {width}x{height}, got {len(colors)}"
            )
        self.width = width
        self.height = height
        self.colors = colors
        self.channel_count = channel_count

    def __repr__(self) -> str:
        return f"Image({self.width}x{self.height}, channels={self.channel_count})"

    def switch_channels(self, first: int, second: int) -> None:
        """Swap two channels, by memory-order index (blue, green, red, alpha), in every pixel."""
        def swapped(color: Color) -> Color:
            channels = list(color.channels)
            channels[first], channels[second] = channels[second], channels[first]
            return Color.from_channels(channels)

        self.colors = [swapped(color) for color in self.colors]

    def flip(self) -> None:
        """Mirror the image vertically."""
        rows = [
            self.colors[y * self.width:(y + 1) * self.width] for y in range(self.height)
        ]
        self.colors = [color for row in reversed(rows) for color in row]

    def _index(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} image")
        return x + y * self.width

    def get_pixel(self, x: int, y: int) -> Color:
        """Return the colour at ``(x, y)``."""
        return self.colors[self._index(x, y)]

    def set_pixel(self, x: int, y: int, color: Color) -> None:
        """Set the colour at ``(x, y)``."""
        self.colors[self._index(x, y)] = color

    @staticmethod
    def from_file(path: str | Path, flip: bool) -> Image:
        """Load an image file; ``flip`` mirrors it vertically on load."""
        with PILImage.open(path) as source:
            channel_count = len(source.getbands())
            rgba = source.convert("RGBA")
        if flip:
            rgba = rgba.transpose(PILImage.Transpose.FLIP_TOP_BOTTOM)
        raw = rgba.tobytes()
        colors = [Color(*raw[i:i + 4]) for i in range(0, len(raw), 4)]
        width, height = rgba.size
        return Image(width, height, colors, channel_count)

    def save(self, path: str | Path) -> None:
        """Write the image as PNG or BMP, chosen by the file extension."""
        extension = str(path).rsplit(".", 1)[-1]
        file_format = _FORMATS.get(extension)
        if file_format is None:
            raise ValueError(f"unsupported image extension: {extension!r}")
        raw = bytes(
            channel for color in self.colors for channel in (color.r, color.g, color.b, color.a)
        )
        PILImage.frombytes("RGBA", (self.width, self.height), raw).save(path, file_format)

    def get_color(self, pos: Sequence[float]) -> Color:
        """Sample the image at a texture coordinate, following the render settings."""
        x, y = pos
        settings = RENDER_SETTINGS
        if settings.multiply_size:
            if settings.wrap:
                x %= 1.0
                y %= 1.0
            px = int(x * self.width)
            py = int(y * self.height)
        else:
            px = int(x)
            py = int(y)
        return self.get_pixel(px, py)