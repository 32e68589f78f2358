"""A drawable surface of colours with an optional depth buffer."""

from __future__ import annotations

import math
from collections import deque
from typing import Callable, Sequence

from softraster.color import RENDER_SETTINGS, Color
from softraster.image import Image
from softraster.matrix3 import Mat3
from softraster.matrix4 import Mat4

Vec2 = tuple[float, float]
Vec3 = tuple[float, float, float]


def _sampler(brush: object) -> Callable[[Vec2], Color]:
    """Accept an object with ``get_color(pos)`` or a plain callable."""
    getter = getattr(brush, "get_color", brush)
    if not callable(getter):
        raise TypeError("a brush needs a get_color method or must be callable")
    return getter


class Canvas(Image):
    """A colour buffer, drawn into row by row, with an optional depth buffer.

    The depth buffer holds distances; smaller values are nearer the viewer.
    """

    def __init__(
        self,
        width: int,
        height: int,
        colors: list[Color] | None = None,
        depth_buffer: list[float] | None = None,
        *,
        with_depth: bool = True,
    ) -> None:
        super().__init__(width, height, colors)
        if depth_buffer is None and with_depth:
            depth_buffer = [0.0] * (width * height)
        elif depth_buffer is not None and len(depth_buffer) != width * height:
            raise ValueError(
                f"expected {width * height} depth values, got {len(depth_buffer)}"
            )
        self.depth_buffer = depth_buffer

    def __repr__(self) -> str:
        depth = "with" if self.depth_buffer is not None else "without"
        return f"Canvas({self.width}x{self.height}, {depth} depth)"

    @staticmethod
    def from_image(image: Image) -> Canvas:
        """A canvas without depth buffer that draws into the image's own colours."""
        return Canvas(image.width, image.height, image.colors, with_depth=False)

    def copy(self) -> Canvas:
        """Return an independent copy of the colours and the depth buffer."""
        depth = list(self.depth_buffer) if self.depth_buffer is not None else None
        return Canvas(
            self.width, self.height, list(self.colors), depth, with_depth=False
        )

    def _depth(self) -> list[float]:
        if self.depth_buffer is None:
            raise ValueError("this canvas has no depth buffer")
        return self.depth_buffer

    # -- pixels and depth -------------------------------------------------

    def clear_color(self, background: Color) -> None:
        """Set every pixel to ``background``."""
        self.colors[:] = [background] * (self.width * self.height)

    def clear_depth_buffer(self, max_distance: float | None = None) -> None:
        """Fill the depth buffer with the farthest distance at which drawing is allowed."""
        if max_distance is None:
            max_distance = RENDER_SETTINGS.max_distance
        depth = self._depth()
        depth[:] = [float(max_distance)] * (self.width * self.height)

    def in_bounds(self, x: int, y: int) -> bool:
        """Whether ``(x, y)`` lies on the canvas."""
        return 0 <= x < self.width and 0 <= y < self.height

    def get_pixel(self, x: int, y: int) -> Color:
        """The colour at ``(x, y)``, or transparent outside the canvas."""
        if self.in_bounds(x, y):
            return self.colors[x + y * self.width]
        return Color.TRANSPARENT

    def get_color(self, pos: Sequence[float]) -> Color:
        """Sample the canvas as a texture, following the render settings."""
        return super().get_color(pos)

    def fill_pixel(self, x: float, y: float, color: Color) -> None:
        """Set one pixel; positions outside the canvas are ignored."""
        ix, iy = int(x), int(y)
        if self.in_bounds(ix, iy):
            self.colors[ix + iy * self.width] = color

    def get_depth(self, x: int, y: int) -> float:
        """The depth at ``(x, y)``, or -1 outside the canvas."""
        depth = self._depth()
        return depth[x + y * self.width] if self.in_bounds(x, y) else -1.0

    def set_depth(self, x: float, y: float, depth: float) -> None:
        """Set the depth at ``(x, y)``; positions outside the canvas are ignored."""
        buffer = self._depth()
        ix, iy = int(x), int(y)
        if self.in_bounds(ix, iy):
            buffer[ix + iy * self.width] = depth

    def fill_pixel_3d(self, x: float, y: float, depth: float, color: Color) -> None:
        """Set a pixel only if ``depth`` is nearer than what is already there."""
        buffer = self._depth()
        ix, iy = int(x), int(y)
        if not self.in_bounds(ix, iy):
            return
        index = ix + iy * self.width
        if buffer[index] > depth:
            buffer[index] = depth
            self.colors[index] = color

    # -- filled shapes ----------------------------------------------------

    def fill(self, color: Color) -> None:
        """Fill the whole canvas; a fully transparent colour draws nothing when opacity is checked."""
        if color.a == 0 and RENDER_SETTINGS.check_opacity:
            return
        self.clear_color(color)

    def _cropped(self, rect: Sequence[float]) -> tuple[int, int, int, int] | None:
        x, y, w, h = rect
        x0, y0 = math.floor(x), math.floor(y)
        x1, y1 = math.floor(x + w), math.floor(y + h)
        x0, y0 = max(x0, 0), max(y0, 0)
        x1, y1 = min(x1, self.width), min(y1, self.height)
        if x1 <= x0 or y1 <= y0:
            return None
        return x0, y0, x1, y1

    def fill_rectangle(self, rect: Sequence[float], color: Color) -> None:
        """Fill the rectangle ``(x, y, w, h)``, cropped to the canvas."""
        bounds = self._cropped(rect)
        if bounds is None:
            return
        x0, y0, x1, y1 = bounds
        row = [color] * (x1 - x0)
        for y in range(y0, y1):
            start = y * self.width
            self.colors[start + x0:start + x1] = row

    def fill_rectangle_brush(self, rect: Sequence[float], brush: object) -> None:
        """Fill the rectangle ``(x, y, w, h)`` with colours taken from a brush at each position."""
        bounds = self._cropped(rect)
        if bounds is None:
            return
        sample = _sampler(brush)
        x0, y0, x1, y1 = bounds
        for y in range(y0, y1):
            start = y * self.width
            self.colors[start + x0:start + x1] = [
                sample((float(x), float(y))) for x in range(x0, x1)
            ]

    def draw_rectangle(
        self, rect: Sequence[float], border_thickness: int, color: Color
    ) -> None:
        """Draw the outline of a rectangle with the given border thickness."""
        x, y, w, h = rect
        t = border_thickness
        self.fill_rectangle((x, y, w, t), color)
        self.fill_rectangle((x, y, t, h), color)
        self.fill_rectangle((x + w - t, y, t, h), color)
        self.fill_rectangle((x, y + h - t, w, t), color)

    def fill_circle(self, x: float, y: float, w: float, h: float, brush: object) -> None:
        """Fill the ellipse inside the box ``(x, y, w, h)`` with a brush."""
        if w == 0 or h == 0:
            return
        sample = _sampler(brush)
        min_x, min_y = max(int(x), 0), max(int(y), 0)
        max_x, max_y = min(int(x + w), self.width), min(int(y + h), self.height)
        mid_x = x + w * 0.5
        mid_y = y + h * 0.5
        mult_x = 1 / (mid_x - x)
        mult_y = 1 / (mid_y - y)
        for j in range(min_y, max_y):
            dy = (j - mid_y) * mult_y
            dy2 = dy * dy
            for i in range(min_x, max_x):
                dx = (i - mid_x) * mult_x
                if dy2 + dx * dx < 1:
                    self.colors[i + j * self.width] = sample((float(i), float(j)))

    def fill_circle_centered(
        self, x: float, y: float, w: float, h: float, brush: object
    ) -> None:
        """Fill an ellipse of size ``(w, h)`` centred on ``(x, y)``."""
        self.fill_circle(x - w * 0.5, y - h * 0.5, w, h, brush)

    def flood_fill(self, x: int, y: int, color: Color) -> None:
        """Replace the 4-connected area of equal colour around ``(x, y)`` with ``color``."""
        if not self.in_bounds(x, y):
            return
        target = self.get_pixel(x, y)
        if target == color:
            return
        self.fill_pixel(x, y, color)
        queue = deque([(x, y)])
        while queue:
            nx, ny = queue.popleft()
            for px, py in ((nx - 1, ny), (nx + 1, ny), (nx, ny - 1), (nx, ny + 1)):
                if self.in_bounds(px, py) and self.get_pixel(px, py) == target:
                    self.fill_pixel(px, py, color)
                    queue.append((px, py))

    # -- outlines ---------------------------------------------------------

    def draw_line(self, p0: Sequence[float], p1: Sequence[float], color: Color) -> None:
        """Draw a line from ``p0`` to ``p1`` with Bresenham's algorithm."""
        x0, y0 = int(p0[0]), int(p0[1])
        x1, y1 = int(p1[0]), int(p1[1])
        dx, dy = abs(x1 - x0), abs(y1 - y0)
        sx = 1 if x0 < x1 else -1
        sy = 1 if y0 < y1 else -1
        err = dx - dy
        while True:
            self.fill_pixel(x0, y0, color)
            if x0 == x1 and y0 == y1:
                return
            e2 = err * 2
            if e2 > -dy:
                err -= dy
                x0 += sx
            if e2 < dx:
                err += dx
                y0 += sy

    def _plot_points(self, cx: int, cy: int, x: int, y: int, color: Color) -> None:
        self.fill_pixel(cx + x, cy + y, color)
        self.fill_pixel(cx - x, cy + y, color)
        self.fill_pixel(cx + x, cy - y, color)
        self.fill_pixel(cx - x, cy - y, color)

    def draw_ellipse(self, x: int, y: int, w: int, h: int, color: Color) -> None:
        """Draw the outline of the ellipse in the box ``(x, y, w, h)`` with the midpoint algorithm."""
        rx = int(w / 2)
        ry = int(h / 2)
        cx, cy = x + rx, y + ry
        rx2, ry2 = float(rx * rx), float(ry * ry)
        ax, ay = 0, ry
        d1 = ry2 - rx2 * ry + 0.25 * rx2
        d2 = 0.0
        dx = 2 * ry2 * ax
        dy = 2 * rx2 * ay
        while True:
            self._plot_points(cx, cy, ax, ay, color)
            ax += 1
            dx += 2 * ry2
            if d1 < 0:
                d1 += dx + ry2
            else:
                ay -= 1
                dy -= 2 * rx2
                d1 += dx - dy + ry2
            if not dx < dy:
                break
        while True:
            self._plot_points(cx, cy, ax, ay, color)
            ay -= 1
            dy -= 2 * rx2
            if d2 > 0:
                d2 += -dy + rx2
            else:
                ax += 1
                dx += 2 * ry2
                d2 += dx - dy + rx2
            if not ay > 0:
                break

    def draw_rotated_ellipse(
        self,
        center: Sequence[float],
        size: Sequence[float],
        rotation: float,
        color: Color,
    ) -> None:
        """Draw an ellipse with radii ``size`` around ``center``, rotated by ``rotation`` radians."""
        step_count = int((size[0] + size[1]) * math.pi)
        if step_count <= 0:
            return
        step = 2 * math.pi / step_count
        base = Mat3.combine(
            Mat3.scale2d(tuple(size)),
            Mat3.rotate2d(rotation),
            Mat3.translate2d(tuple(center)),
        )
        for i in range(step_count):
            point = Mat3.rotate2d(step * i).transform_point((-1.0, 0.0))
            px, py = base.transform_point(point)
            self.fill_pixel(px, py, color)

    def visualize_formula(
        self,
        screen_rect: Sequence[float],
        space_rect: Sequence[float],
        func: Callable[[float], float],
        brush: object,
    ) -> None:
        """Plot ``y = func(x)`` over ``space_rect`` into ``screen_rect`` as a trail of dots."""
        space_to_screen = Mat3.from_rect_to_rect(space_rect, screen_rect)
        dot_distance = 0.01
        end = space_rect[0] + space_rect[2]
        space_x = float(math.ceil(space_rect[0]))
        while space_x < end:
            px, py = space_to_screen.transform_point((space_x, func(space_x)))
            self.fill_circle_centered(px, py, 4.0, 4.0, brush)
            space_x += dot_distance

    # -- whole-canvas effects ---------------------------------------------

    def fade_to(self, weight: float, target: Color) -> None:
        """Blend every pixel with ``target``; weight 1 keeps the pixel, 0 gives ``target``."""
        self.colors[:] = [target.lerp(color, weight) for color in self.colors]

    def fade(self, multiplier: float) -> None:
        """Multiply every channel of every pixel, alpha included."""
        self.colors[:] = [color.scaled(multiplier) for color in self.colors]

    def fog(self, fog_color: Color, multiplier: float | None = None) -> None:
        """Blend each pixel towards ``fog_color`` by its depth times ``multiplier``."""
        if multiplier is None:
            multiplier = 1.0 / RENDER_SETTINGS.max_distance
        depth = self._depth()
        self.colors[:] = [
            color.lerp(fog_color, distance * multiplier)
            for color, distance in zip(self.colors, depth)
        ]

    # -- textures ---------------------------------------------------------

    def fill_texture_at(self, position: Sequence[int], texture: Image) -> None:
        """Copy a texture unscaled with its top-left corner at ``position``."""
        px, py = int(position[0]), int(position[1])
        bounds = self._cropped((px, py, texture.width, texture.height))
        if bounds is None:
            return
        x0, y0, x1, y1 = bounds
        check = RENDER_SETTINGS.check_opacity
        for y in range(y0, y1):
            source_row = (y - py) * texture.width - px
            for x in range(x0, x1):
                texel = texture.colors[source_row + x]
                if not check or texel.a > 0:
                    self.colors[x + y * self.width] = texel

    def fill_texture_transformed(
        self, width: int, height: int, texture: Image, transform: Mat3
    ) -> None:
        """Draw the top-left ``width`` by ``height`` part of a texture through a 2D transform."""
        corners = [
            transform.transform_point(corner)
            for corner in ((0, 0), (width, 0), (0, height), (width, height))
        ]
        xs = [c[0] for c in corners]
        ys = [c[1] for c in corners]
        min_x = int(max(min(xs), 0))
        max_x = int(min(max(xs), self.width - 1))
        min_y = int(max(min(ys), 0))
        max_y = int(min(max(ys), self.height - 1))
        inverse = transform.inverse()
        step_x = inverse.x_step()
        step_y = inverse.y_step()
        row_x, row_y = inverse.transform_point((min_x, min_y))
        check = RENDER_SETTINGS.check_opacity
        for j in range(min_y, max_y):
            tx, ty = row_x, row_y
            for i in range(min_x, max_x):
                if 0 <= tx < width and 0 <= ty < height:
                    texel = texture.colors[int(tx) + int(ty) * texture.width]
                    if not check or texel.a > 0:
                        self.colors[i + j * self.width] = texel
                tx += step_x[0]
                ty += step_x[1]
            row_x += step_y[0]
            row_y += step_y[1]

    def fill_texture_scaled(self, rect: Sequence[float], texture: Image) -> None:
        """Draw a whole texture stretched over the rectangle ``(x, y, w, h)``."""
        x, y, w, h = rect
        transform = Mat3.cross(
            Mat3.translate2d((x, y)),
            Mat3.mult2d((w / texture.width, h / texture.height)),
        )
        self.fill_texture_transformed(texture.width, texture.height, texture, transform)

    def window_space(self, view: Mat4, point: Sequence[float]) -> Vec3:
        """Project a point to ``(pixel x, pixel y, distance)``; y grows downwards."""
        x, y, z = view.transform_point(point)
        return (
            (x * self.width + self.width) * 0.5,
            (-y * self.height + self.height) * 0.5,
            z,
        )