"""Scanline filling of screen-space triangles with depth testing.

Vertices are ``(x, y, depth)`` in pixels; smaller depths are nearer. A pixel
is drawn only where the interpolated depth is nearer than the depth buffer,
which is then updated. Per-vertex values such as texture coordinates and
light levels are interpolated linearly across the triangle.
"""

from __future__ import annotations

import math
from typing import Iterator, NamedTuple, Sequence

from softraster.canvas import Canvas
from softraster.color import RENDER_SETTINGS, Color
from softraster.matrix3 import Mat3

Vertex = Sequence[float]


class _Plane(NamedTuple):
    """A value that varies linearly over the screen: ``start + dx * x + dy * y``."""

    start: float
    dx: float
    dy: float

    def at(self, x: float, y: float) -> float:
        return self.start + self.dx * x + self.dy * y


def barycentric_set(p0: Vertex, p1: Vertex, p2: Vertex) -> Mat3:
    """Matrix mapping a screen point ``(x, y, 1)`` to its barycentric weights.

    Row ``i`` gives the weight of vertex ``i``. Collinear points raise
    ZeroDivisionError.
    """
    x0, y0 = p0[0], p0[1]
    x1, y1 = p1[0], p1[1]
    x2, y2 = p2[0], p2[1]
    return Mat3(((x0, x1, x2), (y0, y1, y2), (1, 1, 1))).inverse()


def _plane(values: Sequence[float], bary: Mat3) -> _Plane:
    return _Plane(
        sum(value * row[2] for value, row in zip(values, bary.rows)),
        sum(value * row[0] for value, row in zip(values, bary.rows)),
        sum(value * row[1] for value, row in zip(values, bary.rows)),
    )


def _depth_buffer(canvas: Canvas) -> list[float]:
    if canvas.depth_buffer is None:
        raise ValueError("drawing triangles needs a canvas with a depth buffer")
    return canvas.depth_buffer


def _spans(
    width: int, height: int, v0: Vertex, v1: Vertex, v2: Vertex
) -> Iterator[tuple[int, int, int]]:
    """Yield ``(y, first x, end x)`` for each row covered by a triangle sorted on y."""
    x0, y0 = v0[0], v0[1]
    x1, y1 = v1[0], v1[1]
    x2, y2 = v2[0], v2[1]
    y_start = math.ceil(y0) if y0 > 0 else 0
    y_mid = math.ceil(y1) if y1 < height else height
    y_end = math.ceil(y2) if y2 < height else height

    def row(y: int, left: float, right: float) -> tuple[int, int, int]:
        first = math.ceil(left) if left > 0 else 0
        end = math.ceil(right) if right < width else width
        return y, first, end

    y = y_start
    if y < y_mid:
        a_step = (x2 - x0) / (y2 - y0)
        b_step = (x1 - x0) / (y1 - y0)
        offset = y_start - y0
        a = x0 + a_step * offset
        b = x0 + b_step * offset
        if a > b:
            a, b, a_step, b_step = b, a, b_step, a_step
        for y in range(y_start, y_mid):
            yield row(y, a, b)
            a += a_step
            b += b_step
        y = y_mid
    if y < y_end:
        a_step = (x2 - x0) / (y2 - y0)
        b_step = (x2 - x1) / (y2 - y1)
        a = x0 + a_step * (y - y0)
        b = x1 + b_step * (y - y1)
        if a > b:
            a, b, a_step, b_step = b, a, b_step, a_step
        for current in range(y, y_end):
            yield row(current, a, b)
            a += a_step
            b += b_step


def _rasterize(
    canvas: Canvas,
    vertices: Sequence[Vertex],
    attributes: Sequence[Sequence[float]] | None = None,
) -> Iterator[tuple[int, float, tuple[float, ...]]]:
    """Yield ``(index, depth, values)`` for covered pixels that pass the depth test."""
    depth_buffer = _depth_buffer(canvas)
    order = sorted(range(3), key=lambda i: vertices[i][1])
    points = [tuple(float(c) for c in vertices[i][:3]) for i in order]
    per_vertex = (
        [tuple(float(c) for c in attributes[i]) for i in order] if attributes else [()] * 3
    )
    try:
        bary = barycentric_set(*points)
    except ZeroDivisionError:
        return
    depth_plane = _plane([p[2] for p in points], bary)
    value_planes = [
        _plane([values[k] for values in per_vertex], bary)
        for k in range(len(per_vertex[0]))
    ]
    width = canvas.width
    for y, first, end in _spans(width, canvas.height, *points):
        depth = depth_plane.at(first, y)
        values = [plane.at(first, y) for plane in value_planes]
        base = y * width
        for x in range(first, end):
            index = base + x
            if depth < depth_buffer[index]:
                yield index, depth, tuple(values)
            depth += depth_plane.dx
            values = [value + plane.dx for value, plane in zip(values, value_planes)]


def fill_triangle_color(
    canvas: Canvas, v0: Vertex, v1: Vertex, v2: Vertex, color: Color
) -> None:
    """Fill a triangle with one colour; translucent colours are blended."""
    if color.a < 255:
        fill_triangle_opacity(canvas, v0, v1, v2, color)
        return
    depth_buffer = _depth_buffer(canvas)
    for index, depth, _ in _rasterize(canvas, (v0, v1, v2)):
        depth_buffer[index] = depth
        canvas.colors[index] = color


def fill_triangle_opacity(
    canvas: Canvas, v0: Vertex, v1: Vertex, v2: Vertex, color: Color
) -> None:
    """Blend a colour over a triangle, weighted by the colour's alpha."""
    depth_buffer = _depth_buffer(canvas)
    weight = color.a / 255
    for index, depth, _ in _rasterize(canvas, (v0, v1, v2)):
        depth_buffer[index] = depth
        canvas.colors[index] = canvas.colors[index].lerp(color, weight)


def fill_triangle_color_light(
    canvas: Canvas,
    v0: Vertex,
    v1: Vertex,
    v2: Vertex,
    lights: Sequence[Sequence[float]],
    color: Color,
) -> None:
    """Fill a triangle with one colour multiplied by per-vertex light levels.

    Translucent colours are blended without lighting.
    """
    if color.a < 255:
        fill_triangle_opacity(canvas, v0, v1, v2, color)
        return
    depth_buffer = _depth_buffer(canvas)
    keep_alpha = RENDER_SETTINGS.check_opacity
    for index, depth, light in _rasterize(canvas, (v0, v1, v2), lights):
        depth_buffer[index] = depth
        canvas.colors[index] = color.lit(light, keep_alpha)


def fill_triangle_texture(
    canvas: Canvas,
    v0: Vertex,
    v1: Vertex,
    v2: Vertex,
    texcoords: Sequence[Sequence[float]],
    texture: object,
    lights: Sequence[Sequence[float]] | None = None,
) -> None:
    """Fill a triangle from a texture, optionally multiplied by per-vertex light levels.

    ``texture`` needs a ``get_color(pos)`` method. Fully transparent texels are
    skipped when opacity is checked.
    """
    depth_buffer = _depth_buffer(canvas)
    sample = getattr(texture, "get_color", None)
    if not callable(sample):
        raise TypeError("a texture needs a get_color method")
    if lights is None:
        attributes = [tuple(t) for t in texcoords]
    else:
        attributes = [tuple(t) + tuple(light) for t, light in zip(texcoords, lights)]
    check = RENDER_SETTINGS.check_opacity
    for index, depth, values in _rasterize(canvas, (v0, v1, v2), attributes):
        texel = sample(values[:2])
        if texel.a > 0 or not check:
            if lights is not None:
                texel = texel.lit(values[2:5], check)
            depth_buffer[index] = depth
            canvas.colors[index] = texel