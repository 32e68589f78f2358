"""Projection, clipping and culling of indexed triangle lists before rasterising.

Vertices are projected with a view matrix into window space
``(pixel x, pixel y, distance)``. Triangles reaching behind the viewer are
clipped at distance zero, triangles entirely beyond the far distance are
dropped, back faces are culled and what is left is handed to the rasterizer.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterator, NamedTuple, Sequence

from softraster.canvas import Canvas
from softraster.color import RENDER_SETTINGS, Color
from softraster.matrix4 import Mat4
from softraster.rasterizer import (
    fill_triangle_color,
    fill_triangle_color_light,
    fill_triangle_texture,
)

Vec2 = tuple[float, float]
Vec3 = tuple[float, float, float]

_ZERO2: Vec2 = (0.0, 0.0)
_ZERO3: Vec3 = (0.0, 0.0, 0.0)
_ONE3: Vec3 = (1.0, 1.0, 1.0)


@dataclass
class Triangle:
    """Three corners with their world positions, texture coordinates,
    window-space positions and light levels."""

    points: tuple[Vec3, Vec3, Vec3] = (_ZERO3, _ZERO3, _ZERO3)
    texcoords: tuple[Vec2, Vec2, Vec2] = (_ZERO2, _ZERO2, _ZERO2)
    screen: tuple[Vec3, Vec3, Vec3] = (_ZERO3, _ZERO3, _ZERO3)
    lights: tuple[Vec3, Vec3, Vec3] = (_ONE3, _ONE3, _ONE3)


class _Corner(NamedTuple):
    point: Vec3
    texcoord: Vec2
    screen: Vec3
    light: Vec3


def _corners(triangle: Triangle) -> list[_Corner]:
    return [
        _Corner(*values)
        for values in zip(
            triangle.points, triangle.texcoords, triangle.screen, triangle.lights
        )
    ]


def _from_corners(*corners: _Corner) -> Triangle:
    return Triangle(
        points=tuple(c.point for c in corners),  # type: ignore[arg-type]
        texcoords=tuple(c.texcoord for c in corners),  # type: ignore[arg-type]
        screen=tuple(c.screen for c in corners),  # type: ignore[arg-type]
        lights=tuple(c.light for c in corners),  # type: ignore[arg-type]
    )


def _lerp(a: Sequence[float], b: Sequence[float], t: float) -> tuple[float, ...]:
    return tuple(x + (y - x) * t for x, y in zip(a, b))


def winded_correct(a: Sequence[float], b: Sequence[float], c: Sequence[float]) -> bool:
    """Whether the screen triangle ``a, b, c`` faces the viewer.

    Counter-clockwise winding counts as front-facing unless the render
    settings ask for clockwise winding.
    """
    ab_x, ab_y = b[0] - a[0], b[1] - a[1]
    ac_x, ac_y = c[0] - a[0], c[1] - a[1]
    winding = ab_x * ac_y - ab_y * ac_x
    return winding < 0 if RENDER_SETTINGS.clockwise else winding > 0


def order_by_y(ys: Sequence[float]) -> tuple[int, int, int]:
    """Indices of the three corners from the smallest y to the largest; ties keep their order."""
    if len(ys) != 3:
        raise ValueError("order_by_y needs exactly three values")
    first, second, third = sorted(range(3), key=lambda i: ys[i])
    return (first, second, third)


def _cut(canvas: Canvas, view: Mat4, inner: _Corner, outer: _Corner) -> _Corner:
    """The corner where the edge from ``inner`` to ``outer`` reaches distance zero."""
    t = (0.0 - inner.screen[2]) / (outer.screen[2] - inner.screen[2])
    point = _lerp(inner.point, outer.point, t)
    return _Corner(
        point,  # type: ignore[arg-type]
        _lerp(inner.texcoord, outer.texcoord, t),  # type: ignore[arg-type]
        canvas.window_space(view, point),
        _lerp(inner.light, outer.light, t),  # type: ignore[arg-type]
    )


def clip_against_screen(canvas: Canvas, view: Mat4, triangle: Triangle) -> list[Triangle]:
    """Clip a triangle against distance zero; returns zero, one or two triangles.

    The winding of the input is kept by the pieces.
    """
    behind = [screen[2] <= 0 for screen in triangle.screen]
    if not any(behind):
        if all(screen[2] >= RENDER_SETTINGS.max_distance for screen in triangle.screen):
            return []
        return [replace(triangle)]
    if all(behind):
        return []
    corners = _corners(triangle)
    inside = [c for c, back in zip(corners, behind) if not back]
    outside = [c for c, back in zip(corners, behind) if back]
    if behind[0] == behind[2] and behind[0] != behind[1]:
        swapped = outside if behind[0] else inside
        swapped[0], swapped[1] = swapped[1], swapped[0]
    if len(inside) == 1:
        kept = inside[0]
        return [
            _from_corners(
                kept,
                _cut(canvas, view, kept, outside[0]),
                _cut(canvas, view, kept, outside[1]),
            )
        ]
    first, second = inside
    cut_first = _cut(canvas, view, first, outside[0])
    cut_second = _cut(canvas, view, second, outside[0])
    return [
        _from_corners(first, second, cut_first),
        _from_corners(second, cut_second, cut_first),
    ]


def _drawable_order(canvas: Canvas, triangle: Triangle) -> tuple[int, int, int] | None:
    """The y order of a clipped triangle, or None if it should not be drawn."""
    xs = [s[0] for s in triangle.screen]
    ys = [s[1] for s in triangle.screen]
    min_x, max_x = min(xs), max(xs)
    if int(min_x) == int(max_x) or min_x > canvas.width or max_x < 0:
        return None
    if RENDER_SETTINGS.backface_culling and not winded_correct(*triangle.screen):
        return None
    order = order_by_y(ys)
    top, bottom = ys[order[0]], ys[order[2]]
    if int(top) == int(bottom) or top > canvas.height or bottom < 0:
        return None
    return order


def _visible(
    canvas: Canvas,
    view: Mat4,
    vertices: Sequence[Sequence[float]],
    indices: Sequence[Sequence[int]],
    texcoords: Sequence[Sequence[float]] | None,
    lights: Sequence[Sequence[Sequence[float]]] | None,
) -> Iterator[tuple[int, Triangle, tuple[int, int, int]]]:
    """Yield ``(triangle number, clipped triangle, y order)`` for every piece to draw."""
    projected = [canvas.window_space(view, vertex) for vertex in vertices]
    for number, triple in enumerate(indices):
        corner_indices = tuple(triple[:3])
        triangle = Triangle(
            points=tuple(tuple(float(c) for c in vertices[i][:3]) for i in corner_indices),  # type: ignore[arg-type]
            screen=tuple(projected[i] for i in corner_indices),  # type: ignore[arg-type]
        )
        if texcoords is not None:
            triangle.texcoords = tuple(
                tuple(float(c) for c in texcoords[i][:2]) for i in corner_indices
            )  # type: ignore[assignment]
        if lights is not None:
            triangle.lights = tuple(
                tuple(float(c) for c in light) for light in lights[number]
            )  # type: ignore[assignment]
        for piece in clip_against_screen(canvas, view, triangle):
            order = _drawable_order(canvas, piece)
            if order is not None:
                yield number, piece, order


def draw_triangles_plain(
    canvas: Canvas,
    vertices: Sequence[Sequence[float]],
    colors: Sequence[Color],
    indices: Sequence[Sequence[int]],
    view: Mat4,
    lights: Sequence[Sequence[Sequence[float]]] | None = None,
) -> None:
    """Draw indexed triangles, each in one colour.

    ``colors`` holds one colour per triangle; ``lights``, if given, holds
    three light levels ``(r, g, b)`` per triangle, one for each corner.
    """
    for number, triangle, order in _visible(canvas, view, vertices, indices, None, lights):
        screen = [triangle.screen[k] for k in order]
        color = colors[number]
        if lights is None:
            fill_triangle_color(canvas, *screen, color)
        else:
            fill_triangle_color_light(
                canvas, *screen, [triangle.lights[k] for k in order], color
            )


def draw_triangles_textured(
    canvas: Canvas,
    vertices: Sequence[Sequence[float]],
    texcoords: Sequence[Sequence[float]],
    indices: Sequence[Sequence[int]],
    view: Mat4,
    texture: object,
    lights: Sequence[Sequence[Sequence[float]]] | None = None,
) -> None:
    """Draw indexed triangles from a texture.

    ``texcoords`` holds one coordinate per vertex; ``lights``, if given, holds
    three light levels per triangle, one for each corner.
    """
    for _, triangle, order in _visible(canvas, view, vertices, indices, texcoords, lights):
        screen = [triangle.screen[k] for k in order]
        fill_triangle_texture(
            canvas,
            *screen,
            [triangle.texcoords[k] for k in order],
            texture,
            None if lights is None else [triangle.lights[k] for k in order],
        )


def fill_pixels_3d(
    canvas: Canvas,
    vertices: Sequence[Sequence[float]],
    colors: Sequence[Color],
    view: Mat4,
) -> None:
    """Draw each vertex as a single depth-tested pixel in its own colour."""
    for vertex, color in zip(vertices, colors):
        x, y, depth = canvas.window_space(view, vertex)
        canvas.fill_pixel_3d(x, y, depth, color)