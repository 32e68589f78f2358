"""4x4 matrices for 3D transforms and projections."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

Vec3 = tuple[float, float, float]

_IDENTITY = (
    (1.0, 0.0, 0.0, 0.0),
    (0.0, 1.0, 0.0, 0.0),
    (0.0, 0.0, 1.0, 0.0),
    (0.0, 0.0, 0.0, 1.0),
)


def _diagonal(values: Sequence[float]) -> tuple[tuple[float, ...], ...]:
    return tuple(
        tuple(value if column == row else 0.0 for column in range(4))
        for row, value in enumerate(values)
    )


def _sub(a: Sequence[float], b: Sequence[float]) -> Vec3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def _dot(a: Sequence[float], b: Sequence[float]) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def _cross(a: Sequence[float], b: Sequence[float]) -> Vec3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def _normalized(vector: Sequence[float]) -> Vec3:
    length = math.sqrt(_dot(vector, vector))
    if length == 0:
        raise ValueError("cannot normalise a zero-length vector")
    return (vector[0] / length, vector[1] / length, vector[2] / length)


@dataclass(frozen=True)
class Mat4:
    """A 4x4 matrix; ``rows[r][c]`` is the weight of input ``c`` in output ``r``.

    Points are treated as ``(x, y, z, 1)``.
    """

    rows: tuple[tuple[float, float, float, float], ...] = _IDENTITY

    def __post_init__(self) -> None:
        rows = tuple(tuple(float(value) for value in row) for row in self.rows)
        if len(rows) != 4 or any(len(row) != 4 for row in rows):
            raise ValueError("a Mat4 needs four rows of four values")
        object.__setattr__(self, "rows", rows)

    def transform_point(self, point: Sequence[float]) -> Vec3:
        """Transform a point; x and y are divided by w when w is positive, z never is."""
        x, y, z = point
        out_x, out_y, out_z, w = (
            row[0] * x + row[1] * y + row[2] * z + row[3] for row in self.rows
        )
        if w > 0:
            out_x /= w
            out_y /= w
        return (out_x, out_y, out_z)

    @staticmethod
    def rotate3d(axis: Sequence[float], angle: float) -> Mat4:
        """Rotation by ``angle`` radians around a 3D axis."""
        x, y, z = _normalized(axis)
        sin_r = math.sin(angle)
        cos_r = math.cos(angle)
        min_cos = 1 - cos_r
        return Mat4(
            (
                (cos_r + x * x * min_cos, x * y * min_cos - z * sin_r, x * z * min_cos + y * sin_r, 0),
                (y * x * min_cos + z * sin_r, cos_r + y * y * min_cos, y * z * min_cos - x * sin_r, 0),
                (z * x * min_cos - y * sin_r, z * y * min_cos + x * sin_r, cos_r + z * z * min_cos, 0),
                (0, 0, 0, 1),
            )
        )

    @staticmethod
    def uniform_scale(scalar: float) -> Mat4:
        """Scale x, y and z by one factor, keeping w."""
        return Mat4(_diagonal((scalar, scalar, scalar, 1.0)))

    @staticmethod
    def scale4d(scale_x: float, scale_y: float, scale_z: float, scale_w: float) -> Mat4:
        """Scale each of the four coordinates."""
        return Mat4(_diagonal((scale_x, scale_y, scale_z, scale_w)))

    @staticmethod
    def scale3d(scale: Sequence[float]) -> Mat4:
        """Scale x, y and z by the components of ``scale``."""
        sx, sy, sz = scale
        return Mat4(_diagonal((sx, sy, sz, 1.0)))

    @staticmethod
    def translate3d(offset: Sequence[float]) -> Mat4:
        """Translation by a 3D offset."""
        ox, oy, oz = offset
        return Mat4(((1, 0, 0, ox), (0, 1, 0, oy), (0, 0, 1, oz), (0, 0, 0, 1)))

    @staticmethod
    def cross(last: Mat4, first: Mat4) -> Mat4:
        """Return the matrix that applies ``first`` and then ``last``."""
        columns = tuple(zip(*first.rows))
        return Mat4(
            tuple(
                tuple(sum(a * b for a, b in zip(row, column)) for column in columns)
                for row in last.rows
            )
        )

    @staticmethod
    def perspective_fov(
        fov: float, width: float, height: float, z_near: float, z_far: float
    ) -> Mat4:
        """Perspective projection with a vertical field of view in radians."""
        h = math.cos(0.5 * fov) / math.sin(0.5 * fov)
        w = h * height / width
        depth = z_far - z_near
        return Mat4(
            (
                (w, 0, 0, 0),
                (0, h, 0, 0),
                (0, 0, -(z_far + z_near) / depth, -(2 * z_far * z_near) / depth),
                (0, 0, -1, 0),
            )
        )

    @staticmethod
    def look_at(eye: Sequence[float], center: Sequence[float], up: Sequence[float]) -> Mat4:
        """View matrix for a camera at ``eye`` looking towards ``center``."""
        screen_z = _normalized(_sub(center, eye))
        screen_x = _normalized(_cross(screen_z, up))
        screen_y = _cross(screen_z, screen_x)
        return Mat4(
            (
                (*screen_x, -_dot(screen_x, eye)),
                (*screen_y, -_dot(screen_y, eye)),
                (-screen_z[0], -screen_z[1], -screen_z[2], _dot(screen_z, eye)),
                (0, 0, 0, 1),
            )
        )

    @staticmethod
    def combine(*args: Mat4) -> Mat4:
        """Chain matrices, applied from the first to the last."""
        if not args:
            raise ValueError("combine needs at least one matrix")
        result = args[0]
        for matrix in args[1:]:
            result = Mat4.cross(matrix, result)
        return result


Y_TO_Z = Mat4(((1, 0, 0, 0), (0, 0, 1, 0), (0, 1, 0, 0), (0, 0, 0, 1)))