"""3x3 matrices for 2D affine transforms and 3D linear transforms."""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real
from typing import Sequence

Vec2 = tuple[float, float]
Vec3 = tuple[float, float, float]
Rect = tuple[float, float, float, float]

_IDENTITY = ((1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0))


def _normalized(vector: Sequence[float]) -> Vec3:
    length = math.sqrt(sum(component * component for component in vector))
    if length == 0:
        raise ValueError("cannot normalise a zero-length axis")
    x, y, z = vector
    return (x / length, y / length, z / length)


@dataclass(frozen=True)
class Mat3:
    """A 3x3 matrix; ``rows[r][c]`` is the weight of input ``c`` in output ``r``.

    For 2D use, points are treated as ``(x, y, 1)`` so the third column
    holds the translation.
    """

    rows: tuple[tuple[float, float, float], ...] = _IDENTITY

    def __post_init__(self) -> None:
        rows = tuple(tuple(float(value) for value in row) for row in self.rows)
        if len(rows) != 3 or any(len(row) != 3 for row in rows):
            raise ValueError("a Mat3 needs three rows of three values")
        object.__setattr__(self, "rows", rows)

    def determinant(self) -> float:
        """Return the determinant."""
        (a, b, c), (d, e, f), (g, h, i) = self.rows
        return a * e * i + b * f * g + c * d * h - c * e * g - a * f * h - b * d * i

    def inverse(self) -> Mat3:
        """Return the inverse matrix; a singular matrix raises ZeroDivisionError."""
        det = self.determinant()
        if det == 0:
            raise ZeroDivisionError("matrix is singular and has no inverse")
        m = 1.0 / det
        (a, b, c), (d, e, f), (g, h, i) = self.rows
        return Mat3(
            (
                ((e * i - f * h) * m, (c * h - b * i) * m, (b * f - c * e) * m),
                ((f * g - d * i) * m, (a * i - c * g) * m, (c * d - a * f) * m),
                ((d * h - e * g) * m, (b * g - a * h) * m, (a * e - b * d) * m),
            )
        )

    def transposed(self) -> Mat3:
        """Return the transpose."""
        return Mat3(tuple(zip(*self.rows)))

    def x_step(self) -> Vec2:
        """Change of the 2D output when the input x grows by one."""
        return (self.rows[0][0], self.rows[1][0])

    def y_step(self) -> Vec2:
        """Change of the 2D output when the input y grows by one."""
        return (self.rows[0][1], self.rows[1][1])

    def start(self) -> Vec2:
        """The 2D output at input (0, 0)."""
        return (self.rows[0][2], self.rows[1][2])

    @staticmethod
    def translate2d(offset: Sequence[float]) -> Mat3:
        """Translation by a 2D offset."""
        ox, oy = offset
        return Mat3(((1, 0, ox), (0, 1, oy), (0, 0, 1)))

    @staticmethod
    def rotate2d(angle: float) -> Mat3:
        """Rotation around the origin by ``angle`` radians."""
        sin_a = math.sin(angle)
        cos_a = math.cos(angle)
        return Mat3(((cos_a, sin_a, 0), (-sin_a, cos_a, 0), (0, 0, 1)))

    @staticmethod
    def rotate2d_around(around: Sequence[float], angle: float) -> Mat3:
        """Rotation by ``angle`` radians around a 2D point."""
        ax, ay = around
        return Mat3.combine(
            Mat3.translate2d((-ax, -ay)),
            Mat3.rotate2d(angle),
            Mat3.translate2d((ax, ay)),
        )

    @staticmethod
    def rotate3d(axis: Sequence[float], angle: float) -> Mat3:
        """Rotation by ``angle`` radians around a 3D axis."""
        x, y, z = _normalized(axis)
        sin_r = math.sin(angle)
        cos_r = math.cos(angle)
        min_cos = 1 - cos_r
        return Mat3(
            (
                (cos_r + x * x * min_cos, x * y * min_cos - z * sin_r, x * z * min_cos + y * sin_r),
                (y * x * min_cos + z * sin_r, cos_r + y * y * min_cos, y * z * min_cos - x * sin_r),
                (z * x * min_cos - y * sin_r, z * y * min_cos + x * sin_r, cos_r + z * z * min_cos),
            )
        )

    @staticmethod
    def scale2d(scalar: float | Sequence[float]) -> Mat3:
        """2D scale by one factor or by a pair of factors."""
        if isinstance(scalar, Real):
            sx = sy = scalar
        else:
            sx, sy = scalar
        return Mat3(((sx, 0, 0), (0, sy, 0), (0, 0, 1)))

    @staticmethod
    def scale3d(scalar: float) -> Mat3:
        """Uniform 3D scale."""
        return Mat3(((scalar, 0, 0), (0, scalar, 0), (0, 0, scalar)))

    @staticmethod
    def mult2d(vector: Sequence[float]) -> Mat3:
        """Multiply 2D points component-wise by ``vector``."""
        vx, vy = vector
        return Mat3(((vx, 0, 0), (0, vy, 0), (0, 0, 1)))

    @staticmethod
    def mult3d(vector: Sequence[float]) -> Mat3:
        """Multiply 3D points component-wise by ``vector``."""
        vx, vy, vz = vector
        return Mat3(((vx, 0, 0), (0, vy, 0), (0, 0, vz)))

    @staticmethod
    def from_rect_to_rect(rect_from: Sequence[float], rect_to: Sequence[float]) -> Mat3:
        """Map the rectangle ``(x, y, w, h)`` ``rect_from`` onto ``rect_to``."""
        fx, fy, fw, fh = rect_from
        tx, ty, tw, th = rect_to
        scale = Mat3.scale2d((tw / fw, th / fh))
        translate_from = Mat3.translate2d((-fx, -fy))
        translate_to = Mat3.translate2d((tx, ty))
        return Mat3.cross(translate_to, Mat3.cross(scale, translate_from))

    def scaled_columns(self, x: float, y: float, z: float) -> Mat3:
        """Return a copy whose x, y and z outputs are multiplied by the factors."""
        return Mat3(
            tuple(
                tuple(value * factor for value in row)
                for row, factor in zip(self.rows, (x, y, z))
            )
        )

    def transform_point3(self, point: Sequence[float]) -> Vec3:
        """Multiply a 3D vector by this matrix."""
        x, y, z = point
        return tuple(row[0] * x + row[1] * y + row[2] * z for row in self.rows)  # type: ignore[return-value]

    def transform_point(self, point: Sequence[float]) -> Vec2:
        """Transform a 2D point, taking its third coordinate as 1."""
        x, y = point
        r0, r1, _ = self.rows
        return (r0[0] * x + r0[1] * y + r0[2], r1[0] * x + r1[1] * y + r1[2])

    def transform_rect(self, rect: Sequence[float]) -> Rect:
        """Transform a rectangle ``(x, y, w, h)``: its corner as a point, its size without translation."""
        x, y, w, h = rect
        px, py = self.transform_point((x, y))
        sw, sh = self.resize_size((w, h))
        return (px, py, sw, sh)

    def resize_size(self, size: Sequence[float]) -> Vec2:
        """Transform a 2D size, ignoring translation."""
        w, h = size
        r0, r1, _ = self.rows
        return (r0[0] * w + r0[1] * h, r1[0] * w + r1[1] * h)

    @staticmethod
    def cross(last: Mat3, first: Mat3) -> Mat3:
        """Return the matrix that applies ``first`` and then ``last``."""
        columns = tuple(zip(*first.rows))
        return Mat3(
            tuple(
                tuple(sum(a * b for a, b in zip(row, column)) for column in columns)
                for row in last.rows
            )
        )

    @staticmethod
    def combine(*args: Mat3) -> Mat3:
        """Chain matrices, applied from the first to the last."""
        if not args:
            raise ValueError("combine needs at least one matrix")
        result = args[0]
        for matrix in args[1:]:
            result = Mat3.cross(matrix, result)
        return result

    def __mul__(self, other: object) -> Mat3:
        if not isinstance(other, Real):
            return NotImplemented
        return Mat3(tuple(tuple(value * other for value in row) for row in self.rows))

    def __rmul__(self, other: object) -> Mat3:
        return self.__mul__(other)