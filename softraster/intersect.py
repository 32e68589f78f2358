"""Rays and shapes they can hit."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence

Vec3 = tuple[float, float, float]


@dataclass(frozen=True)
class Ray:
    """A half-line from ``position``; ``direction`` is normalised on creation."""

    position: Vec3
    direction: Vec3

    def __post_init__(self) -> None:
        length = math.sqrt(sum(c * c for c in self.direction))
        if length == 0:
            raise ValueError("a ray needs a non-zero direction")
        object.__setattr__(self, "position", tuple(float(c) for c in self.position))
        object.__setattr__(self, "direction", tuple(c / length for c in self.direction))

    def point_at(self, distance: float) -> Vec3:
        """The point ``distance`` along the ray."""
        return tuple(p + d * distance for p, d in zip(self.position, self.direction))  # type: ignore[return-value]


@dataclass(frozen=True)
class Intersection:
    """Where a ray hit a shape: the shape, the surface normal and the distance."""

    shape: Intersectable
    normal: Vec3
    distance: float


class Intersectable(ABC):
    """A shape that rays can be tested against."""

    @abstractmethod
    def intersect(self, ray: Ray) -> Intersection | None:
        """Return the nearest hit in front of the ray, or None."""


@dataclass(frozen=True, eq=False)
class Cuboid(Intersectable):
    """An axis-aligned box with corner ``position`` and extent ``size``."""

    position: Sequence[float]
    size: Sequence[float]

    def intersect(self, ray: Ray) -> Intersection | None:
        t_min, t_max = -math.inf, math.inf
        entry_axis = exit_axis = 0
        for axis in range(3):
            origin = ray.position[axis]
            direction = ray.direction[axis]
            low = self.position[axis]
            high = low + self.size[axis]
            if direction == 0:
                if min(low, high) <= origin <= max(low, high):
                    continue
                return None
            t0 = (low - origin) / direction
            t1 = (high - origin) / direction
            near, far = min(t0, t1), max(t0, t1)
            if near > t_min:
                t_min, entry_axis = near, axis
            if far < t_max:
                t_max, exit_axis = far, axis
        if not (t_max >= t_min and t_max >= 0):
            return None
        normal = [0.0, 0.0, 0.0]
        if t_min >= 0:
            normal[entry_axis] = -math.copysign(1.0, ray.direction[entry_axis])
        else:
            normal[exit_axis] = math.copysign(1.0, ray.direction[exit_axis])
        return Intersection(self, tuple(normal), max(t_min, 0.0))  # type: ignore[arg-type]