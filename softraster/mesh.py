"""Triangle meshes: loading from OBJ text, lighting and drawing."""

from __future__ import annotations

import math
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from softraster.canvas import Canvas
from softraster.color import Color
from softraster.matrix4 import Mat4
from softraster.pipeline import draw_triangles_plain, draw_triangles_textured

Vec2 = tuple[float, float]
Vec3 = tuple[float, float, float]
Face = tuple[int, int, int]


def generate_index_buffer(size: int) -> list[Face]:
    """Indices ``0 .. size-1`` grouped into triangles of three consecutive vertices."""
    return [(i, i + 1, i + 2) for i in range(0, size - size % 3, 3)]


def light_level_z(normal: Sequence[float]) -> Vec3:
    """Light level for a unit normal, with the light shining from +z towards -z."""
    level = normal[2] * 0.4 + 0.6
    return (level, level, level)


def _normalized(vector: Sequence[float]) -> Vec3:
    length = math.sqrt(sum(c * c for c in vector))
    if length == 0:
        raise ValueError("degenerate triangle has no normal")
    return (vector[0] / length, vector[1] / length, vector[2] / length)


def _face_index(word: str) -> int:
    return int(word.split("/", 1)[0]) - 1


@dataclass
class Mesh:
    """Vertices with triangles indexing them, drawn textured or in plain colours.

    ``texcoords`` has one coordinate per vertex, ``colors`` one colour per
    triangle and ``lights`` three light levels per triangle.
    """

    vertices: list[Vec3]
    indices: list[Face]
    texcoords: list[Vec2] | None = None
    texture: object | None = None
    colors: list[Color] | None = None
    lights: list[tuple[Vec3, Vec3, Vec3]] | None = None

    @staticmethod
    def parse_obj(text: str) -> Mesh:
        """Read positions, texture coordinates and triangular faces from OBJ text."""
        positions: list[Vec3] = []
        texcoords: list[Vec2] = []
        indices: list[Face] = []
        for line in text.split("\n"):
            words = line.split()
            if not words:
                continue
            kind = words[0]
            if kind == "v":
                positions.append((float(words[1]), float(words[2]), float(words[3])))
            elif kind == "vt":
                texcoords.append((float(words[1]), float(words[2])))
            elif kind == "f":
                if len(words) < 4:
                    raise ValueError(f"face needs three vertices: {line.strip()!r}")
                indices.append(tuple(_face_index(w) for w in words[1:4]))  # type: ignore[arg-type]
        return Mesh(positions, indices, texcoords)

    @staticmethod
    def from_obj(path: str | Path) -> Mesh:
        """Load a mesh from an OBJ file."""
        return Mesh.parse_obj(Path(path).read_text(encoding="utf-8"))

    def calculate_light_levels(self) -> None:
        """Give each triangle a flat light level from its face normal."""
        lights = []
        for i0, i1, i2 in self.indices:
            v0, v1, v2 = self.vertices[i0], self.vertices[i1], self.vertices[i2]
            a = (v1[0] - v0[0], v1[1] - v0[1], v1[2] - v0[2])
            b = (v2[0] - v0[0], v2[1] - v0[1], v2[2] - v0[2])
            normal = _normalized(
                (a[1] * b[2] - a[2] * b[1], a[2] * b[0] - a[0] * b[2], a[0] * b[1] - a[1] * b[0])
            )
            level = light_level_z(normal)
            lights.append((level, level, level))
        self.lights = lights

    def apply_matrix(self, matrix: Mat4) -> None:
        """Transform every vertex by ``matrix``."""
        self.vertices = [matrix.transform_point(vertex) for vertex in self.vertices]

    def draw(self, canvas: Canvas, view: Mat4) -> None:
        """Draw the mesh, textured when it has a texture and coordinates."""
        if self.texcoords and self.texture is not None:
            draw_triangles_textured(
                canvas, self.vertices, self.texcoords, self.indices, view, self.texture, self.lights
            )
            return
        if self.colors is None:
            raise ValueError("a mesh without texture needs triangle colours to be drawn")
        draw_triangles_plain(canvas, self.vertices, self.colors, self.indices, view, self.lights)