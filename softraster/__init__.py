"""A pure-Python software rasterizer with matrices, textures, meshes and depth-tested triangle drawing."""

__version__ = "0.1.0"

__all__ = [
    "canvas",
    "clock",
    "color",
    "colorspace",
    "hsf",
    "image",
    "intersect",
    "matrix3",
    "matrix4",
    "mesh",
    "pipeline",
    "rasterizer",
    "squaretex",
]