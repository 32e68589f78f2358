# softraster

softraster is a software rasterizer written in pure Python. It draws into
plain in-memory pixel buffers and needs neither a GPU nor a window system.

## What is in it

- `softraster.matrix3.Mat3` and `softraster.matrix4.Mat4`: immutable 3×3 and
  4×4 matrices for 2D and 3D transforms. They offer translation, rotation,
  scaling, inversion (`Mat3.inverse`), chaining (`cross`, `combine`),
  `Mat4.perspective_fov` and `Mat4.look_at`.
- `softraster.color`: the `Color` type (8-bit RGBA with `lerp`, `lit`,
  `scaled` and `average`) and `RenderSettings`. The shared `RENDER_SETTINGS`
  instance controls opacity checks, back-face culling, winding, the far
  distance and how texture coordinates are wrapped.
- `softraster.canvas.Canvas`: a color buffer with an optional depth buffer.
  It draws lines, ellipses (plain and rotated), rectangles, filled circles and
  function plots (`visualize_formula`). It also does flood fill, fading and
  fog, and it blits textures unscaled, scaled or through a `Mat3` transform.
- `softraster.rasterizer`: depth-tested scanline filling of screen-space
  triangles. A triangle can be filled with a flat color, blended by alpha, lit
  per vertex, or textured.
- `softraster.pipeline`: projects indexed triangle lists with a view matrix,
  clips them at distance zero, culls back faces and rasterizes what is left
  (`draw_triangles_plain`, `draw_triangles_textured`, `fill_pixels_3d`).
- `softraster.mesh.Mesh`: loads positions, texture coordinates and triangular
  faces from Wavefront OBJ text. It computes flat per-face light levels,
  applies matrices and draws itself.
- `softraster.image.Image`: loads any format Pillow reads, saves `.png` or
  `.bmp`, and samples pixels as a texture.
- `softraster.squaretex.SquareTexture`: a power-of-two square texture together
  with its averaged half-resolution levels.
- `softraster.intersect`: `Ray` and the axis-aligned `Cuboid`, whose
  `intersect` returns an `Intersection` or `None`.
- `softraster.colorspace`: `rgb_to_hsv` and `hsv_to_rgb`.
- `softraster.clock`: epoch time helpers, unit conversions and the time
  elapsed since the package was loaded.
- `softraster.hsf.HsfReader`: a reader for a small, human-readable key/value
  storage format.

## Installation

```
pip install .
```

To run the tests, install the test extra:

```
pip install ".[test]"
pytest
```

## Example: drawing a triangle and saving it

```python
from softraster.canvas import Canvas
from softraster.color import Color
from softraster.matrix4 import Mat4
from softraster.pipeline import draw_triangles_plain

canvas = Canvas(64, 64)
canvas.clear_color(Color(0, 0, 0))
canvas.clear_depth_buffer(256.0)

view = Mat4.combine(
    Mat4.look_at((0.0, 0.0, 3.0), (0.0, 0.0, 0.0), (0.0, 1.0, 0.0)),
    Mat4.perspective_fov(1.2, 64, 64, 0.1, 256.0),
)
vertices = [(-1.0, -1.0, 0.0), (1.0, -1.0, 0.0), (0.0, 1.0, 0.0)]
indices = [(0, 1, 2)]
colors = [Color(255, 0, 0)]

draw_triangles_plain(canvas, vertices, colors, indices, view, None)
canvas.save("triangle.png")
```

`Canvas` is an `Image`, so `save` writes the color buffer as PNG or BMP. The
file extension picks the format.

## Example: loading a mesh

```python
from softraster.color import Color
from softraster.mesh import Mesh

mesh = Mesh.from_obj("model.obj")
mesh.colors = [Color(200, 200, 200)] * len(mesh.indices)
mesh.calculate_light_levels()
mesh.draw(canvas, view)
```

A mesh is drawn textured when it has both texture coordinates and a `texture`
(any object with a `get_color(pos)` method). Otherwise it needs one color per
triangle, and `draw` raises `ValueError` if `colors` is not set.

## Example: reading a storage file

```python
from softraster.hsf import HsfReader

reader = HsfReader.from_text("size: 3, 4\nname: box // a comment\n")
print(reader.get_content("size").data)   # ['3', '4']
```

Keys and values are converted to lower case, and anything after `//` is
ignored. Commas inside brackets or quotes do not split values.

## What it does not do

softraster only renders into memory. It does not open windows, show anything
on screen, read keyboard or mouse input, or play sound. To see a result, save
the canvas with `save` or hand its `colors` list to a display library of your
choice.