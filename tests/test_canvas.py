import pytest

from softraster.canvas import Canvas
from softraster.color import RENDER_SETTINGS, Color
from softraster.image import Image
from softraster.matrix3 import Mat3
from softraster.matrix4 import Mat4

RED = Color(255, 0, 0)
BLUE = Color(0, 0, 255)
WHITE = Color(255, 255, 255)


def _colored(canvas, color):
    return {
        (x, y)
        for y in range(canvas.height)
        for x in range(canvas.width)
        if canvas.get_pixel(x, y) == color
    }


class PositionBrush:
    def get_color(self, pos):
        x, y = pos
        return Color(int(x), int(y), 7)


def test_new_canvas_transparent_and_depth_zero():
    canvas = Canvas(3, 2)
    assert all(c == Color.TRANSPARENT for c in canvas.colors)
    assert canvas.get_depth(2, 1) == 0.0


def test_out_of_bounds_reads():
    canvas = Canvas(3, 3)
    canvas.clear_color(RED)
    assert canvas.get_pixel(-1, 0) == Color.TRANSPARENT
    assert canvas.get_pixel(3, 0) == Color.TRANSPARENT
    assert canvas.get_depth(0, 5) == -1


def test_fill_pixel_ignores_outside():
    canvas = Canvas(2, 2)
    canvas.fill_pixel(5, 5, RED)
    canvas.fill_pixel(1, 0, RED)
    assert _colored(canvas, RED) == {(1, 0)}


def test_clear_depth_buffer_default():
    canvas = Canvas(2, 2)
    canvas.clear_depth_buffer()
    assert canvas.depth_buffer == [RENDER_SETTINGS.max_distance] * 4
    canvas.clear_depth_buffer(5.0)
    assert canvas.get_depth(1, 1) == 5.0


def test_fill_pixel_3d_keeps_nearest():
    canvas = Canvas(2, 2)
    canvas.clear_depth_buffer(10.0)
    canvas.fill_pixel_3d(0, 0, 5.0, RED)
    canvas.fill_pixel_3d(0, 0, 8.0, BLUE)
    assert canvas.get_pixel(0, 0) == RED
    assert canvas.get_depth(0, 0) == 5.0
    canvas.fill_pixel_3d(0, 0, 1.0, BLUE)
    assert canvas.get_pixel(0, 0) == BLUE


def test_no_depth_buffer_raises():
    canvas = Canvas(2, 2, with_depth=False)
    with pytest.raises(ValueError):
        canvas.fog(RED)
    with pytest.raises(ValueError):
        canvas.get_depth(0, 0)


def test_fill_respects_opacity(monkeypatch):
    canvas = Canvas(2, 2)
    canvas.fill(RED)
    assert len(_colored(canvas, RED)) == 4
    canvas.fill(Color.TRANSPARENT)
    assert len(_colored(canvas, RED)) == 4
    monkeypatch.setattr(RENDER_SETTINGS, "check_opacity", False)
    canvas.fill(Color.TRANSPARENT)
    assert len(_colored(canvas, Color.TRANSPARENT)) == 4


def test_fill_rectangle_cropped():
    canvas = Canvas(5, 5)
    canvas.fill_rectangle((-2, -2, 4, 4), RED)
    assert _colored(canvas, RED) == {(x, y) for x in range(2) for y in range(2)}


def test_fill_rectangle_brush_uses_position():
    canvas = Canvas(4, 4)
    canvas.fill_rectangle_brush((1, 1, 2, 2), PositionBrush())
    for x in (1, 2):
        for y in (1, 2):
            assert canvas.get_pixel(x, y) == PositionBrush().get_color((x, y))
    assert canvas.get_pixel(0, 0) == Color.TRANSPARENT


def test_draw_rectangle_leaves_interior():
    canvas = Canvas(6, 6)
    canvas.draw_rectangle((0, 0, 6, 6), 1, RED)
    border = {(x, y) for x in range(6) for y in range(6) if x in (0, 5) or y in (0, 5)}
    assert _colored(canvas, RED) == border


def test_fill_circle_symmetric():
    canvas = Canvas(11, 11)
    canvas.fill_circle(0, 0, 11, 11, lambda pos: RED)
    filled = _colored(canvas, RED)
    assert (5, 5) in filled
    assert (0, 0) not in filled and (10, 10) not in filled
    assert all((10 - x, y) in filled for x, y in filled)


def test_fill_circle_centered_matches_fill_circle():
    a = Canvas(10, 10)
    b = Canvas(10, 10)
    a.fill_circle_centered(5, 5, 6, 4, lambda pos: RED)
    b.fill_circle(2, 3, 6, 4, lambda pos: RED)
    assert a.colors == b.colors


def test_flood_fill_stops_at_wall():
    canvas = Canvas(5, 4)
    canvas.draw_line((2, 0), (2, 3), BLUE)
    canvas.flood_fill(0, 0, RED)
    assert _colored(canvas, RED) == {(x, y) for x in range(2) for y in range(4)}
    assert all(canvas.get_pixel(x, y) == Color.TRANSPARENT for x in (3, 4) for y in range(4))


def test_flood_fill_same_color_is_noop():
    canvas = Canvas(3, 3)
    canvas.clear_color(RED)
    canvas.flood_fill(1, 1, RED)
    assert len(_colored(canvas, RED)) == 9


def test_draw_line_diagonal_and_reverse():
    canvas = Canvas(5, 5)
    canvas.draw_line((0, 0), (4, 4), RED)
    assert _colored(canvas, RED) == {(i, i) for i in range(5)}
    forward = Canvas(6, 3)
    backward = Canvas(6, 3)
    forward.draw_line((0, 1), (5, 1), RED)
    backward.draw_line((5, 1), (0, 1), RED)
    assert forward.colors == backward.colors


def test_draw_ellipse_symmetric():
    canvas = Canvas(21, 21)
    canvas.draw_ellipse(2, 4, 16, 12, RED)
    drawn = _colored(canvas, RED)
    cx, cy = 2 + 8, 4 + 6
    assert (cx, cy - 6) in drawn and (cx, cy + 6) in drawn
    assert all((2 * cx - x, y) in drawn and (x, 2 * cy - y) in drawn for x, y in drawn)
    assert (cx, cy) not in drawn


def test_draw_rotated_ellipse_stays_near_outline():
    canvas = Canvas(30, 30)
    canvas.draw_rotated_ellipse((15, 15), (8, 5), 0.7, RED)
    drawn = _colored(canvas, RED)
    assert drawn
    assert all(abs(x - 15) <= 9 and abs(y - 15) <= 9 for x, y in drawn)
    assert (15, 15) not in drawn


def test_visualize_formula_constant():
    canvas = Canvas(20, 20)
    canvas.visualize_formula((0, 0, 20, 20), (0, -1, 1, 2), lambda x: 0.0, lambda pos: RED)
    drawn = _colored(canvas, RED)
    assert drawn
    assert all(8 <= y < 12 for _, y in drawn)


def test_fade_identity_and_zero():
    canvas = Canvas(2, 2)
    canvas.clear_color(RED)
    canvas.fade(1.0)
    assert len(_colored(canvas, RED)) == 4
    canvas.fade(0.0)
    assert len(_colored(canvas, Color.TRANSPARENT)) == 4


def test_fade_to_weights():
    canvas = Canvas(2, 1)
    canvas.clear_color(RED)
    canvas.fade_to(1.0, BLUE)
    assert canvas.colors == [RED, RED]
    canvas.fade_to(0.0, BLUE)
    assert canvas.colors == [BLUE, BLUE]


def test_fog_by_depth():
    canvas = Canvas(2, 1)
    canvas.clear_color(RED)
    canvas.set_depth(1, 0, RENDER_SETTINGS.max_distance)
    canvas.fog(WHITE)
    assert canvas.get_pixel(0, 0) == RED
    assert canvas.get_pixel(1, 0) == WHITE


def _texture():
    return Image(2, 2, [RED, BLUE, WHITE, Color.TRANSPARENT])


def test_fill_texture_at_copies_and_skips_transparent():
    canvas = Canvas(4, 4)
    canvas.clear_color(Color(1, 2, 3))
    canvas.fill_texture_at((1, 1), _texture())
    assert canvas.get_pixel(1, 1) == RED
    assert canvas.get_pixel(2, 1) == BLUE
    assert canvas.get_pixel(1, 2) == WHITE
    assert canvas.get_pixel(2, 2) == Color(1, 2, 3)


def test_fill_texture_at_negative_position():
    canvas = Canvas(3, 3)
    canvas.fill_texture_at((-1, -1), Image(2, 2, [RED, BLUE, WHITE, RED]))
    assert _colored(canvas, RED) == {(0, 0)}
    assert canvas.get_pixel(1, 0) == Color.TRANSPARENT


def test_fill_texture_scaled_blocks():
    canvas = Canvas(5, 5)
    texture = Image(2, 2, [RED, BLUE, WHITE, RED])
    canvas.fill_texture_scaled((0, 0, 4, 4), texture)
    for x in range(4):
        for y in range(4):
            assert canvas.get_pixel(x, y) == texture.get_pixel(x // 2, y // 2)


def test_fill_texture_transformed_singular():
    canvas = Canvas(4, 4)
    with pytest.raises(ZeroDivisionError):
        canvas.fill_texture_transformed(2, 2, _texture(), Mat3.scale2d(0.0))


def test_window_space_identity_center():
    canvas = Canvas(8, 6)
    assert canvas.window_space(Mat4(), (0.0, 0.0, 2.5)) == (4.0, 3.0, 2.5)
    x, y, _ = canvas.window_space(Mat4(), (1.0, 1.0, 0.0))
    assert (x, y) == (8.0, 0.0)


def test_copy_is_independent_and_from_image_shares():
    canvas = Canvas(2, 2)
    duplicate = canvas.copy()
    duplicate.fill_pixel(0, 0, RED)
    duplicate.set_depth(0, 0, 3.0)
    assert canvas.get_pixel(0, 0) == Color.TRANSPARENT
    assert canvas.get_depth(0, 0) == 0.0
    image = Image(2, 2)
    shared = Canvas.from_image(image)
    shared.fill_pixel(1, 1, RED)
    assert image.get_pixel(1, 1) == RED
    assert shared.depth_buffer is None


def test_get_color_samples_by_fraction():
    canvas = Canvas(4, 4)
    canvas.fill_pixel(2, 2, RED)
    assert canvas.get_color((0.5, 0.5)) == RED