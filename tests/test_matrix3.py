import math

import pytest

from softraster.matrix3 import Mat3


def _flat(matrix):
    return [value for row in matrix.rows for value in row]


def _assert_close(a, b):
    assert _flat(a) == pytest.approx(_flat(b), abs=1e-9)


SAMPLE = Mat3(((2, 1, 0.5), (0.3, 3, -1), (1, -2, 4)))


def test_default_is_identity():
    assert Mat3().transform_point3((1.5, -2.0, 3.0)) == pytest.approx((1.5, -2.0, 3.0))


def test_inverse_round_trip():
    _assert_close(Mat3.cross(SAMPLE, SAMPLE.inverse()), Mat3())
    _assert_close(Mat3.cross(SAMPLE.inverse(), SAMPLE), Mat3())


def test_singular_inverse_raises():
    with pytest.raises(ZeroDivisionError):
        Mat3.scale3d(0).inverse()


def test_determinant_is_multiplicative():
    other = Mat3.rotate3d((1, 2, 3), 0.7)
    product = Mat3.cross(SAMPLE, other)
    assert product.determinant() == pytest.approx(SAMPLE.determinant() * other.determinant())


def test_transpose_twice_is_identity_operation():
    assert SAMPLE.transposed().transposed() == SAMPLE
    assert SAMPLE.transposed().determinant() == pytest.approx(SAMPLE.determinant())


def test_translate_moves_point():
    offset = (3.0, -4.5)
    point = (1.0, 2.0)
    assert Mat3.translate2d(offset).transform_point(point) == pytest.approx(
        (point[0] + offset[0], point[1] + offset[1])
    )


def test_steps_and_start_of_translation():
    matrix = Mat3.translate2d((7.0, 9.0))
    assert matrix.start() == pytest.approx((7.0, 9.0))
    assert matrix.x_step() == pytest.approx((1.0, 0.0))
    assert matrix.y_step() == pytest.approx((0.0, 1.0))


def test_rotate2d_quarter_turn():
    assert Mat3.rotate2d(math.pi / 2).transform_point((1.0, 0.0)) == pytest.approx(
        (0.0, -1.0), abs=1e-12
    )


def test_rotate2d_inverse_rotation_cancels():
    _assert_close(Mat3.combine(Mat3.rotate2d(0.9), Mat3.rotate2d(-0.9)), Mat3())


def test_rotate2d_around_keeps_center():
    center = (5.0, -3.0)
    assert Mat3.rotate2d_around(center, 1.3).transform_point(center) == pytest.approx(center)


def test_rotate3d_preserves_axis_and_length():
    axis = (0.0, 0.0, 2.0)
    matrix = Mat3.rotate3d(axis, 0.8)
    x, y, z = matrix.transform_point3((1.0, 2.0, 3.0))
    assert z == pytest.approx(3.0)
    assert math.hypot(x, y, z) == pytest.approx(math.hypot(1.0, 2.0, 3.0))
    assert matrix.determinant() == pytest.approx(1.0)


def test_rotate3d_zero_axis_raises():
    with pytest.raises(ValueError):
        Mat3.rotate3d((0, 0, 0), 1.0)


def test_scale2d_scalar_matches_pair_and_mult2d():
    assert Mat3.scale2d(2.5) == Mat3.scale2d((2.5, 2.5))
    assert Mat3.scale2d((2, 3)) == Mat3.mult2d((2, 3))


def test_mult3d_scales_componentwise():
    assert Mat3.mult3d((2, 3, 4)).transform_point3((1, 1, 1)) == pytest.approx((2, 3, 4))
    assert Mat3.scale3d(2) == Mat3.mult3d((2, 2, 2))


def test_from_rect_to_rect_maps_corners():
    source = (0.0, 0.0, 10.0, 10.0)
    target = (100.0, 200.0, 20.0, 40.0)
    matrix = Mat3.from_rect_to_rect(source, target)
    assert matrix.transform_point((0.0, 0.0)) == pytest.approx((100.0, 200.0))
    assert matrix.transform_point((10.0, 10.0)) == pytest.approx((100.0 + 20.0, 200.0 + 40.0))
    assert matrix.transform_rect(source) == pytest.approx(target)


def test_resize_size_ignores_translation():
    matrix = Mat3.combine(Mat3.scale2d(3), Mat3.translate2d((50, 60)))
    assert matrix.resize_size((2.0, 4.0)) == Mat3.scale2d(3).resize_size((2.0, 4.0))


def test_combine_applies_first_to_last():
    translate = Mat3.translate2d((1, 0))
    scale = Mat3.scale2d(2)
    assert Mat3.combine(translate, scale) == Mat3.cross(scale, translate)
    expected = scale.transform_point(translate.transform_point((1, 1)))
    assert Mat3.combine(translate, scale).transform_point((1, 1)) == pytest.approx(expected)


def test_combine_needs_a_matrix():
    with pytest.raises(ValueError):
        Mat3.combine()


def test_scaled_columns():
    assert Mat3().scaled_columns(2, 3, 4) == Mat3.mult3d((2, 3, 4))


def test_scalar_multiplication_both_sides():
    assert SAMPLE * 2 == 2 * SAMPLE
    assert (SAMPLE * 2).transform_point3((1, 2, 3)) == pytest.approx(
        tuple(2 * v for v in SAMPLE.transform_point3((1, 2, 3)))
    )


def test_bad_shape_raises():
    with pytest.raises(ValueError):
        Mat3(((1, 0), (0, 1)))