import math

import pytest

from flocksim import vectors as vec


def test_vect_abs_of_axis_vector():
    assert vec.vect_abs((0.0, 0.0, 7.0)) == pytest.approx(7.0)


def test_vect_abs_xy_ignores_z():
    assert vec.vect_abs_xy((0.0, 2.5, 100.0)) == pytest.approx(2.5)


def test_sum_and_difference_round_trip():
    a = (1.5, -2.0, 3.25)
    b = (0.5, 4.0, -1.0)
    assert vec.vect_difference(vec.vect_sum(a, b), b) == pytest.approx(a)


def test_scale_keeps_components_beyond_dim():
    result = vec.scale((2.0, 3.0, 4.0), 10.0, 2)
    assert result == pytest.approx((20.0, 30.0, 4.0))


def test_unit_vect_has_length_one():
    u = vec.unit_vect((3.0, -1.0, 2.0))
    assert vec.vect_abs(u) == pytest.approx(1.0)


def test_unit_vect_of_zero_is_zero():
    assert vec.unit_vect((0.0, 0.0, 0.0)) == (0.0, 0.0, 0.0)


def test_normalize_vector_sets_length():
    v = vec.normalize_vector((1.0, 2.0, 2.0), 9.0)
    assert vec.vect_abs(v) == pytest.approx(9.0)
    assert vec.angle_of_two_vectors(v, (1.0, 2.0, 2.0)) == pytest.approx(0.0, abs=1e-7)


def test_scalar_product_respects_dim():
    a = (1.0, 2.0, 3.0)
    b = (4.0, 5.0, 6.0)
    assert vec.scalar_product(a, b, 2) == pytest.approx(
        vec.scalar_product((1.0, 2.0, 0.0), b, 3)
    )


def test_cross_product_is_orthogonal():
    a = (1.0, 2.0, -0.5)
    b = (-3.0, 0.25, 4.0)
    c = vec.vectorial_product(a, b)
    assert vec.scalar_product(a, c) == pytest.approx(0.0, abs=1e-12)
    assert vec.scalar_product(b, c) == pytest.approx(0.0, abs=1e-12)


def test_cross_product_anticommutes():
    a = (1.0, 2.0, 3.0)
    b = (0.0, -1.0, 5.0)
    assert vec.vectorial_product(a, b) == pytest.approx(
        vec.scale(vec.vectorial_product(b, a), -1.0)
    )


@pytest.mark.parametrize("rotate", [vec.rotate_xy, vec.rotate_zy, vec.rotate_zx])
def test_rotations_preserve_length_and_invert(rotate):
    v = (1.0, -2.0, 0.5)
    rotated = rotate(v, 0.7)
    assert vec.vect_abs(rotated) == pytest.approx(vec.vect_abs(v))
    assert rotate(rotated, -0.7) == pytest.approx(v)


def test_rotate_xy_quarter_turn_is_orthogonal_in_plane():
    v = (2.0, 1.0, 5.0)
    r = vec.rotate_xy(v, math.pi / 2)
    assert vec.scalar_product(v, r, 2) == pytest.approx(0.0, abs=1e-12)
    assert r[2] == v[2]


def test_rotate_around_z_axis_matches_rotate_xy():
    v = (1.0, 2.0, 3.0)
    assert vec.rotate_around_axis(v, (0.0, 0.0, 4.0), 0.3) == pytest.approx(
        vec.rotate_xy(v, 0.3)
    )


def test_rotate_around_axis_keeps_axis_fixed():
    axis = (1.0, 1.0, 1.0)
    assert vec.rotate_around_axis(axis, axis, 1.2) == pytest.approx(axis)


def test_angle_of_orthogonal_vectors():
    assert vec.angle_of_two_vectors((1.0, 0.0, 0.0), (0.0, 3.0, 0.0)) == pytest.approx(
        math.pi / 2
    )


def test_distance_2d_ignores_z():
    assert vec.distance_2d((1.0, 1.0, 10.0), (1.0, 4.0, -3.0)) == pytest.approx(
        vec.vect_abs_xy((0.0, 3.0, 0.0))
    )


def test_projections_decompose_vector():
    v = (3.0, -1.0, 2.0)
    n = (1.0, 2.0, 0.5)
    along = vec.project_onto_line(v, n)
    across = vec.project_onto_plane(v, n)
    assert vec.vect_sum(along, across) == pytest.approx(v)
    assert vec.scalar_product(across, n) == pytest.approx(0.0, abs=1e-12)


def test_distance_from_line_matches_plane_projection():
    point = (2.0, 3.0, -1.0)
    end1 = (0.0, 0.0, 0.0)
    end2 = (1.0, 1.0, 1.0)
    expected = vec.vect_abs(vec.project_onto_plane(point, end2))
    assert vec.distance_from_line(point, end1, end2) == pytest.approx(expected)


def test_point_on_line_has_zero_distance():
    assert vec.distance_from_line((2.0, 2.0, 2.0), (0.0, 0.0, 0.0), (1.0, 1.0, 1.0)) == (
        pytest.approx(0.0, abs=1e-12)
    )


def test_distance_from_line_xy_ignores_height():
    assert vec.distance_from_line_xy(
        (0.0, 4.0, 50.0), (-1.0, 0.0, 0.0), (1.0, 0.0, -9.0)
    ) == pytest.approx(4.0)


def test_sigma_norm_satisfies_defining_relation():
    v = (1.0, 2.0, -2.0)
    eps = 0.1
    s = vec.sigma_norm(v, eps)
    assert (eps * s + 1) ** 2 == pytest.approx(1 + eps * vec.vect_abs(v) ** 2)


def test_sigma_grad_is_parallel_and_truncated():
    v = (1.0, 2.0, 3.0)
    g = vec.sigma_grad(v, 0.1, 2)
    assert g[2] == 0.0
    assert g[0] * v[1] == pytest.approx(g[1] * v[0])


def test_bump_function_plateaus():
    assert vec.bump_function(0.1, 0.2) == 1.0
    assert vec.bump_function(1.5, 0.2) == 0.0
    assert vec.bump_function(-0.1, 0.2) == 0.0


def test_bump_function_midpoint():
    assert vec.bump_function(0.6, 0.2) == pytest.approx(0.5)