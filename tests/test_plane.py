import pytest
from hypothesis import given
from hypothesis import strategies as st

from polyhull.plane import Plane, Ray, triangle_normal
from polyhull.vector3 import Vector3

ints = st.integers(min_value=-100, max_value=100)
vectors = st.builds(Vector3, ints, ints, ints)
nonzero = vectors.filter(lambda v: v.length_squared() > 0)


@given(nonzero, vectors)
def test_point_on_plane_has_zero_distance(n, p):
    plane = Plane(n, p)
    assert plane.signed_distance(p) == 0
    assert plane.is_point_on_positive_side(p)


@given(nonzero, vectors)
def test_offset_along_normal(n, p):
    plane = Plane(n, p)
    assert plane.signed_distance(p + n) == n.length_squared()
    assert plane.is_point_on_positive_side(p + n)
    assert plane.signed_distance(p - n) == -n.length_squared()
    assert not plane.is_point_on_positive_side(p - n)


@given(vectors, vectors)
def test_plane_fields(n, p):
    plane = Plane(n, p)
    assert plane.d == -n.dot(p)
    assert plane.sqr_n_length == n.length_squared()
    assert plane.normal == n


def test_default_plane_is_degenerate():
    plane = Plane()
    assert plane.sqr_n_length == 0
    assert plane.signed_distance(Vector3(5, -3, 2)) == 0


@given(vectors, vectors, vectors)
def test_triangle_normal_is_orthogonal_to_edges(a, b, c):
    n = triangle_normal(a, b, c)
    assert n.dot(a - b) == 0
    assert n.dot(b - c) == 0
    assert n.dot(c - a) == 0


@given(vectors, vectors, vectors)
def test_triangle_normal_flips_with_order(a, b, c):
    assert triangle_normal(a, b, c) == -triangle_normal(b, a, c)
    assert triangle_normal(a, b, c) == triangle_normal(b, c, a)


def test_triangle_normal_of_unit_triangle():
    n = triangle_normal(Vector3(1, 0, 0), Vector3(0, 1, 0), Vector3(0, 0, 0))
    assert n == Vector3(0, 0, 1)


@given(vectors, vectors)
def test_collinear_triangle_has_zero_normal(a, d):
    assert triangle_normal(a, a + d, a + d * 2) == Vector3(0, 0, 0)


@given(vectors, nonzero, st.integers(min_value=-10, max_value=10))
def test_points_on_ray_have_zero_distance(s, v, t):
    ray = Ray(s, v)
    assert ray.squared_distance_to_point(s + v * t) == pytest.approx(0, abs=1e-6)


@given(vectors, nonzero, nonzero)
def test_perpendicular_offset_distance(s, v, w):
    offset = v.cross(w)
    ray = Ray(s, v)
    expected = offset.length_squared()
    assert ray.squared_distance_to_point(s + offset) == pytest.approx(expected, rel=1e-9, abs=1e-6)


def test_ray_inverse_length_squared():
    ray = Ray(Vector3(0, 0, 0), Vector3(0, 2, 0))
    assert ray.inv_length_squared == 0.25


def test_ray_with_zero_direction_raises():
    with pytest.raises(ZeroDivisionError):
        Ray(Vector3(1, 2, 3), Vector3(0, 0, 0))