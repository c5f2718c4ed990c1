import math

import pytest

from enginekit.line_segment import LineSegment
from enginekit.matrix import Matrix
from enginekit.plane import Plane
from enginekit.sphere import Sphere
from enginekit.vector import Vector3


@pytest.fixture
def seg():
    return LineSegment(Vector3(0.0, 0.0, 0.0), Vector3(10.0, 0.0, 0.0))


def test_direction_is_unit(seg):
    assert seg.direction == Vector3(1.0, 0.0, 0.0)


def test_accepts_tuples():
    s = LineSegment((0, 0, 0), (0, 0, 4))
    assert s.direction == Vector3(0.0, 0.0, 1.0)
    assert s.end == Vector3(0.0, 0.0, 4.0)


def test_distance_perpendicular(seg):
    assert seg.distance(Vector3(5.0, 3.0, 0.0)) == pytest.approx(3.0)


def test_distance_behind_start(seg):
    assert seg.distance(Vector3(-4.0, 0.0, 0.0)) == pytest.approx(4.0)


def test_distance_beyond_end_is_distance_to_end(seg):
    p = Vector3(13.0, 4.0, 0.0)
    assert seg.distance(p) == pytest.approx((p - seg.end).length())


def test_distance_squared_matches_distance(seg):
    p = Vector3(2.0, 1.0, 2.0)
    assert seg.distance_squared(p) == pytest.approx(seg.distance(p) ** 2)


def test_in_segment(seg):
    assert seg.in_segment(Vector3(5.0, 7.0, 0.0))
    assert not seg.in_segment(Vector3(11.0, 0.0, 0.0))
    assert not seg.in_segment(Vector3(-1.0, 0.0, 0.0))


def test_is_colinear(seg):
    assert seg.is_colinear(Vector3(5.0, 0.0, 0.0))
    assert not seg.is_colinear(Vector3(5.0, 1.0, 0.0))
    assert seg.is_colinear(Vector3(5.0, 1.0, 0.0), threshold=2.0)


def test_translate(seg):
    moved = seg.translate((1.0, 2.0, 3.0))
    assert moved.start == Vector3(1.0, 2.0, 3.0)
    assert moved.end == Vector3(11.0, 2.0, 3.0)
    assert moved.direction == seg.direction


def test_rotate(seg):
    rotated = seg.rotate(Matrix.rotation_z(math.pi / 2))
    assert tuple(rotated.end) == pytest.approx((0.0, 10.0, 0.0), abs=1e-9)
    assert tuple(rotated.direction) == pytest.approx((0.0, 1.0, 0.0), abs=1e-9)


def test_normalize_keeps_segment(seg):
    assert seg.normalize() == seg


def test_intersects_plane(seg):
    assert seg.intersects_plane(Plane.from_normal((1.0, 0.0, 0.0), 5.0))
    assert not seg.intersects_plane(Plane.from_normal((1.0, 0.0, 0.0), 20.0))


def test_intersects_sphere(seg):
    assert seg.intersects_sphere(Sphere(Vector3(5.0, 0.5, 0.0), 1.0))
    assert not seg.intersects_sphere(Sphere(Vector3(5.0, 5.0, 0.0), 1.0))