import math
from dataclasses import dataclass

import pytest

from enginekit.line import Line
from enginekit.matrix import Matrix
from enginekit.plane import Plane
from enginekit.vector import Vector3


@dataclass
class _Ball:
    center: Vector3
    radius: float


def _x_axis(position=Vector3()):
    return Line(Vector3(1, 0, 0), position)


def test_constructor_normalizes_direction():
    line = Line(Vector3(0, 0, 5), Vector3(1, 2, 3))
    assert line.direction.length() == pytest.approx(1.0)
    assert line.direction.z == pytest.approx(1.0)
    assert line.position == Vector3(1, 2, 3)


def test_constructor_can_keep_direction():
    line = Line(Vector3(0, 0, 5), Vector3(), normalize_direction=False)
    assert line.direction == Vector3(0, 0, 5)
    assert line.normalize().direction == Vector3(0, 0, 1)


def test_translate_and_scale_return_new_lines():
    line = _x_axis(Vector3(1, 1, 1))
    moved = line.translate(Vector3(1, 2, 3))
    assert moved.position == Vector3(2, 3, 4)
    assert line.position == Vector3(1, 1, 1)
    assert line.scale(2.0).position == Vector3(2, 2, 2)
    assert moved.direction == line.direction


def test_rotate_and_self_rotate():
    line = _x_axis(Vector3(1, 0, 0))
    m = Matrix.rotation_z(math.pi / 2)
    rotated = line.rotate(m)
    assert rotated.direction.y == pytest.approx(1.0)
    assert rotated.position.y == pytest.approx(1.0)
    spun = line.self_rotate(m)
    assert spun.direction.y == pytest.approx(1.0)
    assert spun.position == line.position


def test_distance_to_point():
    line = _x_axis()
    assert line.distance(Vector3(7, 3, 0)) == pytest.approx(3.0)
    p = Vector3(2, -4, 1)
    assert line.distance_squared(p) == pytest.approx(line.distance(p) ** 2)


def test_distance_to_line():
    a = _x_axis()
    skew = Line(Vector3(0, 1, 0), Vector3(0, 0, 2))
    assert a.distance_to_line(skew) == pytest.approx(2.0)
    parallel = _x_axis(Vector3(0, 3, 0))
    assert a.distance_to_line(parallel) == pytest.approx(3.0)


def test_is_colinear():
    line = _x_axis()
    assert line.is_colinear(Vector3(12, 0, 0))
    assert not line.is_colinear(Vector3(0, 0.5, 0))


def test_intersects_plane_unless_parallel():
    line = _x_axis()
    assert line.intersects_plane(Plane.from_normal(Vector3(1, 0, 0), 2.0))
    assert not line.intersects_plane(Plane.from_normal(Vector3(0, 0, 1), 2.0))


def test_intersects_sphere():
    line = _x_axis()
    assert not line.intersects_sphere(_Ball(Vector3(0, 2, 0), 1.0))
    assert line.intersects_sphere(_Ball(Vector3(0, 2, 0), 3.0))


def test_sphere_distances_at_origin():
    line = _x_axis()
    t1, t2 = line.sphere_distances(_Ball(Vector3(), 2.0))
    assert t1 == pytest.approx(2.0)
    assert t2 == pytest.approx(-2.0)


def test_sphere_intersection_points_lie_on_sphere():
    ball = _Ball(Vector3(1, 1, 0), 2.0)
    line = _x_axis(Vector3(-5, 0, 0))
    p1, p2 = line.sphere_intersection_points(ball)
    assert (p1 - ball.center).length() == pytest.approx(ball.radius)
    assert (p2 - ball.center).length() == pytest.approx(ball.radius)


def test_sphere_intersection_point_is_nearest():
    ball = _Ball(Vector3(), 2.0)
    line = _x_axis(Vector3(-5, 0, 0))
    nearest = line.sphere_intersection_point(ball)
    p1, p2 = line.sphere_intersection_points(ball)
    closest = min((p1, p2), key=lambda p: (p - line.position).length())
    assert nearest.x == pytest.approx(closest.x)


def test_sphere_miss_returns_none():
    line = _x_axis()
    ball = _Ball(Vector3(0, 10, 0), 1.0)
    assert line.sphere_distances(ball) is None
    assert line.sphere_intersection_point(ball) is None
    assert line.sphere_intersection_points(ball) is None