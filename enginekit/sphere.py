"""Bounding spheres and their collision tests."""

from __future__ import annotations

from dataclasses import dataclass, field

from .line import Line, _vec
from .line_segment import LineSegment
from .matrix import Matrix
from .plane import Plane
from .ray import Ray
from .vector import Vector3


@dataclass
class Sphere:
    center: Vector3 = field(default_factory=Vector3)
    radius: float = 0.0

    def __post_init__(self) -> None:
        self.center = _vec(self.center)

    def __str__(self) -> str:
        coords = ", ".join(f"{c + 0.001:.2f}" for c in self.center)
        return f"({coords}) : {self.radius:.2f}"

    @staticmethod
    def merged(s1: Sphere, s2: Sphere) -> Sphere:
        """The smallest sphere holding both ``s1`` and ``s2``."""
        vec_len = (s1.center - s2.center).length()
        if vec_len < 0.001:
            return Sphere(s1.center, max(s1.radius, s2.radius))
        rad = (s1.radius + s2.radius + vec_len) / 2.0
        if rad < s1.radius:
            return Sphere(s1.center, s1.radius)
        if rad < s2.radius:
            return Sphere(s2.center, s2.radius)
        lerp = (rad - s1.radius) / vec_len
        return Sphere(s1.center.lerp(s2.center, lerp), rad)

    def maximize(self, other: Sphere) -> None:
        """Grow this sphere in place so that it also holds ``other``."""
        result = Sphere.merged(self, other)
        self.center, self.radius = result.center, result.radius

    def transform_and_scale(self, matrix) -> None:
        """Move the centre by the matrix translation and scale the radius."""
        m = matrix if isinstance(matrix, Matrix) else Matrix(matrix)
        self.center = self.center + m.t_axis
        self.radius *= m.scale_max()

    def check_visibility(self, frustum) -> bool:
        """True unless the sphere lies wholly behind one of the frustum planes."""
        return not any(plane.is_behind(self) for plane in list(frustum.planes())[:6])

    def reset(self) -> None:
        self.center = Vector3()
        self.radius = 0.0

    def test_collision(self, other) -> bool:
        """Collision with a point, plane, box, sphere, ray, segment or line."""
        r = self.radius
        if isinstance(other, Vector3):
            return (other - self.center).length_sq() - r * r < 1.0e-4 * 1.0e-4
        if isinstance(other, Plane):
            return abs(other.distance(self.center)) - r < 1.0e-4
        if isinstance(other, Sphere):
            total = r + other.radius
            return (self.center - other.center).length_sq() - total * total < 1.0e-4
        if isinstance(other, Ray):
            return self._ray_probe(other)
        if isinstance(other, (Line, LineSegment)):
            return other.distance_squared(self.center) - r * r < 1.0e-4
        if hasattr(other, "min_pt") and hasattr(other, "max_pt"):
            return other.test_collision(self)
        raise TypeError(f"cannot test a sphere against {type(other).__name__}")

    def _ray_probe(self, ray: Ray) -> bool:
        difference = ray.position - self.center
        a = ray.direction.length_sq()
        b = difference.dot(ray.direction)
        c = difference.length_sq() - self.radius * self.radius
        d = b * b - a * c
        return not (d <= 0.0 or d ** 0.5 <= b)