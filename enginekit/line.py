"""Infinite lines in 3D space, described by a direction and a point."""

from __future__ import annotations

import math
from dataclasses import InitVar, dataclass, field, replace
from typing import Optional

from .vector import Vector3

FLOAT_EPSILON = 1.192092896e-07


def _vec(v) -> Vector3:
    return v if isinstance(v, Vector3) else Vector3(*v)


@dataclass(frozen=True)
class Line:
    """A line through ``position`` along ``direction``.

    The direction is normalized on construction unless
    ``normalize_direction`` is False. Spheres are any objects with
    ``center`` and ``radius``; planes any object with a ``normal``.
    """

    direction: Vector3 = field(default_factory=Vector3)
    position: Vector3 = field(default_factory=Vector3)
    normalize_direction: InitVar[bool] = True

    def __post_init__(self, normalize_direction: bool) -> None:
        direction = _vec(self.direction)
        if normalize_direction:
            direction = direction.normalized()
        object.__setattr__(self, "direction", direction)
        object.__setattr__(self, "position", _vec(self.position))

    def _with(self, direction: Vector3, position: Vector3):
        return replace(
            self, direction=direction, position=position, normalize_direction=False
        )

    # -- transforms ------------------------------------------------------

    def translate(self, delta) -> Line:
        return self._with(self.direction, self.position + _vec(delta))

    def rotate(self, m) -> Line:
        """Transform both the direction and the position by ``m``."""
        return self._with(self.direction.transform_coord(m), self.position.transform_coord(m))

    def self_rotate(self, m) -> Line:
        """Transform only the direction by ``m``."""
        return self._with(self.direction.transform_coord(m), self.position)

    def scale(self, s: float) -> Line:
        return self._with(self.direction, self.position * s)

    def normalize(self) -> Line:
        return self._with(self.direction.normalized(), self.position)

    # -- distances -------------------------------------------------------

    def is_colinear(self, p, threshold: float = FLOAT_EPSILON) -> bool:
        return self.distance_squared(_vec(p)) < threshold

    def distance(self, point) -> float:
        """Perpendicular distance from the line to ``point``."""
        displacement = _vec(point) - self.position
        projected = displacement.dot(self.direction)
        value = displacement.length_sq() - projected * projected / self.direction.length_sq()
        return math.sqrt(max(0.0, value))

    def distance_to_line(self, other: Line) -> float:
        """Shortest distance between this line and ``other``."""
        normal = self.direction.cross(other.direction)
        normal_mag = normal.length_sq()
        if normal_mag < 1.0e-4:
            return (self.position - other.position).length()
        normal = normal / math.sqrt(normal_mag)
        return abs(normal.dot(self.position - other.position))

    def distance_squared(self, point) -> float:
        """Squared perpendicular distance; assumes a unit direction."""
        displacement = _vec(point) - self.position
        projected = displacement.dot(self.direction)
        return displacement.length_sq() - projected * projected

    # -- collisions ------------------------------------------------------

    def intersects_plane(self, plane) -> bool:
        """True unless the line runs parallel to the plane."""
        return abs(plane.normal.dot(self.direction)) >= 1.0e-6

    def intersects_sphere(self, sphere) -> bool:
        radius = sphere.radius
        return self.distance_squared(sphere.center) - radius * radius < 1.0e-4

    def sphere_distances(self, sphere) -> Optional[tuple[float, float]]:
        """Parameters along the line where it crosses the sphere, or None."""
        center = _vec(sphere.center)
        offset = self.position - center
        a = self.direction.dot(self.direction)
        b = 2.0 * self.direction.dot(offset)
        c = offset.length_sq() - sphere.radius * sphere.radius
        under_sqrt = b * b - 4.0 * a * c
        if under_sqrt < 0.0:
            return None
        if under_sqrt == 0.0:
            t = -b / (2.0 * a)
            return t, t
        root = math.sqrt(under_sqrt)
        return (-b + root) / (2.0 * a), (-b - root) / (2.0 * a)

    def sphere_intersection_points(self, sphere) -> Optional[tuple[Vector3, Vector3]]:
        distances = self.sphere_distances(sphere)
        if distances is None:
            return None
        t1, t2 = distances
        return self.position + self.direction * t1, self.position + self.direction * t2

    def sphere_intersection_point(self, sphere) -> Optional[Vector3]:
        """The crossing point nearest to the line's position, or None."""
        distances = self.sphere_distances(sphere)
        if distances is None:
            return None
        t = min(distances, key=abs) if abs(distances[0]) < abs(distances[1]) else distances[1]
        return self.position + self.direction * t