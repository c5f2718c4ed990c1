"""Finite line segments between two points."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from .line import FLOAT_EPSILON, _vec
from .vector import Vector3


@dataclass(frozen=True)
class LineSegment:
    """The segment from ``start`` to ``end``, with a unit ``direction``.

    Spheres are any objects with ``center`` and ``radius``; planes any
    object with ``normal`` and ``point``.
    """

    start: Vector3 = field(default_factory=Vector3)
    end: Vector3 = field(default_factory=Vector3)
    direction: Vector3 = field(init=False)

    def __post_init__(self) -> None:
        start, end = _vec(self.start), _vec(self.end)
        object.__setattr__(self, "start", start)
        object.__setattr__(self, "end", end)
        object.__setattr__(self, "direction", (end - start).normalized())

    def distance_squared(self, point) -> float:
        """Squared distance from ``point`` to the nearest point of the segment."""
        p = _vec(point)
        displacement = p - self.start
        projected = displacement.dot(self.direction)
        if projected > 0.0:
            if projected > (self.end - self.start).dot(self.direction):
                return (p - self.end).length_sq()
            return displacement.length_sq() - projected * projected
        return displacement.length_sq()

    def distance(self, point) -> float:
        return math.sqrt(max(0.0, self.distance_squared(point)))

    def in_segment(self, point) -> bool:
        """True when ``point`` projects between the two end points.

        Use ``is_colinear`` to check that it lies on the segment itself.
        """
        p = _vec(point)
        return (self.start - p).dot(self.direction) * (self.end - p).dot(self.direction) <= 0.0

    def is_colinear(self, p, threshold: float = FLOAT_EPSILON) -> bool:
        return self.distance_squared(p) < threshold

    def translate(self, delta) -> LineSegment:
        d = _vec(delta)
        return LineSegment(self.start + d, self.end + d)

    def rotate(self, m) -> LineSegment:
        """Both end points transformed by ``m``."""
        return LineSegment(self.start.transform_coord(m), self.end.transform_coord(m))

    def normalize(self) -> LineSegment:
        """The segment itself; its direction is always kept at unit length."""
        return LineSegment(self.start, self.end)

    def intersects_plane(self, plane) -> bool:
        """True when the end points lie on different sides of the plane."""
        normal, point = plane.normal, plane.point
        return normal.dot(point - self.start) * normal.dot(point - self.end) <= 0.0

    def intersects_sphere(self, sphere) -> bool:
        radius = sphere.radius
        return self.distance_squared(sphere.center) - radius * radius < 1.0e-4