"""Planes with side classification and intersection helpers.

The classification and intersection methods treat a point ``p`` as lying
on the plane when ``normal . p - d == 0``. The ``dot``, ``dot_coord``,
``dot_normal``, ``from_points`` and ``from_point_normal`` helpers use the
``ax + by + cz + d = 0`` form instead.
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from typing import Iterable, Optional

from .line import FLOAT_EPSILON, Line, _vec
from .ray import Ray
from .vector import Vector3, Vector4


class Classification(enum.Enum):
    FRONT = 1
    BACK = 2
    COINCIDENT = 3
    COPLANAR = 4


@dataclass(frozen=True)
class Plane:
    a: float = 0.0
    b: float = 0.0
    c: float = 0.0
    d: float = 0.0

    def __iter__(self):
        return iter((self.a, self.b, self.c, self.d))

    def __str__(self) -> str:
        return "[" + ", ".join(f"{v + 0.001:.2f}" for v in self) + "]"

    @classmethod
    def from_normal(cls, normal, distance: float) -> Plane:
        n = _vec(normal)
        return cls(n.x, n.y, n.z, distance)

    @classmethod
    def from_point_normal(cls, point, normal) -> Plane:
        n = _vec(normal)
        return cls(n.x, n.y, n.z, -_vec(point).dot(n))

    @classmethod
    def from_points(cls, v1, v2, v3) -> Plane:
        p1, p2, p3 = _vec(v1), _vec(v2), _vec(v3)
        normal = (p2 - p1).cross(p3 - p1).normalized()
        return cls.from_point_normal(p1, normal)

    @property
    def normal(self) -> Vector3:
        return Vector3(self.a, self.b, self.c)

    @property
    def distance_value(self) -> float:
        return self.d

    @property
    def point(self) -> Vector3:
        """The point of the plane closest to the origin (unit normal)."""
        return self.normal * self.d

    # -- classification --------------------------------------------------

    def which_side(self, p, threshold: float = FLOAT_EPSILON) -> Classification:
        test = self.normal.dot(_vec(p)) - self.d
        if test > threshold:
            return Classification.FRONT
        if test < -threshold:
            return Classification.BACK
        return Classification.COPLANAR

    def which_side_points(self, points: Iterable) -> Classification:
        sides = {self.which_side(p) for p in points}
        front = Classification.FRONT in sides
        back = Classification.BACK in sides
        if front:
            return Classification.COINCIDENT if back else Classification.FRONT
        return Classification.BACK if back else Classification.COPLANAR

    def which_side_box(self, box) -> Classification:
        return self.which_side_points(box.corners())

    def which_side_sphere(self, sphere) -> Classification:
        test = self.normal.dot(_vec(sphere.center)) - self.d
        if test >= 0.0:
            return Classification.FRONT if test > sphere.radius else Classification.COINCIDENT
        return Classification.BACK if -test > sphere.radius else Classification.COINCIDENT

    def is_behind(self, sphere) -> bool:
        return self.d - self.normal.dot(_vec(sphere.center)) > sphere.radius

    def is_in_front(self, sphere) -> bool:
        return self.normal.dot(_vec(sphere.center)) - self.d > sphere.radius

    # -- intersection ----------------------------------------------------

    def intersect_plane(self, other: Plane) -> Line:
        """The line along which this plane meets ``other``."""
        direction = self.normal.cross(other.normal)
        temp = Line(direction.cross(other.normal), other.point, normalize_direction=False)
        return Line(direction, self.intersect_line(temp), normalize_direction=False)

    def intersect_line(self, line: Line) -> Vector3:
        """Point where the (infinite) line meets the plane.

        Raises ValueError when the line runs parallel to the plane.
        """
        denom = self.normal.dot(line.direction)
        if denom == 0.0:
            raise ValueError("line is parallel to the plane")
        t = (self.d - line.position.dot(self.normal)) / denom
        return line.position + line.direction * t

    def intersect(self, line: Line, two_sided: bool = False) -> Optional[tuple[Vector3, float]]:
        """Intersection point and line parameter, or None.

        One-sided tests only count lines that run against the normal. A Ray
        also misses when the intersection lies behind it.
        """
        denom = self.normal.dot(line.direction)
        if denom <= -FLOAT_EPSILON or (two_sided and denom >= FLOAT_EPSILON):
            t = (self.d - line.position.dot(self.normal)) / denom
            if isinstance(line, Ray) and t < 0.0:
                return None
            return line.position + line.direction * t, t
        return None

    def distance(self, point) -> float:
        """Signed distance to ``point``; assumes a unit normal."""
        return _vec(point).dot(self.normal) - self.d

    def project(self, point) -> Vector3:
        return self.intersect_line(Line(self.normal, _vec(point)))

    # -- algebra ---------------------------------------------------------

    def dot(self, v) -> float:
        x, y, z, w = v
        return self.a * x + self.b * y + self.c * z + self.d * w

    def dot_coord(self, v) -> float:
        x, y, z = v
        return self.a * x + self.b * y + self.c * z + self.d

    def dot_normal(self, v) -> float:
        x, y, z = v
        return self.a * x + self.b * y + self.c * z

    def normalized(self) -> Plane:
        norm = math.sqrt(self.a * self.a + self.b * self.b + self.c * self.c)
        if norm == 0.0:
            return Plane()
        return Plane(self.a / norm, self.b / norm, self.c / norm, self.d / norm)

    def scaled(self, s: float) -> Plane:
        return Plane(self.a * s, self.b * s, self.c * s, self.d * s)

    def transformed(self, m) -> Plane:
        """Plane coefficients multiplied as a row vector by ``m``.

        Pass the inverse transpose of a point transform to move the plane.
        """
        return Plane(*Vector4(*self).transform(m))