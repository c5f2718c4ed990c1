"""Half-lines and ray/triangle intersection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .line import FLOAT_EPSILON, Line, _vec
from .vector import Vector3


@dataclass(frozen=True)
class Triangle:
    p0: Vector3
    p1: Vector3
    p2: Vector3

    def __str__(self) -> str:
        return f"p0: {self.p0}p1: {self.p1}p2: {self.p2}"


@dataclass(frozen=True)
class RayHit:
    """Where a ray meets a triangle: point, barycentric weights and distance."""

    point: Vector3
    bary: Vector3
    distance: float


def _corners(p0, p1, p2) -> tuple[Vector3, Vector3, Vector3]:
    if isinstance(p0, Triangle):
        return p0.p0, p0.p1, p0.p2
    return _vec(p0), _vec(p1), _vec(p2)


class Ray(Line):
    """A line that only extends forward from its position."""

    @classmethod
    def from_transform(cls, direction, position, m) -> Ray:
        """A ray whose direction and position are transformed by ``m``."""
        return cls(
            _vec(direction).transform_normal(m),
            _vec(position).transform_coord(m),
            normalize_direction=False,
        )

    def transformed(self, m) -> Ray:
        return type(self).from_transform(self.direction, self.position, m)

    def _solve(self, p0: Vector3, p1: Vector3, p2: Vector3):
        edge1 = p1 - p0
        edge2 = p2 - p0
        pvec = self.direction.cross(edge2)
        det = edge1.dot(pvec)
        if det < FLOAT_EPSILON:
            return None
        tvec = self.position - p0
        u = tvec.dot(pvec)
        if u < 0.0 or u > det:
            return None
        qvec = tvec.cross(edge1)
        v = self.direction.dot(qvec)
        if v < 0.0 or u + v > det:
            return None
        inv_det = 1.0 / det
        return u * inv_det, v * inv_det, edge2.dot(qvec) * inv_det

    def intersect_triangle_uvt(self, p0, p1=None, p2=None) -> Optional[tuple[float, float, float]]:
        """Barycentric ``u``, ``v`` and distance ``t`` of a front-facing hit.

        Accepts three corners or a Triangle. Returns None on a miss or when
        the hit lies behind the ray.
        """
        solved = self._solve(*_corners(p0, p1, p2))
        if solved is None or solved[2] < 0.0:
            return None
        return solved

    def intersect_triangle(self, p0, p1=None, p2=None) -> Optional[RayHit]:
        """Hit point, barycentric weights and distance of a front-facing hit."""
        solved = self._solve(*_corners(p0, p1, p2))
        if solved is None:
            return None
        u, v, t = solved
        return RayHit(
            point=self.position + self.direction * t,
            bary=Vector3(1.0 - (u + v), u, v),
            distance=t,
        )