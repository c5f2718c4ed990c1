"""Axis-aligned bounding boxes."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, Optional

from .line import Line, _vec
from .ray import Ray
from .sphere import Sphere
from .vector import Vector3


@dataclass
class Box:
    """The box spanning ``min_pt`` to ``max_pt``."""

    min_pt: Vector3 = field(default_factory=Vector3)
    max_pt: Vector3 = field(default_factory=Vector3)

    def __post_init__(self) -> None:
        self.min_pt = _vec(self.min_pt)
        self.max_pt = _vec(self.max_pt)

    @classmethod
    def from_points(cls, points: Iterable) -> Box:
        """The smallest box holding every point; a zero box when there are none."""
        vectors = [_vec(p) for p in points]
        if not vectors:
            return cls()
        lo = hi = vectors[0]
        for p in vectors[1:]:
            lo = lo.minimize(p)
            hi = hi.maximize(p)
        return cls(lo, hi)

    def center(self) -> Vector3:
        return (self.min_pt + self.max_pt) * 0.5

    def size(self) -> Vector3:
        return self.max_pt - self.min_pt

    def width(self) -> float:
        return self.max_pt.x - self.min_pt.x

    def height(self) -> float:
        return self.max_pt.y - self.min_pt.y

    def depth(self) -> float:
        return self.max_pt.z - self.min_pt.z

    def set_heights(self, h_min: float, h_max: float) -> None:
        self.min_pt = Vector3(self.min_pt.x, self.min_pt.y, h_min)
        self.max_pt = Vector3(self.max_pt.x, self.max_pt.y, h_max)

    def clamp(self, point) -> Vector3:
        """The point moved inside the box along each axis."""
        return Vector3(
            *(min(max(p, lo), hi) for p, lo, hi in zip(_vec(point), self.min_pt, self.max_pt))
        )

    def maximize(self, other: Box) -> None:
        """Grow in place to the union with ``other``."""
        self.min_pt = self.min_pt.minimize(other.min_pt)
        self.max_pt = self.max_pt.maximize(other.max_pt)

    def minimize(self, other: Box) -> None:
        """Shrink in place to the intersection with ``other``."""
        self.min_pt = self.min_pt.maximize(other.min_pt)
        self.max_pt = self.max_pt.minimize(other.max_pt)

    def is_within(self, other) -> bool:
        """Point containment, strict overlap with a box, or frustum visibility."""
        if isinstance(other, Box):
            return all(o < hi for o, hi in zip(other.min_pt, self.max_pt)) and all(
                o > lo for o, lo in zip(other.max_pt, self.min_pt)
            )
        if hasattr(other, "planes"):
            return self._in_frustum(other)
        p = _vec(other)
        return all(lo <= c <= hi for c, lo, hi in zip(p, self.min_pt, self.max_pt))

    def _in_frustum(self, frustum) -> bool:
        for plane in list(frustum.planes())[:6]:
            normal = plane.normal
            corner = Vector3(
                *(
                    hi if n >= 0.0 else lo
                    for n, lo, hi in zip(normal, self.min_pt, self.max_pt)
                )
            )
            if normal.dot(corner) < plane.d:
                return False
        return True

    def corners(self) -> list[Vector3]:
        lo, hi = self.min_pt, self.max_pt
        return [
            lo,
            Vector3(hi.x, lo.y, lo.z),
            Vector3(hi.x, hi.y, lo.z),
            Vector3(lo.x, hi.y, lo.z),
            Vector3(lo.x, lo.y, hi.z),
            Vector3(hi.x, lo.y, hi.z),
            hi,
            Vector3(lo.x, hi.y, hi.z),
        ]

    def test_collision(self, other) -> bool:
        """Collision with a sphere, box, ray or line (touching counts)."""
        if isinstance(other, Sphere):
            center = other.center
            d = 0.0
            for c, lo, hi in zip(center, self.min_pt, self.max_pt):
                if c < lo:
                    d += (c - lo) ** 2
                elif c > hi:
                    d += (c - hi) ** 2
            return d <= other.radius * other.radius
        if isinstance(other, Box):
            return all(
                omax >= lo and omin <= hi
                for omin, omax, lo, hi in zip(other.min_pt, other.max_pt, self.min_pt, self.max_pt)
            )
        if isinstance(other, Ray):
            hit = self.min_max_collision(other)
            return hit is not None and hit[1] >= 0.0
        if isinstance(other, Line):
            return self.min_max_collision(other) is not None
        raise TypeError(f"cannot test a box against {type(other).__name__}")

    def zero(self) -> None:
        self.min_pt = Vector3()
        self.max_pt = Vector3()

    def is_empty(self) -> bool:
        return self.min_pt == self.max_pt

    def min_max_collision(self, line: Line) -> Optional[tuple[float, float]]:
        """Entry and exit parameters of the line through the box, or None."""
        local_min = self.min_pt - line.position
        local_max = self.max_pt - line.position
        min_t, max_t = -math.inf, math.inf
        for lo, hi, d in zip(local_min, local_max, line.direction):
            if d != 0.0:
                t1, t2 = lo / d, hi / d
                if t1 > t2:
                    t1, t2 = t2, t1
                min_t = max(t1, min_t)
                max_t = min(t2, max_t)
            elif (lo > 0) == (hi > 0):
                return None
        if max_t < min_t:
            return None
        if min_t == -math.inf and max_t == math.inf:
            return 0.0, 0.0
        return min_t, max_t