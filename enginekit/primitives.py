"""Small 2D shapes and a cylinder description."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from .vector import Vector2


def _vec2(v) -> Vector2:
    return v if isinstance(v, Vector2) else Vector2(*v)


@dataclass
class Circle2D:
    center: Vector2 = field(default_factory=lambda: Vector2(0.0, 0.0))
    radius: float = 0.0

    def __post_init__(self) -> None:
        self.center = _vec2(self.center)


@dataclass
class Box2D:
    """An axis-aligned rectangle from ``min_pt`` to ``max_pt``."""

    min_pt: Vector2 = field(default_factory=lambda: Vector2(0.0, 0.0))
    max_pt: Vector2 = field(default_factory=lambda: Vector2(0.0, 0.0))

    def __post_init__(self) -> None:
        self.min_pt = _vec2(self.min_pt)
        self.max_pt = _vec2(self.max_pt)

    @classmethod
    def from_bounds(cls, x1: float, x2: float, y1: float, y2: float) -> Box2D:
        return cls(Vector2(x1, y1), Vector2(x2, y2))

    @classmethod
    def from_circle(cls, circle: Circle2D) -> Box2D:
        c, r = circle.center, circle.radius
        return cls(Vector2(c.x - r, c.y - r), Vector2(c.x + r, c.y + r))

    def maximize(self, other: Union[Box2D, Circle2D]) -> Box2D:
        """Grow in place to hold ``other``; returns self."""
        box = Box2D.from_circle(other) if isinstance(other, Circle2D) else other
        self.min_pt = Vector2(min(self.min_pt.x, box.min_pt.x), min(self.min_pt.y, box.min_pt.y))
        self.max_pt = Vector2(max(self.max_pt.x, box.max_pt.x), max(self.max_pt.y, box.max_pt.y))
        return self

    def translate(self, trans) -> Box2D:
        """Move in place; returns self."""
        t = _vec2(trans)
        self.min_pt = Vector2(self.min_pt.x + t.x, self.min_pt.y + t.y)
        self.max_pt = Vector2(self.max_pt.x + t.x, self.max_pt.y + t.y)
        return self

    def is_within(self, pos) -> bool:
        p = _vec2(pos)
        return (
            self.min_pt.x <= p.x <= self.max_pt.x
            and self.min_pt.y <= p.y <= self.max_pt.y
        )

    def nearest_point(self, test_point) -> Vector2:
        """The nearest point on the rectangle's outline."""
        p = _vec2(test_point)
        lo, hi = self.min_pt, self.max_pt
        if lo.x <= p.x <= hi.x:
            y = lo.y if abs(p.y - lo.y) < abs(p.y - hi.y) else hi.y
            return Vector2(p.x, y)
        if lo.y <= p.y <= hi.y:
            x = lo.x if abs(p.x - lo.x) < abs(p.x - hi.x) else hi.x
            return Vector2(x, p.y)
        x = lo.x if p.x < lo.x else hi.x
        y = lo.y if p.y < lo.y else hi.y
        return Vector2(x, y)


@dataclass
class Cylinder:
    radius: float = 0.0
    length: float = 0.0