"""View frustums built from six planes, with sphere and box culling tests.

A point ``p`` is inside a frustum plane when ``normal . p - d >= 0``.
"""

from __future__ import annotations

import abc
import enum
from typing import Optional, Sequence

from .box import Box
from .line import _vec
from .matrix import Matrix
from .plane import Classification, Plane
from .sphere import Sphere
from .vector import Vector3


class FrustumPlane(enum.IntEnum):
    FRONT = 0
    LEFT = 1
    RIGHT = 2
    TOP = 3
    BOTTOM = 4
    BACK = 5


class FrustumIntersect(enum.Enum):
    IN_FRUSTUM = 0
    OUT_FRUSTUM = 1
    PARTIAL = 2


_DISPLAY_ORDER = (
    ("LEFT:    ", FrustumPlane.LEFT),
    ("RIGHT:   ", FrustumPlane.RIGHT),
    ("TOP:     ", FrustumPlane.TOP),
    ("BOTTOM:  ", FrustumPlane.BOTTOM),
    ("FRONT:   ", FrustumPlane.FRONT),
    ("BACK:    ", FrustumPlane.BACK),
)


def _as_matrix(m) -> Matrix:
    return m if isinstance(m, Matrix) else Matrix(m)


class Frustum(abc.ABC):
    """Six planes, rebuilt lazily whenever the defining data changes."""

    def __init__(self) -> None:
        self._planes: list[Plane] = [Plane() for _ in FrustumPlane]
        self._dirty = True

    @abc.abstractmethod
    def _recalculate(self) -> Sequence[Plane]:
        """The six planes, indexed by FrustumPlane."""

    def planes(self) -> tuple[Plane, ...]:
        if self._dirty:
            self._planes = list(self._recalculate())
            self._dirty = False
        return tuple(self._planes)

    def intersects(self, shape, world_matrix=None) -> FrustumIntersect:
        """Classify a Sphere or Box, optionally moved by ``world_matrix`` first."""
        if isinstance(shape, Sphere):
            if world_matrix is not None:
                shape = Sphere(shape.center, shape.radius)
                shape.transform_and_scale(_as_matrix(world_matrix))
            return self._intersects_sphere(shape)
        if isinstance(shape, Box):
            if world_matrix is not None:
                m = _as_matrix(world_matrix)
                shape = Box(shape.min_pt.transform_coord(m), shape.max_pt.transform_coord(m))
            return self._intersects_box(shape)
        raise TypeError(f"cannot test a frustum against {type(shape).__name__}")

    def _intersects_sphere(self, sphere: Sphere) -> FrustumIntersect:
        result = FrustumIntersect.IN_FRUSTUM
        cx, cy, cz = sphere.center
        for plane in self.planes():
            distance = plane.a * cx + plane.b * cy + plane.c * cz - plane.d
            front = distance + sphere.radius >= 0.0
            back = distance - sphere.radius <= 0.0
            if front and back:
                result = FrustumIntersect.PARTIAL
            elif back:
                return FrustumIntersect.OUT_FRUSTUM
        return result

    def _intersects_box(self, box: Box) -> FrustumIntersect:
        partial = False
        for plane in self.planes():
            side = plane.which_side_box(box)
            if side is Classification.BACK:
                return FrustumIntersect.OUT_FRUSTUM
            if side is not Classification.FRONT:
                partial = True
        return FrustumIntersect.PARTIAL if partial else FrustumIntersect.IN_FRUSTUM

    def __str__(self) -> str:
        planes = self.planes()
        return "".join(f"{label}{planes[index]}\n" for label, index in _DISPLAY_ORDER)


class OrthoFrustum(Frustum):
    """A box-shaped frustum looking along a direction at a focus sphere."""

    def __init__(self) -> None:
        super().__init__()
        self._focus = Sphere()
        self._direction = Vector3(0.0, 1.0, 0.0)
        self._length = 1.0

    def set(self, focus: Sphere, direction, length: float) -> None:
        self._focus = Sphere(focus.center, focus.radius)
        self._direction = _vec(direction).normalized()
        self._length = length
        self._dirty = True
        self.planes()

    def _recalculate(self) -> list[Plane]:
        center, radius = self._focus.center, self._focus.radius
        direction = self._direction
        near_pt = center - direction * (radius + self._length)
        far_pt = center + direction * radius

        up = Vector3(0.0, radius, 0.0)
        side = Vector3(radius, 0.0, 0.0)
        unit_x = Vector3(1.0, 0.0, 0.0)
        unit_y = Vector3(0.0, 1.0, 0.0)

        top_a, top_b = near_pt + up, far_pt + up
        bottom_a, bottom_b = near_pt - up, far_pt - up
        right_a, right_b = near_pt - side, far_pt - side
        left_a, left_b = near_pt + side, far_pt + side

        top = Plane.from_points(top_a, top_a + unit_x, top_b)
        bottom = Plane.from_points(bottom_a, bottom_a - unit_x, bottom_b)
        planes = {
            FrustumPlane.FRONT: Plane.from_normal(direction, -near_pt.length()),
            FrustumPlane.BACK: Plane.from_normal(-direction, -far_pt.length()),
            FrustumPlane.TOP: Plane(top.a, top.b, top.c, -top.d),
            FrustumPlane.BOTTOM: Plane(bottom.a, bottom.b, bottom.c, -bottom.d),
            FrustumPlane.LEFT: Plane.from_points(left_a, left_a + unit_y, left_b),
            FrustumPlane.RIGHT: Plane.from_points(right_a, right_a - unit_y, right_b),
        }
        return [planes[index].normalized() for index in FrustumPlane]


class PerspectiveFrustum(Frustum):
    """A frustum extracted from a view and a projection matrix."""

    def __init__(self) -> None:
        super().__init__()
        self._view = Matrix.identity()
        self._proj = Matrix.identity()

    def set_view_matrix(self, m) -> None:
        self._view = _as_matrix(m)
        self._dirty = True

    def set_proj_matrix(self, m) -> None:
        self._proj = _as_matrix(m)
        self._dirty = True

    def _recalculate(self) -> list[Plane]:
        r = (self._view @ self._proj).rows

        def column(j: int) -> tuple[float, float, float, float]:
            return tuple(row[j] for row in r)  # type: ignore[return-value]

        c1, c2, c3, c4 = column(0), column(1), column(2), column(3)

        def plane(coeffs: Sequence[float]) -> Plane:
            a, b, c, w = coeffs
            return Plane(a, b, c, -w).normalized()

        planes: dict[FrustumPlane, Optional[Plane]] = {
            FrustumPlane.LEFT: plane([x + y for x, y in zip(c4, c1)]),
            FrustumPlane.RIGHT: plane([x - y for x, y in zip(c4, c1)]),
            FrustumPlane.TOP: plane([x - y for x, y in zip(c4, c2)]),
            FrustumPlane.BOTTOM: plane([x + y for x, y in zip(c4, c2)]),
            FrustumPlane.FRONT: plane(c3),
            FrustumPlane.BACK: plane([x - y for x, y in zip(c4, c3)]),
        }
        return [planes[index] for index in FrustumPlane]  # type: ignore[misc]