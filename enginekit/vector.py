"""Two-, three- and four-component vectors with interpolation and transforms.

Matrices are taken as any iterable of four rows of four numbers, row-major,
with vectors treated as row vectors (``v * M``), translation in the last row.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, fields
from typing import Iterable, Optional, Sequence, TypeVar

_V = TypeVar("_V", bound="_Vector")

Rows = tuple[tuple[float, float, float, float], ...]


def _rows(m: Iterable[Iterable[float]]) -> Rows:
    rows = tuple(tuple(float(value) for value in row) for row in m)
    if len(rows) != 4 or any(len(row) != 4 for row in rows):
        raise ValueError("expected a 4x4 matrix")
    return rows  # type: ignore[return-value]


def _apply(vec: Sequence[float], rows: Rows) -> tuple[float, ...]:
    return tuple(sum(v * c for v, c in zip(vec, column)) for column in zip(*rows))


def _mat_mul(a: Rows, b: Rows) -> Rows:
    columns = tuple(zip(*b))
    return tuple(
        tuple(sum(x * y for x, y in zip(row, col)) for col in columns) for row in a
    )  # type: ignore[return-value]


def _mat_inverse(rows: Rows) -> Rows:
    aug = [
        list(row) + [1.0 if i == j else 0.0 for j in range(4)]
        for i, row in enumerate(rows)
    ]
    for col in range(4):
        pivot = max(range(col, 4), key=lambda r: abs(aug[r][col]))
        if abs(aug[pivot][col]) < 1e-12:
            raise ValueError("matrix is singular")
        aug[col], aug[pivot] = aug[pivot], aug[col]
        p = aug[col][col]
        aug[col] = [v / p for v in aug[col]]
        for r in range(4):
            factor = aug[r][col]
            if r != col and factor:
                aug[r] = [a - factor * b for a, b in zip(aug[r], aug[col])]
    return tuple(tuple(row[4:]) for row in aug)  # type: ignore[return-value]


def _parse_float(text: str) -> float:
    try:
        return float(text)
    except ValueError:
        raise ValueError(f"invalid number: {text!r}") from None


def _parse_components(text: str, size: int) -> list[float]:
    """Parse text such as ``"(1, 2, 3)"`` or ``"[1;2;3]"`` into ``size`` floats.

    Raises ValueError when the count of components is wrong or a component
    is not a number.
    """
    values: list[float] = []
    buffer = ""
    for ch in text + ")":
        if ch in "([ ":
            continue
        if ch in "])":
            if buffer:
                values.append(_parse_float(buffer))
            if len(values) != size:
                raise ValueError(
                    f"expected {size} components in {text!r}, got {len(values)}"
                )
            return values
        if ch in ",;":
            if len(values) >= size:
                raise ValueError(f"too many components in {text!r}")
            values.append(_parse_float(buffer) if buffer else 0.0)
            buffer = ""
            continue
        buffer += ch
    raise ValueError(f"unterminated vector {text!r}")


def _dot(a: Iterable[float], b: Iterable[float]) -> float:
    return sum(x * y for x, y in zip(a, b))


def _normalized(values: Sequence[float]) -> tuple[float, ...]:
    length = math.sqrt(_dot(values, values))
    if length == 0.0:
        return tuple(0.0 for _ in values)
    return tuple(v / length for v in values)


def _lerp(a: Iterable[float], b: Iterable[float], s: float) -> tuple[float, ...]:
    return tuple(x + s * (y - x) for x, y in zip(a, b))


def _maximize(a: Iterable[float], b: Iterable[float]) -> tuple[float, ...]:
    return tuple(max(x, y) for x, y in zip(a, b))


def _minimize(a: Iterable[float], b: Iterable[float]) -> tuple[float, ...]:
    return tuple(min(x, y) for x, y in zip(a, b))


def _barycentric(v1, v2, v3, f: float, g: float) -> tuple[float, ...]:
    return tuple(a + (b - a) * f + (c - a) * g for a, b, c in zip(v1, v2, v3))


def _catmull_rom(v1, v2, v3, v4, s: float) -> tuple[float, ...]:
    s2 = s * s
    s3 = s2 * s
    return tuple(
        0.5
        * (
            2.0 * b
            + (c - a) * s
            + (2.0 * a - 5.0 * b + 4.0 * c - d) * s2
            + (d - 3.0 * c + 3.0 * b - a) * s3
        )
        for a, b, c, d in zip(v1, v2, v3, v4)
    )


def _hermite(v1, t1, v2, t2, s: float) -> tuple[float, ...]:
    s2 = s * s
    s3 = s2 * s
    h1 = 2.0 * s3 - 3.0 * s2 + 1.0
    h2 = s3 - 2.0 * s2 + s
    h3 = -2.0 * s3 + 3.0 * s2
    h4 = s3 - s2
    return tuple(
        h1 * a + h2 * b + h3 * c + h4 * d for a, b, c, d in zip(v1, t1, v2, t2)
    )


@dataclass(frozen=True)
class Viewport:
    """A rendering viewport in pixels with a depth range."""

    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0
    min_z: float = 0.0
    max_z: float = 1.0


class _Vector:
    """Arithmetic operators shared by all vector sizes."""

    __slots__ = ()

    def _make(self: _V, values: Iterable[float]) -> _V:
        return type(self)(*values)

    def __len__(self) -> int:
        return len(fields(self))  # type: ignore[arg-type]

    def __getitem__(self, index: int) -> float:
        return tuple(self)[index]  # type: ignore[arg-type]

    def __add__(self: _V, other: _V) -> _V:
        return self._make(a + b for a, b in zip(self, other))  # type: ignore[call-overload]

    def __sub__(self: _V, other: _V) -> _V:
        return self._make(a - b for a, b in zip(self, other))  # type: ignore[call-overload]

    def __mul__(self: _V, s: float) -> _V:
        return self._make(a * s for a in self)  # type: ignore[attr-defined]

    __rmul__ = __mul__

    def __truediv__(self: _V, s: float) -> _V:
        return self._make(a / s for a in self)  # type: ignore[attr-defined]

    def __neg__(self: _V) -> _V:
        return self._make(-a for a in self)  # type: ignore[attr-defined]

    def __str__(self) -> str:
        return "[" + ", ".join(f"{c + 0.0000001:.6f}" for c in self) + "]"  # type: ignore[attr-defined]


@dataclass(frozen=True, slots=True)
class Vector2(_Vector):
    x: float = 0.0
    y: float = 0.0

    def __iter__(self):
        return iter((self.x, self.y))

    @classmethod
    def from_string(cls, text: str) -> Vector2:
        """Parse text such as ``"(1, 2)"``; raises ValueError on bad input."""
        return cls(*_parse_components(text, 2))

    def length(self) -> float:
        return math.sqrt(self.length_sq())

    def length_sq(self) -> float:
        return _dot(self, self)

    def dot(self, other: Vector2) -> float:
        return _dot(self, other)

    def normalized(self) -> Vector2:
        """Unit vector in the same direction; a zero vector stays zero."""
        return Vector2(*_normalized(tuple(self)))

    def lerp(self, other: Vector2, s: float) -> Vector2:
        return Vector2(*_lerp(self, other, s))

    def maximize(self, other: Vector2) -> Vector2:
        return Vector2(*_maximize(self, other))

    def minimize(self, other: Vector2) -> Vector2:
        return Vector2(*_minimize(self, other))

    def ccw(self, other: Vector2) -> float:
        """The z component of the cross product of the two vectors."""
        return self.x * other.y - self.y * other.x

    def clamp(self, c: float) -> Vector2:
        """Limit each component to at most ``c``."""
        return Vector2(min(c, self.x), min(c, self.y))

    def transform(self, m) -> Vector4:
        return Vector4(*_apply((self.x, self.y, 0.0, 1.0), _rows(m)))

    def transform_coord(self, m) -> Vector2:
        x, y, _, w = _apply((self.x, self.y, 0.0, 1.0), _rows(m))
        return Vector2(x / w, y / w)

    def transform_normal(self, m) -> Vector2:
        x, y, _, _ = _apply((self.x, self.y, 0.0, 0.0), _rows(m))
        return Vector2(x, y)

    @staticmethod
    def barycentric(v1: Vector2, v2: Vector2, v3: Vector2, f: float, g: float) -> Vector2:
        return Vector2(*_barycentric(v1, v2, v3, f, g))

    @staticmethod
    def catmull_rom(v1: Vector2, v2: Vector2, v3: Vector2, v4: Vector2, s: float) -> Vector2:
        return Vector2(*_catmull_rom(v1, v2, v3, v4, s))

    @staticmethod
    def hermite(v1: Vector2, t1: Vector2, v2: Vector2, t2: Vector2, s: float) -> Vector2:
        return Vector2(*_hermite(v1, t1, v2, t2, s))


@dataclass(frozen=True, slots=True)
class Vector3(_Vector):
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __iter__(self):
        return iter((self.x, self.y, self.z))

    @classmethod
    def from_string(cls, text: str) -> Vector3:
        """Parse text such as ``"(1, 2, 3)"``; raises ValueError on bad input."""
        return cls(*_parse_components(text, 3))

    def length(self) -> float:
        return math.sqrt(self.length_sq())

    def length_sq(self) -> float:
        return _dot(self, self)

    def dot(self, other: Vector3) -> float:
        return _dot(self, other)

    def cross(self, other: Vector3) -> Vector3:
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def normalized(self) -> Vector3:
        """Unit vector in the same direction; a zero vector stays zero."""
        return Vector3(*_normalized(tuple(self)))

    def lerp(self, other: Vector3, s: float) -> Vector3:
        return Vector3(*_lerp(self, other, s))

    def maximize(self, other: Vector3) -> Vector3:
        return Vector3(*_maximize(self, other))

    def minimize(self, other: Vector3) -> Vector3:
        return Vector3(*_minimize(self, other))

    def clamp(self, c: float) -> Vector3:
        """Limit each component to at most ``c``."""
        return Vector3(min(c, self.x), min(c, self.y), min(c, self.z))

    def transform(self, m) -> Vector4:
        return Vector4(*_apply((self.x, self.y, self.z, 1.0), _rows(m)))

    def transform_coord(self, m) -> Vector3:
        x, y, z, w = _apply((self.x, self.y, self.z, 1.0), _rows(m))
        return Vector3(x / w, y / w, z / w)

    def transform_normal(self, m) -> Vector3:
        x, y, z, _ = _apply((self.x, self.y, self.z, 0.0), _rows(m))
        return Vector3(x, y, z)

    def project(self, viewport: Viewport, projection, view, world) -> Vector3:
        """Map object space into viewport space."""
        combined = _mat_mul(_mat_mul(_rows(world), _rows(view)), _rows(projection))
        p = self.transform_coord(combined)
        return Vector3(
            viewport.x + (1.0 + p.x) * viewport.width / 2.0,
            viewport.y + (1.0 - p.y) * viewport.height / 2.0,
            viewport.min_z + p.z * (viewport.max_z - viewport.min_z),
        )

    def unproject(self, viewport: Viewport, projection, view, world) -> Vector3:
        """Map viewport space back into object space."""
        combined = _mat_mul(_mat_mul(_rows(world), _rows(view)), _rows(projection))
        inverse = _mat_inverse(combined)
        clip = Vector3(
            2.0 * (self.x - viewport.x) / viewport.width - 1.0,
            1.0 - 2.0 * (self.y - viewport.y) / viewport.height,
            (self.z - viewport.min_z) / (viewport.max_z - viewport.min_z),
        )
        return clip.transform_coord(inverse)

    @staticmethod
    def plane_intersect_line(plane, v1: Vector3, v2: Vector3) -> Optional[Vector3]:
        """Point where the line through v1 and v2 meets ``ax + by + cz + d = 0``.

        Returns None when the line is parallel to the plane.
        """
        direction = v2 - v1
        normal = Vector3(plane.a, plane.b, plane.c)
        denom = normal.dot(direction)
        if denom == 0.0:
            return None
        t = -(normal.dot(v1) + plane.d) / denom
        return v1 + direction * t

    @staticmethod
    def barycentric(v1: Vector3, v2: Vector3, v3: Vector3, f: float, g: float) -> Vector3:
        return Vector3(*_barycentric(v1, v2, v3, f, g))

    @staticmethod
    def catmull_rom(v1: Vector3, v2: Vector3, v3: Vector3, v4: Vector3, s: float) -> Vector3:
        return Vector3(*_catmull_rom(v1, v2, v3, v4, s))

    @staticmethod
    def hermite(v1: Vector3, t1: Vector3, v2: Vector3, t2: Vector3, s: float) -> Vector3:
        return Vector3(*_hermite(v1, t1, v2, t2, s))

    @staticmethod
    def euler_rh_from_matrix(m) -> Vector3:
        r = _rows(m)
        if r[1][0] > 0.998:
            return Vector3(math.atan2(r[0][2], r[2][2]), math.pi / 2, 0.0)
        if r[1][0] < -0.998:
            return Vector3(math.atan2(r[0][2], r[2][2]), -math.pi / 2, 0.0)
        return Vector3(
            math.atan2(-r[2][0], r[0][0]),
            math.asin(r[1][0]),
            math.atan2(-r[1][2], r[1][1]),
        )

    @staticmethod
    def euler_lh_from_matrix(m) -> Vector3:
        r = _rows(m)
        if r[1][0] > 0.998:
            return Vector3(0.0, math.atan2(r[0][2], r[2][2]), math.pi / 2)
        if r[1][0] < -0.998:
            return Vector3(0.0, math.atan2(r[0][2], r[2][2]), -math.pi / 2)
        return Vector3(
            -math.atan2(-r[1][2], r[1][1]),
            math.atan2(-r[2][0], r[0][0]),
            math.asin(r[1][0]),
        )


@dataclass(frozen=True, slots=True)
class Vector4(_Vector):
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 0.0

    def __iter__(self):
        return iter((self.x, self.y, self.z, self.w))

    @classmethod
    def from_string(cls, text: str) -> Vector4:
        """Parse text such as ``"(1, 2, 3, 4)"``; raises ValueError on bad input."""
        return cls(*_parse_components(text, 4))

    @classmethod
    def from_vector3(cls, vec: Vector3, w: float) -> Vector4:
        return cls(vec.x, vec.y, vec.z, w)

    def length(self) -> float:
        return math.sqrt(self.length_sq())

    def length_sq(self) -> float:
        return _dot(self, self)

    def dot(self, other: Vector4) -> float:
        return _dot(self, other)

    def cross(self, v2: Vector4, v3: Vector4) -> Vector4:
        """Four-dimensional cross product, orthogonal to all three inputs."""
        a = v2.z * v3.w - v3.z * v2.w
        b = v2.y * v3.w - v3.y * v2.w
        c = v2.y * v3.z - v3.y * v2.z
        d = v2.x * v3.w - v3.x * v2.w
        e = v2.x * v3.z - v3.x * v2.z
        f = v2.x * v3.y - v3.x * v2.y
        return Vector4(
            self.y * a - self.z * b + self.w * c,
            -self.x * a + self.z * d - self.w * e,
            self.x * b - self.y * d + self.w * f,
            -self.x * c + self.y * e - self.z * f,
        )

    def normalized(self) -> Vector4:
        """Unit vector in the same direction; a zero vector stays zero."""
        return Vector4(*_normalized(tuple(self)))

    def lerp(self, other: Vector4, s: float) -> Vector4:
        return Vector4(*_lerp(self, other, s))

    def maximize(self, other: Vector4) -> Vector4:
        return Vector4(*_maximize(self, other))

    def minimize(self, other: Vector4) -> Vector4:
        return Vector4(*_minimize(self, other))

    def transform(self, m) -> Vector4:
        return Vector4(*_apply(tuple(self), _rows(m)))

    @staticmethod
    def barycentric(v1: Vector4, v2: Vector4, v3: Vector4, f: float, g: float) -> Vector4:
        return Vector4(*_barycentric(v1, v2, v3, f, g))

    @staticmethod
    def catmull_rom(v1: Vector4, v2: Vector4, v3: Vector4, v4: Vector4, s: float) -> Vector4:
        return Vector4(*_catmull_rom(v1, v2, v3, v4, s))

    @staticmethod
    def hermite(v1: Vector4, t1: Vector4, v2: Vector4, t2: Vector4, s: float) -> Vector4:
        return Vector4(*_hermite(v1, t1, v2, t2, s))


IDENTITY_VECTOR4 = Vector4(0.0, 0.0, 0.0, 1.0)


def vec3n(x: float, y: float, z: float) -> Vector3:
    """A normalized Vector3 built from the given components."""
    return Vector3(x, y, z).normalized()