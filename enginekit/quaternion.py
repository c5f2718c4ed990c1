"""Rotation quaternions stored as (x, y, z, w).

Products follow the concatenation order used by the matrices in this
package: ``a.multiply(b)`` is the rotation ``a`` followed by ``b``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, Optional

from .vector import Vector3, _rows


@dataclass(frozen=True, slots=True)
class Quaternion:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0

    def __iter__(self) -> Iterator[float]:
        return iter((self.x, self.y, self.z, self.w))

    def __neg__(self) -> Quaternion:
        return Quaternion(-self.x, -self.y, -self.z, -self.w)

    def _scaled(self, s: float) -> Quaternion:
        return Quaternion(self.x * s, self.y * s, self.z * s, self.w * s)

    def _plus(self, other: Quaternion) -> Quaternion:
        return Quaternion(*(a + b for a, b in zip(self, other)))

    @classmethod
    def identity(cls) -> Quaternion:
        return cls(0.0, 0.0, 0.0, 1.0)

    @classmethod
    def rotation_axis(cls, axis, angle: float) -> Quaternion:
        """Rotation of ``angle`` radians about ``axis`` (normalized here)."""
        n = Vector3(*axis).normalized()
        s = math.sin(angle / 2.0)
        return cls(n.x * s, n.y * s, n.z * s, math.cos(angle / 2.0))

    @classmethod
    def rotation_matrix(cls, m) -> Quaternion:
        """Rotation held in the upper 3x3 part of a row-major matrix."""
        r = _rows(m)
        m11, m12, m13 = r[0][:3]
        m21, m22, m23 = r[1][:3]
        m31, m32, m33 = r[2][:3]
        trace = m11 + m22 + m33
        if trace > 0.0:
            s = math.sqrt(trace + 1.0) * 2.0
            return cls((m23 - m32) / s, (m31 - m13) / s, (m12 - m21) / s, s / 4.0)
        if m11 > m22 and m11 > m33:
            s = math.sqrt(1.0 + m11 - m22 - m33) * 2.0
            return cls(s / 4.0, (m12 + m21) / s, (m13 + m31) / s, (m23 - m32) / s)
        if m22 > m33:
            s = math.sqrt(1.0 + m22 - m11 - m33) * 2.0
            return cls((m12 + m21) / s, s / 4.0, (m23 + m32) / s, (m31 - m13) / s)
        s = math.sqrt(1.0 + m33 - m11 - m22) * 2.0
        return cls((m13 + m31) / s, (m23 + m32) / s, s / 4.0, (m12 - m21) / s)

    @classmethod
    def rotation_yaw_pitch_roll(cls, yaw: float, pitch: float, roll: float) -> Quaternion:
        """Roll about z, then pitch about x, then yaw about y."""
        q_roll = cls.rotation_axis((0.0, 0.0, 1.0), roll)
        q_pitch = cls.rotation_axis((1.0, 0.0, 0.0), pitch)
        q_yaw = cls.rotation_axis((0.0, 1.0, 0.0), yaw)
        return q_roll.multiply(q_pitch).multiply(q_yaw)

    @staticmethod
    def barycentric(
        q1: Quaternion, q2: Quaternion, q3: Quaternion, f: float, g: float
    ) -> Quaternion:
        total = f + g
        if total == 0.0:
            return q1
        return q1.slerp(q2, total).slerp(q1.slerp(q3, total), g / total)

    def conjugate(self) -> Quaternion:
        return Quaternion(-self.x, -self.y, -self.z, self.w)

    def dot(self, other: Optional[Quaternion] = None) -> float:
        """Dot product with ``other``, or with itself when omitted."""
        other = self if other is None else other
        return sum(a * b for a, b in zip(self, other))

    def exp(self) -> Quaternion:
        """Exponential of a pure quaternion; ``w`` is ignored."""
        theta = math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)
        if theta == 0.0:
            return Quaternion(self.x, self.y, self.z, 1.0)
        s = math.sin(theta) / theta
        return Quaternion(self.x * s, self.y * s, self.z * s, math.cos(theta))

    def ln(self) -> Quaternion:
        """Natural logarithm of a unit quaternion."""
        if self.w >= 1.0 or self.w == -1.0:
            t = 1.0
        else:
            t = math.acos(self.w) / math.sqrt(1.0 - self.w * self.w)
        return Quaternion(self.x * t, self.y * t, self.z * t, 0.0)

    def inverse(self) -> Quaternion:
        norm = self.length_sq()
        if norm == 0.0:
            raise ValueError("cannot invert a zero quaternion")
        return Quaternion(-self.x / norm, -self.y / norm, -self.z / norm, self.w / norm)

    def is_identity(self) -> bool:
        return tuple(self) == (0.0, 0.0, 0.0, 1.0)

    def length_sq(self) -> float:
        return self.dot(self)

    def length(self) -> float:
        return math.sqrt(self.length_sq())

    def multiply(self, other: Quaternion) -> Quaternion:
        """The rotation ``self`` followed by ``other``."""
        a, b = self, other
        return Quaternion(
            b.w * a.x + b.x * a.w + b.y * a.z - b.z * a.y,
            b.w * a.y - b.x * a.z + b.y * a.w + b.z * a.x,
            b.w * a.z + b.x * a.y - b.y * a.x + b.z * a.w,
            b.w * a.w - b.x * a.x - b.y * a.y - b.z * a.z,
        )

    def normalized(self) -> Quaternion:
        length = self.length()
        if length == 0.0:
            return Quaternion(0.0, 0.0, 0.0, 0.0)
        return self._scaled(1.0 / length)

    def slerp(self, other: Quaternion, t: float) -> Quaternion:
        """Spherical interpolation along the shorter arc."""
        sign = 1.0
        cos_theta = self.dot(other)
        if cos_theta < 0.0:
            sign = -1.0
            cos_theta = -cos_theta
        w1, w2 = 1.0 - t, t
        if 1.0 - cos_theta > 0.001:
            theta = math.acos(cos_theta)
            sin_theta = math.sin(theta)
            w1 = math.sin(theta * w1) / sin_theta
            w2 = math.sin(theta * w2) / sin_theta
        return self._scaled(w1)._plus(other._scaled(sign * w2))

    def to_axis_angle(self) -> tuple[Vector3, float]:
        """The (unnormalized) rotation axis and the angle in radians."""
        return Vector3(self.x, self.y, self.z), 2.0 * math.acos(self.w)