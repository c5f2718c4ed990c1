"""Row-major 4x4 transformation matrices and a matrix stack.

Vectors are row vectors, so ``a.multiply(b)`` applies ``a`` first and then
``b``. Planes are any objects with ``a``, ``b``, ``c`` and ``d`` attributes
describing ``ax + by + cz + d = 0``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, Optional

from .quaternion import Quaternion
from .vector import Rows, Vector3, Vector4, _mat_inverse, _mat_mul, _rows

_IDENTITY: Rows = tuple(
    tuple(1.0 if i == j else 0.0 for j in range(4)) for i in range(4)
)  # type: ignore[assignment]


def _normalized_plane(plane) -> tuple[float, float, float, float]:
    a, b, c, d = plane.a, plane.b, plane.c, plane.d
    norm = math.sqrt(a * a + b * b + c * c)
    if norm == 0.0:
        return 0.0, 0.0, 0.0, 0.0
    return a / norm, b / norm, c / norm, d / norm


@dataclass(frozen=True)
class Matrix:
    rows: Rows = _IDENTITY

    def __post_init__(self) -> None:
        object.__setattr__(self, "rows", _rows(self.rows))

    def __iter__(self) -> Iterator[tuple[float, float, float, float]]:
        return iter(self.rows)

    def __getitem__(self, index):
        if isinstance(index, tuple):
            row, col = index
            return self.rows[row][col]
        return self.rows[index]

    def __matmul__(self, other: Matrix) -> Matrix:
        return self.multiply(other)

    # -- construction -------------------------------------------------

    @classmethod
    def identity(cls) -> Matrix:
        return cls(_IDENTITY)

    @classmethod
    def translation(cls, x, y: Optional[float] = None, z: Optional[float] = None) -> Matrix:
        """Translation by (x, y, z), or by a vector passed as ``x`` alone."""
        if y is None and z is None:
            x, y, z = x
        return cls(((1, 0, 0, 0), (0, 1, 0, 0), (0, 0, 1, 0), (x, y, z, 1)))

    @classmethod
    def scaling(cls, x: float, y: float, z: float) -> Matrix:
        return cls(((x, 0, 0, 0), (0, y, 0, 0), (0, 0, z, 0), (0, 0, 0, 1)))

    @classmethod
    def rotation_x(cls, angle: float) -> Matrix:
        c, s = math.cos(angle), math.sin(angle)
        return cls(((1, 0, 0, 0), (0, c, s, 0), (0, -s, c, 0), (0, 0, 0, 1)))

    @classmethod
    def rotation_y(cls, angle: float) -> Matrix:
        c, s = math.cos(angle), math.sin(angle)
        return cls(((c, 0, -s, 0), (0, 1, 0, 0), (s, 0, c, 0), (0, 0, 0, 1)))

    @classmethod
    def rotation_z(cls, angle: float) -> Matrix:
        c, s = math.cos(angle), math.sin(angle)
        return cls(((c, s, 0, 0), (-s, c, 0, 0), (0, 0, 1, 0), (0, 0, 0, 1)))

    @classmethod
    def rotation_axis(cls, axis, angle: float) -> Matrix:
        x, y, z = Vector3(*axis).normalized()
        c, s = math.cos(angle), math.sin(angle)
        t = 1.0 - c
        return cls(
            (
                (t * x * x + c, t * x * y + s * z, t * x * z - s * y, 0),
                (t * x * y - s * z, t * y * y + c, t * y * z + s * x, 0),
                (t * x * z + s * y, t * y * z - s * x, t * z * z + c, 0),
                (0, 0, 0, 1),
            )
        )

    @classmethod
    def rotation_quaternion(cls, q: Quaternion) -> Matrix:
        x, y, z, w = q.x, q.y, q.z, q.w
        return cls(
            (
                (1 - 2 * (y * y + z * z), 2 * (x * y + z * w), 2 * (x * z - y * w), 0),
                (2 * (x * y - z * w), 1 - 2 * (x * x + z * z), 2 * (y * z + x * w), 0),
                (2 * (x * z + y * w), 2 * (y * z - x * w), 1 - 2 * (x * x + y * y), 0),
                (0, 0, 0, 1),
            )
        )

    @classmethod
    def rotation_yaw_pitch_roll(cls, yaw: float, pitch: float, roll: float) -> Matrix:
        """Roll about z, then pitch about x, then yaw about y."""
        return cls.rotation_z(roll) @ cls.rotation_x(pitch) @ cls.rotation_y(yaw)

    @classmethod
    def pos_rot_scale(cls, pos: Vector3, rot: Vector3, scale: Vector3) -> Matrix:
        """Scale, then rotate by (yaw, pitch, roll) degrees, placed at ``pos``."""
        rotation = cls.rotation_yaw_pitch_roll(
            math.radians(rot.x), math.radians(rot.y), math.radians(rot.z)
        )
        return (cls.scaling(scale.x, scale.y, scale.z) @ rotation).with_t_axis(pos)

    @classmethod
    def _look_at(cls, eye: Vector3, zaxis: Vector3, up: Vector3) -> Matrix:
        xaxis = up.cross(zaxis).normalized()
        yaxis = zaxis.cross(xaxis)
        return cls(
            (
                (xaxis.x, yaxis.x, zaxis.x, 0),
                (xaxis.y, yaxis.y, zaxis.y, 0),
                (xaxis.z, yaxis.z, zaxis.z, 0),
                (-xaxis.dot(eye), -yaxis.dot(eye), -zaxis.dot(eye), 1),
            )
        )

    @classmethod
    def look_at_lh(cls, eye: Vector3, at: Vector3, up: Vector3) -> Matrix:
        return cls._look_at(eye, (at - eye).normalized(), up)

    @classmethod
    def look_at_rh(cls, eye: Vector3, at: Vector3, up: Vector3) -> Matrix:
        return cls._look_at(eye, (eye - at).normalized(), up)

    @classmethod
    def ortho_lh(cls, width: float, height: float, z_near: float, z_far: float) -> Matrix:
        return cls(
            (
                (2 / width, 0, 0, 0),
                (0, 2 / height, 0, 0),
                (0, 0, 1 / (z_far - z_near), 0),
                (0, 0, z_near / (z_near - z_far), 1),
            )
        )

    @classmethod
    def ortho_rh(cls, width: float, height: float, z_near: float, z_far: float) -> Matrix:
        return cls(
            (
                (2 / width, 0, 0, 0),
                (0, 2 / height, 0, 0),
                (0, 0, 1 / (z_near - z_far), 0),
                (0, 0, z_near / (z_near - z_far), 1),
            )
        )

    @classmethod
    def ortho_off_center_lh(cls, left, right, bottom, top, z_near, z_far) -> Matrix:
        return cls(
            (
                (2 / (right - left), 0, 0, 0),
                (0, 2 / (top - bottom), 0, 0),
                (0, 0, 1 / (z_far - z_near), 0),
                (
                    (left + right) / (left - right),
                    (top + bottom) / (bottom - top),
                    z_near / (z_near - z_far),
                    1,
                ),
            )
        )

    @classmethod
    def ortho_off_center_rh(cls, left, right, bottom, top, z_near, z_far) -> Matrix:
        # Top and bottom are deliberately passed through in swapped order.
        bottom, top = top, bottom
        return cls(
            (
                (2 / (right - left), 0, 0, 0),
                (0, 2 / (top - bottom), 0, 0),
                (0, 0, 1 / (z_near - z_far), 0),
                (
                    (left + right) / (left - right),
                    (top + bottom) / (bottom - top),
                    z_near / (z_near - z_far),
                    1,
                ),
            )
        )

    @classmethod
    def perspective_fov_lh(cls, fov: float, aspect: float, z_near: float, z_far: float) -> Matrix:
        ys = 1.0 / math.tan(fov / 2.0)
        xs = ys / aspect
        return cls(
            (
                (xs, 0, 0, 0),
                (0, ys, 0, 0),
                (0, 0, z_far / (z_far - z_near), 1),
                (0, 0, -z_near * z_far / (z_far - z_near), 0),
            )
        )

    @classmethod
    def perspective_fov_rh(cls, fov: float, aspect: float, z_near: float, z_far: float) -> Matrix:
        ys = 1.0 / math.tan(fov / 2.0)
        xs = ys / aspect
        return cls(
            (
                (xs, 0, 0, 0),
                (0, ys, 0, 0),
                (0, 0, z_far / (z_near - z_far), -1),
                (0, 0, z_near * z_far / (z_near - z_far), 0),
            )
        )

    @classmethod
    def perspective_lh(cls, width: float, height: float, z_near: float, z_far: float) -> Matrix:
        return cls(
            (
                (2 * z_near / width, 0, 0, 0),
                (0, 2 * z_near / height, 0, 0),
                (0, 0, z_far / (z_far - z_near), 1),
                (0, 0, z_near * z_far / (z_near - z_far), 0),
            )
        )

    @classmethod
    def perspective_rh(cls, width: float, height: float, z_near: float, z_far: float) -> Matrix:
        return cls(
            (
                (2 * z_near / width, 0, 0, 0),
                (0, 2 * z_near / height, 0, 0),
                (0, 0, z_far / (z_near - z_far), -1),
                (0, 0, z_near * z_far / (z_near - z_far), 0),
            )
        )

    @classmethod
    def perspective_off_center_lh(cls, left, right, bottom, top, z_near, z_far) -> Matrix:
        return cls(
            (
                (2 * z_near / (right - left), 0, 0, 0),
                (0, 2 * z_near / (top - bottom), 0, 0),
                (
                    (left + right) / (left - right),
                    (top + bottom) / (bottom - top),
                    z_far / (z_far - z_near),
                    1,
                ),
                (0, 0, z_near * z_far / (z_near - z_far), 0),
            )
        )

    @classmethod
    def perspective_off_center_rh(cls, left, right, bottom, top, z_near, z_far) -> Matrix:
        return cls(
            (
                (2 * z_near / (right - left), 0, 0, 0),
                (0, 2 * z_near / (top - bottom), 0, 0),
                (
                    (left + right) / (right - left),
                    (top + bottom) / (top - bottom),
                    z_far / (z_near - z_far),
                    -1,
                ),
                (0, 0, z_near * z_far / (z_near - z_far), 0),
            )
        )

    @classmethod
    def reflect(cls, plane) -> Matrix:
        """Mirror through the plane."""
        a, b, c, d = _normalized_plane(plane)
        return cls(
            (
                (1 - 2 * a * a, -2 * b * a, -2 * c * a, 0),
                (-2 * a * b, 1 - 2 * b * b, -2 * c * b, 0),
                (-2 * a * c, -2 * b * c, 1 - 2 * c * c, 0),
                (-2 * a * d, -2 * b * d, -2 * c * d, 1),
            )
        )

    @classmethod
    def shadow(cls, light, plane) -> Matrix:
        """Flatten geometry onto the plane as cast from ``light`` (x, y, z, w)."""
        p = _normalized_plane(plane)
        lv = tuple(light)
        dot = sum(a * b for a, b in zip(p, lv))
        return cls(
            tuple(
                tuple((dot if i == j else 0.0) - pi * lj for j, lj in enumerate(lv))
                for i, pi in enumerate(p)
            )
        )

    @classmethod
    def transformation(
        cls,
        scaling_center: Optional[Vector3] = None,
        scaling_rotation: Optional[Quaternion] = None,
        scaling: Optional[Vector3] = None,
        rotation_center: Optional[Vector3] = None,
        rotation: Optional[Quaternion] = None,
        translation: Optional[Vector3] = None,
    ) -> Matrix:
        """Scale about a centre and orientation, rotate about a centre, then move.

        Any argument left as None has no effect.
        """
        sc = Vector3() if scaling_center is None else scaling_center
        sr = Quaternion() if scaling_rotation is None else scaling_rotation
        s = Vector3(1.0, 1.0, 1.0) if scaling is None else scaling
        rc = Vector3() if rotation_center is None else rotation_center
        r = Quaternion() if rotation is None else rotation
        t = Vector3() if translation is None else translation
        return (
            cls.translation(-sc)
            @ cls.rotation_quaternion(sr.inverse())
            @ cls.scaling(s.x, s.y, s.z)
            @ cls.rotation_quaternion(sr)
            @ cls.translation(sc)
            @ cls.translation(-rc)
            @ cls.rotation_quaternion(r)
            @ cls.translation(rc)
            @ cls.translation(t)
        )

    @classmethod
    def affine_transformation(
        cls,
        scaling: float,
        rotation_center: Optional[Vector3] = None,
        rotation: Optional[Quaternion] = None,
        translation: Optional[Vector3] = None,
    ) -> Matrix:
        rc = Vector3() if rotation_center is None else rotation_center
        r = Quaternion() if rotation is None else rotation
        t = Vector3() if translation is None else translation
        return (
            cls.scaling(scaling, scaling, scaling)
            @ cls.translation(-rc)
            @ cls.rotation_quaternion(r)
            @ cls.translation(rc)
            @ cls.translation(t)
        )

    # -- queries and operations ----------------------------------------

    def is_identity(self) -> bool:
        return self.rows == _IDENTITY

    def determinant(self) -> float:
        m = [list(row) for row in self.rows]
        det = 1.0
        for col in range(4):
            pivot = max(range(col, 4), key=lambda r: abs(m[r][col]))
            if m[pivot][col] == 0.0:
                return 0.0
            if pivot != col:
                m[col], m[pivot] = m[pivot], m[col]
                det = -det
            det *= m[col][col]
            for r in range(col + 1, 4):
                factor = m[r][col] / m[col][col]
                m[r] = [a - factor * b for a, b in zip(m[r], m[col])]
        return det

    def inverse(self) -> Matrix:
        """The inverse; raises ValueError for a singular matrix."""
        return Matrix(_mat_inverse(self.rows))

    def transpose(self) -> Matrix:
        return Matrix(tuple(zip(*self.rows)))

    def multiply(self, other: Matrix) -> Matrix:
        return Matrix(_mat_mul(self.rows, _rows(other)))

    @property
    def t_axis(self) -> Vector3:
        return Vector3(*self.rows[3][:3])

    @property
    def x_axis(self) -> Vector3:
        return Vector3(*(row[0] for row in self.rows[:3]))

    @property
    def y_axis(self) -> Vector3:
        return Vector3(*(row[1] for row in self.rows[:3]))

    @property
    def z_axis(self) -> Vector3:
        return Vector3(*(row[2] for row in self.rows[:3]))

    def with_t_axis(self, v: Vector3) -> Matrix:
        return Matrix(self.rows[:3] + ((v.x, v.y, v.z, self.rows[3][3]),))

    def _with_column(self, col: int, v: Vector3) -> Matrix:
        new_rows = [list(row) for row in self.rows]
        for row, value in zip(new_rows, v):
            row[col] = value
        return Matrix(new_rows)

    def with_x_axis(self, v: Vector3) -> Matrix:
        return self._with_column(0, v)

    def with_y_axis(self, v: Vector3) -> Matrix:
        return self._with_column(1, v)

    def with_z_axis(self, v: Vector3) -> Matrix:
        return self._with_column(2, v)

    def scale(self) -> Vector3:
        return Vector3(self.x_axis.length(), self.y_axis.length(), self.z_axis.length())

    def is_unit_scale(self) -> bool:
        return all(
            0.99 <= axis.length_sq() <= 1.01
            for axis in (self.x_axis, self.y_axis, self.z_axis)
        )

    def scale_max(self) -> float:
        return max(self.scale())

    def row_to_string(self, row: int) -> str:
        return str(Vector4(*self.rows[row]))

    def with_row_from_string(self, text: str, row: int) -> Matrix:
        """Copy with one row parsed from text; raises ValueError if malformed."""
        parsed = tuple(Vector4.from_string(text))
        new_rows = list(self.rows)
        new_rows[row] = parsed
        return Matrix(new_rows)


IDENTITY = Matrix.identity()


class MatrixStack:
    """A stack of matrices, starting with a single identity matrix."""

    def __init__(self) -> None:
        self._stack: list[Matrix] = [Matrix.identity()]

    def __len__(self) -> int:
        return len(self._stack)

    @property
    def top(self) -> Matrix:
        return self._stack[-1]

    def _post(self, m: Matrix) -> None:
        self._stack[-1] = self.top @ m

    def _pre(self, m: Matrix) -> None:
        self._stack[-1] = m @ self.top

    def load_identity(self) -> None:
        self._stack[-1] = Matrix.identity()

    def load_matrix(self, m: Matrix) -> None:
        self._stack[-1] = Matrix(_rows(m))

    def mult_matrix(self, m: Matrix) -> None:
        self._post(Matrix(_rows(m)))

    def mult_matrix_local(self, m: Matrix) -> None:
        self._pre(Matrix(_rows(m)))

    def push(self) -> None:
        self._stack.append(self.top)

    def pop(self) -> Matrix:
        """Remove and return the top; the last matrix cannot be popped."""
        if len(self._stack) == 1:
            raise IndexError("cannot pop the last matrix of the stack")
        return self._stack.pop()

    def rotate_axis(self, v, angle: float) -> None:
        self._post(Matrix.rotation_axis(v, angle))

    def rotate_axis_local(self, v, angle: float) -> None:
        self._pre(Matrix.rotation_axis(v, angle))

    def rotate_yaw_pitch_roll(self, yaw: float, pitch: float, roll: float) -> None:
        self._post(Matrix.rotation_yaw_pitch_roll(yaw, pitch, roll))

    def rotate_yaw_pitch_roll_local(self, yaw: float, pitch: float, roll: float) -> None:
        self._pre(Matrix.rotation_yaw_pitch_roll(yaw, pitch, roll))

    def scale(self, x: float, y: float, z: float) -> None:
        self._post(Matrix.scaling(x, y, z))

    def scale_local(self, x: float, y: float, z: float) -> None:
        self._pre(Matrix.scaling(x, y, z))

    def translate(self, x: float, y: float, z: float) -> None:
        self._post(Matrix.translation(x, y, z))

    def translate_local(self, x: float, y: float, z: float) -> None:
        self._pre(Matrix.translation(x, y, z))