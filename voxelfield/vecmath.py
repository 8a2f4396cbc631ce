"""Small vector, box and 4x4 matrix types used by field mappings.

Matrices follow the row-vector convention: a point is transformed as
``v * M`` and the translation lives in the last row.
"""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass
from numbers import Real
from typing import Iterator, Optional, Tuple

_FLOAT_MAX = sys.float_info.max


@dataclass(frozen=True)
class Vec3:
    """An immutable three-component vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __getitem__(self, index: int) -> float:
        return (self.x, self.y, self.z)[index]

    @staticmethod
    def _coerce(other) -> "Vec3":
        if isinstance(other, Vec3):
            return other
        if isinstance(other, Real):
            return Vec3(other, other, other)
        return NotImplemented

    def __add__(self, other) -> "Vec3":
        o = self._coerce(other)
        if o is NotImplemented:
            return NotImplemented
        return Vec3(self.x + o.x, self.y + o.y, self.z + o.z)

    __radd__ = __add__

    def __sub__(self, other) -> "Vec3":
        o = self._coerce(other)
        if o is NotImplemented:
            return NotImplemented
        return Vec3(self.x - o.x, self.y - o.y, self.z - o.z)

    def __rsub__(self, other) -> "Vec3":
        o = self._coerce(other)
        if o is NotImplemented:
            return NotImplemented
        return o - self

    def __mul__(self, other) -> "Vec3":
        o = self._coerce(other)
        if o is NotImplemented:
            return NotImplemented
        return Vec3(self.x * o.x, self.y * o.y, self.z * o.z)

    __rmul__ = __mul__

    def __truediv__(self, other) -> "Vec3":
        o = self._coerce(other)
        if o is NotImplemented:
            return NotImplemented
        return Vec3(self.x / o.x, self.y / o.y, self.z / o.z)

    def __neg__(self) -> "Vec3":
        return Vec3(-self.x, -self.y, -self.z)

    def length(self) -> float:
        """Euclidean length."""
        return math.sqrt(_dot(self, self))

    def equal_with_rel_error(self, other: "Vec3", tolerance: float) -> bool:
        """True if each component differs by at most ``tolerance`` times this one."""
        return all(abs(a - b) <= tolerance * abs(a) for a, b in zip(self, other))

    def equal_with_abs_error(self, other: "Vec3", tolerance: float) -> bool:
        """True if each component differs by at most ``tolerance``."""
        return all(abs(a - b) <= tolerance for a, b in zip(self, other))


def _dot(a: Vec3, b: Vec3) -> float:
    return a.x * b.x + a.y * b.y + a.z * b.z


def _cross(a: Vec3, b: Vec3) -> Vec3:
    return Vec3(a.y * b.z - a.z * b.y, a.z * b.x - a.x * b.z, a.x * b.y - a.y * b.x)


def _normalized(v: Vec3) -> Vec3:
    length = v.length()
    return v / length if length else v


@dataclass(frozen=True)
class Box3:
    """An axis-aligned box given by inclusive corners."""

    min: Vec3
    max: Vec3

    def size(self) -> Vec3:
        """The difference between the corners."""
        return self.max - self.min


Rows = Tuple[Tuple[float, float, float, float], ...]


@dataclass(frozen=True)
class Matrix44:
    """An immutable 4x4 matrix stored as four rows."""

    rows: Rows

    def __post_init__(self) -> None:
        rows = tuple(tuple(float(v) for v in row) for row in self.rows)
        if len(rows) != 4 or any(len(row) != 4 for row in rows):
            raise ValueError("a Matrix44 needs four rows of four values")
        object.__setattr__(self, "rows", rows)

    def __getitem__(self, index: int) -> Tuple[float, float, float, float]:
        return self.rows[index]

    def __matmul__(self, other: "Matrix44") -> "Matrix44":
        if not isinstance(other, Matrix44):
            return NotImplemented
        cols = list(zip(*other.rows))
        return Matrix44(
            tuple(
                tuple(sum(a * b for a, b in zip(row, col)) for col in cols)
                for row in self.rows
            )
        )

    @staticmethod
    def identity() -> "Matrix44":
        """The identity matrix."""
        return Matrix44(
            tuple(tuple(1.0 if i == j else 0.0 for j in range(4)) for i in range(4))
        )

    @staticmethod
    def scaling(scale: Vec3) -> "Matrix44":
        """A matrix scaling by each component of ``scale``."""
        sx, sy, sz = scale
        return Matrix44(
            ((sx, 0, 0, 0), (0, sy, 0, 0), (0, 0, sz, 0), (0, 0, 0, 1))
        )

    @staticmethod
    def translation(offset: Vec3) -> "Matrix44":
        """A matrix translating by ``offset``."""
        tx, ty, tz = offset
        return Matrix44(
            ((1, 0, 0, 0), (0, 1, 0, 0), (0, 0, 1, 0), (tx, ty, tz, 1))
        )

    def inverse(self) -> "Matrix44":
        """The inverse, by Gauss-Jordan elimination with partial pivoting."""
        work = [list(row) for row in self.rows]
        inv = [list(row) for row in Matrix44.identity().rows]
        for col in range(4):
            pivot = max(range(col, 4), key=lambda r: abs(work[r][col]))
            if work[pivot][col] == 0.0:
                raise ValueError("cannot invert a singular matrix")
            work[col], work[pivot] = work[pivot], work[col]
            inv[col], inv[pivot] = inv[pivot], inv[col]
            p = work[col][col]
            work[col] = [v / p for v in work[col]]
            inv[col] = [v / p for v in inv[col]]
            for r in range(4):
                factor = work[r][col]
                if r != col and factor:
                    work[r] = [a - factor * b for a, b in zip(work[r], work[col])]
                    inv[r] = [a - factor * b for a, b in zip(inv[r], inv[col])]
        return Matrix44(tuple(tuple(row) for row in inv))

    def mult_vec_matrix(self, v: Vec3) -> Vec3:
        """Transform the point ``v`` by this matrix, with projective divide."""
        x, y, z = v
        a, b, c, w = (
            x * col[0] + y * col[1] + z * col[2] + col[3] for col in zip(*self.rows)
        )
        return Vec3(a / w, b / w, c / w)

    def equal_with_rel_error(self, other: "Matrix44", tolerance: float) -> bool:
        """True if each element differs by at most ``tolerance`` times this one."""
        return all(
            abs(a - b) <= tolerance * abs(a)
            for row_a, row_b in zip(self.rows, other.rows)
            for a, b in zip(row_a, row_b)
        )

    def extract_shrt(self) -> Optional[Tuple[Vec3, Vec3, Vec3, Vec3]]:
        """Decompose into (scale, shear, rotation, translation).

        Rotation is given as XYZ Euler angles in radians. Returns None if
        the matrix has a zero scale.
        """
        rows = [Vec3(*row[:3]) for row in self.rows[:3]]

        max_val = max(abs(v) for row in rows for v in row)
        if max_val != 0:
            if any(_zero_scale(max_val, row) for row in rows):
                return None
            rows = [row / max_val for row in rows]

        sx = rows[0].length()
        if _zero_scale(sx, rows[0]):
            return None
        rows[0] = rows[0] / sx

        shear_xy = _dot(rows[0], rows[1])
        rows[1] = rows[1] - rows[0] * shear_xy

        sy = rows[1].length()
        if _zero_scale(sy, rows[1]):
            return None
        rows[1] = rows[1] / sy
        shear_xy /= sy

        shear_xz = _dot(rows[0], rows[2])
        rows[2] = rows[2] - rows[0] * shear_xz
        shear_yz = _dot(rows[1], rows[2])
        rows[2] = rows[2] - rows[1] * shear_yz

        sz = rows[2].length()
        if _zero_scale(sz, rows[2]):
            return None
        rows[2] = rows[2] / sz
        shear_xz /= sz
        shear_yz /= sz

        scale = Vec3(sx, sy, sz)
        if _dot(rows[0], _cross(rows[1], rows[2])) < 0:
            scale = -scale
            rows = [-row for row in rows]

        scale = scale * max_val
        shear = Vec3(shear_xy, shear_xz, shear_yz)
        rotation = _euler_xyz(rows)
        translate = Vec3(*self.rows[3][:3])
        return scale, shear, rotation, translate


def _zero_scale(scale: float, row: Vec3) -> bool:
    return any(abs(scale) < 1 and abs(v) >= _FLOAT_MAX * abs(scale) for v in row)


def _euler_xyz(rows) -> Vec3:
    i, j, k = (_normalized(r) for r in rows)
    m = Matrix44(
        (
            (i.x, i.y, i.z, 0),
            (j.x, j.y, j.z, 0),
            (k.x, k.y, k.z, 0),
            (0, 0, 0, 1),
        )
    )
    rx = math.atan2(m[1][2], m[2][2])
    c, s = math.cos(-rx), math.sin(-rx)
    undo_x = Matrix44(((1, 0, 0, 0), (0, c, s, 0), (0, -s, c, 0), (0, 0, 0, 1)))
    n = undo_x @ m
    cy = math.sqrt(n[0][0] * n[0][0] + n[0][1] * n[0][1])
    ry = math.atan2(-n[0][2], cy)
    rz = math.atan2(-n[1][0], n[1][1])
    return Vec3(rx, ry, rz)


def lerp_factor(value: float, a: float, b: float) -> float:
    """The factor t such that ``value == a + t * (b - a)``, or 0 if undefined."""
    d = b - a
    n = value - a
    if abs(d) > 1 or abs(n) < _FLOAT_MAX * abs(d):
        return n / d
    return 0.0