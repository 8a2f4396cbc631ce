"""Linear and cubic interpolators that sample a field in voxel space.

Voxel centers lie at half-integer coordinates. Lookups outside the data
window are clamped to its edge voxels.
"""

from __future__ import annotations

import math
from typing import Any, Callable, List

from .fields import Field
from .interp_core import monotonic_cubic_interpolant
from .vecmath import Box3, Vec3

Lookup = Callable[[int, int, int], Any]


def _clamp(value: int, lo: int, hi: int) -> int:
    return max(lo, min(value, hi))


def _trilinear(lookup: Lookup, window: Box3, vs_p: Vec3) -> Any:
    p = vs_p - 0.5
    lower = [math.floor(c) for c in p]
    # Weights of the lower corner, then of the upper corner.
    w1 = [(c + 1) - pc for c, pc in zip(lower, p)]
    w2 = [1.0 - w for w in w1]

    los, his = list(window.min), list(window.max)
    c1 = [_clamp(c, lo, hi) for c, lo, hi in zip(lower, los, his)]
    c2 = [_clamp(c + 1, lo, hi) for c, lo, hi in zip(lower, los, his)]

    (x1, y1, z1), (x2, y2, z2) = c1, c2
    (fx1, fy1, fz1), (fx2, fy2, fz2) = w1, w2

    return fx1 * (
        fy1 * (fz1 * lookup(x1, y1, z1) + fz2 * lookup(x1, y1, z2))
        + fy2 * (fz1 * lookup(x1, y2, z1) + fz2 * lookup(x1, y2, z2))
    ) + fx2 * (
        fy1 * (fz1 * lookup(x2, y1, z1) + fz2 * lookup(x2, y1, z2))
        + fy2 * (fz1 * lookup(x2, y2, z1) + fz2 * lookup(x2, y2, z2))
    )


def _cubic_taps(corner: int, lo: int, hi: int) -> List[int]:
    middle = _clamp(corner, lo, hi)
    return [
        _clamp(middle - 1, lo, hi),
        middle,
        _clamp(middle + 1, lo, hi),
        _clamp(middle + 2, lo, hi),
    ]


def _tricubic(lookup: Lookup, window: Box3, vs_p: Vec3) -> Any:
    p = Vec3(*(max(0.5, c) - 0.5 for c in vs_p))
    corner = [math.floor(c) for c in p]
    tx, ty, tz = (pc - c for pc, c in zip(p, corner))

    xs, ys, zs = (
        _cubic_taps(c, lo, hi) for c, lo, hi in zip(corner, window.min, window.max)
    )

    along_y = [
        monotonic_cubic_interpolant(
            *(
                monotonic_cubic_interpolant(*(lookup(i, j, k) for k in zs), tz)
                for j in ys
            ),
            ty,
        )
        for i in xs
    ]
    return monotonic_cubic_interpolant(*along_y, tx)


def _fast_lookup(data: Any) -> Lookup:
    return getattr(data, "fast_value", data.value)


class LinearFieldInterp:
    """Trilinear interpolation through the field's ``value`` accessor."""

    def sample(self, data: Field, vs_p: Vec3) -> Any:
        """The interpolated value at the voxel-space point ``vs_p``."""
        return _trilinear(data.value, data.data_window, vs_p)


class CubicFieldInterp:
    """Monotonic tricubic interpolation through the field's ``value`` accessor."""

    def sample(self, data: Field, vs_p: Vec3) -> Any:
        """The interpolated value at the voxel-space point ``vs_p``."""
        return _tricubic(data.value, data.data_window, vs_p)


class LinearGenericFieldInterp:
    """Trilinear interpolation using ``fast_value`` where the field has one."""

    def sample(self, data: Field, vs_p: Vec3) -> Any:
        """The interpolated value at the voxel-space point ``vs_p``."""
        return _trilinear(_fast_lookup(data), data.data_window, vs_p)


class CubicGenericFieldInterp:
    """Monotonic tricubic interpolation using ``fast_value`` where available."""

    def sample(self, data: Field, vs_p: Vec3) -> Any:
        """The interpolated value at the voxel-space point ``vs_p``."""
        return _tricubic(_fast_lookup(data), data.data_window, vs_p)