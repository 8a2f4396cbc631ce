"""Linear and cubic interpolators for MAC (staggered-grid) vector fields.

A MAC field stores each vector component on the faces of the voxels: the
``u`` component at ``(i, j + 0.5, k + 0.5)``, ``v`` at ``(i + 0.5, j, k + 0.5)``
and ``w`` at ``(i + 0.5, j + 0.5, k)``. Along its own axis each component
has one more sample than the data window has voxels.

The field passed to ``sample`` needs a ``data_window`` box and the accessors
``u(i, j, k)``, ``v(i, j, k)`` and ``w(i, j, k)``.
"""

from __future__ import annotations

import math
from typing import Any, Callable, List, Sequence

from .interp_core import monotonic_cubic_interpolant
from .vecmath import Box3, Vec3

Lookup = Callable[[int, int, int], float]


def _clamp(value: int, lo: int, hi: int) -> int:
    return max(lo, min(value, hi))


def _component_bounds(window: Box3, axis: int):
    """Index bounds for the component stored on faces normal to ``axis``."""
    lo = [int(c) for c in window.min]
    hi = [int(c) for c in window.max]
    hi[axis] += 1
    return lo, hi


def _trilinear_at(
    lookup: Lookup, p: Sequence[float], lo: Sequence[int], hi: Sequence[int]
) -> float:
    lower = [math.floor(c) for c in p]
    w1 = [(c + 1) - pc for c, pc in zip(lower, p)]
    w2 = [1.0 - w for w in w1]

    x1, y1, z1 = (_clamp(c, a, b) for c, a, b in zip(lower, lo, hi))
    x2, y2, z2 = (_clamp(c + 1, a, b) for c, a, b in zip(lower, lo, hi))
    fx1, fy1, fz1 = w1
    fx2, fy2, fz2 = w2

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


def _tricubic_at(
    lookup: Lookup, p: Sequence[float], lo: Sequence[int], hi: Sequence[int]
) -> float:
    corner = [math.floor(c) for c in p]
    tx, ty, tz = (pc - c for pc, c in zip(p, corner))
    xs, ys, zs = (_cubic_taps(c, a, b) for c, a, b in zip(corner, lo, hi))

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


class LinearMACFieldInterp:
    """Trilinear interpolation of each face-centered component."""

    def sample(self, data: Any, vs_p: Vec3) -> Vec3:
        """The interpolated vector at the voxel-space point ``vs_p``."""
        window = data.data_window
        x, y, z = vs_p
        points = (
            (x, y - 0.5, z - 0.5),
            (x - 0.5, y, z - 0.5),
            (x - 0.5, y - 0.5, z),
        )
        lookups = (data.u, data.v, data.w)
        return Vec3(
            *(
                _trilinear_at(lookup, p, *_component_bounds(window, axis))
                for axis, (lookup, p) in enumerate(zip(lookups, points))
            )
        )


class CubicMACFieldInterp:
    """Monotonic tricubic interpolation of each face-centered component."""

    def sample(self, data: Any, vs_p: Vec3) -> Vec3:
        """The interpolated vector at the voxel-space point ``vs_p``."""
        window = data.data_window
        x, y, z = vs_p
        cx, cy, cz = (max(0.5, c) for c in vs_p)
        points = (
            (x, cy - 0.5, cz - 0.5),
            (cx - 0.5, y, cz - 0.5),
            (cx - 0.5, cy - 0.5, z),
        )
        lookups = (data.u, data.v, data.w)
        return Vec3(
            *(
                _tricubic_at(lookup, p, *_component_bounds(window, axis))
                for axis, (lookup, p) in enumerate(zip(lookups, points))
            )
        )