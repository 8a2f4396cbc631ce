"""Interpolation helpers: the monotonic cubic interpolant, procedural lookup
and point-in-field tests."""

from __future__ import annotations

from typing import Any

from .fields import Field, ProceduralField
from .vecmath import Box3, Vec3


def _scalar_monotonic_cubic(f1: float, f2: float, f3: float, f4: float, t: float) -> float:
    d_k = 0.5 * (f3 - f1)
    d_k1 = 0.5 * (f4 - f2)
    delta_k = f3 - f2

    if delta_k == 0:
        d_k = 0.0
        d_k1 = 0.0

    a0 = f2
    a1 = d_k
    a2 = 3.0 * delta_k - 2.0 * d_k - d_k1
    a3 = d_k + d_k1 - 2.0 * delta_k

    t2 = t * t
    t3 = t2 * t
    return a3 * t3 + a2 * t2 + a1 * t + a0


def monotonic_cubic_interpolant(f1: Any, f2: Any, f3: Any, f4: Any, t: float) -> Any:
    """Cubic Hermite interpolation between ``f2`` and ``f3`` at ``t`` in [0, 1].

    ``f1`` and ``f4`` are the neighbouring samples used for the slopes; a
    flat segment (``f2 == f3``) gets zero slopes. Vectors are interpolated
    component by component.
    """
    if isinstance(f2, Vec3):
        return Vec3(
            *(
                _scalar_monotonic_cubic(a, b, c, d, t)
                for a, b, c, d in zip(f1, f2, f3, f4)
            )
        )
    return _scalar_monotonic_cubic(f1, f2, f3, f4, t)


class ProceduralFieldLookup:
    """Point-samples a procedural field instead of interpolating voxels."""

    def sample(self, data: ProceduralField, vs_p: Vec3) -> Any:
        """The field's value at the voxel-space point ``vs_p``."""
        voxel_scale = 1.0 / data.data_resolution()
        return data.ls_sample(vs_p * voxel_scale)


def ws_sample(field: Field, interp: Any, ws_p: Vec3) -> Any:
    """Sample ``field`` with ``interp`` at the world-space point ``ws_p``."""
    world_to_voxel = getattr(field.mapping, "world_to_voxel", None)
    if world_to_voxel is None:
        raise TypeError(
            f"{field.mapping.class_name()} has no world-to-voxel transform"
        )
    return interp.sample(field, world_to_voxel(ws_p))


def is_point_in_field(field: Field, ws_p: Vec3) -> bool:
    """Whether the world-space point lies within the field's local (0, 1] box."""
    world_to_local = getattr(field.mapping, "world_to_local", None)
    if world_to_local is None:
        raise TypeError(
            f"{field.mapping.class_name()} has no world-to-local transform"
        )
    ls_p = world_to_local(ws_p)
    return all(0.0 < c <= 1.0 for c in ls_p)


def is_legal_voxel_coord(vs_p: Vec3, vs_data_window: Box3) -> bool:
    """Whether ``vs_p`` lies strictly inside the floating-point data window."""
    lo, hi = vs_data_window.min, vs_data_window.max
    return all(a < p < b for p, a, b in zip(vs_p, lo, hi))