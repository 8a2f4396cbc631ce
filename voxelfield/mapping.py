"""Mappings between world, local and voxel space."""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from .vecmath import Box3, Matrix44, Vec3, lerp_factor

_NULL_MAPPING_NAME = "NullFieldMapping"
_MATRIX_MAPPING_NAME = "MatrixFieldMapping"


class FieldMapping(ABC):
    """Base class: maps local space [0, 1]^3 onto the voxel extents."""

    def __init__(self, extents: Optional[Box3] = None) -> None:
        if extents is None:
            self._origin = Vec3(0, 0, 0)
            self._res = Vec3(1, 1, 1)
        else:
            self._origin = extents.min
            self._res = extents.size() + 1

    @property
    def origin(self) -> Vec3:
        """The first voxel of the extents."""
        return self._origin

    @property
    def resolution(self) -> Vec3:
        """The number of voxels along each axis."""
        return self._res

    def set_extents(self, extents: Box3) -> None:
        """Set the voxel extents the local space maps onto."""
        self._origin = extents.min
        self._res = extents.size() + 1
        self._extents_changed()

    def _extents_changed(self) -> None:
        """Called after the extents change."""

    def local_to_voxel(self, ls_p: Vec3) -> Vec3:
        """Transform a local-space point to voxel space."""
        return self._origin + ls_p * self._res

    def local_to_voxel_many(self, points: Iterable[Vec3]) -> List[Vec3]:
        """Transform several local-space points to voxel space."""
        return [self.local_to_voxel(p) for p in points]

    def voxel_to_local(self, vs_p: Vec3) -> Vec3:
        """Transform a voxel-space point to local space."""
        o, r = self._origin, self._res
        return Vec3(
            lerp_factor(vs_p.x, o.x, o.x + r.x),
            lerp_factor(vs_p.y, o.y, o.y + r.y),
            lerp_factor(vs_p.z, o.z, o.z + r.z),
        )

    @abstractmethod
    def class_name(self) -> str:
        """The name identifying this kind of mapping."""

    @abstractmethod
    def is_identical(self, other: "FieldMapping", tolerance: float) -> bool:
        """Whether ``other`` describes the same mapping."""

    def clone(self) -> "FieldMapping":
        """An independent copy of this mapping."""
        return copy.copy(self)


class NullFieldMapping(FieldMapping):
    """A mapping that carries extents only, with no world transform."""

    def class_name(self) -> str:
        return _NULL_MAPPING_NAME

    def is_identical(self, other: FieldMapping, tolerance: float) -> bool:
        return other.class_name() == _NULL_MAPPING_NAME

    def clone(self) -> "NullFieldMapping":
        return copy.copy(self)


class MatrixFieldMapping(FieldMapping):
    """A mapping whose local space is placed in the world by a 4x4 matrix."""

    def __init__(self, extents: Optional[Box3] = None) -> None:
        super().__init__(extents)
        self.make_identity()

    @property
    def local_to_world(self) -> Matrix44:
        """The local-to-world matrix."""
        return self._ls_to_ws

    @property
    def world_voxel_size(self) -> Vec3:
        """The world-space size of one voxel along each axis."""
        return self._ws_voxel_size

    def set_local_to_world(self, ls_to_ws: Matrix44) -> None:
        """Set the local-to-world matrix and update derived transforms."""
        self._ls_to_ws = ls_to_ws
        self._update_transform()

    def make_identity(self) -> None:
        """Reset the local-to-world matrix to identity."""
        self.set_local_to_world(Matrix44.identity())

    def _extents_changed(self) -> None:
        self._update_transform()

    def _update_transform(self) -> None:
        self._ws_to_ls = self._ls_to_ws.inverse()
        self._ws_to_vs = self._ws_to_ls @ self.local_to_voxel_matrix()
        self._vs_to_ws = self._ws_to_vs.inverse()

        origin = self._vs_to_ws.mult_vec_matrix(Vec3(0, 0, 0))
        self._ws_voxel_size = Vec3(
            *(
                (self._vs_to_ws.mult_vec_matrix(step) - origin).length()
                for step in (Vec3(1, 0, 0), Vec3(0, 1, 0), Vec3(0, 0, 1))
            )
        )

    def local_to_voxel_matrix(self) -> Matrix44:
        """Scale by the resolution, then offset to the extents' origin."""
        return Matrix44.scaling(self._res) @ Matrix44.translation(self._origin)

    def world_to_local(self, ws_p: Vec3) -> Vec3:
        """Transform a world-space point to local space."""
        return self._ws_to_ls.mult_vec_matrix(ws_p)

    def world_to_voxel(self, ws_p: Vec3) -> Vec3:
        """Transform a world-space point to voxel space."""
        return self._ws_to_vs.mult_vec_matrix(ws_p)

    def voxel_to_world(self, vs_p: Vec3) -> Vec3:
        """Transform a voxel-space point to world space."""
        return self._vs_to_ws.mult_vec_matrix(vs_p)

    def class_name(self) -> str:
        return _MATRIX_MAPPING_NAME

    def is_identical(self, other: FieldMapping, tolerance: float) -> bool:
        if other.class_name() != _MATRIX_MAPPING_NAME:
            return False
        if not isinstance(other, MatrixFieldMapping):
            return False

        if other._ls_to_ws.equal_with_rel_error(
            self._ls_to_ws, tolerance
        ) and other._ws_to_vs.equal_with_rel_error(self._ws_to_vs, tolerance):
            return True

        # Fall back to comparing decomposed components, which is more
        # robust against precision problems.
        pairs = (
            (self._ls_to_ws, other._ls_to_ws),
            (self._ws_to_vs, other._ws_to_vs),
        )
        for mine, theirs in pairs:
            a = mine.extract_shrt()
            if a is None:
                return False
            b = theirs.extract_shrt()
            if b is None:
                return False
            s1, _, r1, t1 = a
            s2, _, r2, t2 = b
            if not (
                s1.equal_with_rel_error(s2, tolerance)
                and r1.equal_with_abs_error(r2, tolerance)
                and t1.equal_with_rel_error(t2, tolerance)
            ):
                return False
        return True

    def clone(self) -> "MatrixFieldMapping":
        return copy.copy(self)