"""Voxel field base classes, an empty proxy field and procedural fields."""

from __future__ import annotations

import copy
import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .mapping import FieldMapping, NullFieldMapping
from .vecmath import Box3, Vec3


def _int_vec(v) -> Vec3:
    return Vec3(*(int(c) for c in v))


@dataclass
class FieldMetadata:
    """Named metadata values of four kinds, each with a lookup default."""

    ints: Dict[str, int] = field(default_factory=dict)
    floats: Dict[str, float] = field(default_factory=dict)
    vec_ints: Dict[str, Vec3] = field(default_factory=dict)
    vec_floats: Dict[str, Vec3] = field(default_factory=dict)

    def int_metadata(self, name: str, default: int) -> int:
        """The integer stored under ``name``, or ``default``."""
        return self.ints.get(name, default)

    def float_metadata(self, name: str, default: float) -> float:
        """The float stored under ``name``, or ``default``."""
        return self.floats.get(name, default)

    def vec_int_metadata(self, name: str, default: Vec3) -> Vec3:
        """The integer vector stored under ``name``, or ``default``."""
        return self.vec_ints.get(name, default)

    def vec_float_metadata(self, name: str, default: Vec3) -> Vec3:
        """The float vector stored under ``name``, or ``default``."""
        return self.vec_floats.get(name, default)


class Field(ABC):
    """A field with extents, a data window, a mapping and metadata."""

    def __init__(self, mapping: Optional[FieldMapping] = None) -> None:
        empty = Box3(Vec3(0, 0, 0), Vec3(-1, -1, -1))
        self._extents = empty
        self._data_window = empty
        self.metadata = FieldMetadata()
        self._mapping = mapping if mapping is not None else NullFieldMapping()

    @property
    def extents(self) -> Box3:
        """The voxel extents the mapping covers."""
        return self._extents

    @property
    def data_window(self) -> Box3:
        """The inclusive range of voxels that hold data."""
        return self._data_window

    @property
    def mapping(self) -> FieldMapping:
        """The mapping from world to voxel space."""
        return self._mapping

    @mapping.setter
    def mapping(self, mapping: FieldMapping) -> None:
        self._mapping = mapping
        self._mapping.set_extents(self._extents)

    def set_size(self, extents: Box3, data_window: Optional[Box3] = None) -> None:
        """Set the extents and data window; the window defaults to the extents."""
        if data_window is None:
            data_window = extents
        self._extents = Box3(_int_vec(extents.min), _int_vec(extents.max))
        self._data_window = Box3(_int_vec(data_window.min), _int_vec(data_window.max))
        self._mapping.set_extents(self._extents)

    def data_resolution(self) -> Vec3:
        """The number of voxels along each axis of the extents."""
        return self._extents.size() + 1

    def _check_in_window(self, i: int, j: int, k: int) -> None:
        lo, hi = self._data_window.min, self._data_window.max
        if not (lo.x <= i <= hi.x and lo.y <= j <= hi.y and lo.z <= k <= hi.z):
            raise IndexError(f"voxel ({i}, {j}, {k}) is outside the data window")

    @abstractmethod
    def value(self, i: int, j: int, k: int) -> Any:
        """The value of voxel (i, j, k)."""


class EmptyField(Field):
    """A field that stores no voxel data, only a default and a constant value.

    It can carry resolution, metadata and mapping like any other field and
    be used as a proxy or as a constant field.
    """

    def __init__(self, default: Any = 0.0, mapping: Optional[FieldMapping] = None) -> None:
        super().__init__(mapping)
        self._default = default
        self.constant_value = default

    def clear(self, value: Any) -> None:
        """Set both the default and the constant value."""
        self._default = value
        self.constant_value = value

    def value(self, i: int, j: int, k: int) -> Any:
        """The default value, for any voxel inside the data window."""
        self._check_in_window(i, j, k)
        return self._default

    def set_value(self, i: int, j: int, k: int, value: Any) -> None:
        """Accept a write inside the data window and discard it."""
        self._check_in_window(i, j, k)

    def mem_size(self) -> int:
        """Approximate bytes used; independent of the resolution."""
        return sys.getsizeof(self) + sys.getsizeof(self.__dict__)

    def class_name(self) -> str:
        return "EmptyField"

    def clone(self) -> "EmptyField":
        """An independent copy of this field."""
        return copy.deepcopy(self)


class ProceduralField(Field):
    """A field whose values are computed from local-space positions."""

    @abstractmethod
    def ls_sample(self, ls_p: Vec3) -> Any:
        """The value at the local-space point ``ls_p``."""

    def value(self, i: int, j: int, k: int) -> Any:
        """Point-sample at the center of voxel (i, j, k)."""
        vs_p = Vec3(i + 0.5, j + 0.5, k + 0.5)
        return self.ls_sample(self.mapping.voxel_to_local(vs_p))

    def typed_int_metadata(self, name: str, default: Any) -> Any:
        """Integer metadata shaped like ``default`` (scalar or vector)."""
        if isinstance(default, Vec3):
            result = self.metadata.vec_int_metadata(name, _int_vec(default))
            return Vec3(*(float(c) for c in result))
        return float(self.metadata.int_metadata(name, int(default)))

    def typed_float_metadata(self, name: str, default: Any) -> Any:
        """Float metadata shaped like ``default`` (scalar or vector)."""
        if isinstance(default, Vec3):
            result = self.metadata.vec_float_metadata(name, default)
            return Vec3(*(float(c) for c in result))
        return float(self.metadata.float_metadata(name, float(default)))

    def class_name(self) -> str:
        return "ProceduralField"