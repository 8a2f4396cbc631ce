"""Reading and writing field mappings as named attributes.

The attribute store is any mutable mapping from attribute name to value.
"""

from __future__ import annotations

from collections.abc import MutableMapping, Sequence
from numbers import Real

from .mapping import FieldMapping, MatrixFieldMapping, NullFieldMapping
from .vecmath import Matrix44

_NULL_MAPPING_NAME = "NullFieldMapping"
_MATRIX_MAPPING_NAME = "MatrixFieldMapping"
_NULL_MAPPING_DATA_NAME = "NullFieldMapping data"
_MATRIX_MAPPING_DATA_NAME = "MatrixFieldMapping data"
_NULL_MAPPING_DATA = "NullFieldMapping has no data"


class MappingIOError(Exception):
    """A mapping could not be read from or written to its attributes."""


def _fetch(attributes: MutableMapping, name: str):
    if name not in attributes:
        raise MappingIOError(f"Couldn't find attribute {name}")
    return attributes[name]


def _store(attributes: MutableMapping, name: str, value) -> None:
    if name in attributes:
        raise MappingIOError(f"Couldn't add attribute {name}")
    attributes[name] = value


class NullFieldMappingIO:
    """Reads and writes NullFieldMapping."""

    def read(self, attributes: MutableMapping) -> NullFieldMapping:
        """Read a NullFieldMapping; its marker attribute must be a string."""
        value = _fetch(attributes, _NULL_MAPPING_DATA_NAME)
        if not isinstance(value, str):
            raise MappingIOError(
                f"Bad attribute type class for {_NULL_MAPPING_DATA_NAME}"
            )
        return NullFieldMapping()

    def write(self, attributes: MutableMapping, mapping: FieldMapping) -> None:
        """Write the marker attribute for a NullFieldMapping."""
        _store(attributes, _NULL_MAPPING_DATA_NAME, _NULL_MAPPING_DATA)

    def class_name(self) -> str:
        return _NULL_MAPPING_NAME


class MatrixFieldMappingIO:
    """Reads and writes MatrixFieldMapping as 16 row-major values."""

    def read(self, attributes: MutableMapping) -> MatrixFieldMapping:
        """Read a MatrixFieldMapping from its local-to-world matrix."""
        name = _MATRIX_MAPPING_DATA_NAME
        value = _fetch(attributes, name)
        if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
            raise MappingIOError(f"Bad attribute rank for attribute {name}")
        if len(value) != 16:
            raise MappingIOError(f"Invalid attribute size for attribute {name}")
        if any(isinstance(v, bool) or not isinstance(v, Real) for v in value):
            raise MappingIOError(f"Bad attribute type class for {name}")

        values = [float(v) for v in value]
        matrix = Matrix44(tuple(tuple(values[r * 4:r * 4 + 4]) for r in range(4)))
        mapping = MatrixFieldMapping()
        mapping.set_local_to_world(matrix)
        return mapping

    def write(self, attributes: MutableMapping, mapping: FieldMapping) -> None:
        """Write the mapping's local-to-world matrix."""
        if not isinstance(mapping, MatrixFieldMapping):
            raise MappingIOError("Couldn't get MatrixFieldMapping from pointer")
        values = tuple(v for row in mapping.local_to_world.rows for v in row)
        _store(attributes, _MATRIX_MAPPING_DATA_NAME, values)

    def class_name(self) -> str:
        return _MATRIX_MAPPING_NAME