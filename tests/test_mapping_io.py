import pytest

from voxelfield.mapping import MatrixFieldMapping, NullFieldMapping
from voxelfield.mapping_io import (
    MappingIOError,
    MatrixFieldMappingIO,
    NullFieldMappingIO,
)
from voxelfield.vecmath import Matrix44, Vec3


def test_io_class_names():
    assert NullFieldMappingIO().class_name() == "NullFieldMapping"
    assert MatrixFieldMappingIO().class_name() == "MatrixFieldMapping"


def test_null_write_stores_marker():
    attrs = {}
    NullFieldMappingIO().write(attrs, NullFieldMapping())
    assert attrs == {"NullFieldMapping data": "NullFieldMapping has no data"}


def test_null_round_trip():
    attrs = {}
    io = NullFieldMappingIO()
    io.write(attrs, NullFieldMapping())
    mapping = io.read(attrs)
    assert mapping.class_name() == "NullFieldMapping"


def test_null_read_missing_attribute():
    with pytest.raises(MappingIOError, match="NullFieldMapping data"):
        NullFieldMappingIO().read({})


def test_null_read_wrong_type():
    with pytest.raises(MappingIOError):
        NullFieldMappingIO().read({"NullFieldMapping data": 3})


def test_null_write_twice_fails():
    attrs = {}
    io = NullFieldMappingIO()
    io.write(attrs, NullFieldMapping())
    with pytest.raises(MappingIOError):
        io.write(attrs, NullFieldMapping())


def test_matrix_round_trip():
    original = MatrixFieldMapping()
    original.set_local_to_world(
        Matrix44.scaling(Vec3(2, 3, 4)) @ Matrix44.translation(Vec3(-1, 5, 0.5))
    )
    attrs = {}
    io = MatrixFieldMappingIO()
    io.write(attrs, original)
    restored = io.read(attrs)
    assert restored.local_to_world == original.local_to_world
    assert restored.is_identical(original, 1e-9)


def test_matrix_write_stores_sixteen_values_row_major():
    mapping = MatrixFieldMapping()
    offset = Vec3(7, 8, 9)
    mapping.set_local_to_world(Matrix44.translation(offset))
    attrs = {}
    MatrixFieldMappingIO().write(attrs, mapping)
    values = attrs["MatrixFieldMapping data"]
    assert len(values) == 16
    assert tuple(values[12:15]) == tuple(offset)


def test_matrix_read_missing_attribute():
    with pytest.raises(MappingIOError, match="MatrixFieldMapping data"):
        MatrixFieldMappingIO().read({})


def test_matrix_read_wrong_size():
    with pytest.raises(MappingIOError, match="size"):
        MatrixFieldMappingIO().read({"MatrixFieldMapping data": [1.0] * 9})


def test_matrix_read_wrong_type():
    bad = ["a"] * 16
    with pytest.raises(MappingIOError, match="type"):
        MatrixFieldMappingIO().read({"MatrixFieldMapping data": bad})


def test_matrix_write_rejects_other_mapping():
    attrs = {}
    with pytest.raises(MappingIOError):
        MatrixFieldMappingIO().write(attrs, NullFieldMapping())
    assert attrs == {}


def test_matrix_write_twice_fails():
    attrs = {}
    io = MatrixFieldMappingIO()
    io.write(attrs, MatrixFieldMapping())
    with pytest.raises(MappingIOError):
        io.write(attrs, MatrixFieldMapping())