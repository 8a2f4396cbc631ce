import pytest

from voxelfield.mapping import MatrixFieldMapping, NullFieldMapping
from voxelfield.vecmath import Box3, Matrix44, Vec3


def approx_vec(v):
    return pytest.approx(tuple(v), abs=1e-9)


@pytest.fixture
def extents():
    return Box3(Vec3(-2, 0, 1), Vec3(5, 7, 3))


def test_class_names():
    assert NullFieldMapping().class_name() == "NullFieldMapping"
    assert MatrixFieldMapping().class_name() == "MatrixFieldMapping"


def test_default_resolution_is_one_voxel():
    m = MatrixFieldMapping()
    assert m.origin == Vec3(0, 0, 0)
    assert m.resolution == Vec3(1, 1, 1)


def test_set_extents_gives_inclusive_resolution(extents):
    m = NullFieldMapping()
    m.set_extents(extents)
    assert m.origin == extents.min
    assert m.resolution == extents.size() + 1


def test_local_voxel_round_trip(extents):
    m = NullFieldMapping(extents)
    p = Vec3(0.25, 0.5, 0.875)
    assert tuple(m.voxel_to_local(m.local_to_voxel(p))) == approx_vec(p)


def test_local_to_voxel_many_matches_single(extents):
    m = MatrixFieldMapping(extents)
    points = [Vec3(0, 0, 0), Vec3(1, 1, 1), Vec3(0.3, 0.6, 0.9)]
    assert m.local_to_voxel_many(points) == [m.local_to_voxel(p) for p in points]


def test_identity_mapping_keeps_unit_voxel_space():
    m = MatrixFieldMapping()
    p = Vec3(0.5, 0.25, 0.75)
    assert tuple(m.world_to_voxel(p)) == approx_vec(p)


def test_world_to_voxel_composes_local_steps(extents):
    m = MatrixFieldMapping(extents)
    m.set_local_to_world(
        Matrix44.scaling(Vec3(2, 3, 4)) @ Matrix44.translation(Vec3(1, -1, 2))
    )
    p = Vec3(1.5, 0.5, 3.0)
    expected = m.local_to_voxel(m.world_to_local(p))
    assert tuple(m.world_to_voxel(p)) == approx_vec(expected)


def test_voxel_world_round_trip(extents):
    m = MatrixFieldMapping(extents)
    m.set_local_to_world(Matrix44.scaling(Vec3(2, 3, 4)))
    p = Vec3(3.0, -1.0, 2.5)
    assert tuple(m.voxel_to_world(m.world_to_voxel(p))) == approx_vec(p)


def test_extents_change_updates_voxel_size():
    m = MatrixFieldMapping()
    before = m.world_voxel_size
    m.set_extents(Box3(Vec3(0, 0, 0), Vec3(9, 9, 9)))
    after = m.world_voxel_size
    assert tuple(after * m.resolution) == approx_vec(before)


def test_local_to_voxel_matrix_matches_local_to_voxel(extents):
    m = MatrixFieldMapping(extents)
    p = Vec3(0.1, 0.2, 0.3)
    assert tuple(m.local_to_voxel_matrix().mult_vec_matrix(p)) == approx_vec(
        m.local_to_voxel(p)
    )


def test_make_identity_resets_transform():
    m = MatrixFieldMapping()
    m.set_local_to_world(Matrix44.scaling(Vec3(5, 5, 5)))
    m.make_identity()
    assert m.local_to_world == Matrix44.identity()


def test_null_mapping_identity_check():
    assert NullFieldMapping().is_identical(NullFieldMapping(), 1e-6)
    assert not NullFieldMapping().is_identical(MatrixFieldMapping(), 1e-6)


def test_matrix_mapping_identical_to_clone(extents):
    m = MatrixFieldMapping(extents)
    m.set_local_to_world(Matrix44.scaling(Vec3(2, 3, 4)))
    assert m.is_identical(m.clone(), 1e-6)


def test_matrix_mapping_differs_with_extents(extents):
    a = MatrixFieldMapping(extents)
    b = MatrixFieldMapping()
    assert not a.is_identical(b, 1e-6)


def test_matrix_mapping_not_identical_to_null():
    assert not MatrixFieldMapping().is_identical(NullFieldMapping(), 1e-6)


def test_matrix_mapping_tolerance_used():
    a = MatrixFieldMapping()
    b = MatrixFieldMapping()
    b.set_local_to_world(Matrix44.scaling(Vec3(1.0001, 1, 1)))
    assert a.is_identical(b, 1e-3)
    assert not a.is_identical(b, 1e-7)


def test_clone_is_independent():
    m = MatrixFieldMapping()
    copy = m.clone()
    copy.set_local_to_world(Matrix44.scaling(Vec3(2, 2, 2)))
    assert m.local_to_world == Matrix44.identity()
    assert copy.local_to_world == Matrix44.scaling(Vec3(2, 2, 2))