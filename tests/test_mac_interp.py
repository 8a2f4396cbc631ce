import pytest

from voxelfield.mac_interp import CubicMACFieldInterp, LinearMACFieldInterp
from voxelfield.vecmath import Box3, Vec3


class FakeMACField:
    """A 4x4x4 MAC field whose components are given by functions."""

    def __init__(self, fu, fv, fw, size=4):
        self.data_window = Box3(Vec3(0, 0, 0), Vec3(size - 1, size - 1, size - 1))
        self._size = size
        self._fu, self._fv, self._fw = fu, fv, fw
        self.accessed = []

    def _check(self, axis, i, j, k):
        for a, c in enumerate((i, j, k)):
            hi = self._size if a == axis else self._size - 1
            if not 0 <= c <= hi:
                raise IndexError((axis, i, j, k))
        self.accessed.append((axis, i, j, k))

    def u(self, i, j, k):
        self._check(0, i, j, k)
        return self._fu(i, j, k)

    def v(self, i, j, k):
        self._check(1, i, j, k)
        return self._fv(i, j, k)

    def w(self, i, j, k):
        self._check(2, i, j, k)
        return self._fw(i, j, k)


def position_field():
    # Each component equals the face position along its own axis.
    return FakeMACField(lambda i, j, k: i, lambda i, j, k: j, lambda i, j, k: k)


INTERPS = [LinearMACFieldInterp(), CubicMACFieldInterp()]


@pytest.mark.parametrize("interp", INTERPS)
def test_constant_field(interp):
    field = FakeMACField(lambda *a: 2.0, lambda *a: -1.0, lambda *a: 0.5)
    result = interp.sample(field, Vec3(1.7, 2.2, 0.9))
    assert result == pytest.approx(Vec3(2.0, -1.0, 0.5))


@pytest.mark.parametrize("interp", INTERPS)
def test_linear_data_reproduced_in_interior(interp):
    field = position_field()
    p = Vec3(2.25, 1.75, 2.4)
    result = interp.sample(field, p)
    assert tuple(result) == pytest.approx(tuple(p))


@pytest.mark.parametrize("interp", INTERPS)
def test_sample_at_face_returns_stored_value(interp):
    field = FakeMACField(
        lambda i, j, k: i * 10 + j, lambda i, j, k: 0.0, lambda i, j, k: 0.0
    )
    # u(2, 1, 1) sits at (2, 1.5, 1.5).
    result = interp.sample(field, Vec3(2.0, 1.5, 1.5))
    assert result.x == pytest.approx(field.u(2, 1, 1))


@pytest.mark.parametrize("interp", INTERPS)
def test_far_outside_clamps_to_edge_faces(interp):
    field = position_field()
    result = interp.sample(field, Vec3(50.0, 50.0, 50.0))
    # The last face along each axis is one past the data window.
    assert tuple(result) == pytest.approx((4.0, 4.0, 4.0))


@pytest.mark.parametrize("interp", INTERPS)
def test_negative_point_clamps_to_first_faces(interp):
    field = position_field()
    result = interp.sample(field, Vec3(-5.0, -5.0, -5.0))
    assert tuple(result) == pytest.approx((0.0, 0.0, 0.0))


@pytest.mark.parametrize("interp", INTERPS)
def test_lookups_stay_inside_component_bounds(interp):
    field = position_field()
    for p in (Vec3(3.9, 0.1, 4.0), Vec3(0.0, 4.0, 2.0), Vec3(4.0, 4.0, 4.0)):
        interp.sample(field, p)
    assert field.accessed
    assert max(i for axis, i, _, _ in field.accessed if axis == 0) == 4
    assert max(j for axis, _, j, _ in field.accessed if axis == 0) <= 3


@pytest.mark.parametrize("interp", INTERPS)
def test_components_are_independent(interp):
    field = FakeMACField(
        lambda i, j, k: 1.0, lambda i, j, k: float(j), lambda i, j, k: 3.0
    )
    result = interp.sample(field, Vec3(1.5, 2.5, 1.5))
    assert result.x == pytest.approx(1.0)
    assert result.y == pytest.approx(2.5)
    assert result.z == pytest.approx(3.0)


def test_cubic_stays_within_neighbour_range_for_step():
    field = FakeMACField(
        lambda i, j, k: 0.0 if i < 2 else 1.0,
        lambda i, j, k: 0.0,
        lambda i, j, k: 0.0,
    )
    interp = CubicMACFieldInterp()
    values = [interp.sample(field, Vec3(x, 1.5, 1.5)).x for x in (1.1, 1.5, 1.9)]
    assert all(0.0 <= v <= 1.0 for v in values)
    assert values == sorted(values)


def test_linear_and_cubic_agree_on_linear_data():
    field = position_field()
    p = Vec3(2.1, 2.3, 1.6)
    lin = LinearMACFieldInterp().sample(field, p)
    cub = CubicMACFieldInterp().sample(field, p)
    assert tuple(lin) == pytest.approx(tuple(cub))