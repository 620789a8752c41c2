import pytest

from volfield.plane import (
    Plane,
    intersect_hex,
    intersect_pair,
    intersect_pyr,
    intersect_tet,
    intersect_wedge,
    make_plane,
)


def linear(x, y, z):
    return x + 2.0 * y + 3.0 * z


def vert(x, y, z, value=None):
    return (x, y, z, linear(x, y, z) if value is None else value)


def test_plane_passes_through_its_points():
    a, b, c = (1.0, 0.0, 2.0), (3.0, 1.0, -1.0), (0.5, 4.0, 1.0)
    plane = make_plane(a, b, c)
    for pt in (a, b, c):
        assert plane.eval(pt) == pytest.approx(0.0, abs=1e-12)


def test_plane_eval_sign_and_fourth_component():
    plane = make_plane((0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0))
    assert plane.eval((0.3, 0.2, 2.0)) > 0.0
    assert plane.eval((0.3, 0.2, -2.0)) < 0.0
    assert plane.eval((0.3, 0.2, 2.0, 50.0)) == plane.eval((0.3, 0.2, 2.0))


def test_plane_direct_construction():
    plane = Plane((0.0, 0.0, 2.0), 4.0)
    assert plane.eval((5.0, -1.0, 2.0)) == pytest.approx(0.0)


UNIT_TET = (vert(0, 0, 0), vert(1, 0, 0), vert(0, 1, 0), vert(0, 0, 1))


@pytest.mark.parametrize("p", [(0.1, 0.1, 0.1), (0.25, 0.3, 0.2), (0.05, 0.6, 0.1)])
def test_tet_interpolates_linear_field(p):
    assert intersect_tet(p, *UNIT_TET) == pytest.approx(linear(*p))


@pytest.mark.parametrize("p", [(1.0, 1.0, 1.0), (-0.1, 0.2, 0.2), (0.2, 0.2, -0.3)])
def test_tet_outside_returns_none(p):
    assert intersect_tet(p, *UNIT_TET) is None


def test_pair_finds_second_tet():
    a, b, c = vert(0, 0, 0), vert(1, 0, 0), vert(0, 1, 0)
    d0, d1 = vert(0, 0, 1), vert(0, 0, -1)
    above = (0.2, 0.2, 0.2)
    below = (0.2, 0.2, -0.2)
    assert intersect_pair(above, a, b, c, d0, d1) == pytest.approx(linear(*above))
    assert intersect_pair(below, a, b, c, d0, d1) == pytest.approx(linear(*below))
    assert intersect_pair((2.0, 2.0, 0.0), a, b, c, d0, d1) is None


def pyramid(values):
    coords = [(0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0), (0.5, 0.5, 1)]
    return [(*c, v) for c, v in zip(coords, values)]


def test_pyramid_constant_field():
    verts = pyramid([4.5] * 5)
    assert intersect_pyr((0.5, 0.5, 0.2), *verts) == pytest.approx(4.5)


def test_pyramid_base_center_averages_base():
    values = [1.0, 2.0, 3.0, 4.0, 10.0]
    verts = pyramid(values)
    assert intersect_pyr((0.5, 0.5, 0.0), *verts) == pytest.approx(sum(values[:4]) / 4)


def test_pyramid_apex_returns_apex_value():
    values = [1.0, 2.0, 3.0, 4.0, 10.0]
    verts = pyramid(values)
    assert intersect_pyr((0.5, 0.5, 1.0), *verts) == pytest.approx(values[4])


def test_pyramid_outside():
    verts = pyramid([1.0] * 5)
    assert intersect_pyr((-0.5, 0.5, 0.2), *verts) is None


def wedge(values):
    coords = [(0, 0, 0), (1, 0, 0), (0.5, 0, 1), (0, 1, 0), (1, 1, 0), (0.5, 1, 1)]
    return [(*c, v) for c, v in zip(coords, values)]


def test_wedge_constant_field():
    verts = wedge([2.25] * 6)
    assert intersect_wedge((0.5, 0.5, 0.3), *verts) == pytest.approx(2.25)


def test_wedge_outside():
    verts = wedge([1.0] * 6)
    assert intersect_wedge((0.5, -0.5, 0.3), *verts) is None
    assert intersect_wedge((0.5, 0.5, -0.3), *verts) is None


CUBE = [
    (0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0),
    (0, 0, 1), (1, 0, 1), (1, 1, 1), (0, 1, 1),
]


def test_hex_interpolates_linear_field():
    verts = [vert(*c) for c in CUBE]
    for p in [(0.5, 0.5, 0.5), (0.1, 0.7, 0.3), (0.9, 0.2, 0.6)]:
        assert intersect_hex(p, *verts) == pytest.approx(linear(*p))


def test_hex_corners_return_vertex_values():
    verts = [(*c, float(i)) for i, c in enumerate(CUBE)]
    for i, c in enumerate(CUBE):
        assert intersect_hex(c, *verts) == pytest.approx(float(i))


def test_hex_outside():
    verts = [vert(*c) for c in CUBE]
    assert intersect_hex((1.5, 0.5, 0.5), *verts) is None
    assert intersect_hex((0.5, 0.5, -0.01), *verts) is None