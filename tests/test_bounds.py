import pytest

from volfield.bounds import FLT_MAX, Box, ValueRange, linear_index, project_on_grid


def test_empty_box_is_invalid():
    box = Box.empty()
    assert not box.is_valid()
    assert box.lower == (FLT_MAX, FLT_MAX, FLT_MAX)


def test_extend_makes_box_contain_point():
    box = Box.empty()
    box.extend((1.0, -2.0, 3.0))
    assert box.is_valid()
    assert box.contains((1.0, -2.0, 3.0))
    assert box.lower == box.upper == (1.0, -2.0, 3.0)


def test_extend_ignores_fourth_component():
    box = Box.empty()
    box.extend((1.0, 2.0, 3.0, 99.0))
    assert box.upper == (1.0, 2.0, 3.0)


def test_size_matches_extents():
    box = Box((0.0, 1.0, 2.0), (4.0, 3.0, 5.0))
    assert box.size() == pytest.approx((4.0, 2.0, 3.0))


def test_insert_box_encloses_both():
    a = Box((0.0, 0.0, 0.0), (1.0, 1.0, 1.0))
    b = Box((-1.0, 0.5, 0.5), (0.5, 2.0, 0.7))
    a.insert(b)
    assert a.lower == (-1.0, 0.0, 0.0)
    assert a.upper == (1.0, 2.0, 1.0)


def test_insert_point_delegates_to_extend():
    a = Box((0.0, 0.0, 0.0), (1.0, 1.0, 1.0))
    a.insert((2.0, 0.5, -1.0))
    assert a.contains((2.0, 0.5, -1.0))
    assert a.contains((0.0, 0.0, 0.0))


def test_contains_is_inclusive_and_rejects_outside():
    box = Box((0.0, 0.0, 0.0), (1.0, 1.0, 1.0))
    assert box.contains((1.0, 0.0, 1.0))
    assert not box.contains((1.0001, 0.5, 0.5))
    assert not box.contains((0.5, -0.1, 0.5))


def test_value_range_extend_and_contains():
    rng = ValueRange.empty()
    assert not rng.is_valid()
    for v in (3.0, -1.0, 2.0):
        rng.extend(v)
    assert rng.is_valid()
    assert rng.lower == -1.0
    assert rng.upper == 3.0
    assert rng.contains(0.0)
    assert not rng.contains(3.5)


def test_value_range_extend_with_range():
    rng = ValueRange(0.0, 1.0)
    rng.extend(ValueRange(-2.0, 0.5))
    assert (rng.lower, rng.upper) == (-2.0, 1.0)


def test_linear_index_value():
    assert linear_index((1, 2, 3), (4, 5, 6)) == 69


def test_linear_index_is_a_bijection():
    dims = (3, 4, 2)
    seen = {
        linear_index((x, y, z), dims)
        for z in range(dims[2])
        for y in range(dims[1])
        for x in range(dims[0])
    }
    assert seen == set(range(dims[0] * dims[1] * dims[2]))


def test_project_on_grid_center():
    bounds = Box((0.0, 0.0, 0.0), (1.0, 1.0, 1.0))
    assert project_on_grid((0.5, 0.5, 0.5), (4, 4, 4), bounds) == (2, 2, 2)


def test_project_on_grid_clamps():
    bounds = Box((0.0, 0.0, 0.0), (2.0, 2.0, 2.0))
    dims = (8, 5, 3)
    assert project_on_grid((-5.0, -1.0, -0.1), dims, bounds) == (0, 0, 0)
    upper = project_on_grid((2.0, 9.0, 100.0), dims, bounds)
    assert upper == tuple(n - 1 for n in dims)


def test_project_on_grid_within_range():
    bounds = Box((-1.0, 2.0, 0.0), (3.0, 4.0, 1.0))
    dims = (7, 3, 5)
    for t in (0.0, 0.13, 0.5, 0.77, 0.999):
        p = tuple(lo + t * (hi - lo) for lo, hi in zip(bounds.lower, bounds.upper))
        cell = project_on_grid(p, dims, bounds)
        assert all(0 <= c < n for c, n in zip(cell, dims))