import math

import pytest

from volfield.bounds import Box
from volfield.uelem_grid import intersect_grid


def linear(x, y, z):
    return 1.0 + x - 2.0 * y + 0.5 * z


def grid_scalars(dims, bounds, func):
    nx, ny, nz = (d + 1 for d in dims)
    step = [s / d for s, d in zip(bounds.size(), dims)]
    values = []
    for z in range(nz):
        for y in range(ny):
            for x in range(nx):
                values.append(
                    func(
                        bounds.lower[0] + x * step[0],
                        bounds.lower[1] + y * step[1],
                        bounds.lower[2] + z * step[2],
                    )
                )
    return values


BOUNDS = Box((0.0, 0.0, 0.0), (2.0, 2.0, 2.0))
DIMS = (2, 2, 2)


@pytest.mark.parametrize("p", [(0.5, 0.5, 0.5), (1.3, 0.2, 1.9), (0.0, 0.0, 0.0), (1.7, 1.1, 0.4)])
def test_linear_field_reproduced(p):
    scalars = grid_scalars(DIMS, BOUNDS, linear)
    assert intersect_grid(DIMS, BOUNDS, 0, scalars, p) == pytest.approx(linear(*p))


def test_upper_corner_is_sampled():
    scalars = grid_scalars(DIMS, BOUNDS, linear)
    assert intersect_grid(DIMS, BOUNDS, 0, scalars, BOUNDS.upper) == pytest.approx(
        linear(*BOUNDS.upper)
    )


def test_outside_bounds_returns_none():
    scalars = grid_scalars(DIMS, BOUNDS, linear)
    assert intersect_grid(DIMS, BOUNDS, 0, scalars, (2.1, 1.0, 1.0)) is None


def test_offset_selects_grid():
    junk = [100.0] * 5
    scalars = junk + grid_scalars(DIMS, BOUNDS, linear)
    p = (0.75, 1.25, 0.5)
    assert intersect_grid(DIMS, BOUNDS, len(junk), scalars, p) == pytest.approx(linear(*p))


def test_nan_scalar_marks_empty():
    scalars = grid_scalars(DIMS, BOUNDS, linear)
    scalars[0] = math.nan
    assert intersect_grid(DIMS, BOUNDS, 0, scalars, (0.2, 0.2, 0.2)) is None
    # cells not touching the NaN are still sampled
    p = (1.5, 1.5, 1.5)
    assert intersect_grid(DIMS, BOUNDS, 0, scalars, p) == pytest.approx(linear(*p))


def test_constant_grid_with_shifted_bounds():
    bounds = Box((-1.0, 3.0, 10.0), (1.0, 4.0, 12.0))
    dims = (3, 1, 4)
    scalars = grid_scalars(dims, bounds, lambda x, y, z: 7.5)
    assert intersect_grid(dims, bounds, 0, scalars, (0.1, 3.9, 11.0)) == pytest.approx(7.5)