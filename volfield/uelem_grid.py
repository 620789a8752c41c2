"""Trilinear sampling of voxel grids embedded in unstructured meshes."""

from __future__ import annotations

import math
from typing import Optional, Sequence

from volfield.bounds import Box


def _lerp(a: float, b: float, t: float) -> float:
    return (1.0 - t) * a + t * b


def intersect_grid(
    dims: Sequence[int],
    bounds: Box,
    scalars_offset: int,
    scalars: Sequence[float],
    p: Sequence[float],
) -> Optional[float]:
    """Trilinearly interpolated value of a cell grid at ``p``, or None.

    ``dims`` counts cells; the grid holds (dims + 1) scalars per axis, stored
    x-fastest in ``scalars`` starting at ``scalars_offset``. NaN scalars mark
    empty cells, and sampling next to one yields None.
    """
    if not bounds.contains(p):
        return None

    nx, ny, nz = (d + 1 for d in dims)
    size = bounds.size()
    cell_size = tuple(s / d for s, d in zip(size, dims))
    obj_pos = tuple((v - lo) / c for v, lo, c in zip(p, bounds.lower, cell_size))
    imin = tuple(int(v) for v in obj_pos)
    imax = tuple(min(i + 1, n - 1) for i, n in zip(imin, (nx, ny, nz)))

    def at(x: int, y: int, z: int) -> float:
        return float(scalars[scalars_offset + z * ny * nx + y * nx + x])

    x0, y0, z0 = imin
    x1, y1, z1 = imax
    f1 = at(x0, y0, z0)
    f2 = at(x1, y0, z0)
    f3 = at(x0, y1, z0)
    f4 = at(x1, y1, z0)
    f5 = at(x0, y0, z1)
    f6 = at(x1, y0, z1)
    f7 = at(x0, y1, z1)
    f8 = at(x1, y1, z1)

    if any(math.isnan(f) for f in (f1, f2, f3, f4, f5, f6, f7, f8)):
        return None

    fx, fy, fz = (v - i for v, i in zip(obj_pos, imin))

    f12 = _lerp(f1, f2, fx)
    f56 = _lerp(f5, f6, fx)
    f34 = _lerp(f3, f4, fx)
    f78 = _lerp(f7, f8, fx)

    f1234 = _lerp(f12, f34, fy)
    f5678 = _lerp(f56, f78, fy)

    return _lerp(f1234, f5678, fz)