"""Unstructured volume elements: shape functions, point location and sampling."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Tuple

from volfield.bounds import Box
from volfield.plane import intersect_tet
from volfield.uelem_grid import intersect_grid

Vec3 = Tuple[float, float, float]

_DIVERGED = 1e6
_MAX_ITERATION = 10
_CONVERGED = 1e-4
_OUTSIDE_CELL_TOLERANCE = 1e-6
_DETERMINANT_TOLERANCE = 1e-6


def _det(c0: Sequence[float], c1: Sequence[float], c2: Sequence[float]) -> float:
    """Determinant of the 3x3 matrix with the given columns."""
    cx = (
        c1[1] * c2[2] - c1[2] * c2[1],
        c1[2] * c2[0] - c1[0] * c2[2],
        c1[0] * c2[1] - c1[1] * c2[0],
    )
    return c0[0] * cx[0] + c0[1] * cx[1] + c0[2] * cx[2]


def pyramid_interpolation_functions(pcoords: Sequence[float]) -> List[float]:
    """The five pyramid shape functions at parametric coordinates (r, s, t)."""
    r, s, t = pcoords
    rm, sm, tm = 1.0 - r, 1.0 - s, 1.0 - t
    return [rm * sm * tm, r * sm * tm, r * s * tm, rm * s * tm, t]


def pyramid_interpolation_derivs(pcoords: Sequence[float]) -> List[float]:
    """Derivatives of the pyramid shape functions: 5 for r, then s, then t."""
    r, s, t = pcoords
    return [
        -(s - 1.0) * (t - 1.0),
        (s - 1.0) * (t - 1.0),
        s - s * t,
        s * (t - 1.0),
        0.0,
        -(r - 1.0) * (t - 1.0),
        r * (t - 1.0),
        r - r * t,
        (r - 1.0) * (t - 1.0),
        0.0,
        -(r - 1.0) * (s - 1.0),
        r * (s - 1.0),
        -r * s,
        (r - 1.0) * s,
        1.0,
    ]


def wedge_interpolation_functions(pcoords: Sequence[float]) -> List[float]:
    """The six wedge shape functions at parametric coordinates (r, s, t)."""
    r, s, t = pcoords
    return [
        (1.0 - r - s) * (1.0 - t),
        r * (1.0 - t),
        s * (1.0 - t),
        (1.0 - r - s) * t,
        r * t,
        s * t,
    ]


def wedge_interpolation_derivs(pcoords: Sequence[float]) -> List[float]:
    """Derivatives of the wedge shape functions: 6 for r, then s, then t."""
    r, s, t = pcoords
    return [
        -1.0 + t,
        1.0 - t,
        0.0,
        -t,
        t,
        0.0,
        -1.0 + t,
        0.0,
        1.0 - t,
        -t,
        0.0,
        t,
        -1.0 + r + s,
        -r,
        -s,
        1.0 - r - s,
        r,
        s,
    ]


def hex_interpolation_functions(pcoords: Sequence[float]) -> List[float]:
    """The eight hexahedron shape functions at parametric coordinates (r, s, t)."""
    r, s, t = pcoords
    rm, sm, tm = 1.0 - r, 1.0 - s, 1.0 - t
    return [
        rm * sm * tm,
        r * sm * tm,
        r * s * tm,
        rm * s * tm,
        rm * sm * t,
        r * sm * t,
        r * s * t,
        rm * s * t,
    ]


def hex_interpolation_derivs(pcoords: Sequence[float]) -> List[float]:
    """Derivatives of the hexahedron shape functions: 8 for r, then s, then t."""
    r, s, t = pcoords
    rm, sm, tm = 1.0 - r, 1.0 - s, 1.0 - t
    return [
        -sm * tm,
        sm * tm,
        s * tm,
        -s * tm,
        -sm * t,
        sm * t,
        s * t,
        -s * t,
        -rm * tm,
        -r * tm,
        r * tm,
        rm * tm,
        -rm * t,
        -r * t,
        r * t,
        rm * t,
        -rm * sm,
        -r * sm,
        -r * s,
        -rm * s,
        rm * sm,
        r * sm,
        r * s,
        rm * s,
    ]


def _locate_and_interpolate(
    p: Sequence[float],
    vertices: Sequence[Sequence[float]],
    functions: Callable[[Sequence[float]], List[float]],
    derivs: Callable[[Sequence[float]], List[float]],
    extra_inside: Callable[[List[float], float], bool] = lambda pc, upper: True,
) -> Optional[float]:
    """Newton-solve for the parametric coordinates of ``p`` and interpolate vertex values."""
    n = len(vertices)
    pcoords = [0.5, 0.5, 0.5]
    weights: List[float] = []
    converged = False

    for _ in range(_MAX_ITERATION):
        weights = functions(pcoords)
        d = derivs(pcoords)

        fcol = [0.0, 0.0, 0.0]
        rcol = [0.0, 0.0, 0.0]
        scol = [0.0, 0.0, 0.0]
        tcol = [0.0, 0.0, 0.0]
        for i, v in enumerate(vertices):
            for k in range(3):
                fcol[k] += v[k] * weights[i]
                rcol[k] += v[k] * d[i]
                scol[k] += v[k] * d[i + n]
                tcol[k] += v[k] * d[i + 2 * n]
        fcol = [fcol[k] - p[k] for k in range(3)]

        det = _det(rcol, scol, tcol)
        if abs(det) < _DETERMINANT_TOLERANCE:
            return None

        d0 = _det(fcol, scol, tcol) / det
        d1 = _det(rcol, fcol, tcol) / det
        d2 = _det(rcol, scol, fcol) / det

        pcoords = [pcoords[0] - d0, pcoords[1] - d1, pcoords[2] - d2]

        if abs(d0) < _CONVERGED and abs(d1) < _CONVERGED and abs(d2) < _CONVERGED:
            converged = True
            break
        if any(abs(c) > _DIVERGED for c in pcoords):
            return None

    if not converged:
        return None

    lower = 0.0 - _OUTSIDE_CELL_TOLERANCE
    upper = 1.0 + _OUTSIDE_CELL_TOLERANCE
    if all(lower <= c <= upper for c in pcoords) and extra_inside(pcoords, upper):
        return sum(w * v[3] for w, v in zip(weights, vertices))
    return None


def intersect_pyr_ext(p, v0, v1, v2, v3, v4) -> Optional[float]:
    """Value at ``p`` inside a pyramid (base v0..v3, apex v4) by Newton inversion, or None."""
    return _locate_and_interpolate(
        p,
        (v0, v1, v2, v3, v4),
        pyramid_interpolation_functions,
        pyramid_interpolation_derivs,
    )


def intersect_wedge_ext(p, v0, v1, v2, v3, v4, v5) -> Optional[float]:
    """Value at ``p`` inside a wedge (triangles v0..v2 and v3..v5) by Newton inversion, or None."""
    return _locate_and_interpolate(
        p,
        (v0, v1, v2, v3, v4, v5),
        wedge_interpolation_functions,
        wedge_interpolation_derivs,
        lambda pc, upper: pc[0] + pc[1] <= upper,
    )


def intersect_hex_ext(p, v0, v1, v2, v3, v4, v5, v6, v7) -> Optional[float]:
    """Value at ``p`` inside a hexahedron (bottom v0..v3, top v4..v7) by Newton inversion, or None."""
    return _locate_and_interpolate(
        p,
        (v0, v1, v2, v3, v4, v5, v6, v7),
        hex_interpolation_functions,
        hex_interpolation_derivs,
    )


@dataclass
class UElem:
    """One cell of an unstructured field: either an index range or an embedded voxel grid.

    An element with ``begin == end`` denotes voxel grid number ``elem_id``.
    Vertices are (x, y, z, value).
    """

    begin: int = 0
    end: int = 0
    elem_id: int = 0
    index_buffer: Sequence[int] = field(default_factory=tuple)
    vertex_buffer: Sequence[Sequence[float]] = field(default_factory=tuple)
    grid_dims: Sequence[Sequence[int]] = field(default_factory=tuple)
    grid_domains: Sequence[Box] = field(default_factory=tuple)
    grid_scalars_offsets: Sequence[int] = field(default_factory=tuple)
    grid_scalars: Sequence[float] = field(default_factory=tuple)

    def vertices(self) -> List[Sequence[float]]:
        """The element's vertices in index order."""
        return [self.vertex_buffer[self.index_buffer[i]] for i in range(self.begin, self.end)]

    def bounds(self) -> Box:
        """Bounding box of the element's vertices, or of its grid domain."""
        if self.end - self.begin > 0:
            result = Box.empty()
            for v in self.vertices():
                result.extend(v)
            return result
        domain = self.grid_domains[self.elem_id]
        return Box(domain.lower, domain.upper)


def intersect_uelem(elem: UElem, point: Sequence[float]) -> Optional[float]:
    """Sample an unstructured element at ``point``; None if the point lies outside it."""
    num_verts = elem.end - elem.begin
    if num_verts > 0:
        v = elem.vertices()
        if num_verts == 4:
            return intersect_tet(point, *v)
        if num_verts == 5:
            return intersect_pyr_ext(point, *v)
        if num_verts == 6:
            return intersect_wedge_ext(point, *v)
        if num_verts == 8:
            return intersect_hex_ext(point, *v)
        return None

    return intersect_grid(
        elem.grid_dims[elem.elem_id],
        elem.grid_domains[elem.elem_id],
        elem.grid_scalars_offsets[elem.elem_id],
        elem.grid_scalars,
        point,
    )