"""Planes and point-in-cell tests with interpolation for unstructured cells."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

Vec3 = Tuple[float, float, float]

_EPS = 1e-10


def _xyz(v: Sequence[float]) -> Vec3:
    return (float(v[0]), float(v[1]), float(v[2]))


def _sub(a: Sequence[float], b: Sequence[float]) -> Vec3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def _dot(a: Sequence[float], b: Sequence[float]) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def _cross(a: Sequence[float], b: Sequence[float]) -> Vec3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def _ratio(num: float, den: float) -> float:
    """IEEE-style division: zero denominators yield inf or nan instead of raising."""
    if den != 0:
        return num / den
    if num == 0 or math.isnan(num):
        return math.nan
    return math.copysign(math.inf, num) * math.copysign(1.0, den)


@dataclass(frozen=True)
class Plane:
    """Plane with (unnormalised) normal and offset: points p with dot(p, normal) == d."""

    normal: Vec3
    d: float

    def eval(self, v: Sequence[float]) -> float:
        """Signed, unnormalised distance of a point (extra components ignored)."""
        return _dot(v, self.normal) - self.d


def make_plane(a: Sequence[float], b: Sequence[float], c: Sequence[float]) -> Plane:
    """Plane through three points, normal cross(b - a, c - a)."""
    a3, b3, c3 = _xyz(a), _xyz(b), _xyz(c)
    n = _cross(_sub(b3, a3), _sub(c3, a3))
    return Plane(n, _dot(a3, n))


def intersect_tet(p, a, b, c, d) -> Optional[float]:
    """Interpolated value at ``p`` inside tetrahedron (a, b, c, d), or None.

    Vertices are (x, y, z, value).
    """
    origin = (0.0, 0.0, 0.0)
    p3 = _xyz(p)
    va, vb, vc, vd = (_sub(_xyz(v), p3) for v in (a, b, c, d))

    pa = make_plane(vb, vd, vc)
    pb = make_plane(va, vc, vd)
    pc = make_plane(va, vd, vb)
    pd = make_plane(va, vb, vc)

    fa = _ratio(pa.eval(origin), pa.eval(va))
    if fa < 0.0 or fa > 1.0:
        return None
    fb = _ratio(pb.eval(origin), pb.eval(vb))
    if fb < 0.0:
        return None
    fc = _ratio(pc.eval(origin), pc.eval(vc))
    if fc < 0.0:
        return None
    fd = _ratio(pd.eval(origin), pd.eval(vd))
    if fd < 0.0:
        return None

    return fa * a[3] + fb * b[3] + fc * c[3] + fd * d[3]


def intersect_pair(p, a, b, c, d0, d1) -> Optional[float]:
    """Test the two tetrahedra sharing face (a, b, c), apexes d0 and d1."""
    value = intersect_tet(p, a, b, c, d0)
    if value is not None:
        return value
    return intersect_tet(p, a, c, b, d1)


def intersect_pyr(p, v0, v1, v2, v3, v4) -> Optional[float]:
    """Interpolated value at ``p`` inside a pyramid with base v0..v3 and apex v4, or None."""
    f0, f1, f2, f3, f4 = (v[3] for v in (v0, v1, v2, v3, v4))
    p0, p1, p2, p3, p4 = (_xyz(v) for v in (v0, v1, v2, v3, v4))

    base = make_plane(p0, p1, p2)
    w = _ratio(base.eval(p), base.eval(p4))

    u0 = make_plane(p0, p4, p1).eval(p)
    if u0 < 0.0:
        return None
    u1 = make_plane(p2, p4, p3).eval(p)
    if u1 < 0.0:
        return None
    u = u0 / (u0 + u1 + _EPS)

    v0_ = make_plane(p0, p3, p4).eval(p)
    if v0_ < 0.0:
        return None
    v1_ = make_plane(p1, p4, p2).eval(p)
    if v1_ < 0.0:
        return None
    v = v0_ / (v0_ + v1_ + _EPS)

    return w * f4 + (1.0 - w) * (
        (1.0 - u) * (1.0 - v) * f0
        + (1.0 - u) * v * f1
        + u * (1.0 - v) * f3
        + u * v * f2
    )


def intersect_wedge(p, v0, v1, v2, v3, v4, v5) -> Optional[float]:
    """Interpolated value at ``p`` inside a wedge (triangles v0,v1,v2 and v3,v4,v5), or None."""
    f0, f1, f2, f3, f4, f5 = (v[3] for v in (v0, v1, v2, v3, v4, v5))
    p0, p1, p2, p3, p4, p5 = (_xyz(v) for v in (v0, v1, v2, v3, v4, v5))

    base = make_plane(p0, p1, p3)
    w0 = base.eval(p)
    if w0 < 0.0:
        return None

    edge = _sub(p5, p2)
    top_normal = _cross(_cross(base.normal, edge), edge)
    top = Plane(top_normal, _dot(top_normal, p2))
    w1 = top.eval(p)
    if w1 < 0.0:
        return None
    w = w0 / (w0 + w1 + _EPS)

    u0 = make_plane(p0, p2, p1).eval(p)
    if u0 < 0.0:
        return None
    u1 = make_plane(p3, p4, p5).eval(p)
    if u1 < 0.0:
        return None
    u = u0 / (u0 + u1 + _EPS)

    v0_ = make_plane(p0, p3, p2).eval(p)
    if v0_ < 0.0:
        return None
    v1_ = make_plane(p1, p2, p4).eval(p)
    if v1_ < 0.0:
        return None
    v = v0_ / (v0_ + v1_ + _EPS)

    fbase = (
        (1.0 - u) * (1.0 - v) * f0
        + (1.0 - u) * v * f1
        + u * (1.0 - v) * f3
        + u * v * f4
    )
    ftop = (1.0 - u) * f2 + u * f5
    return (1.0 - w) * fbase + w * ftop


def intersect_hex(p, v0, v1, v2, v3, v4, v5, v6, v7) -> Optional[float]:
    """Interpolated value at ``p`` inside a hexahedron (bottom v0..v3, top v4..v7), or None."""
    f0, f1, f2, f3, f4, f5, f6, f7 = (v[3] for v in (v0, v1, v2, v3, v4, v5, v6, v7))

    planes = (
        make_plane(v0, v4, v1),  # front
        make_plane(v3, v2, v7),  # back
        make_plane(v0, v3, v4),  # left
        make_plane(v1, v5, v2),  # right
        make_plane(v4, v7, v5),  # top
        make_plane(v0, v1, v3),  # bottom
    )
    distances = []
    for plane in planes:
        t = plane.eval(p)
        if t < 0.0:
            return None
        distances.append(t)
    t_frt, t_bck, t_lft, t_rgt, t_top, t_btm = distances

    fx = _ratio(t_lft, t_lft + t_rgt)
    fy = _ratio(t_frt, t_frt + t_bck)
    fz = _ratio(t_btm, t_btm + t_top)

    return (
        (1.0 - fz) * (1.0 - fy) * (1.0 - fx) * f0
        + (1.0 - fz) * (1.0 - fy) * fx * f1
        + (1.0 - fz) * fy * (1.0 - fx) * f3
        + (1.0 - fz) * fy * fx * f2
        + fz * (1.0 - fy) * (1.0 - fx) * f4
        + fz * (1.0 - fy) * fx * f5
        + fz * fy * (1.0 - fx) * f7
        + fz * fy * fx * f6
    )