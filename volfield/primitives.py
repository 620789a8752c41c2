"""Rays, hit records and simple geometric primitives (cones, quads)."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import IntFlag
from typing import Sequence, Tuple

from volfield.bounds import FLT_MAX, Box

Vec3 = Tuple[float, float, float]


class IntersectionMask(IntFlag):
    """Primitive kinds a ray is allowed to hit."""

    ALL = 0xFFFFFFFF
    TRIANGLE = 0x1
    QUAD = 0x2
    SPHERE = 0x4
    CONE = 0x8
    CYLINDER = 0x10
    CURVE = 0x20
    BEZIER_CURVE = 0x40
    ISO_SURFACE = 0x80
    VOLUME = 0x100
    VOLUME_BOUNDS = 0x200


def _v(a: Sequence[float]) -> Vec3:
    return (float(a[0]), float(a[1]), float(a[2]))


def _add(a: Sequence[float], b: Sequence[float]) -> Vec3:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def _sub(a: Sequence[float], b: Sequence[float]) -> Vec3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def _scale(a: Sequence[float], s: float) -> Vec3:
    return (a[0] * s, a[1] * s, a[2] * s)


def _dot(a: Sequence[float], b: Sequence[float]) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def _cross(a: Sequence[float], b: Sequence[float]) -> Vec3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def _length(a: Sequence[float]) -> float:
    return math.sqrt(_dot(a, a))


def _normalize(a: Sequence[float]) -> Vec3:
    n = _length(a)
    if n == 0.0:
        return (math.nan, math.nan, math.nan)
    return _scale(a, 1.0 / n)


def _div(num: float, den: float) -> float:
    """IEEE-style division: zero denominators give inf or nan instead of raising."""
    if den != 0:
        return num / den
    if num == 0 or math.isnan(num):
        return math.nan
    return math.copysign(math.inf, num) * math.copysign(1.0, den)


@dataclass
class Ray:
    """Ray with parametric interval, primitive mask and time stamp."""

    ori: Vec3 = (0.0, 0.0, 0.0)
    dir: Vec3 = (0.0, 0.0, 1.0)
    tmin: float = 0.0
    tmax: float = FLT_MAX
    intersection_mask: IntersectionMask = IntersectionMask.ALL
    time: float = 0.0

    def __post_init__(self) -> None:
        self.ori = _v(self.ori)
        self.dir = _v(self.dir)

    def at(self, t: float) -> Vec3:
        """Point at parameter ``t`` along the ray."""
        return _add(self.ori, _scale(self.dir, t))


@dataclass
class HitRecord:
    """Outcome of a ray/primitive test."""

    hit: bool = False
    t: float = FLT_MAX
    u: float = 0.0
    v: float = 0.0
    prim_id: int = 0
    geom_id: int = 0
    inst_id: int = 0
    isect_pos: Vec3 = field(default=(0.0, 0.0, 0.0))


@dataclass
class Cone:
    """Capped cone between centres v1 and v2 with radii r1 and r2."""

    v1: Vec3
    v2: Vec3
    r1: float
    r2: float
    prim_id: int = 0
    geom_id: int = 0

    def __post_init__(self) -> None:
        self.v1 = _v(self.v1)
        self.v2 = _v(self.v2)

    def bounds(self) -> Box:
        """Conservative box around both end caps."""
        result = Box.empty()
        for centre, radius in ((self.v1, self.r1), (self.v2, self.r2)):
            result.extend(tuple(c - radius for c in centre))
            result.extend(tuple(c + radius for c in centre))
        return result


def intersect_cone(ray: Ray, cone: Cone) -> HitRecord:
    """Closest intersection of a ray with a capped cone.

    On a hit, ``u`` is 0 on the first cap, 1 on the second and the
    normalised height along the axis on the body.
    """
    result = HitRecord()
    ro, rd = ray.ori, ray.dir
    pa, pb = cone.v1, cone.v2
    ra, rb = cone.r1, cone.r2

    ba = _sub(pb, pa)
    oa = _sub(ro, pa)
    ob = _sub(ro, pb)
    m0 = _dot(ba, ba)
    m1 = _dot(oa, ba)
    m2 = _dot(rd, ba)
    m3 = _dot(rd, oa)
    m5 = _dot(oa, oa)
    m9 = _dot(ob, ba)

    def finish(t: float, u: float) -> HitRecord:
        result.t = t
        result.u = u
        result.hit = True
        result.isect_pos = ray.at(t)
        result.prim_id = cone.prim_id
        result.geom_id = cone.geom_id
        return result

    if m1 < 0.0:
        w = _sub(_scale(oa, m2), _scale(rd, m1))
        if _dot(w, w) < ra * ra * m2 * m2:
            return finish(_div(-m1, m2), 0.0)
    elif m9 > 0.0:
        t = _div(-m9, m2)
        w = _add(ob, _scale(rd, t))
        if _dot(w, w) < rb * rb:
            return finish(t, 1.0)

    rr = ra - rb
    hy = m0 + rr * rr
    k2 = m0 * m0 - m2 * m2 * hy
    k1 = m0 * m0 * m3 - m1 * m2 * hy + m0 * ra * (rr * m2 * 1.0)
    k0 = m0 * m0 * m5 - m1 * m1 * hy + m0 * ra * (rr * m1 * 2.0 - m0 * ra)
    h = k1 * k1 - k2 * k0
    if h < 0.0:
        return result
    t = _div(-k1 - math.sqrt(h), k2)
    y = m1 + t * m2

    if 0.0 < y < m0:
        finish(t, _div(y, m0))
        result.v = y
    return result


@dataclass
class Quad:
    """Parallelogram spanned by edges e1 and e2 from corner v1."""

    v1: Vec3
    e1: Vec3
    e2: Vec3

    def __post_init__(self) -> None:
        self.v1 = _v(self.v1)
        self.e1 = _v(self.e1)
        self.e2 = _v(self.e2)

    def _tessellate(self) -> Tuple[Tuple[Vec3, Vec3, Vec3], Tuple[Vec3, Vec3, Vec3]]:
        """Two triangles as (v1, e1, e2) with edges relative to v1."""
        diag = _add(self.e1, self.e2)
        return (self.v1, self.e1, diag), (self.v1, diag, self.e2)

    def bounds(self) -> Box:
        """Box around the four corners."""
        result = Box.empty()
        result.extend(self.v1)
        result.extend(_add(self.v1, self.e1))
        result.extend(_add(self.v1, self.e2))
        result.extend(_add(_add(self.v1, self.e1), self.e2))
        return result

    def normal(self) -> Vec3:
        """Unit normal following the winding of e1 then e2."""
        (_, t_e1, t_e2), _ = self._tessellate()
        return _normalize(_cross(t_e1, t_e2))

    def area(self) -> float:
        """Surface area of the parallelogram."""
        return sum(0.5 * _length(_cross(e1, e2)) for _, e1, e2 in self._tessellate())