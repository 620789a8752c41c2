"""Cubic Bezier curve primitives and the phantom ray/curve intersector."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import NamedTuple, Sequence, Tuple

from volfield.bounds import Box
from volfield.primitives import HitRecord, Ray

Vec3 = Tuple[float, float, float]

_MAX_ITERATIONS = 40
_CONVERGENCE = 5e-5


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


def _div(num: float, den: float) -> float:
    """IEEE-style division: zero denominators give inf or nan instead of raising."""
    if den != 0:
        return num / den
    if num == 0 or math.isnan(num):
        return math.nan
    return math.copysign(math.inf, num) * math.copysign(1.0, den)


def _normalize(a: Sequence[float]) -> Vec3:
    n = _length(a)
    return (_div(a[0], n), _div(a[1], n), _div(a[2], n))


def _clamp01(x: float) -> float:
    if x < 0.0:
        return 0.0
    if x > 1.0:
        return 1.0
    return x


@dataclass
class BezierCurve:
    """Cubic Bezier curve with control points w0..w3 and constant radius r."""

    w0: Vec3
    w1: Vec3
    w2: Vec3
    w3: Vec3
    r: float
    prim_id: int = 0
    geom_id: int = 0

    def __post_init__(self) -> None:
        self.w0 = _v(self.w0)
        self.w1 = _v(self.w1)
        self.w2 = _v(self.w2)
        self.w3 = _v(self.w3)
        self.r = float(self.r)

    def f(self, t: float) -> Vec3:
        """Point on the curve at parameter t."""
        ti = 1.0 - t
        c0 = ti * ti * ti
        c1 = 3.0 * ti * ti * t
        c2 = 3.0 * ti * t * t
        c3 = t * t * t
        return tuple(
            c0 * a + c1 * b + c2 * c + c3 * d
            for a, b, c, d in zip(self.w0, self.w1, self.w2, self.w3)
        )

    def dfdt(self, t: float) -> Vec3:
        """Derivative of the curve with respect to t."""
        ti = 1.0 - t
        c0 = -3.0 * ti * ti
        c1 = 3.0 * (3.0 * t * t - 4.0 * t + 1.0)
        c2 = 3.0 * (2.0 - 3.0 * t) * t
        c3 = 3.0 * t * t
        return tuple(
            c0 * a + c1 * b + c2 * c + c3 * d
            for a, b, c, d in zip(self.w0, self.w1, self.w2, self.w3)
        )

    def bounds(self) -> Box:
        """Box around the curve's extremes, grown by the radius."""
        p0, p1, p2, p3 = self.w0, self.w1, self.w2, self.w3
        mi = [min(a, b) for a, b in zip(p0, p3)]
        ma = [max(a, b) for a, b in zip(p0, p3)]

        c = [-a + b for a, b in zip(p0, p1)]
        b = [a - 2.0 * q + s for a, q, s in zip(p0, p1, p2)]
        a = [-w + 3.0 * x - 3.0 * y + z for w, x, y, z in zip(p0, p1, p2, p3)]

        # A vanishing cubic term: the remaining control points are inserted lazily.
        for d in range(3):
            if a[d] == 0.0:
                mi[d] = min(mi[d], p1[d])
                mi[d] = min(mi[d], p2[d])
                ma[d] = max(mi[d], p1[d])
                ma[d] = max(mi[d], p2[d])

        h = [bb * bb - aa * cc for aa, bb, cc in zip(a, b, c)]

        if any(x > 0.0 for x in h):
            g = [math.sqrt(abs(x)) for x in h]
            t1 = [_clamp01(_div(-bb - gg, aa)) for aa, bb, gg in zip(a, b, g)]
            t2 = [_clamp01(_div(-bb + gg, aa)) for aa, bb, gg in zip(a, b, g)]

            def point(ts: Sequence[float]) -> list:
                out = []
                for d, t in enumerate(ts):
                    s = 1.0 - t
                    out.append(
                        s * s * s * p0[d]
                        + 3.0 * s * s * t * p1[d]
                        + 3.0 * s * t * t * p2[d]
                        + t * t * t * p3[d]
                    )
                return out

            q1 = point(t1)
            q2 = point(t2)
            for d in range(3):
                if h[d] > 0.0:
                    mi[d] = min(mi[d], min(q1[d], q2[d]))
                    ma[d] = max(ma[d], max(q1[d], q2[d]))

        r = self.r
        return Box(tuple(x - r for x in mi), tuple(x + r for x in ma))


def intersect_cylinder(ray: Ray, p0: Sequence[float], p1: Sequence[float], radius: float) -> bool:
    """Whether a ray hits the capped cylinder from p0 to p1 with the given radius."""
    ba = _sub(p1, p0)
    oc = _sub(ray.ori, p0)

    baba = _dot(ba, ba)
    bard = _dot(ba, ray.dir)
    baoc = _dot(ba, oc)

    k2 = baba - bard * bard
    k1 = baba * _dot(oc, ray.dir) - baoc * bard
    k0 = baba * _dot(oc, oc) - baoc * baoc - radius * radius * baba

    h = k1 * k1 - k2 * k0
    if h < 0.0:
        return False

    h = math.sqrt(h)
    t = _div(-k1 - h, k2)

    y = baoc + t * bard
    if 0.0 < y < baba:
        return True

    t = _div((0.0 if y < 0.0 else baba) - baoc, bard)
    return abs(k1 + k2 * t) < h


class _ConeStep(NamedTuple):
    hit: bool
    s: float
    dt: float


def _ray_cone(c0: Vec3, cd: Vec3, r: float, dr: float) -> _ConeStep:
    """Ray/cone test in ray-centric coordinates (the ray runs along +z from the origin)."""
    r2 = r * r
    drr = r * dr

    ddd = cd[0] * cd[0] + cd[1] * cd[1]
    dp = c0[0] * c0[0] + c0[1] * c0[1]
    cdd = c0[0] * cd[0] + c0[1] * cd[1]
    cxd = c0[0] * cd[1] - c0[1] * cd[0]

    c = ddd
    b = cd[2] * (drr - cdd)
    cdz2 = cd[2] * cd[2]
    ddd += cdz2
    a = 2.0 * drr * cdd + cxd * cxd - ddd * r2 + dp * cdz2

    discr = b * b - a * c
    s = _div(b - (math.sqrt(discr) if discr > 0.0 else 0.0), c)
    dt = _div(s * cd[2] - cdd, ddd)
    return _ConeStep(discr > 0.0, s, dt)


def _ray_frame(ray: Ray) -> Tuple[Vec3, Vec3, Vec3]:
    """Orthonormal basis whose third axis is the ray direction."""
    e3 = _normalize(ray.dir)
    if abs(e3[0]) > abs(e3[2]):
        e1 = _normalize((-e3[1], e3[0], 0.0))
    else:
        e1 = _normalize((0.0, -e3[2], e3[1]))
    e2 = _cross(e3, e1)
    return e1, e2, e3


def intersect_bezier(ray: Ray, curve: BezierCurve) -> HitRecord:
    """Phantom ray/curve intersection; on a hit ``u`` holds the curve parameter."""
    result = HitRecord()

    chord = _length(_sub(curve.w3, curve.w0))

    def dist_to_axis(pt: Vec3) -> float:
        return _div(_length(_cross(_sub(pt, curve.w0), _sub(pt, curve.w3))), chord)

    rmax = max(dist_to_axis(curve.f(0.33333)), dist_to_axis(curve.f(0.66667)))
    rmax += curve.r

    axis = _normalize(_sub(curve.w3, curve.w0))
    p0 = _sub(curve.w0, _scale(axis, curve.r))
    p1 = _add(curve.w3, _scale(axis, curve.r))

    if not intersect_cylinder(ray, p0, p1, rmax):
        return result

    e1, e2, e3 = _ray_frame(ray)

    def to_rcc(p: Vec3) -> Vec3:
        d = _sub(p, ray.ori)
        return (_dot(e1, d), _dot(e2, d), _dot(e3, d))

    xcurve = BezierCurve(
        to_rcc(curve.w0), to_rcc(curve.w1), to_rcc(curve.w2), to_rcc(curve.w3), curve.r
    )

    tstart = 0.0 if _dot(_sub(xcurve.w3, xcurve.w0), ray.dir) > 0.0 else 1.0

    for _ in range(2):
        t = tstart
        told = 0.0
        dt1 = 0.0
        dt2 = 0.0

        for i in range(_MAX_ITERATIONS):
            c0 = xcurve.f(t)
            cd = xcurve.dfdt(t)
            step = _ray_cone(c0, cd, curve.r, 0.0)

            if step.hit and abs(step.dt) < _CONVERGENCE:
                result.t = step.s + c0[2]
                result.u = t
                result.hit = True
                result.isect_pos = ray.at(result.t)
                break

            dt = max(min(step.dt, 0.5), -0.5)
            dt1 = dt2
            dt2 = dt

            if dt1 * dt2 < 0.0:
                if (i & 3) == 0:
                    tnext = 0.5 * (told + t)
                else:
                    tnext = _div(dt2 * told - dt1 * t, dt2 - dt1)
                told = t
                t = tnext
            else:
                told = t
                t += dt

            if t < 0.0 or t > 1.0:
                break

        if result.hit:
            break
        tstart = 1.0 - tstart

    return result