"""Orthographic and omnidirectional cameras, and spot light intensity."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence, Tuple

from volfield.bounds import FLT_MAX
from volfield.primitives import Ray

Vec3 = Tuple[float, float, float]
Vec2 = Tuple[float, float]


def _v(a: Sequence[float]) -> Vec3:
    return (float(a[0]), float(a[1]), float(a[2]))


def _add(a, b) -> Vec3:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def _sub(a, b) -> Vec3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def _scale(a, s: float) -> Vec3:
    return (a[0] * s, a[1] * s, a[2] * s)


def _dot(a, b) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def _cross(a, b) -> Vec3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def _normalize(a) -> Vec3:
    n = math.sqrt(_dot(a, a))
    if n == 0.0:
        raise ValueError("cannot normalise a zero vector")
    return _scale(a, 1.0 / n)


def _image_plane(pos, dir, up, width: float, height: float) -> Tuple[Vec3, Vec3, Vec3]:
    u = _scale(_normalize(_cross(dir, up)), width)
    v = _scale(_normalize(_cross(u, dir)), height)
    w = _sub(_sub(pos, _scale(u, 0.5)), _scale(v, 0.5))
    return u, v, w


class OrthoCamera:
    """Orthographic camera; the image plane is ``height * aspect`` by ``height``."""

    def __init__(
        self,
        pos: Sequence[float],
        dir: Sequence[float],
        up: Sequence[float],
        aspect: float = 1.0,
        height: float = 1.0,
        image_region: Tuple[Vec2, Vec2] = ((0.0, 0.0), (1.0, 1.0)),
    ) -> None:
        self.pos = _v(pos)
        self.dir = _v(dir)
        self.up = _v(up)
        (x0, y0), (x1, y1) = image_region
        self.image_region = ((float(x0), float(y0)), (float(x1), float(y1)))
        self.u, self.v, self.w = _image_plane(
            self.pos, self.dir, self.up, height * aspect, height
        )

    def primary_ray(self, x: float, y: float, width: float, height: float) -> Ray:
        """Ray through the centre of pixel (x, y) of a width by height image."""
        sx = (x + 0.5) / width
        sy = (y + 0.5) / height
        (x0, y0), (x1, y1) = self.image_region
        sx = (1.0 - sx) * x0 + sx * x1
        sy = (1.0 - sy) * y0 + sy * y1
        ori = _add(_add(_scale(self.u, sx), _scale(self.v, sy)), self.w)
        return Ray(ori=ori, dir=self.dir, tmin=0.0, tmax=FLT_MAX)


class OmniCamera:
    """Camera covering the full sphere of directions (equirectangular)."""

    def __init__(self, pos: Sequence[float], dir: Sequence[float], up: Sequence[float]) -> None:
        self.pos = _v(pos)
        self.dir = _v(dir)
        self.up = _v(up)
        self.u, self.v, self.w = _image_plane(self.pos, self.dir, self.up, 1.0, 1.0)

    def primary_ray(self, x: float, y: float, width: float, height: float) -> Ray:
        """Ray for pixel (x, y): x maps to azimuth, y to polar angle."""
        sx = (x + 0.5) / width
        sy = (y + 0.5) / height
        theta = math.pi * sy
        phi = 2.0 * math.pi * sx
        local = (
            math.sin(theta) * math.cos(phi),
            math.cos(theta),
            math.sin(theta) * math.sin(phi),
        )
        ori = _add(_add(_scale(self.u, sx), _scale(self.v, sy)), self.w)
        direction = (local[0], -local[1], local[2])
        return Ray(ori=ori, dir=direction, tmin=0.0, tmax=FLT_MAX)


@dataclass
class SpotLight:
    """Spot light with a smooth falloff between inner and outer cone angles."""

    position: Vec3
    direction: Vec3
    cos_outer_angle: float
    cos_inner_angle: float
    color: Vec3 = (1.0, 1.0, 1.0)
    light_intensity: float = 1.0

    def __post_init__(self) -> None:
        self.position = _v(self.position)
        self.direction = _v(self.direction)
        self.color = _v(self.color)

    def intensity(self, light_dir: Sequence[float]) -> Vec3:
        """Radiant intensity towards a point, given the direction from it to the light."""
        spot = _dot(_normalize(self.direction), _normalize(_scale(light_dir, -1.0)))
        if spot < self.cos_outer_angle:
            return (0.0, 0.0, 0.0)
        if spot > self.cos_inner_angle:
            return _scale(self.color, self.light_intensity)
        spot = (spot - self.cos_outer_angle) / (self.cos_inner_angle - self.cos_outer_angle)
        spot = spot * spot * (3.0 - 2.0 * spot)
        return _scale(self.color, self.light_intensity * spot)