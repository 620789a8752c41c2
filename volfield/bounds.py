"""Axis-aligned boxes, scalar value ranges and uniform grid indexing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple, Union

FLT_MAX = 3.4028234663852886e38

Vec3 = Tuple[float, float, float]


def _vec3(values: Sequence[float]) -> Vec3:
    x, y, z = (float(v) for v in tuple(values)[:3])
    return (x, y, z)


@dataclass
class Box:
    """Three-dimensional axis-aligned bounding box."""

    lower: Vec3 = (FLT_MAX, FLT_MAX, FLT_MAX)
    upper: Vec3 = (-FLT_MAX, -FLT_MAX, -FLT_MAX)

    def __post_init__(self) -> None:
        self.lower = _vec3(self.lower)
        self.upper = _vec3(self.upper)

    @classmethod
    def empty(cls) -> "Box":
        """Return an inverted box that any insertion will overwrite."""
        return cls()

    def insert(self, other: Union["Box", Sequence[float]]) -> None:
        """Grow the box to enclose another box or a point."""
        if isinstance(other, Box):
            self.lower = tuple(min(a, b) for a, b in zip(self.lower, other.lower))
            self.upper = tuple(max(a, b) for a, b in zip(self.upper, other.upper))
        else:
            self.extend(other)

    def extend(self, point: Sequence[float]) -> None:
        """Grow the box to enclose a point (extra components are ignored)."""
        p = _vec3(point)
        self.lower = tuple(min(a, b) for a, b in zip(self.lower, p))
        self.upper = tuple(max(a, b) for a, b in zip(self.upper, p))

    def contains(self, point: Sequence[float]) -> bool:
        """Whether the point lies inside the box, boundaries included."""
        return all(lo <= v <= hi for v, lo, hi in zip(point, self.lower, self.upper))

    def size(self) -> Vec3:
        """Extent of the box along each axis."""
        return tuple(hi - lo for lo, hi in zip(self.lower, self.upper))

    def is_valid(self) -> bool:
        """Whether the box encloses at least one point."""
        return all(lo <= hi for lo, hi in zip(self.lower, self.upper))


@dataclass
class ValueRange:
    """Closed interval of scalar values."""

    lower: float = FLT_MAX
    upper: float = -FLT_MAX

    @classmethod
    def empty(cls) -> "ValueRange":
        """Return an inverted range that any extension will overwrite."""
        return cls()

    def extend(self, value: Union[float, "ValueRange"]) -> None:
        """Grow the range to include a value or another range."""
        if isinstance(value, ValueRange):
            self.lower = min(self.lower, value.lower)
            self.upper = max(self.upper, value.upper)
        else:
            self.lower = min(self.lower, float(value))
            self.upper = max(self.upper, float(value))

    def contains(self, value: float) -> bool:
        """Whether the value lies in the range, boundaries included."""
        return self.lower <= value <= self.upper

    def is_valid(self) -> bool:
        """Whether the range holds at least one value."""
        return self.lower <= self.upper


def linear_index(index: Sequence[int], dims: Sequence[int]) -> int:
    """Row-major (x fastest) linear index of a 3D cell index."""
    x, y, z = index
    nx, ny, _ = dims
    return z * nx * ny + y * nx + x


def project_on_grid(point: Sequence[float], dims: Sequence[int], world_bounds: Box) -> Tuple[int, int, int]:
    """Cell of a uniform grid spanning ``world_bounds`` that holds ``point``, clamped to the grid."""
    cells = []
    for v, lo, hi, n in zip(point, world_bounds.lower, world_bounds.upper, dims):
        extent = hi - lo
        frac = (v - lo) / extent if extent != 0 else 0.0
        cells.append(min(max(int(frac * n), 0), n - 1))
    x, y, z = cells
    return (x, y, z)