"""Cell interpolation, bounding boxes, ray/primitive intersection and cameras for volume rendering."""

__version__ = "0.1.0"

__all__ = [
    "bounds",
    "plane",
    "uelem_grid",
    "uelems",
    "primitives",
    "curves",
    "cameras",
]