# volfield

Pure-Python building blocks for volume rendering:

- `volfield.bounds`: axis-aligned boxes (`Box`), scalar intervals
  (`ValueRange`), `linear_index` and `project_on_grid` for uniform grids
- `volfield.plane`: `Plane`, `make_plane` and point-in-cell tests with
  interpolation for tetrahedra, tetrahedron pairs, pyramids, wedges and
  hexahedra (`intersect_tet`, `intersect_pair`, `intersect_pyr`,
  `intersect_wedge`, `intersect_hex`)
- `volfield.uelems`: shape functions and Newton-based point location for
  pyramids, wedges and hexahedra (`intersect_pyr_ext`,
  `intersect_wedge_ext`, `intersect_hex_ext`), and the `UElem` cell with
  `intersect_uelem`
- `volfield.uelem_grid`: trilinear sampling of voxel grids embedded in a
  mesh (`intersect_grid`), where NaN scalars mark empty cells
- `volfield.primitives`: `Ray`, `HitRecord`, `IntersectionMask`, capped
  cones (`Cone`, `intersect_cone`) and parallelogram quads (`Quad`)
- `volfield.curves`: cubic Bézier curves (`BezierCurve`), a ray/cylinder
  test (`intersect_cylinder`) and the phantom ray/curve intersector
  (`intersect_bezier`)
- `volfield.cameras`: `OrthoCamera`, `OmniCamera` and `SpotLight`

The package has no dependencies beyond the standard library.
Vertices of volume cells are `(x, y, z, value)` tuples; point tests return
the interpolated value, or `None` when the point lies outside the cell.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Examples

Interpolating inside a tetrahedron:

```python
from volfield.plane import intersect_tet

value = intersect_tet(
    (0.1, 0.1, 0.1),
    (0, 0, 0, 0.0), (1, 0, 0, 1.0), (0, 1, 0, 2.0), (0, 0, 1, 3.0),
)
print(value)  # about 0.6; None if the point were outside
```

Boxes and grid projection:

```python
from volfield.bounds import Box, project_on_grid

box = Box.empty()
box.extend((0, 0, 0))
box.extend((4, 4, 4))
print(box.contains((1, 2, 3)))                      # True
print(project_on_grid((1.0, 2.5, 3.9), (4, 4, 4), box))  # (1, 2, 3)
```

Intersecting a ray with a cone:

```python
from volfield.primitives import Cone, Ray, intersect_cone

ray = Ray(ori=(0, 0, -5), dir=(0, 0, 1))
hit = intersect_cone(ray, Cone(v1=(0, 0, 0), v2=(0, 0, 1), r1=1.0, r2=0.5))
print(hit.hit, hit.t)  # True 5.0 (the first cap)
```

Generating camera rays:

```python
from volfield.cameras import OrthoCamera

cam = OrthoCamera(pos=(0, 0, 5), dir=(0, 0, -1), up=(0, 1, 0))
ray = cam.primary_ray(0, 0, 64, 64)
```

## What the package does not do

It provides the geometric and interpolation pieces only. There are no
spatial field objects (structured grids or whole unstructured meshes),
no transfer functions or volume objects, no macrocell grids for
empty-space skipping, no acceleration structures over many primitives,
and no renderer, image output or command-line tool.