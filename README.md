# polyhull

Convex hulls of 3D point clouds using the QuickHull algorithm. It is written
in pure Python and has no dependencies.

The hull starts as a tetrahedron built from the extreme points of the cloud.
It is then extruded outward, one farthest point at a time, until no point
lies outside it. Degenerate input is handled as well:

- Coinciding points give a degenerate tetrahedron.
- Collinear points give a thin triangle mesh.
- Coplanar points give a flat mesh. A temporary point off the plane is used
  while the hull is built.

An empty point list gives a hull with no triangles.

## Installation

```
pip install .
```

To run the test suite:

```
pip install .[test]
pytest
```

## Usage

```python
from polyhull.quickhull import convex_hull
from polyhull.vector3 import Vector3

points = [
    Vector3(0, 0, 0), Vector3(1, 0, 0), Vector3(0, 1, 0), Vector3(0, 0, 1),
    Vector3(0.1, 0.1, 0.1),  # interior point, not on the hull
]

hull = convex_hull(points, ccw=True, use_original_indices=False)
print(hull.vertices)   # only the vertices that lie on the hull
print(hull.indices)    # flat triangle index list, three per face
print(hull.to_obj("tetra"))
hull.write_obj("tetra.obj", "tetra")
```

Points may also be given as plain `(x, y, z)` sequences.

### Options

- `ccw` reverses the vertex order of every output triangle. Each triangle is
  then emitted as `(a, c, b)` instead of `(a, b, c)`.
- `use_original_indices` controls what the index buffer refers to:
  - `True`: the index buffer refers to the input point list, and `vertices`
    is that list.
  - `False`: a compact vertex buffer is built that holds only the hull
    vertices.
- `eps` is the plane tolerance for a point cloud of scale 1. The default is
  `1e-7`. It is multiplied by the cloud's scale, which is the largest
  absolute coordinate among the extreme points.

`ConvexHull.to_obj(object_name)` returns Wavefront OBJ text with 1-based
face indices. `ConvexHull.write_obj(filename, object_name)` writes that text
to a file.

### Reusing a builder

`QuickHull` keeps diagnostics about the last hull it built:

```python
from polyhull.quickhull import QuickHull

builder = QuickHull()
hull = builder.convex_hull(points, True, False, 1e-7)
print(builder.diagnostics.failed_horizon_edges)

mesh = builder.convex_hull_as_mesh(points, True, 1e-7)  # a HalfEdgeMesh
print(len(mesh.faces), len(mesh.half_edges), len(mesh.vertices))
```

A horizon edge loop can fail to close because of numerical trouble. When
that happens, the offending point is dropped and a warning is logged
through the `polyhull.quickhull` logger. The failure is also counted in
`failed_horizon_edges`.

`HalfEdgeMesh` is a compact half-edge structure with no disabled slots.
Each half edge records four things:

- its end vertex
- its opposite half edge
- its face
- the next half edge around that face

A `QuickHull` instance must not be shared between threads.

### Building blocks

- `polyhull.vector3.Vector3` is an immutable 3D vector. It provides `dot`,
  `cross`, `length`, `length_squared`, `normalized`, `projection`,
  `distance_to` and `squared_distance_to`.
- `polyhull.plane` holds the plane and line geometry: `Plane`, `Ray` and
  `triangle_normal`.
- `polyhull.mesh.MeshBuilder` is the mutable half-edge mesh used while the
  hull is being grown. It reuses the slots of removed faces and edges.
- `polyhull.horizon` holds helpers used by the hull iteration:
  `extreme_value_indices`, `point_cloud_scale` and `reorder_horizon_edges`.

## What it does not do

This is a library only. It has no command-line tool.

It reads no point-cloud or mesh files. Points are passed in as Python
objects. The only output format is Wavefront OBJ.