from collections import Counter
from itertools import combinations

from polyhull.convex_hull import ConvexHull
from polyhull.mesh import MeshBuilder
from polyhull.vector3 import Vector3

POINTS = [
    Vector3(0.0, 0.0, 0.0),
    Vector3(1.0, 0.0, 0.0),
    Vector3(0.0, 1.0, 0.0),
    Vector3(0.0, 0.0, 1.0),
]


def _tetra(a=0, b=1, c=2, d=3):
    mesh = MeshBuilder()
    mesh.setup(a, b, c, d)
    return mesh


def _triangles(hull):
    idx = hull.indices
    return [tuple(idx[i : i + 3]) for i in range(0, len(idx), 3)]


def test_tetrahedron_covers_all_faces():
    hull = ConvexHull(_tetra(), POINTS, False, True)
    tris = _triangles(hull)
    assert len(tris) == 4
    assert {frozenset(t) for t in tris} == {
        frozenset(s) for s in combinations(range(4), 3)
    }
    assert hull.vertices == POINTS


def test_edges_form_closed_oriented_surface():
    for ccw in (True, False):
        hull = ConvexHull(_tetra(), POINTS, ccw, True)
        edges = Counter()
        for a, b, c in _triangles(hull):
            edges.update([(a, b), (b, c), (c, a)])
        assert all(count == 1 for count in edges.values())
        assert all((v, u) in edges for (u, v) in edges)
        assert len(edges) == 12


def test_ccw_reverses_each_triangle():
    cw = _triangles(ConvexHull(_tetra(), POINTS, False, True))
    ccw = _triangles(ConvexHull(_tetra(), POINTS, True, True))
    assert [(a, c, b) for a, b, c in cw] == ccw


def test_optimized_buffer_keeps_only_hull_vertices():
    interior = Vector3(0.1, 0.1, 0.1)
    points = [interior] + POINTS
    original = ConvexHull(_tetra(1, 2, 3, 4), points, False, True)
    optimized = ConvexHull(_tetra(1, 2, 3, 4), points, False, False)
    assert len(optimized.vertices) == 4
    assert interior not in optimized.vertices
    assert max(optimized.indices) == 3

    def as_points(hull):
        return [tuple(hull.vertices[i] for i in t) for t in _triangles(hull)]

    assert as_points(original) == as_points(optimized)


def test_default_hull_is_empty():
    hull = ConvexHull()
    assert hull.vertices == []
    assert hull.indices == []
    assert hull.to_obj() == "o quickhull\n"


def test_all_faces_disabled_gives_empty_hull():
    mesh = _tetra()
    for i in range(4):
        mesh.disable_face(i)
    hull = ConvexHull(mesh, POINTS, True, True)
    assert hull.indices == []
    assert hull.vertices == []


def test_obj_text_matches_buffers():
    hull = ConvexHull(_tetra(), POINTS, True, False)
    lines = hull.to_obj("hull").splitlines()
    assert lines[0] == "o hull"
    vertex_lines = [line for line in lines if line.startswith("v ")]
    face_lines = [line for line in lines if line.startswith("f ")]
    assert len(vertex_lines) == len(hull.vertices)
    assert "v 1 0 0" in vertex_lines
    parsed = [tuple(int(x) - 1 for x in line.split()[1:]) for line in face_lines]
    assert parsed == _triangles(hull)


def test_obj_number_format():
    hull = ConvexHull()
    hull.vertices = [Vector3(0.5, -2.25, 3.0)]
    assert hull.to_obj().splitlines()[1] == "v 0.5 -2.25 3"


def test_write_obj_round_trip(tmp_path):
    hull = ConvexHull(_tetra(), POINTS, False, False)
    target = tmp_path / "hull.obj"
    hull.write_obj(target, "shape")
    assert target.read_text(encoding="utf-8") == hull.to_obj("shape")