"""Triangle-list form of a convex hull, built from a half-edge mesh."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from .mesh import MeshBuilder
from .vector3 import Vector3


class ConvexHull:
    """Vertex buffer plus a flat index buffer of triangles.

    ``indices`` holds three vertex indices per triangle. With
    ``use_original_indices`` the vertex buffer is the input point cloud;
    otherwise it holds only the points that are part of the hull.
    """

    __slots__ = ("vertices", "indices")

    def __init__(
        self,
        mesh: MeshBuilder | None = None,
        points: Sequence[Vector3] = (),
        ccw: bool = False,
        use_original_indices: bool = False,
    ) -> None:
        self.vertices: list[Vector3] = []
        self.indices: list[int] = []
        if mesh is None:
            return

        start = next(
            (i for i, face in enumerate(mesh.faces) if not face.is_disabled()), None
        )
        if start is None:
            return

        processed = [False] * len(mesh.faces)
        stack = [start]
        mapping: dict[int, int] = {}
        optimized: list[Vector3] = []

        while stack:
            top = stack.pop()
            if processed[top]:
                continue
            processed[top] = True
            face = mesh.faces[top]

            for he_index in mesh.half_edge_indices_of_face(face):
                adjacent = mesh.half_edges[mesh.half_edges[he_index].opp].face
                if not processed[adjacent] and not mesh.faces[adjacent].is_disabled():
                    stack.append(adjacent)

            corners = mesh.vertex_indices_of_face(face)
            if not use_original_indices:
                remapped = []
                for v in corners:
                    if v not in mapping:
                        optimized.append(points[v])
                        mapping[v] = len(optimized) - 1
                    remapped.append(mapping[v])
                corners = tuple(remapped)

            a, b, c = corners
            self.indices.extend((a, c, b) if ccw else (a, b, c))

        self.vertices = list(points) if use_original_indices else optimized

    def to_obj(self, object_name: str = "quickhull") -> str:
        """Wavefront OBJ text of the hull, with 1-based face indices."""
        lines = [f"o {object_name}"]
        lines.extend(f"v {v.x:g} {v.y:g} {v.z:g}" for v in self.vertices)
        triangle_count = len(self.indices) // 3
        for t in range(triangle_count):
            a, b, c = self.indices[3 * t : 3 * t + 3]
            lines.append(f"f {a + 1} {b + 1} {c + 1}")
        return "\n".join(lines) + "\n"

    def write_obj(self, filename: str | Path, object_name: str = "quickhull") -> None:
        """Write the hull to a Wavefront OBJ file."""
        Path(filename).write_text(self.to_obj(object_name), encoding="utf-8")

    def __repr__(self) -> str:
        return (
            f"ConvexHull(vertices={len(self.vertices)}, "
            f"triangles={len(self.indices) // 3})"
        )