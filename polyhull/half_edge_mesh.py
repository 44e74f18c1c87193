"""Compact half-edge mesh with disabled slots removed and indices renumbered."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .mesh import MeshBuilder
from .vector3 import Vector3


class HalfEdgeMesh:
    """Half-edge mesh holding only the live faces, edges and hull vertices."""

    @dataclass(frozen=True)
    class HalfEdge:
        end_vertex: int
        opp: int
        face: int
        next: int

    @dataclass(frozen=True)
    class Face:
        half_edge_index: int

    def __init__(self, builder: MeshBuilder, vertex_data: Sequence[Vector3]) -> None:
        self.vertices: list[Vector3] = []
        face_map: dict[int, int] = {}
        vertex_map: dict[int, int] = {}
        live_faces = []

        for i, face in enumerate(builder.faces):
            if face.is_disabled():
                continue
            face_map[i] = len(live_faces)
            live_faces.append(face)
            for he_index in builder.half_edge_indices_of_face(face):
                vertex = builder.half_edges[he_index].end_vertex
                if vertex not in vertex_map:
                    vertex_map[vertex] = len(self.vertices)
                    self.vertices.append(vertex_data[vertex])

        he_map: dict[int, int] = {}
        live_edges = []
        for i, he in enumerate(builder.half_edges):
            if not he.is_disabled():
                he_map[i] = len(live_edges)
                live_edges.append(he)

        self.faces: list[HalfEdgeMesh.Face] = [
            HalfEdgeMesh.Face(he_map[face.he]) for face in live_faces
        ]
        self.half_edges: list[HalfEdgeMesh.HalfEdge] = [
            HalfEdgeMesh.HalfEdge(
                vertex_map[he.end_vertex],
                he_map[he.opp],
                face_map[he.face],
                he_map[he.next],
            )
            for he in live_edges
        ]

    def __repr__(self) -> str:
        return (
            f"HalfEdgeMesh(vertices={len(self.vertices)}, faces={len(self.faces)}, "
            f"half_edges={len(self.half_edges)})"
        )