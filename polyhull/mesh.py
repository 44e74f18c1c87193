"""Half-edge mesh under construction, with reusable slots."""

from __future__ import annotations

from dataclasses import dataclass, field

from .plane import Plane


@dataclass
class HalfEdge:
    """Directed edge; ``end_vertex`` is None once the edge is disabled."""

    end_vertex: int | None = None
    opp: int = 0
    face: int = 0
    next: int = 0

    def disable(self) -> None:
        self.end_vertex = None

    def is_disabled(self) -> bool:
        return self.end_vertex is None


@dataclass(eq=False)
class Face:
    """Triangle of the mesh; ``he`` is None while the face is disabled."""

    he: int | None = None
    plane: Plane = field(default_factory=Plane)
    most_distant_point_dist: float = 0.0
    most_distant_point: int = 0
    visibility_checked_on_iteration: int = 0
    is_visible_face_on_current_iteration: bool = False
    in_face_stack: bool = False
    horizon_edges_on_current_iteration: int = 0
    points_on_positive_side: list[int] | None = None

    def disable(self) -> None:
        self.he = None

    def is_disabled(self) -> bool:
        return self.he is None


# (end vertex slot, opp, face, next) for the twelve half edges of tetrahedron ABCD;
# the vertex slot indexes into (a, b, c, d).
_TETRAHEDRON_EDGES = (
    (1, 6, 0, 1),   # AB
    (2, 9, 0, 2),   # BC
    (0, 3, 0, 0),   # CA
    (2, 2, 1, 4),   # AC
    (3, 11, 1, 5),  # CD
    (0, 7, 1, 3),   # DA
    (0, 0, 2, 7),   # BA
    (3, 5, 2, 8),   # AD
    (1, 10, 2, 6),  # DB
    (1, 1, 3, 10),  # CB
    (3, 8, 3, 11),  # BD
    (2, 4, 3, 9),   # DC
)
_TETRAHEDRON_FACE_EDGES = (0, 3, 6, 9)


class MeshBuilder:
    """Mutable half-edge mesh whose removed faces and edges are recycled."""

    def __init__(self) -> None:
        self.faces: list[Face] = []
        self.half_edges: list[HalfEdge] = []
        self.disabled_faces: list[int] = []
        self.disabled_half_edges: list[int] = []

    def add_face(self) -> int:
        """Return the index of a free face slot, reusing a disabled one if any."""
        if self.disabled_faces:
            index = self.disabled_faces[-1]
            face = self.faces[index]
            assert face.is_disabled()
            assert face.points_on_positive_side is None
            face.most_distant_point_dist = 0.0
            self.disabled_faces.pop()
            return index
        self.faces.append(Face())
        return len(self.faces) - 1

    def add_half_edge(self) -> int:
        """Return the index of a free half-edge slot, reusing a disabled one if any."""
        if self.disabled_half_edges:
            return self.disabled_half_edges.pop()
        self.half_edges.append(HalfEdge())
        return len(self.half_edges) - 1

    def disable_face(self, face_index: int) -> list[int] | None:
        """Disable a face and hand back the points that were on its positive side."""
        face = self.faces[face_index]
        face.disable()
        self.disabled_faces.append(face_index)
        points = face.points_on_positive_side
        face.points_on_positive_side = None
        return points

    def disable_half_edge(self, he_index: int) -> None:
        self.half_edges[he_index].disable()
        self.disabled_half_edges.append(he_index)

    def setup(self, a: int, b: int, c: int, d: int) -> None:
        """Reset to the tetrahedron ABCD (AB must point against the normal of ABC)."""
        corners = (a, b, c, d)
        self.half_edges = [
            HalfEdge(corners[slot], opp, face, nxt)
            for slot, opp, face, nxt in _TETRAHEDRON_EDGES
        ]
        self.faces = [Face(he=he) for he in _TETRAHEDRON_FACE_EDGES]
        self.disabled_faces = []
        self.disabled_half_edges = []

    def vertex_indices_of_face(self, face: Face) -> tuple[int, int, int]:
        """End vertices of the face's three half edges, in loop order."""
        first = self.half_edges[face.he]
        second = self.half_edges[first.next]
        third = self.half_edges[second.next]
        return (first.end_vertex, second.end_vertex, third.end_vertex)

    def vertex_indices_of_half_edge(self, he: HalfEdge) -> tuple[int, int]:
        """Start and end vertex of a half edge."""
        return (self.half_edges[he.opp].end_vertex, he.end_vertex)

    def half_edge_indices_of_face(self, face: Face) -> tuple[int, int, int]:
        """Indices of the face's three half edges, in loop order."""
        second = self.half_edges[face.he].next
        return (face.he, second, self.half_edges[second].next)