"""Three-dimensional convex hulls by the QuickHull algorithm."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from itertools import combinations
from typing import Iterable, Sequence

from .convex_hull import ConvexHull
from .half_edge_mesh import HalfEdgeMesh
from .horizon import extreme_value_indices, point_cloud_scale, reorder_horizon_edges
from .mesh import Face, MeshBuilder
from .plane import Plane, Ray, triangle_normal
from .vector3 import Vector3

log = logging.getLogger(__name__)

DEFAULT_EPS = 0.0000001
"""Default plane tolerance for a point cloud of scale 1."""


@dataclass
class DiagnosticsData:
    """Statistics about the last hull computation."""

    failed_horizon_edges: int = 0


def _as_vectors(points: Iterable[Vector3 | Sequence[float]]) -> list[Vector3]:
    vectors = []
    for p in points:
        if isinstance(p, Vector3):
            vectors.append(p)
        else:
            x, y, z = p
            vectors.append(Vector3(float(x), float(y), float(z)))
    return vectors


class QuickHull:
    """Computes convex hulls; one instance must not be shared between threads."""

    def __init__(self) -> None:
        self._mesh = MeshBuilder()
        self._vertex_data: list[Vector3] = []
        self._epsilon = 0.0
        self._epsilon_squared = 0.0
        self._planar = False
        self._extremes: tuple[int, ...] = (0, 0, 0, 0, 0, 0)
        self._diagnostics = DiagnosticsData()

    @property
    def diagnostics(self) -> DiagnosticsData:
        """Diagnostics of the last generated hull."""
        return self._diagnostics

    def convex_hull(
        self,
        points: Iterable[Vector3 | Sequence[float]],
        ccw: bool = False,
        use_original_indices: bool = False,
        eps: float = DEFAULT_EPS,
    ) -> ConvexHull:
        """Convex hull of ``points`` as vertex and index buffers.

        ``ccw`` swaps the winding of every triangle. With
        ``use_original_indices`` the indices refer to the input points;
        otherwise a vertex buffer of the hull's points is built.
        ``eps`` is the plane tolerance for a point cloud of scale 1.
        """
        self._build_mesh(_as_vectors(points), eps)
        return ConvexHull(self._mesh, self._vertex_data, ccw, use_original_indices)

    def convex_hull_as_mesh(
        self,
        points: Iterable[Vector3 | Sequence[float]],
        ccw: bool = False,
        eps: float = DEFAULT_EPS,
    ) -> HalfEdgeMesh:
        """Convex hull of ``points`` as a compact half-edge mesh."""
        self._build_mesh(_as_vectors(points), eps)
        return HalfEdgeMesh(self._mesh, self._vertex_data)

    def _build_mesh(self, points: list[Vector3], eps: float) -> None:
        if not points:
            self._mesh = MeshBuilder()
            self._vertex_data = []
            return
        self._vertex_data = points
        self._extremes = extreme_value_indices(points)
        scale = point_cloud_scale(points, self._extremes)
        self._epsilon = eps * scale
        self._epsilon_squared = self._epsilon * self._epsilon
        self._diagnostics = DiagnosticsData()
        self._planar = False
        self._mesh = MeshBuilder()
        self._create_convex_half_edge_mesh()
        if self._planar:
            extra_point_index = len(self._vertex_data) - 1
            for he in self._mesh.half_edges:
                if he.end_vertex == extra_point_index:
                    he.end_vertex = 0
            self._vertex_data = points

    def _add_point_to_face(self, face: Face, point_index: int) -> bool:
        d = face.plane.signed_distance(self._vertex_data[point_index])
        if d > 0 and d * d > self._epsilon_squared * face.plane.sqr_n_length:
            if face.points_on_positive_side is None:
                face.points_on_positive_side = []
            face.points_on_positive_side.append(point_index)
            if d > face.most_distant_point_dist:
                face.most_distant_point_dist = d
                face.most_distant_point = point_index
            return True
        return False

    def _setup_initial_tetrahedron(self) -> None:
        mesh = self._mesh
        vd = self._vertex_data
        count = len(vd)

        if count <= 4:
            v = [0, min(1, count - 1), min(2, count - 1), min(3, count - 1)]
            normal = triangle_normal(vd[v[0]], vd[v[1]], vd[v[2]])
            if Plane(normal, vd[v[0]]).is_point_on_positive_side(vd[v[3]]):
                v[0], v[1] = v[1], v[0]
            mesh.setup(*v)
            return

        # The two extreme points farthest apart.
        max_d = self._epsilon_squared
        selected = (0, 0)
        for i, j in combinations(self._extremes, 2):
            d = vd[i].squared_distance_to(vd[j])
            if d > max_d:
                max_d = d
                selected = (i, j)
        if max_d == self._epsilon_squared:
            # All points coincide.
            mesh.setup(0, min(1, count - 1), min(2, count - 1), min(3, count - 1))
            return
        first, second = selected

        # The point farthest from the line through them.
        ray = Ray(vd[first], vd[second] - vd[first])
        max_d = self._epsilon_squared
        max_i = 0
        for i, p in enumerate(vd):
            dist = ray.squared_distance_to_point(p)
            if dist > max_d:
                max_d = dist
                max_i = i
        if max_d == self._epsilon_squared:
            # Collinear points: return a thin triangle.
            excluded = [vd[first], vd[second]]
            third = next((i for i, p in enumerate(vd) if p not in excluded), first)
            excluded.append(vd[third])
            fourth = next((i for i, p in enumerate(vd) if p not in excluded), first)
            mesh.setup(first, second, third, fourth)
            return

        base = [first, second, max_i]
        base_vertices = [vd[i] for i in base]

        # The point farthest from the base triangle's plane.
        max_d = self._epsilon
        max_i = 0
        normal = triangle_normal(*base_vertices)
        triangle_plane = Plane(normal, base_vertices[0])
        for i, p in enumerate(vd):
            d = abs(triangle_plane.signed_distance(p))
            if d > max_d:
                max_d = d
                max_i = i
        if max_d == self._epsilon:
            # Coplanar points: add one point off the plane to give the hull volume.
            self._planar = True
            n1 = triangle_normal(base_vertices[1], base_vertices[2], base_vertices[0])
            self._vertex_data = vd = [*vd, n1 + vd[0]]
            max_i = len(vd) - 1

        if triangle_plane.is_point_on_positive_side(vd[max_i]):
            base[0], base[1] = base[1], base[0]

        mesh.setup(base[0], base[1], base[2], max_i)
        for face in mesh.faces:
            a, b, c = (vd[i] for i in mesh.vertex_indices_of_face(face))
            face.plane = Plane(triangle_normal(a, b, c), a)

        for i in range(count):
            for face in mesh.faces:
                if self._add_point_to_face(face, i):
                    break

    def _create_convex_half_edge_mesh(self) -> None:
        self._setup_initial_tetrahedron()
        mesh = self._mesh
        vd = self._vertex_data

        face_list: deque[int] = deque()
        for i, face in enumerate(mesh.faces):
            if face.points_on_positive_side:
                face_list.append(i)
                face.in_face_stack = True

        iteration = 0
        while face_list:
            iteration += 1
            top_index = face_list.popleft()
            top = mesh.faces[top_index]
            top.in_face_stack = False
            if not top.points_on_positive_side or top.is_disabled():
                continue

            active_index = top.most_distant_point
            active_point = vd[active_index]

            horizon, visible = self._find_visible_faces(top_index, active_point, iteration)

            ordered = reorder_horizon_edges(mesh, horizon)
            if ordered is None:
                self._diagnostics.failed_horizon_edges += 1
                log.warning("Failed to solve horizon edge.")
                top.points_on_positive_side.remove(active_index)
                if not top.points_on_positive_side:
                    top.points_on_positive_side = None
                continue
            horizon = ordered
            edge_count = len(horizon)

            # Recycle the non-horizon half edges of the visible faces.
            new_half_edges: list[int] = []
            disabled_point_lists: list[list[int]] = []
            for face_index in visible:
                face = mesh.faces[face_index]
                for j, he_index in enumerate(mesh.half_edge_indices_of_face(face)):
                    if face.horizon_edges_on_current_iteration & (1 << j):
                        continue
                    if len(new_half_edges) < edge_count * 2:
                        new_half_edges.append(he_index)
                    else:
                        mesh.disable_half_edge(he_index)
                points = mesh.disable_face(face_index)
                if points:
                    disabled_point_lists.append(points)
            while len(new_half_edges) < edge_count * 2:
                new_half_edges.append(mesh.add_half_edge())

            # Extrude the horizon loop to the active point.
            new_faces: list[int] = []
            for i, ab in enumerate(horizon):
                a, b = mesh.vertex_indices_of_half_edge(mesh.half_edges[ab])
                new_face_index = mesh.add_face()
                new_faces.append(new_face_index)

                ca = new_half_edges[2 * i]
                bc = new_half_edges[2 * i + 1]
                he_ab, he_bc, he_ca = mesh.half_edges[ab], mesh.half_edges[bc], mesh.half_edges[ca]

                he_ab.next, he_bc.next, he_ca.next = bc, ca, ab
                he_ab.face = he_bc.face = he_ca.face = new_face_index
                he_ca.end_vertex = a
                he_bc.end_vertex = active_index

                new_face = mesh.faces[new_face_index]
                new_face.plane = Plane(triangle_normal(vd[a], vd[b], active_point), active_point)
                new_face.he = ab

                he_ca.opp = new_half_edges[2 * i - 1 if i > 0 else 2 * edge_count - 1]
                he_bc.opp = new_half_edges[((i + 1) * 2) % (edge_count * 2)]

            for points in disabled_point_lists:
                for point in points:
                    if point == active_index:
                        continue
                    for new_face_index in new_faces:
                        if self._add_point_to_face(mesh.faces[new_face_index], point):
                            break

            for new_face_index in new_faces:
                new_face = mesh.faces[new_face_index]
                if new_face.points_on_positive_side and not new_face.in_face_stack:
                    face_list.append(new_face_index)
                    new_face.in_face_stack = True

    def _find_visible_faces(
        self, top_index: int, active_point: Vector3, iteration: int
    ) -> tuple[list[int], list[int]]:
        """Faces that see ``active_point`` and the half edges bounding them."""
        mesh = self._mesh
        horizon: list[int] = []
        visible: list[int] = []
        pending: list[tuple[int, int | None]] = [(top_index, None)]
        while pending:
            face_index, entered_from = pending.pop()
            face = mesh.faces[face_index]
            if face.visibility_checked_on_iteration == iteration:
                if face.is_visible_face_on_current_iteration:
                    continue
            else:
                face.visibility_checked_on_iteration = iteration
                if face.plane.signed_distance(active_point) > 0:
                    face.is_visible_face_on_current_iteration = True
                    face.horizon_edges_on_current_iteration = 0
                    visible.append(face_index)
                    for he_index in mesh.half_edge_indices_of_face(face):
                        opp = mesh.half_edges[he_index].opp
                        if opp != entered_from:
                            pending.append((mesh.half_edges[opp].face, he_index))
                    continue

            # Not visible: the edge we came through lies on the horizon.
            face.is_visible_face_on_current_iteration = False
            horizon.append(entered_from)
            owner = mesh.faces[mesh.half_edges[entered_from].face]
            edges = mesh.half_edge_indices_of_face(owner)
            slot = 0 if edges[0] == entered_from else (1 if edges[1] == entered_from else 2)
            owner.horizon_edges_on_current_iteration |= 1 << slot
        return horizon, visible


def convex_hull(
    points: Iterable[Vector3 | Sequence[float]],
    ccw: bool = False,
    use_original_indices: bool = False,
    eps: float = DEFAULT_EPS,
) -> ConvexHull:
    """Convex hull of ``points``, computed with a fresh QuickHull."""
    return QuickHull().convex_hull(points, ccw, use_original_indices, eps)