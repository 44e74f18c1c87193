"""Helpers of the hull iteration: extreme points, scale and horizon loops."""

from __future__ import annotations

from typing import Sequence

from .mesh import MeshBuilder
from .vector3 import Vector3


def extreme_value_indices(points: Sequence[Vector3]) -> tuple[int, int, int, int, int, int]:
    """Indices of the points with max x, min x, max y, min y, max z, min z.

    Ties keep the earliest point.
    """
    if not points:
        raise ValueError("point cloud is empty")
    first = points[0]
    values = [first.x, first.x, first.y, first.y, first.z, first.z]
    indices = [0] * 6
    for i, pos in enumerate(points):
        for axis, value in enumerate((pos.x, pos.y, pos.z)):
            hi, lo = 2 * axis, 2 * axis + 1
            if value > values[hi]:
                values[hi] = value
                indices[hi] = i
            elif value < values[lo]:
                values[lo] = value
                indices[lo] = i
    return tuple(indices)  # type: ignore[return-value]


def point_cloud_scale(points: Sequence[Vector3], extremes: Sequence[int]) -> float:
    """Largest absolute coordinate among the extreme points, axis by axis."""
    scale = 0.0
    for i, point_index in enumerate(extremes):
        component = tuple(points[point_index])[i // 2]
        scale = max(scale, abs(component))
    return scale


def reorder_horizon_edges(mesh: MeshBuilder, horizon_edges: Sequence[int]) -> list[int] | None:
    """Order half edges so each one starts where the previous ends.

    Returns the ordered edges as a new list, or None if they do not chain.
    """
    edges = list(horizon_edges)
    half_edges = mesh.half_edges
    for i in range(len(edges) - 1):
        end_vertex = half_edges[edges[i]].end_vertex
        for j in range(i + 1, len(edges)):
            begin_vertex = half_edges[half_edges[edges[j]].opp].end_vertex
            if begin_vertex == end_vertex:
                edges[i + 1], edges[j] = edges[j], edges[i + 1]
                break
        else:
            return None
    return edges