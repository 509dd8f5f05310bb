"""
Cell post-processing: radial inset and corner rounding.

The inset moves each vertex a fixed distance toward the vertex mean. It is
not a true offset polygon and can self-intersect on concave or very thin
cells, or overshoot the centroid when the distance exceeds a vertex's
distance to it.

Rounding replaces each corner with a chord between the two points at the
corner radius along the adjacent edges, bent outward by a sine-shaped bulge
whose peak matches the midpoint of the tangent circular arc.
"""

import math
from typing import Optional

import numpy as np

from .geometry import as_points, require_finite, vertex_mean

ROUNDING_SEGMENTS = 8


def inset_polygon(vertices: np.ndarray, distance: float) -> np.ndarray:
    """
    Move every vertex ``distance`` toward the vertex mean.

    Vertices that coincide with the mean are left in place.
    """
    vertices = as_points(vertices)
    require_finite("Inset distance", distance)
    if distance < 0:
        raise ValueError(f"Inset distance must be non-negative, got {distance}")
    if len(vertices) == 0 or distance == 0:
        return vertices.copy()

    centroid = vertex_mean(vertices)
    to_centroid = centroid - vertices
    lengths = np.hypot(to_centroid[:, 0], to_centroid[:, 1])

    result = vertices.copy()
    movable = lengths > 0
    result[movable] += to_centroid[movable] / lengths[movable, None] * distance
    return result


def _corner_points(prev_pt: np.ndarray, vertex: np.ndarray, next_pt: np.ndarray,
                   radius: float, segments: int) -> list:
    to_prev = prev_pt - vertex
    to_next = next_pt - vertex
    len_prev = math.hypot(*to_prev)
    len_next = math.hypot(*to_next)
    if len_prev == 0 or len_next == 0:
        return [vertex]

    # Clamp so neighbouring corners never overlap
    r = min(radius, 0.5 * len_prev, 0.5 * len_next)
    if r <= 0:
        return [vertex]

    u_prev = to_prev / len_prev
    u_next = to_next / len_next
    start = vertex + u_prev * r
    end = vertex + u_next * r

    # half_angle is half the interior angle at the vertex
    cos_full = float(np.clip(u_prev @ u_next, -1.0, 1.0))
    half_angle = 0.5 * math.acos(cos_full)
    cos_half = math.cos(half_angle)
    if cos_half < 1e-9:
        return [vertex]

    chord_mid = 0.5 * (start + end)
    outward = vertex - chord_mid
    outward_len = math.hypot(*outward)
    if outward_len == 0:
        return [vertex]
    outward /= outward_len

    # Distance from chord midpoint to the tangent arc midpoint
    bulge = r * cos_half - r * (1.0 - math.sin(half_angle)) / cos_half

    points = [start]
    for k in range(1, segments + 1):
        t = k / (segments + 1)
        points.append(start + (end - start) * t + outward * (bulge * math.sin(math.pi * t)))
    points.append(end)
    return points


def round_corners(vertices: np.ndarray, radius: float,
                  segments: int = ROUNDING_SEGMENTS) -> np.ndarray:
    """
    Replace every corner with a polygonal rounded corner.

    Args:
        vertices: (k, 2) closed ring, k >= 3
        radius: Requested corner radius; clamped per corner to half of each
            adjacent edge
        segments: Interpolated points between the two corner offsets

    Returns:
        (m, 2) ring with ``segments + 2`` points per rounded corner
    """
    vertices = as_points(vertices)
    require_finite("Corner radius", radius)
    if radius < 0:
        raise ValueError(f"Corner radius must be non-negative, got {radius}")
    n = len(vertices)
    if n < 3 or radius == 0:
        return vertices.copy()

    rounded = []
    for i in range(n):
        rounded.extend(_corner_points(vertices[i - 1], vertices[i], vertices[(i + 1) % n],
                                      radius, segments))
    return np.array(rounded, dtype=float)


def process_cell(vertices: np.ndarray, inset_distance: float = 0.0,
                 rounding_radius: Optional[float] = None) -> np.ndarray:
    """
    Inset a cell and optionally round its corners.

    Args:
        vertices: (k, 2) cell ring; empty or degenerate rings pass through
        inset_distance: Distance to move vertices toward the vertex mean
        rounding_radius: Corner radius, no rounding if None

    Returns:
        Processed (m, 2) ring
    """
    result = inset_polygon(vertices, inset_distance)
    if rounding_radius is not None and len(result) >= 3:
        result = round_corners(result, rounding_radius)
    return result
