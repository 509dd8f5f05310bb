"""
Delaunay triangulation and rectangle-clipped Voronoi cells.

The triangulation comes from scipy's Qhull wrapper. Each Voronoi cell is
built by clipping the clip rectangle against the perpendicular bisector of
the point and every Delaunay neighbour (Sutherland-Hodgman, one half-plane
per neighbour). For interior points this yields exactly the ring of
circumcenters of the incident triangles; for hull points it also closes the
unbounded part of the cell against the rectangle.

Degenerate input policy:

- Points closer than a relative tolerance (exact duplicates included) are
  merged onto the first point of their cluster. Points Qhull still leaves
  out of the triangulation (coplanar) are merged onto the nearest
  triangulation vertex. The owner gets the cell, the merged point gets an
  empty cell.
- Fewer than three distinct points, or all points collinear: the
  triangulation is empty and cells are the slabs between bisectors of
  consecutive points along the line.
"""

from dataclasses import dataclass
from typing import List

import numpy as np
import structlog
from scipy.spatial import Delaunay, QhullError, cKDTree

from .geometry import (
    ClipRect,
    as_clip_rect,
    as_points,
    clip_polygon_halfplane,
    polygon_area,
    remove_repeated_vertices,
)

logger = structlog.get_logger()

# Relative cross-product threshold below which a point set is collinear
COLLINEAR_EPSILON = 1e-12

# Relative distance below which two input points are the same site
MERGE_EPSILON = 1e-9


@dataclass
class Tessellation:
    """Triangulation and per-point cells for one point set."""

    points: np.ndarray            # (n, 2) input points, input order
    clip_rect: ClipRect
    triangles: np.ndarray         # (t, 3) point indices, counter-clockwise
    circumcenters: np.ndarray     # (t, 2) circumcenter of each triangle
    cells: List[np.ndarray]       # cells[i] = (k, 2) ring for point i, (0, 2) if empty
    neighbors: List[List[int]]    # Voronoi/Delaunay neighbours of point i
    owners: np.ndarray            # owners[i] = index that owns point i's location

    def triangle_edges(self) -> List[tuple]:
        """Three (i, j) edges per triangle, shared edges repeated."""
        edges = []
        for a, b, c in self.triangles:
            edges.extend([(int(a), int(b)), (int(b), int(c)), (int(c), int(a))])
        return edges

    def cell_areas(self) -> np.ndarray:
        return np.array([abs(polygon_area(cell)) for cell in self.cells])


def _merge_duplicates(points: np.ndarray) -> np.ndarray:
    """
    owners[i] = lowest index of the near-duplicate cluster holding point i.

    Points closer than MERGE_EPSILON times the coordinate scale are one
    site. Clusters are transitive, so a chain of near-duplicates collapses
    onto its first member.
    """
    scale = max(1.0, float(np.max(np.abs(points))))
    parent = np.arange(len(points))

    def find(i):
        while parent[i] != i:
            parent[i] = parent[parent[i]]
            i = parent[i]
        return i

    tree = cKDTree(points)
    for i, j in sorted(tree.query_pairs(MERGE_EPSILON * scale)):
        root_i, root_j = find(i), find(j)
        if root_i != root_j:
            parent[max(root_i, root_j)] = min(root_i, root_j)

    return np.array([find(i) for i in range(len(points))])


def _is_collinear(points: np.ndarray) -> bool:
    if len(points) < 3:
        return True
    deltas = points - points[0]
    scale = float(np.max(np.abs(deltas))) or 1.0
    # Cross products against the point farthest from points[0]
    far = deltas[np.argmax(np.einsum("ij,ij->i", deltas, deltas))]
    cross = deltas[:, 0] * far[1] - deltas[:, 1] * far[0]
    return float(np.max(np.abs(cross))) <= COLLINEAR_EPSILON * scale * scale


def _orient_ccw(points: np.ndarray, triangles: np.ndarray) -> np.ndarray:
    a = points[triangles[:, 0]]
    b = points[triangles[:, 1]]
    c = points[triangles[:, 2]]
    cross = (b[:, 0] - a[:, 0]) * (c[:, 1] - a[:, 1]) - (b[:, 1] - a[:, 1]) * (c[:, 0] - a[:, 0])
    oriented = triangles.copy()
    flip = cross < 0
    oriented[flip] = oriented[flip][:, [0, 2, 1]]
    return oriented


def compute_circumcenters(points: np.ndarray, triangles: np.ndarray) -> np.ndarray:
    """Circumcenter of every triangle, (t, 2)."""
    if len(triangles) == 0:
        return np.zeros((0, 2), dtype=float)
    a = points[triangles[:, 0]]
    b = points[triangles[:, 1]] - a
    c = points[triangles[:, 2]] - a
    d = 2.0 * (b[:, 0] * c[:, 1] - b[:, 1] * c[:, 0])
    b2 = np.einsum("ij,ij->i", b, b)
    c2 = np.einsum("ij,ij->i", c, c)
    ux = (c[:, 1] * b2 - b[:, 1] * c2) / d
    uy = (b[:, 0] * c2 - c[:, 0] * b2) / d
    return a + np.column_stack([ux, uy])


def _triangulate(points: np.ndarray, owners: np.ndarray):
    """
    Triangulate the distinct points.

    Returns:
        Tuple of (triangles, owners) with triangles indexing ``points``
    """
    empty = np.zeros((0, 3), dtype=int)
    unique_idx = np.flatnonzero(owners == np.arange(len(points)))

    if len(unique_idx) < 3 or _is_collinear(points[unique_idx]):
        return empty, owners

    try:
        tri = Delaunay(points[unique_idx])
    except QhullError as exc:
        logger.warning("Qhull rejected point set, using collinear fallback",
                       points=len(unique_idx), error=str(exc).splitlines()[0])
        return empty, owners

    owners = owners.copy()
    # coplanar rows: (point, facet, nearest vertex), all local indices
    for local_point, _, local_vertex in tri.coplanar:
        point = unique_idx[local_point]
        owner = unique_idx[local_vertex]
        owners[owners == point] = owner

    triangles = unique_idx[tri.simplices]
    return _orient_ccw(points, triangles), owners


def _line_neighbors(points: np.ndarray, owners: np.ndarray) -> List[List[int]]:
    """Neighbours of collinear points: adjacent points along the line."""
    neighbors = [[] for _ in range(len(points))]
    unique_idx = np.flatnonzero(owners == np.arange(len(points)))
    if len(unique_idx) < 2:
        return neighbors

    origin = points[unique_idx[0]]
    deltas = points[unique_idx] - origin
    direction = deltas[np.argmax(np.einsum("ij,ij->i", deltas, deltas))]
    order = unique_idx[np.argsort(deltas @ direction, kind="stable")]

    for prev, cur in zip(order[:-1], order[1:]):
        neighbors[prev].append(int(cur))
        neighbors[cur].append(int(prev))
    return neighbors


def _triangle_neighbors(n_points: int, triangles: np.ndarray) -> List[List[int]]:
    neighbor_sets = [set() for _ in range(n_points)]
    for a, b, c in triangles:
        neighbor_sets[a].update((b, c))
        neighbor_sets[b].update((a, c))
        neighbor_sets[c].update((a, b))
    return [sorted(int(j) for j in s) for s in neighbor_sets]


def voronoi_cell(points: np.ndarray, index: int, neighbors: List[int],
                 clip_rect: ClipRect) -> np.ndarray:
    """
    Voronoi cell of ``points[index]`` clipped to ``clip_rect``.

    Args:
        points: (n, 2) point array
        index: Site index
        neighbors: Indices whose bisectors bound the cell
        clip_rect: Clip window

    Returns:
        Counter-clockwise (k, 2) ring, (0, 2) if the cell misses the window
    """
    site = points[index]
    cell = clip_rect.corners()
    for j in neighbors:
        other = points[j]
        normal = other - site
        midpoint = 0.5 * (site + other)
        cell = clip_polygon_halfplane(cell, normal, float(normal @ midpoint))
        if len(cell) == 0:
            break

    cell = remove_repeated_vertices(cell)
    if len(cell) < 3:
        return np.zeros((0, 2), dtype=float)
    return cell


def tessellate(points, clip_rect) -> Tessellation:
    """
    Compute the Delaunay triangulation and clipped Voronoi cells.

    Args:
        points: (n, 2) point set, n >= 1
        clip_rect: Clip window, a ClipRect or (x0, y0, x1, y1)

    Returns:
        Tessellation with one cell per input point
    """
    clip_rect = as_clip_rect(clip_rect)
    points = as_points(points)
    if len(points) == 0:
        raise ValueError("Cannot tessellate an empty point set")

    logger.debug("Tessellating", points=len(points),
                 clip_rect=(clip_rect.x0, clip_rect.y0, clip_rect.x1, clip_rect.y1))

    owners = _merge_duplicates(points)
    triangles, owners = _triangulate(points, owners)

    if len(triangles):
        neighbors = _triangle_neighbors(len(points), triangles)
    else:
        neighbors = _line_neighbors(points, owners)

    cells = []
    for i in range(len(points)):
        if owners[i] != i:
            cells.append(np.zeros((0, 2), dtype=float))
        else:
            cells.append(voronoi_cell(points, i, neighbors[i], clip_rect))

    merged = int(np.sum(owners != np.arange(len(points))))
    if merged:
        logger.info("Merged duplicate points", merged=merged)

    logger.debug("Tessellation complete", triangles=len(triangles),
                 empty_cells=sum(1 for c in cells if len(c) == 0))

    return Tessellation(
        points=points,
        clip_rect=clip_rect,
        triangles=triangles,
        circumcenters=compute_circumcenters(points, triangles),
        cells=cells,
        neighbors=neighbors,
        owners=owners,
    )
