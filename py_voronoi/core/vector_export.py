"""
Encoding of pattern geometry into scaled line/point primitives.

Closed polygons are emitted as independent segments
``vertex[i] -> vertex[(i + 1) % n]``. Coincident edges are not merged:
a border shared by two cells, or an edge shared by two triangles, is
emitted once per owner.
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

import numpy as np
import structlog

from .geometry import as_points

logger = structlog.get_logger()

LAYER_VORONOI = "VORONOI"
LAYER_DELAUNAY = "DELAUNAY"
LAYER_BOUNDARY = "BOUNDARY"
LAYER_POINTS = "POINTS"


@dataclass(frozen=True)
class Line:
    """Straight segment in output units."""
    x1: float
    y1: float
    x2: float
    y2: float
    layer: str = LAYER_VORONOI


@dataclass(frozen=True)
class Dot:
    """Point entity in output units."""
    x: float
    y: float
    layer: str = LAYER_POINTS


ExportPrimitive = Union[Line, Dot]


@dataclass
class ExportSelection:
    """
    Geometry picked for export.

    ``points`` is always required: it is the point set the triangles index
    into and the source of Dot primitives.
    """
    points: np.ndarray
    triangles: Optional[np.ndarray] = None
    cells: Optional[Sequence[np.ndarray]] = None
    boundary: Optional[np.ndarray] = None
    include_points: bool = False


def compute_scale_factor(target_diameter: Optional[float],
                         current_diameter: Optional[float]) -> float:
    """
    Scale from canvas units to physical units.

    Returns 1.0 when no physical target is configured.
    """
    if target_diameter is None:
        return 1.0
    if current_diameter is None or not math.isfinite(current_diameter) or current_diameter <= 0:
        raise ValueError(f"Boundary diameter must be positive and finite, got {current_diameter}")
    if not math.isfinite(target_diameter) or target_diameter <= 0:
        raise ValueError(f"Target diameter must be positive and finite, got {target_diameter}")
    return target_diameter / current_diameter


def _ring_lines(ring: np.ndarray, scale: float, layer: str) -> List[Line]:
    n = len(ring)
    if n < 2:
        return []
    scaled = ring * scale
    lines = []
    for i in range(n):
        x1, y1 = scaled[i]
        x2, y2 = scaled[(i + 1) % n]
        lines.append(Line(float(x1), float(y1), float(x2), float(y2), layer))
    return lines


def export_primitives(selection: ExportSelection, scale: float = 1.0) -> List[ExportPrimitive]:
    """
    Encode the selected geometry as a flat primitive list.

    Order: Voronoi cells, Delaunay triangles, boundary ring, points.

    Args:
        selection: Geometry to encode
        scale: Factor applied to every coordinate

    Returns:
        List of Line and Dot primitives
    """
    if not math.isfinite(scale) or scale <= 0:
        raise ValueError(f"Scale factor must be positive and finite, got {scale}")

    points = as_points(selection.points)
    if len(points) == 0:
        raise ValueError("Nothing to export: the point set is empty")

    primitives: List[ExportPrimitive] = []

    if selection.cells is not None:
        for cell in selection.cells:
            if len(cell) > 2:
                primitives.extend(_ring_lines(as_points(cell), scale, LAYER_VORONOI))

    if selection.triangles is not None:
        for triangle in np.asarray(selection.triangles, dtype=int).reshape(-1, 3):
            primitives.extend(_ring_lines(points[triangle], scale, LAYER_DELAUNAY))

    if selection.boundary is not None:
        boundary = as_points(selection.boundary)
        if len(boundary) >= 3:
            primitives.extend(_ring_lines(boundary, scale, LAYER_BOUNDARY))

    if selection.include_points:
        for x, y in points * scale:
            primitives.append(Dot(float(x), float(y)))

    logger.debug("Export primitives encoded", primitives=len(primitives), scale=scale)
    return primitives
