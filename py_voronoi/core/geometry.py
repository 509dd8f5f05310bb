"""Planar geometry helpers shared by the sampler, tessellation and export stages."""

import math
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

import numpy as np

# Relative tolerance used when deciding whether two vertices coincide
VERTEX_EPSILON = 1e-9


def require_finite(name: str, *values: float) -> None:
    """Raise ValueError if any value is NaN or infinite."""
    for value in values:
        if not math.isfinite(value):
            raise ValueError(f"{name} must be finite, got {value}")


@dataclass(frozen=True)
class ClipRect:
    """Axis-aligned clip window (x0, y0) - (x1, y1)."""
    x0: float
    y0: float
    x1: float
    y1: float

    def __post_init__(self):
        require_finite("Clip rectangle coordinate", self.x0, self.y0, self.x1, self.y1)
        if self.x1 <= self.x0 or self.y1 <= self.y0:
            raise ValueError(
                f"Clip rectangle must have positive width and height, got "
                f"({self.x0}, {self.y0}, {self.x1}, {self.y1})"
            )

    @property
    def width(self) -> float:
        return self.x1 - self.x0

    @property
    def height(self) -> float:
        return self.y1 - self.y0

    @property
    def area(self) -> float:
        return self.width * self.height

    def contains(self, point) -> bool:
        """Closed-interval containment test."""
        x, y = point
        return self.x0 <= x <= self.x1 and self.y0 <= y <= self.y1

    def inset(self, margin: float) -> "ClipRect":
        """Shrink every side by ``margin``."""
        return ClipRect(self.x0 + margin, self.y0 + margin, self.x1 - margin, self.y1 - margin)

    def intersect(self, bounds: Optional[Tuple[float, float, float, float]]) -> Optional["ClipRect"]:
        """Intersect with (min_x, min_y, max_x, max_y); None if the overlap is empty."""
        if bounds is None:
            return self
        x0 = max(self.x0, bounds[0])
        y0 = max(self.y0, bounds[1])
        x1 = min(self.x1, bounds[2])
        y1 = min(self.y1, bounds[3])
        if x1 <= x0 or y1 <= y0:
            return None
        return ClipRect(x0, y0, x1, y1)

    def corners(self) -> np.ndarray:
        """Counter-clockwise corner ring starting at (x0, y0)."""
        return np.array([
            [self.x0, self.y0],
            [self.x1, self.y0],
            [self.x1, self.y1],
            [self.x0, self.y1],
        ], dtype=float)


def as_clip_rect(rect) -> ClipRect:
    """Accept a ClipRect or a plain (x0, y0, x1, y1) sequence."""
    if isinstance(rect, ClipRect):
        return rect
    if isinstance(rect, (str, bytes)) or not hasattr(rect, "__len__") or len(rect) != 4:
        raise TypeError(
            f"Clip rectangle must be a ClipRect or (x0, y0, x1, y1), got {type(rect).__name__}"
        )
    return ClipRect(*(float(v) for v in rect))


def as_points(points: Iterable) -> np.ndarray:
    """Coerce a point sequence to a float (n, 2) array."""
    arr = np.asarray(points, dtype=float)
    if arr.size == 0:
        return np.zeros((0, 2), dtype=float)
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise ValueError(f"Expected an (n, 2) point array, got shape {arr.shape}")
    if not np.all(np.isfinite(arr)):
        raise ValueError("Point coordinates must be finite")
    return arr


def polygon_area(vertices: np.ndarray) -> float:
    """
    Signed polygon area via the shoelace formula.

    Positive for counter-clockwise rings (y axis up).
    """
    if len(vertices) < 3:
        return 0.0
    x = vertices[:, 0]
    y = vertices[:, 1]
    return 0.5 * float(np.dot(x, np.roll(y, -1)) - np.dot(np.roll(x, -1), y))


def vertex_mean(vertices: np.ndarray) -> np.ndarray:
    """Arithmetic mean of a polygon's vertices."""
    return np.mean(vertices, axis=0)


def clip_polygon_halfplane(vertices: np.ndarray, normal: np.ndarray, offset: float) -> np.ndarray:
    """
    Clip a convex polygon to the half-plane ``dot(normal, p) <= offset``.

    One Sutherland-Hodgman pass. Vertices on the line are kept. ``normal``
    need not be unit length; the half-plane is normalized first so the
    on-line tolerance is a distance in coordinate units.

    Args:
        vertices: (k, 2) polygon ring
        normal: Outward normal of the clipping line, non-zero
        offset: Line offset along ``normal``

    Returns:
        Clipped (m, 2) ring, possibly empty
    """
    n = len(vertices)
    if n == 0:
        return vertices

    normal = np.asarray(normal, dtype=float)
    length = float(np.hypot(normal[0], normal[1]))
    if length == 0:
        raise ValueError("Clipping half-plane needs a non-zero normal")
    normal = normal / length
    offset = offset / length

    scale = max(1.0, abs(offset), float(np.max(np.abs(vertices))))
    eps = VERTEX_EPSILON * scale
    distances = vertices @ normal - offset

    output = []
    for i in range(n):
        current = vertices[i]
        previous = vertices[i - 1]
        d_cur = distances[i]
        d_prev = distances[i - 1]

        if d_cur <= eps:
            if d_prev > eps:
                output.append(previous + (current - previous) * (d_prev / (d_prev - d_cur)))
            output.append(current)
        elif d_prev <= eps:
            output.append(previous + (current - previous) * (d_prev / (d_prev - d_cur)))

    if not output:
        return np.zeros((0, 2), dtype=float)
    return np.array(output, dtype=float)


def remove_repeated_vertices(vertices: np.ndarray) -> np.ndarray:
    """Drop consecutive (and wrap-around) vertices that coincide."""
    if len(vertices) < 2:
        return vertices
    scale = max(1.0, float(np.max(np.abs(vertices))))
    eps = VERTEX_EPSILON * scale

    kept = [vertices[0]]
    for vertex in vertices[1:]:
        if np.max(np.abs(vertex - kept[-1])) > eps:
            kept.append(vertex)
    while len(kept) > 1 and np.max(np.abs(kept[-1] - kept[0])) <= eps:
        kept.pop()
    return np.array(kept, dtype=float)
