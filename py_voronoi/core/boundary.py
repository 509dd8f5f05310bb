"""
Boundary regions that constrain point sampling.

A boundary is one of four frozen variants: NoBoundary, Circle,
JaggedPolygon and Polygon. Each variant answers the same small protocol:

- ``contains(point)``: containment predicate
- ``center``: reserved first sample for custom regions (None if unconstrained)
- ``bounds()``: (min_x, min_y, max_x, max_y) or None
- ``diameter()``: size used to derive physical export scale
- ``outline(resolution)``: closed vertex ring for export, or None

Polygon variants with fewer than three vertices are treated as
unconstrained rather than rejected.
"""

import math
from dataclasses import dataclass
from typing import Optional, Tuple, Union

import numpy as np

from .geometry import require_finite

Vertex = Tuple[float, float]
Bounds = Tuple[float, float, float, float]


def _freeze_vertices(vertices) -> Tuple[Vertex, ...]:
    frozen = tuple((float(x), float(y)) for x, y in vertices)
    for x, y in frozen:
        require_finite("Boundary vertex", x, y)
    return frozen


def point_in_ring(point, vertices) -> bool:
    """
    Even-odd ray casting against an implicitly closed vertex ring.

    Points exactly on an edge resolve consistently (half-open rule on y)
    but are not guaranteed to be reported inside.
    """
    x, y = point
    inside = False
    j = len(vertices) - 1
    for i in range(len(vertices)):
        xi, yi = vertices[i]
        xj, yj = vertices[j]
        if (yi > y) != (yj > y):
            x_cross = (xj - xi) * (y - yi) / (yj - yi) + xi
            if x < x_cross:
                inside = not inside
        j = i
    return inside


def _ring_bounds(vertices) -> Bounds:
    xs = [v[0] for v in vertices]
    ys = [v[1] for v in vertices]
    return (min(xs), min(ys), max(xs), max(ys))


@dataclass(frozen=True)
class NoBoundary:
    """Unconstrained region: everything is inside."""

    is_custom = False

    def contains(self, point) -> bool:
        return True

    @property
    def center(self) -> Optional[Vertex]:
        return None

    def bounds(self) -> Optional[Bounds]:
        return None

    def diameter(self) -> Optional[float]:
        return None

    def outline(self, resolution: int = 128) -> Optional[np.ndarray]:
        return None


@dataclass(frozen=True)
class Circle:
    """Disc of ``radius`` around ``center`` (boundary included)."""
    center: Vertex
    radius: float

    is_custom = True

    def __post_init__(self):
        object.__setattr__(self, "center", (float(self.center[0]), float(self.center[1])))
        require_finite("Circle parameter", *self.center, self.radius)
        if self.radius <= 0:
            raise ValueError(f"Circle radius must be positive, got {self.radius}")

    def contains(self, point) -> bool:
        return math.hypot(point[0] - self.center[0], point[1] - self.center[1]) <= self.radius

    def bounds(self) -> Bounds:
        cx, cy = self.center
        return (cx - self.radius, cy - self.radius, cx + self.radius, cy + self.radius)

    def diameter(self) -> float:
        return 2.0 * self.radius

    def outline(self, resolution: int = 128) -> np.ndarray:
        """Polygonize the circle into ``resolution`` vertices."""
        if resolution < 3:
            raise ValueError(f"Outline resolution must be at least 3, got {resolution}")
        angles = np.arange(resolution) * (2 * np.pi / resolution)
        return np.column_stack([
            self.center[0] + self.radius * np.cos(angles),
            self.center[1] + self.radius * np.sin(angles),
        ])


@dataclass(frozen=True)
class Polygon:
    """Arbitrary simple polygon given as an ordered vertex ring."""
    vertices: Tuple[Vertex, ...]

    def __post_init__(self):
        object.__setattr__(self, "vertices", _freeze_vertices(self.vertices))

    @property
    def is_closed(self) -> bool:
        return len(self.vertices) >= 3

    @property
    def is_custom(self) -> bool:
        return self.is_closed

    def contains(self, point) -> bool:
        if not self.is_closed:
            return True
        return point_in_ring(point, self.vertices)

    @property
    def center(self) -> Optional[Vertex]:
        """Vertex mean of the ring."""
        if not self.is_closed:
            return None
        xs, ys = zip(*self.vertices)
        return (sum(xs) / len(xs), sum(ys) / len(ys))

    def bounds(self) -> Optional[Bounds]:
        if not self.is_closed:
            return None
        return _ring_bounds(self.vertices)

    def diameter(self) -> Optional[float]:
        if not self.is_closed:
            return None
        min_x, min_y, max_x, max_y = self.bounds()
        return max(max_x - min_x, max_y - min_y)

    def outline(self, resolution: int = 128) -> Optional[np.ndarray]:
        if not self.is_closed:
            return None
        return np.array(self.vertices, dtype=float)


@dataclass(frozen=True)
class JaggedPolygon(Polygon):
    """Radially perturbed ring approximating a circle of ``base_radius``."""
    center: Vertex = (0.0, 0.0)
    base_radius: float = 1.0

    def __post_init__(self):
        super().__post_init__()
        object.__setattr__(self, "center", (float(self.center[0]), float(self.center[1])))
        require_finite("Jagged boundary parameter", *self.center, self.base_radius)
        if self.base_radius <= 0:
            raise ValueError(f"Base radius must be positive, got {self.base_radius}")

    def diameter(self) -> float:
        return 2.0 * self.base_radius


BoundaryRegion = Union[NoBoundary, Circle, JaggedPolygon, Polygon]


def contains(region: BoundaryRegion, point) -> bool:
    """Containment predicate for any boundary variant."""
    return region.contains(point)
