"""
Seeded point sampling with grid/random blending and boundary rejection.

Layout policy for the non-reserved slots:

- randomness < 0.1: near-grid. Slots sit at grid cell centers with at most
  20% jitter.
- randomness >= 0.1: blended. Each slot draws once; below ``randomness``
  the point is placed uniformly at random, otherwise at its grid cell center
  with jitter scaled by ``randomness``.

Candidates outside the margin-inset rectangle or outside the boundary are
retried. Retries are capped at ``10 x count`` attempts for the whole pass,
so restrictive boundaries yield fewer points instead of hanging.
"""

import math
from collections import deque
from dataclasses import dataclass, field
from typing import Optional, Tuple

import numpy as np
import structlog

from .boundary import BoundaryRegion, Circle, NoBoundary, Polygon
from .geometry import ClipRect, as_clip_rect, require_finite
from .jagged_boundary import build_jagged_boundary
from .seeded_rng import SeededRNG

logger = structlog.get_logger()

DEFAULT_MARGIN = 20.0
NEAR_GRID_THRESHOLD = 0.1
NEAR_GRID_JITTER = 0.2
ATTEMPTS_PER_POINT = 10


@dataclass(frozen=True)
class GenerationConfig:
    """Immutable snapshot of every parameter of one generation pass."""

    point_count: int = 30
    seed: int = 0
    randomness: float = 1.0
    boundary: BoundaryRegion = field(default_factory=NoBoundary)
    jaggedness: float = 0.0  # circle boundaries only
    jagged_resolution: int = 64
    clip_rect: ClipRect = field(default_factory=lambda: ClipRect(0.0, 0.0, 800.0, 600.0))
    margin: float = DEFAULT_MARGIN
    inset: float = 0.0
    rounded_corners: bool = False
    corner_radius: float = 0.0

    def __post_init__(self):
        if not isinstance(self.boundary, (NoBoundary, Circle, Polygon)):
            raise TypeError(f"Boundary must be NoBoundary, Circle or a polygon, "
                            f"got {type(self.boundary).__name__}")
        object.__setattr__(self, "clip_rect", as_clip_rect(self.clip_rect))

        if isinstance(self.point_count, bool) or int(self.point_count) != self.point_count:
            raise ValueError(f"Point count must be an integer, got {self.point_count}")
        if self.point_count < 1:
            raise ValueError(f"Point count must be at least 1, got {self.point_count}")
        if int(self.jagged_resolution) != self.jagged_resolution or self.jagged_resolution < 3:
            raise ValueError(f"Jagged resolution must be an integer >= 3, got {self.jagged_resolution}")

        require_finite("Seed", self.seed)
        if int(self.seed) != self.seed:
            raise ValueError(f"Seed must be a whole number, got {self.seed}")
        require_finite("Randomness", self.randomness)
        require_finite("Jaggedness", self.jaggedness)
        require_finite("Margin", self.margin)
        require_finite("Inset", self.inset)
        require_finite("Corner radius", self.corner_radius)

        if not 0.0 <= self.randomness <= 1.0:
            raise ValueError(f"Randomness must be in [0, 1], got {self.randomness}")
        if not 0.0 <= self.jaggedness <= 1.0:
            raise ValueError(f"Jaggedness must be in [0, 1], got {self.jaggedness}")
        if self.margin < 0:
            raise ValueError(f"Margin must be non-negative, got {self.margin}")
        if self.inset < 0:
            raise ValueError(f"Inset must be non-negative, got {self.inset}")
        if self.corner_radius < 0:
            raise ValueError(f"Corner radius must be non-negative, got {self.corner_radius}")

        object.__setattr__(self, "point_count", int(self.point_count))
        object.__setattr__(self, "jagged_resolution", int(self.jagged_resolution))


def resolve_boundary(config: GenerationConfig) -> BoundaryRegion:
    """
    Turn the configured boundary into the region actually sampled against.

    A circle with non-zero jaggedness becomes a JaggedPolygon seeded by the
    generation seed; every other boundary is used as is.
    """
    boundary = config.boundary
    if isinstance(boundary, Circle) and config.jaggedness > 0:
        return build_jagged_boundary(boundary.center, boundary.radius,
                                     config.jagged_resolution, config.jaggedness,
                                     config.seed)
    return boundary


def _grid_layout(slots: int, window: ClipRect) -> Tuple[int, float, float]:
    """Column count and cell size of a grid holding ``slots`` cells."""
    aspect = window.width / window.height
    cols = max(1, math.ceil(math.sqrt(slots * aspect)))
    rows = max(1, math.ceil(slots / cols))
    return cols, window.width / cols, window.height / rows


def _candidate(rng: SeededRNG, slot: int, randomness: float, window: ClipRect,
               cols: int, cell_w: float, cell_h: float) -> Tuple[float, float]:
    cx = window.x0 + (slot % cols + 0.5) * cell_w
    cy = window.y0 + (slot // cols + 0.5) * cell_h

    if randomness < NEAR_GRID_THRESHOLD:
        jitter = NEAR_GRID_JITTER
    elif rng.next() < randomness:
        return (window.x0 + rng.next() * window.width,
                window.y0 + rng.next() * window.height)
    else:
        jitter = randomness

    return (cx + (rng.next() - 0.5) * 2 * jitter * cell_w,
            cy + (rng.next() - 0.5) * 2 * jitter * cell_h)


def sample_points(count: int, seed: int, clip_rect: ClipRect,
                  region: Optional[BoundaryRegion] = None,
                  randomness: float = 1.0,
                  margin: float = DEFAULT_MARGIN) -> np.ndarray:
    """
    Sample up to ``count`` points inside ``clip_rect`` and ``region``.

    Args:
        count: Requested number of points, >= 1
        seed: Integer seed; identical arguments give identical output
        clip_rect: Canvas / clip window
        region: Boundary constraint, unconstrained if None
        randomness: Grid-vs-random blend factor in [0, 1]
        margin: Inset from the rectangle edges (capped at a quarter of the
            shorter side)

    Returns:
        (k, 2) array with k <= count, in insertion order
    """
    if region is None:
        region = NoBoundary()
    if count < 1:
        raise ValueError(f"Point count must be at least 1, got {count}")
    require_finite("Randomness", randomness)
    require_finite("Margin", margin)
    if not 0.0 <= randomness <= 1.0:
        raise ValueError(f"Randomness must be in [0, 1], got {randomness}")

    clip_rect = as_clip_rect(clip_rect)
    count = int(count)
    rng = SeededRNG(seed)
    margin = min(max(margin, 0.0), 0.25 * min(clip_rect.width, clip_rect.height))
    area = clip_rect.inset(margin)

    points = []

    # Reserve the region center so a tight boundary still gets one point
    if region.is_custom:
        center = region.center
        if center is not None and area.contains(center) and region.contains(center):
            points.append(center)

    window = area.intersect(region.bounds())
    slots = count - len(points)
    if window is None or slots == 0:
        if window is None:
            logger.warning("Boundary does not overlap the sampling area",
                           requested=count, sampled=len(points))
        return np.array(points, dtype=float).reshape(-1, 2)

    cols, cell_w, cell_h = _grid_layout(slots, window)
    pending = deque(range(slots))
    max_attempts = ATTEMPTS_PER_POINT * count
    attempts = 0
    rejected = 0

    while pending and attempts < max_attempts:
        slot = pending.popleft()
        attempts += 1
        candidate = _candidate(rng, slot, randomness, window, cols, cell_w, cell_h)
        if area.contains(candidate) and region.contains(candidate):
            points.append(candidate)
        else:
            rejected += 1
            pending.append(slot)

    if pending:
        logger.info("Sampling attempts exhausted", requested=count,
                    sampled=len(points), attempts=attempts)

    logger.debug("Points sampled", requested=count, sampled=len(points),
                 rejected=rejected, seed=seed, randomness=randomness)

    return np.array(points, dtype=float).reshape(-1, 2)


def sample(config: GenerationConfig, region: Optional[BoundaryRegion] = None) -> np.ndarray:
    """
    Sample the point set described by ``config``.

    Args:
        config: Generation parameters
        region: Already resolved boundary, resolved from ``config`` if None

    Returns:
        (k, 2) array of points
    """
    if region is None:
        region = resolve_boundary(config)
    return sample_points(config.point_count, config.seed, config.clip_rect,
                         region, config.randomness, config.margin)
