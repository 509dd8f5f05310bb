"""Jagged circular boundaries built from a seeded radial perturbation."""

import math
from typing import Tuple

import structlog

from .boundary import JaggedPolygon
from .geometry import require_finite
from .seeded_rng import SeededRNG

logger = structlog.get_logger()


def build_jagged_boundary(center: Tuple[float, float], radius: float, vertex_count: int,
                          jaggedness: float, seed: int) -> JaggedPolygon:
    """
    Build a radially perturbed ring approximating a circle.

    Vertex i sits at angle i * 2pi / N with radius
    ``radius + (sample - 0.5) * 2 * jaggedness * radius``, one RNG draw per
    vertex in increasing angle order. The same arguments always produce the
    same ring.

    Args:
        center: Circle center (x, y)
        radius: Base radius, > 0
        vertex_count: Number of ring vertices, >= 3
        jaggedness: Perturbation factor in [0, 1]
        seed: Integer seed for the perturbation stream

    Returns:
        JaggedPolygon with ``vertex_count`` vertices
    """
    require_finite("Jagged boundary parameter", center[0], center[1], radius, jaggedness)
    if radius <= 0:
        raise ValueError(f"Base radius must be positive, got {radius}")
    if int(vertex_count) != vertex_count or vertex_count < 3:
        raise ValueError(f"Vertex count must be an integer >= 3, got {vertex_count}")
    if not 0.0 <= jaggedness <= 1.0:
        raise ValueError(f"Jaggedness must be in [0, 1], got {jaggedness}")

    vertex_count = int(vertex_count)
    rng = SeededRNG(seed)
    step = 2 * math.pi / vertex_count
    cx, cy = float(center[0]), float(center[1])

    vertices = []
    for i in range(vertex_count):
        angle = i * step
        offset = (rng.next() - 0.5) * 2 * jaggedness * radius
        r = radius + offset
        vertices.append((cx + r * math.cos(angle), cy + r * math.sin(angle)))

    logger.debug("Jagged boundary built", vertices=vertex_count,
                 jaggedness=jaggedness, seed=seed)

    return JaggedPolygon(vertices=tuple(vertices), center=(cx, cy), base_radius=float(radius))
