"""
End-to-end pattern generation.

generate_pattern() runs sampling, tessellation and cell processing for one
GenerationConfig; build_export() turns the result into scaled primitives.
Each call is an independent unit of work with no shared state.
"""

from dataclasses import dataclass
from typing import List, Optional

import numpy as np
import structlog
from pydantic import BaseModel, ConfigDict, Field

from .boundary import BoundaryRegion
from .cell_polygon import process_cell
from .geometry import as_points
from .point_sampler import GenerationConfig, resolve_boundary, sample
from .tessellation import Tessellation, tessellate
from .vector_export import ExportPrimitive, ExportSelection, compute_scale_factor, export_primitives

logger = structlog.get_logger()


class ExportOptions(BaseModel):
    """Which layers to export and at what physical size."""

    model_config = ConfigDict(frozen=True)

    include_voronoi: bool = Field(True, description="Export Voronoi cell edges")
    include_delaunay: bool = Field(False, description="Export Delaunay triangle edges")
    include_points: bool = Field(False, description="Export sample points")
    include_boundary: bool = Field(False, description="Export the boundary outline")
    use_processed_cells: bool = Field(True, description="Export inset/rounded cells instead of raw cells")
    target_diameter: Optional[float] = Field(
        None, gt=0, allow_inf_nan=False,
        description="Physical boundary diameter in mm; output stays in canvas units if unset",
    )
    boundary_resolution: int = Field(128, ge=3, description="Vertices used to polygonize circles")


@dataclass
class PatternResult:
    """Everything produced by one generation pass."""

    config: GenerationConfig
    boundary: BoundaryRegion
    points: np.ndarray
    tessellation: Tessellation
    processed_cells: List[np.ndarray]

    @property
    def diameter(self) -> float:
        """Boundary diameter, or the longer clip rectangle side without a boundary."""
        diameter = self.boundary.diameter()
        if diameter is None:
            rect = self.config.clip_rect
            return max(rect.width, rect.height)
        return diameter


def process_cells(cells: List[np.ndarray], config: GenerationConfig) -> List[np.ndarray]:
    """Apply the configured inset and rounding to every cell."""
    radius = config.corner_radius if config.rounded_corners else None
    return [
        process_cell(cell, config.inset, radius) if len(cell) >= 3 else cell.copy()
        for cell in cells
    ]


def generate_pattern(config: GenerationConfig, extra_points=None) -> PatternResult:
    """
    Generate a complete pattern.

    Args:
        config: Generation parameters
        extra_points: Manually placed points appended after the sampled ones

    Returns:
        PatternResult with points, tessellation and processed cells
    """
    logger.info("Generating pattern", point_count=config.point_count, seed=config.seed,
                randomness=config.randomness, boundary=type(config.boundary).__name__)

    boundary = resolve_boundary(config)
    points = sample(config, boundary)

    if extra_points is not None:
        extra = as_points(extra_points)
        if len(extra):
            points = np.vstack([points, extra])
            logger.info("Manual points added", count=len(extra))

    if len(points) == 0:
        raise ValueError("No points could be placed inside the boundary")

    tessellation = tessellate(points, config.clip_rect)
    processed = process_cells(tessellation.cells, config)

    logger.info("Pattern generated", points=len(points),
                triangles=len(tessellation.triangles))

    return PatternResult(
        config=config,
        boundary=boundary,
        points=points,
        tessellation=tessellation,
        processed_cells=processed,
    )


def build_export(result: PatternResult, options: Optional[ExportOptions] = None) -> List[ExportPrimitive]:
    """
    Encode a generated pattern for export.

    Args:
        result: Output of generate_pattern()
        options: Layer selection and physical sizing

    Returns:
        Scaled primitive list
    """
    options = options or ExportOptions()

    if not (options.include_voronoi or options.include_delaunay
            or options.include_points or options.include_boundary):
        raise ValueError("Nothing to export: no layer selected")

    cells = None
    if options.include_voronoi:
        cells = result.processed_cells if options.use_processed_cells else result.tessellation.cells

    boundary = None
    if options.include_boundary:
        boundary = result.boundary.outline(options.boundary_resolution)

    selection = ExportSelection(
        points=result.points,
        triangles=result.tessellation.triangles if options.include_delaunay else None,
        cells=cells,
        boundary=boundary,
        include_points=options.include_points,
    )

    scale = compute_scale_factor(options.target_diameter, result.diameter)
    primitives = export_primitives(selection, scale)

    logger.info("Export built", primitives=len(primitives), scale=scale)
    return primitives
