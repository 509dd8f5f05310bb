"""
Core pattern generation functionality.
"""

from .seeded_rng import SeededRNG
from .geometry import ClipRect
from .boundary import BoundaryRegion, NoBoundary, Circle, JaggedPolygon, Polygon, contains
from .jagged_boundary import build_jagged_boundary
from .point_sampler import GenerationConfig, resolve_boundary, sample, sample_points
from .tessellation import Tessellation, tessellate
from .cell_polygon import inset_polygon, round_corners, process_cell
from .vector_export import (
    Line, Dot, ExportPrimitive, ExportSelection, compute_scale_factor, export_primitives
)
from .pipeline import ExportOptions, PatternResult, generate_pattern, build_export

__all__ = ['SeededRNG', 'ClipRect',
           'BoundaryRegion', 'NoBoundary', 'Circle', 'JaggedPolygon', 'Polygon', 'contains',
           'build_jagged_boundary',
           'GenerationConfig', 'resolve_boundary', 'sample', 'sample_points',
           'Tessellation', 'tessellate',
           'inset_polygon', 'round_corners', 'process_cell',
           'Line', 'Dot', 'ExportPrimitive', 'ExportSelection', 'compute_scale_factor',
           'export_primitives',
           'ExportOptions', 'PatternResult', 'generate_pattern', 'build_export']
