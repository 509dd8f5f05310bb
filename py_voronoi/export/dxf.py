"""
DXF serialization of export primitives.

Only LINE and POINT entities are written, one layer per primitive layer
name. Coordinates are written as given; the caller decides the units
through the scale factor and flags millimetres via ``units_mm``.
"""

import io
from pathlib import Path
from typing import Iterable, Optional, Union

import ezdxf
import structlog
from ezdxf.enums import InsertUnits

from ..config import settings
from ..core.vector_export import Dot, ExportPrimitive, Line

logger = structlog.get_logger()

# ACI colours per layer, everything else stays white/black
LAYER_COLORS = {
    "VORONOI": 5,
    "DELAUNAY": 1,
    "BOUNDARY": 3,
    "POINTS": 7,
}


def build_dxf_document(primitives: Iterable[ExportPrimitive], units_mm: bool = False,
                       version: Optional[str] = None):
    """
    Build an in-memory DXF document from primitives.

    Args:
        primitives: Line and Dot primitives
        units_mm: Mark the drawing as millimetres ($INSUNITS)
        version: DXF release, defaults to ``settings.dxf_version``

    Returns:
        ezdxf Drawing
    """
    primitives = list(primitives)
    if not primitives:
        raise ValueError("Nothing to export: no primitives")

    doc = ezdxf.new(version or settings.dxf_version)
    doc.units = InsertUnits.Millimeters if units_mm else InsertUnits.Unitless
    msp = doc.modelspace()

    counts = {"lines": 0, "points": 0}
    for primitive in primitives:
        if not isinstance(primitive, (Line, Dot)):
            raise TypeError(f"Unsupported export primitive: {type(primitive).__name__}")

        layer = settings.dxf_layer_prefix + primitive.layer
        if layer not in doc.layers:
            doc.layers.add(layer, color=LAYER_COLORS.get(primitive.layer, 7))

        if isinstance(primitive, Line):
            msp.add_line((primitive.x1, primitive.y1), (primitive.x2, primitive.y2),
                         dxfattribs={"layer": layer})
            counts["lines"] += 1
        else:
            msp.add_point((primitive.x, primitive.y), dxfattribs={"layer": layer})
            counts["points"] += 1

    logger.debug("DXF document built", **counts, units_mm=units_mm)
    return doc


def to_dxf_string(primitives: Iterable[ExportPrimitive], units_mm: bool = False,
                  version: Optional[str] = None) -> str:
    """Serialize primitives to DXF text."""
    doc = build_dxf_document(primitives, units_mm, version)
    stream = io.StringIO()
    doc.write(stream)
    return stream.getvalue()


def write_dxf(primitives: Iterable[ExportPrimitive], path: Union[str, Path],
              units_mm: bool = False, version: Optional[str] = None) -> Path:
    """
    Write primitives to a DXF file.

    Returns:
        Path of the written file
    """
    path = Path(path)
    doc = build_dxf_document(primitives, units_mm, version)
    doc.saveas(path)
    logger.info("DXF written", path=str(path))
    return path
