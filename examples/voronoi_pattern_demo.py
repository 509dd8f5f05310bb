#!/usr/bin/env python3
"""
Demo script generating a few patterns and writing them to DXF.
"""

import sys
from pathlib import Path

from py_voronoi.core import (
    Circle, ClipRect, ExportOptions, GenerationConfig, Polygon, build_export, generate_pattern
)
from py_voronoi.export import write_dxf
from py_voronoi.log_config import configure_logging


def main():
    """Generate and export demo patterns."""
    configure_logging(level="WARNING")
    output_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("demo_output")
    output_dir.mkdir(parents=True, exist_ok=True)

    print("Voronoi Pattern Demo")
    print("=" * 40)

    rect = ClipRect(0, 0, 800, 600)
    patterns = {
        "open_grid": GenerationConfig(point_count=60, seed=1, randomness=0.0, clip_rect=rect),
        "jagged_disc": GenerationConfig(point_count=120, seed=2024, randomness=0.6,
                                        boundary=Circle((400, 300), 260), jaggedness=0.25,
                                        jagged_resolution=96, clip_rect=rect,
                                        inset=4.0, rounded_corners=True, corner_radius=6.0),
        "hexagon_panel": GenerationConfig(point_count=80, seed=7, randomness=1.0,
                                          boundary=Polygon(((200, 100), (600, 100), (750, 300),
                                                            (600, 500), (200, 500), (50, 300))),
                                          clip_rect=rect, inset=3.0),
    }

    for name, config in patterns.items():
        result = generate_pattern(config)
        options = ExportOptions(include_boundary=True, target_diameter=200.0)
        primitives = build_export(result, options)
        path = write_dxf(primitives, output_dir / f"{name}.dxf", units_mm=True)

        areas = result.tessellation.cell_areas()
        print(f"\n{name}:")
        print(f"  Points placed: {len(result.points)} / {config.point_count}")
        print(f"  Triangles: {len(result.tessellation.triangles)}")
        print(f"  Cell area range: {areas[areas > 0].min():.1f} - {areas.max():.1f}")
        print(f"  Primitives: {len(primitives)} -> {path}")

    print("\nDemo complete!")


if __name__ == "__main__":
    main()
