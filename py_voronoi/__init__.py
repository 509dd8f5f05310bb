"""
py-voronoi: seeded Voronoi pattern generation for CAD/CAM line export.
"""

__version__ = "0.1.0"
