"""Core toolpath algorithms for routerpath.

This module contains the core algorithms for:

- Vector geometry (rotation, barycenter, orientation, convexity)
- Tab placement on segments and circles
- Polygon decomposition (triangulation, convex cell merging)
- Pocketing (offset spiral, circle pocketing)
- Contour cutting with depth passes and tabs

All planners are:
- Stateless between calls
- Deterministic (same input, same toolpath)
- Raising typed exceptions from routerpath.exceptions

Key functions:
- rotate_2d: Rotate and scale a point around a center
- barycenter_2d: Average of a point set
- is_convex_polygon: Convexity test
- is_clockwise_polygon: Orientation test
- tab_points_for_segment: Tab bridge points on a segment
- tab_arc_for_circle: Tab arc endpoints on a circle
- depth_passes: Z height of every depth pass

Key classes:
- PolygonDecomposer: Splits simple polygons into convex cells
- OffsetSpiralPlanner: Pockets one convex cell
- ContourCutter: Cuts and pockets paths, polygons and circles
- JobProcessor: Runs every operation of a job file
"""

from routerpath.core.cutter import ContourCutter
from routerpath.core.decomposer import PolygonDecomposer, triangulate_indices
from routerpath.core.geometry import (
    INCH_TO_MILLIMETER,
    MILLIMETER_TO_INCH,
    angle_sign,
    barycenter_2d,
    clockwise,
    inch_to_millimeter,
    is_clockwise_polygon,
    is_convex_polygon,
    millimeter_to_inch,
    rotate_2d,
)
from routerpath.core.passes import depth_passes
from routerpath.core.processor import JobProcessor, OperationResult, process_operation
from routerpath.core.spiral import OffsetSpiralPlanner
from routerpath.core.tabs import (
    CircleTabs,
    tab_angle_for_circle,
    tab_arc_for_circle,
    tab_points_for_segment,
)

__all__ = [
    # Constants
    "INCH_TO_MILLIMETER",
    "MILLIMETER_TO_INCH",
    # Planner classes
    "CircleTabs",
    "ContourCutter",
    "OffsetSpiralPlanner",
    "PolygonDecomposer",
    # Processor classes
    "JobProcessor",
    "OperationResult",
    # Geometry functions
    "angle_sign",
    "barycenter_2d",
    "clockwise",
    "depth_passes",
    "inch_to_millimeter",
    "is_clockwise_polygon",
    "is_convex_polygon",
    "millimeter_to_inch",
    "process_operation",
    "rotate_2d",
    "tab_angle_for_circle",
    "tab_arc_for_circle",
    "tab_points_for_segment",
    "triangulate_indices",
]
