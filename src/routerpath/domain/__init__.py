"""Domain models for routerpath.

This module contains the core domain models representing points, polygons,
toolpaths and jobs. All geometric models are immutable value objects built for
one planning call.

Key classes:
- Vector: A 3D vector, also used as a point
- Polygon: A closed shape (also triangles and convex cells)
- Waypoint: A position and the motion used to reach it
- Toolpath: The ordered waypoints of one operation
- Operation: One cutting operation of a job
- Job: Ordered operations
"""

from routerpath.domain.job import Job, Operation, OperationKind
from routerpath.domain.polygon import Polygon
from routerpath.domain.toolpath import MotionType, Toolpath, Waypoint
from routerpath.domain.vector import FLOAT_PRECISION, Vector, cross, nearly_equal, scalar

__all__: list[str] = [
    # Constants
    "FLOAT_PRECISION",
    # Enums
    "MotionType",
    "OperationKind",
    # Core types
    "Vector",
    "Polygon",
    "Waypoint",
    "Toolpath",
    "Operation",
    "Job",
    # Vector products
    "cross",
    "nearly_equal",
    "scalar",
]
