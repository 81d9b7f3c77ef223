"""Geometric operations on vectors and polygons.

This module provides the math shared by the planners:
- 2D rotation and scale around a center
- Barycenter of a point set
- Angle sign, convexity and orientation predicates
- Inch/millimeter conversion

All functions are pure and stateless. Polygons may be given as a Polygon or as
any sequence of vectors; they are considered 2D (Z is ignored).
"""

import math
from collections.abc import Sequence

from routerpath.domain import Polygon, Vector, cross
from routerpath.exceptions import EmptyInputError, InvalidGeometryError

INCH_TO_MILLIMETER = 25.4
MILLIMETER_TO_INCH = 0.03937008

PolygonLike = Polygon | Sequence[Vector]


def inch_to_millimeter(value: float) -> float:
    """Convert a length in inches to millimeters."""
    return value * INCH_TO_MILLIMETER


def millimeter_to_inch(value: float) -> float:
    """Convert a length in millimeters to inches."""
    return value * MILLIMETER_TO_INCH


def rotate_2d(point: Vector, center: Vector, angle: float, scale: float = 1.0) -> Vector:
    """Rotate and scale a point around a center in the XY plane.

    The offset from the center is rotated by ``angle`` and multiplied by
    ``scale``, then added back to the center. The Z coordinate of the point is
    kept.

    Args:
        point: The point to transform (not modified)
        center: Center of the rotation and scale
        angle: Angle in degrees, counter-clockwise
        scale: Scale factor

    Returns:
        The transformed point

    Examples:
        >>> rotate_2d(Vector(1.0, 0.0), Vector(0.0, 0.0), 90.0)  # ~ (0, 1)
    """
    angle_rad = math.radians(angle)
    cos_angle = math.cos(angle_rad)
    sin_angle = math.sin(angle_rad)
    offset = Vector.from_points(center, point)
    return Vector(
        center.x + scale * (offset.x * cos_angle - offset.y * sin_angle),
        center.y + scale * (offset.x * sin_angle + offset.y * cos_angle),
        point.z,
    )


def barycenter_2d(points: Sequence[Vector] | Polygon) -> Vector:
    """Return the barycenter of a point set, every point having a weight of 1.

    Args:
        points: Points to average (considered 2D)

    Returns:
        The barycenter at Z = 0

    Raises:
        EmptyInputError: If there are no points
    """
    count = len(points)
    if count == 0:
        raise EmptyInputError("barycenter_2d")

    sum_x = sum(p.x for p in points)
    sum_y = sum(p.y for p in points)
    return Vector(sum_x / count, sum_y / count, 0.0)


def angle_sign(center: Vector, point_a: Vector, point_b: Vector) -> bool:
    """Return the sign of the angle from ``center -> a`` to ``center -> b``.

    Args:
        center: Vertex of the angle
        point_a: End of the first side
        point_b: End of the second side

    Returns:
        True if the sign is positive or zero, False if negative
    """
    u = Vector.from_points(center, point_a)
    v = Vector.from_points(center, point_b)
    return cross(u, v).z >= 0


def is_convex_polygon(polygon: PolygonLike) -> bool:
    """Check if a polygon is convex.

    Compares the angle sign at every vertex with the sign at the first vertex.
    Assumes a simple (non self-intersecting) polygon. Collinear vertices count
    as a positive sign.

    Args:
        polygon: Vertices of the polygon

    Returns:
        True if the polygon is convex. False if not or if the polygon has fewer
        than three vertices.
    """
    points = list(polygon)
    n = len(points)
    if n <= 2:
        return False
    if n == 3:
        return True

    reference = angle_sign(points[0], points[n - 1], points[1])
    for i in range(1, n):
        sign = angle_sign(points[i], points[i - 1], points[(i + 1) % n])
        if sign != reference:
            return False

    return True


def is_clockwise_polygon(polygon: PolygonLike) -> bool:
    """Check if a polygon is clockwise (Y axis pointing down).

    Uses the shoelace formula: a positive or zero signed area means
    clockwise, so degenerate (collinear) polygons count as clockwise.

    Args:
        polygon: Vertices of the polygon

    Returns:
        True if the polygon is clockwise

    Raises:
        InvalidGeometryError: If the polygon has fewer than three vertices
    """
    points = list(polygon)
    if len(points) < 3:
        raise InvalidGeometryError(
            f"Orientation needs at least 3 vertices, got {len(points)}"
        )

    return Polygon(vertices=tuple(points)).signed_area() >= 0


def clockwise(polygon: PolygonLike) -> Polygon:
    """Return a clockwise copy of the polygon.

    Raises:
        InvalidGeometryError: If the polygon has fewer than three vertices
    """
    result = polygon if isinstance(polygon, Polygon) else Polygon(vertices=tuple(polygon))
    if is_clockwise_polygon(result):
        return result
    return result.reversed()
