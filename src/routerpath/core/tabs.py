"""Tab (bridge) geometry for straight segments and circles.

A tab is a short stretch of the cut where the bit climbs to a shallower Z so
the piece stays attached to the stock. This module only computes *where* the
tabs are; the cutter decides at which passes they are used.

Key functions:
- tab_points_for_segment: Split a segment around a centered tab
- tab_arc_for_circle: Arc endpoints around the tabs of a circle
"""

import logging
import math
from dataclasses import dataclass

from routerpath.config import TabProperties
from routerpath.core.geometry import rotate_2d
from routerpath.domain import Vector
from routerpath.exceptions import InvalidGeometryError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CircleTabs:
    """Tab layout on a circle.

    Starting from the 0 degree point of the circle the cut goes:
    arc to ``endpoints[0]`` (cut), arc to ``endpoints[1]`` (tab), arc to
    ``endpoints[2]`` (cut), then back to the start (tab).

    Attributes:
        start: The 0 degree point of the circle (Z = 0)
        tab_angle: Angular span of one tab in degrees
        endpoints: The three intermediate arc endpoints, empty when tabs are
            disabled for this circle
    """

    start: Vector
    tab_angle: float
    endpoints: tuple[Vector, ...] = ()

    @property
    def is_active(self) -> bool:
        return len(self.endpoints) == 3


def tab_points_for_segment(start: Vector, end: Vector, tabs: TabProperties) -> tuple[Vector, ...]:
    """Return the 2D points to follow when cutting a segment.

    The tab is centered on the segment. When the tabs are not used or the
    segment is not longer than the tab, no tab is placed.

    Args:
        start: Start of the segment (considered 2D)
        end: End of the segment (considered 2D)
        tabs: Tab properties

    Returns:
        ``(start, end)`` without tab, or ``(start, tab_start, tab_end, end)``
        where the tab lies between the two middle points. All points have
        Z = 0.

    Examples:
        >>> tabs = TabProperties(width=1.0, height=0.1)
        >>> tab_points_for_segment(Vector(0, 0), Vector(4, 0), tabs)
        # (0, 0), (1.5, 0), (2.5, 0), (4, 0)
    """
    start_2d = start.to_2d()
    end_2d = end.to_2d()

    if not tabs.is_active:
        return (start_2d, end_2d)

    segment = Vector.from_points(start_2d, end_2d)
    if segment.length_squared() <= tabs.width * tabs.width:
        return (start_2d, end_2d)

    direction = segment.normalized()
    distance_to_tab = (segment.length() - tabs.width) / 2
    tab_start = start_2d + direction * distance_to_tab
    tab_end = tab_start + direction * tabs.width

    return (start_2d, tab_start, tab_end, end_2d)


def tab_angle_for_circle(radius: float, width: float) -> float:
    """Return the angle in degrees covered by an arc of length ``width``."""
    return (180.0 * width) / (math.pi * radius)


def tab_arc_for_circle(center: Vector, radius: float, tabs: TabProperties) -> CircleTabs:
    """Compute the arc endpoints around the two tabs of a circle.

    The tab width is converted into an angle using the arc length. When that
    angle reaches ``TabProperties.MAX_ANGLE`` the tabs would eat too much of
    the circle and are disabled for it (a warning is logged).

    Args:
        center: Circle center (considered 2D)
        radius: Circle radius
        tabs: Tab properties

    Returns:
        The tab layout; ``is_active`` is False when no tab is placed

    Raises:
        InvalidGeometryError: If the radius is not positive
    """
    if radius <= 0:
        raise InvalidGeometryError(f"Circle radius must be positive, got {radius}")

    center_2d = center.to_2d()
    start = Vector(center_2d.x + radius, center_2d.y, 0.0)

    if not tabs.is_active:
        return CircleTabs(start=start, tab_angle=0.0)

    tab_angle = tab_angle_for_circle(radius, tabs.width)
    if tab_angle >= TabProperties.MAX_ANGLE:
        logger.warning(
            "Tabs disabled on circle: tab angle %.2f >= %.1f degrees (radius=%.4f, width=%.4f)",
            tab_angle, TabProperties.MAX_ANGLE, radius, tabs.width,
        )
        return CircleTabs(start=start, tab_angle=tab_angle)

    cut_angle = 180.0 - tab_angle
    first = rotate_2d(start, center_2d, cut_angle)
    second = rotate_2d(first, center_2d, tab_angle)
    third = rotate_2d(second, center_2d, cut_angle)

    return CircleTabs(start=start, tab_angle=tab_angle, endpoints=(first, second, third))
