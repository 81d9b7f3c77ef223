"""Contour cutting and pocketing of paths, polygons and circles.

Every operation follows the same sequence:
1. Jog (rapid) to the first point at the safe height
2. For each depth pass: plunge, then cut the perimeter, leaving tabs on the
   passes deeper than the tab height
3. Retract to the safe height

Key classes:
- ContourCutter: Builds the toolpath of each kind of operation
"""

import logging
from collections.abc import Sequence
from itertools import pairwise

from routerpath.config import CutProperties, GeometryConfig, TabProperties
from routerpath.core.decomposer import PolygonDecomposer
from routerpath.core.geometry import PolygonLike
from routerpath.core.passes import depth_passes
from routerpath.core.spiral import OffsetSpiralPlanner
from routerpath.core.tabs import tab_arc_for_circle, tab_points_for_segment
from routerpath.domain import Toolpath, Vector, Waypoint
from routerpath.exceptions import InvalidConfigurationError, InvalidGeometryError

logger = logging.getLogger(__name__)

# Edge split by tab_points_for_segment: 2 points (no tab) or 4 points (tab
# between the two middle points)
Edge = tuple[Vector, ...]


class ContourCutter:
    """Generates cutting and pocketing toolpaths.

    Example:
        cutter = ContourCutter(
            CutProperties(bit_diameter=0.125, pass_depth=0.125, stepover=0.5, feedrate=60),
            TabProperties(width=0.25, height=0.0625),
        )
        toolpath = cutter.cut_polygon(square, depth=0.5, safe_z=1.0)
    """

    def __init__(
        self,
        cut: CutProperties,
        tabs: TabProperties | None = None,
        geometry: GeometryConfig | None = None,
    ) -> None:
        """Initialize the cutter.

        Args:
            cut: Cut properties (bit, pass depth, stepover, feed rate)
            tabs: Tab properties (no tabs if None)
            geometry: Geometry tolerances used by the decomposition
        """
        self.cut = cut
        self.tabs = tabs or TabProperties()
        self.decomposer = PolygonDecomposer(geometry)
        self.spiral = OffsetSpiralPlanner(cut)

    def cut_path(
        self, path: Sequence[Vector], depth: float, safe_z: float | None = None
    ) -> Toolpath:
        """Cut along an open path, leaving tabs on each long enough segment.

        The path is followed forward on the first pass, backward on the
        second, and so on, so each pass starts where the previous one ended.

        Args:
            path: Points of the path (considered 2D)
            depth: Depth of the cut (positive)
            safe_z: Height for the initial jog and the final retract

        Returns:
            The cutting toolpath

        Raises:
            InvalidGeometryError: If the path has fewer than 2 points
            InvalidConfigurationError: If the pass depth is not positive
        """
        points = [p.to_2d() for p in path]
        if len(points) < 2:
            raise InvalidGeometryError(f"A path needs at least 2 points, got {len(points)}")

        passes = depth_passes(depth, self.cut.pass_depth)
        tab_z = self.tabs.height - depth
        forward = [tab_points_for_segment(a, b, self.tabs) for a, b in pairwise(points)]
        backward = [tuple(reversed(edge)) for edge in reversed(forward)]

        waypoints = [self._jog(points[0], safe_z)]
        for index, z in enumerate(passes):
            edges = forward if index % 2 == 0 else backward
            waypoints.extend(self._edges_pass(edges, z, tab_z))
        waypoints.extend(self._retract(waypoints[-1].position, safe_z))

        self._log_cut("path", len(points), passes, tab_z)
        return Toolpath.from_waypoints(waypoints)

    def cut_polygon(
        self, polygon: PolygonLike, depth: float, safe_z: float | None = None
    ) -> Toolpath:
        """Cut along a closed polygon, leaving tabs on each long enough edge.

        Every pass starts at the first vertex and ends back on it.

        Args:
            polygon: Vertices of the polygon (considered 2D)
            depth: Depth of the cut (positive)
            safe_z: Height for the initial jog and the final retract

        Returns:
            The cutting toolpath

        Raises:
            InvalidGeometryError: If the polygon has fewer than 3 vertices
            InvalidConfigurationError: If the pass depth is not positive
        """
        vertices = [v.to_2d() for v in polygon]
        if len(vertices) < 3:
            raise InvalidGeometryError(
                f"A polygon needs at least 3 vertices, got {len(vertices)}"
            )

        passes = depth_passes(depth, self.cut.pass_depth)
        tab_z = self.tabs.height - depth
        closed = [*vertices, vertices[0]]
        edges = [tab_points_for_segment(a, b, self.tabs) for a, b in pairwise(closed)]

        waypoints = [self._jog(vertices[0], safe_z)]
        for z in passes:
            waypoints.extend(self._edges_pass(edges, z, tab_z))
        waypoints.extend(self._retract(waypoints[-1].position, safe_z))

        self._log_cut("polygon", len(vertices), passes, tab_z)
        return Toolpath.from_waypoints(waypoints)

    def cut_circle(
        self, center: Vector, radius: float, depth: float, safe_z: float | None = None
    ) -> Toolpath:
        """Cut along a circle with counter-clockwise arcs.

        The cut starts at the 0 degree point. On tabbed passes the bit climbs
        to the tab height on two opposite arcs of the circle.

        Args:
            center: Circle center (considered 2D)
            radius: Circle radius
            depth: Depth of the cut (positive)
            safe_z: Height for the initial jog and the final retract

        Returns:
            The cutting toolpath

        Raises:
            InvalidGeometryError: If the radius is not positive
            InvalidConfigurationError: If the pass depth is not positive
        """
        if radius <= 0:
            raise InvalidGeometryError(f"Circle radius must be positive, got {radius}")

        passes = depth_passes(depth, self.cut.pass_depth)
        tab_z = self.tabs.height - depth
        layout = tab_arc_for_circle(center, radius, self.tabs)
        start = layout.start
        center_2d = center.to_2d()

        waypoints = [self._jog(start, safe_z)]
        for z in passes:
            waypoints.append(Waypoint.linear(start.with_z(z)))

            if layout.is_active and z < tab_z:
                first, second, third = layout.endpoints
                waypoints.extend([
                    Waypoint.arc(first.with_z(z), clockwise=False, radius=radius),
                    Waypoint.linear(first.with_z(tab_z)),
                    Waypoint.arc(second.with_z(tab_z), clockwise=False, radius=radius),
                    Waypoint.linear(second.with_z(z)),
                    Waypoint.arc(third.with_z(z), clockwise=False, radius=radius),
                    Waypoint.linear(third.with_z(tab_z)),
                    Waypoint.arc(start.with_z(tab_z), clockwise=False, radius=radius),
                ])
            else:
                waypoints.append(
                    Waypoint.arc(start.with_z(z), clockwise=False, center=center_2d.with_z(z))
                )

        waypoints.extend(self._retract(waypoints[-1].position, safe_z))

        logger.debug(
            "Cut circle: radius=%.4f, passes=%d, tabs=%s",
            radius, len(passes), layout.is_active,
        )
        return Toolpath.from_waypoints(waypoints)

    def pocket_convex_cell(
        self, cell: PolygonLike, depth: float, safe_z: float | None = None
    ) -> Toolpath:
        """Pocket a convex cell with the offset spiral (see OffsetSpiralPlanner)."""
        return self.spiral.pocket_convex_cell(cell, depth, safe_z)

    def pocket_simple_polygon(
        self, polygon: PolygonLike, depth: float, safe_z: float | None = None
    ) -> Toolpath:
        """Pocket a simple polygon.

        The polygon is split into convex cells which are pocketed one after the
        other. If one cell fails nothing is returned.

        Args:
            polygon: Vertices of the polygon (considered 2D, not
                self-intersecting)
            depth: Depth of the pocket (positive)
            safe_z: Height used to jog to and retract from each cell

        Returns:
            The concatenated pocketing toolpaths

        Raises:
            InvalidGeometryError: If the polygon has fewer than 3 vertices
            InvalidConfigurationError: If the offset distance is 0
            TriangulationError: If the polygon cannot be triangulated
        """
        vertices = [v.to_2d() for v in polygon]
        if len(vertices) < 3:
            raise InvalidGeometryError(
                f"A polygon needs at least 3 vertices, got {len(vertices)}"
            )

        cells = self.decomposer.decompose(vertices)
        toolpath = Toolpath()
        for cell in cells:
            toolpath = toolpath + self.spiral.pocket_convex_cell(cell, depth, safe_z)

        logger.debug("Pocketed simple polygon: vertices=%d, cells=%d", len(vertices), len(cells))
        return toolpath

    def pocket_circle(
        self, center: Vector, radius: float, depth: float, safe_z: float | None = None
    ) -> Toolpath:
        """Pocket a circle by cutting clockwise circles growing from the center.

        The radius grows by the offset distance until it reaches ``radius``.
        Each pass starts again from the center.

        Args:
            center: Circle center (considered 2D)
            radius: Largest radius followed by the bit center
            depth: Depth of the pocket (positive)
            safe_z: Height for the initial jog and the final retract

        Returns:
            The pocketing toolpath

        Raises:
            InvalidGeometryError: If the radius is not positive
            InvalidConfigurationError: If the bit is wider than the circle or
                the offset distance is 0
        """
        if radius <= 0:
            raise InvalidGeometryError(f"Circle radius must be positive, got {radius}")
        if self.cut.bit_diameter > radius * 2:
            raise InvalidConfigurationError(
                f"Bit diameter {self.cut.bit_diameter} is larger than the circle "
                f"diameter {radius * 2}"
            )
        offset = self.cut.offset_distance
        if offset == 0:
            raise InvalidConfigurationError(
                "Offset distance is 0 (bit diameter * stepover), cannot pocket"
            )

        passes = depth_passes(depth, self.cut.pass_depth)
        center_2d = center.to_2d()

        waypoints = [self._jog(center_2d, safe_z)]
        previous_z: float | None = None
        for z in passes:
            if previous_z is not None:
                waypoints.append(Waypoint.linear(center_2d.with_z(previous_z)))
            waypoints.append(Waypoint.linear(center_2d.with_z(z)))

            current_radius = 0.0
            while current_radius < radius:
                current_radius = min(current_radius + offset, radius)
                point = Vector(center_2d.x + current_radius, center_2d.y, z)
                waypoints.append(Waypoint.linear(point))
                waypoints.append(Waypoint.arc(point, clockwise=True, center=center_2d.with_z(z)))
            previous_z = z

        waypoints.extend(self._retract(waypoints[-1].position, safe_z))

        logger.debug("Pocketed circle: radius=%.4f, passes=%d", radius, len(passes))
        return Toolpath.from_waypoints(waypoints)

    def _uses_tabs(self, z: float, tab_z: float) -> bool:
        return self.tabs.is_active and z < tab_z

    def _edges_pass(self, edges: Sequence[Edge], z: float, tab_z: float) -> list[Waypoint]:
        """Return the waypoints of one pass over consecutive edges.

        The first point is only emitted once; each edge then contributes its
        remaining points. On tabbed passes the bit climbs to ``tab_z`` between
        the two middle points of a 4-point edge.
        """
        waypoints = [Waypoint.linear(edges[0][0].with_z(z))]
        use_tabs = self._uses_tabs(z, tab_z)

        for edge in edges:
            if use_tabs and len(edge) == 4:
                _, tab_start, tab_end, end = edge
                waypoints.extend([
                    Waypoint.linear(tab_start.with_z(z)),
                    Waypoint.linear(tab_start.with_z(tab_z)),
                    Waypoint.linear(tab_end.with_z(tab_z)),
                    Waypoint.linear(tab_end.with_z(z)),
                    Waypoint.linear(end.with_z(z)),
                ])
            else:
                waypoints.append(Waypoint.linear(edge[-1].with_z(z)))

        return waypoints

    @staticmethod
    def _jog(point: Vector, safe_z: float | None) -> Waypoint:
        return Waypoint.rapid(point.with_z(safe_z if safe_z is not None else 0.0))

    @staticmethod
    def _retract(position: Vector, safe_z: float | None) -> list[Waypoint]:
        if safe_z is None:
            return []
        return [Waypoint.linear(position.with_z(safe_z))]

    def _log_cut(self, shape: str, count: int, passes: list[float], tab_z: float) -> None:
        tabbed = sum(1 for z in passes if self._uses_tabs(z, tab_z))
        logger.debug(
            "Cut %s: points=%d, passes=%d, tabbed_passes=%d",
            shape, count, len(passes), tabbed,
        )
