"""Inside-out offset spiral for pocketing convex cells.

Every vertex of the cell is moved toward the barycenter in equal steps. The
bit starts on the innermost (collapsed) ring and cuts each larger ring in turn
until the cell boundary is reached, so successive rings are never more than
the offset distance apart.
"""

import logging
import math

from routerpath.config import CutProperties
from routerpath.core.geometry import PolygonLike, barycenter_2d
from routerpath.core.passes import depth_passes
from routerpath.domain import Toolpath, Vector, Waypoint
from routerpath.exceptions import InvalidConfigurationError, InvalidGeometryError

logger = logging.getLogger(__name__)


class OffsetSpiralPlanner:
    """Plans the pocketing passes of one convex cell.

    Example:
        planner = OffsetSpiralPlanner(CutProperties(bit_diameter=0.25, ...))
        toolpath = planner.pocket_convex_cell(cell, depth=0.5, safe_z=1.0)
    """

    def __init__(self, cut: CutProperties) -> None:
        """Initialize the planner.

        Args:
            cut: Cut properties (offset distance, pass depth)
        """
        self.cut = cut

    def ring_count(self, cell: PolygonLike) -> int:
        """Return the number of offset steps between the boundary and the center.

        Raises:
            InvalidGeometryError: If the cell has fewer than 3 vertices or is
                collapsed to a point
            InvalidConfigurationError: If the offset distance is 0
        """
        return self._steps(cell)[2]

    def pocket_convex_cell(
        self, cell: PolygonLike, depth: float, safe_z: float | None = None
    ) -> Toolpath:
        """Generate the pocketing toolpath of a convex cell.

        For every depth pass, the rings are cut from the innermost (step
        ``n = steps``) to the boundary (``n = 0``); each ring is the cell with
        every vertex moved by ``n`` steps toward the barycenter, closed back to
        its first vertex. Non-convex input gives rings crossing the boundary.

        Args:
            cell: Vertices of the convex cell (considered 2D)
            depth: Depth of the pocket (positive)
            safe_z: Height for the initial jog and the final retract. Without
                it the jog happens at Z = 0 and there is no retract.

        Returns:
            The pocketing toolpath

        Raises:
            InvalidGeometryError: If the cell has fewer than 3 vertices or is
                collapsed to a point
            InvalidConfigurationError: If the offset distance is 0 or the pass
                depth is not positive
        """
        vertices, deltas, steps = self._steps(cell)
        passes = depth_passes(depth, self.cut.pass_depth)

        closed_vertices = [*vertices, vertices[0]]
        closed_deltas = [*deltas, deltas[0]]

        innermost = vertices[0] + deltas[0] * steps
        waypoints = [Waypoint.rapid(innermost.with_z(safe_z if safe_z is not None else 0.0))]

        for z in passes:
            for n in range(steps, -1, -1):
                for vertex, delta in zip(closed_vertices, closed_deltas):
                    waypoints.append(Waypoint.linear((vertex + delta * n).with_z(z)))

        if safe_z is not None:
            waypoints.append(Waypoint.linear(waypoints[-1].position.with_z(safe_z)))

        logger.debug(
            "Pocketed convex cell: vertices=%d, rings=%d, passes=%d, waypoints=%d",
            len(vertices), steps + 1, len(passes), len(waypoints),
        )
        return Toolpath.from_waypoints(waypoints)

    def _steps(self, cell: PolygonLike) -> tuple[list[Vector], list[Vector], int]:
        """Return the 2D vertices, the per-vertex step vectors and the step count."""
        vertices = [v.to_2d() for v in cell]
        if len(vertices) < 3:
            raise InvalidGeometryError(
                f"Pocketing needs at least 3 vertices, got {len(vertices)}"
            )

        offset = self.cut.offset_distance
        if offset == 0:
            raise InvalidConfigurationError(
                "Offset distance is 0 (bit diameter * stepover), cannot pocket"
            )

        center = barycenter_2d(vertices)
        vectors = [Vector.from_points(v, center) for v in vertices]
        longest = max(v.length() for v in vectors)
        if longest == 0:
            raise InvalidGeometryError("Cell is collapsed to a single point")

        steps = math.ceil(longest / offset)
        return vertices, [v / steps for v in vectors], steps
