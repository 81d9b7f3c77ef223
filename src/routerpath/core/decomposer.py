"""Decomposition of simple polygons into convex cells.

The polygon is first triangulated by ear clipping (mapbox_earcut), then
adjacent triangles are merged as long as the union stays convex. The result is
a small, not necessarily minimal, set of convex cells covering the polygon.

All cells are normalized to clockwise order before being compared, so two
neighbor cells always list their shared edge in opposite directions. A
convex polygon comes back from ``decompose`` unchanged.
"""

import logging
from collections.abc import Sequence

import mapbox_earcut as earcut
import numpy as np

from routerpath.config import GeometryConfig
from routerpath.core.geometry import PolygonLike, clockwise, is_convex_polygon
from routerpath.domain import Polygon, Vector
from routerpath.exceptions import InvalidGeometryError, TriangulationError

logger = logging.getLogger(__name__)


def triangulate_indices(polygon: PolygonLike) -> np.ndarray:
    """Run ear clipping on a simple polygon.

    Args:
        polygon: Vertices of the polygon (considered 2D)

    Returns:
        ``(T, 3)`` array of vertex indices, one row per triangle
    """
    coords = np.asarray([(v.x, v.y) for v in polygon], dtype=np.float64)
    ring_ends = np.asarray([len(coords)], dtype=np.uint32)
    indices = earcut.triangulate_float64(coords, ring_ends)
    return np.asarray(indices, dtype=np.int64).reshape(-1, 3)


class PolygonDecomposer:
    """Splits simple polygons into convex cells.

    Example:
        decomposer = PolygonDecomposer()
        cells = decomposer.decompose(polygon)
    """

    def __init__(self, config: GeometryConfig | None = None) -> None:
        """Initialize the decomposer.

        Args:
            config: Geometry tolerances (vertex comparison precision)
        """
        self.config = config or GeometryConfig()

    def triangulate(self, polygon: PolygonLike) -> list[Polygon]:
        """Triangulate a simple polygon.

        Args:
            polygon: Vertices of the polygon. Self-intersecting input gives
                unspecified results.

        Returns:
            Clockwise triangles covering the polygon

        Raises:
            InvalidGeometryError: If the polygon has fewer than three vertices
            TriangulationError: If no triangle could be produced
        """
        vertices = [v.to_2d() for v in polygon]
        if len(vertices) < 3:
            raise InvalidGeometryError(
                f"Triangulation needs at least 3 vertices, got {len(vertices)}"
            )

        indices = triangulate_indices(vertices)
        if len(indices) == 0:
            raise TriangulationError(f"no triangle found for a polygon of {len(vertices)} vertices")

        triangles = [
            clockwise(Polygon(vertices=(vertices[a], vertices[b], vertices[c])))
            for a, b, c in indices.tolist()
        ]
        logger.debug("Triangulated polygon: vertices=%d, triangles=%d", len(vertices), len(triangles))
        return triangles

    def aggregate(self, cell_a: PolygonLike, cell_b: PolygonLike) -> Polygon | None:
        """Merge two convex cells sharing an edge.

        The cells are made clockwise; cell A lists the shared edge as
        ``v1 -> v2`` and cell B as ``v2 -> v1``. Cells listing a common edge in
        the same direction overlap and are not merged. Overlap is not checked
        otherwise.

        Args:
            cell_a: First cell
            cell_b: Second cell

        Returns:
            The clockwise merged cell, or None if the cells share no edge or if
            their union is not convex
        """
        a = clockwise(cell_a).vertices
        b = clockwise(cell_b).vertices

        shared = self._find_shared_edge(a, b)
        if shared is None:
            return None

        i, j = shared
        i_next = (i + 1) % len(a)

        # A backwards from v1 down to (excluded) v2, then B backwards from v2
        # down to (excluded) v1
        merged: list[Vector] = []
        k = i
        while k != i_next:
            merged.append(a[k])
            k = (k - 1) % len(a)
        k = (j - 1) % len(b)
        while k != j:
            merged.append(b[k])
            k = (k - 1) % len(b)

        result = clockwise(Polygon(vertices=tuple(merged)))
        return result if is_convex_polygon(result) else None

    def aggregate_all(self, triangles: Sequence[PolygonLike]) -> list[Polygon]:
        """Merge triangles into convex cells until no merge is possible.

        Pairs are scanned with the first index ascending and the second index
        ascending after it. On the first successful merge, the first cell is
        replaced by the merged cell, the second is removed and the scan starts
        over. Every merge removes one cell, so at most ``n - 1`` merges happen.

        Args:
            triangles: Triangles (or convex cells) to merge

        Returns:
            Clockwise convex cells covering the same area
        """
        cells = [clockwise(t) for t in triangles]
        merges = 0

        while True:
            found = self._first_merge(cells)
            if found is None:
                break
            i, j, merged = found
            cells = [*cells[:i], merged, *cells[i + 1 : j], *cells[j + 1 :]]
            merges += 1

        logger.debug("Aggregated triangles: input=%d, cells=%d, merges=%d", len(triangles), len(cells), merges)
        return cells

    def decompose(self, polygon: PolygonLike) -> list[Polygon]:
        """Triangulate a simple polygon and merge the triangles into convex cells.

        A polygon that merges back into a single cell is returned as given
        (in 2D), keeping its vertex order and start vertex.

        Raises:
            InvalidGeometryError: If the polygon has fewer than three vertices
            TriangulationError: If no triangle could be produced
        """
        vertices = [v.to_2d() for v in polygon]
        cells = self.aggregate_all(self.triangulate(vertices))
        if len(cells) == 1:
            return [Polygon(vertices=tuple(vertices))]
        return cells

    def _first_merge(self, cells: list[Polygon]) -> tuple[int, int, Polygon] | None:
        for i in range(len(cells)):
            for j in range(i + 1, len(cells)):
                merged = self.aggregate(cells[i], cells[j])
                if merged is not None:
                    return i, j, merged
        return None

    def _find_shared_edge(
        self, a: tuple[Vector, ...], b: tuple[Vector, ...]
    ) -> tuple[int, int] | None:
        """Find ``i``, ``j`` with ``a[i] == b[j]`` and ``a[i + 1] == b[j - 1]``."""
        precision = self.config.float_precision
        for i in range(len(a)):
            i_next = (i + 1) % len(a)
            for j in range(len(b)):
                if not a[i].equals(b[j], precision):
                    continue
                if a[i_next].equals(b[(j - 1) % len(b)], precision):
                    return i, j
        return None
