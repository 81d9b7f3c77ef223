"""Polygon type for closed shapes, triangles and convex cells.

A polygon stores its vertices once: the closing edge from the last vertex back
to the first is implicit. Orientation is never stored, it is derived from the
signed area.
"""

import math
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import Any

from routerpath.domain.vector import Vector


@dataclass(frozen=True)
class Polygon:
    """An ordered, immutable sequence of vertices forming a closed shape.

    Triangles and convex cells produced by the decomposition are plain
    polygons.

    Attributes:
        vertices: Vertices in traversal order, without the closing duplicate
    """

    vertices: tuple[Vector, ...]

    @classmethod
    def from_points(cls, points: Iterable[Vector]) -> "Polygon":
        return cls(vertices=tuple(points))

    @classmethod
    def from_coords(cls, coords: Iterable[Sequence[float]]) -> "Polygon":
        """Build a polygon from (x, y) or (x, y, z) sequences."""
        return cls(vertices=tuple(Vector(*(float(c) for c in coord)) for coord in coords))

    def __len__(self) -> int:
        return len(self.vertices)

    def __iter__(self) -> Iterator[Vector]:
        return iter(self.vertices)

    def __getitem__(self, index: int) -> Vector:
        return self.vertices[index]

    def signed_area(self) -> float:
        """Calculate signed area using the shoelace formula.

        Positive area means counter-clockwise winding (y axis up), negative
        area clockwise winding. Degenerate polygons have an area of 0.
        """
        n = len(self.vertices)
        if n < 3:
            return 0.0

        area = 0.0
        for i in range(n):
            j = (i + 1) % n
            area += self.vertices[i].x * self.vertices[j].y
            area -= self.vertices[j].x * self.vertices[i].y

        return area / 2.0

    def perimeter(self) -> float:
        """Length of the boundary, closing edge included."""
        return sum(math.hypot(b.x - a.x, b.y - a.y) for a, b in self.edges())

    def edges(self) -> list[tuple[Vector, Vector]]:
        """Return the (start, end) pairs of every edge, closing edge included."""
        n = len(self.vertices)
        return [(self.vertices[i], self.vertices[(i + 1) % n]) for i in range(n)]

    def closed(self) -> tuple[Vector, ...]:
        """Return the vertices followed by the first vertex again."""
        if not self.vertices:
            return ()
        return (*self.vertices, self.vertices[0])

    def reversed(self) -> "Polygon":
        """Return the same polygon traversed in the opposite direction."""
        return Polygon(vertices=tuple(reversed(self.vertices)))

    def to_dict(self) -> dict[str, Any]:
        return {"vertices": [v.to_dict() for v in self.vertices]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Polygon":
        return cls(vertices=tuple(Vector.from_dict(v) for v in data["vertices"]))
