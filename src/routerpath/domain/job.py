"""Job representation: an ordered list of cutting operations.

A job groups the operations run on one piece of stock. Operations are
processed in the order they are listed.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from routerpath.domain.polygon import Polygon
from routerpath.domain.vector import Vector


class OperationKind(Enum):
    """Kind of cutting operation."""

    CUT_PATH = "cut_path"
    CUT_POLYGON = "cut_polygon"
    CUT_CIRCLE = "cut_circle"
    POCKET_POLYGON = "pocket_polygon"
    POCKET_CIRCLE = "pocket_circle"

    @property
    def is_circle(self) -> bool:
        return self in (OperationKind.CUT_CIRCLE, OperationKind.POCKET_CIRCLE)


@dataclass
class Operation:
    """A single cutting operation.

    Attributes:
        kind: What to do with the shape
        depth: Depth of the cut (positive value)
        points: Path or polygon vertices (path and polygon kinds)
        center: Circle center (circle kinds)
        radius: Circle radius (circle kinds)
        name: Optional label written as a comment in the G-code
        use_tabs: Whether the job tabs apply to this operation
    """

    kind: OperationKind
    depth: float
    points: tuple[Vector, ...] = field(default_factory=tuple)
    center: Vector | None = None
    radius: float | None = None
    name: str | None = None
    use_tabs: bool = True

    @property
    def label(self) -> str:
        return self.name or self.kind.value

    def polygon(self) -> Polygon:
        """Return the points as a polygon."""
        return Polygon(vertices=self.points)

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "depth": self.depth,
            "points": [p.to_dict() for p in self.points],
            "center": self.center.to_dict() if self.center else None,
            "radius": self.radius,
            "name": self.name,
            "use_tabs": self.use_tabs,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Operation":
        """Deserialize from dictionary.

        Points and centers may be given as ``{"x": .., "y": ..}`` objects or as
        ``[x, y]`` lists.

        Raises:
            KeyError: If ``kind`` or ``depth`` is missing
            ValueError: If ``kind`` is unknown
        """
        center = data.get("center")
        return cls(
            kind=OperationKind(data["kind"]),
            depth=float(data["depth"]),
            points=tuple(_to_vector(p) for p in data.get("points", [])),
            center=_to_vector(center) if center is not None else None,
            radius=float(data["radius"]) if data.get("radius") is not None else None,
            name=data.get("name"),
            use_tabs=bool(data.get("use_tabs", True)),
        )


@dataclass
class Job:
    """Ordered list of operations.

    Attributes:
        operations: Operations in execution order
        name: Optional job name
    """

    operations: list[Operation]
    name: str | None = None

    def is_empty(self) -> bool:
        return not self.operations

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "operations": [op.to_dict() for op in self.operations],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Job":
        return cls(
            operations=[Operation.from_dict(op) for op in data.get("operations", [])],
            name=data.get("name"),
        )


def _to_vector(value: Any) -> Vector:
    if isinstance(value, dict):
        return Vector.from_dict(value)
    return Vector(*(float(c) for c in value))
