"""Toolpath types produced by the planners.

This module defines the output of every cutting operation:
- MotionType: How the bit travels to a waypoint
- Waypoint: A position to reach plus its motion
- Toolpath: The ordered, immutable list of waypoints

The order of the waypoints is the order in which the bit visits them and is
never changed after the toolpath is built.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from routerpath.domain.vector import Vector


class MotionType(Enum):
    """Motion used to reach a waypoint.

    - RAPID: Travel as fast as possible, never through material (G0)
    - LINEAR: Straight cut at the feed rate (G1)
    - ARC_CW: Clockwise arc in the XY plane (G2)
    - ARC_CCW: Counter-clockwise arc in the XY plane (G3)
    """

    RAPID = "rapid"
    LINEAR = "linear"
    ARC_CW = "arc_cw"
    ARC_CCW = "arc_ccw"


@dataclass(frozen=True, slots=True)
class Waypoint:
    """A position the bit must reach.

    Arcs are described either by their center (absolute position) or by their
    radius; exactly one of them is set for arc motions.

    Attributes:
        position: Target position
        motion: Motion used to reach the position
        arc_center: Absolute center of an arc motion
        arc_radius: Radius of an arc motion
    """

    position: Vector
    motion: MotionType = MotionType.LINEAR
    arc_center: Vector | None = None
    arc_radius: float | None = None

    @property
    def is_arc(self) -> bool:
        return self.motion in (MotionType.ARC_CW, MotionType.ARC_CCW)

    @classmethod
    def rapid(cls, position: Vector) -> "Waypoint":
        return cls(position=position, motion=MotionType.RAPID)

    @classmethod
    def linear(cls, position: Vector) -> "Waypoint":
        return cls(position=position, motion=MotionType.LINEAR)

    @classmethod
    def arc(
        cls,
        position: Vector,
        clockwise: bool,
        center: Vector | None = None,
        radius: float | None = None,
    ) -> "Waypoint":
        """Create an arc waypoint in center form or radius form.

        Raises:
            ValueError: If neither or both of center and radius are given
        """
        if (center is None) == (radius is None):
            raise ValueError("An arc needs either a center or a radius")
        motion = MotionType.ARC_CW if clockwise else MotionType.ARC_CCW
        return cls(position=position, motion=motion, arc_center=center, arc_radius=radius)

    def to_dict(self) -> dict[str, Any]:
        return {
            "position": self.position.to_dict(),
            "motion": self.motion.value,
            "arc_center": self.arc_center.to_dict() if self.arc_center else None,
            "arc_radius": self.arc_radius,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Waypoint":
        return cls(
            position=Vector.from_dict(data["position"]),
            motion=MotionType(data["motion"]),
            arc_center=(
                Vector.from_dict(data["arc_center"])
                if data.get("arc_center") is not None
                else None
            ),
            arc_radius=data.get("arc_radius"),
        )


@dataclass(frozen=True)
class Toolpath:
    """Ordered sequence of waypoints for one operation.

    Attributes:
        waypoints: Waypoints in visiting order
    """

    waypoints: tuple[Waypoint, ...] = field(default_factory=tuple)

    @classmethod
    def from_waypoints(cls, waypoints: Iterable[Waypoint]) -> "Toolpath":
        return cls(waypoints=tuple(waypoints))

    def points(self) -> list[Vector]:
        """Return the bare positions in visiting order."""
        return [w.position for w in self.waypoints]

    def depths(self) -> list[float]:
        """Return the distinct Z heights reached by cutting moves, in order."""
        depths: list[float] = []
        for waypoint in self.waypoints:
            if waypoint.motion == MotionType.RAPID:
                continue
            z = waypoint.position.z
            if z not in depths:
                depths.append(z)
        return depths

    def is_empty(self) -> bool:
        return not self.waypoints

    def __len__(self) -> int:
        return len(self.waypoints)

    def __iter__(self) -> Iterator[Waypoint]:
        return iter(self.waypoints)

    def __getitem__(self, index: int) -> Waypoint:
        return self.waypoints[index]

    def __add__(self, other: "Toolpath") -> "Toolpath":
        return Toolpath(waypoints=self.waypoints + other.waypoints)

    def to_dict(self) -> dict[str, Any]:
        return {"waypoints": [w.to_dict() for w in self.waypoints]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Toolpath":
        return cls(waypoints=tuple(Waypoint.from_dict(w) for w in data["waypoints"]))
