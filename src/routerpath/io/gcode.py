"""G-code writer for saving toolpaths.

This module provides the GCodeWriter class which turns toolpaths into the
textual motion protocol understood by CNC controllers: one command per line,
every number written with 5 decimals.
"""

from pathlib import Path

from routerpath.config import GCodeConfig, Units
from routerpath.domain import MotionType, Toolpath, Vector
from routerpath.exceptions import GCodeSaveError


def format_number(value: float) -> str:
    """Format a coordinate or feed rate with 5 decimals."""
    return f"{value:.5f}"


class GCodeWriter:
    """Accumulates G-code commands and writes them to a file.

    Every method appends one line and returns the writer so calls can be
    chained.

    Example:
        writer = GCodeWriter()
        writer.in_inches().spindle_on(12000)
        writer.write_toolpath(toolpath, feedrate=60)
        writer.spindle_off().end()
        writer.save(Path("part.nc"))
    """

    def __init__(self) -> None:
        self._lines: list[str] = []

    @property
    def lines(self) -> list[str]:
        """Return a copy of the commands written so far."""
        return list(self._lines)

    def get_gcode(self) -> str:
        """Return the program text, one command per line."""
        if not self._lines:
            return ""
        return "\n".join(self._lines) + "\n"

    def comment(self, text: str) -> "GCodeWriter":
        # Parentheses would end the comment early
        clean = text.replace("(", "[").replace(")", "]")
        return self._append(f"({clean})")

    def jog_to(
        self, x: float | None = None, y: float | None = None, z: float | None = None
    ) -> "GCodeWriter":
        """Rapid move (G0). Only the given axes are written."""
        return self._append(self._command("G0", x=x, y=y, z=z))

    def move_to(
        self,
        x: float | None = None,
        y: float | None = None,
        z: float | None = None,
        feedrate: float | None = None,
    ) -> "GCodeWriter":
        """Linear cut (G1). Only the given axes are written."""
        return self._append(self._command("G1", x=x, y=y, z=z, f=feedrate))

    def arc_to(
        self,
        x: float,
        y: float,
        clockwise: bool,
        i: float | None = None,
        j: float | None = None,
        radius: float | None = None,
        z: float | None = None,
        feedrate: float | None = None,
    ) -> "GCodeWriter":
        """Arc in the selected plane (G2 clockwise, G3 counter-clockwise).

        The arc is given either by its center offset from the current
        position (``i``, ``j``) or by its ``radius``. Only the given offsets
        are written.

        Raises:
            ValueError: If both or none of the center offset and radius are given
        """
        has_center = i is not None or j is not None
        if has_center == (radius is not None):
            raise ValueError("An arc needs either a center offset (I, J) or a radius (R)")

        code = "G2" if clockwise else "G3"
        if has_center:
            line = self._command(code, x=x, y=y, z=z, i=i, j=j, f=feedrate)
        else:
            line = self._command(code, x=x, y=y, z=z, r=radius, f=feedrate)
        return self._append(line)

    def select_xy_plane(self) -> "GCodeWriter":
        return self._append("G17")

    def select_xz_plane(self) -> "GCodeWriter":
        return self._append("G18")

    def select_yz_plane(self) -> "GCodeWriter":
        return self._append("G19")

    def in_inches(self) -> "GCodeWriter":
        return self._append("G20")

    def in_millimeters(self) -> "GCodeWriter":
        return self._append("G21")

    def set_units(self, units: Units) -> "GCodeWriter":
        if units == Units.MILLIMETER:
            return self.in_millimeters()
        return self.in_inches()

    def spindle_on(self, speed: int | None = None) -> "GCodeWriter":
        """Start the spindle (M4), with an optional speed (S word)."""
        if speed is None:
            return self._append("M4")
        return self._append(f"M4 S{speed}")

    def spindle_off(self) -> "GCodeWriter":
        return self._append("M5")

    def end(self) -> "GCodeWriter":
        """End the program (M2)."""
        return self._append("M2")

    def rewind(self) -> "GCodeWriter":
        """End the program and rewind (M30)."""
        return self._append("M30")

    def stop(self) -> "GCodeWriter":
        """Pallet change pause (M60)."""
        return self._append("M60")

    def header(self, config: GCodeConfig) -> "GCodeWriter":
        """Write the program header: comment, units and spindle start."""
        if config.header_comment:
            self.comment(config.header_comment)
        self.set_units(config.units)
        return self.spindle_on(config.spindle_speed)

    def footer(self) -> "GCodeWriter":
        """Write the program footer: spindle stop and program end."""
        return self.spindle_off().end()

    def write_toolpath(self, toolpath: Toolpath, feedrate: float) -> "GCodeWriter":
        """Render every waypoint of a toolpath.

        Rapids are written as ``G0 X Y Z``, linear moves as ``G1 X Y Z F``
        and arcs as ``G2``/``G3`` with either ``I J`` (center relative to the
        previous position, a zero offset left out) or ``R``. The XY plane is
        selected before the first arc.

        Args:
            toolpath: Toolpath to render
            feedrate: Feed rate used by the cutting moves

        Raises:
            ValueError: If the toolpath starts with an arc (no previous position)
        """
        previous: Vector | None = None
        plane_selected = False

        for waypoint in toolpath:
            position = waypoint.position
            if waypoint.motion == MotionType.RAPID:
                self.jog_to(position.x, position.y, position.z)
            elif waypoint.motion == MotionType.LINEAR:
                self.move_to(position.x, position.y, position.z, feedrate)
            else:
                if previous is None:
                    raise ValueError("A toolpath cannot start with an arc")
                if not plane_selected:
                    self.select_xy_plane()
                    plane_selected = True

                clockwise = waypoint.motion == MotionType.ARC_CW
                z = position.z if position.z != previous.z else None
                if waypoint.arc_center is not None:
                    i, j = _center_offsets(previous, waypoint.arc_center)
                    self.arc_to(position.x, position.y, clockwise, i=i, j=j, z=z, feedrate=feedrate)
                else:
                    self.arc_to(
                        position.x,
                        position.y,
                        clockwise,
                        radius=waypoint.arc_radius,
                        z=z,
                        feedrate=feedrate,
                    )
            previous = position

        return self

    def save(self, output_path: Path) -> None:
        """Save the program to a file.

        Raises:
            GCodeSaveError: If the file cannot be written
        """
        try:
            output_path.write_text(self.get_gcode(), encoding="utf-8")
        except OSError as e:
            raise GCodeSaveError(str(output_path), str(e)) from e

    @staticmethod
    def get_output_path(input_path: Path) -> Path:
        """Generate the default G-code path next to a job file.

        Converts: part.json -> part.nc

        Args:
            input_path: Job file path

        Returns:
            Path with the .nc extension
        """
        return input_path.with_suffix(".nc")

    def _append(self, line: str) -> "GCodeWriter":
        self._lines.append(line)
        return self

    @staticmethod
    def _command(code: str, **words: float | None) -> str:
        parts = [code]
        for letter, value in words.items():
            if value is not None:
                parts.append(f"{letter.upper()}{format_number(value)}")
        return " ".join(parts)


def _center_offsets(start: Vector, center: Vector) -> tuple[float | None, float | None]:
    """Return the I and J words of an arc, leaving out an offset written as zero.

    I is kept when both offsets are zero.
    """
    i: float | None = center.x - start.x
    j: float | None = center.y - start.y
    if round(j, 5) == 0:
        j = None
    elif round(i, 5) == 0:
        i = None
    return i, j
