"""Configuration settings for Routerpath."""

from enum import Enum
from pathlib import Path
from typing import ClassVar

from pydantic import BaseModel, Field


class Units(str, Enum):
    """Units written in the G-code header."""

    INCH = "inch"
    MILLIMETER = "mm"


class CutProperties(BaseModel):
    """Bit and feed settings used by the cutting operations.

    All lengths share the unit of the job (inches by default).
    """

    bit_diameter: float = Field(
        default=0.0,
        ge=0.0,
        description="Diameter of the bit",
    )
    pass_depth: float = Field(
        default=0.0,
        ge=0.0,
        description="Depth removed by one pass",
    )
    stepover: float = Field(
        default=0.0,
        ge=0.0,
        description="Fraction of the bit diameter between two offset passes",
    )
    feedrate: float = Field(
        default=0.0,
        ge=0.0,
        description="Feed rate in units per minute",
    )

    @property
    def offset_distance(self) -> float:
        """Distance between two successive offset passes."""
        return self.bit_diameter * self.stepover


class TabProperties(BaseModel):
    """Size of the tabs left along a cut.

    Tabs are only used when both the width and the height are positive.
    """

    MAX_ANGLE: ClassVar[float] = 45.0

    width: float = Field(
        default=0.0,
        description="Length of material left uncut along the path",
    )
    height: float = Field(
        default=0.0,
        description="Height of the tab measured from the bottom of the cut",
    )

    @property
    def is_active(self) -> bool:
        """True if the tabs can be used."""
        return self.width > 0 and self.height > 0


class GeometryConfig(BaseModel):
    """Numeric tolerances for geometry operations."""

    float_precision: float = Field(
        default=0.001,
        gt=0.0,
        le=0.1,
        description="Tolerance under which two coordinates are considered equal",
    )


class GCodeConfig(BaseModel):
    """Settings for G-code generation."""

    units: Units = Field(
        default=Units.INCH,
        description="Units selected in the program header",
    )
    safe_z: float | None = Field(
        default=3.0,
        description="Height used to travel between cuts (None = stay at the surface)",
    )
    spindle_speed: int | None = Field(
        default=None,
        ge=0,
        description="Spindle speed written with M4 (None = no S word)",
    )
    header_comment: str | None = Field(
        default=None,
        description="Comment written at the top of the program",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class RouterpathSettings(BaseModel):
    """Main application settings."""

    cut: CutProperties = Field(default_factory=CutProperties)
    tabs: TabProperties = Field(default_factory=TabProperties)
    geometry: GeometryConfig = Field(default_factory=GeometryConfig)
    gcode: GCodeConfig = Field(default_factory=GCodeConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> RouterpathSettings:
    """Get default application settings."""
    return RouterpathSettings()
