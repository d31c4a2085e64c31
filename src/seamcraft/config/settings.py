"""Configuration settings for seamcraft."""

from pathlib import Path

from pydantic import BaseModel, Field

from seamcraft.domain import CornerJoin


class GeometryConfig(BaseModel):
    """Configuration for contour path construction and queries."""

    curve_samples: int = Field(
        default=20,
        ge=2,
        le=1000,
        description="Parameter steps used to measure, hit-test and flatten a curved segment",
    )
    sharp_handle_ratio: float = Field(
        default=0.01,
        gt=0.0,
        lt=0.5,
        description="Fraction of the segment at which a sharp vertex places its control point",
    )
    default_tension: float = Field(
        default=0.5,
        gt=0.0,
        description="Tension given to newly created vertices",
    )
    hit_tolerance: float = Field(
        default=5.0,
        ge=0.0,
        description="Default pick radius for vertex hit testing",
    )
    degenerate_epsilon: float = Field(
        default=0.0001,
        ge=0.0,
        description="Squared length below which a straight segment is ignored by closest-point queries",
    )


class OffsetConfig(BaseModel):
    """Configuration for seam allowance offsetting."""

    default_width: float = Field(
        default=10.0,
        gt=0.0,
        description="Seam allowance width used when none is given",
    )
    corner_join: CornerJoin = Field(
        default=CornerJoin.ROUND,
        description="Default corner-join style",
    )
    min_miter_cosine: float = Field(
        default=0.1,
        gt=0.0,
        le=1.0,
        description="Lower bound on |cos(half angle)| when computing a miter length",
    )
    max_miter_ratio: float = Field(
        default=5.0,
        ge=1.0,
        description="Miter length limit as a multiple of the allowance width",
    )
    bisector_epsilon: float = Field(
        default=1e-9,
        ge=0.0,
        description="Bisector length below which a corner falls back to a plain perpendicular",
    )
    clipper_miter_limit: float = Field(
        default=2.0,
        ge=1.0,
        description="Miter limit passed to the polygon inflate backend",
    )
    clipper_arc_tolerance: float = Field(
        default=0.25,
        gt=0.0,
        description="Maximum deviation of round joins from a true arc (drawing units)",
    )
    clipper_scale: float = Field(
        default=1000.0,
        gt=0.0,
        description="Scale applied to coordinates before integer polygon offsetting",
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


class SeamcraftSettings(BaseModel):
    """Main application settings."""

    geometry: GeometryConfig = Field(default_factory=GeometryConfig)
    offset: OffsetConfig = Field(default_factory=OffsetConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> SeamcraftSettings:
    """Get default application settings."""
    return SeamcraftSettings()
