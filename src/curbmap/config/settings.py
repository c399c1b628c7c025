"""Configuration settings for Curbmap."""

import math
from pathlib import Path

from pydantic import BaseModel, Field

from curbmap.domain.segment import SegmentType


class PartitionConfig(BaseModel):
    """Configuration for partition edits.

    All lengths are in feet, the unit segments are measured in.
    """

    precision: int = Field(
        default=1,
        ge=0,
        le=4,
        description="Decimal places every segment length is rounded to",
    )
    snap_epsilon: float = Field(
        default=0.01,
        gt=0.0,
        le=1.0,
        description="Lengths with a smaller magnitude normalize to zero",
    )
    default_seed_length: float = Field(
        default=20.0,
        gt=0.0,
        description="Length of a segment created from unknown space",
    )
    default_split_length: float = Field(
        default=10.0,
        gt=0.0,
        description="Length of a segment split off an existing one",
    )
    min_split_remainder: float = Field(
        default=1.0,
        ge=0.0,
        description="Length that must remain in a segment after a split",
    )
    default_segment_type: SegmentType = Field(
        default=SegmentType.PARKING,
        description="Curb use assigned to newly created segments",
    )

    def round_length(self, value: float) -> float:
        """Round a length to the configured precision.

        Halves round towards positive infinity, and magnitudes below
        ``snap_epsilon`` normalize to exactly zero.

        Args:
            value: Length in feet

        Returns:
            Rounded length
        """
        scale = 10**self.precision
        rounded = math.floor(value * scale + 0.5) / scale
        if abs(rounded) < self.snap_epsilon:
            return 0.0
        return rounded


class GeometryConfig(BaseModel):
    """Configuration for geodesic calculations."""

    earth_radius_km: float = Field(
        default=6371.0088,
        gt=0.0,
        description="Mean Earth radius used for great-circle math",
    )
    distance_epsilon_km: float = Field(
        default=1e-6,
        gt=0.0,
        le=0.01,
        description="Clamping and vertex coincidence tolerance",
    )
    feet_per_km: float = Field(
        default=3280.84,
        gt=0.0,
        description="Conversion from kilometers to blockface feet",
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


class CurbMapSettings(BaseModel):
    """Main application settings."""

    partition: PartitionConfig = Field(default_factory=PartitionConfig)
    geometry: GeometryConfig = Field(default_factory=GeometryConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> CurbMapSettings:
    """Get default application settings."""
    return CurbMapSettings()
