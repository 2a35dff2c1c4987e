"""
Application Configuration

Uses Pydantic Settings for type-safe configuration.
"""

from typing import List
from pydantic_settings import BaseSettings
from pydantic import Field, field_validator, ConfigDict

from courseplanner.shared.constants import GradeModelName
from courseplanner.features.track.smoothing import SmoothingConfig


class Settings(BaseSettings):
    """Application settings with validation."""

    # === Core ===
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Logging level")

    # === CORS ===
    cors_origins: List[str] = Field(
        default_factory=lambda: ["http://localhost:3000"],
        description="Allowed CORS origins"
    )

    # === Smoothing defaults (per-course overrides are merged over these) ===
    grade_window_m: float = Field(
        default=100.0, ge=0,
        description="Elevation smoothing window (meters)"
    )
    sample_step_m: float = Field(
        default=50.0, gt=0,
        description="Grade span / integration step (meters)"
    )
    pace_smoothing_m: float = Field(
        default=300.0, ge=0,
        description="Pace chart smoothing window (meters)"
    )

    # === Track processing ===
    min_point_spacing_m: float = Field(
        default=0.5, gt=0,
        description="Points closer than this to the previous point are merged"
    )
    elevation_noise_floor_m: float = Field(
        default=1.0, ge=0,
        description="Elevation changes below this are ignored for gain/loss"
    )
    max_track_points: int = Field(
        default=200_000, gt=1,
        description="Upper bound on samples accepted by the API"
    )

    # === Pacing ===
    grade_model: GradeModelName = Field(
        default=GradeModelName.POLYNOMIAL,
        description="Grade adjustment model used by the pacing engine"
    )

    @field_validator('cors_origins', mode='before')
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from comma-separated string."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(',')]
        return v

    def default_smoothing(self) -> SmoothingConfig:
        """Global smoothing defaults as a SmoothingConfig."""
        return SmoothingConfig(
            grade_window_m=self.grade_window_m,
            sample_step_m=self.sample_step_m,
            pace_smoothing_m=self.pace_smoothing_m,
        )

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Global settings instance
settings = Settings()
