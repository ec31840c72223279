"""Mini README: Centralised configuration models and helpers for sequential_sfm.

Structure:
    * UnmappedObservationPolicy - what to do with observations of dropped views.
    * SfMSettings - Pydantic settings model describing runtime configuration.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    Per-run reconstruction options come from the command line. Settings here
    cover the process-wide knobs: log level, which reconstruction engine to
    use, and how strict canonicalisation and export should be. Values are read
    from ``SFM_*`` environment variables or a ``.env`` file and cached so the
    cost of validation is incurred only once per process.
"""

from __future__ import annotations

from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class UnmappedObservationPolicy(str, Enum):
    """Handling of landmark observations whose view did not survive filtering."""

    DROP = "drop"
    REJECT = "reject"


class SfMSettings(BaseSettings):
    """Runtime configuration for the reconstruction finalisation pipeline."""

    model_config = SettingsConfigDict(
        env_prefix="SFM_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = Field(
        "INFO",
        description="Root logging level used by the command line.",
    )
    engine: str = Field(
        "precomputed",
        description="Identifier of the registered reconstruction engine to run.",
    )
    precomputed_scene: Optional[Path] = Field(
        None,
        description=(
            "Scene document replayed by the precomputed engine. When unset the"
            " engine looks for sfm_data_reconstructed.json in the matches directory."
        ),
    )
    unmapped_observations: UnmappedObservationPolicy = Field(
        UnmappedObservationPolicy.DROP,
        description="Drop observations of discarded views, or reject the scene.",
    )
    strict_exports: bool = Field(
        False,
        description="Treat a failed export artifact as a pipeline failure.",
    )

    @field_validator("log_level")
    @classmethod
    def _normalise_level(cls, value: str) -> str:
        """Accept any casing for level names."""

        return value.strip().upper()

    @field_validator("precomputed_scene", mode="before")
    @classmethod
    def _expand_path(cls, value: Optional[str | Path]) -> Optional[Path]:
        """Expand user directories; an empty value means unset."""

        if value is None or str(value).strip() == "":
            return None
        return Path(value).expanduser()


@lru_cache()
def get_settings() -> SfMSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return SfMSettings()
