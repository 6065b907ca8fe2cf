"""Generation settings.

A single frozen model gathers everything a run needs. The CLI is the only
source of values; there are no config files or environment variables.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from domain.terrain.traversal import is_valid_grid_size
from infrastructure.terrain.noise import DEFAULT_NOISE_AMPLITUDE


class GenerationSettings(BaseModel):
    """Parameters of one terrain generation run."""

    grid_size: int
    noise_amplitude: float = Field(
        default=DEFAULT_NOISE_AMPLITUDE, ge=0, allow_inf_nan=False
    )
    seed: int | None = None

    model_config = ConfigDict(frozen=True)

    @field_validator("grid_size")
    @classmethod
    def validate_grid_size(cls, value: int) -> int:
        if not is_valid_grid_size(value):
            raise ValueError(f"grid_size must be a power of two, plus 1 (got {value})")
        return value
