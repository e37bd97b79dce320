"""Engine settings with environment variable support.

Uses pydantic-settings for typed configuration validation.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings

from locatif.core.constants import (
    DEFAULT_APPRECIATION_PCT,
    IRR_MAX_ITERATIONS,
    IRR_MIN_MONTHS,
    IRR_NPV_TOLERANCE,
    MAX_LOAN_DURATION_MONTHS,
    PROJECTION_STEP_MONTHS,
    PROJECTION_YEARS_AHEAD,
    PROJECTION_YEARS_BACK,
)
from locatif.core.exceptions import ConfigurationError


class EngineSettings(BaseSettings):
    """Engine configuration loaded from environment variables."""

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_json: bool = Field(default=False, description="Render logs as JSON")
    log_file: Optional[str] = Field(default=None, description="Optional rotating log file path")

    # Patrimoine projection
    appreciation_pct: float = Field(
        default=DEFAULT_APPRECIATION_PCT, ge=-50, le=50, description="Yearly appreciation of cash properties %"
    )
    projection_years_back: int = Field(default=PROJECTION_YEARS_BACK, ge=0, le=50)
    projection_years_ahead: int = Field(default=PROJECTION_YEARS_AHEAD, ge=1, le=50)
    projection_step_months: int = Field(default=PROJECTION_STEP_MONTHS, ge=1, le=12)
    max_loan_duration_months: int = Field(
        default=MAX_LOAN_DURATION_MONTHS, ge=1, description="Longer loans are treated as invalid"
    )

    # IRR solver
    irr_min_months: int = Field(default=IRR_MIN_MONTHS, ge=1, description="Minimum history before an IRR is computed")
    irr_max_iterations: int = Field(default=IRR_MAX_ITERATIONS, ge=1, le=10_000)
    irr_tolerance: float = Field(default=IRR_NPV_TOLERANCE, gt=0, description="NPV tolerance for convergence")

    model_config = {
        "env_prefix": "LOCATIF_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> EngineSettings:
    """Get cached engine settings.

    Raises:
        ConfigurationError: If the environment holds invalid values
    """
    try:
        return EngineSettings()
    except ValidationError as e:
        raise ConfigurationError(f"Invalid engine settings: {e}") from e
