"""
Engine Settings for the Qabum risk engine.

This module contains the fixed business parameters of the split allocator
and the risk profiler: band thresholds, band multipliers and rates, the
platform margin ceiling and the high-risk approval factor. The admin-editable
parameters (MDR, ethical caps, gates) live in the risk configuration instead.

Environment variables use the ENGINE_ prefix:
    ENGINE_MARGIN_CEILING=0.007
    ENGINE_LOW_MIN_VOLUME=8000
    ENGINE_STRICT_RATE_CONSISTENCY=false

Usage:
    from src.service.engine.settings import engine_settings

    # Use default settings (loaded from env)
    ceiling = engine_settings.margin_ceiling

    # Or create custom settings for testing
    custom = EngineSettings(strict_rate_consistency=False)
"""

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class EngineSettings(BaseSettings):
    """
    Fixed parameters for the split and risk algorithms.

    All rates are fractions (0.01 = 1%).
    All volumes are in store currency per month.
    """

    model_config = SettingsConfigDict(
        env_prefix="ENGINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Split Allocation ===
    margin_ceiling: float = Field(
        default=0.007,
        ge=0.0,
        le=1.0,
        description="Internal ceiling for the platform margin rate",
    )
    strict_rate_consistency: bool = Field(
        default=True,
        description="Raise when MDR + margin alone exceed the ethical cap (else floor repayment at 0)",
    )
    rate_tolerance: float = Field(
        default=1e-9,
        ge=0.0,
        description="Float tolerance when comparing fixed rates against the ethical cap",
    )

    # === LOW band ===
    low_min_volume: float = Field(
        default=8000.0,
        ge=0.0,
        description="Minimum average monthly volume for the LOW band",
    )
    low_max_volatility: float = Field(
        default=0.3,
        ge=0.0,
        description="Maximum volatility index for the LOW band",
    )
    low_min_months_active: int = Field(
        default=12,
        ge=0,
        description="Minimum months active for the LOW band",
    )
    low_limit_multiplier: float = Field(
        default=1.0,
        gt=0.0,
        description="Advance limit as a multiple of average monthly volume (LOW)",
    )
    low_repayment_rate: float = Field(
        default=0.010,
        ge=0.0,
        le=1.0,
        description="Recommended repayment rate for the LOW band",
    )
    low_loss_provision_rate: float = Field(
        default=0.01,
        ge=0.0,
        le=1.0,
        description="Loss provision rate for the LOW band",
    )

    # === MEDIUM band ===
    medium_min_volume: float = Field(
        default=3000.0,
        ge=0.0,
        description="Minimum average monthly volume for the MEDIUM band",
    )
    medium_min_months_active: int = Field(
        default=6,
        ge=0,
        description="Minimum months active for the MEDIUM band",
    )
    medium_limit_multiplier: float = Field(
        default=0.7,
        gt=0.0,
        description="Advance limit as a multiple of average monthly volume (MEDIUM)",
    )
    medium_repayment_rate: float = Field(
        default=0.008,
        ge=0.0,
        le=1.0,
        description="Recommended repayment rate for the MEDIUM band",
    )
    medium_loss_provision_rate: float = Field(
        default=0.03,
        ge=0.0,
        le=1.0,
        description="Loss provision rate for the MEDIUM band",
    )
    medium_volatility_flag: float = Field(
        default=0.4,
        ge=0.0,
        description="Volatility above this adds HIGH_VOLATILITY (MEDIUM)",
    )
    medium_history_flag_months: int = Field(
        default=12,
        ge=0,
        description="Months active below this adds INTERMEDIATE_HISTORY (MEDIUM)",
    )

    # === HIGH band ===
    high_limit_multiplier: float = Field(
        default=0.4,
        gt=0.0,
        description="Advance limit as a multiple of average monthly volume (HIGH)",
    )
    high_loss_provision_rate: float = Field(
        default=0.06,
        ge=0.0,
        le=1.0,
        description="Loss provision rate for the HIGH band",
    )
    high_failed_splits_flag: int = Field(
        default=3,
        ge=0,
        description="Failed splits at or above this add FAILED_SPLITS_HIGH (HIGH)",
    )
    high_volatility_flag: float = Field(
        default=0.6,
        ge=0.0,
        description="Volatility above this adds CRITICAL_VOLATILITY (HIGH)",
    )

    # === Eligibility ===
    high_risk_cap_factor: float = Field(
        default=0.5,
        gt=0.0,
        le=1.0,
        description="Share of the advance limit a HIGH-band merchant may request",
    )

    @model_validator(mode="after")
    def validate_band_ordering(self) -> "EngineSettings":
        """LOW must be strictly harder to reach than MEDIUM."""
        if self.low_min_volume < self.medium_min_volume:
            raise ValueError(
                f"low_min_volume ({self.low_min_volume}) < medium_min_volume ({self.medium_min_volume})"
            )
        if self.low_min_months_active < self.medium_min_months_active:
            raise ValueError(
                f"low_min_months_active ({self.low_min_months_active}) "
                f"< medium_min_months_active ({self.medium_min_months_active})"
            )
        return self


@lru_cache
def get_engine_settings() -> EngineSettings:
    """Get cached engine settings instance."""
    return EngineSettings()


engine_settings = get_engine_settings()
