"""
Ethical cap and fixed-rate resolution.

Every engine component resolves the cap in force for a merchant and the
fixed (non-reducible) part of the take rate through these functions, so
the sector fallback lives in exactly one place.
"""

from decimal import Decimal
from typing import Optional

from src.domain.entities import MerchantSector, RiskConfig, default_ethical_cap

from .settings import EngineSettings, engine_settings


def resolve_ethical_cap(config: RiskConfig, sector: Optional[MerchantSector]) -> float:
    """
    Ethical cap for a sector.

    Uses the configured sector cap when the sector is known and present
    in the configuration; otherwise falls back to the built-in table
    (STANDARD_PYME for unknown sectors).
    """
    if sector is not None:
        sector_cap = config.sector_caps.get(sector)
        if sector_cap is not None:
            return sector_cap.ethical_cap
    return default_ethical_cap(sector)


def qabum_margin_rate(config: RiskConfig, settings: EngineSettings = engine_settings) -> float:
    """Platform margin rate: the configured cap, never above the internal ceiling."""
    return min(settings.margin_ceiling, config.global_params.default_qabum_margin_cap)


def as_decimal(rate: float) -> Decimal:
    """Exact decimal form of a configured rate (0.014 -> Decimal("0.014"))."""
    return Decimal(str(rate))


def fixed_take_rate(config: RiskConfig, settings: EngineSettings = engine_settings) -> float:
    """MDR plus platform margin; the part of the take rate no cap logic may reduce."""
    total = as_decimal(config.global_params.default_mdr) + as_decimal(qabum_margin_rate(config, settings))
    return float(total)


def repayment_headroom(
    config: RiskConfig,
    sector: Optional[MerchantSector],
    settings: EngineSettings = engine_settings,
) -> float:
    """Largest repayment rate that keeps the total take rate within the cap (>= 0)."""
    headroom = as_decimal(resolve_ethical_cap(config, sector)) - as_decimal(fixed_take_rate(config, settings))
    return float(max(Decimal(0), headroom))


def effective_advance_multiple(config: RiskConfig, sector: Optional[MerchantSector]) -> float:
    """
    Upper bound for the advance-limit multiplier.

    The global maximum is a hard ceiling; a sector override can only
    lower it further.
    """
    multiple = config.global_params.max_advance_multiple_of_avg_monthly_sales
    if sector is not None:
        sector_cap = config.sector_caps.get(sector)
        if sector_cap is not None and sector_cap.max_advance_multiple_of_avg_monthly_sales is not None:
            multiple = min(multiple, sector_cap.max_advance_multiple_of_avg_monthly_sales)
    return multiple
