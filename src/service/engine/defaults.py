"""Documented default risk configuration, persisted on first use."""

from src.domain.entities import (
    DEFAULT_ETHICAL_CAPS,
    GlobalParams,
    RiskConfig,
    SectorCapConfig,
)

DEFAULT_GLOBAL_PARAMS = GlobalParams(
    default_mdr=0.014,
    default_qabum_margin_cap=0.007,
    default_repayment_rate=0.008,
    max_advance_multiple_of_avg_monthly_sales=1.0,
    min_payback_months=1,
    max_payback_months=12,
    min_platform_age_months=3,
    min_active_months_last_n=3,
)


def default_risk_config() -> RiskConfig:
    """
    Build the initial configuration (version 1, not yet stamped).

    MDR + margin (0.021) stays below the strictest sector cap (0.022),
    so the defaults never trip the rate-consistency check.
    """
    return RiskConfig(
        version=1,
        global_params=DEFAULT_GLOBAL_PARAMS,
        sector_caps={
            sector: SectorCapConfig(ethical_cap=cap)
            for sector, cap in DEFAULT_ETHICAL_CAPS.items()
        },
    )
