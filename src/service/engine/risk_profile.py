"""
Risk Profiler for the Qabum risk engine.

Maps a merchant sales snapshot to a risk band and the parameters that
go with it. Classification is first-match in a fixed order:

    LOW    -> strong volume, low volatility, long clean history
    MEDIUM -> reasonable volume and at least intermediate history
    HIGH   -> everything else

After classification the band's repayment rate is clamped so that, for
a known sector, MDR + margin + repayment never exceeds the ethical cap.
"""

from dataclasses import dataclass, field
from decimal import ROUND_FLOOR, Decimal
from typing import List

from src.domain.entities import (
    MerchantRiskProfile,
    MerchantSalesSnapshot,
    RiskBand,
    RiskConfig,
)

from .ethical_cap import effective_advance_multiple, repayment_headroom
from .settings import EngineSettings, engine_settings


@dataclass
class BandAssessment:
    """Band parameters before the advance-multiple cap and ethical clamp."""

    risk_band: RiskBand
    limit_multiplier: float
    repayment_rate: float
    loss_provision_rate: float
    reason_codes: List[str] = field(default_factory=list)


def is_low_risk(snapshot: MerchantSalesSnapshot, settings: EngineSettings = engine_settings) -> bool:
    return (
        snapshot.average_monthly_volume >= settings.low_min_volume
        and snapshot.monthly_volatility_index <= settings.low_max_volatility
        and snapshot.months_active >= settings.low_min_months_active
        and not snapshot.has_recent_drop
        and snapshot.failed_split_count == 0
    )


def is_medium_risk(snapshot: MerchantSalesSnapshot, settings: EngineSettings = engine_settings) -> bool:
    return (
        snapshot.average_monthly_volume >= settings.medium_min_volume
        and snapshot.months_active >= settings.medium_min_months_active
    )


def classify_band(
    snapshot: MerchantSalesSnapshot,
    config: RiskConfig,
    settings: EngineSettings = engine_settings,
) -> BandAssessment:
    """
    Assign a risk band with its multiplier, rates and reason codes.

    Reason codes for MEDIUM and HIGH are diagnostic only; they never
    change the band.
    """
    if is_low_risk(snapshot, settings):
        return BandAssessment(
            risk_band=RiskBand.LOW,
            limit_multiplier=settings.low_limit_multiplier,
            repayment_rate=settings.low_repayment_rate,
            loss_provision_rate=settings.low_loss_provision_rate,
            reason_codes=["LOW_RISK_PROFILE"],
        )

    if is_medium_risk(snapshot, settings):
        reason_codes = []
        if snapshot.monthly_volatility_index > settings.medium_volatility_flag:
            reason_codes.append("HIGH_VOLATILITY")
        if snapshot.months_active < settings.medium_history_flag_months:
            reason_codes.append("INTERMEDIATE_HISTORY")
        if snapshot.failed_split_count > 0:
            reason_codes.append("FAILED_SPLITS_LITE")
        return BandAssessment(
            risk_band=RiskBand.MEDIUM,
            limit_multiplier=settings.medium_limit_multiplier,
            repayment_rate=settings.medium_repayment_rate,
            loss_provision_rate=settings.medium_loss_provision_rate,
            reason_codes=reason_codes,
        )

    reason_codes = []
    if snapshot.average_monthly_volume < settings.medium_min_volume:
        reason_codes.append("LOW_VOLUME")
    if snapshot.months_active < settings.medium_min_months_active:
        reason_codes.append("SHORT_HISTORY")
    if snapshot.has_recent_drop:
        reason_codes.append("RECENT_DROP")
    if snapshot.failed_split_count >= settings.high_failed_splits_flag:
        reason_codes.append("FAILED_SPLITS_HIGH")
    if snapshot.monthly_volatility_index > settings.high_volatility_flag:
        reason_codes.append("CRITICAL_VOLATILITY")
    return BandAssessment(
        risk_band=RiskBand.HIGH,
        limit_multiplier=settings.high_limit_multiplier,
        repayment_rate=config.global_params.default_repayment_rate,
        loss_provision_rate=settings.high_loss_provision_rate,
        reason_codes=reason_codes,
    )


def calculate_advance_limit(
    snapshot: MerchantSalesSnapshot,
    limit_multiplier: float,
    config: RiskConfig,
) -> int:
    """
    Maximum advance in whole currency units.

    The band multiplier is capped by the configured maximum multiple
    before it is applied to the average monthly volume.
    """
    multiple = min(limit_multiplier, effective_advance_multiple(config, snapshot.sector))
    # Decimal product so 5000 * 0.7 floors to 3500, not 3499
    limit = Decimal(str(snapshot.average_monthly_volume)) * Decimal(str(multiple))
    return max(0, int(limit.to_integral_value(rounding=ROUND_FLOOR)))


def derive_risk_profile(
    snapshot: MerchantSalesSnapshot,
    config: RiskConfig,
    settings: EngineSettings = engine_settings,
) -> MerchantRiskProfile:
    """
    Derive the risk profile of a merchant from its sales snapshot.

    Args:
        snapshot: Merchant sales snapshot
        config: Risk configuration in force
        settings: Engine settings (uses defaults if not provided)

    Returns:
        MerchantRiskProfile with a floored limit and a repayment rate
        already clamped to the sector's ethical cap
    """
    assessment = classify_band(snapshot, config, settings)

    recommended_rate = assessment.repayment_rate
    if snapshot.sector is not None:
        # Clamp only lowers the rate; it never raises on an inconsistent config
        recommended_rate = min(
            recommended_rate,
            repayment_headroom(config, snapshot.sector, settings),
        )

    return MerchantRiskProfile(
        merchant_id=snapshot.merchant_id,
        store_id=snapshot.store_id,
        risk_band=assessment.risk_band,
        max_advance_limit=calculate_advance_limit(snapshot, assessment.limit_multiplier, config),
        recommended_repayment_rate=recommended_rate,
        loss_provision_rate=assessment.loss_provision_rate,
        reason_codes=assessment.reason_codes,
    )
