"""
Eligibility Evaluator for the Qabum risk engine.

Decides whether a merchant may receive a working-capital advance and
how much of the requested amount is approved:

1. Minimum-activity gate (platform age, recent activity)
2. Band rule:
   - LOW: approve up to the limit (requests above it are capped)
   - MEDIUM: approve in full if within the limit, else reject
   - HIGH: approve in full if within half the limit, else reject
3. Payback estimate from the merchant's typical monthly repayment
"""

import math
from dataclasses import replace
from decimal import ROUND_FLOOR, Decimal
from typing import Optional

from src.domain.entities import (
    AdvanceEligibilityResult,
    MerchantRiskProfile,
    MerchantSalesSnapshot,
    RiskBand,
    RiskConfig,
)
from src.domain.exceptions import InvalidAdvanceRequestException

from .ethical_cap import resolve_ethical_cap
from .risk_profile import derive_risk_profile
from .settings import EngineSettings, engine_settings


def format_money(amount: float, currency_code: str = "USD") -> str:
    """Format an amount for decision reasons, e.g. ``USD 25,000.00``."""
    return f"{currency_code} {amount:,.2f}"


def passes_activity_gate(snapshot: MerchantSalesSnapshot, config: RiskConfig) -> bool:
    params = config.global_params
    return (
        snapshot.months_active >= params.min_platform_age_months
        and snapshot.recent_active_months >= params.min_active_months_last_n
    )


def estimate_payback_months(
    approved_amount: int,
    average_monthly_volume: float,
    repayment_rate: float,
) -> Optional[float]:
    """
    Months needed to repay an advance at the current sales level.

    Returns None unless the approved amount, the volume and the
    repayment rate are all positive.
    """
    if approved_amount <= 0 or average_monthly_volume <= 0 or repayment_rate <= 0:
        return None
    return approved_amount / (average_monthly_volume * repayment_rate)


def _floor_amount(amount: float) -> int:
    return int(Decimal(str(amount)).to_integral_value(rounding=ROUND_FLOOR))


def _band_decision(
    profile: MerchantRiskProfile,
    requested_amount: float,
    currency_code: str,
    settings: EngineSettings,
) -> tuple[bool, float, str]:
    """Apply the band rule. Returns (is_eligible, approved_amount, reason)."""
    limit = profile.max_advance_limit
    requested_text = f"Requested: {format_money(requested_amount, currency_code)}."

    if profile.risk_band == RiskBand.LOW:
        limit_text = f"Limit: {format_money(limit, currency_code)}."
        if requested_amount <= limit:
            return True, requested_amount, f"{requested_text} {limit_text} Approved: full requested amount."
        return True, limit, f"{requested_text} {limit_text} Approved: capped at limit."

    if profile.risk_band == RiskBand.MEDIUM:
        limit_text = f"Limit: {format_money(limit, currency_code)}."
        if requested_amount <= limit:
            return True, requested_amount, f"{requested_text} {limit_text} Approved: full requested amount."
        return False, 0, f"{requested_text} {limit_text} Approved: NO (exceeds limit)."

    high_risk_cap = limit * settings.high_risk_cap_factor
    limit_text = f"Limit: {format_money(high_risk_cap, currency_code)} (High Risk Cap)."
    if requested_amount <= high_risk_cap:
        return True, requested_amount, f"{requested_text} {limit_text} Approved: full requested amount."
    return False, 0, f"{requested_text} {limit_text} Approved: NO (exceeds strict cap)."


def evaluate_advance(
    snapshot: MerchantSalesSnapshot,
    requested_amount: float,
    config: RiskConfig,
    currency_code: str = "USD",
    settings: EngineSettings = engine_settings,
) -> AdvanceEligibilityResult:
    """
    Evaluate an advance request against the merchant's risk profile.

    Args:
        snapshot: Merchant sales snapshot
        requested_amount: Amount requested in store currency (> 0)
        config: Risk configuration in force
        currency_code: Store currency, used in the decision reason
        settings: Engine settings (uses defaults if not provided)

    Returns:
        AdvanceEligibilityResult; audit fields are populated on every path

    Raises:
        InvalidAdvanceRequestException: If the requested amount is not positive
    """
    if not math.isfinite(requested_amount) or requested_amount <= 0:
        raise InvalidAdvanceRequestException("requested_amount must be a positive number")

    profile = derive_risk_profile(snapshot, config, settings)
    sector = snapshot.sector

    audit_fields = dict(
        merchant_sector_used=sector,
        ethical_cap_used=resolve_ethical_cap(config, sector) if sector is not None else None,
        risk_config_version_used=config.version,
        risk_config_updated_at_used=config.updated_at,
    )

    if not passes_activity_gate(snapshot, config):
        params = config.global_params
        return AdvanceEligibilityResult(
            merchant_id=snapshot.merchant_id,
            store_id=snapshot.store_id,
            requested_amount=requested_amount,
            is_eligible=False,
            approved_amount=0,
            risk_profile=replace(profile, max_advance_limit=0),
            decision_reason=(
                f"NOT ELIGIBLE: the account has {snapshot.months_active} months active "
                f"(minimum {params.min_platform_age_months}) and "
                f"{snapshot.recent_active_months} active months in the recent window "
                f"(minimum {params.min_active_months_last_n})."
            ),
            estimated_payback_months=None,
            **audit_fields,
        )

    is_eligible, approved, reason = _band_decision(
        profile, requested_amount, currency_code, settings
    )
    approved_amount = _floor_amount(approved) if is_eligible else 0

    return AdvanceEligibilityResult(
        merchant_id=snapshot.merchant_id,
        store_id=snapshot.store_id,
        requested_amount=requested_amount,
        is_eligible=is_eligible,
        approved_amount=approved_amount,
        risk_profile=profile,
        decision_reason=reason,
        estimated_payback_months=estimate_payback_months(
            approved_amount,
            snapshot.average_monthly_volume,
            profile.recommended_repayment_rate,
        ),
        **audit_fields,
    )
