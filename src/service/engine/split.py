"""
Split Allocator for the Qabum risk engine.

Splits a single transaction into three deductions, in priority order:
1. MDR (bank processing fee), fixed by configuration
2. Qabum margin, fixed by configuration up to an internal ceiling
3. Advance repayment, the only component ever reduced

The sum of the three rates must never exceed the ethical cap of the
merchant's sector. When the intended rates would exceed it, the
repayment rate is lowered to whatever headroom the cap leaves.
"""

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from src.domain.entities import MerchantSector, RiskConfig, TransactionSplitResult
from src.domain.exceptions import (
    InconsistentRateConfigurationException,
    InvalidSplitRequestException,
)

from .ethical_cap import (
    as_decimal,
    fixed_take_rate,
    qabum_margin_rate,
    repayment_headroom,
    resolve_ethical_cap,
)
from .settings import EngineSettings, engine_settings

CENT = Decimal("0.01")


def round_money(value: Decimal) -> Decimal:
    """Round to 2 decimals, half away from zero."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def rate_amount(gross: Decimal, rate: float) -> Decimal:
    """Monetary amount of a rate applied to the gross amount."""
    return round_money(gross * as_decimal(rate))


def check_rate_consistency(
    config: RiskConfig,
    sector: Optional[MerchantSector],
    settings: EngineSettings = engine_settings,
) -> None:
    """
    Reject configurations whose MDR and margin alone exceed the sector cap.

    Raises:
        InconsistentRateConfigurationException: When MDR + margin > cap
    """
    ethical_cap = resolve_ethical_cap(config, sector)
    fixed_rate = fixed_take_rate(config, settings)
    if as_decimal(fixed_rate) > as_decimal(ethical_cap) + as_decimal(settings.rate_tolerance):
        raise InconsistentRateConfigurationException(
            sector=(sector.value if sector else "UNKNOWN"),
            ethical_cap=ethical_cap,
            fixed_rate=fixed_rate,
        )


def calculate_split(
    transaction_amount: float,
    has_active_advance: bool,
    config: RiskConfig,
    sector: Optional[MerchantSector] = None,
    settings: EngineSettings = engine_settings,
) -> TransactionSplitResult:
    """
    Compute the fee, margin and repayment breakdown of a transaction.

    Args:
        transaction_amount: Gross transaction value in store currency (> 0)
        has_active_advance: Whether the merchant is repaying an advance
        config: Risk configuration in force
        sector: Merchant sector, None when unknown (STANDARD_PYME cap applies)
        settings: Engine settings (uses defaults if not provided)

    Returns:
        TransactionSplitResult with rounded amounts and audit fields

    Raises:
        InvalidSplitRequestException: If the amount is not a positive number
        InconsistentRateConfigurationException: If MDR + margin exceed the cap
            and strict rate consistency is enabled
    """
    if not math.isfinite(transaction_amount) or transaction_amount <= 0:
        raise InvalidSplitRequestException("transaction_amount must be a positive number")

    if settings.strict_rate_consistency:
        check_rate_consistency(config, sector, settings)

    ethical_cap = resolve_ethical_cap(config, sector)

    mdr_rate = config.global_params.default_mdr
    margin_rate = qabum_margin_rate(config, settings)
    original_repayment_rate = (
        config.global_params.default_repayment_rate if has_active_advance else 0.0
    )

    total_before_cap = (
        as_decimal(mdr_rate) + as_decimal(margin_rate) + as_decimal(original_repayment_rate)
    )
    cap_exceeded = total_before_cap > as_decimal(ethical_cap)

    if cap_exceeded:
        final_repayment_rate = repayment_headroom(config, sector, settings)
    else:
        final_repayment_rate = original_repayment_rate

    gross = Decimal(str(transaction_amount))
    mdr_amount = rate_amount(gross, mdr_rate)
    margin_amount = rate_amount(gross, margin_rate)
    repayment_amount = rate_amount(gross, final_repayment_rate)

    total_deductions = mdr_amount + margin_amount + repayment_amount
    merchant_net_amount = round_money(gross - total_deductions)

    return TransactionSplitResult(
        gross_amount=float(gross),
        mdr_amount=float(mdr_amount),
        qabum_margin_amount=float(margin_amount),
        repayment_amount=float(repayment_amount),
        merchant_net_amount=float(merchant_net_amount),
        # From the rounded amounts, so the rate matches what was actually charged
        effective_take_rate=float(total_deductions / gross),
        cap_exceeded=cap_exceeded,
        final_repayment_rate=final_repayment_rate,
        mdr_rate=mdr_rate,
        qabum_margin_rate=margin_rate,
        ethical_cap=ethical_cap,
        sector=sector,
    )
