"""
Risk Configuration Validator.

Sanitizes and range-checks an admin-submitted configuration document.
Checks run independently and every violation is collected, so the admin
sees the complete list in one round trip. A document with any violation
is rejected as a whole; no partial configuration is ever produced.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from src.domain.entities import GlobalParams, MerchantSector, RiskConfig, SectorCapConfig
from src.domain.exceptions import ConfigValidationException

from .coercion import is_blank, parse_decimal, parse_int


@dataclass
class ValidationResult:
    """Normalized config on success, the ordered error list on failure."""

    value: Optional[RiskConfig] = None
    errors: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors and self.value is not None


def _rate(raw: Any) -> Optional[float]:
    """Fraction in [0, 1], or None when invalid."""
    result = parse_decimal(raw)
    if not result.ok or not 0 <= result.value <= 1:
        return None
    return result.value


def _multiple(raw: Any) -> Optional[float]:
    """Advance multiple in (0, 10], or None when invalid."""
    result = parse_decimal(raw)
    if not result.ok or not 0 < result.value <= 10:
        return None
    return result.value


def _int_between(raw: Any, low: int, high: int) -> Optional[int]:
    result = parse_int(raw)
    if not result.ok or not low <= result.value <= high:
        return None
    return int(result.value)


def _validate_global(raw: Any, errors: List[str]) -> Optional[GlobalParams]:
    if not isinstance(raw, dict):
        errors.append("Missing global config")
        return None

    start = len(errors)

    default_mdr = _rate(raw.get("defaultMdr"))
    if default_mdr is None:
        errors.append("defaultMdr must be a finite number between 0 and 1")

    margin_cap = _rate(raw.get("defaultQabumMarginCap"))
    if margin_cap is None:
        errors.append("defaultQabumMarginCap must be a finite number between 0 and 1")

    repayment_rate = _rate(raw.get("defaultRepaymentRate"))
    if repayment_rate is None:
        errors.append("defaultRepaymentRate must be a finite number between 0 and 1")

    max_multiple = _multiple(raw.get("maxAdvanceMultipleOfAvgMonthlySales"))
    if max_multiple is None:
        errors.append("maxAdvanceMultipleOfAvgMonthlySales must be a number > 0 and <= 10")

    min_payback = _int_between(raw.get("minPaybackMonths"), 1, 60)
    if min_payback is None:
        errors.append("minPaybackMonths must be an integer between 1 and 60")

    # Lower bound of maxPaybackMonths depends on a valid minPaybackMonths
    max_payback = None
    parsed_max_payback = parse_int(raw.get("maxPaybackMonths"))
    if not parsed_max_payback.ok or parsed_max_payback.value > 60:
        errors.append("maxPaybackMonths must be an integer <= 60")
    elif min_payback is not None and parsed_max_payback.value < min_payback:
        errors.append("maxPaybackMonths must be >= minPaybackMonths")
    else:
        max_payback = int(parsed_max_payback.value)

    min_age = _int_between(raw.get("minPlatformAgeMonths"), 0, 60)
    if min_age is None:
        errors.append("minPlatformAgeMonths must be an integer between 0 and 60")

    min_active = _int_between(raw.get("minActiveMonthsLastN"), 0, 24)
    if min_active is None:
        errors.append("minActiveMonthsLastN must be an integer between 0 and 24")

    if len(errors) > start:
        return None

    return GlobalParams(
        default_mdr=default_mdr,
        default_qabum_margin_cap=margin_cap,
        default_repayment_rate=repayment_rate,
        max_advance_multiple_of_avg_monthly_sales=max_multiple,
        min_payback_months=min_payback,
        max_payback_months=max_payback,
        min_platform_age_months=min_age,
        min_active_months_last_n=min_active,
    )


def _validate_sector_caps(
    raw: Any, errors: List[str]
) -> Optional[Dict[MerchantSector, SectorCapConfig]]:
    if not isinstance(raw, dict):
        errors.append("Missing sectorCaps")
        return None

    start = len(errors)
    caps: Dict[MerchantSector, SectorCapConfig] = {}

    # Only known sectors are read; anything else in the document is dropped
    for sector in MerchantSector:
        raw_cap = raw.get(sector.value)
        if not isinstance(raw_cap, dict):
            errors.append(f"Missing config for sector: {sector.value}")
            continue

        ethical_cap = _rate(raw_cap.get("ethicalCap"))
        if ethical_cap is None:
            errors.append(
                f"Sector {sector.value}: ethicalCap must be a finite number between 0 and 1"
            )

        override = None
        raw_override = raw_cap.get("maxAdvanceMultipleOfAvgMonthlySales")
        if not is_blank(raw_override):
            override = _multiple(raw_override)
            if override is None:
                errors.append(
                    f"Sector {sector.value}: maxAdvanceMultipleOfAvgMonthlySales "
                    "must be > 0 and <= 10"
                )

        if ethical_cap is not None:
            caps[sector] = SectorCapConfig(
                ethical_cap=ethical_cap,
                max_advance_multiple_of_avg_monthly_sales=override,
            )

    if len(errors) > start:
        return None
    return caps


def validate_risk_config(document: Any) -> ValidationResult:
    """
    Validate an untrusted risk configuration document.

    Args:
        document: Parsed JSON body in the persisted camelCase shape

    Returns:
        ValidationResult holding either the normalized RiskConfig or
        the complete ordered list of violated constraints
    """
    if not isinstance(document, dict):
        return ValidationResult(errors=["Invalid input object"])

    errors: List[str] = []

    version = None
    parsed_version = parse_int(document.get("version"))
    if parsed_version.ok and parsed_version.value >= 1:
        version = int(parsed_version.value)
    else:
        errors.append("Version must be an integer >= 1")

    global_params = _validate_global(document.get("global"), errors)
    sector_caps = _validate_sector_caps(document.get("sectorCaps"), errors)

    if errors:
        return ValidationResult(errors=errors)

    updated_at = document.get("updatedAt")
    return ValidationResult(
        value=RiskConfig(
            version=version,
            global_params=global_params,
            sector_caps=sector_caps,
            updated_at=updated_at if isinstance(updated_at, str) and updated_at else None,
        )
    )


def parse_risk_config(document: Any) -> RiskConfig:
    """
    Validate a document and return the normalized config.

    Raises:
        ConfigValidationException: With the full error list when invalid
    """
    result = validate_risk_config(document)
    if not result.ok:
        raise ConfigValidationException(result.errors)
    return result.value
