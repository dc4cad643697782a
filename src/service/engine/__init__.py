"""
Decision Engine for the Qabum Risk Engine.

Pure, deterministic functions: no I/O, no logging, no clocks.
"""

from .settings import EngineSettings, engine_settings, get_engine_settings
from .coercion import ParseResult, parse_decimal, parse_int
from .validation import ValidationResult, parse_risk_config, validate_risk_config
from .defaults import DEFAULT_GLOBAL_PARAMS, default_risk_config
from .ethical_cap import (
    as_decimal,
    effective_advance_multiple,
    fixed_take_rate,
    qabum_margin_rate,
    repayment_headroom,
    resolve_ethical_cap,
)
from .split import calculate_split, check_rate_consistency, round_money
from .risk_profile import calculate_advance_limit, classify_band, derive_risk_profile
from .eligibility import (
    estimate_payback_months,
    evaluate_advance,
    format_money,
    passes_activity_gate,
)

__all__ = [
    # Settings
    "EngineSettings",
    "engine_settings",
    "get_engine_settings",
    # Coercion
    "ParseResult",
    "parse_decimal",
    "parse_int",
    # Validation
    "ValidationResult",
    "parse_risk_config",
    "validate_risk_config",
    # Defaults
    "DEFAULT_GLOBAL_PARAMS",
    "default_risk_config",
    # Ethical Cap
    "as_decimal",
    "effective_advance_multiple",
    "fixed_take_rate",
    "qabum_margin_rate",
    "repayment_headroom",
    "resolve_ethical_cap",
    # Split
    "calculate_split",
    "check_rate_consistency",
    "round_money",
    # Risk Profile
    "calculate_advance_limit",
    "classify_band",
    "derive_risk_profile",
    # Eligibility
    "estimate_payback_months",
    "evaluate_advance",
    "format_money",
    "passes_activity_gate",
]
