"""Domain Entities - Core business objects."""

from .audit import AuditEntry, AuditMeta
from .merchant import MerchantSalesSnapshot, StoreConfig
from .risk import AdvanceEligibilityResult, MerchantRiskProfile, RiskBand
from .risk_config import GlobalParams, RiskConfig, SectorCapConfig, utc_now_iso
from .sector import (
    DEFAULT_ETHICAL_CAPS,
    FALLBACK_SECTOR,
    MerchantSector,
    default_ethical_cap,
    parse_sector,
)
from .split import TransactionSplitResult

__all__ = [
    "AuditEntry",
    "AuditMeta",
    "MerchantSalesSnapshot",
    "StoreConfig",
    "AdvanceEligibilityResult",
    "MerchantRiskProfile",
    "RiskBand",
    "GlobalParams",
    "RiskConfig",
    "SectorCapConfig",
    "utc_now_iso",
    "DEFAULT_ETHICAL_CAPS",
    "FALLBACK_SECTOR",
    "MerchantSector",
    "default_ethical_cap",
    "parse_sector",
    "TransactionSplitResult",
]
