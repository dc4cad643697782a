"""Merchant sector enumeration and the default ethical-cap table."""

from enum import Enum
from typing import Any, Optional


class MerchantSector(str, Enum):
    """Business category of a merchant. Determines the ethical cap in force."""

    HIGH_SENSITIVITY = "HIGH_SENSITIVITY"  # Supermarkets, large pharmacies, wholesalers
    STANDARD_PYME = "STANDARD_PYME"  # Standard SME retail and services
    HIGH_MARGIN_SERVICE = "HIGH_MARGIN_SERVICE"  # Restaurants, tourism, higher-margin services


FALLBACK_SECTOR = MerchantSector.STANDARD_PYME

DEFAULT_ETHICAL_CAPS: dict[MerchantSector, float] = {
    MerchantSector.HIGH_SENSITIVITY: 0.022,
    MerchantSector.STANDARD_PYME: 0.027,
    MerchantSector.HIGH_MARGIN_SERVICE: 0.030,
}


def parse_sector(value: Any) -> Optional[MerchantSector]:
    """
    Map a raw sector value onto the enumeration.

    Returns None for missing or unrecognised values; callers decide
    whether that means "fall back" or "skip".
    """
    if isinstance(value, MerchantSector):
        return value
    if not isinstance(value, str):
        return None
    try:
        return MerchantSector(value.strip().upper())
    except ValueError:
        return None


def default_ethical_cap(sector: Optional[MerchantSector]) -> float:
    """Ethical cap from the built-in table, STANDARD_PYME for unknown sectors."""
    return DEFAULT_ETHICAL_CAPS[sector or FALLBACK_SECTOR]
