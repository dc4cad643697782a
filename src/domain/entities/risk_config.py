"""Risk configuration entities shared by the split and advance engines."""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .sector import MerchantSector


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string with a trailing Z."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class GlobalParams:
    """
    Global risk parameters applied to every store and sector.

    Attributes:
        default_mdr: Bank processing fee rate (fraction of the transaction)
        default_qabum_margin_cap: Ceiling for the platform margin rate
        default_repayment_rate: Repayment skim applied while an advance is active
        max_advance_multiple_of_avg_monthly_sales: Hard ceiling for advance limits
        min_payback_months: Shortest payback window the business accepts
        max_payback_months: Longest payback window the business accepts
        min_platform_age_months: Months on the platform before any advance
        min_active_months_last_n: Recently active months required for an advance
    """

    default_mdr: float
    default_qabum_margin_cap: float
    default_repayment_rate: float
    max_advance_multiple_of_avg_monthly_sales: float
    min_payback_months: int
    max_payback_months: int
    min_platform_age_months: int
    min_active_months_last_n: int

    def to_dict(self) -> dict:
        return {
            "defaultMdr": self.default_mdr,
            "defaultQabumMarginCap": self.default_qabum_margin_cap,
            "defaultRepaymentRate": self.default_repayment_rate,
            "maxAdvanceMultipleOfAvgMonthlySales": self.max_advance_multiple_of_avg_monthly_sales,
            "minPaybackMonths": self.min_payback_months,
            "maxPaybackMonths": self.max_payback_months,
            "minPlatformAgeMonths": self.min_platform_age_months,
            "minActiveMonthsLastN": self.min_active_months_last_n,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GlobalParams":
        return cls(
            default_mdr=float(data["defaultMdr"]),
            default_qabum_margin_cap=float(data["defaultQabumMarginCap"]),
            default_repayment_rate=float(data["defaultRepaymentRate"]),
            max_advance_multiple_of_avg_monthly_sales=float(
                data["maxAdvanceMultipleOfAvgMonthlySales"]
            ),
            min_payback_months=int(data["minPaybackMonths"]),
            max_payback_months=int(data["maxPaybackMonths"]),
            min_platform_age_months=int(data["minPlatformAgeMonths"]),
            min_active_months_last_n=int(data["minActiveMonthsLastN"]),
        )


@dataclass(frozen=True)
class SectorCapConfig:
    """Per-sector ethical cap and optional advance multiple override."""

    ethical_cap: float
    max_advance_multiple_of_avg_monthly_sales: Optional[float] = None

    def to_dict(self) -> dict:
        data: Dict[str, Any] = {"ethicalCap": self.ethical_cap}
        if self.max_advance_multiple_of_avg_monthly_sales is not None:
            data["maxAdvanceMultipleOfAvgMonthlySales"] = (
                self.max_advance_multiple_of_avg_monthly_sales
            )
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SectorCapConfig":
        multiple = data.get("maxAdvanceMultipleOfAvgMonthlySales")
        return cls(
            ethical_cap=float(data["ethicalCap"]),
            max_advance_multiple_of_avg_monthly_sales=(
                float(multiple) if multiple is not None else None
            ),
        )


@dataclass(frozen=True)
class RiskConfig:
    """
    The single process-wide risk configuration.

    Versioned monotonically and replaced wholesale on every validated
    write. ``updated_at`` is None only for a freshly validated document
    that has not been persisted yet.
    """

    version: int
    global_params: GlobalParams
    sector_caps: Dict[MerchantSector, SectorCapConfig] = field(default_factory=dict)
    updated_at: Optional[str] = None

    def with_revision(self, version: int, updated_at: str) -> "RiskConfig":
        """Return a copy stamped with a new version and timestamp."""
        return replace(self, version=version, updated_at=updated_at)

    def to_dict(self) -> dict:
        """Convert to the persisted JSON document shape."""
        return {
            "version": self.version,
            "updatedAt": self.updated_at,
            "global": self.global_params.to_dict(),
            "sectorCaps": {
                sector.value: cap.to_dict() for sector, cap in self.sector_caps.items()
            },
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RiskConfig":
        """
        Rebuild a config from a trusted persisted document.

        Untrusted input must go through the config validator instead.
        """
        return cls(
            version=int(data["version"]),
            updated_at=data.get("updatedAt"),
            global_params=GlobalParams.from_dict(data["global"]),
            sector_caps={
                MerchantSector(sector): SectorCapConfig.from_dict(cap)
                for sector, cap in data.get("sectorCaps", {}).items()
            },
        )
