"""Risk profile and advance eligibility entities."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .sector import MerchantSector


class RiskBand(str, Enum):
    """Creditworthiness band derived from a sales snapshot."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


@dataclass(frozen=True)
class MerchantRiskProfile:
    """
    Risk classification of a merchant.

    Attributes:
        merchant_id: Merchant identifier
        store_id: Store identifier
        risk_band: LOW, MEDIUM or HIGH
        max_advance_limit: Largest advance in whole currency units
        recommended_repayment_rate: Band rate, already clamped to the ethical cap
        loss_provision_rate: Expected loss fraction to provision for
        reason_codes: Diagnostic codes in evaluation order
    """

    merchant_id: str
    store_id: str
    risk_band: RiskBand
    max_advance_limit: int
    recommended_repayment_rate: float
    loss_provision_rate: float
    reason_codes: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "merchant_id": self.merchant_id,
            "store_id": self.store_id,
            "risk_band": self.risk_band.value,
            "max_advance_limit": self.max_advance_limit,
            "recommended_repayment_rate": self.recommended_repayment_rate,
            "loss_provision_rate": self.loss_provision_rate,
            "reason_codes": list(self.reason_codes),
        }


@dataclass(frozen=True)
class AdvanceEligibilityResult:
    """
    Outcome of a working-capital advance request.

    The audit fields record which sector, cap and configuration
    revision produced the decision.
    """

    merchant_id: str
    store_id: str
    requested_amount: float
    is_eligible: bool
    approved_amount: int
    risk_profile: MerchantRiskProfile
    decision_reason: str
    estimated_payback_months: Optional[float] = None
    merchant_sector_used: Optional[MerchantSector] = None
    ethical_cap_used: Optional[float] = None
    risk_config_version_used: Optional[int] = None
    risk_config_updated_at_used: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "merchant_id": self.merchant_id,
            "store_id": self.store_id,
            "requested_amount": self.requested_amount,
            "is_eligible": self.is_eligible,
            "approved_amount": self.approved_amount,
            "risk_profile": self.risk_profile.to_dict(),
            "decision_reason": self.decision_reason,
            "estimated_payback_months": self.estimated_payback_months,
            "merchant_sector_used": (
                self.merchant_sector_used.value if self.merchant_sector_used else None
            ),
            "ethical_cap_used": self.ethical_cap_used,
            "risk_config_version_used": self.risk_config_version_used,
            "risk_config_updated_at_used": self.risk_config_updated_at_used,
        }
