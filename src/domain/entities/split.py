"""Transaction split result entity."""

from dataclasses import dataclass
from typing import Optional

from .sector import MerchantSector


@dataclass(frozen=True)
class TransactionSplitResult:
    """
    Breakdown of a single transaction into its deductions.

    All amounts are in store currency, rounded to 2 decimals.
    Rates are fractions of the gross amount.

    Attributes:
        gross_amount: Transaction value as charged to the customer
        mdr_amount: Bank processing fee
        qabum_margin_amount: Platform margin
        repayment_amount: Portion routed to the outstanding advance
        merchant_net_amount: What the merchant receives
        effective_take_rate: Total deductions / gross, from the rounded amounts
        cap_exceeded: True if the intended rates exceeded the ethical cap
        final_repayment_rate: Repayment rate after applying the cap
    """

    gross_amount: float
    mdr_amount: float
    qabum_margin_amount: float
    repayment_amount: float
    merchant_net_amount: float
    effective_take_rate: float
    cap_exceeded: bool
    final_repayment_rate: float
    mdr_rate: float
    qabum_margin_rate: float
    ethical_cap: float
    sector: Optional[MerchantSector] = None

    @property
    def total_deductions(self) -> float:
        return round(self.mdr_amount + self.qabum_margin_amount + self.repayment_amount, 2)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "gross_amount": self.gross_amount,
            "mdr_amount": self.mdr_amount,
            "qabum_margin_amount": self.qabum_margin_amount,
            "repayment_amount": self.repayment_amount,
            "merchant_net_amount": self.merchant_net_amount,
            "effective_take_rate": self.effective_take_rate,
            "cap_exceeded": self.cap_exceeded,
            "final_repayment_rate": self.final_repayment_rate,
            "mdr_rate": self.mdr_rate,
            "qabum_margin_rate": self.qabum_margin_rate,
            "ethical_cap": self.ethical_cap,
            "sector": self.sector.value if self.sector else None,
        }
