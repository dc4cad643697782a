"""Data transfer objects for merchant risk and advance operations."""

import math
from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class MerchantRef:
    """Identifies a merchant within a store."""
    store_id: str
    merchant_id: str

    def validate(self) -> List[str]:
        errors = []

        if not self.store_id or not self.store_id.strip():
            errors.append("store_id is required")

        if not self.merchant_id or not self.merchant_id.strip():
            errors.append("merchant_id is required")

        return errors


@dataclass(frozen=True)
class AdvanceRequest:
    """Input data for an advance eligibility evaluation."""
    store_id: str
    merchant_id: str
    requested_amount: float

    def validate(self) -> List[str]:
        errors = MerchantRef(self.store_id, self.merchant_id).validate()

        if not math.isfinite(self.requested_amount) or self.requested_amount <= 0:
            errors.append("requested_amount must be positive")

        return errors
