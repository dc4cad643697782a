"""Data transfer objects for transaction split operations."""

import math
from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class SplitRequest:
    """
    Input data for splitting a transaction.

    ``has_active_advance`` is None when the caller leaves it to the
    advance-status provider.
    """
    store_id: str
    merchant_id: str
    transaction_amount: float
    has_active_advance: Optional[bool] = None

    def validate(self) -> List[str]:
        errors = []

        if not self.store_id or not self.store_id.strip():
            errors.append("store_id is required")

        if not self.merchant_id or not self.merchant_id.strip():
            errors.append("merchant_id is required")

        if not math.isfinite(self.transaction_amount) or self.transaction_amount <= 0:
            errors.append("transaction_amount must be positive")

        return errors
