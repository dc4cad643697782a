"""Application services (use cases)."""

from .config_service import RiskConfigService
from .transaction_service import TransactionService
from .advance_service import AdvanceService

__all__ = [
    "RiskConfigService",
    "TransactionService",
    "AdvanceService",
]
