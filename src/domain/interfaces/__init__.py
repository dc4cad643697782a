"""
Domain Interfaces (Ports)
"""

from .repositories import AuditLog, RiskConfigStore
from .directories import AdvanceStatusProvider, MerchantSnapshotProvider, StoreDirectory

__all__ = [
    "AuditLog",
    "RiskConfigStore",
    "AdvanceStatusProvider",
    "MerchantSnapshotProvider",
    "StoreDirectory",
]
