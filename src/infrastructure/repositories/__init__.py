"""Repository implementations."""

from .audit_log import JsonlAuditLog
from .risk_config_repository import SqlAlchemyRiskConfigStore

__all__ = [
    "JsonlAuditLog",
    "SqlAlchemyRiskConfigStore",
]
