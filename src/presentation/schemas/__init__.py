"""Pydantic schemas for API request/response validation."""

from .split import SplitRequestSchema, SplitResponseSchema
from .advance import (
    AdvanceRequestSchema,
    AdvanceEligibilityResponseSchema,
    RiskProfileSchema,
)
from .merchant import MerchantRefSchema, MerchantSnapshotSchema
from .risk_config import (
    AuditEntrySchema,
    AuditLogResponseSchema,
    ConfigHistoryResponseSchema,
    ConfigVersionSchema,
    GlobalParamsSchema,
    RiskConfigSchema,
    SectorCapSchema,
)
from .error import ErrorResponseSchema

__all__ = [
    "SplitRequestSchema",
    "SplitResponseSchema",
    "AdvanceRequestSchema",
    "AdvanceEligibilityResponseSchema",
    "RiskProfileSchema",
    "MerchantRefSchema",
    "MerchantSnapshotSchema",
    "AuditEntrySchema",
    "AuditLogResponseSchema",
    "ConfigHistoryResponseSchema",
    "ConfigVersionSchema",
    "GlobalParamsSchema",
    "RiskConfigSchema",
    "SectorCapSchema",
    "ErrorResponseSchema",
]
