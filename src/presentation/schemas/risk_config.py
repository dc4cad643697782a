"""Risk configuration Pydantic schemas.

Configuration documents keep their persisted camelCase shape on the wire.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class GlobalParamsSchema(BaseModel):
    """Global parameters of a risk configuration."""

    defaultMdr: float = Field(..., examples=[0.014])
    defaultQabumMarginCap: float = Field(..., examples=[0.007])
    defaultRepaymentRate: float = Field(..., examples=[0.008])
    maxAdvanceMultipleOfAvgMonthlySales: float = Field(..., examples=[1.0])
    minPaybackMonths: int = Field(..., examples=[1])
    maxPaybackMonths: int = Field(..., examples=[12])
    minPlatformAgeMonths: int = Field(..., examples=[3])
    minActiveMonthsLastN: int = Field(..., examples=[3])


class SectorCapSchema(BaseModel):
    """Ethical cap and optional advance multiple override for one sector."""

    ethicalCap: float = Field(..., examples=[0.022])
    maxAdvanceMultipleOfAvgMonthlySales: Optional[float] = None


class RiskConfigSchema(BaseModel):
    """Schema for GET/PUT /v1/risk-config response bodies."""

    model_config = ConfigDict(populate_by_name=True)

    version: int = Field(..., ge=1, examples=[3])
    updatedAt: Optional[str] = Field(None, examples=["2025-01-15T10:30:00.000Z"])
    global_params: GlobalParamsSchema = Field(..., alias="global")
    sectorCaps: dict[str, SectorCapSchema]


class ConfigVersionSchema(BaseModel):
    """Summary of one stored configuration revision."""

    version: int
    updated_at: Optional[str] = None


class ConfigHistoryResponseSchema(BaseModel):
    """Schema for GET /v1/risk-config/versions response."""

    current_version: Optional[int] = None
    versions: list[ConfigVersionSchema] = Field(
        ...,
        description="Stored revisions, newest first",
    )


class AuditEntrySchema(BaseModel):
    """One audit record, in the same shape as the audit log line."""

    ts: str
    actor: str
    reason: str
    userAgent: Optional[str] = None
    ip: Optional[str] = None
    previous: Optional[dict[str, Any]] = None
    next: dict[str, Any]


class AuditLogResponseSchema(BaseModel):
    """Schema for GET /v1/risk-config/audit response."""

    entries: list[AuditEntrySchema] = Field(..., description="Audit records, newest first")
