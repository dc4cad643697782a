"""Merchant snapshot Pydantic schemas."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class MerchantRefSchema(BaseModel):
    """Schema for POST /v1/merchants/snapshot request body."""

    store_id: str = Field(..., min_length=1, max_length=255, examples=["ec-qabum-001"])
    merchant_id: str = Field(..., min_length=1, max_length=255, examples=["merch-002"])

    @field_validator("store_id", "merchant_id")
    @classmethod
    def validate_ids(cls, v: str) -> str:
        """Ensure identifiers are not just whitespace."""
        if not v.strip():
            raise ValueError("identifier cannot be empty or whitespace")
        return v.strip()


class MerchantSnapshotSchema(BaseModel):
    """Schema for a merchant sales snapshot."""

    merchant_id: str
    store_id: str
    average_monthly_volume: float = Field(..., description="Average monthly sales")
    monthly_volatility_index: float = Field(..., description="0.0 (stable) to 1.0 (erratic)")
    months_active: int
    recent_active_months: int
    has_recent_drop: bool
    failed_split_count: int
    sector: Optional[str] = None
    merchant_name: Optional[str] = None
    onboard_date: Optional[str] = None
