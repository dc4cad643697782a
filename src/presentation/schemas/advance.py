"""Risk profile and advance eligibility Pydantic schemas."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AdvanceRequestSchema(BaseModel):
    """Schema for POST /v1/advances/eligibility request body."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "store_id": "ec-qabum-001",
                    "merchant_id": "merch-001",
                    "requested_amount": 25000,
                }
            ]
        }
    )
    store_id: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Store the merchant sells through",
        examples=["ec-qabum-001"],
    )
    merchant_id: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Merchant requesting the advance",
        examples=["merch-001"],
    )
    requested_amount: float = Field(
        ...,
        gt=0,
        allow_inf_nan=False,
        description="Requested advance in store currency",
        examples=[25000],
    )

    @field_validator("store_id", "merchant_id")
    @classmethod
    def validate_ids(cls, v: str) -> str:
        """Ensure identifiers are not just whitespace."""
        if not v.strip():
            raise ValueError("identifier cannot be empty or whitespace")
        return v.strip()


class RiskProfileSchema(BaseModel):
    """Schema for a merchant risk profile."""

    merchant_id: str
    store_id: str
    risk_band: str = Field(..., description="LOW, MEDIUM or HIGH", examples=["LOW"])
    max_advance_limit: int = Field(
        ...,
        ge=0,
        description="Largest advance in whole currency units",
        examples=[30000],
    )
    recommended_repayment_rate: float = Field(
        ...,
        ge=0,
        description="Repayment rate, already clamped to the sector's ethical cap",
        examples=[0.001],
    )
    loss_provision_rate: float = Field(..., ge=0, examples=[0.01])
    reason_codes: list[str] = Field(
        default_factory=list,
        description="Diagnostic codes in evaluation order",
        examples=[["LOW_RISK_PROFILE"]],
    )


class AdvanceEligibilityResponseSchema(BaseModel):
    """Schema for POST /v1/advances/eligibility response body."""

    merchant_id: str
    store_id: str
    requested_amount: float
    is_eligible: bool
    approved_amount: int = Field(..., ge=0, description="Approved amount, floored")
    risk_profile: RiskProfileSchema
    decision_reason: str = Field(
        ...,
        examples=["Requested: USD 25,000.00. Limit: USD 30,000.00. Approved: full requested amount."],
    )
    estimated_payback_months: Optional[float] = Field(
        None,
        description="Months to repay at current sales; null when not computable",
    )
    merchant_sector_used: Optional[str] = None
    ethical_cap_used: Optional[float] = None
    risk_config_version_used: Optional[int] = None
    risk_config_updated_at_used: Optional[str] = None
