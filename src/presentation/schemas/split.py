"""Transaction split Pydantic schemas."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SplitRequestSchema(BaseModel):
    """Schema for POST /v1/transactions/split request body."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "store_id": "ec-qabum-001",
                    "merchant_id": "merch-001",
                    "transaction_amount": 100.00,
                    "has_active_advance": True,
                }
            ]
        }
    )
    store_id: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Store the transaction belongs to",
        examples=["ec-qabum-001"],
    )
    merchant_id: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Merchant receiving the payment",
        examples=["merch-001"],
    )
    transaction_amount: float = Field(
        ...,
        gt=0,
        allow_inf_nan=False,
        description="Gross transaction amount in store currency",
        examples=[100.00],
    )
    has_active_advance: Optional[bool] = Field(
        None,
        description="Whether an advance is being repaid; looked up when omitted",
    )

    @field_validator("store_id", "merchant_id")
    @classmethod
    def validate_ids(cls, v: str) -> str:
        """Ensure identifiers are not just whitespace."""
        if not v.strip():
            raise ValueError("identifier cannot be empty or whitespace")
        return v.strip()


class SplitResponseSchema(BaseModel):
    """Schema for POST /v1/transactions/split response body."""

    gross_amount: float = Field(..., description="Transaction value charged to the customer")
    mdr_amount: float = Field(..., ge=0, description="Bank processing fee")
    qabum_margin_amount: float = Field(..., ge=0, description="Platform margin")
    repayment_amount: float = Field(..., ge=0, description="Amount routed to the active advance")
    merchant_net_amount: float = Field(..., description="Amount the merchant receives")
    effective_take_rate: float = Field(
        ...,
        ge=0,
        description="Total deductions / gross, from the rounded amounts",
    )
    cap_exceeded: bool = Field(
        ...,
        description="True if the repayment rate was reduced to respect the ethical cap",
    )
    final_repayment_rate: float = Field(..., ge=0, description="Repayment rate actually applied")
    mdr_rate: float = Field(..., ge=0, description="MDR rate applied")
    qabum_margin_rate: float = Field(..., ge=0, description="Platform margin rate applied")
    ethical_cap: float = Field(..., ge=0, description="Ethical cap in force for the sector")
    sector: Optional[str] = Field(None, description="Merchant sector, null when unknown")

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "gross_amount": 100.00,
                    "mdr_amount": 2.20,
                    "qabum_margin_amount": 0.70,
                    "repayment_amount": 0.10,
                    "merchant_net_amount": 97.00,
                    "effective_take_rate": 0.03,
                    "cap_exceeded": True,
                    "final_repayment_rate": 0.001,
                    "mdr_rate": 0.022,
                    "qabum_margin_rate": 0.007,
                    "ethical_cap": 0.03,
                    "sector": "HIGH_MARGIN_SERVICE",
                }
            ]
        }
    )
