"""Pydantic schema for API error responses."""

from typing import Optional

from pydantic import BaseModel, Field


class ErrorResponseSchema(BaseModel):
    """Standard error response format for all API errors."""
    error: str = Field(
        ...,
        description="Error code",
        examples=["STORE_NOT_FOUND"],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
        examples=["Store config not found: xx-qabum-999"],
    )
    request_id: str | None = Field(
        None,
        description="Request ID for tracing",
    )
    errors: Optional[list[str]] = Field(
        None,
        description="Every violated constraint (configuration validation only)",
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "error": "CONFIG_VALIDATION_FAILED",
                    "message": "Validation failed",
                    "request_id": "abc123",
                    "errors": ["defaultMdr must be a finite number between 0 and 1"],
                }
            ]
        }
    }
