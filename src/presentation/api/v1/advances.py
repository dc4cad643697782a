"""Advance eligibility API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from src.application.dto import AdvanceRequest
from src.application.services import AdvanceService
from src.core.dependencies import get_advance_service
from src.core.metrics import record_advance_decision, track_advance_latency
from src.presentation.schemas import (
    AdvanceEligibilityResponseSchema,
    AdvanceRequestSchema,
    ErrorResponseSchema,
)

advances_router = APIRouter(
    prefix="/advances",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request"},
        404: {"model": ErrorResponseSchema, "description": "Store not found"},
    },
)


@advances_router.post(
    "/eligibility",
    response_model=AdvanceEligibilityResponseSchema,
    status_code=200,
    summary="Evaluate Advance Eligibility",
    description="""
    Evaluate a working-capital advance request.

    Applies the minimum-activity gate, then the rule of the merchant's
    risk band. Rejections are returned with `is_eligible=false`, not as
    errors.
    """,
    responses={
        200: {"description": "Eligibility evaluated"},
    },
)
async def evaluate_eligibility(
    request: AdvanceRequestSchema,
    advance_service: Annotated[AdvanceService, Depends(get_advance_service)],
) -> AdvanceEligibilityResponseSchema:
    dto = AdvanceRequest(
        store_id=request.store_id,
        merchant_id=request.merchant_id,
        requested_amount=request.requested_amount,
    )

    with track_advance_latency():
        result = await advance_service.evaluate_advance(dto)

    # Record business metrics
    record_advance_decision(
        result.risk_profile.risk_band.value,
        result.is_eligible,
        result.approved_amount,
    )

    return AdvanceEligibilityResponseSchema(**result.to_dict())
