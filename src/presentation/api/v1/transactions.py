"""Transaction split API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from src.application.dto import SplitRequest
from src.application.services import TransactionService
from src.core.dependencies import get_transaction_service
from src.core.metrics import record_split, track_split_latency
from src.presentation.schemas import (
    ErrorResponseSchema,
    SplitRequestSchema,
    SplitResponseSchema,
)

transactions_router = APIRouter(
    prefix="/transactions",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request"},
        404: {"model": ErrorResponseSchema, "description": "Store not found"},
        422: {
            "model": ErrorResponseSchema,
            "description": "MDR and margin alone exceed the sector's ethical cap",
        },
    },
)


@transactions_router.post(
    "/split",
    response_model=SplitResponseSchema,
    status_code=200,
    summary="Split Transaction",
    description="""
    Split a transaction into MDR, platform margin and advance repayment.

    The total deduction never exceeds the ethical cap of the merchant's
    sector; only the repayment portion is reduced to respect it. When
    `has_active_advance` is omitted it is looked up for the merchant.
    """,
    responses={
        200: {"description": "Split computed successfully"},
    },
)
async def split_transaction(
    request: SplitRequestSchema,
    transaction_service: Annotated[TransactionService, Depends(get_transaction_service)],
) -> SplitResponseSchema:
    dto = SplitRequest(
        store_id=request.store_id,
        merchant_id=request.merchant_id,
        transaction_amount=request.transaction_amount,
        has_active_advance=request.has_active_advance,
    )

    with track_split_latency():
        result = await transaction_service.calculate_split(dto)

    record_split(result.cap_exceeded, result.gross_amount)

    return SplitResponseSchema(**result.to_dict())
