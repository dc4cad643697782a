"""API endpoints for merchant snapshots and risk profiles."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query

from src.application.dto import MerchantRef
from src.application.services import AdvanceService
from src.core.dependencies import get_advance_service
from src.presentation.schemas import (
    ErrorResponseSchema,
    MerchantRefSchema,
    MerchantSnapshotSchema,
    RiskProfileSchema,
)

merchants_router = APIRouter(
    prefix="/merchants",
    responses={
        404: {"model": ErrorResponseSchema, "description": "Store not found"},
    },
)


@merchants_router.post(
    "/snapshot",
    response_model=MerchantSnapshotSchema,
    summary="Get Merchant Snapshot",
    description="""
    Retrieve the sales snapshot of a merchant.

    Unknown merchants return the synthetic high-risk snapshot.
    """,
)
async def get_snapshot(
    request: MerchantRefSchema,
    advance_service: Annotated[AdvanceService, Depends(get_advance_service)],
) -> MerchantSnapshotSchema:
    snapshot = await advance_service.get_snapshot(
        MerchantRef(store_id=request.store_id, merchant_id=request.merchant_id)
    )
    return MerchantSnapshotSchema(**snapshot.to_dict())


@merchants_router.get(
    "/{merchant_id}/risk-profile",
    response_model=RiskProfileSchema,
    summary="Get Merchant Risk Profile",
    description="Derive the current risk band, advance limit and repayment rate of a merchant.",
)
async def get_risk_profile(
    merchant_id: Annotated[
        str,
        Path(min_length=1, max_length=255, description="Merchant identifier"),
    ],
    store_id: Annotated[
        str,
        Query(min_length=1, max_length=255, description="Store the merchant sells through"),
    ],
    advance_service: Annotated[AdvanceService, Depends(get_advance_service)],
) -> RiskProfileSchema:
    profile = await advance_service.get_risk_profile(
        MerchantRef(store_id=store_id, merchant_id=merchant_id)
    )
    return RiskProfileSchema(**profile.to_dict())
