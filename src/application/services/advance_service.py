"""Advance service - merchant risk profiles and advance eligibility."""

from typing import Optional

import structlog

from src.application.dto import AdvanceRequest, MerchantRef
from src.application.services.config_service import RiskConfigService
from src.domain.entities import (
    AdvanceEligibilityResult,
    MerchantRiskProfile,
    MerchantSalesSnapshot,
    RiskConfig,
)
from src.domain.exceptions import InvalidAdvanceRequestException
from src.domain.interfaces import MerchantSnapshotProvider, StoreDirectory
from src.service.engine import (
    EngineSettings,
    derive_risk_profile,
    engine_settings,
    evaluate_advance,
)

logger = structlog.get_logger(__name__)


class AdvanceService:
    """
    Application service for working-capital advance use cases.
    """

    def __init__(
        self,
        config_service: RiskConfigService,
        store_directory: StoreDirectory,
        snapshot_provider: MerchantSnapshotProvider,
        settings: EngineSettings = engine_settings,
    ):
        self._config_service = config_service
        self._stores = store_directory
        self._snapshots = snapshot_provider
        self._settings = settings

    async def get_snapshot(self, ref: MerchantRef) -> MerchantSalesSnapshot:
        """
        Get the sales snapshot of a merchant.

        Unknown merchants yield the synthetic high-risk snapshot.

        Raises:
            InvalidAdvanceRequestException: If the reference is incomplete
            StoreNotFoundException: If the store is unknown
        """
        errors = ref.validate()
        if errors:
            raise InvalidAdvanceRequestException("; ".join(errors))

        self._stores.get(ref.store_id)
        return await self._snapshots.get(ref.store_id, ref.merchant_id)

    async def get_risk_profile(
        self,
        ref: MerchantRef,
        config: Optional[RiskConfig] = None,
    ) -> MerchantRiskProfile:
        snapshot = await self.get_snapshot(ref)
        if config is None:
            config = await self._config_service.get_config()

        profile = derive_risk_profile(snapshot, config, self._settings)
        logger.info(
            "risk_profile_derived",
            store_id=ref.store_id,
            merchant_id=ref.merchant_id,
            risk_band=profile.risk_band.value,
            max_advance_limit=profile.max_advance_limit,
            reason_codes=profile.reason_codes,
        )
        return profile

    async def evaluate_advance(
        self,
        request: AdvanceRequest,
        config: Optional[RiskConfig] = None,
    ) -> AdvanceEligibilityResult:
        """
        Evaluate an advance request for a merchant.

        Args:
            request: Store, merchant and requested amount
            config: Previously fetched config to pin; the current one if None

        Returns:
            AdvanceEligibilityResult with the approved amount and audit fields

        Raises:
            InvalidAdvanceRequestException: If request validation fails
            StoreNotFoundException: If the store is unknown
        """
        errors = request.validate()
        if errors:
            raise InvalidAdvanceRequestException("; ".join(errors))

        log = logger.bind(
            store_id=request.store_id,
            merchant_id=request.merchant_id,
            requested_amount=request.requested_amount,
        )
        log.info("advance_requested")

        store = self._stores.get(request.store_id)
        snapshot = await self._snapshots.get(request.store_id, request.merchant_id)

        if config is None:
            config = await self._config_service.get_config()

        result = evaluate_advance(
            snapshot=snapshot,
            requested_amount=request.requested_amount,
            config=config,
            currency_code=store.currency_code,
            settings=self._settings,
        )

        log.info(
            "advance_evaluated",
            risk_band=result.risk_profile.risk_band.value,
            is_eligible=result.is_eligible,
            approved_amount=result.approved_amount,
            max_advance_limit=result.risk_profile.max_advance_limit,
            config_version=result.risk_config_version_used,
        )

        return result
