"""Transaction service - orchestrates the transaction split use case."""

from typing import Optional

import structlog

from src.application.dto import SplitRequest
from src.application.services.config_service import RiskConfigService
from src.core.metrics import record_inconsistent_rate_config
from src.domain.entities import RiskConfig, TransactionSplitResult
from src.domain.exceptions import (
    InconsistentRateConfigurationException,
    InvalidSplitRequestException,
)
from src.domain.interfaces import (
    AdvanceStatusProvider,
    MerchantSnapshotProvider,
    StoreDirectory,
)
from src.service.engine import EngineSettings, calculate_split, engine_settings

logger = structlog.get_logger(__name__)


class TransactionService:
    """
    Application service for transaction split use cases.
    """

    def __init__(
        self,
        config_service: RiskConfigService,
        store_directory: StoreDirectory,
        snapshot_provider: MerchantSnapshotProvider,
        advance_status_provider: AdvanceStatusProvider,
        settings: EngineSettings = engine_settings,
    ):
        self._config_service = config_service
        self._stores = store_directory
        self._snapshots = snapshot_provider
        self._advance_status = advance_status_provider
        self._settings = settings

    async def calculate_split(
        self,
        request: SplitRequest,
        config: Optional[RiskConfig] = None,
    ) -> TransactionSplitResult:
        """
        Split a transaction for a merchant.

        When the request leaves ``has_active_advance`` unset, the flag is
        read from the advance-status provider.

        Args:
            request: Store, merchant, amount and optional advance flag
            config: Previously fetched config to pin; the current one if None

        Returns:
            TransactionSplitResult for the merchant's sector

        Raises:
            InvalidSplitRequestException: If request validation fails
            StoreNotFoundException: If the store is unknown
            InconsistentRateConfigurationException: If MDR + margin exceed the cap
        """
        errors = request.validate()
        if errors:
            raise InvalidSplitRequestException("; ".join(errors))

        log = logger.bind(
            store_id=request.store_id,
            merchant_id=request.merchant_id,
            transaction_amount=request.transaction_amount,
        )

        store = self._stores.get(request.store_id)
        snapshot = await self._snapshots.get(request.store_id, request.merchant_id)

        has_active_advance = request.has_active_advance
        if has_active_advance is None:
            has_active_advance = await self._advance_status.has_active_advance(
                request.store_id, request.merchant_id
            )
            log.info("advance_status_resolved", has_active_advance=has_active_advance)

        if config is None:
            config = await self._config_service.get_config()

        try:
            result = calculate_split(
                transaction_amount=request.transaction_amount,
                has_active_advance=has_active_advance,
                config=config,
                sector=snapshot.sector,
                settings=self._settings,
            )
        except InconsistentRateConfigurationException as e:
            record_inconsistent_rate_config(e.sector)
            log.error(
                "inconsistent_rate_configuration",
                sector=e.sector,
                ethical_cap=e.ethical_cap,
                fixed_rate=e.fixed_rate,
                config_version=config.version,
            )
            raise

        log.info(
            "transaction_split_recorded",
            currency=store.currency_code,
            sector=result.sector.value if result.sector else None,
            has_active_advance=has_active_advance,
            mdr_amount=result.mdr_amount,
            qabum_margin_amount=result.qabum_margin_amount,
            repayment_amount=result.repayment_amount,
            merchant_net_amount=result.merchant_net_amount,
            effective_take_rate=result.effective_take_rate,
            cap_exceeded=result.cap_exceeded,
            config_version=config.version,
        )

        return result
