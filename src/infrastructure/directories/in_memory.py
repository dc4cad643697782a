"""In-memory store and merchant directories seeded with reference data."""

from typing import Dict, Iterable, Optional, Tuple

import structlog

from src.domain.entities import MerchantSalesSnapshot, MerchantSector, StoreConfig
from src.domain.exceptions import StoreNotFoundException
from src.domain.interfaces import (
    AdvanceStatusProvider,
    MerchantSnapshotProvider,
    StoreDirectory,
)

logger = structlog.get_logger(__name__)


SEED_STORES = [
    StoreConfig(
        id="ec-qabum-001",
        code="QABUM_EC",
        country_code="EC",
        currency_code="USD",
        take_rate_cap=0.0300,
        default_mdr=0.0220,
        default_qabum_margin_cap=0.0150,
        default_repayment_rate=0.0080,
    ),
    StoreConfig(
        id="uk-qabum-001",
        code="QABUM_UK",
        country_code="GB",
        currency_code="GBP",
        take_rate_cap=0.0250,
        default_mdr=0.0150,
        default_qabum_margin_cap=0.0100,
        default_repayment_rate=0.0050,
    ),
]

SEED_SNAPSHOTS = [
    # LOW risk: limit 30,000
    MerchantSalesSnapshot(
        merchant_id="merch-001",
        store_id="ec-qabum-001",
        average_monthly_volume=30000,
        monthly_volatility_index=0.15,
        months_active=24,
        recent_active_months=3,
        has_recent_drop=False,
        failed_split_count=0,
        sector=MerchantSector.HIGH_SENSITIVITY,
    ),
    # MEDIUM risk: limit 3,500
    MerchantSalesSnapshot(
        merchant_id="merch-002",
        store_id="ec-qabum-001",
        average_monthly_volume=5000,
        monthly_volatility_index=0.45,
        months_active=8,
        recent_active_months=3,
        has_recent_drop=False,
        failed_split_count=1,
        sector=MerchantSector.STANDARD_PYME,
    ),
    # HIGH risk: limit 600, high-risk cap 300
    MerchantSalesSnapshot(
        merchant_id="merch-003",
        store_id="ec-qabum-001",
        average_monthly_volume=1500,
        monthly_volatility_index=0.70,
        months_active=3,
        recent_active_months=3,
        has_recent_drop=True,
        failed_split_count=3,
        sector=MerchantSector.HIGH_MARGIN_SERVICE,
    ),
]

SEED_ACTIVE_ADVANCES = {
    ("ec-qabum-001", "merch-001"): True,
    ("ec-qabum-001", "merch-002"): False,
    ("ec-qabum-001", "merch-003"): False,
}


class InMemoryStoreDirectory(StoreDirectory):
    """Store directory backed by a fixed map."""

    def __init__(self, stores: Optional[Iterable[StoreConfig]] = None):
        self._stores: Dict[str, StoreConfig] = {
            store.id: store for store in (SEED_STORES if stores is None else stores)
        }

    def get(self, store_id: str) -> StoreConfig:
        store = self._stores.get(store_id)
        if store is None:
            logger.warning("store_not_found", store_id=store_id)
            raise StoreNotFoundException(store_id)
        return store


class InMemoryMerchantSnapshotProvider(MerchantSnapshotProvider):
    """Snapshot provider backed by a fixed map; misses yield the high-risk default."""

    def __init__(self, snapshots: Optional[Iterable[MerchantSalesSnapshot]] = None):
        self._snapshots: Dict[Tuple[str, str], MerchantSalesSnapshot] = {
            (s.store_id, s.merchant_id): s
            for s in (SEED_SNAPSHOTS if snapshots is None else snapshots)
        }

    async def get(self, store_id: str, merchant_id: str) -> MerchantSalesSnapshot:
        snapshot = self._snapshots.get((store_id, merchant_id))
        if snapshot is None:
            logger.info("merchant_snapshot_missing", store_id=store_id, merchant_id=merchant_id)
            return MerchantSalesSnapshot.unknown(store_id, merchant_id)
        return snapshot


class InMemoryAdvanceStatusProvider(AdvanceStatusProvider):
    """Advance status backed by a fixed map; unknown merchants have no advance."""

    def __init__(self, statuses: Optional[Dict[Tuple[str, str], bool]] = None):
        self._statuses = dict(SEED_ACTIVE_ADVANCES if statuses is None else statuses)

    async def has_active_advance(self, store_id: str, merchant_id: str) -> bool:
        return self._statuses.get((store_id, merchant_id), False)
