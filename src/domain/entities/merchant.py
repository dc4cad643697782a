"""Store and merchant reference data supplied by external collaborators."""

from dataclasses import dataclass
from typing import Optional

from .sector import MerchantSector


@dataclass(frozen=True)
class StoreConfig:
    """
    Immutable store reference data.

    The rate fields are legacy per-store defaults; the engines read
    their rates from the risk configuration instead.
    """

    id: str
    code: str
    country_code: str
    currency_code: str
    take_rate_cap: float
    default_mdr: float
    default_qabum_margin_cap: float
    default_repayment_rate: float


@dataclass(frozen=True)
class MerchantSalesSnapshot:
    """
    Point-in-time aggregate of a merchant's sales history.

    Attributes:
        merchant_id: Merchant identifier
        store_id: Store the merchant sells through
        average_monthly_volume: Average monthly sales in store currency
        monthly_volatility_index: 0.0 (stable) to 1.0 (erratic)
        months_active: Months since the merchant started selling
        recent_active_months: Months with sales inside the recent window
        has_recent_drop: True if sales dropped sharply recently
        failed_split_count: Splits that could not be settled
        sector: Business sector, None when unknown
    """

    merchant_id: str
    store_id: str
    average_monthly_volume: float
    monthly_volatility_index: float
    months_active: int
    recent_active_months: int
    has_recent_drop: bool
    failed_split_count: int
    sector: Optional[MerchantSector] = None
    merchant_name: Optional[str] = None
    onboard_date: Optional[str] = None

    @classmethod
    def unknown(cls, store_id: str, merchant_id: str) -> "MerchantSalesSnapshot":
        """Synthetic high-risk snapshot for merchants with no history."""
        return cls(
            merchant_id=merchant_id,
            store_id=store_id,
            average_monthly_volume=0.0,
            monthly_volatility_index=1.0,
            months_active=0,
            recent_active_months=0,
            has_recent_drop=True,
            failed_split_count=10,
        )

    def to_dict(self) -> dict:
        return {
            "merchant_id": self.merchant_id,
            "store_id": self.store_id,
            "average_monthly_volume": self.average_monthly_volume,
            "monthly_volatility_index": self.monthly_volatility_index,
            "months_active": self.months_active,
            "recent_active_months": self.recent_active_months,
            "has_recent_drop": self.has_recent_drop,
            "failed_split_count": self.failed_split_count,
            "sector": self.sector.value if self.sector else None,
            "merchant_name": self.merchant_name,
            "onboard_date": self.onboard_date,
        }
