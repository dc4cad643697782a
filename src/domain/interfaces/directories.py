"""Interfaces for merchant and store reference data lookups."""

from abc import ABC, abstractmethod

from src.domain.entities import MerchantSalesSnapshot, StoreConfig


class StoreDirectory(ABC):
    """Synchronous lookup of store reference data."""

    @abstractmethod
    def get(self, store_id: str) -> StoreConfig:
        """
        Look up a store by id.

        Raises:
            StoreNotFoundException: If the store doesn't exist
        """
        ...


class MerchantSnapshotProvider(ABC):
    """
    Provides sales snapshots for risk assessment.

    Implementations never fail on a lookup miss; they return
    ``MerchantSalesSnapshot.unknown`` instead.
    """

    @abstractmethod
    async def get(self, store_id: str, merchant_id: str) -> MerchantSalesSnapshot:
        """Fetch the current sales snapshot for a merchant."""
        ...


class AdvanceStatusProvider(ABC):
    """Reports whether a merchant currently has an outstanding advance."""

    @abstractmethod
    async def has_active_advance(self, store_id: str, merchant_id: str) -> bool:
        """Return True if repayments should be skimmed from this merchant's sales."""
        ...
