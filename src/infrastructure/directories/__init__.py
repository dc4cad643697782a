"""Directory implementations for store and merchant reference data."""

from .in_memory import (
    InMemoryAdvanceStatusProvider,
    InMemoryMerchantSnapshotProvider,
    InMemoryStoreDirectory,
)

__all__ = [
    "InMemoryAdvanceStatusProvider",
    "InMemoryMerchantSnapshotProvider",
    "InMemoryStoreDirectory",
]
