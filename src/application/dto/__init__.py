"""Data Transfer Objects for application layer."""

from .advance import AdvanceRequest, MerchantRef
from .config import ConfigHistoryResponse, ConfigVersionSummary
from .split import SplitRequest

__all__ = [
    "AdvanceRequest",
    "MerchantRef",
    "ConfigHistoryResponse",
    "ConfigVersionSummary",
    "SplitRequest",
]
