"""Domain Exceptions - Business rule violations and domain errors."""

from .base import DomainException
from .advance import InvalidAdvanceRequestException
from .auth import UnauthorizedException
from .config import (
    ConfigNotFoundException,
    ConfigValidationException,
    ConfigVersionConflictException,
)
from .split import (
    InconsistentRateConfigurationException,
    InvalidSplitRequestException,
)
from .store import StoreNotFoundException

__all__ = [
    "DomainException",
    "InvalidAdvanceRequestException",
    "UnauthorizedException",
    "ConfigNotFoundException",
    "ConfigValidationException",
    "ConfigVersionConflictException",
    "InconsistentRateConfigurationException",
    "InvalidSplitRequestException",
    "StoreNotFoundException",
]
