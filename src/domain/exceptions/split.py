"""Transaction split domain exceptions."""

from .base import DomainException


class InvalidSplitRequestException(DomainException):
    """Raised when a split request is invalid."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="INVALID_SPLIT_REQUEST",
        )


class InconsistentRateConfigurationException(DomainException):
    """
    Raised when the MDR and margin alone already exceed the ethical cap.

    No repayment reduction can bring such a split under the cap, so the
    configuration itself must be fixed.
    """

    def __init__(self, sector: str, ethical_cap: float, fixed_rate: float):
        super().__init__(
            message=(
                f"Inconsistent rate configuration for sector {sector}: "
                f"MDR + margin ({fixed_rate:.4f}) exceeds ethical cap ({ethical_cap:.4f})"
            ),
            code="INCONSISTENT_RATE_CONFIGURATION",
        )
        self.sector = sector
        self.ethical_cap = ethical_cap
        self.fixed_rate = fixed_rate
