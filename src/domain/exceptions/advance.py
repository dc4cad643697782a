"""Advance request domain exceptions."""

from .base import DomainException


class InvalidAdvanceRequestException(DomainException):
    """Raised when an advance eligibility request is invalid."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="INVALID_ADVANCE_REQUEST",
        )
