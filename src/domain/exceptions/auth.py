"""Authorization domain exceptions."""

from .base import DomainException


class UnauthorizedException(DomainException):
    """Raised when an admin operation is called without a valid token."""

    def __init__(self):
        super().__init__(message="Unauthorized", code="UNAUTHORIZED")
