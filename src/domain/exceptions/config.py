"""Risk configuration domain exceptions."""

from typing import List, Optional

from .base import DomainException


class ConfigNotFoundException(DomainException):
    """Raised when a risk configuration revision does not exist."""

    def __init__(self, version: Optional[int] = None):
        message = (
            f"Risk config version not found: {version}"
            if version is not None
            else "Risk config not found"
        )
        super().__init__(message=message, code="CONFIG_NOT_FOUND")
        self.version = version


class ConfigValidationException(DomainException):
    """Raised when a submitted risk configuration violates its constraints."""

    def __init__(self, errors: List[str]):
        super().__init__(
            message="Validation failed",
            code="CONFIG_VALIDATION_FAILED",
        )
        self.errors = list(errors)


class ConfigVersionConflictException(DomainException):
    """Raised when the stored config changed since the caller read it."""

    def __init__(self, expected_version: Optional[int], current_version: Optional[int]):
        super().__init__(
            message=(
                f"Risk config version conflict: expected {expected_version}, "
                f"found {current_version}"
            ),
            code="CONFIG_VERSION_CONFLICT",
        )
        self.expected_version = expected_version
        self.current_version = current_version
