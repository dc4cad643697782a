"""Store lookup domain exceptions."""

from .base import DomainException


class StoreNotFoundException(DomainException):
    """Raised when a store id has no configuration."""

    def __init__(self, store_id: str):
        super().__init__(
            message=f"Store config not found: {store_id}",
            code="STORE_NOT_FOUND",
        )
        self.store_id = store_id
