"""Dependency injection for FastAPI."""

from functools import lru_cache
from typing import Annotated, Optional

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.services import AdvanceService, RiskConfigService, TransactionService
from src.core.config import Settings, get_settings
from src.domain.exceptions import UnauthorizedException
from src.infrastructure.database import get_db_session
from src.infrastructure.directories import (
    InMemoryAdvanceStatusProvider,
    InMemoryMerchantSnapshotProvider,
    InMemoryStoreDirectory,
)
from src.infrastructure.repositories import JsonlAuditLog, SqlAlchemyRiskConfigStore
from src.service.engine import EngineSettings, get_engine_settings


# Repository dependencies
async def get_risk_config_store(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> SqlAlchemyRiskConfigStore:
    """Get a RiskConfigStore instance."""
    return SqlAlchemyRiskConfigStore(session)


def get_audit_log(
    settings: Annotated[Settings, Depends(get_settings)],
) -> JsonlAuditLog:
    """Get an AuditLog instance."""
    return JsonlAuditLog(settings.audit_log_path)


# Directory dependencies (process-wide reference data)
@lru_cache
def get_store_directory() -> InMemoryStoreDirectory:
    """Get the StoreDirectory instance."""
    return InMemoryStoreDirectory()


@lru_cache
def get_snapshot_provider() -> InMemoryMerchantSnapshotProvider:
    """Get the MerchantSnapshotProvider instance."""
    return InMemoryMerchantSnapshotProvider()


@lru_cache
def get_advance_status_provider() -> InMemoryAdvanceStatusProvider:
    """Get the AdvanceStatusProvider instance."""
    return InMemoryAdvanceStatusProvider()


# Service dependencies
async def get_config_service(
    store: Annotated[SqlAlchemyRiskConfigStore, Depends(get_risk_config_store)],
    audit_log: Annotated[JsonlAuditLog, Depends(get_audit_log)],
) -> RiskConfigService:
    """Get a RiskConfigService instance."""
    return RiskConfigService(store=store, audit_log=audit_log)


async def get_transaction_service(
    config_service: Annotated[RiskConfigService, Depends(get_config_service)],
    stores: Annotated[InMemoryStoreDirectory, Depends(get_store_directory)],
    snapshots: Annotated[InMemoryMerchantSnapshotProvider, Depends(get_snapshot_provider)],
    advance_status: Annotated[InMemoryAdvanceStatusProvider, Depends(get_advance_status_provider)],
    engine_settings: Annotated[EngineSettings, Depends(get_engine_settings)],
) -> TransactionService:
    """Get a TransactionService instance with all dependencies."""
    return TransactionService(
        config_service=config_service,
        store_directory=stores,
        snapshot_provider=snapshots,
        advance_status_provider=advance_status,
        settings=engine_settings,
    )


async def get_advance_service(
    config_service: Annotated[RiskConfigService, Depends(get_config_service)],
    stores: Annotated[InMemoryStoreDirectory, Depends(get_store_directory)],
    snapshots: Annotated[InMemoryMerchantSnapshotProvider, Depends(get_snapshot_provider)],
    engine_settings: Annotated[EngineSettings, Depends(get_engine_settings)],
) -> AdvanceService:
    """Get an AdvanceService instance with all dependencies."""
    return AdvanceService(
        config_service=config_service,
        store_directory=stores,
        snapshot_provider=snapshots,
        settings=engine_settings,
    )


# Admin access
def require_admin_token(
    settings: Annotated[Settings, Depends(get_settings)],
    x_qabum_admin_token: Annotated[Optional[str], Header()] = None,
) -> None:
    """
    Reject admin calls without the configured token.

    Raises:
        UnauthorizedException: If no token is configured or it does not match
    """
    if not settings.admin_token or x_qabum_admin_token != settings.admin_token:
        raise UnauthorizedException()

