"""
Fixtures for integration tests.

Provides:
- Test client for FastAPI app
- In-memory database for testing
- Temporary audit log file
- Admin token settings
"""

from pathlib import Path
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from src.main import app
from src.core.config import Settings, get_settings
from src.core.dependencies import get_audit_log, get_risk_config_store
from src.infrastructure.database import Base
from src.infrastructure.repositories import JsonlAuditLog, SqlAlchemyRiskConfigStore

ADMIN_TOKEN = "test-admin-token"


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def test_engine():
    """Create an in-memory SQLite async engine for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def test_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async_session = async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )

    async with async_session() as session:
        yield session


# =============================================================================
# Settings and Audit Log Fixtures
# =============================================================================

@pytest.fixture
def audit_log_path(tmp_path: Path) -> Path:
    return tmp_path / "audit" / "riskConfig.audit.jsonl"


@pytest.fixture
def test_settings(audit_log_path: Path) -> Settings:
    """Settings with an admin token and a throwaway audit log."""
    return Settings(admin_token=ADMIN_TOKEN, audit_log_path=str(audit_log_path))


@pytest.fixture
def admin_headers() -> dict:
    return {"X-Qabum-Admin-Token": ADMIN_TOKEN}


# =============================================================================
# App Client Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def client(
    test_session: AsyncSession,
    test_settings: Settings,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client with overridden dependencies.

    This client:
    - Stores risk configs in an in-memory SQLite database
    - Writes the audit log to a temporary file
    - Accepts ADMIN_TOKEN for admin endpoints
    """
    async def override_get_risk_config_store():
        return SqlAlchemyRiskConfigStore(test_session)

    def override_get_audit_log():
        return JsonlAuditLog(test_settings.audit_log_path)

    def override_get_settings():
        return test_settings

    app.dependency_overrides[get_risk_config_store] = override_get_risk_config_store
    app.dependency_overrides[get_audit_log] = override_get_audit_log
    app.dependency_overrides[get_settings] = override_get_settings

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


class FailingAuditLog(JsonlAuditLog):
    """Audit log whose writes always fail."""

    async def append(self, entry) -> None:
        raise OSError("audit volume is read-only")


@pytest_asyncio.fixture
async def client_with_failing_audit_log(
    test_session: AsyncSession,
    test_settings: Settings,
) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client whose audit log cannot be written."""
    async def override_get_risk_config_store():
        return SqlAlchemyRiskConfigStore(test_session)

    def override_get_audit_log():
        return FailingAuditLog(test_settings.audit_log_path)

    def override_get_settings():
        return test_settings

    app.dependency_overrides[get_risk_config_store] = override_get_risk_config_store
    app.dependency_overrides[get_audit_log] = override_get_audit_log
    app.dependency_overrides[get_settings] = override_get_settings

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# =============================================================================
# Helper Fixtures
# =============================================================================

@pytest.fixture
def low_risk_split_request() -> dict:
    """merch-001: HIGH_SENSITIVITY, active advance."""
    return {
        "store_id": "ec-qabum-001",
        "merchant_id": "merch-001",
        "transaction_amount": 100.00,
    }


@pytest.fixture
def low_risk_advance_request() -> dict:
    return {
        "store_id": "ec-qabum-001",
        "merchant_id": "merch-001",
        "requested_amount": 25000,
    }


@pytest.fixture
def high_risk_advance_request() -> dict:
    return {
        "store_id": "ec-qabum-001",
        "merchant_id": "merch-003",
        "requested_amount": 700,
    }
