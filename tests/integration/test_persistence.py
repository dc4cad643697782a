"""
Integration tests for risk configuration persistence.

These tests verify:
1. The SQL store keeps every revision and returns the latest
2. Compare-and-swap on version rejects stale writes
3. The JSON-lines audit log appends and reads back entries
"""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities import AuditEntry, AuditMeta, MerchantSector
from src.domain.exceptions import ConfigVersionConflictException
from src.infrastructure.repositories import JsonlAuditLog, SqlAlchemyRiskConfigStore
from src.service.engine import default_risk_config


# =============================================================================
# SQL Risk Config Store
# =============================================================================

class TestSqlAlchemyRiskConfigStore:
    """Tests for the SQL-backed risk config store."""

    @pytest.mark.asyncio
    async def test_empty_store(self, test_session: AsyncSession):
        store = SqlAlchemyRiskConfigStore(test_session)

        assert await store.get() is None
        assert await store.list_versions() == []

    @pytest.mark.asyncio
    async def test_put_and_get(self, test_session: AsyncSession):
        store = SqlAlchemyRiskConfigStore(test_session)
        config = default_risk_config().with_revision(1, "2025-01-01T00:00:00.000Z")

        await store.put(config, expected_version=None)

        stored = await store.get()
        assert stored == config
        assert stored.sector_caps[MerchantSector.HIGH_SENSITIVITY].ethical_cap == 0.022

    @pytest.mark.asyncio
    async def test_latest_revision_wins(self, test_session: AsyncSession):
        store = SqlAlchemyRiskConfigStore(test_session)
        first = default_risk_config().with_revision(1, "2025-01-01T00:00:00.000Z")
        second = first.with_revision(2, "2025-01-02T00:00:00.000Z")

        await store.put(first, expected_version=None)
        await store.put(second, expected_version=1)

        assert (await store.get()).version == 2
        assert (await store.get_version(1)) == first
        assert [c.version for c in await store.list_versions()] == [2, 1]
        assert [c.version for c in await store.list_versions(limit=1)] == [2]

    @pytest.mark.asyncio
    async def test_stale_expected_version_rejected(self, test_session: AsyncSession):
        store = SqlAlchemyRiskConfigStore(test_session)
        first = default_risk_config().with_revision(1, "2025-01-01T00:00:00.000Z")
        await store.put(first, expected_version=None)
        await store.put(first.with_revision(2, "2025-01-02T00:00:00.000Z"), expected_version=1)

        with pytest.raises(ConfigVersionConflictException) as exc_info:
            await store.put(first.with_revision(2, "2025-01-03T00:00:00.000Z"), expected_version=1)

        assert exc_info.value.current_version == 2
        assert (await store.get()).updated_at == "2025-01-02T00:00:00.000Z"

    @pytest.mark.asyncio
    async def test_second_initialization_rejected(self, test_session: AsyncSession):
        store = SqlAlchemyRiskConfigStore(test_session)
        config = default_risk_config().with_revision(1, "2025-01-01T00:00:00.000Z")
        await store.put(config, expected_version=None)

        with pytest.raises(ConfigVersionConflictException):
            await store.put(config, expected_version=None)

    @pytest.mark.asyncio
    async def test_missing_version(self, test_session: AsyncSession):
        store = SqlAlchemyRiskConfigStore(test_session)

        assert await store.get_version(3) is None


# =============================================================================
# JSON-lines Audit Log
# =============================================================================

class TestJsonlAuditLog:
    """Tests for the append-only audit log file."""

    @pytest.mark.asyncio
    async def test_missing_file_is_empty(self, tmp_path):
        audit_log = JsonlAuditLog(str(tmp_path / "none.jsonl"))

        assert await audit_log.list_entries() == []

    @pytest.mark.asyncio
    async def test_append_creates_parent_directory(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "audit.jsonl"
        audit_log = JsonlAuditLog(str(path))
        config = default_risk_config().with_revision(1, "2025-01-01T00:00:00.000Z")

        await audit_log.append(
            AuditEntry.from_meta(AuditMeta(actor="ops"), previous=None, next=config.to_dict())
        )

        assert path.exists()
        entries = await audit_log.list_entries()
        assert len(entries) == 1
        assert entries[0].actor == "ops"
        assert entries[0].previous is None
        assert entries[0].next["version"] == 1

    @pytest.mark.asyncio
    async def test_entries_newest_first_with_limit(self, tmp_path):
        audit_log = JsonlAuditLog(str(tmp_path / "audit.jsonl"))
        base = default_risk_config()

        for version in (1, 2, 3):
            config = base.with_revision(version, f"2025-01-0{version}T00:00:00.000Z")
            await audit_log.append(
                AuditEntry.from_meta(AuditMeta(actor="ops"), previous=None, next=config.to_dict())
            )

        entries = await audit_log.list_entries(limit=2)

        assert [e.next["version"] for e in entries] == [3, 2]

    @pytest.mark.asyncio
    async def test_unreadable_lines_skipped(self, tmp_path):
        path = tmp_path / "audit.jsonl"
        audit_log = JsonlAuditLog(str(path))
        config = default_risk_config().with_revision(1, "2025-01-01T00:00:00.000Z")
        await audit_log.append(
            AuditEntry.from_meta(AuditMeta(actor="ops"), previous=None, next=config.to_dict())
        )
        with path.open("a", encoding="utf-8") as f:
            f.write("{not json\n\n")
            f.write('{"actor": "missing-ts-and-next"}\n')

        entries = await audit_log.list_entries()

        assert len(entries) == 1
        assert entries[0].actor == "ops"

    @pytest.mark.asyncio
    async def test_optional_fields_omitted_on_disk(self, tmp_path):
        path = tmp_path / "audit.jsonl"
        audit_log = JsonlAuditLog(str(path))
        config = default_risk_config().with_revision(1, "2025-01-01T00:00:00.000Z")

        await audit_log.append(
            AuditEntry.from_meta(AuditMeta(actor="ops"), previous=None, next=config.to_dict())
        )

        line = path.read_text(encoding="utf-8")
        assert '"userAgent"' not in line
        assert '"ip"' not in line
        assert line.endswith("\n")
