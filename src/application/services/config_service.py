"""Risk config service - owns the lifecycle of the process-wide risk configuration."""

from typing import Any, List, Optional

import structlog

from src.application.dto import ConfigHistoryResponse
from src.core.metrics import record_audit_write_failure, record_config_update
from src.domain.entities import AuditEntry, AuditMeta, RiskConfig, utc_now_iso
from src.domain.exceptions import ConfigNotFoundException, ConfigVersionConflictException
from src.domain.interfaces import AuditLog, RiskConfigStore
from src.service.engine import default_risk_config, parse_risk_config

logger = structlog.get_logger(__name__)


class RiskConfigService:
    """
    Application service for risk configuration use cases.

    Reads return the latest stored revision, initializing the documented
    defaults on first use. Writes are compare-and-swap on ``version``:
    a caller that read revision N may only store revision N + 1.
    """

    def __init__(self, store: RiskConfigStore, audit_log: AuditLog):
        self._store = store
        self._audit_log = audit_log

    async def get_config(self) -> RiskConfig:
        """
        Get the current risk configuration.

        Persists the default configuration as version 1 when nothing
        has been stored yet.
        """
        config = await self._store.get()
        if config is not None:
            return config

        initial = default_risk_config().with_revision(1, utc_now_iso())
        try:
            config = await self._store.put(initial, expected_version=None)
        except ConfigVersionConflictException:
            # Another request initialized it first
            config = await self._store.get()
            if config is None:
                raise
            return config

        logger.info("risk_config_initialized", version=config.version)
        return config

    async def update_config(
        self,
        config: RiskConfig,
        meta: AuditMeta,
        expected_version: Optional[int] = None,
    ) -> RiskConfig:
        """
        Store a validated configuration as the next revision.

        Args:
            config: Already-validated configuration
            meta: Actor, reason and client details for the audit log
            expected_version: Revision the caller based its edit on; when
                given it must still be the latest stored revision

        Returns:
            The stored configuration, stamped with its version and updatedAt

        Raises:
            ConfigVersionConflictException: If the stored revision changed
        """
        previous = await self._store.get()
        current_version = previous.version if previous is not None else None

        log = logger.bind(
            actor=meta.actor,
            expected_version=expected_version,
            current_version=current_version,
        )

        if (
            previous is not None
            and expected_version is not None
            and expected_version != current_version
        ):
            log.warning("risk_config_version_conflict")
            raise ConfigVersionConflictException(expected_version, current_version)

        next_version = current_version + 1 if current_version is not None else 1
        next_config = config.with_revision(next_version, utc_now_iso())

        saved = await self._store.put(next_config, expected_version=current_version)
        record_config_update()
        log.info("risk_config_updated", version=saved.version, reason=meta.reason)

        entry = AuditEntry.from_meta(
            meta,
            previous=previous.to_dict() if previous is not None else None,
            next=saved.to_dict(),
        )
        try:
            await self._audit_log.append(entry)
        except Exception as e:
            # The config write is already committed; the audit gap is only reported
            record_audit_write_failure()
            log.error("audit_write_failed", version=saved.version, error=str(e))

        return saved

    async def submit_document(self, document: Any, meta: AuditMeta) -> RiskConfig:
        """
        Validate an admin-submitted document and store it.

        The document's ``version`` is the revision the admin edited and
        is used as the compare-and-swap expectation.

        Raises:
            ConfigValidationException: With every violated constraint
            ConfigVersionConflictException: If the config changed meanwhile
        """
        config = parse_risk_config(document)
        return await self.update_config(config, meta, expected_version=config.version)

    async def get_version(self, version: int) -> RiskConfig:
        """
        Get a specific stored revision.

        Raises:
            ConfigNotFoundException: If the revision does not exist
        """
        config = await self._store.get_version(version)
        if config is None:
            logger.warning("risk_config_version_not_found", version=version)
            raise ConfigNotFoundException(version)
        return config

    async def list_versions(self, limit: int = 20) -> ConfigHistoryResponse:
        configs = await self._store.list_versions(limit=limit)
        return ConfigHistoryResponse.from_entities(configs)

    async def list_audit_entries(self, limit: int = 50) -> List[AuditEntry]:
        return await self._audit_log.list_entries(limit=limit)
