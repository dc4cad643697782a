"""SQL repository implementation for risk configuration revisions."""

from typing import List, Optional

import structlog
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities import RiskConfig
from src.domain.exceptions import ConfigVersionConflictException
from src.domain.interfaces import RiskConfigStore
from src.infrastructure.database.models import RiskConfigModel

logger = structlog.get_logger(__name__)


class SqlAlchemyRiskConfigStore(RiskConfigStore):
    """
    SQL-backed store keeping every configuration revision.

    The latest revision is the row with the highest version.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get(self) -> Optional[RiskConfig]:
        stmt = select(RiskConfigModel).order_by(RiskConfigModel.version.desc()).limit(1)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._to_entity(model)

    async def get_version(self, version: int) -> Optional[RiskConfig]:
        model = await self._session.get(RiskConfigModel, version)

        if model is None:
            return None

        return self._to_entity(model)

    async def list_versions(self, limit: int = 20) -> List[RiskConfig]:
        stmt = (
            select(RiskConfigModel)
            .order_by(RiskConfigModel.version.desc())
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        models = result.scalars().all()

        return [self._to_entity(model) for model in models]

    async def put(self, config: RiskConfig, expected_version: Optional[int]) -> RiskConfig:
        """
        Insert a new revision if the latest stored one is still ``expected_version``.

        The write is committed before returning, so callers can treat
        the revision as durable (the audit log is appended afterwards).

        Raises:
            ConfigVersionConflictException: If another revision was stored
                since the caller read, or the version row already exists
        """
        current_version = await self._session.scalar(select(func.max(RiskConfigModel.version)))
        if current_version != expected_version:
            raise ConfigVersionConflictException(expected_version, current_version)

        model = RiskConfigModel(
            version=config.version,
            document=config.to_dict(),
            updated_at=config.updated_at,
        )
        self._session.add(model)

        try:
            await self._session.flush()
            await self._session.commit()
        except IntegrityError:
            await self._session.rollback()
            logger.warning("risk_config_write_race_lost", version=config.version)
            raise ConfigVersionConflictException(expected_version, config.version)

        return config

    def _to_entity(self, model: RiskConfigModel) -> RiskConfig:
        return RiskConfig.from_dict(model.document)
