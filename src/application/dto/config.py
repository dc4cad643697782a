"""Data transfer objects for risk configuration operations."""

from dataclasses import dataclass
from typing import List, Optional

from src.domain.entities import RiskConfig


@dataclass(frozen=True)
class ConfigVersionSummary:
    """Brief summary of a stored configuration revision."""

    version: int
    updated_at: Optional[str]

    @classmethod
    def from_entity(cls, config: RiskConfig) -> "ConfigVersionSummary":
        return cls(version=config.version, updated_at=config.updated_at)


@dataclass(frozen=True)
class ConfigHistoryResponse:
    """Stored revisions, newest first."""

    current_version: Optional[int]
    versions: List[ConfigVersionSummary]

    @classmethod
    def from_entities(cls, configs: List[RiskConfig]) -> "ConfigHistoryResponse":
        summaries = [ConfigVersionSummary.from_entity(c) for c in configs]
        return cls(
            current_version=summaries[0].version if summaries else None,
            versions=summaries,
        )
