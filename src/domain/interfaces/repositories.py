"""Repository interfaces for risk configuration persistence."""

from abc import ABC, abstractmethod
from typing import List, Optional

from src.domain.entities import AuditEntry, RiskConfig


class RiskConfigStore(ABC):
    """
    Abstract store for versioned risk configurations.

    Every revision is kept; the current config is the highest version.
    """

    @abstractmethod
    async def get(self) -> Optional[RiskConfig]:
        """
        Retrieve the current configuration.

        Returns:
            The latest revision, or None if nothing has been persisted yet
        """
        ...

    @abstractmethod
    async def get_version(self, version: int) -> Optional[RiskConfig]:
        """
        Retrieve a specific revision.

        Args:
            version: The revision number

        Returns:
            The revision if found, None otherwise
        """
        ...

    @abstractmethod
    async def list_versions(self, limit: int = 20) -> List[RiskConfig]:
        """
        Retrieve recent revisions.

        Args:
            limit: Maximum number of revisions to return

        Returns:
            Revisions ordered by version descending
        """
        ...

    @abstractmethod
    async def put(self, config: RiskConfig, expected_version: Optional[int]) -> RiskConfig:
        """
        Persist a new revision with compare-and-swap on the version.

        Args:
            config: The fully stamped revision to store
            expected_version: The current version the caller read,
                or None if the caller expects an empty store

        Returns:
            The stored revision

        Raises:
            ConfigVersionConflictException: If the current version is not
                ``expected_version``
        """
        ...


class AuditLog(ABC):
    """
    Abstract append-only log of configuration changes.

    Entries are never rewritten or deleted.
    """

    @abstractmethod
    async def append(self, entry: AuditEntry) -> None:
        """
        Append an entry to the log.

        Args:
            entry: The audit record to append
        """
        ...

    @abstractmethod
    async def list_entries(self, limit: int = 50) -> List[AuditEntry]:
        """
        Retrieve recent entries.

        Args:
            limit: Maximum number of entries to return

        Returns:
            Entries ordered newest first
        """
        ...
