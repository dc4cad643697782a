"""AuditEntry entity recording every risk configuration change."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .risk_config import utc_now_iso


@dataclass(frozen=True)
class AuditMeta:
    """Who changed the configuration, and why."""

    actor: str = "unknown"
    reason: str = ""
    user_agent: Optional[str] = None
    ip: Optional[str] = None


@dataclass(frozen=True)
class AuditEntry:
    """
    One append-only audit record.

    ``previous`` and ``next`` hold the full persisted documents so the
    log can reconstruct any revision without the config store.
    """

    actor: str
    reason: str
    previous: Optional[Dict[str, Any]]
    next: Dict[str, Any]
    user_agent: Optional[str] = None
    ip: Optional[str] = None
    ts: str = field(default_factory=utc_now_iso)

    @classmethod
    def from_meta(
        cls,
        meta: AuditMeta,
        previous: Optional[Dict[str, Any]],
        next: Dict[str, Any],
    ) -> "AuditEntry":
        return cls(
            actor=meta.actor,
            reason=meta.reason,
            user_agent=meta.user_agent,
            ip=meta.ip,
            previous=previous,
            next=next,
        )

    def to_dict(self) -> dict:
        """Convert to the JSON-lines record shape; absent optionals are omitted."""
        data: Dict[str, Any] = {
            "ts": self.ts,
            "actor": self.actor,
            "reason": self.reason,
        }
        if self.user_agent is not None:
            data["userAgent"] = self.user_agent
        if self.ip is not None:
            data["ip"] = self.ip
        data["previous"] = self.previous
        data["next"] = self.next
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AuditEntry":
        return cls(
            ts=data["ts"],
            actor=data.get("actor", "unknown"),
            reason=data.get("reason", ""),
            user_agent=data.get("userAgent"),
            ip=data.get("ip"),
            previous=data.get("previous"),
            next=data["next"],
        )
