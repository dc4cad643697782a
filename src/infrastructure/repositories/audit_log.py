"""Append-only JSON-lines audit log for risk configuration changes."""

import asyncio
import json
from pathlib import Path
from typing import List

import structlog

from src.core.config import settings
from src.domain.entities import AuditEntry
from src.domain.interfaces import AuditLog

logger = structlog.get_logger(__name__)


class JsonlAuditLog(AuditLog):
    """
    Audit log stored as one JSON record per line.

    File I/O runs in a worker thread so the event loop is never blocked.
    """

    def __init__(self, path: str | None = None):
        self._path = Path(path or settings.audit_log_path)

    @property
    def path(self) -> Path:
        return self._path

    async def append(self, entry: AuditEntry) -> None:
        line = json.dumps(entry.to_dict(), separators=(",", ":"))
        await asyncio.to_thread(self._append_line, line)

    async def list_entries(self, limit: int = 50) -> List[AuditEntry]:
        lines = await asyncio.to_thread(self._read_lines)

        entries: List[AuditEntry] = []
        for line_no, line in enumerate(lines, start=1):
            if not line.strip():
                continue
            try:
                entries.append(AuditEntry.from_dict(json.loads(line)))
            except (ValueError, KeyError) as e:
                logger.warning(
                    "audit_line_unreadable",
                    path=str(self._path),
                    line=line_no,
                    error=str(e),
                )

        entries.reverse()
        return entries[:limit]

    def _append_line(self, line: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with self._path.open("a", encoding="utf-8") as f:
            f.write(line + "\n")

    def _read_lines(self) -> List[str]:
        if not self._path.exists():
            return []
        with self._path.open("r", encoding="utf-8") as f:
            return f.readlines()
