import logging
import threading
from typing import List, Optional

from freightdesk.schemas.audit import AuditLogEntry, AuditStatus

logger = logging.getLogger(__name__)


class InMemoryAuditTrail:
    """Append-only request trail, oldest entry first."""

    def __init__(self):
        self._entries: List[AuditLogEntry] = []
        self._lock = threading.Lock()

    def save(self, entry: AuditLogEntry):
        with self._lock:
            self._entries.append(entry)
        logger.info(
            "audit %s %s actor=%s action=%s status=%s",
            entry.method, entry.endpoint, entry.actor, entry.action_type, entry.status.value,
        )

    def find(
        self,
        actor: Optional[str] = None,
        action_type: Optional[str] = None,
        record_id: Optional[str] = None,
        status: Optional[AuditStatus] = None,
    ) -> List[AuditLogEntry]:
        with self._lock:
            entries = list(self._entries)
        if actor:
            entries = [e for e in entries if e.actor.lower() == actor.lower()]
        if action_type:
            entries = [e for e in entries if e.action_type == action_type.upper()]
        if record_id:
            entries = [e for e in entries if e.record_id == record_id]
        if status:
            entries = [e for e in entries if e.status == status]
        return entries

    def get_all(self) -> List[AuditLogEntry]:
        return self.find()

    def clear(self):
        with self._lock:
            self._entries.clear()


audit_repo = InMemoryAuditTrail()
