from datetime import datetime, timezone
from enum import Enum
from typing import Optional
import uuid

from pydantic import BaseModel, Field


class AuditStatus(str, Enum):
    SUCCESS = "SUCCESS"
    FAILURE = "FAILURE"


class AuditLogEntry(BaseModel):
    """One request seen by the audit middleware. Bodies are kept only as SHA-256 digests."""
    event_id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    recorded_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    method: str
    endpoint: str
    record_id: Optional[str] = None
    action_type: str
    actor: str
    status: AuditStatus
    status_code: Optional[int] = None
    input_hash: Optional[str] = None
    output_hash: Optional[str] = None
