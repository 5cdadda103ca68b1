from pydantic import BaseModel, Field
from datetime import datetime
from enum import Enum
from typing import List, Optional


class AlertType(str, Enum):
    SYSTEM = "System"
    TASK = "Task"
    SHIPMENT = "Shipment"
    BILLING = "Billing"
    RATES = "Rates"
    DOCUMENTS = "Documents"


class Severity(str, Enum):
    INFO = "Info"
    WARNING = "Warning"
    CRITICAL = "Critical"


class AlertStatus(str, Enum):
    UNREAD = "Unread"
    READ = "Read"
    SNOOZED = "Snoozed"
    RESOLVED = "Resolved"


class Notification(BaseModel):
    id: str
    created_at: datetime
    title: str
    message: str
    type: AlertType
    severity: Severity
    status: AlertStatus = AlertStatus.UNREAD
    related_id: Optional[str] = None
    related_path: Optional[str] = None


class MarkRequest(BaseModel):
    ids: List[str] = Field(..., min_length=1)
    status: AlertStatus


class DeleteResult(BaseModel):
    deleted: int
