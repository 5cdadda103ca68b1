from pydantic import BaseModel, Field
from datetime import date
from enum import Enum
from typing import List, Optional
from freightdesk.schemas.common import ActivityEntry


class Priority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class ExceptionType(str, Enum):
    CUSTOMS_HOLD = "Customs Hold"
    DOCUMENTATION = "Documentation"
    CARRIER_DELAY = "Carrier Delay"
    INVOICE_VERIFICATION = "Invoice Verification"
    VESSEL_ROLLOVER = "Vessel Rollover"
    DATA_MISMATCH = "Data Mismatch"


class ExceptionStatus(str, Enum):
    OPEN = "Open"
    IN_PROGRESS = "In Progress"
    WAITING_EXTERNAL = "Waiting External"
    RESOLVED = "Resolved"
    ESCALATED = "Escalated"


class RootCause(str, Enum):
    MISSING_DOCUMENT = "Missing Document"
    CUSTOMS_QUERY = "Customs Query"
    CARRIER_DELAY = "Carrier Delay"
    INCORRECT_DATA = "Incorrect Data"
    CUSTOMER_PENDING = "Customer Pending"
    OTHER = "Other"


class TransportMode(str, Enum):
    AIR = "Air"
    OCEAN = "Ocean"


class SlaState(str, Enum):
    OK = "ok"
    DUE = "due"
    OVERDUE = "overdue"


class Attachment(BaseModel):
    name: str
    url: Optional[str] = None


class ShipmentException(BaseModel):
    exception_id: str
    shipment_id: str
    route: str
    mode: TransportMode
    type: ExceptionType
    priority: Priority
    owner: str = "Unassigned"
    sla_text: str = "On track"
    sla_state: SlaState = SlaState.OK
    status: ExceptionStatus = ExceptionStatus.OPEN
    created_at: date
    last_updated_at: date
    notes: Optional[str] = None
    attachments: List[Attachment] = Field(default_factory=list)
    activity: List[ActivityEntry] = Field(default_factory=list)


class ExceptionCreate(BaseModel):
    shipment_id: str = Field(..., min_length=1)
    route: str = Field(..., min_length=1)
    mode: TransportMode = TransportMode.OCEAN
    type: ExceptionType = ExceptionType.DATA_MISMATCH
    priority: Priority = Priority.LOW
    notes: Optional[str] = None
    attachments: List[Attachment] = Field(default_factory=list)


class AssignOwner(BaseModel):
    owner: str = Field(..., min_length=1)


class ExceptionUpdate(BaseModel):
    """
    Drawer update: owner, status, root cause and resolution notes in one action.
    A missing owner or status leaves the current value in place.
    """
    owner: Optional[str] = None
    status: Optional[ExceptionStatus] = None
    root_cause: RootCause
    notes: Optional[str] = None


class ExceptionKpis(BaseModel):
    open: int
    high: int
    avg_resolution_hours: float
    resolved_today: int
