from pydantic import BaseModel, Field, field_validator, model_validator
from datetime import date, datetime
from enum import Enum
from typing import List, Optional
from freightdesk.schemas.common import strict_iso_date


class InvoiceStatus(str, Enum):
    DRAFT = "Draft"
    OPEN = "Open"
    OVERDUE = "Overdue"
    PAID = "Paid"
    VOID = "Void"


class LineItem(BaseModel):
    desc: str
    qty: float = Field(..., ge=0)
    rate: float = Field(..., ge=0)

    @property
    def amount(self) -> float:
        return self.qty * self.rate


class Invoice(BaseModel):
    id: str
    created_at: datetime
    customer: str
    due_date: date
    amount_inr: float = 0.0
    status: InvoiceStatus = InvoiceStatus.DRAFT
    items: List[LineItem] = Field(default_factory=list)
    notes: Optional[str] = None

    @model_validator(mode='after')
    def amount_from_items(self):
        # The invoice total is never entered by hand
        self.amount_inr = round(sum(i.amount for i in self.items), 2)
        return self


class InvoiceCreate(BaseModel):
    customer: str = Field(..., min_length=1)
    due_date: date
    items: List[LineItem] = Field(..., min_length=1)
    notes: Optional[str] = None

    @field_validator('due_date', mode='before')
    @classmethod
    def validate_due_date(cls, v):
        return strict_iso_date(v)


class PaymentMethod(str, Enum):
    BANK_TRANSFER = "NEFT/RTGS"
    UPI = "UPI"
    CARD = "Card"
    ACH = "ACH"


class PaymentStatus(str, Enum):
    ALLOCATED = "Allocated"
    UNALLOCATED = "Unallocated"
    REFUNDED = "Refunded"


class Payment(BaseModel):
    id: str
    received_on: date
    method: PaymentMethod
    amount_inr: float = Field(..., ge=0)
    customer: Optional[str] = None
    invoice_id: Optional[str] = None
    status: PaymentStatus
    notes: Optional[str] = None


class PaymentCreate(BaseModel):
    received_on: date
    method: PaymentMethod
    amount_inr: float = Field(..., gt=0)
    customer: Optional[str] = None
    invoice_id: Optional[str] = None
    notes: Optional[str] = None

    @field_validator('received_on', mode='before')
    @classmethod
    def validate_received_on(cls, v):
        return strict_iso_date(v)


class AllocateRequest(BaseModel):
    invoice_id: Optional[str] = None


class DisputeStatus(str, Enum):
    OPEN = "Open"
    INVESTIGATING = "Investigating"
    RESOLVED = "Resolved"
    REJECTED = "Rejected"


class Dispute(BaseModel):
    id: str
    invoice_id: str
    customer: str
    raised_on: date
    reason: str
    status: DisputeStatus = DisputeStatus.OPEN
    resolution: Optional[str] = None


class DisputeCreate(BaseModel):
    invoice_id: str
    reason: str = Field(..., min_length=1)


class DisputeOutcome(BaseModel):
    resolution: Optional[str] = None
