from pydantic import BaseModel, Field, field_validator, model_validator
from datetime import date, datetime
from enum import Enum
from typing import List, Optional
from freightdesk.schemas.common import ContainerSize, Direction, FreightService, strict_iso_date


class QuoteStatus(str, Enum):
    DRAFT = "Draft"
    PENDING_APPROVAL = "Pending Approval"
    APPROVED = "Approved"
    REJECTED = "Rejected"
    LOCKED = "Locked"
    SENT = "Sent"


class ChargeRow(BaseModel):
    label: str
    amount: float = Field(..., ge=0)


class Quote(BaseModel):
    id: str
    created_at: datetime
    customer: str
    direction: Direction
    origin_code: str
    origin_name: str
    destination_code: str
    destination_name: str
    service: FreightService
    container: ContainerSize
    price_inr: float
    validity: date
    status: QuoteStatus = QuoteStatus.DRAFT
    approver: Optional[str] = None
    remarks: Optional[str] = None
    charges: List[ChargeRow] = Field(default_factory=list)
    locked_at: Optional[datetime] = None
    source_request_id: Optional[str] = None
    source_rate_id: Optional[str] = None


class QuoteCreate(BaseModel):
    customer: str = Field(..., min_length=1)
    direction: Direction = Direction.EXPORT
    origin_code: str = Field(..., min_length=5, max_length=5)
    origin_name: str
    destination_code: str = Field(..., min_length=5, max_length=5)
    destination_name: str
    service: FreightService = FreightService.FCL
    container: ContainerSize = ContainerSize.STANDARD_20
    validity: date
    price_inr: Optional[float] = Field(None, ge=0)
    charges: List[ChargeRow] = Field(default_factory=list)

    @field_validator('validity', mode='before')
    @classmethod
    def validate_validity(cls, v):
        return strict_iso_date(v)

    @field_validator('origin_code', 'destination_code')
    @classmethod
    def upper_locode(cls, v):
        return v.strip().upper()

    @model_validator(mode='after')
    def default_price_from_charges(self):
        # Offer price falls back to the charge breakdown total
        if self.price_inr is None:
            self.price_inr = sum(c.amount for c in self.charges)
        return self


class BulkApproveRequest(BaseModel):
    ids: List[str] = Field(..., min_length=1)
    remarks: Optional[str] = None


class BulkRejectRequest(BaseModel):
    ids: List[str] = Field(..., min_length=1)
    remarks: str

    @field_validator('remarks')
    @classmethod
    def remarks_required(cls, v):
        if not v.strip():
            raise ValueError("Remarks are required to reject quotes")
        return v.strip()
