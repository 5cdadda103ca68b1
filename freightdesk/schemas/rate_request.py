from pydantic import BaseModel, Field, field_validator
from datetime import date, datetime
from enum import Enum
from typing import List, Optional
from freightdesk.schemas.common import ContainerSize, Direction, FreightService, strict_iso_date


class RateRequestStatus(str, Enum):
    NEW = "New"
    SALES_REVIEW = "Sales Review"
    PRICING_REVIEW = "Pricing Review"
    QUOTED = "Quoted"
    REJECTED = "Rejected"


class AssigneeRole(str, Enum):
    SALES = "Sales"
    PRICING = "Pricing"


class RateRequest(BaseModel):
    id: str
    created_at: datetime
    customer: Optional[str] = None
    direction: Direction
    origin_code: str
    origin_name: str
    destination_code: str
    destination_name: str
    service: FreightService
    container: ContainerSize
    weight_kg: Optional[float] = None
    incoterm: Optional[str] = None
    validity: Optional[date] = None
    target_rate_inr: Optional[float] = None
    notes: Optional[str] = None
    attachments: List[str] = Field(default_factory=list)
    status: RateRequestStatus = RateRequestStatus.NEW
    assignee_role: Optional[AssigneeRole] = None
    assignee_name: Optional[str] = None
    quote_ref: Optional[str] = None


class RateRequestCreate(BaseModel):
    customer: Optional[str] = None
    direction: Direction = Direction.EXPORT
    origin_code: str = "INNSA"
    origin_name: str = "Nhava Sheva, India"
    destination_code: str = "DEHAM"
    destination_name: str = "Hamburg, Germany"
    service: FreightService = FreightService.FCL
    container: ContainerSize = ContainerSize.STANDARD_20
    weight_kg: Optional[float] = Field(None, ge=0)
    incoterm: Optional[str] = "FOB"
    validity: Optional[date] = None
    target_rate_inr: Optional[float] = Field(None, ge=0)
    notes: Optional[str] = None
    attachments: List[str] = Field(default_factory=list)

    @field_validator('validity', mode='before')
    @classmethod
    def validate_validity(cls, v):
        return strict_iso_date(v)


class AssignRequest(BaseModel):
    role: AssigneeRole
