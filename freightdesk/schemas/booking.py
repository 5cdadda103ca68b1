from pydantic import BaseModel, Field, field_validator, model_validator
from datetime import date, datetime
from enum import Enum
from typing import List, Optional
from freightdesk.schemas.common import Direction, strict_iso_date


class BookingStatus(str, Enum):
    NEW = "New"
    CONFIRMED = "Confirmed"
    CANCELLED = "Cancelled"
    SAILED = "Sailed"
    DELIVERED = "Delivered"


class BookingService(str, Enum):
    FCL = "FCL"
    LCL = "LCL"


class BookingContainer(str, Enum):
    STANDARD_20 = "20 ft - Standard"
    STANDARD_40 = "40 ft - Standard"
    HIGH_CUBE_40 = "40 ft - HC"
    LCL = "LCL"


class Booking(BaseModel):
    id: str
    created_at: datetime
    customer: str
    direction: Direction
    service: BookingService
    carrier: str
    origin_code: str
    origin_name: str
    destination_code: str
    destination_name: str
    container: BookingContainer
    pieces: Optional[int] = None
    weight_kg: Optional[float] = None
    cbm: Optional[float] = None
    etd: date
    eta: date
    status: BookingStatus = BookingStatus.NEW
    ref: Optional[str] = None
    docs: List[str] = Field(default_factory=list)
    notes: Optional[str] = None


class BookingCreate(BaseModel):
    customer: str = Field(..., min_length=1)
    direction: Direction = Direction.EXPORT
    service: BookingService = BookingService.FCL
    carrier: str = "MSC"
    origin_code: str = "INNSA"
    origin_name: str = "Nhava Sheva, India"
    destination_code: str = "DEHAM"
    destination_name: str = "Hamburg, Germany"
    container: BookingContainer = BookingContainer.STANDARD_20
    pieces: Optional[int] = Field(None, ge=0)
    weight_kg: Optional[float] = Field(None, ge=0)
    cbm: Optional[float] = Field(None, ge=0)
    etd: date
    eta: date
    notes: Optional[str] = None

    @field_validator('etd', 'eta', mode='before')
    @classmethod
    def validate_dates(cls, v):
        return strict_iso_date(v)

    @model_validator(mode='after')
    def check_service_container(self):
        if self.service == BookingService.LCL:
            self.container = BookingContainer.LCL
        elif self.container == BookingContainer.LCL:
            raise ValueError("FCL bookings need a container size")
        if self.eta < self.etd:
            raise ValueError("ETA cannot be before ETD")
        return self


class CarrierRef(BaseModel):
    ref: str

    @field_validator('ref')
    @classmethod
    def ref_not_blank(cls, v):
        if not v.strip():
            raise ValueError("Carrier reference cannot be blank")
        return v.strip()
