from pydantic import BaseModel, Field, field_validator, model_validator
from datetime import date
from enum import Enum
from typing import Optional
from freightdesk.schemas.common import ContainerSize, Direction, FreightService, strict_iso_date


class RateSource(str, Enum):
    UPLOAD = "Upload"
    API = "API"
    MANUAL = "Manual"


class RateCard(BaseModel):
    id: str
    carrier: str
    service: FreightService
    origin_code: str
    origin_name: str
    destination_code: str
    destination_name: str
    transit_days: int
    base_inr: float
    surcharges_inr: float
    total_inr: float = 0.0
    validity: date
    source: RateSource = RateSource.MANUAL
    notes: Optional[str] = None

    @model_validator(mode='after')
    def total_from_parts(self):
        self.total_inr = round(self.base_inr + self.surcharges_inr, 2)
        return self


class RateCardCreate(BaseModel):
    carrier: str = Field(..., min_length=1)
    service: FreightService = FreightService.FCL
    origin_code: str = Field(..., min_length=5, max_length=5)
    origin_name: str
    destination_code: str = Field(..., min_length=5, max_length=5)
    destination_name: str
    transit_days: int = Field(..., ge=0)
    base_inr: float = Field(..., ge=0)
    surcharges_inr: float = Field(0, ge=0)
    validity: date
    source: RateSource = RateSource.MANUAL
    notes: Optional[str] = None

    @field_validator('validity', mode='before')
    @classmethod
    def validate_validity(cls, v):
        return strict_iso_date(v)

    @field_validator('origin_code', 'destination_code')
    @classmethod
    def upper_locode(cls, v):
        return v.strip().upper()


class RateMetrics(BaseModel):
    offers: int
    best_inr: float
    median_inr: float
    avg_inr: float


class QuoteFromRate(BaseModel):
    customer: str = Field(..., min_length=1)
    direction: Direction = Direction.EXPORT
    container: ContainerSize = ContainerSize.STANDARD_20
