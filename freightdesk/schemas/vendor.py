from pydantic import BaseModel, Field, field_validator
from datetime import date
from enum import Enum
import re
from typing import List, Optional

GSTIN_PATTERN = r"^[0-9]{2}[A-Z]{5}[0-9]{4}[A-Z]{1}[1-9A-Z]{1}Z[0-9A-Z]{1}$"


class VendorStatus(str, Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class Vendor(BaseModel):
    id: str
    name: str
    category: str
    contact: str
    email: str
    gstin: Optional[str] = None
    docs: List[str] = Field(default_factory=list)
    status: VendorStatus = VendorStatus.PENDING


class VendorCreate(BaseModel):
    name: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    contact: str = Field(..., min_length=1)
    email: str
    gstin: Optional[str] = None
    docs: List[str] = Field(default_factory=list)

    @field_validator('email')
    @classmethod
    def validate_email(cls, v):
        if "@" not in v or v.startswith("@") or v.endswith("@"):
            raise ValueError('Invalid email address')
        return v.strip().lower()

    @field_validator('gstin')
    @classmethod
    def validate_gstin(cls, v):
        if v is None or not v.strip():
            return None
        v = v.strip().upper()
        if not re.match(GSTIN_PATTERN, v):
            raise ValueError('Invalid GSTIN format')
        return v


class VendorOrderStatus(str, Enum):
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    CANCELED = "Canceled"


class VendorOrder(BaseModel):
    id: str
    vendor_name: str
    service: str
    ref: str
    ordered_on: date
    amount_inr: float
    status: VendorOrderStatus = VendorOrderStatus.PENDING
