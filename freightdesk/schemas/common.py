from pydantic import BaseModel, Field
from datetime import date, datetime
from enum import Enum
import re
from typing import List, Optional

ISO_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")


class Direction(str, Enum):
    EXPORT = "Export"
    IMPORT = "Import"


class FreightService(str, Enum):
    FCL = "FCL"
    LCL = "LCL"
    AIR = "Air"


class ContainerSize(str, Enum):
    STANDARD_20 = "20 ft - Standard"
    STANDARD_40 = "40 ft - Standard"
    HIGH_CUBE_40 = "40 ft - HC"


class ActivityEntry(BaseModel):
    at: date
    by: str
    text: str


class ActionRemarks(BaseModel):
    remarks: Optional[str] = None


class BulkIds(BaseModel):
    ids: List[str] = Field(..., min_length=1)


def strict_iso_date(v):
    # None and date objects pass through; strings must be exactly YYYY-MM-DD
    if v is None or isinstance(v, date):
        return v
    if not isinstance(v, str):
        raise ValueError("Date must be in YYYY-MM-DD format")
    try:
        if not ISO_DATE.fullmatch(v):
            raise ValueError(v)
        datetime.strptime(v, '%Y-%m-%d')
    except ValueError:
        raise ValueError("Date must be in YYYY-MM-DD format")
    return v
