from pydantic import BaseModel, Field, field_validator
from datetime import date
from enum import Enum
from typing import List, Optional
from freightdesk.schemas.common import strict_iso_date


class ExecStatus(str, Enum):
    PLANNED = "Planned"
    PICKUP_SCHEDULED = "Pickup Scheduled"
    AT_CFS = "At CFS"
    GATE_IN = "Gate-in"
    SAILED = "Sailed"
    ARRIVED = "Arrived"
    DELIVERED = "Delivered"


class Milestone(BaseModel):
    name: ExecStatus
    done: bool = False
    when: Optional[date] = None


class TrackedShipment(BaseModel):
    id: str
    customer: str
    route: str
    carrier: str
    etd: date
    eta: date
    milestones: List[Milestone] = Field(default_factory=list)


def latest_status(milestones: List[Milestone]) -> ExecStatus:
    done = [m for m in milestones if m.done]
    return done[-1].name if done else ExecStatus.PLANNED


class TrackedShipmentView(TrackedShipment):
    current_status: ExecStatus

    @classmethod
    def of(cls, row: TrackedShipment) -> "TrackedShipmentView":
        return cls(**row.model_dump(), current_status=latest_status(row.milestones))


class ManualMilestone(BaseModel):
    name: ExecStatus
    when: Optional[date] = None

    @field_validator('when', mode='before')
    @classmethod
    def validate_when(cls, v):
        return strict_iso_date(v)
