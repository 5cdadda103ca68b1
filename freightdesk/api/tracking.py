from fastapi import APIRouter, Depends, HTTPException
from datetime import date
from typing import List, Optional
import logging
from freightdesk.api.deps import domain_errors, get_actor
from freightdesk.core.filters import first, search_matches
from freightdesk.db.memory import rows, get_record, update_record
from freightdesk.schemas.tracking import ManualMilestone, TrackedShipment, TrackedShipmentView

router = APIRouter(tags=["tracking"])
logger = logging.getLogger(__name__)


@router.get("/tracking", response_model=List[TrackedShipmentView])
async def list_shipments(q: Optional[str] = None):
    return [
        TrackedShipmentView.of(s) for s in rows("tracking")
        if search_matches(q, s.id, s.customer, s.route, s.carrier)
    ]


@router.get("/tracking/{shipment_id}", response_model=TrackedShipmentView)
async def get_shipment(shipment_id: str):
    with domain_errors():
        return TrackedShipmentView.of(get_record("tracking", shipment_id, "Shipment"))


@router.post("/tracking/{shipment_id}/milestones/{index}/toggle", response_model=TrackedShipmentView)
async def toggle_milestone(shipment_id: str, index: int, actor: str = Depends(get_actor)):
    def change(s: TrackedShipment):
        if index < 0 or index >= len(s.milestones):
            raise HTTPException(status_code=404, detail=f"Milestone {index} not found on {s.id}")
        milestones = list(s.milestones)
        m = milestones[index]
        milestones[index] = m.model_copy(update={
            "done": not m.done,
            "when": None if m.done else date.today(),
        })
        return {"milestones": milestones}

    with domain_errors():
        shipment = update_record("tracking", shipment_id, "Shipment", change)
    view = TrackedShipmentView.of(shipment)
    logger.info(f"Shipment {shipment.id} milestone {index} toggled by {actor}; now {view.current_status.value}")
    return view


@router.post("/tracking/{shipment_id}/milestones", response_model=TrackedShipmentView)
async def record_milestone(shipment_id: str, payload: ManualMilestone, actor: str = Depends(get_actor)):
    when = payload.when or date.today()

    def change(s: TrackedShipment):
        target = first(s.milestones, lambda m: m.name == payload.name)
        if target is None:
            raise HTTPException(status_code=404, detail=f"Milestone {payload.name.value} not found on {s.id}")
        return {
            "milestones": [
                m.model_copy(update={"done": True, "when": when}) if m is target else m
                for m in s.milestones
            ]
        }

    with domain_errors():
        shipment = update_record("tracking", shipment_id, "Shipment", change)
    logger.info(f"Shipment {shipment.id}: {payload.name.value} recorded on {when} by {actor}")
    return TrackedShipmentView.of(shipment)
