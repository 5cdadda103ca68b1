from fastapi import APIRouter, Depends
from datetime import date
from typing import List, Optional
import logging
from freightdesk.api.deps import domain_errors, get_actor
from freightdesk.core.filters import equals_or_any, search_matches
from freightdesk.core.workflow import ensure_can
from freightdesk.db.memory import STATE_LOCK, add_record, get_record, next_id, rows, update_record
from freightdesk.schemas.billing import Dispute, DisputeCreate, DisputeOutcome, DisputeStatus

router = APIRouter(tags=["disputes"])
logger = logging.getLogger(__name__)

DEFAULT_RESOLUTION = {
    DisputeStatus.RESOLVED: "Credit note issued",
    DisputeStatus.REJECTED: "Charges valid",
}


def close_dispute(dispute_id: str, action: str, status: DisputeStatus, resolution: Optional[str], actor: str) -> Dispute:
    text = (resolution or "").strip() or DEFAULT_RESOLUTION[status]

    def change(d: Dispute):
        ensure_can("dispute", d.id, action, d.status)
        return {"status": status, "resolution": text}

    dispute = update_record("disputes", dispute_id, "Dispute", change)
    logger.info(f"Dispute {dispute.id} -> {dispute.status.value} by {actor}: {text}")
    return dispute


@router.get("/disputes", response_model=List[Dispute])
async def list_disputes(q: Optional[str] = None, status: Optional[DisputeStatus] = None):
    return [
        r for r in rows("disputes")
        if search_matches(q, r.id, r.invoice_id, r.customer) and equals_or_any(r.status, status)
    ]


@router.post("/disputes", response_model=Dispute, status_code=201)
async def raise_dispute(payload: DisputeCreate, actor: str = Depends(get_actor)):
    with domain_errors(), STATE_LOCK:
        invoice = get_record("invoices", payload.invoice_id, "Invoice")
        dispute = Dispute(
            id=next_id("disputes", "DSP", width=4),
            invoice_id=invoice.id,
            customer=invoice.customer,
            raised_on=date.today(),
            reason=payload.reason.strip(),
        )
        add_record("disputes", dispute)
    logger.info(f"Dispute {dispute.id} raised on {invoice.id} by {actor}")
    return dispute


@router.get("/disputes/{dispute_id}", response_model=Dispute)
async def get_dispute(dispute_id: str):
    with domain_errors():
        return get_record("disputes", dispute_id, "Dispute")


@router.post("/disputes/{dispute_id}/investigate", response_model=Dispute)
async def investigate_dispute(dispute_id: str, actor: str = Depends(get_actor)):
    def change(d: Dispute):
        ensure_can("dispute", d.id, "investigate", d.status)
        return {"status": DisputeStatus.INVESTIGATING}

    with domain_errors():
        dispute = update_record("disputes", dispute_id, "Dispute", change)
    logger.info(f"Dispute {dispute.id} under investigation by {actor}")
    return dispute


@router.post("/disputes/{dispute_id}/resolve", response_model=Dispute)
async def resolve_dispute(dispute_id: str, body: Optional[DisputeOutcome] = None, actor: str = Depends(get_actor)):
    with domain_errors():
        return close_dispute(dispute_id, "resolve", DisputeStatus.RESOLVED, body.resolution if body else None, actor)


@router.post("/disputes/{dispute_id}/reject", response_model=Dispute)
async def reject_dispute(dispute_id: str, body: Optional[DisputeOutcome] = None, actor: str = Depends(get_actor)):
    with domain_errors():
        return close_dispute(dispute_id, "reject", DisputeStatus.REJECTED, body.resolution if body else None, actor)
