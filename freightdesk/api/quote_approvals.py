from fastapi import APIRouter, Depends
from typing import List, Optional
import logging
from freightdesk.api.deps import domain_errors, get_actor
from freightdesk.core.filters import equals_or_any, search_matches
from freightdesk.core.workflow import ensure_can
from freightdesk.db.memory import STATE_LOCK, get_record, rows, update_record
from freightdesk.schemas.common import Direction, FreightService
from freightdesk.schemas.quote import BulkApproveRequest, BulkRejectRequest, Quote, QuoteStatus

router = APIRouter(tags=["quote approvals"])
logger = logging.getLogger(__name__)


def apply_bulk(ids: List[str], action: str, **fields) -> List[Quote]:
    """
    All-or-nothing bulk decision: every quote is checked before any is changed.
    """
    unique_ids = list(dict.fromkeys(ids))
    with STATE_LOCK:
        for quote_id in unique_ids:
            quote = get_record("quotes", quote_id, "Quote")
            ensure_can("quote", quote.id, action, quote.status)
        updated = [update_record("quotes", quote_id, "Quote", lambda _: fields) for quote_id in unique_ids]
    logger.info(f"Bulk {action}: {len(updated)} quote(s) -> {fields['status'].value}")
    return updated


@router.get("/quotes/approvals", response_model=List[Quote])
async def approvals_queue(
    q: Optional[str] = None,
    direction: Optional[Direction] = None,
    service: Optional[FreightService] = None,
):
    return [
        x for x in rows("quotes")
        if x.status == QuoteStatus.PENDING_APPROVAL
        and search_matches(q, x.id, x.customer, x.origin_name, x.destination_name)
        and equals_or_any(x.direction, direction)
        and equals_or_any(x.service, service)
    ]


@router.post("/quotes/approvals/approve", response_model=List[Quote])
async def approve_selected(body: BulkApproveRequest, actor: str = Depends(get_actor)):
    remarks = body.remarks.strip() if body.remarks and body.remarks.strip() else None
    with domain_errors():
        return apply_bulk(body.ids, "approve", status=QuoteStatus.APPROVED, approver=actor, remarks=remarks)


@router.post("/quotes/approvals/reject", response_model=List[Quote])
async def reject_selected(body: BulkRejectRequest):
    with domain_errors():
        return apply_bulk(body.ids, "reject", status=QuoteStatus.REJECTED, remarks=body.remarks)
