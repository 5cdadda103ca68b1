from fastapi import APIRouter, Depends
from datetime import datetime, timezone
from typing import List, Optional
import logging
from freightdesk.api.deps import domain_errors, get_actor
from freightdesk.core.filters import equals_or_any, search_matches
from freightdesk.core.notifier import emit_notification
from freightdesk.core.workflow import ensure_can
from freightdesk.db.memory import STATE_LOCK, add_record, get_record, next_id, rows, update_record
from freightdesk.schemas.common import ActionRemarks
from freightdesk.schemas.notification import AlertType, Severity
from freightdesk.schemas.quote import Quote, QuoteCreate, QuoteStatus

router = APIRouter(tags=["quotes"])
logger = logging.getLogger(__name__)


def transition_quote(quote_id: str, action: str, **fields) -> Quote:
    """Apply a guarded status change; the caller supplies the resulting fields."""
    def change(quote: Quote):
        ensure_can("quote", quote.id, action, quote.status)
        return fields

    quote = update_record("quotes", quote_id, "Quote", change)
    logger.info(f"Quote {quote.id} -> {quote.status.value} ({action})")
    return quote


def create_quote(payload: QuoteCreate, source_request_id: Optional[str] = None, source_rate_id: Optional[str] = None) -> Quote:
    now = datetime.now(timezone.utc)
    with STATE_LOCK:
        quote = Quote(
            id=next_id("quotes", "QT", stamp=now.strftime("%y%m%d")),
            created_at=now,
            source_request_id=source_request_id,
            source_rate_id=source_rate_id,
            **payload.model_dump(),
        )
        add_record("quotes", quote)
    logger.info(f"Quote {quote.id} created for {quote.customer}")
    return quote


@router.get("/quotes", response_model=List[Quote])
async def list_quotes(q: Optional[str] = None, status: Optional[QuoteStatus] = None):
    return [
        x for x in rows("quotes")
        if search_matches(q, x.id, x.customer, x.origin_name, x.destination_name)
        and equals_or_any(x.status, status)
    ]


@router.post("/quotes", response_model=Quote, status_code=201)
async def new_quote(payload: QuoteCreate):
    return create_quote(payload)


@router.get("/quotes/{quote_id}", response_model=Quote)
async def get_quote(quote_id: str):
    with domain_errors():
        return get_record("quotes", quote_id, "Quote")


@router.post("/quotes/{quote_id}/submit", response_model=Quote)
async def submit_quote(quote_id: str):
    with domain_errors():
        quote = transition_quote(quote_id, "submit", status=QuoteStatus.PENDING_APPROVAL)
    emit_notification(
        "Quote Approval Needed",
        f"{quote.id} is pending approval.",
        AlertType.RATES,
        Severity.WARNING,
        related_id=quote.id,
        related_path="/quotes/approvals",
    )
    return quote


@router.post("/quotes/{quote_id}/approve", response_model=Quote)
async def approve_quote(quote_id: str, body: Optional[ActionRemarks] = None, actor: str = Depends(get_actor)):
    with domain_errors():
        return transition_quote(quote_id, "approve", status=QuoteStatus.APPROVED, approver=actor, remarks=body.remarks if body else None)


@router.post("/quotes/{quote_id}/reject", response_model=Quote)
async def reject_quote(quote_id: str, body: Optional[ActionRemarks] = None):
    with domain_errors():
        return transition_quote(quote_id, "reject", status=QuoteStatus.REJECTED, remarks=body.remarks if body else None)


@router.post("/quotes/{quote_id}/lock", response_model=Quote)
async def lock_quote(quote_id: str):
    with domain_errors():
        return transition_quote(quote_id, "lock", status=QuoteStatus.LOCKED, locked_at=datetime.now(timezone.utc))


@router.post("/quotes/{quote_id}/unlock", response_model=Quote)
async def unlock_quote(quote_id: str):
    with domain_errors():
        return transition_quote(quote_id, "unlock", status=QuoteStatus.APPROVED, locked_at=None)


@router.post("/quotes/{quote_id}/send", response_model=Quote)
async def send_quote(quote_id: str):
    with domain_errors():
        return transition_quote(quote_id, "send", status=QuoteStatus.SENT)
