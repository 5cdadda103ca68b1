from fastapi import APIRouter
from datetime import date, datetime, timedelta, timezone
from typing import List, Optional
import logging
from freightdesk.api.deps import domain_errors
from freightdesk.api.quotes import create_quote
from freightdesk.core.filters import equals_or_any, search_matches
from freightdesk.core.workflow import ensure_can
from freightdesk.db.memory import STATE_LOCK, add_record, get_record, next_id, rows, update_record
from freightdesk.schemas.quote import QuoteCreate
from freightdesk.schemas.rate_request import (
    AssigneeRole,
    AssignRequest,
    RateRequest,
    RateRequestCreate,
    RateRequestStatus,
)

router = APIRouter(tags=["rate requests"])
logger = logging.getLogger(__name__)

REVIEW_STATUS = {
    AssigneeRole.SALES: RateRequestStatus.SALES_REVIEW,
    AssigneeRole.PRICING: RateRequestStatus.PRICING_REVIEW,
}

# Quotes converted from a request stay valid this long unless the request asked otherwise
DEFAULT_VALIDITY_DAYS = 30


@router.get("/rate-requests", response_model=List[RateRequest])
async def list_rate_requests(q: Optional[str] = None, status: Optional[RateRequestStatus] = None):
    return [
        r for r in rows("rate_requests")
        if search_matches(q, r.id, r.customer, r.origin_name, r.destination_name, r.assignee_name)
        and equals_or_any(r.status, status)
    ]


@router.post("/rate-requests", response_model=RateRequest, status_code=201)
async def create_rate_request(payload: RateRequestCreate):
    now = datetime.now(timezone.utc)
    with STATE_LOCK:
        request = RateRequest(
            id=next_id("rate_requests", "CR", stamp=now.strftime("%y%m%d")),
            created_at=now,
            **payload.model_dump(),
        )
        add_record("rate_requests", request)
    logger.info(f"Rate request {request.id} created")
    return request


@router.get("/rate-requests/{request_id}", response_model=RateRequest)
async def get_rate_request(request_id: str):
    with domain_errors():
        return get_record("rate_requests", request_id, "Rate request")


@router.post("/rate-requests/{request_id}/assign", response_model=RateRequest)
async def assign_rate_request(request_id: str, body: AssignRequest):
    def change(r: RateRequest):
        ensure_can("rate request", r.id, "assign", r.status)
        return {
            "assignee_role": body.role,
            "assignee_name": f"Auto-{body.role.value}",
            "status": REVIEW_STATUS[body.role],
        }

    with domain_errors():
        request = update_record("rate_requests", request_id, "Rate request", change)
    logger.info(f"Rate request {request.id} assigned to {body.role.value}")
    return request


@router.post("/rate-requests/{request_id}/convert", response_model=RateRequest)
async def convert_to_quote(request_id: str):
    """Turn a request into a Draft quote priced at the customer's target rate."""
    with domain_errors(), STATE_LOCK:
        request = get_record("rate_requests", request_id, "Rate request")
        ensure_can("rate request", request.id, "convert", request.status)
        quote = create_quote(
            QuoteCreate(
                customer=request.customer or "Walk-in customer",
                direction=request.direction,
                origin_code=request.origin_code,
                origin_name=request.origin_name,
                destination_code=request.destination_code,
                destination_name=request.destination_name,
                service=request.service,
                container=request.container,
                validity=request.validity or date.today() + timedelta(days=DEFAULT_VALIDITY_DAYS),
                price_inr=request.target_rate_inr or 0,
            ),
            source_request_id=request.id,
        )
        request = update_record(
            "rate_requests", request.id, "Rate request",
            lambda _: {"status": RateRequestStatus.QUOTED, "quote_ref": quote.id},
        )
    logger.info(f"Rate request {request.id} converted to quote {quote.id}")
    return request


@router.post("/rate-requests/{request_id}/reject", response_model=RateRequest)
async def reject_rate_request(request_id: str):
    def change(r: RateRequest):
        ensure_can("rate request", r.id, "reject", r.status)
        return {"status": RateRequestStatus.REJECTED}

    with domain_errors():
        request = update_record("rate_requests", request_id, "Rate request", change)
    logger.info(f"Rate request {request.id} rejected")
    return request
