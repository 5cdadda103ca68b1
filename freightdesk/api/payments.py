from fastapi import APIRouter, Depends
from datetime import date
from typing import List, Optional
import logging
from freightdesk.api.deps import domain_errors, get_actor
from freightdesk.core.filters import search_matches
from freightdesk.core.workflow import ensure_can
from freightdesk.db.memory import STATE_LOCK, add_record, get_record, next_id, rows, update_record
from freightdesk.schemas.billing import AllocateRequest, Payment, PaymentCreate, PaymentStatus

router = APIRouter(tags=["payments"])
logger = logging.getLogger(__name__)

# Placeholder reference used when a receipt is allocated before its invoice is known
UNKNOWN_INVOICE = "INV-TBD"


@router.get("/payments", response_model=List[Payment])
async def list_payments(q: Optional[str] = None):
    return [r for r in rows("payments") if search_matches(q, r.id, r.customer, r.invoice_id)]


@router.post("/payments", response_model=Payment, status_code=201)
async def record_payment(payload: PaymentCreate, actor: str = Depends(get_actor)):
    with domain_errors(), STATE_LOCK:
        if payload.invoice_id:
            get_record("invoices", payload.invoice_id, "Invoice")
        payment = Payment(
            id=next_id("payments", "PMT", stamp=date.today().strftime("%y%m")),
            status=PaymentStatus.ALLOCATED if payload.invoice_id else PaymentStatus.UNALLOCATED,
            **payload.model_dump(),
        )
        add_record("payments", payment)
    logger.info(f"Payment {payment.id} recorded by {actor}: {payment.amount_inr} ({payment.status.value})")
    return payment


@router.get("/payments/{payment_id}", response_model=Payment)
async def get_payment(payment_id: str):
    with domain_errors():
        return get_record("payments", payment_id, "Payment")


@router.post("/payments/{payment_id}/allocate", response_model=Payment)
async def allocate_payment(payment_id: str, body: Optional[AllocateRequest] = None, actor: str = Depends(get_actor)):
    target = body.invoice_id if body and body.invoice_id else None

    def change(p: Payment):
        ensure_can("payment", p.id, "allocate", p.status)
        return {"status": PaymentStatus.ALLOCATED, "invoice_id": target or p.invoice_id or UNKNOWN_INVOICE}

    with domain_errors():
        if target:
            get_record("invoices", target, "Invoice")
        payment = update_record("payments", payment_id, "Payment", change)
    logger.info(f"Payment {payment.id} allocated to {payment.invoice_id} by {actor}")
    return payment


@router.post("/payments/{payment_id}/refund", response_model=Payment)
async def refund_payment(payment_id: str, actor: str = Depends(get_actor)):
    def change(p: Payment):
        ensure_can("payment", p.id, "refund", p.status)
        return {"status": PaymentStatus.REFUNDED}

    with domain_errors():
        payment = update_record("payments", payment_id, "Payment", change)
    logger.info(f"Payment {payment.id} refunded by {actor}")
    return payment
