from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse
from datetime import date, datetime, timezone
from typing import Dict, List, Optional
import hashlib
import io
import logging
from freightdesk.api.deps import domain_errors, get_actor
from freightdesk.core.audit import audit_repo
from freightdesk.core.filters import equals_or_any, search_matches
from freightdesk.core.invoice_pdf import render_invoice_pdf
from freightdesk.core.notifier import emit_notification
from freightdesk.core.workflow import can, ensure_can
from freightdesk.db.memory import STATE_LOCK, add_record, get_record, next_id, rows, update_record
from freightdesk.schemas.audit import AuditLogEntry, AuditStatus
from freightdesk.schemas.billing import Invoice, InvoiceCreate, InvoiceStatus
from freightdesk.schemas.notification import AlertType, Severity

router = APIRouter(tags=["invoices"])
logger = logging.getLogger(__name__)


def transition_invoice(invoice_id: str, action: str, status: InvoiceStatus, actor: str) -> Invoice:
    def change(inv: Invoice):
        ensure_can("invoice", inv.id, action, inv.status)
        return {"status": status}

    invoice = update_record("invoices", invoice_id, "Invoice", change)
    logger.info(f"Invoice {invoice.id} -> {invoice.status.value} by {actor}")
    return invoice


@router.get("/invoices", response_model=List[Invoice])
async def list_invoices(q: Optional[str] = None, status: Optional[InvoiceStatus] = None):
    return [
        r for r in rows("invoices")
        if search_matches(q, r.id, r.customer) and equals_or_any(r.status, status)
    ]


@router.post("/invoices", response_model=Invoice, status_code=201)
async def create_invoice(payload: InvoiceCreate):
    now = datetime.now(timezone.utc)
    with STATE_LOCK:
        invoice = Invoice(
            id=next_id("invoices", "INV", stamp=now.strftime("%y%m")),
            created_at=now,
            **payload.model_dump(),
        )
        add_record("invoices", invoice)
    logger.info(f"Invoice {invoice.id} drafted for {invoice.customer}: {invoice.amount_inr}")
    return invoice


@router.post("/invoices/refresh-overdue")
async def refresh_overdue(as_of: Optional[date] = None) -> Dict[str, List[str]]:
    """Flag every Open invoice past its due date as Overdue."""
    as_of = as_of or date.today()
    changed = []
    with STATE_LOCK:
        for inv in rows("invoices"):
            if can("invoice", "mark overdue", inv.status) and inv.due_date < as_of:
                update_record("invoices", inv.id, "Invoice", lambda _: {"status": InvoiceStatus.OVERDUE})
                changed.append(inv)

    for inv in changed:
        days = (as_of - inv.due_date).days
        emit_notification(
            "Invoice Overdue",
            f"{inv.id} is overdue by {days} day{'s' if days != 1 else ''}.",
            AlertType.BILLING,
            Severity.CRITICAL,
            related_id=inv.id,
            related_path="/invoices",
        )
    logger.info(f"Overdue refresh as of {as_of}: {len(changed)} invoice(s) flagged")
    return {"overdue": [inv.id for inv in changed]}


@router.get("/invoices/{invoice_id}", response_model=Invoice)
async def get_invoice(invoice_id: str):
    with domain_errors():
        return get_record("invoices", invoice_id, "Invoice")


@router.post("/invoices/{invoice_id}/issue", response_model=Invoice)
async def issue_invoice(invoice_id: str, actor: str = Depends(get_actor)):
    with domain_errors():
        return transition_invoice(invoice_id, "issue", InvoiceStatus.OPEN, actor)


@router.post("/invoices/{invoice_id}/mark-paid", response_model=Invoice)
async def mark_paid(invoice_id: str, actor: str = Depends(get_actor)):
    with domain_errors():
        return transition_invoice(invoice_id, "mark paid", InvoiceStatus.PAID, actor)


@router.post("/invoices/{invoice_id}/void", response_model=Invoice)
async def void_invoice(invoice_id: str, actor: str = Depends(get_actor)):
    with domain_errors():
        return transition_invoice(invoice_id, "void", InvoiceStatus.VOID, actor)


@router.post("/invoices/{invoice_id}/remind")
async def send_reminder(invoice_id: str, actor: str = Depends(get_actor)):
    today = date.today().isoformat()

    def change(inv: Invoice):
        ensure_can("invoice", inv.id, "remind", inv.status)
        line = f"Reminder sent on {today}"
        return {"notes": f"{inv.notes}\n{line}" if inv.notes else line}

    with domain_errors():
        invoice = update_record("invoices", invoice_id, "Invoice", change)
    emit_notification(
        "Payment Reminder",
        f"Reminder email queued for {invoice.id} ({invoice.customer}).",
        AlertType.BILLING,
        Severity.WARNING,
        related_id=invoice.id,
        related_path="/invoices",
    )
    logger.info(f"Reminder queued for invoice {invoice.id} by {actor}")
    return {"detail": f"Reminder email queued for {invoice.id}"}


@router.get("/invoices/{invoice_id}/pdf")
async def download_invoice_pdf(invoice_id: str, actor: str = Depends(get_actor)):
    with domain_errors():
        invoice = get_record("invoices", invoice_id, "Invoice")

    try:
        pdf_bytes = render_invoice_pdf(invoice)
    except Exception as e:
        logger.error(f"PDF Build Failed: {str(e)}")
        raise HTTPException(status_code=500, detail="PDF generation failed during document build.")

    pdf_hash = hashlib.sha256(pdf_bytes).hexdigest()
    audit_repo.save(AuditLogEntry(
        endpoint=f"/invoices/{invoice.id}/pdf",
        method="GET",
        record_id=invoice.id,
        action_type="PDF_DOWNLOAD",
        actor=actor,
        output_hash=pdf_hash,
        status=AuditStatus.SUCCESS,
        status_code=200,
    ))

    return StreamingResponse(
        io.BytesIO(pdf_bytes),
        media_type="application/pdf",
        headers={
            "Content-Disposition": f"attachment; filename={invoice.id}.pdf",
            "Content-Length": str(len(pdf_bytes))
        }
    )
