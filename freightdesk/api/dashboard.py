from fastapi import APIRouter
from freightdesk.db.memory import STATE_LOCK, rows
from freightdesk.schemas.billing import DisputeStatus, InvoiceStatus, PaymentStatus
from freightdesk.schemas.booking import BookingStatus
from freightdesk.schemas.dashboard import DashboardSummary
from freightdesk.schemas.exception import ExceptionStatus, ExceptionType, Priority
from freightdesk.schemas.notification import AlertStatus
from freightdesk.schemas.quote import QuoteStatus
from freightdesk.schemas.rate_request import RateRequestStatus
from freightdesk.schemas.vendor import VendorStatus

router = APIRouter(tags=["dashboard"])

OPEN_REQUEST_STATES = {RateRequestStatus.NEW, RateRequestStatus.SALES_REVIEW, RateRequestStatus.PRICING_REVIEW}


def build_summary() -> DashboardSummary:
    with STATE_LOCK:
        exceptions = [e for e in rows("exceptions") if e.status != ExceptionStatus.RESOLVED]
        receivable = [i for i in rows("invoices") if i.status in (InvoiceStatus.OPEN, InvoiceStatus.OVERDUE)]
        return DashboardSummary(
            active_bookings=sum(
                1 for b in rows("bookings")
                if b.status not in (BookingStatus.CANCELLED, BookingStatus.DELIVERED)
            ),
            pending_quote_approvals=sum(1 for q in rows("quotes") if q.status == QuoteStatus.PENDING_APPROVAL),
            open_rate_requests=sum(1 for r in rows("rate_requests") if r.status in OPEN_REQUEST_STATES),
            open_exceptions=len(exceptions),
            critical_exceptions=sum(1 for e in exceptions if e.priority == Priority.HIGH),
            customs_holds=sum(1 for e in exceptions if e.type == ExceptionType.CUSTOMS_HOLD),
            overdue_invoices=sum(1 for i in receivable if i.status == InvoiceStatus.OVERDUE),
            outstanding_receivables_inr=round(sum(i.amount_inr for i in receivable), 2),
            unallocated_payments=sum(1 for p in rows("payments") if p.status == PaymentStatus.UNALLOCATED),
            open_disputes=sum(
                1 for d in rows("disputes")
                if d.status in (DisputeStatus.OPEN, DisputeStatus.INVESTIGATING)
            ),
            pending_vendors=sum(1 for v in rows("vendors") if v.status == VendorStatus.PENDING),
            unread_notifications=sum(1 for n in rows("notifications") if n.status == AlertStatus.UNREAD),
        )


@router.get("/dashboard/summary", response_model=DashboardSummary)
async def dashboard_summary():
    return build_summary()
