from pydantic import BaseModel


class DashboardSummary(BaseModel):
    active_bookings: int = 0
    pending_quote_approvals: int = 0
    open_rate_requests: int = 0
    open_exceptions: int = 0
    critical_exceptions: int = 0
    customs_holds: int = 0
    overdue_invoices: int = 0
    outstanding_receivables_inr: float = 0.0
    unallocated_payments: int = 0
    open_disputes: int = 0
    pending_vendors: int = 0
    unread_notifications: int = 0
