from typing import Dict, FrozenSet
from freightdesk.schemas.billing import DisputeStatus, InvoiceStatus, PaymentStatus
from freightdesk.schemas.booking import BookingStatus
from freightdesk.schemas.exception import ExceptionStatus
from freightdesk.schemas.quote import QuoteStatus
from freightdesk.schemas.rate_request import RateRequestStatus
from freightdesk.schemas.vendor import VendorOrderStatus, VendorStatus

# SINGLE SOURCE OF TRUTH FOR STATUS GUARDS
# Structure: { entity: { action: statuses the action may start from } }


class WorkflowError(ValueError):
    """Raised when an action is attempted from a status that does not allow it."""

    def __init__(self, entity: str, record_id: str, status: str, action: str):
        self.entity = entity
        self.record_id = record_id
        self.status = status
        self.action = action
        super().__init__(f"Cannot {action} {entity} {record_id} while it is {status}")


class RecordNotFound(KeyError):
    def __init__(self, entity: str, record_id: str):
        self.entity = entity
        self.record_id = record_id
        super().__init__(f"{entity} {record_id} not found")

    def __str__(self):
        return self.args[0]


def _all_but(enum_cls, *excluded) -> FrozenSet:
    return frozenset(s for s in enum_cls if s not in excluded)


_Q = QuoteStatus
_B = BookingStatus
_I = InvoiceStatus
_D = DisputeStatus
_R = RateRequestStatus
_VO = VendorOrderStatus

ACTION_GUARDS: Dict[str, Dict[str, FrozenSet]] = {
    "quote": {
        "submit": frozenset({_Q.DRAFT}),
        "approve": frozenset({_Q.DRAFT, _Q.PENDING_APPROVAL}),
        "reject": frozenset({_Q.DRAFT, _Q.PENDING_APPROVAL}),
        "lock": frozenset({_Q.APPROVED, _Q.SENT}),
        "unlock": frozenset({_Q.LOCKED}),
        "send": _all_but(QuoteStatus, _Q.REJECTED),
    },
    "rate request": {
        "assign": frozenset({_R.NEW, _R.SALES_REVIEW, _R.PRICING_REVIEW}),
        "convert": frozenset({_R.NEW, _R.SALES_REVIEW, _R.PRICING_REVIEW}),
        "reject": frozenset({_R.NEW, _R.SALES_REVIEW, _R.PRICING_REVIEW}),
    },
    "booking": {
        "confirm": frozenset({_B.NEW}),
        "sail": frozenset({_B.CONFIRMED}),
        "deliver": frozenset({_B.SAILED}),
        "cancel": _all_but(BookingStatus, _B.CANCELLED),
    },
    "invoice": {
        "issue": frozenset({_I.DRAFT}),
        "mark paid": frozenset({_I.OPEN, _I.OVERDUE}),
        "remind": frozenset({_I.OPEN, _I.OVERDUE}),
        "void": _all_but(InvoiceStatus, _I.PAID, _I.VOID),
        "mark overdue": frozenset({_I.OPEN}),
    },
    "payment": {
        "allocate": frozenset({PaymentStatus.UNALLOCATED}),
        "refund": _all_but(PaymentStatus, PaymentStatus.REFUNDED),
    },
    "dispute": {
        "investigate": frozenset({_D.OPEN}),
        "resolve": frozenset({_D.OPEN, _D.INVESTIGATING}),
        "reject": frozenset({_D.OPEN, _D.INVESTIGATING}),
    },
    "vendor": {
        "approve": _all_but(VendorStatus, VendorStatus.APPROVED),
        "reject": _all_but(VendorStatus, VendorStatus.REJECTED),
    },
    "vendor order": {
        "start": frozenset({_VO.PENDING}),
        "complete": frozenset({_VO.PENDING, _VO.IN_PROGRESS}),
        "cancel": frozenset({_VO.PENDING, _VO.IN_PROGRESS}),
    },
    "exception": {
        "resolve": _all_but(ExceptionStatus, ExceptionStatus.RESOLVED),
    },
}

# Exception drawer updates may set any status; these are the moves it accepts.
EXCEPTION_TRANSITIONS: Dict[ExceptionStatus, FrozenSet[ExceptionStatus]] = {
    ExceptionStatus.OPEN: frozenset({
        ExceptionStatus.IN_PROGRESS, ExceptionStatus.WAITING_EXTERNAL,
        ExceptionStatus.ESCALATED, ExceptionStatus.RESOLVED,
    }),
    ExceptionStatus.IN_PROGRESS: frozenset({
        ExceptionStatus.OPEN, ExceptionStatus.WAITING_EXTERNAL,
        ExceptionStatus.ESCALATED, ExceptionStatus.RESOLVED,
    }),
    ExceptionStatus.WAITING_EXTERNAL: frozenset({
        ExceptionStatus.IN_PROGRESS, ExceptionStatus.ESCALATED, ExceptionStatus.RESOLVED,
    }),
    ExceptionStatus.ESCALATED: frozenset({
        ExceptionStatus.IN_PROGRESS, ExceptionStatus.RESOLVED,
    }),
    # Reopen only
    ExceptionStatus.RESOLVED: frozenset({ExceptionStatus.OPEN, ExceptionStatus.IN_PROGRESS}),
}


def allowed_from(entity: str, action: str) -> FrozenSet:
    try:
        return ACTION_GUARDS[entity][action]
    except KeyError:
        raise ValueError(f"Unknown action '{action}' for {entity}")


def can(entity: str, action: str, status) -> bool:
    return status in allowed_from(entity, action)


def ensure_can(entity: str, record_id: str, action: str, status) -> None:
    """Raise WorkflowError unless `action` may start from `status`."""
    if not can(entity, action, status):
        raise WorkflowError(entity, record_id, _label(status), action)


def ensure_exception_transition(record_id: str, current: ExceptionStatus, target: ExceptionStatus) -> None:
    # Keeping the same status is always allowed; the update may only touch owner or notes
    if current == target:
        return
    if target not in EXCEPTION_TRANSITIONS[current]:
        raise WorkflowError("exception", record_id, current.value, f"move to {target.value}")


def _label(status) -> str:
    return status.value if hasattr(status, "value") else str(status)
