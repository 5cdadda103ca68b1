from fastapi import APIRouter, Depends
from datetime import date
from typing import List, Optional
import logging
from freightdesk.api.deps import domain_errors, get_actor
from freightdesk.core.config import settings
from freightdesk.core.filters import equals_or_any, search_matches
from freightdesk.core.notifier import emit_notification
from freightdesk.core.workflow import ensure_can, ensure_exception_transition
from freightdesk.db.memory import STATE_LOCK, add_record, get_record, next_id, rows, update_record
from freightdesk.schemas.common import ActivityEntry
from freightdesk.schemas.exception import (
    AssignOwner,
    ExceptionCreate,
    ExceptionKpis,
    ExceptionStatus,
    ExceptionUpdate,
    Priority,
    ShipmentException,
    SlaState,
)
from freightdesk.schemas.notification import AlertType, Severity

router = APIRouter(tags=["exceptions"])
logger = logging.getLogger(__name__)

PRIORITY_RANK = {Priority.HIGH: 0, Priority.MEDIUM: 1, Priority.LOW: 2}
STATUS_RANK = {ExceptionStatus.OPEN: 0, ExceptionStatus.IN_PROGRESS: 1}


def _unresolved(rows_):
    return [r for r in rows_ if r.status != ExceptionStatus.RESOLVED]


def compute_kpis(rows_: List[ShipmentException], today: Optional[date] = None) -> ExceptionKpis:
    """
    Headline numbers for the exceptions page.

    avg_resolution_hours is a display heuristic scaled by the number of rows,
    clamped to 2.1..9.8 hours; it is not derived from timestamps.
    """
    today = today or date.today()
    open_rows = _unresolved(rows_)
    avg = round(min(9.8, max(2.1, 1.55 * len(rows_))), 1) if rows_ else 0.0
    return ExceptionKpis(
        open=len(open_rows),
        high=sum(1 for r in open_rows if r.priority == Priority.HIGH),
        avg_resolution_hours=avg,
        resolved_today=sum(
            1 for r in rows_ if r.status == ExceptionStatus.RESOLVED and r.last_updated_at == today
        ),
    )


def action_queue(rows_: List[ShipmentException], size: Optional[int] = None) -> List[ShipmentException]:
    size = settings.EXCEPTION_QUEUE_SIZE if size is None else size
    ordered = sorted(
        _unresolved(rows_),
        key=lambda r: (PRIORITY_RANK[r.priority], STATUS_RANK.get(r.status, 2)),
    )
    return ordered[:size]


def describe_update(current: ShipmentException, owner: Optional[str], status: Optional[ExceptionStatus],
                    notes: Optional[str], root_cause: str) -> str:
    changes = []
    if owner and owner != current.owner:
        changes.append(f"Owner → {owner}")
    if status and status != current.status:
        changes.append(f"Status → {status.value}")
    if notes:
        changes.append("Notes added")
    return f"Updated: {' • '.join(changes) or 'No changes'}. Root cause: {root_cause}."


@router.get("/exceptions", response_model=List[ShipmentException])
async def list_exceptions(
    q: Optional[str] = None,
    priority: Optional[Priority] = None,
    status: Optional[ExceptionStatus] = None,
    owner: Optional[str] = None,
):
    return [
        r for r in rows("exceptions")
        if search_matches(q, r.exception_id, r.shipment_id, r.route, r.type.value, r.owner)
        and equals_or_any(r.priority, priority)
        and equals_or_any(r.status, status)
        and equals_or_any(r.owner, owner)
    ]


@router.get("/exceptions/owners", response_model=List[str])
async def list_owners():
    seen = []
    for r in rows("exceptions"):
        if r.owner not in seen:
            seen.append(r.owner)
    return seen


@router.get("/exceptions/kpis", response_model=ExceptionKpis)
async def exception_kpis():
    return compute_kpis(rows("exceptions"))


@router.get("/exceptions/queue", response_model=List[ShipmentException])
async def exception_queue():
    return action_queue(rows("exceptions"))


@router.get("/exceptions/{exception_id}", response_model=ShipmentException)
async def get_exception(exception_id: str):
    with domain_errors():
        return get_record("exceptions", exception_id, "Exception", key="exception_id")


@router.post("/exceptions", response_model=ShipmentException, status_code=201)
async def create_exception(payload: ExceptionCreate, actor: str = Depends(get_actor)):
    today = date.today()
    with STATE_LOCK:
        record = ShipmentException(
            exception_id=next_id("exceptions", "EX", width=4, key="exception_id"),
            created_at=today,
            last_updated_at=today,
            activity=[ActivityEntry(at=today, by=actor, text="Exception created")],
            **payload.model_dump(),
        )
        add_record("exceptions", record)
    logger.info(f"Exception {record.exception_id} raised on {record.shipment_id} by {actor}")
    return record


@router.post("/exceptions/{exception_id}/assign", response_model=ShipmentException)
async def assign_owner(exception_id: str, payload: AssignOwner, actor: str = Depends(get_actor)):
    owner = payload.owner.strip()
    today = date.today()

    def change(r: ShipmentException):
        return {
            "owner": owner,
            "last_updated_at": today,
            "activity": r.activity + [ActivityEntry(at=today, by=actor, text=f"Assigned owner: {owner}")],
        }

    with domain_errors():
        record = update_record("exceptions", exception_id, "Exception", change, key="exception_id")
    logger.info(f"Exception {record.exception_id} assigned to {owner} by {actor}")
    return record


@router.post("/exceptions/{exception_id}/update", response_model=ShipmentException)
async def update_exception(exception_id: str, payload: ExceptionUpdate, actor: str = Depends(get_actor)):
    owner = (payload.owner or "").strip()
    if owner == "Me":
        owner = actor
    notes = (payload.notes or "").strip()
    today = date.today()

    def change(r: ShipmentException):
        if payload.status:
            ensure_exception_transition(r.exception_id, r.status, payload.status)
        text = describe_update(r, owner, payload.status, notes, payload.root_cause.value)
        update = {
            "last_updated_at": today,
            "activity": r.activity + [ActivityEntry(at=today, by=actor, text=text)],
        }
        if owner:
            update["owner"] = owner
        if payload.status:
            update["status"] = payload.status
        if notes:
            update["notes"] = notes
        return update

    with domain_errors(), STATE_LOCK:
        before = get_record("exceptions", exception_id, "Exception", key="exception_id")
        record = update_record("exceptions", exception_id, "Exception", change, key="exception_id")
        if record.status == ExceptionStatus.ESCALATED and before.status != ExceptionStatus.ESCALATED:
            emit_notification(
                "Exception Escalated",
                f"{record.exception_id} on {record.shipment_id} ({record.type.value}) was escalated by {actor}.",
                AlertType.SHIPMENT,
                Severity.CRITICAL,
                related_id=record.exception_id,
                related_path="/exceptions",
            )
    logger.info(f"Exception {record.exception_id} -> {record.status.value} by {actor}")
    return record


@router.post("/exceptions/{exception_id}/resolve", response_model=ShipmentException)
async def resolve_exception(exception_id: str, actor: str = Depends(get_actor)):
    today = date.today()

    def change(r: ShipmentException):
        ensure_can("exception", r.exception_id, "resolve", r.status)
        return {
            "status": ExceptionStatus.RESOLVED,
            "sla_state": SlaState.OK,
            "sla_text": "Resolved",
            "last_updated_at": today,
            "activity": r.activity + [ActivityEntry(at=today, by=actor, text="Marked Resolved")],
        }

    with domain_errors():
        record = update_record("exceptions", exception_id, "Exception", change, key="exception_id")
    logger.info(f"Exception {record.exception_id} -> Resolved by {actor}")
    return record
