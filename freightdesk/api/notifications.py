from fastapi import APIRouter, Depends, HTTPException
from typing import List, Optional
import logging
from freightdesk.api.deps import domain_errors, get_actor
from freightdesk.core.filters import equals_or_any, search_matches
from freightdesk.db.memory import STATE_LOCK, find_record, get_record, remove_records, rows, update_record
from freightdesk.schemas.common import BulkIds
from freightdesk.schemas.notification import (
    AlertStatus,
    AlertType,
    DeleteResult,
    MarkRequest,
    Notification,
    Severity,
)

router = APIRouter(tags=["notifications"])
logger = logging.getLogger(__name__)


@router.get("/notifications", response_model=List[Notification])
async def list_notifications(
    q: Optional[str] = None,
    type: Optional[AlertType] = None,
    severity: Optional[Severity] = None,
    status: Optional[AlertStatus] = None,
):
    matched = [
        n for n in rows("notifications")
        if search_matches(q, n.id, n.title, n.message, n.related_id)
        and equals_or_any(n.type, type)
        and equals_or_any(n.severity, severity)
        and equals_or_any(n.status, status)
    ]
    return sorted(matched, key=lambda n: n.created_at, reverse=True)


@router.get("/notifications/{notification_id}", response_model=Notification)
async def get_notification(notification_id: str):
    with domain_errors():
        return get_record("notifications", notification_id, "Notification")


@router.post("/notifications/mark", response_model=List[Notification])
async def mark_notifications(payload: MarkRequest, actor: str = Depends(get_actor)):
    with STATE_LOCK:
        missing = [i for i in payload.ids if find_record("notifications", i) is None]
        if missing:
            raise HTTPException(status_code=404, detail=f"Notification(s) not found: {', '.join(missing)}")
        updated = [
            update_record("notifications", i, "Notification", lambda n: {"status": payload.status})
            for i in dict.fromkeys(payload.ids)
        ]
    logger.info(f"{len(updated)} notification(s) marked {payload.status.value} by {actor}")
    return updated


@router.post("/notifications/delete", response_model=DeleteResult)
async def delete_notifications(payload: BulkIds, actor: str = Depends(get_actor)):
    deleted = remove_records("notifications", payload.ids)
    logger.info(f"{deleted} notification(s) deleted by {actor}")
    return DeleteResult(deleted=deleted)
