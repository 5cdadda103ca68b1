from fastapi import APIRouter, Depends, HTTPException
from typing import List, Optional
import logging
from freightdesk.api.deps import get_actor
from freightdesk.core.audit import audit_repo
from freightdesk.core.config import settings
from freightdesk.db.memory import reset_state
from freightdesk.schemas.audit import AuditLogEntry, AuditStatus

router = APIRouter(tags=["system"])
logger = logging.getLogger(__name__)


@router.get("/health")
async def health_check():
    return {"status": "ok"}


@router.post("/admin/reset")
async def reset_store(actor: str = Depends(get_actor)):
    if not settings.ENABLE_ADMIN_RESET:
        raise HTTPException(status_code=403, detail="Store reset is disabled")
    reset_state()
    logger.warning(f"In-memory store reloaded from seed data by {actor}")
    return {"status": "reset"}


@router.get("/audit", response_model=List[AuditLogEntry])
async def audit_trail(
    actor: Optional[str] = None,
    action_type: Optional[str] = None,
    record_id: Optional[str] = None,
    status: Optional[AuditStatus] = None,
):
    return audit_repo.find(actor=actor, action_type=action_type, record_id=record_id, status=status)
