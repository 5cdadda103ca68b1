import hashlib
import logging
from typing import Callable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from freightdesk.core.audit import audit_repo
from freightdesk.core.config import settings
from freightdesk.schemas.audit import AuditLogEntry, AuditStatus

logger = logging.getLogger(__name__)


def action_type_for(method: str, path: str) -> str:
    """
    READ for GET, HEALTH_CHECK for /health, otherwise the action named by the
    last path segment (e.g. POST /quotes/QT-1/approve -> APPROVE).
    """
    if path.rstrip("/").endswith("/health"):
        return "HEALTH_CHECK"
    if method == "GET":
        return "READ"
    last = path.rstrip("/").rsplit("/", 1)[-1]
    return (last or method).upper().replace("-", "_")


def record_id_for(path: str) -> Optional[str]:
    # /quotes/QT-240917-001/approve -> QT-240917-001; collection paths carry no id
    parts = [p for p in path.split("/") if p]
    if len(parts) >= 2 and any(ch.isdigit() for ch in parts[1]):
        return parts[1]
    return None


def sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


class AuditMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable):
        path = request.url.path
        actor = (request.headers.get("X-Actor") or "").strip() or settings.DEFAULT_ACTOR
        # Starlette caches the body, so the route can still read it
        input_hash = sha256_hex(await request.body())

        status_code = None
        output_hash = None
        try:
            response = await call_next(request)
            status_code = response.status_code
            body = b"".join([chunk async for chunk in response.body_iterator])
            output_hash = sha256_hex(body)
            response = Response(
                content=body,
                status_code=response.status_code,
                headers=dict(response.headers),
                media_type=response.media_type,
            )
        finally:
            ok = status_code is not None and 200 <= status_code < 300
            try:
                audit_repo.save(AuditLogEntry(
                    method=request.method,
                    endpoint=path,
                    record_id=record_id_for(path),
                    action_type=action_type_for(request.method, path),
                    actor=actor,
                    status=AuditStatus.SUCCESS if ok else AuditStatus.FAILURE,
                    status_code=status_code,
                    input_hash=input_hash,
                    output_hash=output_hash,
                ))
            except Exception as exc:
                logger.error("Audit entry for %s %s not stored: %s", request.method, path, exc)

        return response
