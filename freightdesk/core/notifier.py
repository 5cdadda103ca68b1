from datetime import datetime, timezone
import logging
from typing import Optional
from freightdesk.db.memory import STATE_LOCK, add_record, next_id
from freightdesk.schemas.notification import AlertType, Notification, Severity

logger = logging.getLogger(__name__)


def emit_notification(
    title: str,
    message: str,
    type: AlertType,
    severity: Severity = Severity.INFO,
    related_id: Optional[str] = None,
    related_path: Optional[str] = None,
) -> Notification:
    """
    Push an Unread alert to the notification inbox.
    Ids continue the seed's ALR-NNNN sequence.
    """
    with STATE_LOCK:
        notification = Notification(
            id=next_id("notifications", "ALR", width=4),
            created_at=datetime.now(timezone.utc),
            title=title,
            message=message,
            type=type,
            severity=severity,
            related_id=related_id,
            related_path=related_path,
        )
        add_record("notifications", notification)
    logger.info(f"Notification {notification.id} emitted: {title} ({severity.value})")
    return notification
