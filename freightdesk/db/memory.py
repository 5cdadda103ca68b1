import re
import threading
from typing import Any, Callable, Dict, List, Optional

from freightdesk.core.workflow import RecordNotFound
from freightdesk.db.seed import build_seed

# AUTHORITATIVE GLOBAL STORE – DO NOT DUPLICATE
# Structure: { collection: [pydantic records, newest first where the page listed them so] }
# In-memory only; a restart or POST /admin/reset reloads the seed.
APP_STATE: Dict[str, List[Any]] = {}

# Handlers run in the threadpool; every read-modify-write goes through this lock
STATE_LOCK = threading.RLock()


def reset_state() -> None:
    with STATE_LOCK:
        APP_STATE.clear()
        APP_STATE.update(build_seed())


def rows(collection: str) -> List[Any]:
    with STATE_LOCK:
        return list(APP_STATE.get(collection, []))


def get_record(collection: str, record_id: str, entity: str, key: str = "id"):
    with STATE_LOCK:
        for record in APP_STATE.get(collection, []):
            if getattr(record, key) == record_id:
                return record
    raise RecordNotFound(entity, record_id)


def find_record(collection: str, record_id: str, key: str = "id"):
    with STATE_LOCK:
        return next((r for r in APP_STATE.get(collection, []) if getattr(r, key) == record_id), None)


def add_record(collection: str, record: Any, front: bool = True) -> Any:
    with STATE_LOCK:
        bucket = APP_STATE.setdefault(collection, [])
        if front:
            bucket.insert(0, record)
        else:
            bucket.append(record)
    return record


def update_record(collection: str, record_id: str, entity: str, change: Callable[[Any], Dict[str, Any]], key: str = "id"):
    """
    Replace a record with a copy carrying the fields returned by `change`.
    `change` receives the current record and may raise to abort the update.
    """
    with STATE_LOCK:
        bucket = APP_STATE.get(collection, [])
        for index, record in enumerate(bucket):
            if getattr(record, key) == record_id:
                updated = record.model_copy(update=change(record))
                bucket[index] = updated
                return updated
    raise RecordNotFound(entity, record_id)


def remove_records(collection: str, ids: List[str], key: str = "id") -> int:
    with STATE_LOCK:
        bucket = APP_STATE.get(collection, [])
        keep = [r for r in bucket if getattr(r, key) not in ids]
        removed = len(bucket) - len(keep)
        APP_STATE[collection] = keep
    return removed


def next_id(collection: str, prefix: str, stamp: Optional[str] = None, width: int = 3, key: str = "id") -> str:
    """Next id in a seed-style sequence, e.g. EX-1025, ALR-0005, QT-251019-001."""
    base = f"{prefix}-{stamp}-" if stamp else f"{prefix}-"
    pattern = re.compile(rf"^{re.escape(base)}(\d+)$")
    with STATE_LOCK:
        numbers = [
            int(m.group(1))
            for m in (pattern.match(getattr(r, key)) for r in APP_STATE.get(collection, []))
            if m
        ]
    return f"{base}{(max(numbers) + 1 if numbers else 1):0{width}d}"


reset_state()
