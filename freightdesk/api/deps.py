from contextlib import contextmanager
from typing import Optional
from fastapi import Header, HTTPException
from freightdesk.core.config import settings
from freightdesk.core.workflow import RecordNotFound, WorkflowError


def get_actor(x_actor: Optional[str] = Header(None, alias="X-Actor")) -> str:
    # Approvals and activity entries are attributed to this name
    return (x_actor or "").strip() or settings.DEFAULT_ACTOR


@contextmanager
def domain_errors():
    """Translate store and workflow errors into HTTP responses."""
    try:
        yield
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except WorkflowError as e:
        raise HTTPException(status_code=409, detail=str(e))
