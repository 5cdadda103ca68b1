from fastapi import APIRouter, Request, Form
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from pathlib import Path
from typing import Optional
from freightdesk.api.dashboard import build_summary
from freightdesk.api.exceptions import action_queue, resolve_exception
from freightdesk.core.config import settings
from freightdesk.db.memory import rows

router = APIRouter()
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))


@router.get("/", response_class=HTMLResponse)
async def overview_page(request: Request):
    return templates.TemplateResponse(request, "dashboard.html", {
        "project_name": settings.PROJECT_NAME,
        "currency": settings.CURRENCY,
        "summary": build_summary(),
        "queue": action_queue(rows("exceptions")),
    })


@router.post("/ui/exceptions/{exception_id}/resolve")
async def resolve_from_queue(exception_id: str, actor: Optional[str] = Form(None)):
    # Plain form post from the overview's action queue, then back to the overview
    await resolve_exception(exception_id, actor=(actor or "").strip() or settings.DEFAULT_ACTOR)
    return RedirectResponse(url="/", status_code=303)
