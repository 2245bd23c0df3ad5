"""Server-rendered pages.

Each page resolves ``PageControls`` for the caller and passes it to the
template, which decides which action controls to emit.
"""

from pathlib import Path

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from app.auth.gates import gate_for_tag
from app.core.presentation import resolve_page_controls
from app.models.role import ADMINISTRATOR_ROLE
from app.providers import Resolver, RoleSvc, TaskSvc
from app.schemas.auth import TokenUser
from app.utils.flash import pop_flashed_messages

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))

router = APIRouter(default_response_class=HTMLResponse)


@router.get("/")
async def home(request: Request) -> HTMLResponse:
    """Landing page. Shows any pending flash messages, e.g. access denials."""
    return templates.TemplateResponse(
        request,
        "home.html",
        {"messages": pop_flashed_messages(request)},
    )


@router.get("/tasks")
async def task_list_page(
    request: Request,
    svc: TaskSvc,
    resolver: Resolver,
    current_user: TokenUser = Depends(gate_for_tag("permission:Retrieve")),
    page: int = Query(1, ge=1),
) -> HTMLResponse:
    """Task list with add/edit/delete controls rendered per permission."""
    tasks = await svc.list_tasks(page=page)
    controls = await resolve_page_controls(resolver, current_user.id)
    return templates.TemplateResponse(
        request,
        "tasks.html",
        {
            "tasks": tasks,
            "controls": controls,
            "user": current_user,
            "messages": pop_flashed_messages(request),
        },
    )


@router.get("/admin/roles")
async def admin_roles_page(
    request: Request,
    svc: RoleSvc,
    current_user: TokenUser = Depends(gate_for_tag(f"role:{ADMINISTRATOR_ROLE}")),
) -> HTMLResponse:
    """Role overview for administrators."""
    return templates.TemplateResponse(
        request,
        "admin_roles.html",
        {
            "roles": await svc.list_roles(),
            "user": current_user,
            "messages": pop_flashed_messages(request),
        },
    )
