"""Task API endpoints.

Every route is guarded by the permission gate for the action it performs.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.auth.gates import gate_for_tag
from app.providers import TaskSvc
from app.schemas.auth import TokenUser
from app.schemas.task import TaskCreate, TaskListResponse, TaskResponse, TaskUpdate

router = APIRouter()


def _not_found(task_id: UUID) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Task '{task_id}' not found",
    )


@router.get(
    "",
    response_model=TaskListResponse,
    dependencies=[Depends(gate_for_tag("permission:Retrieve"))],
)
async def list_tasks(
    svc: TaskSvc,
    completed: bool | None = Query(None),
    page: int = Query(1, ge=1),
    size: int = Query(50, ge=1, le=100),
) -> TaskListResponse:
    """List tasks, newest first. Optionally filter by ``completed``."""
    return await svc.list_tasks(completed, page=page, size=size)


@router.get(
    "/{task_id}",
    response_model=TaskResponse,
    dependencies=[Depends(gate_for_tag("permission:Retrieve"))],
)
async def get_task(task_id: UUID, svc: TaskSvc) -> TaskResponse:
    """Get a single task."""
    task = await svc.get_task(str(task_id))
    if not task:
        raise _not_found(task_id)
    return task


@router.post(
    "",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_task(
    task_data: TaskCreate,
    svc: TaskSvc,
    current_user: TokenUser = Depends(gate_for_tag("permission:Create")),
) -> TaskResponse:
    """Create a new task owned by the caller."""
    return await svc.create_task(task_data, owner_id=current_user.id)


@router.put(
    "/{task_id}",
    response_model=TaskResponse,
    dependencies=[Depends(gate_for_tag("permission:Update"))],
)
async def update_task(task_id: UUID, task_data: TaskUpdate, svc: TaskSvc) -> TaskResponse:
    """Update an existing task. Accepts partial updates."""
    task = await svc.update_task(str(task_id), task_data)
    if not task:
        raise _not_found(task_id)
    return task


@router.post(
    "/{task_id}/toggle",
    response_model=TaskResponse,
    dependencies=[Depends(gate_for_tag("permission:Update"))],
)
async def toggle_task(task_id: UUID, svc: TaskSvc) -> TaskResponse:
    """Flip a task between open and completed."""
    task = await svc.toggle_task(str(task_id))
    if not task:
        raise _not_found(task_id)
    return task


@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(gate_for_tag("permission:Delete"))],
)
async def delete_task(task_id: UUID, svc: TaskSvc) -> None:
    """Delete a task."""
    if not await svc.delete_task(str(task_id)):
        raise _not_found(task_id)
