"""Service layer for task management."""

from math import ceil

from app.repositories.protocols import TaskRepositoryProtocol
from app.schemas.task import TaskCreate, TaskListResponse, TaskResponse, TaskUpdate


class TaskService:
    """Business logic for the task list."""

    def __init__(self, repo: TaskRepositoryProtocol):
        self._repo = repo

    async def list_tasks(
        self,
        completed: bool | None = None,
        page: int = 1,
        size: int = 50,
    ) -> TaskListResponse:
        tasks, total = await self._repo.get_all(completed, page=page, size=size)
        return TaskListResponse(
            items=[TaskResponse.model_validate(t) for t in tasks],
            total=total,
            page=page,
            size=size,
            pages=ceil(total / size) if size > 0 else 0,
        )

    async def get_task(self, task_id: str) -> TaskResponse | None:
        task = await self._repo.get_by_id(task_id)
        if task is None:
            return None
        return TaskResponse.model_validate(task)

    async def create_task(self, task_data: TaskCreate, owner_id: str | None = None) -> TaskResponse:
        task = await self._repo.create(task_data, owner_id=owner_id)
        return TaskResponse.model_validate(task)

    async def update_task(self, task_id: str, task_data: TaskUpdate) -> TaskResponse | None:
        task = await self._repo.update(task_id, task_data)
        if task is None:
            return None
        return TaskResponse.model_validate(task)

    async def delete_task(self, task_id: str) -> bool:
        return await self._repo.delete(task_id)

    async def toggle_task(self, task_id: str) -> TaskResponse | None:
        task = await self._repo.toggle(task_id)
        if task is None:
            return None
        return TaskResponse.model_validate(task)
