"""Repository for task data access."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.task import Task
from app.schemas.task import TaskCreate, TaskUpdate


class TaskRepository:
    """Data access layer for tasks."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_all(
        self,
        completed: bool | None = None,
        page: int = 1,
        size: int = 50,
    ) -> tuple[list[Task], int]:
        """Get tasks, newest first, optionally filtered by completion."""
        query = select(Task)
        count_query = select(func.count()).select_from(Task)
        if completed is not None:
            query = query.where(Task.completed == completed)
            count_query = count_query.where(Task.completed == completed)

        total = await self.session.scalar(count_query) or 0

        query = query.order_by(Task.created_at.desc()).offset((page - 1) * size).limit(size)
        result = await self.session.execute(query)
        return list(result.scalars().all()), total

    async def get_by_id(self, task_id: str) -> Task | None:
        """Get a task by ID."""
        result = await self.session.execute(select(Task).where(Task.id == task_id))
        return result.scalar_one_or_none()

    async def create(self, task_data: TaskCreate, owner_id: str | None = None) -> Task:
        """Create a new task."""
        task = Task(
            title=task_data.title,
            description=task_data.description,
            completed=task_data.completed,
            owner_id=owner_id,
        )
        self.session.add(task)
        await self.session.flush()
        await self.session.refresh(task)
        return task

    async def update(self, task_id: str, task_data: TaskUpdate) -> Task | None:
        """Update an existing task."""
        task = await self.get_by_id(task_id)
        if not task:
            return None

        # Update only provided fields
        update_data = task_data.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            setattr(task, field, value)

        await self.session.flush()
        await self.session.refresh(task)
        return task

    async def delete(self, task_id: str) -> bool:
        """Delete a task."""
        task = await self.get_by_id(task_id)
        if not task:
            return False

        await self.session.delete(task)
        await self.session.flush()
        return True

    async def toggle(self, task_id: str) -> Task | None:
        """Toggle a task's completed state."""
        task = await self.get_by_id(task_id)
        if not task:
            return None

        task.completed = not task.completed
        await self.session.flush()
        await self.session.refresh(task)
        return task
