"""Protocol definitions for repository interfaces.

These protocols enable type-safe mocking in tests and decouple the
resolver and service layers from concrete SQLAlchemy implementations.
"""

from typing import Protocol

from app.models.permission import Permission, PermissionKind
from app.models.role import Role
from app.models.task import Task
from app.schemas.role import RoleUpdate
from app.schemas.task import TaskCreate, TaskUpdate


class RoleRepositoryProtocol(Protocol):
    """Interface for role data access."""

    async def get_by_user_id(self, user_id: str) -> Role | None: ...

    async def list_all(self) -> list[Role]: ...

    async def create(self, user_id: str, name: str, description: str | None = None) -> Role: ...

    async def update(self, user_id: str, role_data: RoleUpdate) -> Role | None: ...

    async def delete(self, user_id: str) -> bool: ...


class PermissionRepositoryProtocol(Protocol):
    """Interface for permission grant data access."""

    async def exists(self, role_id: str, kind: PermissionKind) -> bool: ...

    async def list_kinds(self, role_id: str) -> list[PermissionKind]: ...

    async def grant(self, role_id: str, kind: PermissionKind) -> Permission: ...

    async def revoke(self, role_id: str, kind: PermissionKind) -> bool: ...


class TaskRepositoryProtocol(Protocol):
    """Interface for task data access."""

    async def get_all(
        self, completed: bool | None = None, page: int = 1, size: int = 50
    ) -> tuple[list[Task], int]: ...

    async def get_by_id(self, task_id: str) -> Task | None: ...

    async def create(self, task_data: TaskCreate, owner_id: str | None = None) -> Task: ...

    async def update(self, task_id: str, task_data: TaskUpdate) -> Task | None: ...

    async def delete(self, task_id: str) -> bool: ...

    async def toggle(self, task_id: str) -> Task | None: ...
