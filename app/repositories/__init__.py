"""Database repositories for data access."""
from app.repositories.permission_repository import PermissionRepository
from app.repositories.role_repository import RoleRepository
from app.repositories.task_repository import TaskRepository

__all__ = [
    "RoleRepository",
    "PermissionRepository",
    "TaskRepository",
]
