"""Database models package."""

from app.models.base import Base
from app.models.permission import Permission, PermissionKind
from app.models.role import ADMINISTRATOR_ROLE, DEFAULT_ROLE, Role
from app.models.task import Task
from app.models.user import User

__all__ = [
    # Base
    "Base",
    # Models
    "User",
    "Role",
    "Permission",
    "Task",
    # Constants
    "ADMINISTRATOR_ROLE",
    "DEFAULT_ROLE",
    # Enums
    "PermissionKind",
]
