"""Pydantic schemas package."""
from app.schemas.auth import MeResponse, TokenUser
from app.schemas.role import (
    PermissionGrantRequest,
    RoleCreate,
    RoleResponse,
    RoleUpdate,
)
from app.schemas.task import (
    TaskCreate,
    TaskListResponse,
    TaskResponse,
    TaskUpdate,
)

__all__ = [
    # Auth schemas
    "TokenUser",
    "MeResponse",
    # Role schemas
    "RoleCreate",
    "RoleUpdate",
    "RoleResponse",
    "PermissionGrantRequest",
    # Task schemas
    "TaskCreate",
    "TaskUpdate",
    "TaskResponse",
    "TaskListResponse",
]
