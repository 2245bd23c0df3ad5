"""FastAPI dependency providers for repositories, the resolver and services.

Separated from ``dependencies.py`` so route modules and gates can import
type aliases from here without circular imports.
"""

from typing import Annotated

from fastapi import Depends

from app.core.permission_resolver import PermissionResolver
from app.dependencies import DBSession
from app.repositories.permission_repository import PermissionRepository
from app.repositories.role_repository import RoleRepository
from app.repositories.task_repository import TaskRepository
from app.services.role_service import RoleService
from app.services.task_service import TaskService

# ---------------------------------------------------------------------------
# Repository providers
# ---------------------------------------------------------------------------


def get_role_repository(db: DBSession) -> RoleRepository:
    return RoleRepository(db)


def get_permission_repository(db: DBSession) -> PermissionRepository:
    return PermissionRepository(db)


def get_task_repository(db: DBSession) -> TaskRepository:
    return TaskRepository(db)


RoleRepo = Annotated[RoleRepository, Depends(get_role_repository)]
PermissionRepo = Annotated[PermissionRepository, Depends(get_permission_repository)]
TaskRepo = Annotated[TaskRepository, Depends(get_task_repository)]

# ---------------------------------------------------------------------------
# Resolver and service providers
# ---------------------------------------------------------------------------


def get_permission_resolver(roles: RoleRepo, permissions: PermissionRepo) -> PermissionResolver:
    return PermissionResolver(roles, permissions)


def get_role_service(roles: RoleRepo, permissions: PermissionRepo) -> RoleService:
    return RoleService(roles, permissions)


def get_task_service(repo: TaskRepo) -> TaskService:
    return TaskService(repo)


Resolver = Annotated[PermissionResolver, Depends(get_permission_resolver)]
RoleSvc = Annotated[RoleService, Depends(get_role_service)]
TaskSvc = Annotated[TaskService, Depends(get_task_service)]
