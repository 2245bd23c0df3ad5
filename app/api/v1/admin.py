"""Role administration API (Administrator only)."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from app.auth.gates import require_role
from app.models.permission import PermissionKind
from app.models.role import ADMINISTRATOR_ROLE
from app.providers import RoleSvc
from app.repositories.permission_repository import DuplicatePermissionError
from app.repositories.role_repository import DuplicateRoleError, UserNotFoundError
from app.schemas.role import PermissionGrantRequest, RoleCreate, RoleResponse, RoleUpdate

router = APIRouter(dependencies=[Depends(require_role(ADMINISTRATOR_ROLE))])


def _no_role(user_id: UUID) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"User '{user_id}' has no role",
    )


@router.get("/roles", response_model=list[RoleResponse])
async def list_roles(svc: RoleSvc) -> list[RoleResponse]:
    """List every assigned role with its permissions."""
    return await svc.list_roles()


@router.get("/users/{user_id}/role", response_model=RoleResponse)
async def get_user_role(user_id: UUID, svc: RoleSvc) -> RoleResponse:
    """Get a user's role."""
    role = await svc.get_role(str(user_id))
    if not role:
        raise _no_role(user_id)
    return role


@router.post(
    "/users/{user_id}/role",
    response_model=RoleResponse,
    status_code=status.HTTP_201_CREATED,
)
async def assign_user_role(user_id: UUID, role_data: RoleCreate, svc: RoleSvc) -> RoleResponse:
    """Assign a role (and its initial permissions) to a user without one."""
    try:
        return await svc.assign_role(str(user_id), role_data)
    except UserNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except DuplicateRoleError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc


@router.put("/users/{user_id}/role", response_model=RoleResponse)
async def update_user_role(user_id: UUID, role_data: RoleUpdate, svc: RoleSvc) -> RoleResponse:
    """Rename or re-describe a user's role."""
    role = await svc.update_role(str(user_id), role_data)
    if not role:
        raise _no_role(user_id)
    return role


@router.delete("/users/{user_id}/role", status_code=status.HTTP_204_NO_CONTENT)
async def remove_user_role(user_id: UUID, svc: RoleSvc) -> None:
    """Remove a user's role together with all of its permissions."""
    if not await svc.remove_role(str(user_id)):
        raise _no_role(user_id)


@router.post(
    "/users/{user_id}/role/permissions",
    response_model=RoleResponse,
    status_code=status.HTTP_201_CREATED,
)
async def grant_permission(
    user_id: UUID, body: PermissionGrantRequest, svc: RoleSvc
) -> RoleResponse:
    """Grant one permission kind to a user's role."""
    try:
        role = await svc.grant_permission(str(user_id), body.kind)
    except DuplicatePermissionError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    if not role:
        raise _no_role(user_id)
    return role


@router.delete(
    "/users/{user_id}/role/permissions/{kind}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def revoke_permission(user_id: UUID, kind: PermissionKind, svc: RoleSvc) -> None:
    """Revoke one permission kind from a user's role."""
    if not await svc.revoke_permission(str(user_id), kind):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Permission '{kind}' is not granted to user '{user_id}'",
        )
