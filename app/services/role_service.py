"""Service layer for role and permission administration."""

import logging

from app.models.permission import PermissionKind
from app.models.role import Role
from app.repositories.protocols import PermissionRepositoryProtocol, RoleRepositoryProtocol
from app.schemas.role import RoleCreate, RoleResponse, RoleUpdate

logger = logging.getLogger(__name__)

_KIND_ORDER = {kind: index for index, kind in enumerate(PermissionKind)}


class RoleService:
    """Assigns roles to users and grants or revokes their permissions."""

    def __init__(
        self,
        roles: RoleRepositoryProtocol,
        permissions: PermissionRepositoryProtocol,
    ):
        self._roles = roles
        self._permissions = permissions

    async def _build_response(self, role: Role) -> RoleResponse:
        kinds = await self._permissions.list_kinds(role.id)
        return RoleResponse(
            id=role.id,
            user_id=role.user_id,
            name=role.name,
            description=role.description,
            permissions=sorted(kinds, key=_KIND_ORDER.__getitem__),
            created_at=role.created_at,
            updated_at=role.updated_at,
        )

    async def list_roles(self) -> list[RoleResponse]:
        return [await self._build_response(role) for role in await self._roles.list_all()]

    async def get_role(self, user_id: str) -> RoleResponse | None:
        role = await self._roles.get_by_user_id(user_id)
        if role is None:
            return None
        return await self._build_response(role)

    async def assign_role(self, user_id: str, role_data: RoleCreate) -> RoleResponse:
        """Give a user their role and its initial permissions.

        Raises:
            UserNotFoundError: If the user does not exist.
            DuplicateRoleError: If the user already has a role.
        """
        role = await self._roles.create(user_id, role_data.name, role_data.description)
        for kind in dict.fromkeys(role_data.permissions):
            await self._permissions.grant(role.id, kind)
        logger.info("Assigned role %s to user %s", role.name, user_id)
        return await self._build_response(role)

    async def update_role(self, user_id: str, role_data: RoleUpdate) -> RoleResponse | None:
        role = await self._roles.update(user_id, role_data)
        if role is None:
            return None
        return await self._build_response(role)

    async def remove_role(self, user_id: str) -> bool:
        removed = await self._roles.delete(user_id)
        if removed:
            logger.info("Removed role from user %s", user_id)
        return removed

    async def grant_permission(self, user_id: str, kind: PermissionKind) -> RoleResponse | None:
        """Grant *kind* to the user's role. Returns None if the user has no role.

        Raises:
            DuplicatePermissionError: If the role already holds *kind*.
        """
        role = await self._roles.get_by_user_id(user_id)
        if role is None:
            return None
        await self._permissions.grant(role.id, kind)
        return await self._build_response(role)

    async def revoke_permission(self, user_id: str, kind: PermissionKind) -> bool:
        """Revoke *kind* from the user's role. False if there was nothing to revoke."""
        role = await self._roles.get_by_user_id(user_id)
        if role is None:
            return False
        return await self._permissions.revoke(role.id, kind)
