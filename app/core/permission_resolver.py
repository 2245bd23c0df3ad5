"""Permission resolution: user -> role -> permission set -> verdict.

A resolver is built per request from the role and permission repositories
and answers yes/no questions about an explicit user identity. It holds no
cache and never writes.

A user with no role holds no permissions; a missing role is a normal
``None`` result, not an error. Authentication happens upstream, so the
identity passed in is assumed valid.
"""

import logging

from app.models.permission import PermissionKind
from app.models.role import ADMINISTRATOR_ROLE, Role
from app.repositories.protocols import PermissionRepositoryProtocol, RoleRepositoryProtocol

logger = logging.getLogger(__name__)


class PermissionResolver:
    """Answers role and permission queries for a user."""

    def __init__(
        self,
        roles: RoleRepositoryProtocol,
        permissions: PermissionRepositoryProtocol,
    ):
        self._roles = roles
        self._permissions = permissions

    async def role_of(self, user_id: str) -> Role | None:
        """Return the user's role, or None if none is assigned."""
        return await self._roles.get_by_user_id(user_id)

    async def has_role(self, user_id: str, role_name: str) -> bool:
        """True iff the user's role name equals *role_name* exactly (case-sensitive)."""
        role = await self.role_of(user_id)
        return role is not None and role.name == role_name

    async def has_permission(self, user_id: str, kind: PermissionKind | str) -> bool:
        """True iff the user has a role and that role holds *kind*.

        Raises:
            ValueError: If *kind* is a string outside the four known kinds.
        """
        kind = PermissionKind(kind)
        role = await self.role_of(user_id)
        if role is None:
            logger.debug("User %s has no role; %s denied", user_id, kind)
            return False
        return await self._permissions.exists(role.id, kind)

    async def is_admin(self, user_id: str) -> bool:
        """True iff the user holds the Administrator role."""
        return await self.has_role(user_id, ADMINISTRATOR_ROLE)

    async def permissions_of(self, user_id: str) -> frozenset[PermissionKind]:
        """Every kind granted to the user's role; empty when there is no role."""
        role = await self.role_of(user_id)
        if role is None:
            return frozenset()
        return await self.grants_for(role)

    async def grants_for(self, role: Role) -> frozenset[PermissionKind]:
        """Every kind granted to an already-loaded *role*."""
        return frozenset(await self._permissions.list_kinds(role.id))
