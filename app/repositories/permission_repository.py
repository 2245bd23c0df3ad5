"""Repository for permission grants."""

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.permission import Permission, PermissionKind


class DuplicatePermissionError(Exception):
    """Raised when granting a kind the role already holds."""

    def __init__(self, role_id: str, kind: PermissionKind):
        self.role_id = role_id
        self.kind = kind
        super().__init__(f"Role '{role_id}' already has permission '{kind}'")


class PermissionRepository:
    """Data access layer for (role, kind) grants."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def exists(self, role_id: str, kind: PermissionKind) -> bool:
        """Return True if *role_id* holds *kind*."""
        result = await self.session.execute(
            select(Permission.id).where(Permission.role_id == role_id, Permission.kind == kind)
        )
        return result.scalar_one_or_none() is not None

    async def list_kinds(self, role_id: str) -> list[PermissionKind]:
        """Return the kinds granted to *role_id*."""
        result = await self.session.execute(
            select(Permission.kind).where(Permission.role_id == role_id)
        )
        return [PermissionKind(kind) for kind in result.scalars().all()]

    async def grant(self, role_id: str, kind: PermissionKind) -> Permission:
        """Grant *kind* to a role.

        Raises:
            DuplicatePermissionError: If the role already holds *kind*.
        """
        permission = Permission(role_id=role_id, kind=kind)
        self.session.add(permission)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            await self.session.rollback()
            raise DuplicatePermissionError(role_id, kind) from exc
        await self.session.refresh(permission)
        return permission

    async def revoke(self, role_id: str, kind: PermissionKind) -> bool:
        """Revoke *kind* from a role. Returns False if it was not granted."""
        result = await self.session.execute(
            delete(Permission).where(Permission.role_id == role_id, Permission.kind == kind)
        )
        await self.session.flush()
        return (result.rowcount or 0) > 0
