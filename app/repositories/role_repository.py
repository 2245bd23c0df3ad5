"""Repository for role data access."""

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.role import Role
from app.models.user import User
from app.schemas.role import RoleUpdate


class DuplicateRoleError(Exception):
    """Raised when assigning a role to a user who already holds one."""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"User '{user_id}' already has a role")


class UserNotFoundError(Exception):
    """Raised when assigning a role to a user that does not exist."""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"User '{user_id}' not found")


class RoleRepository:
    """Data access layer for user roles."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_user_id(self, user_id: str) -> Role | None:
        """Get the role assigned to *user_id*, or None if unassigned."""
        result = await self.session.execute(select(Role).where(Role.user_id == user_id))
        return result.scalar_one_or_none()

    async def list_all(self) -> list[Role]:
        """List every assigned role, ordered by name."""
        result = await self.session.execute(select(Role).order_by(Role.name, Role.user_id))
        return list(result.scalars().all())

    async def create(self, user_id: str, name: str, description: str | None = None) -> Role:
        """Assign a new role to a user.

        Raises:
            UserNotFoundError: If the user does not exist.
            DuplicateRoleError: If the user already has a role.
        """
        if await self.session.get(User, user_id) is None:
            raise UserNotFoundError(user_id)

        role = Role(user_id=user_id, name=name, description=description, permissions=[])
        self.session.add(role)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            await self.session.rollback()
            raise DuplicateRoleError(user_id) from exc
        await self.session.refresh(role)
        return role

    async def update(self, user_id: str, role_data: RoleUpdate) -> Role | None:
        """Change the name or description of a user's role."""
        role = await self.get_by_user_id(user_id)
        if not role:
            return None

        update_data = role_data.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            setattr(role, field, value)

        await self.session.flush()
        await self.session.refresh(role)
        return role

    async def delete(self, user_id: str) -> bool:
        """Remove a user's role. Its permissions go with it."""
        role = await self.get_by_user_id(user_id)
        if not role:
            return False

        await self.session.delete(role)
        await self.session.flush()
        return True
