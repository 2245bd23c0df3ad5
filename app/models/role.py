"""Role model: the single role assigned to a user."""

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from app.models.permission import Permission
    from app.models.user import User

ADMINISTRATOR_ROLE = "Administrator"
DEFAULT_ROLE = "User"


class Role(Base, UUIDMixin, TimestampMixin):
    """A named role owned by exactly one user."""

    __tablename__ = "roles"

    # Unique: a user holds at most one role
    user_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )

    name: Mapped[str] = mapped_column(String(50), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    user: Mapped["User"] = relationship(back_populates="role")
    permissions: Mapped[list["Permission"]] = relationship(
        back_populates="role",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Role {self.name} user={self.user_id}>"
