"""Permission model: one (role, kind) grant."""

from enum import StrEnum
from typing import TYPE_CHECKING

from sqlalchemy import Enum as SAEnum
from sqlalchemy import ForeignKey, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from app.models.role import Role


class PermissionKind(StrEnum):
    """The four grantable actions. Values are the stored strings."""

    CREATE = "Create"
    RETRIEVE = "Retrieve"
    UPDATE = "Update"
    DELETE = "Delete"


class Permission(Base, UUIDMixin, TimestampMixin):
    """A capability granted to a role."""

    __tablename__ = "permissions"

    role_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("roles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    kind: Mapped[PermissionKind] = mapped_column(
        SAEnum(
            PermissionKind,
            name="permission_kind",
            create_constraint=True,
            native_enum=False,
            values_callable=lambda e: [member.value for member in e],
        ),
        nullable=False,
    )

    role: Mapped["Role"] = relationship(back_populates="permissions")

    __table_args__ = (UniqueConstraint("role_id", "kind", name="uq_permission_role_kind"),)

    def __repr__(self) -> str:
        return f"<Permission {self.kind} role={self.role_id}>"
