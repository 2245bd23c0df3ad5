"""initial_rbac_schema

Revision ID: 0001a7c3e9b2
Revises:
Create Date: 2026-10-18 09:00:00.000000

Creates users, roles, permissions and tasks, and seeds two demo accounts:
an Administrator with every permission and a User limited to Create and
Retrieve.
"""

from typing import Sequence, Union
from uuid import uuid4

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "0001a7c3e9b2"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

PERMISSION_KINDS = ("Create", "Retrieve", "Update", "Delete")

_ADMIN_ID = str(uuid4())
_USER_ID = str(uuid4())
_ADMIN_ROLE_ID = str(uuid4())
_USER_ROLE_ID = str(uuid4())

SEED_USERS = [
    {"id": _ADMIN_ID, "username": "admin", "email": "admin@example.com"},
    {"id": _USER_ID, "username": "demo", "email": "demo@example.com"},
]

SEED_ROLES = [
    {
        "id": _ADMIN_ROLE_ID,
        "user_id": _ADMIN_ID,
        "name": "Administrator",
        "description": "Full access, including role management",
    },
    {
        "id": _USER_ROLE_ID,
        "user_id": _USER_ID,
        "name": "User",
        "description": "May add and view tasks",
    },
]

SEED_PERMISSIONS = [
    {"id": str(uuid4()), "role_id": _ADMIN_ROLE_ID, "kind": kind} for kind in PERMISSION_KINDS
] + [
    {"id": str(uuid4()), "role_id": _USER_ROLE_ID, "kind": kind}
    for kind in ("Create", "Retrieve")
]


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Create RBAC and task tables and seed demo accounts."""
    users_table = op.create_table(
        "users",
        sa.Column("id", sa.UUID(as_uuid=False), nullable=False),
        sa.Column("username", sa.String(length=50), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_username"), "users", ["username"], unique=True)
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)

    roles_table = op.create_table(
        "roles",
        sa.Column("id", sa.UUID(as_uuid=False), nullable=False),
        sa.Column("user_id", sa.UUID(as_uuid=False), nullable=False),
        sa.Column("name", sa.String(length=50), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("user_id"),
    )

    permissions_table = op.create_table(
        "permissions",
        sa.Column("id", sa.UUID(as_uuid=False), nullable=False),
        sa.Column("role_id", sa.UUID(as_uuid=False), nullable=False),
        sa.Column(
            "kind",
            sa.Enum(
                *PERMISSION_KINDS,
                name="permission_kind",
                native_enum=False,
                create_constraint=True,
            ),
            nullable=False,
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["role_id"], ["roles.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("role_id", "kind", name="uq_permission_role_kind"),
    )
    op.create_index(op.f("ix_permissions_role_id"), "permissions", ["role_id"])

    op.create_table(
        "tasks",
        sa.Column("id", sa.UUID(as_uuid=False), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("completed", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("owner_id", sa.UUID(as_uuid=False), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["owner_id"], ["users.id"], ondelete="SET NULL"),
    )
    op.create_index(op.f("ix_tasks_owner_id"), "tasks", ["owner_id"])

    op.bulk_insert(users_table, SEED_USERS)
    op.bulk_insert(roles_table, SEED_ROLES)
    op.bulk_insert(permissions_table, SEED_PERMISSIONS)


def downgrade() -> None:
    """Drop RBAC and task tables."""
    op.drop_index(op.f("ix_tasks_owner_id"), table_name="tasks")
    op.drop_table("tasks")
    op.drop_index(op.f("ix_permissions_role_id"), table_name="permissions")
    op.drop_table("permissions")
    op.drop_table("roles")
    op.drop_index(op.f("ix_users_email"), table_name="users")
    op.drop_index(op.f("ix_users_username"), table_name="users")
    op.drop_table("users")
