"""Pydantic schemas for roles and permission grants."""

from datetime import datetime

from pydantic import BaseModel, Field

from app.models.permission import PermissionKind


class RoleCreate(BaseModel):
    """Schema for assigning a role to a user."""

    name: str = Field(..., min_length=1, max_length=50)
    description: str | None = None
    permissions: list[PermissionKind] = Field(default_factory=list)


class RoleUpdate(BaseModel):
    """Schema for changing a user's role (partial)."""

    name: str | None = Field(None, min_length=1, max_length=50)
    description: str | None = None


class PermissionGrantRequest(BaseModel):
    """Schema for granting one permission kind to a role."""

    kind: PermissionKind


class RoleResponse(BaseModel):
    """Schema for role response."""

    id: str
    user_id: str
    name: str
    description: str | None
    permissions: list[PermissionKind]
    created_at: datetime
    updated_at: datetime
