"""Pydantic schemas for authentication."""

from pydantic import BaseModel

from app.models.permission import PermissionKind


class TokenUser(BaseModel):
    """Lightweight user representation from JWT claims. No DB query needed.

    Role and permissions are not carried in the token; they are resolved
    from the role store on every request.
    """

    id: str
    username: str
    email: str = ""


class MeResponse(BaseModel):
    """The authenticated user together with their resolved access."""

    id: str
    username: str
    email: str = ""
    role: str | None = None
    permissions: list[PermissionKind] = []
    is_admin: bool = False
