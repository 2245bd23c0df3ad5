"""Authentication API endpoints.

Token issuance (login/refresh) is handled by the identity provider.
This service validates tokens statelessly via shared JWT secret; the /me
endpoint reports who the caller is and what their role allows.
"""

from fastapi import APIRouter, Request

from app.auth.dependencies import CurrentUser
from app.models.permission import PermissionKind
from app.models.role import ADMINISTRATOR_ROLE
from app.providers import Resolver
from app.rate_limit import limiter
from app.schemas.auth import MeResponse

router = APIRouter()


@router.get("/me", response_model=MeResponse)
@limiter.limit("30/minute")
async def get_current_user_info(
    request: Request, current_user: CurrentUser, resolver: Resolver
) -> MeResponse:
    """Return the authenticated user's profile with their resolved role."""
    role = await resolver.role_of(current_user.id)
    granted = await resolver.grants_for(role) if role else frozenset()
    return MeResponse(
        id=current_user.id,
        username=current_user.username,
        email=current_user.email,
        role=role.name if role else None,
        permissions=[kind for kind in PermissionKind if kind in granted],
        is_admin=role is not None and role.name == ADMINISTRATOR_ROLE,
    )
