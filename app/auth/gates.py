"""Request gates: role and permission checks attached to routes.

A gate is a stateless callable built at route-registration time and used as
a FastAPI dependency::

    @router.delete("/{task_id}", dependencies=[Depends(PermissionGate(PermissionKind.DELETE))])
    @router.get("/admin", dependencies=[Depends(gate_for_tag("role:Administrator"))])

Authentication runs first through ``CurrentUser``. A gate that denies raises
``AccessDeniedError``; the application's exception handler turns it into a
flash message plus a redirect, so the protected handler never runs.
"""

from urllib.parse import urlsplit

from fastapi import Request

from app.auth.dependencies import CurrentUser
from app.dependencies import AppSettings
from app.models.permission import PermissionKind
from app.providers import Resolver
from app.schemas.auth import TokenUser
from app.utils.logging import get_logger

logger = get_logger(__name__)

ROLE_DENIED_MESSAGE = "You do not have permission to access this page."
PERMISSION_DENIED_MESSAGE = "You do not have permission to perform this action."


class AccessDeniedError(Exception):
    """Raised by a gate when the current user may not proceed."""

    def __init__(self, message: str, redirect_to: str):
        self.message = message
        self.redirect_to = redirect_to
        super().__init__(message)


def referring_page(request: Request, fallback: str) -> str:
    """Return the Referer if it points back at this site, else *fallback*.

    A Referer naming the denied URL itself also yields *fallback*; redirecting
    there would be denied again on every hop.
    """
    referer = request.headers.get("referer")
    if not referer:
        return fallback
    parts = urlsplit(referer)
    if parts.scheme not in ("", "http", "https"):
        return fallback
    if parts.netloc and parts.netloc != request.url.netloc:
        return fallback
    if (parts.path or "/") == request.url.path and parts.query == request.url.query:
        return fallback
    return referer


class RoleGate:
    """Allow only users whose role name matches exactly; otherwise redirect home."""

    def __init__(self, required_role: str):
        self.required_role = required_role

    async def __call__(
        self,
        current_user: CurrentUser,
        resolver: Resolver,
        settings: AppSettings,
    ) -> TokenUser:
        if await resolver.has_role(current_user.id, self.required_role):
            return current_user
        logger.debug(
            "access_denied",
            gate="role",
            required=self.required_role,
            user_id=current_user.id,
        )
        raise AccessDeniedError(ROLE_DENIED_MESSAGE, redirect_to=settings.home_url)

    def __repr__(self) -> str:
        return f"RoleGate({self.required_role!r})"


class PermissionGate:
    """Allow only users whose role holds a permission; otherwise redirect back."""

    def __init__(self, required_kind: PermissionKind | str):
        self.required_kind = PermissionKind(required_kind)

    async def __call__(
        self,
        request: Request,
        current_user: CurrentUser,
        resolver: Resolver,
        settings: AppSettings,
    ) -> TokenUser:
        if await resolver.has_permission(current_user.id, self.required_kind):
            return current_user
        logger.debug(
            "access_denied",
            gate="permission",
            required=self.required_kind.value,
            user_id=current_user.id,
        )
        raise AccessDeniedError(
            PERMISSION_DENIED_MESSAGE,
            redirect_to=referring_page(request, settings.home_url),
        )

    def __repr__(self) -> str:
        return f"PermissionGate({self.required_kind.value!r})"


def require_role(role_name: str) -> RoleGate:
    """Dependency factory for a role check.

    Usage:
        @router.get("/admin", dependencies=[Depends(require_role("Administrator"))])
    """
    return RoleGate(role_name)


def require_permission(kind: PermissionKind | str) -> PermissionGate:
    """Dependency factory for a permission check."""
    return PermissionGate(kind)


def gate_for_tag(tag: str) -> RoleGate | PermissionGate:
    """Build a gate from a route tag such as ``role:Administrator`` or ``permission:Create``.

    Raises:
        ValueError: If the tag is malformed or names an unknown permission kind.
    """
    prefix, sep, value = tag.partition(":")
    if not sep or not value:
        raise ValueError(f"Malformed gate tag: {tag!r}")
    if prefix == "role":
        return RoleGate(value)
    if prefix == "permission":
        return PermissionGate(value)
    raise ValueError(f"Unknown gate type {prefix!r} in tag {tag!r}")
