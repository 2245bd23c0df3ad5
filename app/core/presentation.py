"""Which action controls a page may render for the current user.

Pages resolve a ``PageControls`` once per request and hand it to the
template, which emits add/edit/delete controls only when the matching flag
is set. Hiding a control is a usability aid; the routes behind those
controls are still guarded by ``PermissionGate``.
"""

from dataclasses import dataclass

from app.core.permission_resolver import PermissionResolver
from app.models.permission import PermissionKind
from app.models.role import ADMINISTRATOR_ROLE


@dataclass(frozen=True)
class PageControls:
    """Resolved permission kinds for one user, exposed as template flags."""

    granted: frozenset[PermissionKind] = frozenset()
    is_admin: bool = False

    def allows(self, kind: PermissionKind | str) -> bool:
        return PermissionKind(kind) in self.granted

    @property
    def can_add(self) -> bool:
        return PermissionKind.CREATE in self.granted

    @property
    def can_view(self) -> bool:
        return PermissionKind.RETRIEVE in self.granted

    @property
    def can_edit(self) -> bool:
        return PermissionKind.UPDATE in self.granted

    @property
    def can_delete(self) -> bool:
        return PermissionKind.DELETE in self.granted


async def resolve_page_controls(resolver: PermissionResolver, user_id: str) -> PageControls:
    """Build the control flags for *user_id* with a single role lookup."""
    role = await resolver.role_of(user_id)
    if role is None:
        return PageControls()
    return PageControls(
        granted=await resolver.grants_for(role),
        is_admin=role.name == ADMINISTRATOR_ROLE,
    )
