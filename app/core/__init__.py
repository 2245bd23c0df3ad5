"""Core access-control logic."""
from app.core.permission_resolver import PermissionResolver
from app.core.presentation import PageControls, resolve_page_controls

__all__ = [
    "PermissionResolver",
    "PageControls",
    "resolve_page_controls",
]
