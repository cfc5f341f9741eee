# Overview: Service-layer operations for permission checks against the capability table.

"""
Permission Checking

WHY: One (role, action) table answers every "may this user do X?" question,
whether it comes from a route decorator, the sidebar or the CLI.

DESIGN PRINCIPLES:
- Fail closed: unknown roles and unknown actions are denied
- Inactive users hold no permissions
"""

from __future__ import annotations

from ..errors import PermissionDeniedError
from ..models import User
from ..permissions import DEFAULT_ROLE_PERMISSIONS, NAVIGATION, is_known_action


def get_role_permissions(role: str) -> frozenset[str]:
    return DEFAULT_ROLE_PERMISSIONS.get(role, frozenset())


def has_permission(role: str, action: str) -> bool:
    if not is_known_action(action):
        return False
    return action in get_role_permissions(role)


def user_has_permission(user: User | None, action: str) -> bool:
    if user is None or not user.is_active:
        return False
    return has_permission(user.role, action)


def require_permission(user: User | None, action: str) -> None:
    """
    Raises PermissionDeniedError if the user lacks ``action``.
    """
    if not user_has_permission(user, action):
        raise PermissionDeniedError(
            "Permission denied",
            details={"required_permission": action},
        )


def get_user_permissions(user: User) -> list[str]:
    if not user.is_active:
        return []
    return sorted(get_role_permissions(user.role))


def navigation_for(role: str) -> list[dict]:
    """Sidebar entries visible to a role, in display order."""
    return [
        {"label": label, "path": path, "action": action}
        for label, path, action in NAVIGATION
        if has_permission(role, action)
    ]
