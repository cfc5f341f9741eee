# Overview: Permission system package.
# Re-exports the action definitions and the role capability table.

from .categories import PermissionCategory
from .definitions import (
    PERMISSION_DEFINITIONS,
    get_all_permission_codes,
    get_permissions_by_category,
    get_permission_definition,
    is_known_action,
    GENERAL_PERMISSIONS,
    SALES_PERMISSIONS,
    INVENTORY_PERMISSIONS,
    REPORT_PERMISSIONS,
    SYSTEM_PERMISSIONS,
)
from .roles import DEFAULT_ROLE_PERMISSIONS, NAVIGATION

__all__ = [
    "PermissionCategory",
    "PERMISSION_DEFINITIONS",
    "GENERAL_PERMISSIONS",
    "SALES_PERMISSIONS",
    "INVENTORY_PERMISSIONS",
    "REPORT_PERMISSIONS",
    "SYSTEM_PERMISSIONS",
    "DEFAULT_ROLE_PERMISSIONS",
    "NAVIGATION",
    "get_all_permission_codes",
    "get_permissions_by_category",
    "get_permission_definition",
    "is_known_action",
]
