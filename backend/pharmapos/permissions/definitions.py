# Overview: All action definitions organized by category.
# Each action is defined as: (code, name, description, category)

from .categories import PermissionCategory


# -- GENERAL --

GENERAL_PERMISSIONS = [
    (
        "VIEW_DASHBOARD",
        "View Dashboard",
        "See today's revenue and stock alerts",
        PermissionCategory.GENERAL,
    ),
]


# -- SALES --

SALES_PERMISSIONS = [
    (
        "USE_POS",
        "Use Point of Sale",
        "Build carts, hold/resume sales and check out",
        PermissionCategory.SALES,
    ),
]


# -- INVENTORY --

INVENTORY_PERMISSIONS = [
    (
        "VIEW_INVENTORY",
        "View Inventory",
        "Browse the catalog with low-stock and expiry filters",
        PermissionCategory.INVENTORY,
    ),
    (
        "ADD_PRODUCT",
        "Add Product",
        "Register a new product batch in the catalog",
        PermissionCategory.INVENTORY,
    ),
    (
        "DELETE_PRODUCT",
        "Delete Product",
        "Remove a product that has no sales history",
        PermissionCategory.INVENTORY,
    ),
]


# -- REPORTS --

REPORT_PERMISSIONS = [
    (
        "VIEW_REPORTS",
        "View Reports",
        "Revenue summaries and analytics",
        PermissionCategory.REPORTS,
    ),
    (
        "VIEW_CONTROLLED_REGISTER",
        "View Controlled Drug Register",
        "Regulatory listing of narcotic sales",
        PermissionCategory.REPORTS,
    ),
    (
        "VIEW_AUDIT_LOG",
        "View Audit Log",
        "Review sensitive actions performed by staff",
        PermissionCategory.REPORTS,
    ),
]


# -- SYSTEM --

SYSTEM_PERMISSIONS = [
    (
        "MANAGE_SETTINGS",
        "Manage Settings",
        "Edit store, inventory and billing settings",
        PermissionCategory.SYSTEM,
    ),
    (
        "MANAGE_USERS",
        "Manage Users",
        "Create, edit and delete staff accounts",
        PermissionCategory.SYSTEM,
    ),
    (
        "EXPORT_BACKUP",
        "Export Backup",
        "Download settings and users as JSON",
        PermissionCategory.SYSTEM,
    ),
    (
        "CLEAR_SALES_DATA",
        "Clear Sales Data",
        "Delete all sales history (danger zone)",
        PermissionCategory.SYSTEM,
    ),
]


PERMISSION_DEFINITIONS = (
    GENERAL_PERMISSIONS
    + SALES_PERMISSIONS
    + INVENTORY_PERMISSIONS
    + REPORT_PERMISSIONS
    + SYSTEM_PERMISSIONS
)


# -- LOOKUPS --

DEFINITION_FIELDS = ("code", "name", "description", "category")

_BY_CODE = {row[0]: row for row in PERMISSION_DEFINITIONS}


def get_all_permission_codes() -> list[str]:
    return list(_BY_CODE)


def is_known_action(code: str) -> bool:
    return code in _BY_CODE


def get_permissions_by_category(category: str) -> list[tuple]:
    return [row for row in PERMISSION_DEFINITIONS if row[3] == category]


def get_permission_definition(code: str) -> dict | None:
    """Definition of one action as a dict, or None for an unknown code."""
    row = _BY_CODE.get(code)
    if row is None:
        return None
    return dict(zip(DEFINITION_FIELDS, row))
