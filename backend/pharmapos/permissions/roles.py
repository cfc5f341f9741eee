# Overview: The (role, action) capability table.

from .definitions import get_all_permission_codes


CASHIER_PERMISSIONS = frozenset({
    "VIEW_DASHBOARD",
    "USE_POS",
})

PHARMACIST_PERMISSIONS = CASHIER_PERMISSIONS | {
    "VIEW_INVENTORY",
    "ADD_PRODUCT",
    "VIEW_REPORTS",
    "VIEW_CONTROLLED_REGISTER",
}

DEFAULT_ROLE_PERMISSIONS = {
    "admin": frozenset(get_all_permission_codes()),
    "pharmacist": frozenset(PHARMACIST_PERMISSIONS),
    "cashier": CASHIER_PERMISSIONS,
}


# Sidebar entries, each gated by a single action
NAVIGATION = [
    ("Dashboard", "/", "VIEW_DASHBOARD"),
    ("Point of Sale", "/pos", "USE_POS"),
    ("Inventory", "/inventory", "VIEW_INVENTORY"),
    ("Reports", "/reports", "VIEW_REPORTS"),
    ("Settings", "/settings", "MANAGE_SETTINGS"),
]
