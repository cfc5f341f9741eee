# Overview: Permission category constants for grouping related actions.


class PermissionCategory:
    """Permission categories for organization and UI display."""
    GENERAL = "GENERAL"
    SALES = "SALES"
    INVENTORY = "INVENTORY"
    REPORTS = "REPORTS"
    SYSTEM = "SYSTEM"
