"""
Capability table tests.

Verifies the default (role, action) grants and that navigation is derived
from the same table.
"""

import pytest

from pharmapos.errors import PermissionDeniedError
from pharmapos.models import User
from pharmapos.permissions import (
    get_all_permission_codes,
    get_permission_definition,
    get_permissions_by_category,
    is_known_action,
)
from pharmapos.services import permission_service


class TestCapabilityTable:

    @pytest.mark.parametrize(
        "role,action,expected",
        [
            ("cashier", "VIEW_DASHBOARD", True),
            ("cashier", "USE_POS", True),
            ("cashier", "VIEW_INVENTORY", False),
            ("cashier", "VIEW_REPORTS", False),
            ("pharmacist", "VIEW_INVENTORY", True),
            ("pharmacist", "ADD_PRODUCT", True),
            ("pharmacist", "DELETE_PRODUCT", False),
            ("pharmacist", "VIEW_CONTROLLED_REGISTER", True),
            ("pharmacist", "VIEW_AUDIT_LOG", False),
            ("pharmacist", "MANAGE_SETTINGS", False),
            ("admin", "DELETE_PRODUCT", True),
            ("admin", "CLEAR_SALES_DATA", True),
            ("admin", "NOT_AN_ACTION", False),
            ("manager", "USE_POS", False),
        ],
    )
    def test_grants(self, role, action, expected):
        assert permission_service.has_permission(role, action) is expected

    def test_admin_has_everything(self):
        assert set(permission_service.get_role_permissions("admin")) == set(get_all_permission_codes())

    def test_inactive_user_has_nothing(self):
        user = User(id="x", name="X", email="x@x", role="admin", status="inactive")
        assert permission_service.get_user_permissions(user) == []
        with pytest.raises(PermissionDeniedError):
            permission_service.require_permission(user, "USE_POS")

    def test_require_permission_details(self, cashier):
        with pytest.raises(PermissionDeniedError) as exc:
            permission_service.require_permission(cashier, "MANAGE_USERS")
        assert exc.value.details == {"required_permission": "MANAGE_USERS"}

    def test_unknown_action_is_never_granted(self):
        assert permission_service.has_permission("admin", "LAUNCH_ROCKETS") is False


class TestDefinitionLookups:

    def test_definition_by_code(self):
        assert get_permission_definition("USE_POS") == {
            "code": "USE_POS",
            "name": "Use Point of Sale",
            "description": "Build carts, hold/resume sales and check out",
            "category": "SALES",
        }

    def test_unknown_code(self):
        assert get_permission_definition("LAUNCH_ROCKETS") is None
        assert not is_known_action("LAUNCH_ROCKETS")

    def test_by_category(self):
        codes = [row[0] for row in get_permissions_by_category("SALES")]
        assert codes == ["USE_POS"]


class TestNavigation:

    def test_cashier_menu(self):
        labels = [item["label"] for item in permission_service.navigation_for("cashier")]
        assert labels == ["Dashboard", "Point of Sale"]

    def test_pharmacist_menu(self):
        labels = [item["label"] for item in permission_service.navigation_for("pharmacist")]
        assert labels == ["Dashboard", "Point of Sale", "Inventory", "Reports"]

    def test_admin_menu(self):
        labels = [item["label"] for item in permission_service.navigation_for("admin")]
        assert labels == ["Dashboard", "Point of Sale", "Inventory", "Reports", "Settings"]
