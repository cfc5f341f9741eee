"""
Authorization tests for PharmaPOS.

Verifies:
- Unauthenticated requests return 401
- Cashier role denied inventory, reports and admin operations (403)
- Pharmacist can manage inventory but not delete or administer
- Admin can perform privileged operations
"""

import pytest


# =============================================================================
# UNAUTHENTICATED ACCESS - 401
# =============================================================================


class TestUnauthenticatedAccess:
    """All protected endpoints return 401 without a session."""

    @pytest.mark.parametrize(
        "method,path",
        [
            ("GET", "/api/auth/me"),
            ("POST", "/api/auth/logout"),
            ("GET", "/api/products"),
            ("POST", "/api/products"),
            ("DELETE", "/api/products/1"),
            ("GET", "/api/pos/cart"),
            ("POST", "/api/pos/cart/items"),
            ("POST", "/api/pos/checkout"),
            ("GET", "/api/pos/held"),
            ("GET", "/api/reports/dashboard"),
            ("GET", "/api/reports/audit"),
            ("GET", "/api/settings"),
            ("GET", "/api/settings/backup"),
            ("GET", "/api/users"),
            ("DELETE", "/api/confirmations/abc"),
        ],
    )
    def test_requires_auth(self, client, state, method, path):
        resp = getattr(client, method.lower())(path)
        assert resp.status_code == 401, f"{method} {path} returned {resp.status_code}"

    def test_login_unknown_email(self, client, state):
        resp = client.post("/api/auth/login", json={"email": "ghost@test.local"})
        assert resp.status_code == 401

    def test_deleted_user_session_is_dropped(self, app, state, cashier_client):
        state.users.remove("u-3")
        resp = cashier_client.get("/api/pos/cart")
        assert resp.status_code == 401


# =============================================================================
# CASHIER DENIED - 403
# =============================================================================


class TestCashierDenied:

    @pytest.mark.parametrize(
        "method,path",
        [
            ("GET", "/api/products"),
            ("POST", "/api/products"),
            ("DELETE", "/api/products/1"),
            ("GET", "/api/reports/revenue"),
            ("GET", "/api/reports/controlled"),
            ("GET", "/api/reports/audit"),
            ("GET", "/api/settings"),
            ("PUT", "/api/settings"),
            ("GET", "/api/settings/backup"),
            ("POST", "/api/settings/clear-sales"),
            ("GET", "/api/users"),
        ],
    )
    def test_forbidden(self, cashier_client, method, path):
        resp = getattr(cashier_client, method.lower())(path, json={})
        assert resp.status_code == 403
        assert resp.get_json()["error"] == "Permission denied"

    def test_can_use_pos_and_dashboard(self, cashier_client):
        assert cashier_client.get("/api/pos/cart").status_code == 200
        assert cashier_client.get("/api/reports/dashboard").status_code == 200


# =============================================================================
# PHARMACIST
# =============================================================================


class TestPharmacist:

    def test_can_view_inventory_and_reports(self, pharmacist_client):
        assert pharmacist_client.get("/api/products").status_code == 200
        assert pharmacist_client.get("/api/reports/revenue").status_code == 200
        assert pharmacist_client.get("/api/reports/controlled").status_code == 200

    @pytest.mark.parametrize(
        "method,path",
        [
            ("DELETE", "/api/products/1"),
            ("GET", "/api/reports/audit"),
            ("GET", "/api/settings"),
            ("GET", "/api/users"),
        ],
    )
    def test_forbidden(self, pharmacist_client, method, path):
        resp = getattr(pharmacist_client, method.lower())(path)
        assert resp.status_code == 403


# =============================================================================
# ADMIN
# =============================================================================


class TestAdminAccess:

    @pytest.mark.parametrize(
        "path",
        [
            "/api/products",
            "/api/reports/audit",
            "/api/settings",
            "/api/users",
        ],
    )
    def test_allowed(self, admin_client, path):
        assert admin_client.get(path).status_code == 200

    def test_me_reports_navigation(self, admin_client):
        body = admin_client.get("/api/auth/me").get_json()
        assert body["user"]["role"] == "admin"
        assert "CLEAR_SALES_DATA" in body["permissions"]
        assert body["navigation"][-1]["path"] == "/settings"

    def test_logout_clears_session(self, admin_client):
        assert admin_client.post("/api/auth/logout").status_code == 200
        assert admin_client.get("/api/auth/me").status_code == 401
