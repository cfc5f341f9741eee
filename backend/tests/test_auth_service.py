import pytest

from pharmapos.errors import (
    AuthenticationRequiredError,
    ConfirmationRequiredError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from pharmapos.services import auth_service


class TestLogin:

    def test_login_by_email_case_insensitive(self, state, admin):
        assert auth_service.authenticate(state, "ADMIN@test.local") is admin
        assert state.audit_log.newest_first()[0].action == "LOGIN"

    @pytest.mark.parametrize("email", [None, "", "   ", "nobody@test.local"])
    def test_unknown_email_rejected(self, state, email):
        with pytest.raises(AuthenticationRequiredError):
            auth_service.authenticate(state, email)

    def test_inactive_user_rejected(self, state, cashier):
        cashier.status = "inactive"
        with pytest.raises(AuthenticationRequiredError):
            auth_service.authenticate(state, cashier.email)

    def test_resolve_session_user(self, state, cashier):
        assert auth_service.resolve_session_user(state, cashier.to_dict()) is cashier
        assert auth_service.resolve_session_user(state, {"id": "gone"}) is None
        assert auth_service.resolve_session_user(state, None) is None


class TestUserManagement:

    def test_create_defaults_to_active(self, state, admin):
        user = auth_service.create_user(
            state, {"name": "New", "email": "new@test.local", "role": "cashier"}, actor=admin
        )

        assert user.status == "active"
        assert user.id.startswith("U-")
        assert state.users.find_by_email("new@test.local") is user
        entry = state.audit_log.newest_first()[0]
        assert (entry.action, entry.details) == ("CREATE_USER", "Created user: new@test.local")

    def test_duplicate_email_conflict(self, state, admin):
        with pytest.raises(ConflictError):
            auth_service.create_user(
                state, {"name": "Dup", "email": "Admin@Test.local", "role": "cashier"}, actor=admin
            )

    @pytest.mark.parametrize(
        "payload",
        [
            {"email": "a@test.local", "role": "cashier"},
            {"name": "A", "email": "a@test.local", "role": "owner"},
            {"name": "A", "email": "not-an-email", "role": "cashier"},
            {"name": "A", "email": "a@test.local", "role": "cashier", "status": "sleeping"},
        ],
    )
    def test_invalid_payloads(self, state, payload):
        with pytest.raises(ValidationError):
            auth_service.create_user(state, payload)

    def test_update_user(self, state, admin, cashier):
        auth_service.update_user(state, cashier.id, {"role": "pharmacist"}, actor=admin)
        assert cashier.role == "pharmacist"
        assert state.audit_log.newest_first()[0].action == "UPDATE_USER"

    def test_update_to_taken_email_conflict(self, state, admin, cashier):
        with pytest.raises(ConflictError):
            auth_service.update_user(state, cashier.id, {"email": admin.email}, actor=admin)

    def test_update_missing_user(self, state, admin):
        with pytest.raises(NotFoundError):
            auth_service.update_user(state, "nope", {"name": "X"}, actor=admin)

    def test_delete_is_two_phase(self, state, admin, cashier):
        with pytest.raises(ConfirmationRequiredError) as exc:
            auth_service.delete_user(state, cashier.id, actor=admin)
        assert state.users.get(cashier.id) is cashier

        auth_service.delete_user(state, cashier.id, actor=admin, confirmation_token=exc.value.token)

        assert state.users.get(cashier.id) is None
        assert state.audit_log.newest_first()[0].details == f"Deleted user: {cashier.email}"
