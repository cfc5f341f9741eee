from datetime import datetime, timedelta

import pytest

from pharmapos.errors import ConfirmationRequiredError, NotFoundError, ValidationError
from pharmapos.services import confirmation_service


NOW = datetime(2026, 5, 1, 9, 0, 0)


def request(state, user, **kwargs):
    params = {"action": "DELETE_PRODUCT", "subject": "3", "reason": "Delete?", "now": NOW}
    params.update(kwargs)
    return confirmation_service.request_confirmation(state, user=user, **params)


class TestConfirmationProtocol:

    def test_request_issues_token_without_side_effects(self, state, admin):
        req = request(state, admin)

        assert len(req.token) == 64
        assert state.confirmations[req.token] is req
        assert req.expires_at == NOW + timedelta(seconds=300)
        assert len(state.audit_log) == 0

    def test_commit_consumes_token(self, state, admin):
        req = request(state, admin)
        confirmation_service.commit_confirmation(
            state, req.token, action="DELETE_PRODUCT", subject="3", user=admin, now=NOW
        )

        assert req.token not in state.confirmations
        with pytest.raises(NotFoundError):
            confirmation_service.commit_confirmation(
                state, req.token, action="DELETE_PRODUCT", subject="3", user=admin, now=NOW
            )

    @pytest.mark.parametrize(
        "action,subject",
        [("DELETE_USER", "3"), ("DELETE_PRODUCT", "4")],
    )
    def test_commit_must_match_action_and_subject(self, state, admin, action, subject):
        req = request(state, admin)
        with pytest.raises(ValidationError):
            confirmation_service.commit_confirmation(
                state, req.token, action=action, subject=subject, user=admin, now=NOW
            )
        assert req.token in state.confirmations

    def test_commit_must_match_user(self, state, admin, cashier):
        req = request(state, admin)
        with pytest.raises(ValidationError):
            confirmation_service.commit_confirmation(
                state, req.token, action="DELETE_PRODUCT", subject="3", user=cashier, now=NOW
            )

    def test_expired_token_rejected_and_discarded(self, state, admin):
        req = request(state, admin)
        later = NOW + timedelta(seconds=301)

        with pytest.raises(ValidationError):
            confirmation_service.commit_confirmation(
                state, req.token, action="DELETE_PRODUCT", subject="3", user=admin, now=later
            )
        assert req.token not in state.confirmations

    def test_ttl_comes_from_state(self, state, admin):
        state.confirmation_ttl_seconds = 10
        req = request(state, admin)
        assert req.expires_at == NOW + timedelta(seconds=10)

    def test_cancel_discards_token(self, state, admin):
        req = request(state, admin)
        confirmation_service.cancel_confirmation(state, req.token, user=admin)
        assert state.confirmations == {}

    def test_cancel_other_users_token_not_found(self, state, admin, cashier):
        req = request(state, admin)
        with pytest.raises(NotFoundError):
            confirmation_service.cancel_confirmation(state, req.token, user=cashier)
        assert req.token in state.confirmations

    def test_require_without_token_raises_with_token(self, state, admin):
        with pytest.raises(ConfirmationRequiredError) as exc:
            confirmation_service.require_confirmation(
                state, token=None, action="CLEAR_SALES_DATA", subject="sales",
                user=admin, reason="Sure?",
            )
        assert exc.value.token in state.confirmations
        assert exc.value.details["confirmation"]["reason"] == "Sure?"

    def test_expired_requests_pruned_on_new_request(self, state, admin):
        old = request(state, admin)
        request(state, admin, now=NOW + timedelta(hours=1))
        assert old.token not in state.confirmations
