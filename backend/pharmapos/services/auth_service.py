# Overview: Service-layer operations for auth and the user directory.

"""
Authentication and User Management

WHY: Every action must be attributable to a staff member. Login is a mock
email lookup: there are no passwords, the email identifies the user and the
cached record lives in the session.

SECURITY NOTES:
- Inactive users cannot log in
- Emails are unique (case-insensitive)
- Deleting a user is a two-phase, confirmed action
"""

from __future__ import annotations

from ..errors import AuthenticationRequiredError, ConflictError
from ..models import STATUS_ACTIVE, User
from ..state import AppState
from ..validation import USER_POLICY, enforce_rules_user, validate_payload
from .confirmation_service import require_confirmation
from .document_service import next_document_number
from .ledger_service import append_audit_event


def authenticate(state: AppState, email: str | None) -> User:
    """
    Resolve a login email to an active user.

    Raises AuthenticationRequiredError for unknown or inactive accounts.
    """
    if not email or not str(email).strip():
        raise AuthenticationRequiredError("Email is required")

    user = state.users.find_by_email(str(email))
    if user is None:
        raise AuthenticationRequiredError("Invalid credentials")
    if not user.is_active:
        raise AuthenticationRequiredError("Account is inactive")

    append_audit_event(state, action="LOGIN", details=f"User logged in: {user.email}", actor=user)
    return user


def logout(state: AppState, user: User) -> None:
    append_audit_event(state, action="LOGOUT", details=f"User logged out: {user.email}", actor=user)


def resolve_session_user(state: AppState, cached: dict | None) -> User | None:
    """
    Map the session's cached user record back to the live directory entry.

    Returns None when the user was deleted or deactivated since login.
    """
    if not cached or not isinstance(cached, dict):
        return None
    user = state.users.get(cached.get("id"))
    if user is None or not user.is_active:
        return None
    return user


def list_users(state: AppState) -> list[User]:
    return state.users.all()


def _ensure_unique_email(state: AppState, email: str, *, exclude_id: str | None = None) -> None:
    existing = state.users.find_by_email(email)
    if existing is not None and existing.id != exclude_id:
        raise ConflictError(
            "A user with this email already exists",
            details={"fields": {"email": "already in use"}},
        )


def create_user(state: AppState, payload: dict, *, actor: User | None = None) -> User:
    patch = validate_payload(payload=payload, policy=USER_POLICY, partial=False)
    enforce_rules_user(patch)
    _ensure_unique_email(state, patch["email"])

    user = User(
        id=next_document_number(state, document_type="USER", prefix="U"),
        name=patch["name"],
        email=patch["email"],
        role=patch["role"],
        status=patch.get("status", STATUS_ACTIVE),
    )
    state.users.add(user)

    append_audit_event(state, action="CREATE_USER", details=f"Created user: {user.email}", actor=actor)
    return user


def update_user(state: AppState, user_id: str, payload: dict, *, actor: User | None = None) -> User:
    user = state.users.require(user_id)
    patch = validate_payload(payload=payload, policy=USER_POLICY, partial=True)
    enforce_rules_user(patch)
    if "email" in patch:
        _ensure_unique_email(state, patch["email"], exclude_id=user.id)

    for key, value in patch.items():
        setattr(user, key, value)

    append_audit_event(state, action="UPDATE_USER", details=f"Updated user: {user.email}", actor=actor)
    return user


def delete_user(
    state: AppState,
    user_id: str,
    *,
    actor: User,
    confirmation_token: str | None = None,
) -> User:
    user = state.users.require(user_id)

    require_confirmation(
        state,
        token=confirmation_token,
        action="DELETE_USER",
        subject=user.id,
        user=actor,
        reason="Are you sure you want to delete this user?",
    )

    state.users.remove(user.id)
    state.carts.pop(user.id, None)

    append_audit_event(state, action="DELETE_USER", details=f"Deleted user: {user.email}", actor=actor)
    return user
