# Overview: Two-phase confirmations for blocking prompts (prescription checks,
# destructive deletes).

"""
Confirmation Protocol

WHY: Prompts such as "Have you verified the prescription?" or "Delete this
product?" are decision points. Modelling them as request/commit makes the
decision testable without a UI.

1. request_confirmation(...) -> token (nothing else changes)
2. commit_confirmation(token, ...) consumes the token exactly once, and only
   for the same action, subject and user that requested it.
3. cancel_confirmation(token) is the "No" button: the guarded state stays
   untouched and the token is discarded.

Tokens expire after AppState.confirmation_ttl_seconds.
"""

from __future__ import annotations

import secrets
from datetime import datetime, timedelta

from ..errors import ConfirmationRequiredError, NotFoundError, ValidationError
from ..models import ConfirmationRequest, User
from ..state import AppState
from pharmapos.time_utils import utcnow


def generate_token() -> str:
    """32 bytes of entropy, hex encoded."""
    return secrets.token_hex(32)


def _prune_expired(state: AppState, now: datetime) -> None:
    expired = [t for t, req in state.confirmations.items() if req.expires_at <= now]
    for token in expired:
        del state.confirmations[token]


def request_confirmation(
    state: AppState,
    *,
    action: str,
    subject: str,
    user: User,
    reason: str,
    now: datetime | None = None,
) -> ConfirmationRequest:
    now = now or utcnow()
    _prune_expired(state, now)

    req = ConfirmationRequest(
        token=generate_token(),
        action=action,
        subject=str(subject),
        user_id=user.id,
        reason=reason,
        created_at=now,
        expires_at=now + timedelta(seconds=state.confirmation_ttl_seconds),
    )
    state.confirmations[req.token] = req
    return req


def commit_confirmation(
    state: AppState,
    token: str,
    *,
    action: str,
    subject: str,
    user: User,
    now: datetime | None = None,
) -> ConfirmationRequest:
    """Consume a token. Raises NotFoundError or ValidationError if it does not apply."""
    now = now or utcnow()
    req = state.confirmations.get(token)
    if req is None:
        raise NotFoundError("Confirmation not found or already used")

    if req.expires_at <= now:
        del state.confirmations[token]
        raise ValidationError("Confirmation expired, please confirm again")

    if req.action != action or req.subject != str(subject) or req.user_id != user.id:
        raise ValidationError(
            "Confirmation does not match this action",
            details={"action": action, "subject": str(subject)},
        )

    del state.confirmations[token]
    return req


def cancel_confirmation(state: AppState, token: str, *, user: User) -> ConfirmationRequest:
    req = state.confirmations.get(token)
    if req is None or req.user_id != user.id:
        raise NotFoundError("Confirmation not found or already used")
    del state.confirmations[token]
    return req


def require_confirmation(
    state: AppState,
    *,
    token: str | None,
    action: str,
    subject: str,
    user: User,
    reason: str,
    error_cls: type[ConfirmationRequiredError] = ConfirmationRequiredError,
    now: datetime | None = None,
) -> ConfirmationRequest:
    """
    Gate an operation on an explicit decision.

    Without a token, issues one and raises ``error_cls`` carrying it.
    With a token, commits it (or raises if it does not apply).
    """
    if not token:
        req = request_confirmation(
            state, action=action, subject=subject, user=user, reason=reason, now=now
        )
        raise error_cls(reason, confirmation=req.to_dict())
    return commit_confirmation(state, token, action=action, subject=subject, user=user, now=now)
