# Overview: Service-layer operations for maintenance; backup export and clearing sales history.

from __future__ import annotations

from ..models import User
from ..state import AppState
from pharmapos.time_utils import to_utc_z, utcnow
from .confirmation_service import require_confirmation
from .ledger_service import append_audit_event


CLEAR_SALES_DATA = "CLEAR_SALES_DATA"


def export_backup(state: AppState, *, actor: User | None = None) -> dict:
    """
    Settings and users as a JSON-ready document.

    Export only; there is no import path.
    """
    document = {
        "exported_at": to_utc_z(utcnow()),
        "settings": [s.to_dict() for s in state.settings.all()],
        "users": [u.to_dict() for u in state.users.all()],
    }
    append_audit_event(state, action="BACKUP", details="Database backup downloaded", actor=actor)
    return document


def clear_sales_history(
    state: AppState,
    *,
    actor: User,
    confirmation_token: str | None = None,
) -> int:
    """
    Empty the sale ledger. Two-phase; returns the number of sales removed.

    Catalog stock is not restored.
    """
    require_confirmation(
        state,
        token=confirmation_token,
        action=CLEAR_SALES_DATA,
        subject="sales",
        user=actor,
        reason="DANGER: This will delete ALL sales history.",
    )

    removed = state.ledger.clear()
    append_audit_event(
        state,
        action="CLEAR_DATA",
        details=f"All sales history cleared by {actor.name} ({removed} sales)",
        actor=actor,
    )
    return removed
