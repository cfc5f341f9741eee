# Overview: Suspend and recall POS carts.

"""
Hold / Resume

- hold: snapshot a non-empty cart, then clear it.
- resume: replace the active cart with the snapshot and drop the held entry
  (at most once).
- Stock is NOT re-validated on resume; checkout still re-checks every line.
"""

from __future__ import annotations

from datetime import datetime

from ..errors import ValidationError
from ..models import Cart, HeldSale, User
from ..state import AppState
from pharmapos.time_utils import utcnow
from .document_service import next_document_number
from .ledger_service import append_audit_event
from .settings_service import get_tax_rate


def hold_sale(
    state: AppState,
    cart: Cart,
    *,
    user: User,
    reference_note: str | None = None,
    now: datetime | None = None,
) -> HeldSale:
    if cart.is_empty:
        raise ValidationError("Cannot hold an empty cart")

    now = now or utcnow()
    note = (reference_note or "").strip() or f"Held at {now.strftime('%H:%M:%S')}"

    held = HeldSale(
        id=next_document_number(state, document_type="HELD_SALE", prefix="H"),
        date=now,
        items=cart.snapshot_lines(),
        total=cart.total(get_tax_rate(state)),
        user_id=user.id,
        user_name=user.name,
        reference_note=note,
    )
    state.held_sales.add(held)
    cart.clear()

    append_audit_event(
        state,
        action="SALE_HELD",
        details=f"Held sale {held.id}: {note}",
        actor=user,
        occurred_at=now,
    )
    return held


def resume_sale(state: AppState, cart: Cart, held_id: str, *, user: User) -> HeldSale:
    """Raises NotFoundError if the held sale is gone (already resumed or never existed)."""
    held = state.held_sales.pop(held_id)
    cart.replace_lines(held.items)

    append_audit_event(
        state,
        action="SALE_RESUMED",
        details=f"Resumed held sale {held.id}",
        actor=user,
    )
    return held


def list_held_sales(state: AppState) -> list[HeldSale]:
    return state.held_sales.all()
