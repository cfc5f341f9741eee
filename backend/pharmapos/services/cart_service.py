# Overview: Service-layer operations for the POS cart; gating checks and pricing.

"""
POS Cart Service

WHY: The cart is where the regulatory gates live. Expired batches are a hard
block, prescription-only items a soft block (explicit confirmation), and
warning notes are advisory. Stock is checked at each mutation against the
catalog, never continuously.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from ..errors import ExpiredProductError, PrescriptionRequiredError, StockInsufficientError
from ..models import Cart, CartLine, User
from ..state import AppState
from ..validation import parse_quantity_delta
from .catalog_service import is_expired
from .confirmation_service import require_confirmation
from .settings_service import get_tax_rate


DISPENSE_PRESCRIPTION = "DISPENSE_PRESCRIPTION"


@dataclass
class CartChange:
    """Outcome of a cart mutation: the affected line (if any) plus advisory notices."""
    line: CartLine | None = None
    notices: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "line": self.line.to_dict() if self.line else None,
            "notices": list(self.notices),
        }


def add_to_cart(
    state: AppState,
    cart: Cart,
    product_id: int,
    *,
    user: User,
    confirmation_token: str | None = None,
    now: datetime | None = None,
) -> CartChange:
    """
    Add one unit of a product to the cart.

    Order of checks: expiry (hard block), prescription (needs a confirmation
    token), stock. On any failure the cart is unchanged.
    """
    product = state.catalog.require(product_id)

    if is_expired(product, now):
        raise ExpiredProductError(
            "CRITICAL ERROR: This batch is EXPIRED and cannot be sold.",
            details={"product_id": product.id, "expiry_date": product.expiry_date.isoformat()},
        )

    if product.requires_prescription:
        require_confirmation(
            state,
            token=confirmation_token,
            action=DISPENSE_PRESCRIPTION,
            subject=str(product.id),
            user=user,
            reason=(
                f"WARNING: {product.name} requires a valid Doctor's Prescription. "
                "Have you verified the prescription?"
            ),
            error_cls=PrescriptionRequiredError,
            now=now,
        )

    notices = []
    if product.warning_note:
        notices.append(f"WARNING: {product.warning_note}")

    current = cart.quantity_of(product.id)
    if current + 1 > product.stock:
        raise StockInsufficientError(
            "Insufficient stock!",
            details={
                "product_id": product.id,
                "requested_quantity": current + 1,
                "on_hand": product.stock,
            },
        )

    line = cart.find_line(product.id)
    if line is None:
        line = CartLine(product=product.snapshot(), quantity=1)
        cart.lines.append(line)
    else:
        line.quantity += 1
    return CartChange(line=line, notices=notices)


def adjust_quantity(state: AppState, cart: Cart, product_id: int, delta) -> CartChange:
    """
    +/- one unit on an existing line.

    Any result above current catalog stock is refused with a notice (no
    error), including a decrement on a line left stale by a stock drop. A
    line that reaches zero is removed. Unknown lines are ignored.
    """
    delta = parse_quantity_delta(delta)
    line = cart.find_line(product_id)
    if line is None:
        return CartChange()

    new_quantity = max(0, line.quantity + delta)
    product = state.catalog.get(product_id)
    if product is not None and new_quantity > product.stock:
        return CartChange(line=line, notices=["Cannot exceed available stock."])

    if new_quantity == 0:
        cart.lines.remove(line)
        return CartChange()

    line.quantity = new_quantity
    return CartChange(line=line)


def remove_from_cart(cart: Cart, product_id: int) -> None:
    cart.lines = [line for line in cart.lines if line.product_id != product_id]


def clear_cart(cart: Cart) -> None:
    cart.clear()


def price_cart(state: AppState, cart: Cart) -> dict:
    """Subtotal, tax and total at the current tax rate."""
    rate: Decimal = get_tax_rate(state)
    subtotal = cart.subtotal()
    tax = cart.tax(rate)
    return {
        "subtotal": subtotal,
        "tax_rate": rate,
        "tax": tax,
        "total": subtotal + tax,
        "item_count": cart.item_count,
    }


def cart_summary(state: AppState, cart: Cart) -> dict:
    data = price_cart(state, cart)
    data["lines"] = [line.to_dict() for line in cart.lines]
    return data
