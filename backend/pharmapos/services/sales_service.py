"""
Sales Service - Checkout processing

WHY: Checkout is the only place that commits a cart. Every line is validated
against the live catalog before anything is written, so the catalog and the
sale ledger always agree.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal, InvalidOperation

from ..errors import NotFoundError, StockInsufficientError, ValidationError
from ..models import PAYMENT_METHODS, Cart, Sale, SaleItem, User
from ..state import AppState
from pharmapos.time_utils import utcnow
from .document_service import next_document_number
from .ledger_service import append_audit_event
from .settings_service import get_tax_rate


def _validate_on_hand(state: AppState, cart: Cart) -> None:
    missing = []
    insufficient = []
    for line in cart.lines:
        product = state.catalog.get(line.product_id)
        if product is None:
            missing.append(line.product_id)
            continue
        if product.stock < line.quantity:
            insufficient.append({
                "product_id": product.id,
                "product_name": product.name,
                "requested_quantity": line.quantity,
                "on_hand": product.stock,
            })

    if missing:
        raise NotFoundError(
            "Product in cart no longer exists",
            details={"product_ids": missing},
        )
    if insufficient:
        raise StockInsufficientError(
            f"Insufficient stock for {insufficient[0]['product_name']}",
            details={"items": insufficient},
        )


def _parse_total(total) -> Decimal:
    if isinstance(total, bool):
        raise ValidationError("total must be a number")
    try:
        amount = Decimal(str(total))
    except InvalidOperation:
        raise ValidationError("total must be a number")
    if not amount.is_finite() or amount < 0:
        raise ValidationError("total must be a non-negative number")
    return amount


def checkout(
    state: AppState,
    cart: Cart,
    *,
    user: User,
    payment_method: str,
    total=None,
    now: datetime | None = None,
) -> Sale:
    """
    Commit the cart as a sale.

    All-or-nothing: a shortfall or missing product on any line aborts before
    any stock is touched and leaves the cart as it was. When ``total`` is
    not supplied it is computed from the cart at the current tax rate.
    """
    if payment_method not in PAYMENT_METHODS:
        raise ValidationError(
            f"payment_method must be one of: {', '.join(PAYMENT_METHODS)}",
            details={"fields": {"payment_method": "invalid payment method"}},
        )
    if cart.is_empty:
        raise ValidationError("Cart is empty")

    amount = cart.total(get_tax_rate(state)) if total is None else _parse_total(total)

    _validate_on_hand(state, cart)

    now = now or utcnow()
    items = tuple(SaleItem.from_line(line) for line in cart.lines)
    for line in cart.lines:
        state.catalog.decrement_stock(line.product_id, line.quantity)

    sale = Sale(
        id=next_document_number(state, document_type="SALE", prefix="S"),
        date=now,
        total_amount=amount,
        payment_method=payment_method,
        items=items,
        user_id=user.id,
        user_name=user.name,
    )
    state.ledger.append(sale)

    append_audit_event(
        state,
        action="SALE_COMPLETED",
        details=f"Sale ID: {sale.id}, Total: {sale.total_amount}",
        actor=user,
        occurred_at=now,
    )

    cart.clear()
    return sale


def list_sales(state: AppState, *, limit: int | None = None) -> list[Sale]:
    """Newest first."""
    sales = state.ledger.newest_first()
    if limit is not None:
        sales = sales[:max(limit, 0)]
    return sales


def get_sale(state: AppState, sale_id: str) -> Sale:
    sale = state.ledger.get(sale_id)
    if sale is None:
        raise NotFoundError("Sale not found", details={"sale_id": sale_id})
    return sale
