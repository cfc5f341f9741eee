# Overview: Service-layer operations for the product catalog; filtering views and
# add/delete maintenance.

from __future__ import annotations

import secrets
from datetime import datetime

from ..errors import DependencyConflictError
from ..models import Product, User
from ..state import AppState
from ..validation import PRODUCT_POLICY, validate_payload, enforce_rules_product
from pharmapos.time_utils import days_until, start_of_day, utcnow
from .confirmation_service import require_confirmation
from .ledger_service import append_audit_event
from .settings_service import get_expiry_alert_days, get_low_stock_default
"""
PharmaPOS Catalog Rules (authoritative)

Filtering never mutates the catalog.

Low stock:
- stock <= (reorder_level or store default). A reorder level of 0 counts as
  unset and falls back to `low_stock_limit_default`.

Expiry (day granularity, expiry_date means "from the start of that day"):
- expired: start of expiry_date < now. Expired batches cannot be sold.
- near expiry: 0 <= days_until(expiry_date) <= expiry_alert_days, where
  days_until rounds up. Expired batches are never "near expiry".
"""

ALL_CATEGORIES = "All"

FILTER_LOW_STOCK = "lowstock"
FILTER_EXPIRING = "expiring"
FILTER_EXPIRED = "expired"
FILTERS = (FILTER_LOW_STOCK, FILTER_EXPIRING, FILTER_EXPIRED)


def is_low_stock(product: Product, default_threshold: int) -> bool:
    threshold = product.reorder_level or default_threshold
    return product.stock <= threshold


def is_expired(product: Product, now: datetime | None = None) -> bool:
    now = now or utcnow()
    return start_of_day(product.expiry_date) < now


def is_near_expiry(product: Product, alert_days: int, now: datetime | None = None) -> bool:
    if is_expired(product, now):
        return False
    remaining = days_until(product.expiry_date, now)
    return 0 <= remaining <= alert_days


def matches_search(product: Product, term: str | None) -> bool:
    """Case-insensitive substring match on name, generic name, barcode and SKU."""
    if not term:
        return True
    needle = term.strip().lower()
    return any(
        needle in (value or "").lower()
        for value in (product.name, product.generic_name, product.barcode, product.sku)
    )


def search_products(
    state: AppState,
    *,
    term: str | None = None,
    category: str | None = None,
    filter_name: str | None = None,
    now: datetime | None = None,
) -> list[Product]:
    """
    Catalog view used by both the POS grid and the inventory table.

    ``filter_name`` is one of FILTERS (or None for no quick filter).
    """
    now = now or utcnow()
    low_default = get_low_stock_default(state)
    alert_days = get_expiry_alert_days(state)

    results = []
    for product in state.catalog:
        if not matches_search(product, term):
            continue
        if category and category != ALL_CATEGORIES and product.category != category:
            continue
        if filter_name == FILTER_LOW_STOCK and not is_low_stock(product, low_default):
            continue
        if filter_name == FILTER_EXPIRING and not is_near_expiry(product, alert_days, now):
            continue
        if filter_name == FILTER_EXPIRED and not is_expired(product, now):
            continue
        results.append(product)
    return results


def list_categories(state: AppState) -> list[str]:
    return [ALL_CATEGORIES] + state.catalog.categories()


def describe_product(state: AppState, product: Product, now: datetime | None = None) -> dict:
    """Product dict plus the derived alert flags the screens colour rows by."""
    now = now or utcnow()
    data = product.to_dict()
    expired = is_expired(product, now)
    data["is_expired"] = expired
    data["days_to_expiry"] = days_until(product.expiry_date, now)
    data["is_near_expiry"] = is_near_expiry(product, get_expiry_alert_days(state), now)
    data["is_low_stock"] = is_low_stock(product, get_low_stock_default(state))
    data["is_sellable"] = product.stock > 0 and not expired
    return data


def generate_barcode() -> str:
    return f"MED{100000 + secrets.randbelow(900000)}"


def add_product(
    state: AppState,
    payload: dict,
    *,
    actor: User | None = None,
    now: datetime | None = None,
) -> Product:
    """
    Validate a product form and append it to the catalog.

    Raises ValidationError with per-field messages; the catalog is untouched
    on failure.
    """
    now = now or utcnow()
    patch = validate_payload(payload=payload, policy=PRODUCT_POLICY, partial=False)
    enforce_rules_product(patch, now=now)

    product = Product(
        id=state.catalog.next_id(),
        name=patch["name"],
        generic_name=patch["generic_name"],
        strength=patch.get("strength", ""),
        form=patch.get("form", "Tablet"),
        category=patch.get("category", ""),
        price=patch["price"],
        cost_price=patch["cost_price"],
        stock=patch.get("stock", 0),
        expiry_date=patch["expiry_date"],
        barcode=patch["barcode"],
        sku=patch.get("sku") or patch.get("barcode") or "N/A",
        batch_number=patch["batch_number"],
        supplier=patch.get("supplier", ""),
        pack_size=patch.get("pack_size", ""),
        reorder_level=patch.get("reorder_level", get_low_stock_default(state)),
        location=patch.get("location", ""),
        requires_prescription=patch.get("requires_prescription", False),
        is_narcotic=patch.get("is_narcotic", False),
        warning_note=patch.get("warning_note") or None,
    )
    state.catalog.add(product)

    append_audit_event(
        state,
        action="ADD_PRODUCT",
        details=f"Added product: {product.name} ({product.sku})",
        actor=actor,
        occurred_at=now,
    )
    return product


def delete_product(
    state: AppState,
    product_id: int,
    *,
    actor: User,
    confirmation_token: str | None = None,
) -> Product:
    """
    Remove a product that no recorded sale references.

    Two-phase: without a valid token a ConfirmationRequiredError carrying a
    fresh token is raised and nothing changes.
    """
    product = state.catalog.require(product_id)

    if state.ledger.references_product(product_id):
        raise DependencyConflictError(
            "Cannot delete product: It has associated sales history.",
            details={"product_id": product_id},
        )

    require_confirmation(
        state,
        token=confirmation_token,
        action="DELETE_PRODUCT",
        subject=str(product_id),
        user=actor,
        reason=f'Are you sure you want to delete "{product.name}"?',
    )

    state.catalog.remove(product_id)
    append_audit_event(
        state,
        action="DELETE_PRODUCT",
        details=f"Deleted product: {product.name}",
        actor=actor,
    )
    return product


def catalog_alerts(state: AppState, now: datetime | None = None) -> dict:
    """Low stock, near expiry and expired lists for dashboards and the CLI."""
    now = now or utcnow()
    return {
        "low_stock": search_products(state, filter_name=FILTER_LOW_STOCK, now=now),
        "near_expiry": search_products(state, filter_name=FILTER_EXPIRING, now=now),
        "expired": search_products(state, filter_name=FILTER_EXPIRED, now=now),
    }
