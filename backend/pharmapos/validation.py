from __future__ import annotations
from datetime import datetime
from decimal import Decimal, InvalidOperation

from dataclasses import dataclass
from typing import Any

from .errors import ValidationError
from .models import PRODUCT_FORMS, ROLES, USER_STATUSES
from .time_utils import parse_date, start_of_day, utcnow


# Maximum price: PKR 9,999,999.99
MAX_PRICE = Decimal("9999999.99")

TEXT = "text"
MONEY = "money"
INTEGER = "integer"
BOOLEAN = "boolean"
DATE = "date"


@dataclass(frozen=True)
class ModelValidationPolicy:
    """
    Central policy layer:
    - field_types: what clients are allowed to set (security boundary) and how to coerce it
    - required_on_create: fields required for POST
    """
    field_types: dict[str, str]
    required_on_create: frozenset[str] = frozenset()


PRODUCT_POLICY = ModelValidationPolicy(
    field_types={
        "name": TEXT,
        "generic_name": TEXT,
        "strength": TEXT,
        "form": TEXT,
        "category": TEXT,
        "price": MONEY,
        "cost_price": MONEY,
        "stock": INTEGER,
        "expiry_date": DATE,
        "barcode": TEXT,
        "sku": TEXT,
        "batch_number": TEXT,
        "supplier": TEXT,
        "pack_size": TEXT,
        "reorder_level": INTEGER,
        "location": TEXT,
        "requires_prescription": BOOLEAN,
        "is_narcotic": BOOLEAN,
        "warning_note": TEXT,
    },
    required_on_create=frozenset({"name", "generic_name", "barcode", "batch_number", "expiry_date"}),
)

USER_POLICY = ModelValidationPolicy(
    field_types={"name": TEXT, "email": TEXT, "role": TEXT, "status": TEXT},
    required_on_create=frozenset({"name", "email", "role"}),
)

REQUIRED_MESSAGES = {
    "name": "Product name is required",
    "generic_name": "Generic name/formula is required",
    "barcode": "Barcode is required",
    "batch_number": "Batch number is required",
    "expiry_date": "Expiry date is required",
}


def _coerce_value(kind: str, key: str, value: Any):
    """Returns the coerced value or raises ValueError with a field message."""
    if kind == TEXT:
        return str(value).strip()

    if kind == MONEY:
        if isinstance(value, bool):
            raise ValueError(f"{key} must be a number")
        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation:
            raise ValueError(f"{key} must be a number")
        if not amount.is_finite():
            raise ValueError(f"{key} must be a number")
        return amount

    # Integers - strict validation to reject floats and scientific notation
    if kind == INTEGER:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        if isinstance(value, str):
            stripped = value.strip()
            if stripped.lstrip("-").isdigit():
                return int(stripped)
        if isinstance(value, float) and value.is_integer():
            return int(value)
        raise ValueError(f"{key} must be a whole number")

    if kind == BOOLEAN:
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.strip().lower() in ("true", "false"):
            return value.strip().lower() == "true"
        raise ValueError(f"{key} must be true or false")

    if kind == DATE:
        try:
            parsed = parse_date(value)
        except ValueError:
            raise ValueError(f"{key} must be a date (YYYY-MM-DD)")
        if parsed is None:
            raise ValueError(f"{key} must be a date (YYYY-MM-DD)")
        return parsed

    return value


def validate_payload(*, payload: dict, policy: ModelValidationPolicy, partial: bool) -> dict:
    """
    Validates + normalizes incoming JSON against a policy.

    Collects one message per field so the form can show all of them at once.
    Unknown fields are rejected. Blank required text counts as missing.

    partial=False: create semantics (enforce required_on_create)
    partial=True: patch semantics (validate only provided keys)
    """
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValidationError("Invalid JSON payload")

    errors: dict[str, str] = {}
    patch: dict = {}

    for key, raw in payload.items():
        kind = policy.field_types.get(key)
        if kind is None:
            errors[key] = f"Field not allowed: {key}"
            continue
        if raw is None or (isinstance(raw, str) and raw.strip() == ""):
            if key in policy.required_on_create:
                errors[key] = REQUIRED_MESSAGES.get(key, f"{key} is required")
            continue
        try:
            patch[key] = _coerce_value(kind, key, raw)
        except ValueError as exc:
            errors[key] = str(exc)

    if not partial:
        for key in sorted(policy.required_on_create):
            if key not in patch and key not in errors:
                errors[key] = REQUIRED_MESSAGES.get(key, f"{key} is required")

    if errors:
        raise ValidationError.for_fields(errors)
    return patch


def enforce_rules_product(patch: dict, *, now: datetime | None = None) -> None:
    """
    Business rules for a new product batch.
    Keep these small and centralized.
    """
    now = now or utcnow()
    errors: dict[str, str] = {}

    expiry = patch.get("expiry_date")
    if expiry is not None and start_of_day(expiry) < now:
        errors["expiry_date"] = "Expiry date cannot be in the past"

    cost = patch.get("cost_price")
    price = patch.get("price")
    if cost is None or cost <= 0:
        errors["cost_price"] = "Invalid cost price"
    if price is None or price <= 0:
        errors["price"] = "Invalid sales price"
    elif price > MAX_PRICE:
        errors["price"] = f"Sales price cannot exceed {MAX_PRICE:,}"
    elif cost is not None and cost > price:
        errors["price"] = "Sales price cannot be lower than cost"

    form = patch.get("form")
    if form is not None and form not in PRODUCT_FORMS:
        errors["form"] = f"form must be one of: {', '.join(PRODUCT_FORMS)}"

    for key in ("stock", "reorder_level"):
        if key in patch and patch[key] < 0:
            errors[key] = f"{key} must be >= 0"

    if errors:
        raise ValidationError.for_fields(errors)


def enforce_rules_user(patch: dict) -> None:
    errors: dict[str, str] = {}
    if "role" in patch and patch["role"] not in ROLES:
        errors["role"] = f"role must be one of: {', '.join(ROLES)}"
    if "status" in patch and patch["status"] not in USER_STATUSES:
        errors["status"] = f"status must be one of: {', '.join(USER_STATUSES)}"
    if "email" in patch and "@" not in patch["email"]:
        errors["email"] = "email must be a valid address"
    if errors:
        raise ValidationError.for_fields(errors)


def parse_quantity_delta(value) -> int:
    """Cart +/- buttons only ever send 1 or -1."""
    if isinstance(value, bool) or value not in (1, -1):
        raise ValidationError("delta must be 1 or -1", details={"fields": {"delta": "must be 1 or -1"}})
    return int(value)


def parse_product_id(value) -> int:
    if isinstance(value, bool):
        raise ValidationError("product_id must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    raise ValidationError("product_id must be an integer", details={"fields": {"product_id": "must be an integer"}})


def parse_confirmation_token(payload: dict | None, query=None) -> str | None:
    """Token from the JSON body, falling back to ?confirmation_token=."""
    token = (payload or {}).get("confirmation_token")
    if not token and query is not None:
        token = query.get("confirmation_token")
    if token is None:
        return None
    if not isinstance(token, str):
        raise ValidationError("confirmation_token must be a string")
    return token.strip() or None
