from __future__ import annotations

from decimal import Decimal, InvalidOperation

from ..errors import NotFoundError, ValidationError
from ..models import AppSetting, SETTING_GROUPS, User
from ..settings_catalog import (
    EXPIRY_ALERT_DAYS,
    LOW_STOCK_LIMIT_DEFAULT,
    NUMERIC_DEFAULTS,
    TAX_RATE,
)
from ..state import AppState
from .ledger_service import append_audit_event


BOOLEAN_KEYS = {"auto_print"}


def get_tax_rate(state: AppState) -> Decimal:
    """Sales tax percentage; 0 when unset."""
    return state.settings.get_number(TAX_RATE, NUMERIC_DEFAULTS[TAX_RATE])


def get_expiry_alert_days(state: AppState) -> int:
    return int(state.settings.get_number(EXPIRY_ALERT_DAYS, NUMERIC_DEFAULTS[EXPIRY_ALERT_DAYS]))


def get_low_stock_default(state: AppState) -> int:
    return int(state.settings.get_number(LOW_STOCK_LIMIT_DEFAULT, NUMERIC_DEFAULTS[LOW_STOCK_LIMIT_DEFAULT]))


def list_settings(state: AppState, group: str | None = None) -> list[AppSetting]:
    if group is not None and group not in SETTING_GROUPS:
        raise ValidationError(f"Unknown settings group: {group}", details={"group": group})
    settings = state.settings.all()
    if group:
        settings = [s for s in settings if s.group == group]
    return settings


def _normalize_value(key: str, value) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        value = "true" if value else "false"
    text = str(value).strip()

    if key in NUMERIC_DEFAULTS and text != "":
        try:
            number = Decimal(text)
        except InvalidOperation:
            raise ValidationError(f"{key} must be a number", details={"fields": {key: "must be a number"}})
        if not number.is_finite() or number < 0:
            raise ValidationError(
                f"{key} must be a non-negative number",
                details={"fields": {key: "must be a non-negative number"}},
            )

    if key in BOOLEAN_KEYS and text not in ("true", "false"):
        raise ValidationError(f"{key} must be true or false", details={"fields": {key: "must be true or false"}})

    return text


def update_settings(state: AppState, changes: dict, *, actor: User | None = None) -> list[AppSetting]:
    """
    Apply a batch of setting changes.

    Every key is checked before anything is written, so a bad value leaves
    all settings untouched.
    """
    if not changes:
        raise ValidationError("No settings provided")

    normalized: dict[str, str] = {}
    for key, value in changes.items():
        if state.settings.get(key) is None:
            raise NotFoundError(f"Unknown setting: {key}", details={"key": key})
        normalized[key] = _normalize_value(key, value)

    updated = [state.settings.set_value(key, value) for key, value in normalized.items()]

    append_audit_event(
        state,
        action="UPDATE_SETTINGS",
        details=f"Updated settings: {', '.join(sorted(normalized))}",
        actor=actor,
    )
    return updated
