# Overview: Service-layer read models for the dashboard and reports screens.

from __future__ import annotations

from datetime import datetime, timedelta
from decimal import Decimal

from ..models import Sale
from ..state import AppState
from pharmapos.time_utils import to_utc_z, utcnow
from .catalog_service import catalog_alerts
from .ledger_service import list_audit_events


REVENUE_WINDOW_DAYS = 7


def _sales_on(sales: list[Sale], day) -> list[Sale]:
    return [s for s in sales if s.date.date() == day]


def dashboard_stats(state: AppState, now: datetime | None = None) -> dict:
    """Today's takings plus the alert counts shown on the dashboard tiles."""
    now = now or utcnow()
    todays = _sales_on(state.ledger.all(), now.date())
    alerts = catalog_alerts(state, now)
    return {
        "date": now.date().isoformat(),
        "revenue_today": sum((s.total_amount for s in todays), Decimal("0")),
        "transactions_today": len(todays),
        "low_stock_count": len(alerts["low_stock"]),
        "near_expiry_count": len(alerts["near_expiry"]),
        "expired_count": len(alerts["expired"]),
    }


def revenue_by_day(
    state: AppState,
    *,
    days: int = REVENUE_WINDOW_DAYS,
    now: datetime | None = None,
) -> list[dict]:
    """
    Summed sale totals per calendar day, oldest first.

    Days without sales are present with amount 0.
    """
    now = now or utcnow()
    totals: dict = {}
    for sale in state.ledger.all():
        key = sale.date.date()
        totals[key] = totals.get(key, Decimal("0")) + sale.total_amount

    rows = []
    for offset in range(days - 1, -1, -1):
        day = (now - timedelta(days=offset)).date()
        rows.append({
            "date": day.isoformat(),
            "weekday": day.strftime("%a"),
            "amount": totals.get(day, Decimal("0")),
        })
    return rows


def controlled_register(state: AppState) -> list[dict]:
    """One row per narcotic line item, newest sale first."""
    rows = []
    for sale in state.ledger.newest_first():
        for item in sale.items:
            if not item.is_narcotic:
                continue
            rows.append({
                "sale_id": sale.id,
                "date": to_utc_z(sale.date),
                "product_id": item.product_id,
                "product_name": item.product_name,
                "batch_number": item.batch_number,
                "quantity": item.quantity,
                "user_name": sale.user_name,
            })
    return rows


def audit_log_report(state: AppState, *, action: str | None = None, limit: int | None = None) -> list[dict]:
    return [entry.to_dict() for entry in list_audit_events(state, action=action, limit=limit)]
