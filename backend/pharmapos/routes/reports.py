# Overview: Flask API routes for reports; dashboard, revenue, controlled register and audit log.

from flask import Blueprint, jsonify, request

from ..decorators import require_auth, require_permission
from ..errors import PosError
from ..extensions import get_state
from ..services import reporting_service, sales_service


reports_bp = Blueprint("reports", __name__, url_prefix="/api/reports")


@reports_bp.get("/dashboard")
@require_auth
@require_permission("VIEW_DASHBOARD")
def dashboard():
    return jsonify(reporting_service.dashboard_stats(get_state())), 200


@reports_bp.get("/revenue")
@require_auth
@require_permission("VIEW_REPORTS")
def revenue():
    """Last 7 days, oldest first."""
    return jsonify({"rows": reporting_service.revenue_by_day(get_state())}), 200


@reports_bp.get("/sales")
@require_auth
@require_permission("VIEW_REPORTS")
def sales():
    limit = request.args.get("limit", type=int)
    rows = sales_service.list_sales(get_state(), limit=limit)
    return jsonify({"sales": [s.to_dict() for s in rows]}), 200


@reports_bp.get("/controlled")
@require_auth
@require_permission("VIEW_CONTROLLED_REGISTER")
def controlled():
    return jsonify({"rows": reporting_service.controlled_register(get_state())}), 200


@reports_bp.get("/audit")
@require_auth
@require_permission("VIEW_AUDIT_LOG")
def audit_log():
    """
    Query params:
    - action: filter by action code
    - limit: max entries (newest first)
    """
    entries = reporting_service.audit_log_report(
        get_state(),
        action=request.args.get("action"),
        limit=request.args.get("limit", type=int),
    )
    return jsonify({"entries": entries}), 200


@reports_bp.get("/sales/<sale_id>")
@require_auth
@require_permission("VIEW_REPORTS")
def sale_detail(sale_id: str):
    try:
        sale = sales_service.get_sale(get_state(), sale_id)
        return jsonify({"sale": sale.to_dict()}), 200
    except PosError as e:
        return jsonify(e.to_dict()), e.status_code
