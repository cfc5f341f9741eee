# backend/pharmapos/routes/system.py
"""
System health endpoint.

Reports the size of each in-memory store; useful when debugging a running
terminal.
"""

from flask import Blueprint

from ..extensions import get_state
from pharmapos.time_utils import to_utc_z, utcnow

system_bp = Blueprint("system", __name__, url_prefix="/api/system")


@system_bp.get("/health")
def health():
    state = get_state()
    return {
        "status": "healthy",
        "timestamp": to_utc_z(utcnow()),
        "checks": {
            "products": len(state.catalog),
            "users": len(state.users.all()),
            "sales": len(state.ledger),
            "held_sales": len(state.held_sales),
            "audit_entries": len(state.audit_log),
        },
    }, 200
