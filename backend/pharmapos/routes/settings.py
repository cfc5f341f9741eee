# Overview: Flask API routes for settings, backup export and the danger zone.

# backend/pharmapos/routes/settings.py
"""
Settings API routes (admin).

- GET/PUT /api/settings: read and batch-update key/value settings
- GET /api/settings/backup: settings + users as a downloadable JSON file
- POST /api/settings/clear-sales: two-phase wipe of sales history
"""

from flask import Blueprint, current_app, g, jsonify, request

from ..decorators import require_auth, require_permission
from ..errors import PosError
from ..extensions import get_state
from ..services import maintenance_service, settings_service
from ..validation import parse_confirmation_token


settings_bp = Blueprint("settings", __name__, url_prefix="/api/settings")


@settings_bp.get("")
@require_auth
@require_permission("MANAGE_SETTINGS")
def list_settings_route():
    """Optional ?group=general|inventory|billing|system."""
    try:
        settings = settings_service.list_settings(get_state(), request.args.get("group"))
        return jsonify({"settings": [s.to_dict() for s in settings]}), 200
    except PosError as e:
        return jsonify(e.to_dict()), e.status_code


@settings_bp.put("")
@require_auth
@require_permission("MANAGE_SETTINGS")
def update_settings_route():
    """
    Body: {"settings": {"tax_rate": "17", ...}}

    All-or-nothing: one bad key or value leaves every setting unchanged.
    """
    try:
        data = request.get_json(silent=True) or {}
        changes = data.get("settings")
        if not isinstance(changes, dict):
            return jsonify({"error": "settings object required"}), 400

        updated = settings_service.update_settings(get_state(), changes, actor=g.current_user)
        return jsonify({"settings": [s.to_dict() for s in updated]}), 200

    except PosError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception:
        current_app.logger.exception("Failed to update settings")
        return jsonify({"error": "Internal server error"}), 500


@settings_bp.get("/backup")
@require_auth
@require_permission("EXPORT_BACKUP")
def backup_route():
    document = maintenance_service.export_backup(get_state(), actor=g.current_user)
    response = jsonify(document)
    filename = current_app.config["BACKUP_FILENAME"]
    response.headers["Content-Disposition"] = f'attachment; filename="{filename}"'
    return response, 200


@settings_bp.post("/clear-sales")
@require_auth
@require_permission("CLEAR_SALES_DATA")
def clear_sales_route():
    try:
        token = parse_confirmation_token(request.get_json(silent=True), request.args)
        removed = maintenance_service.clear_sales_history(
            get_state(), actor=g.current_user, confirmation_token=token
        )
        current_app.logger.warning("Sales history cleared by %s", g.current_user.id)
        return jsonify({"cleared": removed}), 200

    except PosError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception:
        current_app.logger.exception("Failed to clear sales history")
        return jsonify({"error": "Internal server error"}), 500
