# Overview: Flask API routes for user management; parses input and returns JSON responses.

"""User directory administration. Requires MANAGE_USERS."""

from flask import Blueprint, current_app, g, jsonify, request

from ..decorators import require_auth, require_permission
from ..errors import PosError
from ..extensions import get_state
from ..services import auth_service
from ..validation import parse_confirmation_token


users_bp = Blueprint("users", __name__, url_prefix="/api/users")


@users_bp.get("")
@require_auth
@require_permission("MANAGE_USERS")
def list_users_route():
    users = auth_service.list_users(get_state())
    return jsonify({"users": [u.to_dict() for u in users]}), 200


@users_bp.post("")
@require_auth
@require_permission("MANAGE_USERS")
def create_user_route():
    """Body: name, email, role; status defaults to active."""
    try:
        payload = request.get_json(silent=True) or {}
        user = auth_service.create_user(get_state(), payload, actor=g.current_user)
        return jsonify({"user": user.to_dict()}), 201

    except PosError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception:
        current_app.logger.exception("Failed to create user")
        return jsonify({"error": "Internal server error"}), 500


@users_bp.patch("/<user_id>")
@require_auth
@require_permission("MANAGE_USERS")
def update_user_route(user_id: str):
    try:
        payload = request.get_json(silent=True) or {}
        user = auth_service.update_user(get_state(), user_id, payload, actor=g.current_user)
        return jsonify({"user": user.to_dict()}), 200

    except PosError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception:
        current_app.logger.exception("Failed to update user")
        return jsonify({"error": "Internal server error"}), 500


@users_bp.delete("/<user_id>")
@require_auth
@require_permission("MANAGE_USERS")
def delete_user_route(user_id: str):
    """Two-phase: 428 with a token first, then resend with confirmation_token."""
    try:
        token = parse_confirmation_token(request.get_json(silent=True), request.args)
        user = auth_service.delete_user(
            get_state(), user_id, actor=g.current_user, confirmation_token=token
        )
        return jsonify({"ok": True, "deleted": user.to_dict()}), 200

    except PosError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception:
        current_app.logger.exception("Failed to delete user")
        return jsonify({"error": "Internal server error"}), 500
