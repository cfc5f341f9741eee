# Overview: Flask API routes for auth operations; parses input and returns JSON responses.

"""
Mock authentication API routes

Login matches an email against the user directory; there are no passwords.
The logged-in user record is cached in the signed session cookie under
SESSION_USER_KEY and cleared on logout.
"""

import time

from flask import Blueprint, current_app, g, jsonify, request, session

from ..decorators import require_auth
from ..errors import PosError
from ..extensions import get_state
from ..services import auth_service, permission_service


auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")


def _session_payload(user) -> dict:
    return {
        "user": user.to_dict(),
        "permissions": permission_service.get_user_permissions(user),
        "navigation": permission_service.navigation_for(user.role),
    }


@auth_bp.post("/login")
def login_route():
    """
    Log in by email. The password field, if sent, is ignored.

    Returns 401 for unknown or inactive accounts.
    """
    try:
        data = request.get_json(silent=True) or {}

        delay = current_app.config.get("LOGIN_DELAY_SECONDS", 0)
        if delay:
            time.sleep(delay)

        user = auth_service.authenticate(get_state(), data.get("email"))
        session[current_app.config["SESSION_USER_KEY"]] = user.to_dict()

        return jsonify(_session_payload(user)), 200

    except PosError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception:
        current_app.logger.exception("Login failed")
        return jsonify({"error": "Internal server error"}), 500


@auth_bp.post("/logout")
@require_auth
def logout_route():
    auth_service.logout(get_state(), g.current_user)
    session.pop(current_app.config["SESSION_USER_KEY"], None)
    return jsonify({"message": "Logged out successfully"}), 200


@auth_bp.get("/me")
@require_auth
def me_route():
    """Current user, their capabilities and the sidebar they should see."""
    return jsonify(_session_payload(g.current_user)), 200
