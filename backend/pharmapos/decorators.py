# Overview: Request and permission decorators for API routes.

from functools import wraps
from flask import current_app, g, jsonify, session

from .extensions import get_state
from .services import auth_service, permission_service


def _is_authenticated() -> bool:
    return getattr(g, "current_user", None) is not None


def require_auth(f):
    """
    Require a logged-in user.

    Sets g.current_user to the live directory entry for the user cached in
    the session. Returns 401 if the session is empty or the user has since
    been deleted or deactivated (the stale session is dropped).
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        key = current_app.config["SESSION_USER_KEY"]
        cached = session.get(key)
        if not cached:
            return jsonify({"error": "Authentication required"}), 401

        user = auth_service.resolve_session_user(get_state(), cached)
        if user is None:
            session.pop(key, None)
            return jsonify({"error": "Invalid or expired session"}), 401

        g.current_user = user
        return f(*args, **kwargs)

    return decorated_function


def require_permission(action: str):
    """Require a capability from the (role, action) table."""
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            # Ensure @require_auth was called first
            if not _is_authenticated():
                return jsonify({"error": "Authentication required"}), 401

            if not permission_service.user_has_permission(g.current_user, action):
                current_app.logger.info(
                    "Permission denied: user=%s action=%s", g.current_user.id, action
                )
                return jsonify({
                    "error": "Permission denied",
                    "details": {"required_permission": action},
                }), 403

            return f(*args, **kwargs)

        return decorated_function
    return decorator
