# Overview: Flask API routes for declining pending confirmations.

from flask import Blueprint, g, jsonify

from ..decorators import require_auth
from ..errors import PosError
from ..extensions import get_state
from ..services import confirmation_service


confirmations_bp = Blueprint("confirmations", __name__, url_prefix="/api/confirmations")


@confirmations_bp.delete("/<token>")
@require_auth
def cancel_route(token: str):
    """The "No" answer to a prompt: the token is discarded and nothing else changes."""
    try:
        req = confirmation_service.cancel_confirmation(get_state(), token, user=g.current_user)
        return jsonify({"cancelled": req.action, "subject": req.subject}), 200
    except PosError as e:
        return jsonify(e.to_dict()), e.status_code
