# Overview: Flask API routes for the POS terminal; cart, hold/resume and checkout.

# backend/pharmapos/routes/pos.py
"""POS API routes. Every route requires USE_POS and works on the caller's own cart."""

import time

from flask import Blueprint, current_app, g, jsonify, request

from ..decorators import require_auth, require_permission
from ..errors import PosError
from ..extensions import get_state
from ..services import cart_service, catalog_service, hold_service, sales_service
from ..validation import parse_confirmation_token, parse_product_id


pos_bp = Blueprint("pos", __name__, url_prefix="/api/pos")


def _cart_response(state, cart, change=None, status: int = 200):
    body = {"cart": cart_service.cart_summary(state, cart)}
    if change is not None:
        body["notices"] = list(change.notices)
    return jsonify(body), status


@pos_bp.get("/products")
@require_auth
@require_permission("USE_POS")
def pos_products():
    """Product grid: same search and category filter as inventory."""
    state = get_state()
    products = catalog_service.search_products(
        state,
        term=request.args.get("q"),
        category=request.args.get("category"),
    )
    return jsonify({
        "items": [catalog_service.describe_product(state, p) for p in products],
        "categories": catalog_service.list_categories(state),
    }), 200


@pos_bp.get("/cart")
@require_auth
@require_permission("USE_POS")
def get_cart():
    state = get_state()
    return _cart_response(state, state.cart_for(g.current_user.id))


@pos_bp.post("/cart/items")
@require_auth
@require_permission("USE_POS")
def add_item_route():
    """
    Add one unit of a product.

    Prescription-only products answer 428 with a confirmation token first;
    resend with confirmation_token once the prescription is verified.
    Expired batches answer 422, stock shortfalls 409.
    """
    try:
        data = request.get_json(silent=True) or {}
        product_id = parse_product_id(data.get("product_id"))
        token = parse_confirmation_token(data)

        state = get_state()
        cart = state.cart_for(g.current_user.id)
        change = cart_service.add_to_cart(
            state, cart, product_id, user=g.current_user, confirmation_token=token
        )
        return _cart_response(state, cart, change)

    except PosError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception:
        current_app.logger.exception("Failed to add cart item")
        return jsonify({"error": "Internal server error"}), 500


@pos_bp.patch("/cart/items/<int:product_id>")
@require_auth
@require_permission("USE_POS")
def adjust_item_route(product_id: int):
    """Body: {"delta": 1} or {"delta": -1}."""
    try:
        data = request.get_json(silent=True) or {}
        state = get_state()
        cart = state.cart_for(g.current_user.id)
        change = cart_service.adjust_quantity(state, cart, product_id, data.get("delta"))
        return _cart_response(state, cart, change)

    except PosError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception:
        current_app.logger.exception("Failed to adjust cart item")
        return jsonify({"error": "Internal server error"}), 500


@pos_bp.delete("/cart/items/<int:product_id>")
@require_auth
@require_permission("USE_POS")
def remove_item_route(product_id: int):
    state = get_state()
    cart = state.cart_for(g.current_user.id)
    cart_service.remove_from_cart(cart, product_id)
    return _cart_response(state, cart)


@pos_bp.delete("/cart")
@require_auth
@require_permission("USE_POS")
def clear_cart_route():
    state = get_state()
    cart = state.cart_for(g.current_user.id)
    cart_service.clear_cart(cart)
    return _cart_response(state, cart)


@pos_bp.post("/hold")
@require_auth
@require_permission("USE_POS")
def hold_route():
    try:
        data = request.get_json(silent=True) or {}
        state = get_state()
        cart = state.cart_for(g.current_user.id)
        held = hold_service.hold_sale(
            state, cart, user=g.current_user, reference_note=data.get("reference_note")
        )
        return jsonify({"held_sale": held.to_dict()}), 201

    except PosError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception:
        current_app.logger.exception("Failed to hold sale")
        return jsonify({"error": "Internal server error"}), 500


@pos_bp.get("/held")
@require_auth
@require_permission("USE_POS")
def list_held_route():
    held = hold_service.list_held_sales(get_state())
    return jsonify({"held_sales": [h.to_dict() for h in held]}), 200


@pos_bp.post("/held/<held_id>/resume")
@require_auth
@require_permission("USE_POS")
def resume_route(held_id: str):
    """Replaces the caller's active cart with the held snapshot."""
    try:
        state = get_state()
        cart = state.cart_for(g.current_user.id)
        held = hold_service.resume_sale(state, cart, held_id, user=g.current_user)
        body = {"resumed": held.id, "cart": cart_service.cart_summary(state, cart)}
        return jsonify(body), 200

    except PosError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception:
        current_app.logger.exception("Failed to resume held sale")
        return jsonify({"error": "Internal server error"}), 500


@pos_bp.post("/checkout")
@require_auth
@require_permission("USE_POS")
def checkout_route():
    """
    Commit the caller's cart.

    Body: {"payment_method": "Cash" | "Easypaisa" | "JazzCash", "total"?: number}
    """
    try:
        data = request.get_json(silent=True) or {}

        delay = current_app.config.get("CHECKOUT_DELAY_SECONDS", 0)
        if delay:
            time.sleep(delay)

        state = get_state()
        cart = state.cart_for(g.current_user.id)
        sale = sales_service.checkout(
            state,
            cart,
            user=g.current_user,
            payment_method=data.get("payment_method"),
            total=data.get("total"),
        )
        current_app.logger.info("Sale %s completed by %s", sale.id, g.current_user.id)
        return jsonify({"sale": sale.to_dict()}), 201

    except PosError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception:
        current_app.logger.exception("Failed to complete checkout")
        return jsonify({"error": "Internal server error"}), 500
