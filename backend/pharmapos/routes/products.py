# Overview: Flask API routes for products operations; parses input and returns JSON responses.

# backend/pharmapos/routes/products.py
"""
Inventory routes.

SECURITY: All routes require authentication.
- Read operations require VIEW_INVENTORY permission
- Adding batches requires ADD_PRODUCT
- Deleting requires DELETE_PRODUCT and a confirmation token
"""
from flask import Blueprint, current_app, g, jsonify, request

from ..decorators import require_auth, require_permission
from ..errors import PosError
from ..extensions import get_state
from ..services import catalog_service
from ..validation import parse_confirmation_token

products_bp = Blueprint("products", __name__, url_prefix="/api/products")


@products_bp.get("")
@require_auth
@require_permission("VIEW_INVENTORY")
def list_products():
    """
    Inventory table.

    Query params:
    - q: free-text search over name, generic name, barcode and SKU
    - category: exact category ("All" for none)
    - filter: lowstock | expiring | expired
    """
    state = get_state()
    filter_name = request.args.get("filter") or None
    if filter_name is not None and filter_name not in catalog_service.FILTERS:
        return jsonify({
            "error": f"filter must be one of: {', '.join(catalog_service.FILTERS)}",
            "details": {"filter": filter_name},
        }), 400

    products = catalog_service.search_products(
        state,
        term=request.args.get("q"),
        category=request.args.get("category"),
        filter_name=filter_name,
    )
    return jsonify({
        "items": [catalog_service.describe_product(state, p) for p in products],
        "count": len(products),
    }), 200


@products_bp.get("/categories")
@require_auth
def list_categories():
    return jsonify({"categories": catalog_service.list_categories(get_state())}), 200


@products_bp.get("/alerts")
@require_auth
@require_permission("VIEW_INVENTORY")
def alerts():
    state = get_state()
    result = catalog_service.catalog_alerts(state)
    return jsonify({
        key: [catalog_service.describe_product(state, p) for p in products]
        for key, products in result.items()
    }), 200


@products_bp.get("/<int:product_id>")
@require_auth
@require_permission("VIEW_INVENTORY")
def get_product(product_id: int):
    state = get_state()
    product = state.catalog.get(product_id)
    if product is None:
        return jsonify({"error": "Product not found"}), 404
    return jsonify(catalog_service.describe_product(state, product)), 200


@products_bp.post("/barcode")
@require_auth
@require_permission("ADD_PRODUCT")
def generate_barcode():
    return jsonify({"barcode": catalog_service.generate_barcode()}), 200


@products_bp.post("")
@require_auth
@require_permission("ADD_PRODUCT")
def create_product_route():
    """
    Add a new product batch.

    Validation failures return 400 with details.fields mapping each field
    to its message.
    """
    payload = request.get_json(silent=True) or {}

    try:
        state = get_state()
        product = catalog_service.add_product(state, payload, actor=g.current_user)
        return jsonify(catalog_service.describe_product(state, product)), 201

    except PosError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception:
        current_app.logger.exception("Failed to add product")
        return jsonify({"error": "Internal server error"}), 500


@products_bp.delete("/<int:product_id>")
@require_auth
@require_permission("DELETE_PRODUCT")
def delete_product_route(product_id: int):
    """
    Delete a product (two-phase).

    First call without a token: 428 with details.confirmation.token.
    Second call with confirmation_token (body or query): deletes.
    Products referenced by any sale are refused with 409.
    """
    try:
        token = parse_confirmation_token(request.get_json(silent=True), request.args)
        product = catalog_service.delete_product(
            get_state(),
            product_id,
            actor=g.current_user,
            confirmation_token=token,
        )
        return jsonify({"ok": True, "deleted": product.to_dict()}), 200

    except PosError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception:
        current_app.logger.exception("Failed to delete product")
        return jsonify({"error": "Internal server error"}), 500
