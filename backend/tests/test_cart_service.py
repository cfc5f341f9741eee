"""
Cart service tests.

Verifies:
- Expired batches are hard-blocked
- Prescription items need a confirmation token
- Quantity never exceeds catalog stock at the time of the call
- Pricing: total == subtotal + subtotal * tax_rate / 100
"""

from datetime import timedelta
from decimal import Decimal

import pytest

from pharmapos.errors import (
    ExpiredProductError,
    PrescriptionRequiredError,
    StockInsufficientError,
    ValidationError,
)
from pharmapos.services import cart_service, settings_service
from pharmapos.time_utils import utcnow


@pytest.fixture
def cart(state, cashier):
    return state.cart_for(cashier.id)


# =============================================================================
# ADD TO CART
# =============================================================================


class TestAddToCart:

    def test_first_add_creates_line(self, state, cart, cashier, make_product):
        product = make_product(stock=5)
        change = cart_service.add_to_cart(state, cart, product.id, user=cashier)

        assert change.line.quantity == 1
        assert change.notices == []
        assert cart.quantity_of(product.id) == 1

    def test_repeat_add_increments_existing_line(self, state, cart, cashier, make_product):
        product = make_product(stock=5)
        cart_service.add_to_cart(state, cart, product.id, user=cashier)
        cart_service.add_to_cart(state, cart, product.id, user=cashier)

        assert len(cart.lines) == 1
        assert cart.quantity_of(product.id) == 2

    def test_stock_one_second_add_rejected(self, state, cart, cashier, make_product):
        product = make_product(stock=1)
        cart_service.add_to_cart(state, cart, product.id, user=cashier)

        with pytest.raises(StockInsufficientError):
            cart_service.add_to_cart(state, cart, product.id, user=cashier)

        assert cart.quantity_of(product.id) == 1

    def test_out_of_stock_rejected(self, state, cart, cashier, make_product):
        product = make_product(stock=0)
        with pytest.raises(StockInsufficientError):
            cart_service.add_to_cart(state, cart, product.id, user=cashier)
        assert cart.is_empty

    def test_expired_batch_blocked(self, state, cart, cashier, make_product):
        product = make_product(expiry_date=(utcnow() - timedelta(days=1)).date())

        with pytest.raises(ExpiredProductError) as exc:
            cart_service.add_to_cart(state, cart, product.id, user=cashier)

        assert "EXPIRED" in exc.value.message
        assert exc.value.status_code == 422
        assert cart.is_empty

    def test_expiring_today_counts_as_expired(self, state, cart, cashier, make_product):
        product = make_product(expiry_date=utcnow().date())
        with pytest.raises(ExpiredProductError):
            cart_service.add_to_cart(state, cart, product.id, user=cashier)

    def test_expired_check_runs_before_prescription(self, state, cart, cashier, make_product):
        product = make_product(
            requires_prescription=True,
            expiry_date=(utcnow() - timedelta(days=3)).date(),
        )
        with pytest.raises(ExpiredProductError):
            cart_service.add_to_cart(state, cart, product.id, user=cashier)
        assert state.confirmations == {}

    def test_warning_note_is_advisory(self, state, cart, cashier, make_product):
        product = make_product(warning_note="Take after meals")
        change = cart_service.add_to_cart(state, cart, product.id, user=cashier)

        assert change.notices == ["WARNING: Take after meals"]
        assert cart.quantity_of(product.id) == 1

    def test_line_holds_a_snapshot(self, state, cart, cashier, make_product):
        product = make_product(price="100")
        cart_service.add_to_cart(state, cart, product.id, user=cashier)

        product.price = Decimal("999")
        assert cart.find_line(product.id).product.price == Decimal("100")

    def test_unknown_product_not_found(self, state, cart, cashier):
        from pharmapos.errors import NotFoundError
        with pytest.raises(NotFoundError):
            cart_service.add_to_cart(state, cart, 404, user=cashier)


# =============================================================================
# PRESCRIPTION GATE
# =============================================================================


class TestPrescriptionGate:

    def test_without_token_raises_with_fresh_token(self, state, cart, cashier, make_product):
        product = make_product(requires_prescription=True)

        with pytest.raises(PrescriptionRequiredError) as exc:
            cart_service.add_to_cart(state, cart, product.id, user=cashier)

        assert exc.value.status_code == 428
        assert exc.value.token in state.confirmations
        assert exc.value.details["confirmation"]["action"] == "DISPENSE_PRESCRIPTION"
        assert cart.is_empty

    def test_with_token_adds_line(self, state, cart, cashier, make_product):
        product = make_product(requires_prescription=True)
        with pytest.raises(PrescriptionRequiredError) as exc:
            cart_service.add_to_cart(state, cart, product.id, user=cashier)

        cart_service.add_to_cart(
            state, cart, product.id, user=cashier, confirmation_token=exc.value.token
        )

        assert cart.quantity_of(product.id) == 1
        assert exc.value.token not in state.confirmations

    def test_token_is_single_use(self, state, cart, cashier, make_product):
        product = make_product(requires_prescription=True)
        with pytest.raises(PrescriptionRequiredError) as exc:
            cart_service.add_to_cart(state, cart, product.id, user=cashier)
        token = exc.value.token
        cart_service.add_to_cart(state, cart, product.id, user=cashier, confirmation_token=token)

        from pharmapos.errors import NotFoundError
        with pytest.raises(NotFoundError):
            cart_service.add_to_cart(state, cart, product.id, user=cashier, confirmation_token=token)
        assert cart.quantity_of(product.id) == 1

    def test_token_for_another_product_rejected(self, state, cart, cashier, make_product):
        rx_a = make_product(requires_prescription=True)
        rx_b = make_product(requires_prescription=True)
        with pytest.raises(PrescriptionRequiredError) as exc:
            cart_service.add_to_cart(state, cart, rx_a.id, user=cashier)

        with pytest.raises(ValidationError):
            cart_service.add_to_cart(
                state, cart, rx_b.id, user=cashier, confirmation_token=exc.value.token
            )
        assert cart.is_empty


# =============================================================================
# ADJUST / REMOVE
# =============================================================================


class TestAdjustAndRemove:

    def test_increment_within_stock(self, state, cart, cashier, make_product):
        product = make_product(stock=3)
        cart_service.add_to_cart(state, cart, product.id, user=cashier)

        change = cart_service.adjust_quantity(state, cart, product.id, 1)

        assert change.line.quantity == 2
        assert change.notices == []

    def test_increment_beyond_stock_is_noop_with_notice(self, state, cart, cashier, make_product):
        product = make_product(stock=1)
        cart_service.add_to_cart(state, cart, product.id, user=cashier)

        change = cart_service.adjust_quantity(state, cart, product.id, 1)

        assert change.notices == ["Cannot exceed available stock."]
        assert cart.quantity_of(product.id) == 1

    def test_decrement_on_stale_line_is_noop_with_notice(self, state, cart, cashier, make_product):
        product = make_product(stock=3)
        for _ in range(3):
            cart_service.add_to_cart(state, cart, product.id, user=cashier)
        product.stock = 1

        change = cart_service.adjust_quantity(state, cart, product.id, -1)

        assert change.notices == ["Cannot exceed available stock."]
        assert cart.quantity_of(product.id) == 3

    def test_decrement_to_zero_removes_line(self, state, cart, cashier, make_product):
        product = make_product()
        cart_service.add_to_cart(state, cart, product.id, user=cashier)

        cart_service.adjust_quantity(state, cart, product.id, -1)

        assert cart.find_line(product.id) is None

    def test_unknown_line_is_ignored(self, state, cart):
        change = cart_service.adjust_quantity(state, cart, 99, 1)
        assert change.line is None
        assert cart.is_empty

    @pytest.mark.parametrize("delta", [0, 2, -5, "1", True, None])
    def test_delta_must_be_plus_or_minus_one(self, state, cart, delta):
        with pytest.raises(ValidationError):
            cart_service.adjust_quantity(state, cart, 1, delta)

    def test_remove_drops_line(self, state, cart, cashier, make_product):
        a = make_product()
        b = make_product()
        cart_service.add_to_cart(state, cart, a.id, user=cashier)
        cart_service.add_to_cart(state, cart, b.id, user=cashier)

        cart_service.remove_from_cart(cart, a.id)

        assert [line.product_id for line in cart.lines] == [b.id]


# =============================================================================
# PRICING
# =============================================================================


class TestPricing:

    def test_tax_seventeen_percent(self, state, cart, cashier, make_product):
        product = make_product(price="100", stock=5)
        cart_service.add_to_cart(state, cart, product.id, user=cashier)
        cart_service.add_to_cart(state, cart, product.id, user=cashier)
        settings_service.update_settings(state, {"tax_rate": "17"})

        priced = cart_service.price_cart(state, cart)

        assert priced["subtotal"] == Decimal("200")
        assert priced["tax"] == Decimal("34")
        assert priced["total"] == Decimal("234")
        assert priced["item_count"] == 2

    def test_total_equals_subtotal_plus_tax(self, state, cart, cashier, make_product):
        a = make_product(price="12.50")
        b = make_product(price="7.25")
        for product in (a, b, b):
            cart_service.add_to_cart(state, cart, product.id, user=cashier)
        settings_service.update_settings(state, {"tax_rate": "5"})

        priced = cart_service.price_cart(state, cart)

        assert priced["total"] == priced["subtotal"] + priced["subtotal"] * Decimal("5") / 100

    def test_default_tax_is_zero(self, state, cart, cashier, make_product):
        product = make_product(price="40")
        cart_service.add_to_cart(state, cart, product.id, user=cashier)

        priced = cart_service.price_cart(state, cart)

        assert priced["tax"] == 0
        assert priced["total"] == Decimal("40")

    def test_unparseable_tax_rate_falls_back_to_zero(self, state, cart, cashier, make_product):
        product = make_product(price="40")
        cart_service.add_to_cart(state, cart, product.id, user=cashier)
        state.settings.set_value("tax_rate", "abc")

        assert cart_service.price_cart(state, cart)["total"] == Decimal("40")
