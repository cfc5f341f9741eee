"""
Pytest fixtures for PharmaPOS backend tests.

Provides a fresh app (empty catalog, three staff users) per test, test
clients logged in per role and a product factory.
"""

from datetime import timedelta

import pytest

from pharmapos import create_app
from pharmapos.extensions import EXTENSION_KEY
from pharmapos.models import User
from pharmapos.state import product_from_row
from pharmapos.time_utils import utcnow


ADMIN_EMAIL = "admin@test.local"
PHARMACIST_EMAIL = "pharm@test.local"
CASHIER_EMAIL = "cash@test.local"


@pytest.fixture(scope='function')
def app():
    """Create application for testing."""
    app = create_app({
        'TESTING': True,
        'SECRET_KEY': 'test',
        'SEED_FIXTURES': False,
        'DEFAULT_TAX_RATE': None,
        'CHECKOUT_DELAY_SECONDS': 0,
        'LOGIN_DELAY_SECONDS': 0,
    })
    with app.app_context():
        yield app


@pytest.fixture(scope='function')
def state(app):
    """The app's in-memory state, with one user per role."""
    state = app.extensions[EXTENSION_KEY]
    state.users.add(User(id="u-1", name="Admin User", email=ADMIN_EMAIL, role="admin"))
    state.users.add(User(id="u-2", name="Pharmacist User", email=PHARMACIST_EMAIL, role="pharmacist"))
    state.users.add(User(id="u-3", name="Cashier User", email=CASHIER_EMAIL, role="cashier"))
    return state


@pytest.fixture(scope='function')
def admin(state):
    return state.users.require("u-1")


@pytest.fixture(scope='function')
def pharmacist(state):
    return state.users.require("u-2")


@pytest.fixture(scope='function')
def cashier(state):
    return state.users.require("u-3")


@pytest.fixture(scope='function')
def make_product(state):
    """
    Factory adding a product to the catalog.

    Defaults to a sellable batch (price 100, stock 10, expiring in a year).
    """
    def _make(**overrides):
        product_id = overrides.pop("id", state.catalog.next_id())
        row = {
            "id": product_id,
            "name": f"Product {product_id}",
            "generic_name": f"Generic {product_id}",
            "strength": "500mg",
            "form": "Tablet",
            "category": "General",
            "price": "100",
            "cost_price": "60",
            "stock": 10,
            "expiry_date": (utcnow() + timedelta(days=365)).date(),
            "barcode": f"MED{100000 + product_id}",
            "sku": f"SKU-{product_id}",
            "batch_number": f"B{product_id:04d}",
            "reorder_level": 0,
        }
        row.update(overrides)
        return state.catalog.add(product_from_row(row))

    return _make


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


def login(app, email: str):
    """Helper returning a test client with a logged-in session."""
    client = app.test_client()
    response = client.post('/api/auth/login', json={'email': email, 'password': 'ignored'})
    assert response.status_code == 200, response.get_json()
    return client


@pytest.fixture(scope='function')
def admin_client(app, state):
    return login(app, ADMIN_EMAIL)


@pytest.fixture(scope='function')
def pharmacist_client(app, state):
    return login(app, PHARMACIST_EMAIL)


@pytest.fixture(scope='function')
def cashier_client(app, state):
    return login(app, CASHIER_EMAIL)
