# Overview: In-memory application state; every store has exactly one owner and is
# passed explicitly into services.

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Iterator

from .errors import NotFoundError
from .models import (
    AppSetting,
    AuditLogEntry,
    Cart,
    ConfirmationRequest,
    HeldSale,
    Product,
    Sale,
    User,
)
from .seed_data import SEED_PRODUCTS, SEED_USERS
from .settings_catalog import SETTINGS_CATALOG, TAX_RATE
from .time_utils import parse_date
"""
PharmaPOS State Invariants (authoritative)

- Nothing here is durable; a process restart returns to the seed fixtures.
- Each store is mutated only through its own methods.
- CatalogStore.decrement_stock does NOT guard against negative stock; the
  checkout processor validates every line before calling it.
- SaleLedger and AuditLog are append-only. SaleLedger.clear exists solely for
  the admin "clear sales history" action.
- HeldSaleRegistry and SaleLedger preserve insertion order.
"""


class CatalogStore:
    """Ordered collection of products keyed by id.

    Ids are never reused; the high-water mark survives removals.
    """

    def __init__(self, products: list[Product] | None = None):
        self._products: list[Product] = []
        self._last_id = 0
        for product in products or []:
            self.add(product)

    def __iter__(self) -> Iterator[Product]:
        return iter(list(self._products))

    def __len__(self) -> int:
        return len(self._products)

    def all(self) -> list[Product]:
        return list(self._products)

    def get(self, product_id: int) -> Product | None:
        for product in self._products:
            if product.id == product_id:
                return product
        return None

    def require(self, product_id: int) -> Product:
        product = self.get(product_id)
        if product is None:
            raise NotFoundError("Product not found", details={"product_id": product_id})
        return product

    def next_id(self) -> int:
        return self._last_id + 1

    def add(self, product: Product) -> Product:
        self._products.append(product)
        self._last_id = max(self._last_id, product.id)
        return product

    def remove(self, product_id: int) -> Product:
        product = self.require(product_id)
        self._products.remove(product)
        return product

    def decrement_stock(self, product_id: int, quantity: int) -> Product:
        product = self.require(product_id)
        product.stock -= quantity
        return product

    def categories(self) -> list[str]:
        seen: list[str] = []
        for product in self._products:
            if product.category not in seen:
                seen.append(product.category)
        return seen


class SettingsRegistry:
    """Key-value settings. Reads never fail; they fall back."""

    def __init__(self, settings: list[AppSetting] | None = None):
        self._settings: list[AppSetting] = list(settings or [])

    def all(self) -> list[AppSetting]:
        return list(self._settings)

    def get(self, key: str) -> AppSetting | None:
        for setting in self._settings:
            if setting.key == key:
                return setting
        return None

    def get_value(self, key: str, default: str = "") -> str:
        setting = self.get(key)
        if setting is None or setting.value in (None, ""):
            return default
        return setting.value

    def get_number(self, key: str, default) -> Decimal:
        """
        Numeric view of a setting.

        Missing, empty or unparseable values yield ``default``.
        """
        raw = self.get_value(key)
        if raw == "":
            return Decimal(str(default))
        try:
            value = Decimal(raw.strip())
        except (InvalidOperation, AttributeError):
            return Decimal(str(default))
        if not value.is_finite():
            return Decimal(str(default))
        return value

    def set_value(self, key: str, value: str) -> AppSetting:
        setting = self.get(key)
        if setting is None:
            raise NotFoundError(f"Unknown setting: {key}", details={"key": key})
        setting.value = value
        return setting


class UserDirectory:
    def __init__(self, users: list[User] | None = None):
        self._users: list[User] = list(users or [])

    def all(self) -> list[User]:
        return list(self._users)

    def get(self, user_id: str) -> User | None:
        for user in self._users:
            if user.id == user_id:
                return user
        return None

    def require(self, user_id: str) -> User:
        user = self.get(user_id)
        if user is None:
            raise NotFoundError("User not found", details={"user_id": user_id})
        return user

    def find_by_email(self, email: str) -> User | None:
        wanted = (email or "").strip().lower()
        for user in self._users:
            if user.email.lower() == wanted:
                return user
        return None

    def add(self, user: User) -> User:
        self._users.append(user)
        return user

    def remove(self, user_id: str) -> User:
        user = self.require(user_id)
        self._users.remove(user)
        return user


class SaleLedger:
    """Append-only history of completed sales."""

    def __init__(self):
        self._sales: list[Sale] = []

    def __len__(self) -> int:
        return len(self._sales)

    def append(self, sale: Sale) -> Sale:
        self._sales.append(sale)
        return sale

    def all(self) -> list[Sale]:
        return list(self._sales)

    def newest_first(self) -> list[Sale]:
        return list(reversed(self._sales))

    def get(self, sale_id: str) -> Sale | None:
        for sale in self._sales:
            if sale.id == sale_id:
                return sale
        return None

    def references_product(self, product_id: int) -> bool:
        return any(sale.references_product(product_id) for sale in self._sales)

    def clear(self) -> int:
        count = len(self._sales)
        self._sales = []
        return count


class AuditLog:
    def __init__(self):
        self._entries: list[AuditLogEntry] = []

    def __len__(self) -> int:
        return len(self._entries)

    def append(self, entry: AuditLogEntry) -> AuditLogEntry:
        self._entries.append(entry)
        return entry

    def all(self) -> list[AuditLogEntry]:
        return list(self._entries)

    def newest_first(self) -> list[AuditLogEntry]:
        return list(reversed(self._entries))


class HeldSaleRegistry:
    def __init__(self):
        self._held: list[HeldSale] = []

    def __len__(self) -> int:
        return len(self._held)

    def add(self, held: HeldSale) -> HeldSale:
        self._held.append(held)
        return held

    def all(self) -> list[HeldSale]:
        return list(self._held)

    def get(self, held_id: str) -> HeldSale | None:
        for held in self._held:
            if held.id == held_id:
                return held
        return None

    def pop(self, held_id: str) -> HeldSale:
        held = self.get(held_id)
        if held is None:
            raise NotFoundError("Held sale not found", details={"held_sale_id": held_id})
        self._held.remove(held)
        return held


@dataclass
class AppState:
    """Everything the application knows. Created once per Flask app."""
    catalog: CatalogStore = field(default_factory=CatalogStore)
    settings: SettingsRegistry = field(default_factory=SettingsRegistry)
    users: UserDirectory = field(default_factory=UserDirectory)
    ledger: SaleLedger = field(default_factory=SaleLedger)
    audit_log: AuditLog = field(default_factory=AuditLog)
    held_sales: HeldSaleRegistry = field(default_factory=HeldSaleRegistry)
    carts: dict[str, Cart] = field(default_factory=dict)
    confirmations: dict[str, ConfirmationRequest] = field(default_factory=dict)
    sequences: dict[str, int] = field(default_factory=dict)
    confirmation_ttl_seconds: int = 300

    def cart_for(self, user_id: str) -> Cart:
        """The active cart of a terminal session, created on first use."""
        cart = self.carts.get(user_id)
        if cart is None:
            cart = Cart(owner_user_id=user_id)
            self.carts[user_id] = cart
        return cart


def product_from_row(row: dict) -> Product:
    return Product(
        id=int(row["id"]),
        name=row["name"],
        generic_name=row["generic_name"],
        strength=row.get("strength", ""),
        form=row.get("form", "Other"),
        category=row.get("category", ""),
        price=Decimal(str(row["price"])),
        cost_price=Decimal(str(row["cost_price"])),
        stock=int(row.get("stock", 0)),
        expiry_date=parse_date(row["expiry_date"]),
        barcode=row.get("barcode", ""),
        sku=row.get("sku", ""),
        batch_number=row.get("batch_number", ""),
        supplier=row.get("supplier", ""),
        pack_size=row.get("pack_size", ""),
        reorder_level=int(row.get("reorder_level", 0)),
        location=row.get("location", ""),
        requires_prescription=bool(row.get("requires_prescription", False)),
        is_narcotic=bool(row.get("is_narcotic", False)),
        warning_note=row.get("warning_note") or None,
    )


def default_settings() -> list[AppSetting]:
    return [
        AppSetting(
            id=i,
            key=row["key"],
            value=row["value"],
            description=row["description"],
            group=row["group"],
        )
        for i, row in enumerate(SETTINGS_CATALOG, start=1)
    ]


def build_state(*, seed: bool = True, tax_rate: str | None = None) -> AppState:
    """
    Create a fresh AppState.

    Settings are always present (lookups must have something to fall back
    from); products and users come from the fixtures only when ``seed``.
    """
    state = AppState(settings=SettingsRegistry(default_settings()))
    if tax_rate is not None:
        state.settings.set_value(TAX_RATE, str(tax_rate))
    if seed:
        for row in SEED_PRODUCTS:
            state.catalog.add(product_from_row(row))
        for row in SEED_USERS:
            state.users.add(User(**row))
    return state
