from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from .catalog import Product
from pharmapos.time_utils import to_utc_z


PAYMENT_CASH = "Cash"
PAYMENT_EASYPAISA = "Easypaisa"
PAYMENT_JAZZCASH = "JazzCash"
PAYMENT_METHODS = (PAYMENT_CASH, PAYMENT_EASYPAISA, PAYMENT_JAZZCASH)


@dataclass
class CartLine:
    """A product snapshot plus the quantity being sold."""
    product: Product
    quantity: int

    @property
    def product_id(self) -> int:
        return self.product.id

    @property
    def line_total(self) -> Decimal:
        return self.product.price * self.quantity

    def copy(self) -> "CartLine":
        return CartLine(product=self.product.snapshot(), quantity=self.quantity)

    def to_dict(self) -> dict:
        data = self.product.to_dict()
        data["quantity"] = self.quantity
        data["line_total"] = self.line_total
        return data


@dataclass
class Cart:
    """
    In-progress, uncommitted sale for one terminal session.

    Lines keep insertion order. Quantity limits are enforced by
    cart_service at mutation time, never here.
    """
    owner_user_id: str
    lines: list[CartLine] = field(default_factory=list)

    def find_line(self, product_id: int) -> CartLine | None:
        for line in self.lines:
            if line.product_id == product_id:
                return line
        return None

    def quantity_of(self, product_id: int) -> int:
        line = self.find_line(product_id)
        return line.quantity if line else 0

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines)

    def subtotal(self) -> Decimal:
        return sum((line.line_total for line in self.lines), Decimal("0"))

    def tax(self, tax_rate: Decimal) -> Decimal:
        return self.subtotal() * tax_rate / 100

    def total(self, tax_rate: Decimal) -> Decimal:
        return self.subtotal() + self.tax(tax_rate)

    def snapshot_lines(self) -> list[CartLine]:
        return [line.copy() for line in self.lines]

    def replace_lines(self, lines: list[CartLine]) -> None:
        self.lines = [line.copy() for line in lines]

    def clear(self) -> None:
        self.lines = []


@dataclass(frozen=True)
class SaleItem:
    """Flattened product snapshot recorded on a sale."""
    product_id: int
    product_name: str
    quantity: int
    price: Decimal
    cost_price: Decimal
    batch_number: str
    is_narcotic: bool

    @classmethod
    def from_line(cls, line: CartLine) -> "SaleItem":
        p = line.product
        return cls(
            product_id=p.id,
            product_name=p.name,
            quantity=line.quantity,
            price=p.price,
            cost_price=p.cost_price,
            batch_number=p.batch_number,
            is_narcotic=p.is_narcotic,
        )

    def to_dict(self) -> dict:
        return {
            "product_id": self.product_id,
            "product_name": self.product_name,
            "quantity": self.quantity,
            "price": self.price,
            "cost_price": self.cost_price,
            "batch_number": self.batch_number,
            "is_narcotic": self.is_narcotic,
        }


@dataclass(frozen=True)
class Sale:
    """
    Completed transaction. Immutable once appended to the ledger.

    Items are copies taken at checkout time, so later price or cost changes
    never rewrite history.
    """
    id: str
    date: datetime
    total_amount: Decimal
    payment_method: str
    items: tuple[SaleItem, ...]
    user_id: str
    user_name: str

    def references_product(self, product_id: int) -> bool:
        return any(item.product_id == product_id for item in self.items)

    @property
    def has_controlled_items(self) -> bool:
        return any(item.is_narcotic for item in self.items)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "date": to_utc_z(self.date),
            "total_amount": self.total_amount,
            "payment_method": self.payment_method,
            "items": [item.to_dict() for item in self.items],
            "user_id": self.user_id,
            "user_name": self.user_name,
        }


@dataclass
class HeldSale:
    """A suspended cart waiting to be resumed."""
    id: str
    date: datetime
    items: list[CartLine]
    total: Decimal
    user_id: str
    user_name: str
    reference_note: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "date": to_utc_z(self.date),
            "items": [line.to_dict() for line in self.items],
            "item_count": sum(line.quantity for line in self.items),
            "total": self.total,
            "user_id": self.user_id,
            "user_name": self.user_name,
            "reference_note": self.reference_note,
        }
