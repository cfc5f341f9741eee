from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from datetime import date
from decimal import Decimal


PRODUCT_FORMS = (
    "Tablet",
    "Syrup",
    "Injection",
    "Cream",
    "Capsule",
    "Drops",
    "Sachet",
    "Ointment",
    "Gel",
    "Equipment",
    "Other",
)


@dataclass
class Product:
    """
    Product master data, one row per sellable batch.

    Stock is a plain mutable quantity owned by the CatalogStore; checkout is
    the only writer that decrements it and the only place ``stock >= 0`` is
    enforced.

    A reorder_level of 0 means "use the store-wide low stock default".
    """
    id: int
    name: str
    generic_name: str
    strength: str
    form: str
    category: str
    price: Decimal
    cost_price: Decimal
    stock: int
    expiry_date: date
    barcode: str
    sku: str
    batch_number: str
    supplier: str = ""
    pack_size: str = ""
    reorder_level: int = 0
    location: str = ""
    requires_prescription: bool = False
    is_narcotic: bool = False
    warning_note: str | None = None

    def __repr__(self) -> str:
        return f"<Product id={self.id} sku={self.sku!r} name={self.name!r} stock={self.stock}>"

    def snapshot(self) -> "Product":
        """Detached copy; later catalog mutations do not leak into it."""
        return dataclasses.replace(self)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "generic_name": self.generic_name,
            "strength": self.strength,
            "form": self.form,
            "category": self.category,
            "price": self.price,
            "cost_price": self.cost_price,
            "stock": self.stock,
            "expiry_date": self.expiry_date.isoformat(),
            "barcode": self.barcode,
            "sku": self.sku,
            "batch_number": self.batch_number,
            "supplier": self.supplier,
            "pack_size": self.pack_size,
            "reorder_level": self.reorder_level,
            "location": self.location,
            "requires_prescription": self.requires_prescription,
            "is_narcotic": self.is_narcotic,
            "warning_note": self.warning_note,
        }
