"""Demo-mode store: one JSON document, keyed by fixed strings.

With a path the document is read on construction and rewritten after every
write; without one it lives only in memory, which is what the tests use.
"""

from __future__ import annotations

import json
import logging
from decimal import Decimal
from pathlib import Path
from typing import Any
from uuid import UUID

from pydantic import BaseModel

from backend.posgo.core.exceptions import AlreadyExists, NotFound, PersistenceFailure
from backend.posgo.schemas.catalog import Product
from backend.posgo.schemas.customer import Customer
from backend.posgo.schemas.organization import DEFAULT_SETTINGS, StoreSettings
from backend.posgo.schemas.pos import Transaction
from backend.posgo.schemas.shift import CashMovement, CashShift
from backend.posgo.schemas.supplier import Purchase, Supplier
from backend.posgo.storage.base import DataStore

logger = logging.getLogger(__name__)

KEYS = {
    "products": "lumina_products",
    "transactions": "lumina_transactions",
    "purchases": "lumina_purchases",
    "settings": "lumina_settings",
    "customers": "lumina_customers",
    "suppliers": "lumina_suppliers",
    "shifts": "lumina_shifts",
    "movements": "lumina_movements",
    "active_shift": "lumina_active_shift",
}


def _demo_id(n: int) -> UUID:
    return UUID(int=n)


DEMO_PRODUCTS: list[Product] = [
    Product(id=_demo_id(1), name="Inca Kola 600ml", price=Decimal("3.50"), category="Bebidas", stock=50, barcode="77501000"),
    Product(id=_demo_id(2), name="Papas Lays 45g", price=Decimal("2.50"), category="Alimentos", stock=32, barcode="75010001"),
    Product(id=_demo_id(3), name="Galleta Casino", price=Decimal("1.20"), category="Alimentos", stock=15, barcode="75010002"),
    Product(id=_demo_id(4), name="Agua San Mateo", price=Decimal("2.00"), category="Bebidas", stock=100, barcode="77502000"),
    Product(id=_demo_id(5), name="Detergente Bolivar", price=Decimal("4.50"), category="Limpieza", stock=10, barcode="77503000"),
]


def _dump(model: BaseModel) -> dict[str, Any]:
    return model.model_dump(mode="json")


def demo_document() -> dict[str, Any]:
    return {
        KEYS["products"]: [_dump(p) for p in DEMO_PRODUCTS],
        KEYS["transactions"]: [],
        KEYS["purchases"]: [],
        KEYS["settings"]: _dump(DEFAULT_SETTINGS),
        KEYS["customers"]: [],
        KEYS["suppliers"]: [],
        KEYS["shifts"]: [],
        KEYS["movements"]: [],
        KEYS["active_shift"]: None,
    }


class LocalDataStore(DataStore):
    def __init__(self, path: str | Path | None = None) -> None:
        self._path = Path(path) if path else None
        self._doc = self._load()

    # ── Document I/O ────────────────────────────────────────────────────────

    def _load(self) -> dict[str, Any]:
        doc = demo_document()
        if self._path is not None and self._path.exists():
            with open(self._path, encoding="utf-8") as f:
                doc.update(json.load(f))
        return doc

    def _flush(self) -> None:
        if self._path is None:
            return
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self._path.with_suffix(self._path.suffix + ".tmp")
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(self._doc, f, ensure_ascii=False)
            tmp.replace(self._path)
        except OSError as exc:
            logger.exception("Failed to write demo store %s", self._path)
            raise PersistenceFailure(f"Could not write local store: {exc}") from exc

    def reset_demo_data(self) -> None:
        self._doc = demo_document()
        self._flush()

    def _rows(self, key: str) -> list[dict[str, Any]]:
        return self._doc[KEYS[key]]

    def _insert(self, key: str, model: BaseModel, model_id: UUID, *, front: bool = False) -> UUID:
        rows = self._rows(key)
        if any(r["id"] == str(model_id) for r in rows):
            raise AlreadyExists(key, model_id)
        if front:
            rows.insert(0, _dump(model))
        else:
            rows.append(_dump(model))
        self._flush()
        return model_id

    def _replace(self, key: str, resource: str, model_id: UUID, model: BaseModel) -> None:
        rows = self._rows(key)
        for idx, row in enumerate(rows):
            if row["id"] == str(model_id):
                rows[idx] = _dump(model)
                self._flush()
                return
        raise NotFound(resource, model_id)

    # ── Products ────────────────────────────────────────────────────────────

    def list_products(self) -> list[Product]:
        return [Product.model_validate(r) for r in self._rows("products")]

    def create_product(self, product: Product) -> UUID:
        return self._insert("products", product, product.id)

    def update_product(self, product_id: UUID, product: Product) -> None:
        self._replace("products", "Product", product_id, product)

    # ── Transactions ────────────────────────────────────────────────────────

    def list_transactions(self) -> list[Transaction]:
        return [Transaction.model_validate(r) for r in self._rows("transactions")]

    def append_transaction(self, transaction: Transaction) -> UUID:
        return self._insert("transactions", transaction, transaction.id, front=True)

    # ── Purchases ───────────────────────────────────────────────────────────

    def list_purchases(self) -> list[Purchase]:
        return [Purchase.model_validate(r) for r in self._rows("purchases")]

    def append_purchase(self, purchase: Purchase) -> UUID:
        return self._insert("purchases", purchase, purchase.id, front=True)

    # ── Settings ────────────────────────────────────────────────────────────

    def get_settings(self) -> StoreSettings:
        raw = self._doc.get(KEYS["settings"])
        return StoreSettings.model_validate(raw) if raw else DEFAULT_SETTINGS

    def save_settings(self, settings: StoreSettings) -> None:
        self._doc[KEYS["settings"]] = _dump(settings)
        self._flush()

    # ── Customers / Suppliers ───────────────────────────────────────────────

    def list_customers(self) -> list[Customer]:
        return [Customer.model_validate(r) for r in self._rows("customers")]

    def create_customer(self, customer: Customer) -> UUID:
        return self._insert("customers", customer, customer.id)

    def list_suppliers(self) -> list[Supplier]:
        return [Supplier.model_validate(r) for r in self._rows("suppliers")]

    def create_supplier(self, supplier: Supplier) -> UUID:
        return self._insert("suppliers", supplier, supplier.id)

    # ── Shifts / Movements ──────────────────────────────────────────────────

    def list_shifts(self) -> list[CashShift]:
        return [CashShift.model_validate(r) for r in self._rows("shifts")]

    def create_shift(self, shift: CashShift) -> UUID:
        return self._insert("shifts", shift, shift.id, front=True)

    def update_shift(self, shift_id: UUID, shift: CashShift) -> None:
        self._replace("shifts", "Shift", shift_id, shift)

    def list_movements(self) -> list[CashMovement]:
        return [CashMovement.model_validate(r) for r in self._rows("movements")]

    def append_movement(self, movement: CashMovement) -> UUID:
        return self._insert("movements", movement, movement.id)

    # ── Active shift pointer ────────────────────────────────────────────────

    def get_active_shift_id(self) -> UUID | None:
        raw = self._doc.get(KEYS["active_shift"])
        return UUID(raw) if raw else None

    def set_active_shift_id(self, shift_id: UUID | None) -> None:
        self._doc[KEYS["active_shift"]] = str(shift_id) if shift_id else None
        self._flush()
