"""Storage strategy consumed by the reconciliation services.

Two implementations exist: ``LocalDataStore`` (demo mode, a single implicit
tenant) and ``SqlDataStore`` (remote, every row scoped by ``store_id``).
Services receive one at construction and never branch on the mode.

Creation and update are distinct operations: ``create_*`` inserts a record
whose id must be new, ``update_*`` replaces an existing record and raises
``NotFound`` when it is missing. Logs (transactions, purchases, movements)
are append-only. Write failures surface as ``PersistenceFailure``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from uuid import UUID

from backend.posgo.core.exceptions import NotFound
from backend.posgo.schemas.catalog import Product
from backend.posgo.schemas.customer import Customer
from backend.posgo.schemas.organization import StoreSettings
from backend.posgo.schemas.pos import Transaction
from backend.posgo.schemas.shift import CashMovement, CashShift, ShiftStatus
from backend.posgo.schemas.supplier import Purchase, Supplier


class DataStore(ABC):
    # ── Products ────────────────────────────────────────────────────────────

    @abstractmethod
    def list_products(self) -> list[Product]: ...

    @abstractmethod
    def create_product(self, product: Product) -> UUID: ...

    @abstractmethod
    def update_product(self, product_id: UUID, product: Product) -> None: ...

    # ── Transactions ────────────────────────────────────────────────────────

    @abstractmethod
    def list_transactions(self) -> list[Transaction]:
        """Most recent first."""

    @abstractmethod
    def append_transaction(self, transaction: Transaction) -> UUID: ...

    # ── Purchases ───────────────────────────────────────────────────────────

    @abstractmethod
    def list_purchases(self) -> list[Purchase]:
        """Most recent first."""

    @abstractmethod
    def append_purchase(self, purchase: Purchase) -> UUID: ...

    # ── Settings ────────────────────────────────────────────────────────────

    @abstractmethod
    def get_settings(self) -> StoreSettings: ...

    @abstractmethod
    def save_settings(self, settings: StoreSettings) -> None: ...

    # ── Customers / Suppliers ───────────────────────────────────────────────

    @abstractmethod
    def list_customers(self) -> list[Customer]: ...

    @abstractmethod
    def create_customer(self, customer: Customer) -> UUID: ...

    @abstractmethod
    def list_suppliers(self) -> list[Supplier]: ...

    @abstractmethod
    def create_supplier(self, supplier: Supplier) -> UUID: ...

    # ── Shifts / Movements ──────────────────────────────────────────────────

    @abstractmethod
    def list_shifts(self) -> list[CashShift]:
        """Most recent first."""

    @abstractmethod
    def create_shift(self, shift: CashShift) -> UUID: ...

    @abstractmethod
    def update_shift(self, shift_id: UUID, shift: CashShift) -> None: ...

    @abstractmethod
    def list_movements(self) -> list[CashMovement]:
        """Oldest first."""

    @abstractmethod
    def append_movement(self, movement: CashMovement) -> UUID: ...

    # ── Active shift pointer ────────────────────────────────────────────────

    @abstractmethod
    def get_active_shift_id(self) -> UUID | None: ...

    @abstractmethod
    def set_active_shift_id(self, shift_id: UUID | None) -> None: ...

    # ── Shared lookups ──────────────────────────────────────────────────────

    def get_product(self, product_id: UUID) -> Product:
        product = next((p for p in self.list_products() if p.id == product_id), None)
        if product is None:
            raise NotFound("Product", product_id)
        return product

    def update_products(self, products: Iterable[Product]) -> None:
        for product in products:
            self.update_product(product.id, product)

    def get_supplier(self, supplier_id: UUID) -> Supplier:
        supplier = next((s for s in self.list_suppliers() if s.id == supplier_id), None)
        if supplier is None:
            raise NotFound("Supplier", supplier_id)
        return supplier

    def get_shift(self, shift_id: UUID) -> CashShift:
        shift = next((s for s in self.list_shifts() if s.id == shift_id), None)
        if shift is None:
            raise NotFound("Shift", shift_id)
        return shift

    def get_transaction(self, transaction_id: UUID) -> Transaction:
        tx = next((t for t in self.list_transactions() if t.id == transaction_id), None)
        if tx is None:
            raise NotFound("Transaction", transaction_id)
        return tx

    def open_shifts(self) -> list[CashShift]:
        return [s for s in self.list_shifts() if s.status == ShiftStatus.OPEN]

    def shift_transactions(self, shift_id: UUID) -> list[Transaction]:
        return [t for t in self.list_transactions() if t.shift_id == shift_id]

    def shift_movements(self, shift_id: UUID) -> list[CashMovement]:
        return [m for m in self.list_movements() if m.shift_id == shift_id]
