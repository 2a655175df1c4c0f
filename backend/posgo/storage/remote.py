"""Remote multi-tenant store backed by SQLAlchemy.

Every query is filtered by, and every row stamped with, the ``store_id`` the
store was constructed with. Each write commits on its own: a checkout that
appends a transaction and then updates products is two commits, and a
failure between them leaves the first in place.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from decimal import Decimal
from typing import Any, TypeVar
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.posgo.core.exceptions import NotFound, PersistenceFailure
from backend.posgo.models.customer import Customer as CustomerRow
from backend.posgo.models.inventory import Product as ProductRow
from backend.posgo.models.pos import CashMovement as MovementRow
from backend.posgo.models.pos import CashShift as ShiftRow
from backend.posgo.models.pos import MovementType as MovementTypeCol
from backend.posgo.models.pos import ShiftStatus as ShiftStatusCol
from backend.posgo.models.pos import Transaction as TransactionRow
from backend.posgo.models.store import Store
from backend.posgo.models.supplier import Purchase as PurchaseRow
from backend.posgo.models.supplier import Supplier as SupplierRow
from backend.posgo.schemas.catalog import Product
from backend.posgo.schemas.customer import Customer
from backend.posgo.schemas.organization import DEFAULT_SETTINGS, StoreSettings
from backend.posgo.schemas.pos import Transaction
from backend.posgo.schemas.shift import CashMovement, CashShift
from backend.posgo.schemas.supplier import Purchase, Supplier
from backend.posgo.storage.base import DataStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _json(values: list[Any]) -> list[Any]:
    return [v.model_dump(mode="json") for v in values]


def _money(value: Decimal | None) -> Decimal | None:
    return Decimal(str(value)) if value is not None else None


class SqlDataStore(DataStore):
    def __init__(self, db: Session, store_id: UUID) -> None:
        self.db = db
        self.store_id = store_id

    def _write(self, action: str, fn: Callable[[], T]) -> T:
        try:
            result = fn()
            self.db.commit()
            return result
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Store %s: failed to %s", self.store_id, action)
            raise PersistenceFailure(f"Could not {action}") from exc

    def _store(self) -> Store:
        store = self.db.query(Store).filter(Store.id == self.store_id).first()
        if store is None:
            raise NotFound("Store", self.store_id)
        return store

    # ── Products ────────────────────────────────────────────────────────────

    @staticmethod
    def _product_out(row: ProductRow) -> Product:
        return Product(
            id=row.id,
            name=row.name,
            price=_money(row.price),
            category=row.category,
            stock=row.stock,
            barcode=row.barcode,
            has_variants=row.has_variants,
            variants=row.variants or [],
            images=row.images or [],
        )

    @staticmethod
    def _product_values(product: Product) -> dict[str, Any]:
        return {
            "name": product.name,
            "price": product.price,
            "category": product.category,
            "stock": product.stock,
            "barcode": product.barcode,
            "has_variants": product.has_variants,
            "variants": _json(product.variants),
            "images": list(product.images),
        }

    def list_products(self) -> list[Product]:
        rows = (
            self.db.query(ProductRow)
            .filter(ProductRow.store_id == self.store_id)
            .order_by(ProductRow.name)
            .all()
        )
        return [self._product_out(r) for r in rows]

    def create_product(self, product: Product) -> UUID:
        def _add() -> UUID:
            self.db.add(ProductRow(id=product.id, store_id=self.store_id, **self._product_values(product)))
            self.db.flush()
            return product.id

        return self._write("create product", _add)

    def update_product(self, product_id: UUID, product: Product) -> None:
        row = (
            self.db.query(ProductRow)
            .filter(ProductRow.id == product_id, ProductRow.store_id == self.store_id)
            .first()
        )
        if row is None:
            raise NotFound("Product", product_id)

        def _update() -> None:
            for key, value in self._product_values(product).items():
                setattr(row, key, value)

        self._write("update product", _update)

    # ── Transactions ────────────────────────────────────────────────────────

    def list_transactions(self) -> list[Transaction]:
        rows = (
            self.db.query(TransactionRow)
            .filter(TransactionRow.store_id == self.store_id)
            .order_by(TransactionRow.date.desc())
            .all()
        )
        return [
            Transaction(
                id=r.id,
                date=r.date,
                items=r.items,
                subtotal=_money(r.subtotal),
                tax=_money(r.tax),
                discount=_money(r.discount),
                total=_money(r.total),
                payments=r.payments,
                payment_method=r.payment_method,
                shift_id=r.shift_id,
            )
            for r in rows
        ]

    def append_transaction(self, transaction: Transaction) -> UUID:
        def _add() -> UUID:
            self.db.add(TransactionRow(
                id=transaction.id,
                store_id=self.store_id,
                shift_id=transaction.shift_id,
                date=transaction.date,
                items=_json(transaction.items),
                subtotal=transaction.subtotal,
                tax=transaction.tax,
                discount=transaction.discount,
                total=transaction.total,
                payments=_json(transaction.payments),
                payment_method=transaction.payment_method,
            ))
            self.db.flush()
            return transaction.id

        return self._write("save transaction", _add)

    # ── Purchases ───────────────────────────────────────────────────────────

    def list_purchases(self) -> list[Purchase]:
        rows = (
            self.db.query(PurchaseRow)
            .filter(PurchaseRow.store_id == self.store_id)
            .order_by(PurchaseRow.date.desc())
            .all()
        )
        return [
            Purchase(id=r.id, date=r.date, supplier_id=r.supplier_id, total=_money(r.total), items=r.items)
            for r in rows
        ]

    def append_purchase(self, purchase: Purchase) -> UUID:
        def _add() -> UUID:
            self.db.add(PurchaseRow(
                id=purchase.id,
                store_id=self.store_id,
                supplier_id=purchase.supplier_id,
                date=purchase.date,
                total=purchase.total,
                items=_json(purchase.items),
            ))
            self.db.flush()
            return purchase.id

        return self._write("save purchase", _add)

    # ── Settings ────────────────────────────────────────────────────────────

    def get_settings(self) -> StoreSettings:
        raw = self._store().settings
        return StoreSettings.model_validate(raw) if raw else DEFAULT_SETTINGS

    def save_settings(self, settings: StoreSettings) -> None:
        store = self._store()

        def _update() -> None:
            store.settings = settings.model_dump(mode="json")

        self._write("save settings", _update)

    # ── Customers / Suppliers ───────────────────────────────────────────────

    def list_customers(self) -> list[Customer]:
        rows = (
            self.db.query(CustomerRow)
            .filter(CustomerRow.store_id == self.store_id)
            .order_by(CustomerRow.name)
            .all()
        )
        return [
            Customer(id=r.id, name=r.name, phone=r.phone, email=r.email, document=r.document)
            for r in rows
        ]

    def create_customer(self, customer: Customer) -> UUID:
        def _add() -> UUID:
            self.db.add(CustomerRow(store_id=self.store_id, **customer.model_dump()))
            self.db.flush()
            return customer.id

        return self._write("create customer", _add)

    def list_suppliers(self) -> list[Supplier]:
        rows = (
            self.db.query(SupplierRow)
            .filter(SupplierRow.store_id == self.store_id)
            .order_by(SupplierRow.name)
            .all()
        )
        return [
            Supplier(id=r.id, name=r.name, contact=r.contact, phone=r.phone, email=r.email, ruc=r.ruc)
            for r in rows
        ]

    def create_supplier(self, supplier: Supplier) -> UUID:
        def _add() -> UUID:
            self.db.add(SupplierRow(store_id=self.store_id, **supplier.model_dump()))
            self.db.flush()
            return supplier.id

        return self._write("create supplier", _add)

    # ── Shifts / Movements ──────────────────────────────────────────────────

    @staticmethod
    def _shift_out(row: ShiftRow) -> CashShift:
        return CashShift(
            id=row.id,
            start_time=row.start_time,
            start_amount=_money(row.start_amount),
            status=row.status.value,
            end_time=row.end_time,
            end_amount=_money(row.end_amount),
            total_sales_cash=_money(row.total_sales_cash),
            total_sales_digital=_money(row.total_sales_digital),
        )

    def list_shifts(self) -> list[CashShift]:
        rows = (
            self.db.query(ShiftRow)
            .filter(ShiftRow.store_id == self.store_id)
            .order_by(ShiftRow.start_time.desc())
            .all()
        )
        return [self._shift_out(r) for r in rows]

    def create_shift(self, shift: CashShift) -> UUID:
        def _add() -> UUID:
            self.db.add(ShiftRow(
                id=shift.id,
                store_id=self.store_id,
                status=ShiftStatusCol(shift.status.value),
                start_time=shift.start_time,
                start_amount=shift.start_amount,
                total_sales_cash=shift.total_sales_cash,
                total_sales_digital=shift.total_sales_digital,
            ))
            self.db.flush()
            return shift.id

        return self._write("open shift", _add)

    def update_shift(self, shift_id: UUID, shift: CashShift) -> None:
        row = (
            self.db.query(ShiftRow)
            .filter(ShiftRow.id == shift_id, ShiftRow.store_id == self.store_id)
            .first()
        )
        if row is None:
            raise NotFound("Shift", shift_id)

        def _update() -> None:
            row.status = ShiftStatusCol(shift.status.value)
            row.end_time = shift.end_time
            row.end_amount = shift.end_amount
            row.total_sales_cash = shift.total_sales_cash
            row.total_sales_digital = shift.total_sales_digital

        self._write("update shift", _update)

    def list_movements(self) -> list[CashMovement]:
        rows = (
            self.db.query(MovementRow)
            .filter(MovementRow.store_id == self.store_id)
            .order_by(MovementRow.timestamp)
            .all()
        )
        return [
            CashMovement(
                id=r.id,
                shift_id=r.shift_id,
                type=r.type.value,
                amount=_money(r.amount),
                description=r.description,
                timestamp=r.timestamp,
            )
            for r in rows
        ]

    def append_movement(self, movement: CashMovement) -> UUID:
        def _add() -> UUID:
            self.db.add(MovementRow(
                id=movement.id,
                store_id=self.store_id,
                shift_id=movement.shift_id,
                type=MovementTypeCol(movement.type.value),
                amount=movement.amount,
                description=movement.description,
                timestamp=movement.timestamp,
            ))
            self.db.flush()
            return movement.id

        return self._write("save cash movement", _add)

    # ── Active shift pointer ────────────────────────────────────────────────

    def get_active_shift_id(self) -> UUID | None:
        return self._store().active_shift_id

    def set_active_shift_id(self, shift_id: UUID | None) -> None:
        store = self._store()

        def _update() -> None:
            store.active_shift_id = shift_id

        self._write("set active shift", _update)
