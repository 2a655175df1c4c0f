"""Tests for listing and deleting tenants."""
from __future__ import annotations

from decimal import Decimal
from uuid import uuid4

import pytest
from sqlalchemy.orm import Session

from backend.posgo.core.exceptions import NotFound
from backend.posgo.models.store import Profile, Store
from backend.posgo.schemas.catalog import Product
from backend.posgo.schemas.customer import Customer
from backend.posgo.schemas.organization import StoreSettings
from backend.posgo.schemas.pos import PaymentMethodEnum
from backend.posgo.schemas.supplier import Supplier
from backend.posgo.services.checkout import checkout
from backend.posgo.services.identity import resolve_store_id
from backend.posgo.services.shifts import CashShiftLedger
from backend.posgo.services.tenants import delete_store, list_stores
from backend.posgo.storage.remote import SqlDataStore
from backend.tests.conftest import line


def _fill(store: SqlDataStore) -> None:
    """One row in every tenant table."""
    product = Product(id=uuid4(), name="Arroz Costeño", price=Decimal("5.40"), stock=10)
    store.create_product(product)
    store.create_supplier(Supplier(id=uuid4(), name="Alicorp"))
    store.create_customer(Customer(id=uuid4(), name="María", phone="987654321"))
    shift = CashShiftLedger(store).open_shift(Decimal("10"))
    checkout(store, [line(product)], {PaymentMethodEnum.CASH: Decimal("5.40")}, shift.id)


class TestListStores:
    def test_lists_every_tenant(
        self, db: Session, sql_store: SqlDataStore, tenant: Store, other_tenant: Store
    ) -> None:
        sql_store.save_settings(StoreSettings(name="Bodega Rosa"))
        db.add(Profile(id="user-1", store_id=tenant.id, name="Rosa", role="admin"))
        db.commit()

        summaries = {s.id: s for s in list_stores(db)}
        assert set(summaries) == {tenant.id, other_tenant.id}
        assert summaries[tenant.id].name == "Bodega Rosa"
        assert summaries[tenant.id].users == 1
        assert summaries[other_tenant.id].name is None


class TestDeleteStore:
    def test_removes_tenant_rows_only(
        self, db: Session, sql_store: SqlDataStore, tenant: Store, other_tenant: Store
    ) -> None:
        store_id = tenant.id
        db.add(Profile(id="user-1", store_id=store_id, name="Rosa", role="admin"))
        db.commit()
        _fill(sql_store)
        other = SqlDataStore(db, other_tenant.id)
        _fill(other)
        assert resolve_store_id(db, "user-1") == store_id

        removed = delete_store(db, store_id)
        db.commit()

        assert removed["transactions"] == 1
        assert removed["cash_movements"] == 1
        assert removed["profiles"] == 1
        assert [s.id for s in list_stores(db)] == [other_tenant.id]
        with pytest.raises(NotFound):
            resolve_store_id(db, "user-1")

        assert len(other.list_products()) == 1
        assert len(other.list_transactions()) == 1
        assert len(other.open_shifts()) == 1

    def test_unknown_store(self, db: Session) -> None:
        with pytest.raises(NotFound):
            delete_store(db, uuid4())
