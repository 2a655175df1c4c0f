"""Tests for the demo-mode JSON store."""
from __future__ import annotations

import json
from decimal import Decimal
from pathlib import Path
from uuid import uuid4

import pytest

from backend.posgo.core.exceptions import AlreadyExists, NotFound, PersistenceFailure
from backend.posgo.schemas.catalog import Product
from backend.posgo.schemas.customer import Customer
from backend.posgo.schemas.organization import StoreSettings
from backend.posgo.storage.local import DEMO_PRODUCTS, KEYS, LocalDataStore
from backend.tests.conftest import INCA_KOLA


class TestSeed:
    def test_demo_catalog(self, store: LocalDataStore) -> None:
        assert len(store.list_products()) == len(DEMO_PRODUCTS) == 5
        assert store.get_product(INCA_KOLA).stock == 50
        assert store.list_transactions() == []
        assert store.get_active_shift_id() is None

    def test_default_settings(self, store: LocalDataStore) -> None:
        settings = store.get_settings()
        assert settings.tax_rate == Decimal("0.18")
        assert settings.prices_include_tax is True


class TestCreateVersusUpdate:
    def test_create_then_update(self, store: LocalDataStore) -> None:
        product = Product(id=uuid4(), name="Pan", price=Decimal("0.30"), stock=40)
        assert store.create_product(product) == product.id
        store.update_product(product.id, product.model_copy(update={"stock": 35}))
        assert store.get_product(product.id).stock == 35

    def test_update_missing_raises(self, store: LocalDataStore) -> None:
        ghost = Product(id=uuid4(), name="Ghost", price=Decimal("1"))
        with pytest.raises(NotFound):
            store.update_product(ghost.id, ghost)
        assert len(store.list_products()) == 5

    def test_create_existing_id_raises(self, store: LocalDataStore) -> None:
        with pytest.raises(AlreadyExists) as exc_info:
            store.create_product(store.get_product(INCA_KOLA))
        assert exc_info.value.status_code == 409
        assert len(store.list_products()) == 5

    def test_customers_round_trip(self, store: LocalDataStore) -> None:
        customer = Customer(id=uuid4(), name="María", phone="987654321")
        store.create_customer(customer)
        assert store.list_customers() == [customer]


class TestFileBacked:
    def test_writes_survive_reload(self, tmp_path: Path) -> None:
        path = tmp_path / "posgo.json"
        store = LocalDataStore(path)
        store.save_settings(StoreSettings(name="Bodega Rosa", tax_rate=Decimal("0.10")))
        shift_id = uuid4()
        store.set_active_shift_id(shift_id)

        reloaded = LocalDataStore(path)
        assert reloaded.get_settings().name == "Bodega Rosa"
        assert reloaded.get_settings().tax_rate == Decimal("0.10")
        assert reloaded.get_active_shift_id() == shift_id

    def test_document_keys(self, tmp_path: Path) -> None:
        path = tmp_path / "posgo.json"
        LocalDataStore(path).set_active_shift_id(None)
        doc = json.loads(path.read_text(encoding="utf-8"))
        assert set(doc) == set(KEYS.values())

    def test_reset_restores_demo_data(self, tmp_path: Path) -> None:
        path = tmp_path / "posgo.json"
        store = LocalDataStore(path)
        store.update_product(INCA_KOLA, store.get_product(INCA_KOLA).model_copy(update={"stock": 1}))
        store.reset_demo_data()
        assert LocalDataStore(path).get_product(INCA_KOLA).stock == 50

    def test_write_error_becomes_persistence_failure(self, tmp_path: Path) -> None:
        path = tmp_path / "posgo.json"
        store = LocalDataStore(path)
        (tmp_path / "posgo.json.tmp").mkdir()
        with pytest.raises(PersistenceFailure):
            store.set_active_shift_id(uuid4())
