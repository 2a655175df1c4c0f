"""Shared test fixtures.

Service tests run against an in-memory ``LocalDataStore`` seeded with the demo
catalog. Remote-store tests get a fresh in-memory SQLite database per test.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Generator
from uuid import UUID

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from backend.posgo.api import deps
from backend.posgo.api.v1.endpoints import receipts as receipts_endpoints
from backend.posgo.core import security
from backend.posgo.core.config import settings
from backend.posgo.core.database import Base, get_db
from backend.posgo.main import app
from backend.posgo.models.store import Profile, Store
from backend.posgo.schemas.catalog import Product, Variant
from backend.posgo.schemas.pos import CartItem
from backend.posgo.schemas.shift import CashShift
from backend.posgo.services.identity import forget_store_id
from backend.posgo.services.shifts import CashShiftLedger
from backend.posgo.storage.local import LocalDataStore
from backend.posgo.storage.remote import SqlDataStore


# ─── Demo catalog ids (see storage.local.DEMO_PRODUCTS) ─────────────────────

INCA_KOLA = UUID(int=1)     # 3.50, stock 50, barcode 77501000
PAPAS = UUID(int=2)         # 2.50, stock 32
GALLETA = UUID(int=3)       # 1.20, stock 15


def line(
    product: Product,
    quantity: int = 1,
    variant: Variant | None = None,
    discount: Decimal = Decimal("0"),
) -> CartItem:
    """Cart line for *product* the way the register builds it."""
    return CartItem(
        product_id=product.id,
        name=product.name,
        price=variant.price if variant else product.price,
        category=product.category,
        barcode=product.barcode,
        quantity=quantity,
        selected_variant_id=variant.id if variant else None,
        selected_variant_name=variant.name if variant else None,
        discount=discount,
    )


# ─── Stores ──────────────────────────────────────────────────────────────────


@pytest.fixture()
def store() -> LocalDataStore:
    """In-memory demo store, seeded with the demo catalog."""
    return LocalDataStore()


@pytest.fixture()
def open_shift(store: LocalDataStore) -> CashShift:
    """An OPEN shift with 100.00 in the drawer, set as the active shift."""
    shift = CashShiftLedger(store).open_shift(Decimal("100.00"))
    store.set_active_shift_id(shift.id)
    return shift


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(eng)
    yield eng
    Base.metadata.drop_all(eng)
    eng.dispose()


@pytest.fixture()
def db(engine: Engine) -> Generator[Session, None, None]:
    session = sessionmaker(bind=engine, autocommit=False, autoflush=False)()
    yield session
    session.close()


@pytest.fixture()
def tenant(db: Session) -> Store:
    row = Store()
    db.add(row)
    db.commit()
    return row


@pytest.fixture()
def other_tenant(db: Session) -> Store:
    row = Store()
    db.add(row)
    db.commit()
    return row


@pytest.fixture()
def sql_store(db: Session, tenant: Store) -> SqlDataStore:
    return SqlDataStore(db, tenant.id)


# ─── HTTP client ─────────────────────────────────────────────────────────────


@pytest.fixture()
def client(
    db: Session, store: LocalDataStore, monkeypatch: pytest.MonkeyPatch
) -> Generator[TestClient, None, None]:
    """TestClient whose demo sessions use the in-memory ``store`` fixture."""

    def _override_get_db() -> Generator[Session, None, None]:
        yield db

    monkeypatch.setattr(deps, "_local_store", store)
    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    receipts_endpoints._send_limiter.reset()
    security._revoked_tokens.clear()
    forget_store_id()


# ─── Auth helpers ─────────────────────────────────────────────────────────────


def _demo_token(role: str) -> str:
    return security.create_session_token(
        {"id": settings.DEMO_USER_ID, "name": f"Demo {role}", "role": role}
    )


@pytest.fixture()
def cashier_token() -> str:
    return _demo_token("cashier")


@pytest.fixture()
def admin_token() -> str:
    return _demo_token("admin")


@pytest.fixture()
def super_admin_token() -> str:
    return _demo_token("super_admin")


@pytest.fixture()
def tenant_admin_token(db: Session, tenant: Store) -> str:
    """Remote user whose store is resolved through the profiles table."""
    db.add(Profile(id="user-remote-1", store_id=tenant.id, name="Ana", role="admin"))
    db.commit()
    return security.create_session_token({"id": "user-remote-1", "name": "Ana", "role": "admin"})


def auth(token: str) -> dict[str, str]:
    """Return Authorization header dict."""
    return {"Authorization": f"Bearer {token}"}
