from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel

from backend.posgo.schemas.catalog import Product
from backend.posgo.schemas.customer import Customer
from backend.posgo.schemas.organization import StoreSettings
from backend.posgo.schemas.pos import Transaction
from backend.posgo.schemas.shift import CashMovement, CashShift
from backend.posgo.schemas.supplier import Purchase, Supplier


class BootstrapOut(BaseModel):
    """Everything the register screen needs on first load."""

    products: list[Product]
    transactions: list[Transaction]
    purchases: list[Purchase]
    settings: StoreSettings
    customers: list[Customer]
    suppliers: list[Supplier]
    shifts: list[CashShift]
    movements: list[CashMovement]
    active_shift_id: UUID | None = None
