from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, field_validator


# ─── Supplier ─────────────────────────────────────────────────────────────────


class Supplier(BaseModel):
    id: UUID
    name: str
    contact: str | None = None
    phone: str | None = None
    email: str | None = None
    ruc: str | None = None


class SupplierCreate(BaseModel):
    name: str
    contact: str | None = None
    phone: str | None = None
    email: str | None = None
    ruc: str | None = None

    @field_validator("name")
    @classmethod
    def name_required(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Supplier name is required")
        return v.strip()


# ─── Purchase ─────────────────────────────────────────────────────────────────


class PurchaseItem(BaseModel):
    product_id: UUID
    quantity: int
    cost: Decimal
    variant_id: UUID | None = None


class Purchase(BaseModel):
    id: UUID
    date: datetime
    supplier_id: UUID
    total: Decimal
    items: list[PurchaseItem]


class PurchaseLineIn(BaseModel):
    """One row of the purchase form.

    Either ``price`` or ``margin`` sets the resale price; when both are given
    the price wins and the margin is derived from it. With neither, the
    product keeps its current price. Variant products need ``variant_id``.
    """

    product_id: UUID
    variant_id: UUID | None = None
    quantity: int
    cost: Decimal
    price: Decimal | None = None
    margin: Decimal | None = None

    @field_validator("quantity")
    @classmethod
    def quantity_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("Quantity must be greater than zero")
        return v

    @field_validator("cost")
    @classmethod
    def cost_non_negative(cls, v: Decimal) -> Decimal:
        if v < 0:
            raise ValueError("Unit cost must be non-negative")
        return v


class PurchaseCreate(BaseModel):
    supplier_id: UUID | None = None
    items: list[PurchaseLineIn] = []


class PriceLineRequest(BaseModel):
    """Live recalculation of one purchase row after editing ``field``."""

    field: str
    cost: Decimal
    margin: Decimal
    price: Decimal
    value: Decimal

    @field_validator("field")
    @classmethod
    def known_field(cls, v: str) -> str:
        if v not in {"cost", "margin", "price"}:
            raise ValueError("field must be one of cost, margin, price")
        return v


class PriceLineOut(BaseModel):
    cost: Decimal
    margin: Decimal
    price: Decimal


class PurchaseLineOut(BaseModel):
    product_id: UUID
    variant_id: UUID | None = None
    quantity: int
    cost: Decimal
    margin: Decimal
    price: Decimal

    class Config:
        from_attributes = True
