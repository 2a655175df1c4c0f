from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, field_validator


# ─── Payment Method ──────────────────────────────────────────────────────────


class PaymentMethodEnum(str, Enum):
    CASH = "cash"
    CARD = "card"
    YAPE = "yape"
    PLIN = "plin"


MIXED_PAYMENT_METHOD = "mixed"


class PaymentDetail(BaseModel):
    method: PaymentMethodEnum
    amount: Decimal

    @field_validator("amount")
    @classmethod
    def amount_positive(cls, v: Decimal) -> Decimal:
        if v <= 0:
            raise ValueError("Payment amount must be greater than zero")
        return v


# ─── Cart ─────────────────────────────────────────────────────────────────────


class CartItem(BaseModel):
    """A product snapshot plus the quantity being sold.

    ``price`` is the unit price at the time the item entered the cart (the
    variant price when a variant is selected). ``discount`` is an absolute
    per-unit amount; negative values are clamped to zero.
    """

    product_id: UUID
    name: str
    price: Decimal
    category: str = "General"
    barcode: str | None = None
    quantity: int = 1
    selected_variant_id: UUID | None = None
    selected_variant_name: str | None = None
    discount: Decimal = Decimal("0")

    @field_validator("quantity")
    @classmethod
    def quantity_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Quantity must be at least 1")
        return v

    @field_validator("discount")
    @classmethod
    def discount_clamped(cls, v: Decimal) -> Decimal:
        return max(Decimal("0"), v)


class CartTotals(BaseModel):
    subtotal: Decimal
    tax: Decimal
    discount: Decimal
    total: Decimal
    final_total: Decimal


# ─── Tenders ──────────────────────────────────────────────────────────────────


Tenders = dict[PaymentMethodEnum, Decimal | str | None]


class TenderSummary(BaseModel):
    total: Decimal
    total_paid: Decimal
    remaining: Decimal
    change: Decimal


class PaymentSettlement(BaseModel):
    payments: list[PaymentDetail]
    payment_method: str
    total_paid: Decimal
    change: Decimal


# ─── Transaction ──────────────────────────────────────────────────────────────


class Transaction(BaseModel):
    id: UUID
    date: datetime
    items: list[CartItem]
    subtotal: Decimal
    tax: Decimal
    discount: Decimal
    total: Decimal
    payments: list[PaymentDetail]
    payment_method: str
    shift_id: UUID


# ─── Requests ─────────────────────────────────────────────────────────────────


class QuoteRequest(BaseModel):
    items: list[CartItem]


class TenderRequest(BaseModel):
    items: list[CartItem]
    tenders: Tenders = {}


class FillRemainingRequest(TenderRequest):
    method: PaymentMethodEnum


class CheckoutRequest(BaseModel):
    items: list[CartItem]
    tenders: Tenders


class CartLineRequest(BaseModel):
    items: list[CartItem] = []
    product_id: UUID
    variant_id: UUID | None = None


class CartQuantityRequest(CartLineRequest):
    delta: int


class CartDiscountRequest(CartLineRequest):
    discount: Decimal


class CartScanRequest(BaseModel):
    items: list[CartItem] = []
    barcode: str


class CheckoutOut(BaseModel):
    transaction: Transaction
    change: Decimal
