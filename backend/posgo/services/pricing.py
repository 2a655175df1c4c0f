"""Cart pricing: subtotal, per-unit discounts and tax.

    total       = max(0, subtotal - discount)
    tax         = total - total / (1 + rate)    when prices include tax
                = total * rate                  otherwise
    final_total = total                         when prices include tax
                = total + tax                   otherwise
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal

from backend.posgo.schemas.organization import StoreSettings
from backend.posgo.schemas.pos import CartItem, CartTotals

Q = Decimal("0.0001")
ZERO = Decimal("0")


def quantize(value: Decimal) -> Decimal:
    return value.quantize(Q, rounding=ROUND_HALF_UP)


def line_total(item: CartItem) -> Decimal:
    return item.price * item.quantity


def line_discount(item: CartItem) -> Decimal:
    return max(ZERO, item.discount) * item.quantity


def calculate_totals(items: Iterable[CartItem], settings: StoreSettings) -> CartTotals:
    """Price a cart under the store's tax configuration. Pure and deterministic."""
    items = list(items)
    subtotal = sum((line_total(i) for i in items), ZERO)
    discount = sum((line_discount(i) for i in items), ZERO)
    total = max(ZERO, subtotal - discount)

    rate = settings.tax_rate
    total = quantize(total)
    if settings.prices_include_tax:
        tax = quantize(total - total / (1 + rate))
        final_total = total
    else:
        tax = quantize(total * rate)
        final_total = total + tax

    return CartTotals(
        subtotal=quantize(subtotal),
        tax=tax,
        discount=quantize(discount),
        total=total,
        final_total=final_total,
    )
