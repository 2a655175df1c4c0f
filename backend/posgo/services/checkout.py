from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from uuid import UUID, uuid4

from backend.posgo.core.exceptions import (
    EmptyCart,
    InvalidSale,
    NoActiveShift,
    NotFound,
    PersistenceFailure,
)
from backend.posgo.schemas.catalog import Product
from backend.posgo.schemas.pos import CartItem, CartTotals, Tenders, Transaction
from backend.posgo.schemas.shift import CashShift, ShiftStatus
from backend.posgo.services.inventory import apply_sale, touched_products
from backend.posgo.services.payments import settle_payment
from backend.posgo.services.pricing import calculate_totals
from backend.posgo.services.shifts import CashShiftLedger
from backend.posgo.storage.base import DataStore

logger = logging.getLogger(__name__)


@dataclass
class CheckoutResult:
    transaction: Transaction
    totals: CartTotals
    change: Decimal
    products: list[Product]
    shift: CashShift


def _active_shift(store: DataStore, current_shift_id: UUID | None) -> CashShift:
    if current_shift_id is None:
        raise NoActiveShift()
    try:
        shift = store.get_shift(current_shift_id)
    except NotFound:
        raise NoActiveShift() from None
    if shift.status != ShiftStatus.OPEN:
        raise NoActiveShift()
    return shift


def checkout(
    store: DataStore,
    cart: list[CartItem],
    tenders: Tenders,
    current_shift_id: UUID | None,
) -> CheckoutResult:
    """Complete a sale against the open shift.

    Every validation (open shift, non-empty cart, known products and
    variants, covered total) runs before the first write. The writes then
    happen in order: transaction, touched products, shift totals. A failing
    write raises ``PersistenceFailure`` and earlier writes are left as they are.
    """
    shift = _active_shift(store, current_shift_id)
    if not cart:
        raise EmptyCart()

    totals = calculate_totals(cart, store.get_settings())
    settlement = settle_payment(totals.final_total, tenders)

    products = store.list_products()
    by_id = {p.id: p for p in products}
    for item in cart:
        product = by_id.get(item.product_id)
        if product is None:
            raise NotFound("Product", item.product_id)
        if item.selected_variant_id is not None:
            if product.find_variant(item.selected_variant_id) is None:
                raise NotFound("Variant", item.selected_variant_id)
        elif product.has_variants:
            raise InvalidSale(f"Choose a variant of {product.name}")

    transaction = Transaction(
        id=uuid4(),
        date=datetime.now(timezone.utc),
        items=cart,
        subtotal=totals.subtotal,
        tax=totals.tax,
        discount=totals.discount,
        total=totals.final_total,
        payments=settlement.payments,
        payment_method=settlement.payment_method,
        shift_id=shift.id,
    )
    updated = apply_sale(products, transaction.items)
    touched = touched_products(updated, {i.product_id for i in cart})

    try:
        store.append_transaction(transaction)
        store.update_products(touched)
        shift = CashShiftLedger(store).attribute_sale(shift.id, transaction)
    except PersistenceFailure:
        logger.error("Checkout %s only partially persisted; reload from the store", transaction.id)
        raise

    logger.info(
        "Sale %s completed on shift %s: total=%s method=%s change=%s",
        transaction.id, shift.id, transaction.total, transaction.payment_method, settlement.change,
    )
    return CheckoutResult(
        transaction=transaction,
        totals=totals,
        change=settlement.change,
        products=updated,
        shift=shift,
    )
