"""Split-payment validation.

Tenders arrive as a mapping of payment method to the amount typed in by the
cashier (possibly blank). Checkout is accepted once the tendered sum covers
the total within ``PAYMENT_EPSILON``. The cash tender absorbs the change so
the recorded cash reflects what stays in the drawer.
"""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation

from backend.posgo.core.exceptions import InsufficientPayment
from backend.posgo.schemas.pos import (
    MIXED_PAYMENT_METHOD,
    PaymentDetail,
    PaymentMethodEnum,
    PaymentSettlement,
    TenderSummary,
    Tenders,
)
from backend.posgo.services.pricing import ZERO, quantize

logger = logging.getLogger(__name__)

PAYMENT_EPSILON = Decimal("0.01")


def _to_amount(raw: object) -> Decimal:
    """Parse a tendered amount; blank, malformed or non-finite input counts as zero."""
    if raw is None or isinstance(raw, bool):
        return ZERO
    try:
        value = Decimal(str(raw).strip() or "0")
    except InvalidOperation:
        return ZERO
    if not value.is_finite():
        return ZERO
    return value


def summarize_tenders(total: Decimal, tenders: Tenders) -> TenderSummary:
    total_paid = sum((_to_amount(v) for v in tenders.values()), ZERO)
    return TenderSummary(
        total=total,
        total_paid=quantize(total_paid),
        remaining=quantize(max(ZERO, total - total_paid)),
        change=quantize(max(ZERO, total_paid - total)),
    )


def fill_remaining(total: Decimal, tenders: Tenders, method: PaymentMethodEnum) -> Tenders:
    """Return a copy of *tenders* with the outstanding amount added to *method*."""
    summary = summarize_tenders(total, tenders)
    updated: Tenders = dict(tenders)
    current = _to_amount(tenders.get(method))
    updated[method] = (current + summary.remaining).quantize(Decimal("0.01"))
    return updated


def settle_payment(total: Decimal, tenders: Tenders) -> PaymentSettlement:
    """Confirm *tenders* cover *total* and normalize them into recorded payments.

    Raises ``InsufficientPayment`` while more than ``PAYMENT_EPSILON`` is
    still owed. Non-positive amounts are dropped after the cash tender has
    been reduced by the change handed back.
    """
    summary = summarize_tenders(total, tenders)
    if summary.remaining > PAYMENT_EPSILON:
        raise InsufficientPayment(summary.remaining)

    payments: list[PaymentDetail] = []
    for method in PaymentMethodEnum:
        amount = _to_amount(tenders.get(method))
        if amount <= ZERO:
            continue
        if method == PaymentMethodEnum.CASH and summary.change > ZERO:
            amount -= summary.change
        amount = quantize(amount)
        if amount > ZERO:
            payments.append(PaymentDetail(method=method, amount=amount))

    if len(payments) == 1:
        payment_method = payments[0].method.value
    else:
        payment_method = MIXED_PAYMENT_METHOD

    if summary.change > ZERO and not any(p.method == PaymentMethodEnum.CASH for p in payments):
        logger.warning(
            "Change of %s returned on a sale with no cash retained (tendered %s for %s)",
            summary.change, summary.total_paid, total,
        )

    return PaymentSettlement(
        payments=payments,
        payment_method=payment_method,
        total_paid=summary.total_paid,
        change=summary.change,
    )
