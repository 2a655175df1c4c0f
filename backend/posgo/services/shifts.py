"""Cash shift ledger.

A shift moves OPEN -> CLOSED and never back. Every drawer event, including
the shift's own open and close, is appended as a ``CashMovement``. The
ledger does not own the active-shift pointer: callers resolve
``current_shift_id`` from the store and pass it in, then update the pointer
from the returned shift.

Running sales totals are split into a cash bucket and a digital bucket (every
non-cash method). ``reconcile`` recomputes both from the transaction log.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from decimal import Decimal
from uuid import UUID, uuid4

from backend.posgo.core.exceptions import (
    NoActiveShift,
    NotFound,
    PosError,
    ShiftAlreadyOpen,
    ShiftClosed,
)
from backend.posgo.schemas.pos import PaymentMethodEnum, Transaction
from backend.posgo.schemas.shift import (
    CashMovement,
    CashShift,
    MovementType,
    ShiftReconciliation,
    ShiftReport,
    ShiftStatus,
)
from backend.posgo.services.pricing import ZERO, quantize
from backend.posgo.storage.base import DataStore

logger = logging.getLogger(__name__)


def split_payments(transaction: Transaction) -> tuple[Decimal, Decimal]:
    """Return ``(cash, digital)`` amounts of a transaction's payment breakdown."""
    cash = sum(
        (p.amount for p in transaction.payments if p.method == PaymentMethodEnum.CASH), ZERO
    )
    digital = sum(
        (p.amount for p in transaction.payments if p.method != PaymentMethodEnum.CASH), ZERO
    )
    return cash, digital


class CashShiftLedger:
    def __init__(self, store: DataStore) -> None:
        self.store = store

    # ── Guards ──────────────────────────────────────────────────────────────

    def require_open(self, current_shift_id: UUID | None) -> CashShift:
        """Return the open shift named by *current_shift_id*.

        Raises ``NoActiveShift`` without a pointer and ``ShiftClosed`` when
        the pointer still names a shift that has been closed.
        """
        if current_shift_id is None:
            raise NoActiveShift()
        shift = self.store.get_shift(current_shift_id)
        if shift.status == ShiftStatus.CLOSED:
            raise ShiftClosed(shift.id)
        return shift

    def _movement(
        self, shift_id: UUID, movement_type: MovementType, amount: Decimal, description: str
    ) -> CashMovement:
        movement = CashMovement(
            id=uuid4(),
            shift_id=shift_id,
            type=movement_type,
            amount=amount,
            description=description,
            timestamp=datetime.now(timezone.utc),
        )
        self.store.append_movement(movement)
        return movement

    # ── Transitions ─────────────────────────────────────────────────────────

    def open_shift(
        self, start_amount: Decimal, current_shift_id: UUID | None = None
    ) -> CashShift:
        """Open a new shift. At most one shift per store may be OPEN."""
        if start_amount < 0:
            raise PosError("Opening cash must be non-negative")
        if current_shift_id is not None:
            try:
                current = self.store.get_shift(current_shift_id)
            except NotFound:
                # Dangling pointer: the store keeps no shift with that id
                logger.warning("Active shift pointer %s names no shift; ignoring it", current_shift_id)
            else:
                if current.status == ShiftStatus.OPEN:
                    raise ShiftAlreadyOpen(current.id)
        already_open = self.store.open_shifts()
        if already_open:
            raise ShiftAlreadyOpen(already_open[0].id)

        shift = CashShift(
            id=uuid4(),
            start_time=datetime.now(timezone.utc),
            start_amount=start_amount,
            status=ShiftStatus.OPEN,
        )
        self.store.create_shift(shift)
        self._movement(shift.id, MovementType.OPEN, start_amount, "Apertura de caja")
        logger.info("Shift %s opened with %s", shift.id, start_amount)
        return shift

    def record_movement(
        self,
        current_shift_id: UUID | None,
        movement_type: MovementType,
        amount: Decimal,
        description: str = "",
    ) -> CashMovement:
        """Record cash put into (IN) or taken out of (OUT) the drawer."""
        if movement_type not in (MovementType.IN, MovementType.OUT):
            raise PosError("Only IN and OUT movements can be recorded directly")
        if amount <= 0:
            raise PosError("Amount must be greater than zero")
        shift = self.require_open(current_shift_id)
        movement = self._movement(shift.id, movement_type, amount, description)
        logger.info("Shift %s: cash %s %s (%s)", shift.id, movement_type.value, amount, description)
        return movement

    def close_shift(self, current_shift_id: UUID | None, end_amount: Decimal) -> ShiftReport:
        """Close the open shift and return its closing report."""
        if end_amount < 0:
            raise PosError("Closing cash must be non-negative")
        shift = self.require_open(current_shift_id)
        closed = shift.model_copy(update={
            "status": ShiftStatus.CLOSED,
            "end_time": datetime.now(timezone.utc),
            "end_amount": end_amount,
        })
        self.store.update_shift(closed.id, closed)
        self._movement(closed.id, MovementType.CLOSE, end_amount, "Cierre de caja")

        report = self.report(closed.id)
        logger.info(
            "Shift %s closed: counted=%s expected=%s discrepancy=%s",
            closed.id, end_amount, report.expected_cash, report.discrepancy,
        )
        return report

    # ── Sales attribution ───────────────────────────────────────────────────

    def attribute_sale(self, shift_id: UUID, transaction: Transaction) -> CashShift:
        """Add a sale's payment breakdown to the shift's running totals."""
        shift = self.store.get_shift(shift_id)
        if shift.status == ShiftStatus.CLOSED:
            raise ShiftClosed(shift.id)
        cash, digital = split_payments(transaction)
        updated = shift.model_copy(update={
            "total_sales_cash": quantize(shift.total_sales_cash + cash),
            "total_sales_digital": quantize(shift.total_sales_digital + digital),
        })
        self.store.update_shift(updated.id, updated)
        return updated

    # ── Reporting ───────────────────────────────────────────────────────────

    def shift_sales_total(self, shift_id: UUID) -> Decimal:
        """Live sum of transaction totals attributed to the shift."""
        return quantize(sum((t.total for t in self.store.shift_transactions(shift_id)), ZERO))

    def report(self, shift_id: UUID) -> ShiftReport:
        shift = self.store.get_shift(shift_id)
        movements = self.store.shift_movements(shift_id)
        transactions = self.store.shift_transactions(shift_id)

        cash_in = sum((m.amount for m in movements if m.type == MovementType.IN), ZERO)
        cash_out = sum((m.amount for m in movements if m.type == MovementType.OUT), ZERO)
        expected = quantize(shift.start_amount + shift.total_sales_cash + cash_in - cash_out)
        discrepancy = (
            quantize(shift.end_amount - expected) if shift.end_amount is not None else None
        )
        return ShiftReport(
            shift=shift,
            movements=movements,
            transactions=transactions,
            cash_in=quantize(cash_in),
            cash_out=quantize(cash_out),
            expected_cash=expected,
            discrepancy=discrepancy,
        )

    def reconcile(self, shift_id: UUID, *, repair: bool = False) -> ShiftReconciliation:
        """Compare the stored running totals against the transaction log.

        With ``repair=True`` an inconsistent shift has its totals overwritten
        by the recomputed values, closed shifts included.
        """
        shift = self.store.get_shift(shift_id)
        cash = digital = ZERO
        for tx in self.store.shift_transactions(shift_id):
            tx_cash, tx_digital = split_payments(tx)
            cash += tx_cash
            digital += tx_digital
        cash, digital = quantize(cash), quantize(digital)

        consistent = cash == shift.total_sales_cash and digital == shift.total_sales_digital
        if not consistent:
            logger.warning(
                "Shift %s totals drifted: stored cash=%s digital=%s, computed cash=%s digital=%s",
                shift.id, shift.total_sales_cash, shift.total_sales_digital, cash, digital,
            )
            if repair:
                self.store.update_shift(shift.id, shift.model_copy(update={
                    "total_sales_cash": cash,
                    "total_sales_digital": digital,
                }))

        return ShiftReconciliation(
            shift_id=shift.id,
            stored_cash=shift.total_sales_cash,
            stored_digital=shift.total_sales_digital,
            computed_cash=cash,
            computed_digital=digital,
            consistent=consistent,
        )
