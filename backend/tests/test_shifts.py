"""Tests for the cash shift ledger."""
from __future__ import annotations

import logging
from decimal import Decimal
from uuid import uuid4

import pytest

from backend.posgo.core.exceptions import (
    NoActiveShift,
    NotFound,
    PosError,
    ShiftAlreadyOpen,
    ShiftClosed,
)
from backend.posgo.schemas.pos import PaymentMethodEnum
from backend.posgo.schemas.shift import CashShift, MovementType, ShiftStatus
from backend.posgo.services.checkout import checkout
from backend.posgo.services.shifts import CashShiftLedger
from backend.posgo.storage.local import LocalDataStore
from backend.tests.conftest import INCA_KOLA, PAPAS, line

CASH = PaymentMethodEnum.CASH
CARD = PaymentMethodEnum.CARD


class TestOpenShift:
    def test_open_records_opening_movement(self, store: LocalDataStore) -> None:
        shift = CashShiftLedger(store).open_shift(Decimal("80.00"))
        assert shift.status == ShiftStatus.OPEN
        assert shift.total_sales_cash == Decimal("0")
        [movement] = store.shift_movements(shift.id)
        assert movement.type == MovementType.OPEN
        assert movement.amount == Decimal("80.00")

    def test_second_open_is_rejected(self, store: LocalDataStore, open_shift: CashShift) -> None:
        """Only one shift may be open per store, even without the pointer."""
        ledger = CashShiftLedger(store)
        with pytest.raises(ShiftAlreadyOpen):
            ledger.open_shift(Decimal("10"), open_shift.id)
        with pytest.raises(ShiftAlreadyOpen):
            ledger.open_shift(Decimal("10"))
        assert len(store.open_shifts()) == 1

    def test_reopen_after_close(self, store: LocalDataStore, open_shift: CashShift) -> None:
        ledger = CashShiftLedger(store)
        ledger.close_shift(open_shift.id, Decimal("100"))
        second = ledger.open_shift(Decimal("20"), open_shift.id)
        assert second.id != open_shift.id
        assert [s.id for s in store.open_shifts()] == [second.id]

    def test_dangling_pointer_does_not_block_open(
        self, store: LocalDataStore, caplog: pytest.LogCaptureFixture
    ) -> None:
        store.set_active_shift_id(uuid4())
        with caplog.at_level(logging.WARNING):
            shift = CashShiftLedger(store).open_shift(Decimal("0"), store.get_active_shift_id())
        assert shift.status == ShiftStatus.OPEN
        assert [s.id for s in store.open_shifts()] == [shift.id]
        assert "names no shift" in caplog.text

    def test_negative_opening_cash(self, store: LocalDataStore) -> None:
        with pytest.raises(PosError):
            CashShiftLedger(store).open_shift(Decimal("-1"))


class TestMovements:
    def test_in_and_out(self, store: LocalDataStore, open_shift: CashShift) -> None:
        ledger = CashShiftLedger(store)
        ledger.record_movement(open_shift.id, MovementType.IN, Decimal("20"), "Sencillo")
        ledger.record_movement(open_shift.id, MovementType.OUT, Decimal("15"), "Proveedor")
        types = [m.type for m in store.shift_movements(open_shift.id)]
        assert types == [MovementType.OPEN, MovementType.IN, MovementType.OUT]

    def test_requires_pointer(self, store: LocalDataStore) -> None:
        with pytest.raises(NoActiveShift):
            CashShiftLedger(store).record_movement(None, MovementType.IN, Decimal("5"))

    def test_rejects_open_type_and_zero(self, store: LocalDataStore, open_shift: CashShift) -> None:
        ledger = CashShiftLedger(store)
        with pytest.raises(PosError):
            ledger.record_movement(open_shift.id, MovementType.OPEN, Decimal("5"))
        with pytest.raises(PosError):
            ledger.record_movement(open_shift.id, MovementType.OUT, Decimal("0"))

    def test_closed_shift_rejects_movements(
        self, store: LocalDataStore, open_shift: CashShift
    ) -> None:
        ledger = CashShiftLedger(store)
        ledger.close_shift(open_shift.id, Decimal("100"))
        with pytest.raises(ShiftClosed):
            ledger.record_movement(open_shift.id, MovementType.IN, Decimal("5"))

    def test_unknown_shift(self, store: LocalDataStore) -> None:
        with pytest.raises(NotFound):
            CashShiftLedger(store).record_movement(uuid4(), MovementType.IN, Decimal("5"))


class TestCloseShift:
    def test_report_expected_and_discrepancy(
        self, store: LocalDataStore, open_shift: CashShift
    ) -> None:
        """100 start + 7 cash sales + 20 in - 15 out = 112 expected; 110 counted."""
        ledger = CashShiftLedger(store)
        soda = store.get_product(INCA_KOLA)
        chips = store.get_product(PAPAS)
        checkout(store, [line(soda, 2)], {CASH: Decimal("10")}, open_shift.id)
        checkout(store, [line(chips, 2)], {CARD: Decimal("5")}, open_shift.id)
        ledger.record_movement(open_shift.id, MovementType.IN, Decimal("20"))
        ledger.record_movement(open_shift.id, MovementType.OUT, Decimal("15"))

        report = ledger.close_shift(open_shift.id, Decimal("110"))

        assert report.shift.status == ShiftStatus.CLOSED
        assert report.shift.end_amount == Decimal("110")
        assert report.shift.end_time is not None
        assert report.cash_in == Decimal("20")
        assert report.cash_out == Decimal("15")
        assert report.expected_cash == Decimal("112.00")
        assert report.discrepancy == Decimal("-2.00")
        assert len(report.transactions) == 2
        assert report.movements[-1].type == MovementType.CLOSE

    def test_double_close(self, store: LocalDataStore, open_shift: CashShift) -> None:
        ledger = CashShiftLedger(store)
        ledger.close_shift(open_shift.id, Decimal("100"))
        with pytest.raises(ShiftClosed):
            ledger.close_shift(open_shift.id, Decimal("100"))

    def test_open_shift_report_has_no_discrepancy(
        self, store: LocalDataStore, open_shift: CashShift
    ) -> None:
        report = CashShiftLedger(store).report(open_shift.id)
        assert report.expected_cash == Decimal("100.00")
        assert report.discrepancy is None

    def test_attribution_to_closed_shift(
        self, store: LocalDataStore, open_shift: CashShift
    ) -> None:
        ledger = CashShiftLedger(store)
        soda = store.get_product(INCA_KOLA)
        result = checkout(store, [line(soda, 1)], {CASH: Decimal("5")}, open_shift.id)
        ledger.close_shift(open_shift.id, Decimal("103.50"))
        with pytest.raises(ShiftClosed):
            ledger.attribute_sale(open_shift.id, result.transaction)


class TestReconcile:
    def test_drift_is_reported_and_repaired(
        self,
        store: LocalDataStore,
        open_shift: CashShift,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        ledger = CashShiftLedger(store)
        soda = store.get_product(INCA_KOLA)
        checkout(store, [line(soda, 2)], {CASH: Decimal("7")}, open_shift.id)
        drifted = store.get_shift(open_shift.id).model_copy(update={"total_sales_cash": Decimal("1")})
        store.update_shift(drifted.id, drifted)

        with caplog.at_level(logging.WARNING, logger="backend.posgo.services.shifts"):
            result = ledger.reconcile(open_shift.id)
        assert result.consistent is False
        assert result.stored_cash == Decimal("1")
        assert result.computed_cash == Decimal("7.00")
        assert "drifted" in caplog.text
        assert store.get_shift(open_shift.id).total_sales_cash == Decimal("1")

        ledger.reconcile(open_shift.id, repair=True)
        assert store.get_shift(open_shift.id).total_sales_cash == Decimal("7.00")
        assert ledger.reconcile(open_shift.id).consistent is True

    def test_sales_total_is_live_sum(self, store: LocalDataStore, open_shift: CashShift) -> None:
        ledger = CashShiftLedger(store)
        assert ledger.shift_sales_total(open_shift.id) == Decimal("0")
        soda = store.get_product(INCA_KOLA)
        checkout(store, [line(soda, 3)], {CARD: Decimal("10.50")}, open_shift.id)
        assert ledger.shift_sales_total(open_shift.id) == Decimal("10.50")
