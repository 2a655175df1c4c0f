"""Smoke tests for the PDF renderers."""
from __future__ import annotations

from decimal import Decimal

import pytest

from backend.posgo.schemas.pos import PaymentMethodEnum
from backend.posgo.schemas.shift import CashShift, MovementType
from backend.posgo.services.checkout import checkout
from backend.posgo.services.receipts import render_sale_receipt, render_shift_report
from backend.posgo.services.shifts import CashShiftLedger
from backend.posgo.storage.local import LocalDataStore
from backend.tests.conftest import GALLETA, INCA_KOLA, line


@pytest.mark.parametrize("lang", ["en", "es"])
def test_sale_receipt_is_pdf(store: LocalDataStore, open_shift: CashShift, lang: str) -> None:
    soda = store.get_product(INCA_KOLA)
    cookie = store.get_product(GALLETA)
    result = checkout(
        store,
        [line(soda, 2, discount=Decimal("0.20")), line(cookie, 1)],
        {PaymentMethodEnum.CASH: Decimal("5"), PaymentMethodEnum.YAPE: Decimal("3")},
        open_shift.id,
    )
    buf = render_sale_receipt(result.transaction, store.get_settings(), lang)
    data = buf.getvalue()
    assert data.startswith(b"%PDF")
    assert len(data) > 500


@pytest.mark.parametrize("lang", ["en", "es"])
def test_shift_report_is_pdf(store: LocalDataStore, open_shift: CashShift, lang: str) -> None:
    ledger = CashShiftLedger(store)
    soda = store.get_product(INCA_KOLA)
    checkout(store, [line(soda, 1)], {PaymentMethodEnum.CARD: Decimal("3.50")}, open_shift.id)
    ledger.record_movement(open_shift.id, MovementType.OUT, Decimal("10"), "Compra de bolsas")
    report = ledger.close_shift(open_shift.id, Decimal("90"))

    data = render_shift_report(report, store.get_settings(), lang).getvalue()
    assert data.startswith(b"%PDF")


def test_non_latin_store_name_is_rendered(store: LocalDataStore, open_shift: CashShift) -> None:
    settings = store.get_settings().model_copy(update={"name": "Bodega ★ Estrella"})
    report = CashShiftLedger(store).report(open_shift.id)
    assert render_shift_report(report, settings).getvalue().startswith(b"%PDF")
