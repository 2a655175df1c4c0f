"""Printable sale receipts and shift closing reports using fpdf2."""
from __future__ import annotations

import io
from decimal import Decimal

from fpdf import FPDF

from backend.posgo.core.i18n import t
from backend.posgo.schemas.organization import StoreSettings
from backend.posgo.schemas.pos import Transaction
from backend.posgo.schemas.shift import ShiftReport


# ── Shared helpers ──────────────────────────────────────────────────────────

_COL_BG = (15, 23, 42)     # slate header
_SEC_BG = (226, 232, 240)  # light slate section
_LINE_H = 6

_TICKET_WIDTH = 80  # mm, thermal roll
_TICKET_MARGIN = 4


def _safe_text(text: str) -> str:
    """Replace non-latin-1 characters for PDF built-in fonts."""
    return text.encode("latin-1", errors="replace").decode("latin-1")


def _money(settings: StoreSettings, value: Decimal) -> str:
    return f"{settings.currency} {value:,.2f}"


def _store_header(pdf: FPDF, settings: StoreSettings, width: float) -> None:
    pdf.set_font("Helvetica", "B", 12)
    pdf.cell(width, 7, _safe_text(settings.name), align="C", ln=True)
    pdf.set_font("Helvetica", "", 8)
    pdf.cell(width, 4, _safe_text(settings.address), align="C", ln=True)
    pdf.cell(width, 4, _safe_text(settings.phone), align="C", ln=True)
    pdf.ln(2)


def _rule(pdf: FPDF) -> None:
    y = pdf.get_y()
    pdf.set_draw_color(120, 120, 120)
    pdf.line(pdf.l_margin, y, pdf.w - pdf.r_margin, y)
    pdf.ln(2)


def _pair(pdf: FPDF, label: str, value: str, width: float, bold: bool = False) -> None:
    pdf.set_font("Helvetica", "B" if bold else "", 9 if bold else 8)
    pdf.cell(width * 0.55, 5, _safe_text(label))
    pdf.cell(width * 0.45, 5, _safe_text(value), align="R", ln=True)


def _header_row(pdf: FPDF, headers: list[str], widths: list[float]) -> None:
    """Draw a colored header row."""
    pdf.set_fill_color(*_COL_BG)
    pdf.set_text_color(255, 255, 255)
    pdf.set_font("Helvetica", "B", 9)
    for i, (h, w) in enumerate(zip(headers, widths)):
        pdf.cell(w, _LINE_H, _safe_text(h), border=1, fill=True, align="R" if i > 0 else "L")
    pdf.ln()
    pdf.set_text_color(0, 0, 0)


def _data_row(pdf: FPDF, values: list[str], widths: list[float]) -> None:
    pdf.set_font("Helvetica", "", 8)
    for i, (v, w) in enumerate(zip(values, widths)):
        pdf.cell(w, _LINE_H, _safe_text(v), border="B", align="R" if i > 0 else "L")
    pdf.ln()


def _section_header(pdf: FPDF, text: str, width: float) -> None:
    pdf.set_fill_color(*_SEC_BG)
    pdf.set_font("Helvetica", "B", 9)
    pdf.cell(width, _LINE_H, _safe_text(text), fill=True, ln=True)


def _to_bytes(pdf: FPDF) -> io.BytesIO:
    """Output PDF to BytesIO."""
    buf = io.BytesIO()
    pdf.output(buf)
    buf.seek(0)
    return buf


# ── Sale receipt ────────────────────────────────────────────────────────────


def render_sale_receipt(
    transaction: Transaction, settings: StoreSettings, lang: str = "en"
) -> io.BytesIO:
    pdf = FPDF(unit="mm", format=(_TICKET_WIDTH, 297))
    pdf.set_margins(_TICKET_MARGIN, _TICKET_MARGIN, _TICKET_MARGIN)
    pdf.set_auto_page_break(auto=True, margin=_TICKET_MARGIN)
    pdf.add_page()
    width = _TICKET_WIDTH - 2 * _TICKET_MARGIN

    _store_header(pdf, settings, width)
    pdf.set_font("Helvetica", "", 8)
    pdf.cell(width, 4, f"{t(lang, 'receipt_no')}: #{str(transaction.id)[-8:].upper()}", ln=True)
    pdf.cell(width, 4, f"{t(lang, 'date')}: {transaction.date:%Y-%m-%d %H:%M}", ln=True)
    _rule(pdf)

    for item in transaction.items:
        name = item.name
        if item.selected_variant_name:
            name = f"{name} ({item.selected_variant_name})"
        pdf.set_font("Helvetica", "", 8)
        pdf.multi_cell(width, 4, _safe_text(name), new_x="LMARGIN", new_y="NEXT")
        _pair(
            pdf,
            f"  {item.quantity} x {item.price:,.2f}",
            _money(settings, item.price * item.quantity),
            width,
        )
        if item.discount > 0:
            _pair(pdf, f"  {t(lang, 'discount')}", f"-{_money(settings, item.discount * item.quantity)}", width)
    _rule(pdf)

    _pair(pdf, t(lang, "subtotal"), _money(settings, transaction.subtotal), width)
    if transaction.discount > 0:
        _pair(pdf, t(lang, "discount"), f"-{_money(settings, transaction.discount)}", width)
    tax_label = f"{t(lang, 'tax')} ({settings.tax_rate * 100:.0f}%)"
    _pair(pdf, tax_label, _money(settings, transaction.tax), width)
    _pair(pdf, t(lang, "total"), _money(settings, transaction.total), width, bold=True)
    _rule(pdf)

    for payment in transaction.payments:
        _pair(pdf, t(lang, payment.method.value), _money(settings, payment.amount), width)

    pdf.ln(3)
    pdf.set_font("Helvetica", "I", 8)
    pdf.cell(width, 5, _safe_text(t(lang, "thanks")), align="C", ln=True)
    return _to_bytes(pdf)


# ── Shift closing report ────────────────────────────────────────────────────


def render_shift_report(
    report: ShiftReport, settings: StoreSettings, lang: str = "en"
) -> io.BytesIO:
    shift = report.shift
    pdf = FPDF()
    pdf.add_page()
    pdf.set_auto_page_break(auto=True, margin=15)
    width = pdf.w - pdf.l_margin - pdf.r_margin

    _store_header(pdf, settings, width)
    pdf.set_font("Helvetica", "B", 16)
    pdf.cell(width, 10, _safe_text(t(lang, "shift_report")), ln=True)
    pdf.set_font("Helvetica", "", 9)
    closed = f"{shift.end_time:%Y-%m-%d %H:%M}" if shift.end_time else "-"
    pdf.cell(
        width, 6,
        f"{t(lang, 'shift')} #{str(shift.id)[-4:]}  |  "
        f"{t(lang, 'opened')}: {shift.start_time:%Y-%m-%d %H:%M}  |  {t(lang, 'closed')}: {closed}",
        ln=True,
    )
    pdf.ln(4)

    w1, w2 = 120, width - 120
    _section_header(pdf, t(lang, "shift_report"), width)
    rows = [
        (t(lang, "opening_cash"), shift.start_amount),
        (t(lang, "cash_sales"), shift.total_sales_cash),
        (t(lang, "digital_sales"), shift.total_sales_digital),
        (t(lang, "cash_in"), report.cash_in),
        (t(lang, "cash_out"), report.cash_out),
        (t(lang, "expected_cash"), report.expected_cash),
    ]
    if shift.end_amount is not None:
        rows.append((t(lang, "counted_cash"), shift.end_amount))
    if report.discrepancy is not None:
        rows.append((t(lang, "discrepancy"), report.discrepancy))
    for label, value in rows:
        _data_row(pdf, [label, _money(settings, value)], [w1, w2])
    pdf.ln(4)

    widths = [50, 30, width - 130, 50]
    _section_header(pdf, t(lang, "movements"), width)
    _header_row(pdf, [t(lang, "date"), t(lang, "type"), t(lang, "description"), t(lang, "amount")], widths)
    for m in report.movements:
        _data_row(
            pdf,
            [f"{m.timestamp:%Y-%m-%d %H:%M}", m.type.value, m.description or "", _money(settings, m.amount)],
            widths,
        )
    pdf.ln(4)

    _section_header(pdf, t(lang, "sales"), width)
    _header_row(pdf, [t(lang, "date"), t(lang, "method"), t(lang, "receipt_no"), t(lang, "total")], widths)
    for tx in report.transactions:
        _data_row(
            pdf,
            [
                f"{tx.date:%Y-%m-%d %H:%M}",
                t(lang, tx.payment_method),
                f"#{str(tx.id)[-8:].upper()}",
                _money(settings, tx.total),
            ],
            widths,
        )
    return _to_bytes(pdf)
