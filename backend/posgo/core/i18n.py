"""Receipt and report labels (en/es)."""
from __future__ import annotations

SUPPORTED_LANGUAGES = ("en", "es")
DEFAULT_LANGUAGE = "en"

TRANSLATIONS: dict[str, dict[str, str]] = {
    "en": {
        # Common
        "date": "Date",
        "total": "TOTAL",
        "subtotal": "Subtotal",
        "tax": "Tax",
        "discount": "Discount",
        "description": "Description",
        "amount": "Amount",

        # Sale receipt
        "sale_receipt": "Sale Receipt",
        "receipt_no": "Receipt",
        "qty": "Qty",
        "item": "Item",
        "unit_price": "Price",
        "payments": "Payments",
        "change": "Change",
        "thanks": "Thank you for your purchase!",
        "cash": "Cash",
        "card": "Card",
        "yape": "Yape",
        "plin": "Plin",
        "mixed": "Mixed",

        # Shift report
        "shift_report": "Shift Closing Report",
        "shift": "Shift",
        "opened": "Opened",
        "closed": "Closed",
        "opening_cash": "Opening cash",
        "cash_sales": "Cash sales",
        "digital_sales": "Digital sales",
        "cash_in": "Cash in",
        "cash_out": "Cash out",
        "expected_cash": "Expected cash",
        "counted_cash": "Counted cash",
        "discrepancy": "Discrepancy",
        "movements": "Cash Movements",
        "sales": "Sales",
        "type": "Type",
        "method": "Method",
    },
    "es": {
        # Common
        "date": "Fecha",
        "total": "TOTAL",
        "subtotal": "Subtotal",
        "tax": "IGV",
        "discount": "Descuento",
        "description": "Descripción",
        "amount": "Monto",

        # Sale receipt
        "sale_receipt": "Ticket de Venta",
        "receipt_no": "Ticket",
        "qty": "Cant.",
        "item": "Producto",
        "unit_price": "Precio",
        "payments": "Pagos",
        "change": "Vuelto",
        "thanks": "¡Gracias por su compra!",
        "cash": "Efectivo",
        "card": "Tarjeta",
        "yape": "Yape",
        "plin": "Plin",
        "mixed": "Mixto",

        # Shift report
        "shift_report": "Reporte de Cierre de Caja",
        "shift": "Turno",
        "opened": "Apertura",
        "closed": "Cierre",
        "opening_cash": "Caja inicial",
        "cash_sales": "Ventas en efectivo",
        "digital_sales": "Ventas digitales",
        "cash_in": "Ingresos",
        "cash_out": "Egresos",
        "expected_cash": "Efectivo esperado",
        "counted_cash": "Efectivo contado",
        "discrepancy": "Diferencia",
        "movements": "Movimientos de Caja",
        "sales": "Ventas",
        "type": "Tipo",
        "method": "Método",
    },
}


def t(lang: str, key: str) -> str:
    """Get translated label. Falls back to English."""
    return TRANSLATIONS.get(lang, TRANSLATIONS[DEFAULT_LANGUAGE]).get(
        key, TRANSLATIONS[DEFAULT_LANGUAGE].get(key, key)
    )
