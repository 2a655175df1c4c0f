"""Customer-facing receipt delivery through an outbound webhook."""

from __future__ import annotations

import logging
import re
from typing import Any

import httpx

from backend.posgo.core.config import settings
from backend.posgo.schemas.organization import StoreSettings
from backend.posgo.schemas.pos import Transaction

logger = logging.getLogger(__name__)

SALE_TICKET_TYPE = "SALE_TICKET_PDF"
MIN_PHONE_DIGITS = 5


def clean_phone(raw: str, country_code: str | None = None) -> str:
    """Strip everything but digits and prefix the country code.

    Raises ``ValueError`` when fewer than five digits remain.
    """
    digits = re.sub(r"\D", "", raw or "")
    if len(digits) < MIN_PHONE_DIGITS:
        raise ValueError("Invalid phone number")
    return f"{country_code if country_code is not None else settings.DEFAULT_COUNTRY_CODE}{digits}"


def build_payload(
    phone: str,
    transaction: Transaction,
    store: StoreSettings,
    document_url: str | None = None,
) -> dict[str, Any]:
    return {
        "phone": phone,
        "type": SALE_TICKET_TYPE,
        "store": {
            "name": store.name,
            "address": store.address,
            "phone": store.phone,
            "currency": store.currency,
            "tax_rate": str(store.tax_rate),
        },
        "transaction": {
            "id": str(transaction.id),
            "date": transaction.date.isoformat(),
            "total": str(transaction.total),
            "subtotal": str(transaction.subtotal),
            "discount": str(transaction.discount),
            "items": [
                {
                    "name": item.name,
                    "quantity": item.quantity,
                    "price": str(item.price),
                    "total": str(item.price * item.quantity),
                }
                for item in transaction.items
            ],
            "payments": [
                {"method": p.method.value, "amount": str(p.amount)}
                for p in transaction.payments
            ],
        },
        "document_url": document_url,
    }


class ReceiptWebhook:
    """Fire-and-forget POST of a sale ticket. Never raises on delivery failure."""

    def __init__(
        self,
        url: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.url = url or settings.RECEIPT_WEBHOOK_URL
        self.timeout = timeout if timeout is not None else settings.RECEIPT_WEBHOOK_TIMEOUT
        self._transport = transport

    def send(
        self,
        phone: str,
        transaction: Transaction,
        store: StoreSettings,
        document_url: str | None = None,
    ) -> bool:
        """Deliver the ticket for *transaction*. Returns ``True`` on a 2xx reply."""
        if not settings.RECEIPTS_ENABLED:
            logger.info("Receipts disabled, skipping ticket %s", transaction.id)
            return False

        payload = build_payload(phone, transaction, store, document_url)
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                resp = client.post(self.url, json=payload)
                resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.error(
                "Receipt webhook rejected ticket %s (%s): %s",
                transaction.id, exc.response.status_code, exc.response.text[:200],
            )
            return False
        except httpx.HTTPError:
            logger.exception("Failed to send ticket %s to %s", transaction.id, phone)
            return False

        logger.info("Ticket %s sent to %s", transaction.id, phone)
        return True
