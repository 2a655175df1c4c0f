"""Unit tests for ReceiptWebhook with httpx mock transport."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from decimal import Decimal
from uuid import uuid4

import httpx
import pytest

from backend.posgo.core.config import settings
from backend.posgo.schemas.organization import StoreSettings
from backend.posgo.schemas.pos import CartItem, PaymentDetail, PaymentMethodEnum, Transaction
from backend.posgo.services.messaging import SALE_TICKET_TYPE, ReceiptWebhook, build_payload, clean_phone

WEBHOOK_URL = "https://hooks.example.com/ticket"


# ─── Helpers ────────────────────────────────────────────────────────────────


def _transaction() -> Transaction:
    return Transaction(
        id=uuid4(),
        date=datetime(2024, 5, 1, 14, 30, tzinfo=timezone.utc),
        items=[CartItem(product_id=uuid4(), name="Inca Kola 600ml", price=Decimal("3.50"), quantity=2)],
        subtotal=Decimal("7.00"),
        tax=Decimal("1.0678"),
        discount=Decimal("0"),
        total=Decimal("7.00"),
        payments=[PaymentDetail(method=PaymentMethodEnum.CASH, amount=Decimal("7.00"))],
        payment_method="cash",
        shift_id=uuid4(),
    )


def _webhook(handler) -> ReceiptWebhook:  # type: ignore[no-untyped-def]
    return ReceiptWebhook(url=WEBHOOK_URL, timeout=1.0, transport=httpx.MockTransport(handler))


# ─── Tests ──────────────────────────────────────────────────────────────────


class TestCleanPhone:
    def test_strips_formatting_and_prefixes_default_code(self) -> None:
        assert clean_phone("987-654 321") == f"{settings.DEFAULT_COUNTRY_CODE}987654321"

    def test_explicit_country_code(self) -> None:
        assert clean_phone("(1) 555 0100", "1") == "115550100"

    def test_too_short(self) -> None:
        with pytest.raises(ValueError):
            clean_phone("12-3")


class TestPayload:
    def test_shape(self) -> None:
        tx = _transaction()
        payload = build_payload("51987654321", tx, StoreSettings(name="Bodega Rosa"), "https://x/t.pdf")
        assert payload["type"] == SALE_TICKET_TYPE
        assert payload["store"]["name"] == "Bodega Rosa"
        assert payload["transaction"]["id"] == str(tx.id)
        assert payload["transaction"]["items"][0]["total"] == "7.00"
        assert payload["transaction"]["payments"] == [{"method": "cash", "amount": "7.00"}]
        assert payload["document_url"] == "https://x/t.pdf"


class TestSend:
    def test_posts_ticket_json(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"ok": True})

        tx = _transaction()
        assert _webhook(handler).send("51987654321", tx, StoreSettings()) is True

        [request] = seen
        assert str(request.url) == WEBHOOK_URL
        body = json.loads(request.content)
        assert body["phone"] == "51987654321"
        assert body["transaction"]["total"] == "7.00"

    def test_server_error_returns_false(self, caplog: pytest.LogCaptureFixture) -> None:
        """Delivery failures are logged, never raised to the register."""
        with caplog.at_level(logging.ERROR, logger="backend.posgo.services.messaging"):
            sent = _webhook(lambda r: httpx.Response(500, text="boom")).send(
                "51987654321", _transaction(), StoreSettings()
            )
        assert sent is False
        assert "rejected" in caplog.text

    def test_network_error_returns_false(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("unreachable", request=request)

        assert _webhook(handler).send("51987654321", _transaction(), StoreSettings()) is False

    def test_disabled_skips_request(self, monkeypatch: pytest.MonkeyPatch) -> None:
        calls: list[httpx.Request] = []
        monkeypatch.setattr(settings, "RECEIPTS_ENABLED", False)
        webhook = _webhook(lambda r: calls.append(r) or httpx.Response(200))
        assert webhook.send("51987654321", _transaction(), StoreSettings()) is False
        assert calls == []
