from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.responses import StreamingResponse

from backend.posgo.api.deps import get_store, raise_http
from backend.posgo.api.permission_deps import require_permission
from backend.posgo.core.config import settings
from backend.posgo.core.exceptions import PosError
from backend.posgo.middleware.rate_limit import InMemoryRateLimiter
from backend.posgo.schemas.organization import UserProfile
from backend.posgo.schemas.receipt import ReceiptSendOut, ReceiptSendRequest
from backend.posgo.services.messaging import ReceiptWebhook, clean_phone
from backend.posgo.services.receipts import render_sale_receipt, render_shift_report
from backend.posgo.services.shifts import CashShiftLedger
from backend.posgo.storage.base import DataStore

router = APIRouter()

_PDF_MIME = "application/pdf"

# Per-store limit on outbound tickets. For multi-replica, use Redis.
_send_limiter = InMemoryRateLimiter(
    window_seconds=60, max_attempts=settings.RECEIPT_SENDS_PER_MINUTE
)


def get_webhook() -> ReceiptWebhook:
    return ReceiptWebhook()


def _language(request: Request, lang: str | None) -> str:
    return lang or getattr(request.state, "language", "en")


def _pdf_response(buf: object, filename: str) -> StreamingResponse:
    return StreamingResponse(
        buf,  # type: ignore[arg-type]
        media_type=_PDF_MIME,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/sales/{transaction_id}/pdf")
def sale_receipt_pdf(
    transaction_id: UUID,
    request: Request,
    lang: str | None = Query(None),
    store: DataStore = Depends(get_store),
    _profile: UserProfile = Depends(require_permission("pos:sale")),
) -> StreamingResponse:
    try:
        transaction = store.get_transaction(transaction_id)
    except PosError as e:
        raise_http(e)
    buf = render_sale_receipt(transaction, store.get_settings(), _language(request, lang))
    return _pdf_response(buf, f"ticket-{str(transaction.id)[-8:]}.pdf")


@router.get("/shifts/{shift_id}/pdf")
def shift_report_pdf(
    shift_id: UUID,
    request: Request,
    lang: str | None = Query(None),
    store: DataStore = Depends(get_store),
    _profile: UserProfile = Depends(require_permission("pos:shift")),
) -> StreamingResponse:
    try:
        report = CashShiftLedger(store).report(shift_id)
    except PosError as e:
        raise_http(e)
    buf = render_shift_report(report, store.get_settings(), _language(request, lang))
    return _pdf_response(buf, f"shift-{str(shift_id)[-4:]}.pdf")


@router.post("/sales/{transaction_id}/send", response_model=ReceiptSendOut)
def send_sale_receipt(
    transaction_id: UUID,
    payload: ReceiptSendRequest,
    store: DataStore = Depends(get_store),
    webhook: ReceiptWebhook = Depends(get_webhook),
    profile: UserProfile = Depends(require_permission("receipt:send")),
) -> ReceiptSendOut:
    try:
        phone = clean_phone(payload.phone, payload.country_code)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    try:
        transaction = store.get_transaction(transaction_id)
    except PosError as e:
        raise_http(e)

    _send_limiter.check(str(profile.store_id or profile.id))
    sent = webhook.send(phone, transaction, store.get_settings(), payload.document_url)
    return ReceiptSendOut(sent=sent, phone=phone)
