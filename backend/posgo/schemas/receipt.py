from __future__ import annotations

from pydantic import BaseModel


class ReceiptSendRequest(BaseModel):
    phone: str
    country_code: str | None = None
    document_url: str | None = None


class ReceiptSendOut(BaseModel):
    sent: bool
    phone: str
