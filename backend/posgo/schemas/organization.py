from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, field_validator


class StoreSettings(BaseModel):
    """Per-tenant singleton read by the pricing calculator and receipts."""

    name: str = "PosGo! Store"
    currency: str = "S/"
    tax_rate: Decimal = Decimal("0.18")
    prices_include_tax: bool = True
    address: str = "Av. Principal 123, Lima"
    phone: str = "999-999-999"

    @field_validator("tax_rate")
    @classmethod
    def rate_is_fraction(cls, v: Decimal) -> Decimal:
        if v < 0 or v >= 1:
            raise ValueError("Tax rate must be a fraction between 0 and 1")
        return v


DEFAULT_SETTINGS = StoreSettings()


class RoleEnum(str, Enum):
    CASHIER = "cashier"
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"


class UserProfile(BaseModel):
    id: str
    name: str
    role: RoleEnum = RoleEnum.CASHIER
    store_id: UUID | None = None


class StoreSummary(BaseModel):
    id: UUID
    name: str | None = None
    created_at: datetime | None = None
    users: int = 0


class DemoLoginRequest(BaseModel):
    name: str = "Usuario Prueba"
    role: RoleEnum = RoleEnum.CASHIER


class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
    profile: UserProfile
