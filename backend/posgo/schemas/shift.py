from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, field_validator

from backend.posgo.schemas.pos import Transaction


class ShiftStatus(str, Enum):
    OPEN = "OPEN"
    CLOSED = "CLOSED"


class MovementType(str, Enum):
    OPEN = "OPEN"
    CLOSE = "CLOSE"
    IN = "IN"
    OUT = "OUT"


class CashShift(BaseModel):
    id: UUID
    start_time: datetime
    start_amount: Decimal
    status: ShiftStatus = ShiftStatus.OPEN
    end_time: datetime | None = None
    end_amount: Decimal | None = None
    total_sales_cash: Decimal = Decimal("0")
    total_sales_digital: Decimal = Decimal("0")


class CashMovement(BaseModel):
    id: UUID
    shift_id: UUID
    type: MovementType
    amount: Decimal
    description: str = ""
    timestamp: datetime


class ShiftReport(BaseModel):
    """Closing report: everything attributed to one shift."""

    shift: CashShift
    movements: list[CashMovement]
    transactions: list[Transaction]
    cash_in: Decimal
    cash_out: Decimal
    expected_cash: Decimal
    discrepancy: Decimal | None


class ShiftReconciliation(BaseModel):
    shift_id: UUID
    stored_cash: Decimal
    stored_digital: Decimal
    computed_cash: Decimal
    computed_digital: Decimal
    consistent: bool


# ─── Requests ─────────────────────────────────────────────────────────────────


class ShiftOpenRequest(BaseModel):
    start_amount: Decimal

    @field_validator("start_amount")
    @classmethod
    def cash_non_negative(cls, v: Decimal) -> Decimal:
        if v < 0:
            raise ValueError("Opening cash must be non-negative")
        return v


class ShiftCloseRequest(BaseModel):
    end_amount: Decimal

    @field_validator("end_amount")
    @classmethod
    def cash_non_negative(cls, v: Decimal) -> Decimal:
        if v < 0:
            raise ValueError("Closing cash must be non-negative")
        return v


class MovementRequest(BaseModel):
    type: MovementType
    amount: Decimal
    description: str = ""

    @field_validator("type")
    @classmethod
    def in_or_out(cls, v: MovementType) -> MovementType:
        if v not in (MovementType.IN, MovementType.OUT):
            raise ValueError("Only IN and OUT movements can be recorded directly")
        return v

    @field_validator("amount")
    @classmethod
    def amount_positive(cls, v: Decimal) -> Decimal:
        if v <= 0:
            raise ValueError("Amount must be greater than zero")
        return v


class ActiveShiftOut(BaseModel):
    shift: CashShift | None
    sales_total: Decimal = Decimal("0")
