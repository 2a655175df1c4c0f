from __future__ import annotations

import enum
import uuid
from datetime import datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Numeric,
    String,
    Text,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backend.posgo.core.database import Base
from backend.posgo.models.store import JSONDoc


class ShiftStatus(str, enum.Enum):
    OPEN = "OPEN"
    CLOSED = "CLOSED"


class MovementType(str, enum.Enum):
    OPEN = "OPEN"
    CLOSE = "CLOSE"
    IN = "IN"
    OUT = "OUT"


class CashShift(Base):
    __tablename__ = "cash_shifts"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    store_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("stores.id"), nullable=False)
    status: Mapped[ShiftStatus] = mapped_column(
        Enum(ShiftStatus), nullable=False, default=ShiftStatus.OPEN
    )
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_time: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    start_amount: Mapped[Decimal] = mapped_column(
        Numeric(precision=20, scale=4), nullable=False, default=Decimal("0")
    )
    end_amount: Mapped[Decimal | None] = mapped_column(
        Numeric(precision=20, scale=4), nullable=True
    )
    total_sales_cash: Mapped[Decimal] = mapped_column(
        Numeric(precision=20, scale=4), nullable=False, default=Decimal("0")
    )
    total_sales_digital: Mapped[Decimal] = mapped_column(
        Numeric(precision=20, scale=4), nullable=False, default=Decimal("0")
    )

    movements: Mapped[list[CashMovement]] = relationship(back_populates="shift")

    __table_args__ = (
        Index("ix_cash_shifts_store", "store_id"),
        Index("ix_cash_shifts_status", "store_id", "status"),
        Index("ix_cash_shifts_start_time", "start_time"),
    )


class CashMovement(Base):
    __tablename__ = "cash_movements"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    store_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("stores.id"), nullable=False)
    shift_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("cash_shifts.id"), nullable=False)
    type: Mapped[MovementType] = mapped_column(Enum(MovementType), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(precision=20, scale=4), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    shift: Mapped[CashShift] = relationship(back_populates="movements")

    __table_args__ = (
        CheckConstraint("amount >= 0", name="ck_cash_movement_amount_non_negative"),
        Index("ix_cash_movements_store", "store_id"),
        Index("ix_cash_movements_shift", "shift_id"),
    )


class Transaction(Base):
    """Sale record. Cart snapshot and payment breakdown are stored as JSON."""

    __tablename__ = "transactions"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    store_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("stores.id"), nullable=False)
    shift_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("cash_shifts.id"), nullable=False)
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    items: Mapped[list[dict[str, Any]]] = mapped_column(JSONDoc, nullable=False)
    subtotal: Mapped[Decimal] = mapped_column(Numeric(precision=20, scale=4), nullable=False)
    tax: Mapped[Decimal] = mapped_column(Numeric(precision=20, scale=4), nullable=False)
    discount: Mapped[Decimal] = mapped_column(Numeric(precision=20, scale=4), nullable=False)
    total: Mapped[Decimal] = mapped_column(Numeric(precision=20, scale=4), nullable=False)
    payments: Mapped[list[dict[str, Any]]] = mapped_column(JSONDoc, nullable=False)
    payment_method: Mapped[str] = mapped_column(String(20), nullable=False)

    __table_args__ = (
        Index("ix_transactions_store", "store_id"),
        Index("ix_transactions_shift", "shift_id"),
        Index("ix_transactions_date", "date"),
    )
