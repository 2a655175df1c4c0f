from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Uuid,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from backend.posgo.core.database import Base
from backend.posgo.models.store import JSONDoc


class Product(Base):
    """Catalog row. Variants and image references are stored inline as JSON."""

    __tablename__ = "products"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    store_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("stores.id"), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(precision=20, scale=4), nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False, default="General")
    stock: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    barcode: Mapped[str | None] = mapped_column(String(100), nullable=True)
    has_variants: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    variants: Mapped[list[dict[str, Any]]] = mapped_column(JSONDoc, nullable=False, default=list)
    images: Mapped[list[str]] = mapped_column(JSONDoc, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    __table_args__ = (
        Index("ix_products_store", "store_id"),
        Index("ix_products_store_barcode", "store_id", "barcode"),
    )
