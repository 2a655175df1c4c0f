from __future__ import annotations

from decimal import Decimal
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, field_validator

MAX_PRODUCT_IMAGES = 2


# ─── Product ──────────────────────────────────────────────────────────────────


class Variant(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    name: str
    price: Decimal = Decimal("0")
    stock: int = 0


class Product(BaseModel):
    """Catalog entry as held by either store.

    ``stock`` is not validated as non-negative: a sale may oversell and the
    reconciler keeps the negative value for later correction.
    """

    id: UUID
    name: str
    price: Decimal
    category: str = "General"
    stock: int = 0
    barcode: str | None = None
    has_variants: bool = False
    variants: list[Variant] = []
    images: list[str] = []

    @field_validator("images")
    @classmethod
    def at_most_two_images(cls, v: list[str]) -> list[str]:
        if len(v) > MAX_PRODUCT_IMAGES:
            raise ValueError(f"A product can have at most {MAX_PRODUCT_IMAGES} images")
        return v

    def find_variant(self, variant_id: UUID | None) -> Variant | None:
        if variant_id is None:
            return None
        return next((v for v in self.variants if v.id == variant_id), None)


class VariantIn(BaseModel):
    id: UUID | None = None
    name: str
    price: Decimal = Decimal("0")
    stock: int = 0

    @field_validator("stock")
    @classmethod
    def stock_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("Variant stock must be non-negative")
        return v


class ProductIn(BaseModel):
    name: str
    price: Decimal
    category: str = "General"
    stock: int = 0
    barcode: str | None = None
    has_variants: bool | None = None
    variants: list[VariantIn] = []
    images: list[str] = []

    @field_validator("name")
    @classmethod
    def name_required(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Product name is required")
        return v.strip()

    @field_validator("price")
    @classmethod
    def price_non_negative(cls, v: Decimal) -> Decimal:
        if v < 0:
            raise ValueError("Price must be non-negative")
        return v

    @field_validator("stock")
    @classmethod
    def stock_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("Stock must be non-negative")
        return v

    @field_validator("images")
    @classmethod
    def at_most_two_images(cls, v: list[str]) -> list[str]:
        if len(v) > MAX_PRODUCT_IMAGES:
            raise ValueError(f"A product can have at most {MAX_PRODUCT_IMAGES} images")
        return v


class ScanRequest(BaseModel):
    barcode: str
