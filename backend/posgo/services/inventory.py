"""Stock reconciliation for sales and purchases.

Oversold stock is permitted: a sale larger than the stock on hand drives the
count negative and logs a warning, but never blocks the checkout. Products
flagged ``has_variants`` always carry ``stock == sum(variant.stock)`` after
any mutation made here.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from uuid import UUID

from backend.posgo.schemas.catalog import Product, ProductIn, Variant
from backend.posgo.schemas.pos import CartItem

logger = logging.getLogger(__name__)


def variant_stock_total(product: Product) -> int:
    return sum(v.stock for v in product.variants)


def normalize_product(product: Product) -> Product:
    """Re-establish the aggregate invariant on a variant product."""
    if not product.has_variants:
        return product
    return product.model_copy(update={"stock": variant_stock_total(product)})


def build_product(product_id: UUID, payload: ProductIn) -> Product:
    """Turn a catalog form into a stored product, assigning variant ids."""
    variants = [Variant(**v.model_dump(exclude_none=True)) for v in payload.variants]
    has_variants = payload.has_variants if payload.has_variants is not None else bool(variants)
    product = Product(
        id=product_id,
        name=payload.name,
        price=payload.price,
        category=payload.category,
        stock=payload.stock,
        barcode=payload.barcode or None,
        has_variants=has_variants,
        variants=variants,
        images=payload.images,
    )
    return normalize_product(product)


def _apply_lines(product: Product, lines: Sequence[CartItem]) -> Product:
    stock = product.stock
    variants = [v.model_copy() for v in product.variants]
    for line in lines:
        if line.selected_variant_id is not None and variants:
            for v in variants:
                if v.id == line.selected_variant_id:
                    v.stock -= line.quantity
        else:
            stock -= line.quantity

    updated = product.model_copy(update={"stock": stock, "variants": variants})
    updated = normalize_product(updated)

    oversold = [v.name for v in updated.variants if v.stock < 0]
    if updated.stock < 0 or oversold:
        logger.warning(
            "Product %s (%s) oversold: stock=%s variants=%s",
            updated.id, updated.name, updated.stock, oversold or "-",
        )
    return updated


def apply_sale(products: Iterable[Product], items: Sequence[CartItem]) -> list[Product]:
    """Return *products* with the sold quantities removed. Pure.

    Untouched products are returned as-is, in the original order.
    """
    by_product: dict[UUID, list[CartItem]] = {}
    for item in items:
        by_product.setdefault(item.product_id, []).append(item)

    result: list[Product] = []
    for product in products:
        lines = by_product.get(product.id)
        result.append(_apply_lines(product, lines) if lines else product)
    return result


def touched_products(products: Iterable[Product], product_ids: Iterable[UUID]) -> list[Product]:
    wanted = set(product_ids)
    return [p for p in products if p.id in wanted]


def find_by_barcode(products: Iterable[Product], barcode: str) -> Product | None:
    code = barcode.strip()
    if not code:
        return None
    return next((p for p in products if p.barcode == code), None)


def search_products(products: Iterable[Product], query: str, limit: int = 5) -> list[Product]:
    """Name (case-insensitive) or barcode substring match, as the purchase form does."""
    q = query.strip().lower()
    if not q:
        return []
    matches = [
        p for p in products
        if q in p.name.lower() or (p.barcode and q in p.barcode)
    ]
    return matches[:limit]
