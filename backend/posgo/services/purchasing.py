"""Supplier purchases: stock replenishment and resale price.

Each purchase row keeps cost, margin (percent over cost) and resale price
consistent through ``price = cost * (1 + margin / 100)``. Editing cost or
price recomputes the margin, editing the margin recomputes the price. A zero
cost has no meaningful margin and is reported as 100%.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from decimal import Decimal
from uuid import UUID, uuid4

from backend.posgo.core.exceptions import InvalidPurchase, NotFound
from backend.posgo.schemas.catalog import Product
from backend.posgo.schemas.supplier import (
    PriceLineOut,
    PriceLineRequest,
    Purchase,
    PurchaseCreate,
    PurchaseItem,
    PurchaseLineIn,
)
from backend.posgo.services.inventory import normalize_product
from backend.posgo.services.pricing import ZERO, quantize
from backend.posgo.storage.base import DataStore

logger = logging.getLogger(__name__)

INITIAL_COST_RATIO = Decimal("0.7")
DEFAULT_MARGIN = Decimal("30")
ZERO_COST_MARGIN = Decimal("100")
HUNDRED = Decimal("100")


def margin_for(cost: Decimal, price: Decimal) -> Decimal:
    if cost <= 0:
        return ZERO_COST_MARGIN
    return quantize((price - cost) / cost * HUNDRED)


def price_for(cost: Decimal, margin: Decimal) -> Decimal:
    return quantize(cost * (1 + margin / HUNDRED))


@dataclass(frozen=True)
class PurchaseLine:
    product_id: UUID
    quantity: int
    cost: Decimal
    margin: Decimal
    price: Decimal
    variant_id: UUID | None = None

    @classmethod
    def for_product(cls, product: Product, quantity: int = 1) -> PurchaseLine:
        """Starting row for a product: cost estimated at 70% of its price."""
        cost = quantize(product.price * INITIAL_COST_RATIO)
        margin = margin_for(cost, product.price) if cost > 0 else DEFAULT_MARGIN
        return cls(
            product_id=product.id,
            quantity=quantity,
            cost=cost,
            margin=margin,
            price=product.price,
        )

    @classmethod
    def from_input(cls, line: PurchaseLineIn, product: Product) -> PurchaseLine:
        base = replace(
            cls.for_product(product, line.quantity),
            variant_id=line.variant_id,
        ).with_cost(line.cost)
        if line.price is not None:
            return base.with_price(line.price)
        if line.margin is not None:
            return base.with_margin(line.margin)
        return base

    def with_cost(self, cost: Decimal) -> PurchaseLine:
        return replace(self, cost=cost, margin=margin_for(cost, self.price))

    def with_margin(self, margin: Decimal) -> PurchaseLine:
        return replace(self, margin=margin, price=price_for(self.cost, margin))

    def with_price(self, price: Decimal) -> PurchaseLine:
        return replace(self, price=price, margin=margin_for(self.cost, price))

    @property
    def line_cost(self) -> Decimal:
        return self.cost * self.quantity


def recalculate_line(req: PriceLineRequest) -> PriceLineOut:
    """Apply one edit to a purchase row and return the consistent triple."""
    line = PurchaseLine(
        product_id=UUID(int=0), quantity=1, cost=req.cost, margin=req.margin, price=req.price
    )
    if req.field == "cost":
        line = line.with_cost(req.value)
    elif req.field == "margin":
        line = line.with_margin(req.value)
    else:
        line = line.with_price(req.value)
    return PriceLineOut(cost=line.cost, margin=line.margin, price=line.price)


# ─── Commit ───────────────────────────────────────────────────────────────────


@dataclass
class PurchaseResult:
    purchase: Purchase
    products: list[Product]


def _receive(product: Product, lines: Sequence[PurchaseLine]) -> Product:
    stock = product.stock
    price = product.price
    variants = [v.model_copy() for v in product.variants]
    for line in lines:
        if line.variant_id is None:
            stock += line.quantity
            price = line.price
            continue
        variant = next((v for v in variants if v.id == line.variant_id), None)
        if variant is None:
            raise NotFound("Variant", line.variant_id)
        variant.stock += line.quantity
        variant.price = line.price
    return normalize_product(
        product.model_copy(update={"stock": stock, "price": price, "variants": variants})
    )


def commit_purchase(
    supplier_id: UUID | None,
    lines: Sequence[PurchaseLine],
    products: Iterable[Product],
) -> PurchaseResult:
    """Build the purchase record and the restocked products. Pure.

    Stock grows by the purchased quantity and the resale price is replaced,
    not averaged with the previous one.
    """
    if supplier_id is None:
        raise InvalidPurchase("Select a supplier")
    if not lines:
        raise InvalidPurchase("Add at least one product")

    seen: set[tuple[UUID, UUID | None]] = set()
    for line in lines:
        key = (line.product_id, line.variant_id)
        if key in seen:
            raise InvalidPurchase(f"Product {line.product_id} is already in the purchase")
        seen.add(key)

    by_id = {p.id: p for p in products}
    by_product: dict[UUID, list[PurchaseLine]] = {}
    for line in lines:
        product = by_id.get(line.product_id)
        if product is None:
            raise NotFound("Product", line.product_id)
        if product.has_variants and line.variant_id is None:
            raise InvalidPurchase(f"Choose a variant of {product.name}")
        by_product.setdefault(line.product_id, []).append(line)

    updated = [_receive(by_id[pid], product_lines) for pid, product_lines in by_product.items()]
    purchase = Purchase(
        id=uuid4(),
        date=datetime.now(timezone.utc),
        supplier_id=supplier_id,
        total=quantize(sum((line.line_cost for line in lines), ZERO)),
        items=[
            PurchaseItem(
                product_id=line.product_id,
                quantity=line.quantity,
                cost=line.cost,
                variant_id=line.variant_id,
            )
            for line in lines
        ],
    )
    return PurchaseResult(purchase=purchase, products=updated)


class PurchaseService:
    def __init__(self, store: DataStore) -> None:
        self.store = store

    def process(self, payload: PurchaseCreate) -> PurchaseResult:
        if payload.supplier_id is None:
            raise InvalidPurchase("Select a supplier")
        if not payload.items:
            raise InvalidPurchase("Add at least one product")
        supplier = self.store.get_supplier(payload.supplier_id)

        products = {p.id: p for p in self.store.list_products()}
        lines = []
        for item in payload.items:
            product = products.get(item.product_id)
            if product is None:
                raise NotFound("Product", item.product_id)
            lines.append(PurchaseLine.from_input(item, product))

        result = commit_purchase(supplier.id, lines, products.values())
        self.store.append_purchase(result.purchase)
        self.store.update_products(result.products)

        logger.info(
            "Purchase %s from %s: %d lines, total=%s",
            result.purchase.id, supplier.name, len(lines), result.purchase.total,
        )
        return result
