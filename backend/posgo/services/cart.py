"""Cart building: lines are keyed by (product, selected variant)."""

from __future__ import annotations

from decimal import Decimal
from uuid import UUID

from backend.posgo.core.exceptions import NotFound
from backend.posgo.schemas.catalog import Product
from backend.posgo.schemas.pos import CartItem


def _same_line(item: CartItem, product_id: UUID, variant_id: UUID | None) -> bool:
    return item.product_id == product_id and item.selected_variant_id == variant_id


def add_to_cart(
    cart: list[CartItem], product: Product, variant_id: UUID | None = None
) -> list[CartItem]:
    """Add one unit of *product* (or of its variant) to the cart.

    An existing line for the same product and variant is incremented; a new
    line snapshots the variant price when a variant is selected.
    """
    if any(_same_line(i, product.id, variant_id) for i in cart):
        return [
            i.model_copy(update={"quantity": i.quantity + 1})
            if _same_line(i, product.id, variant_id)
            else i
            for i in cart
        ]

    price = product.price
    variant_name = None
    if variant_id is not None:
        variant = product.find_variant(variant_id)
        if variant is None:
            raise NotFound("Variant", variant_id)
        price = variant.price
        variant_name = variant.name

    line = CartItem(
        product_id=product.id,
        name=product.name,
        price=price,
        category=product.category,
        barcode=product.barcode,
        quantity=1,
        selected_variant_id=variant_id,
        selected_variant_name=variant_name,
    )
    return [*cart, line]


def update_quantity(
    cart: list[CartItem], product_id: UUID, delta: int, variant_id: UUID | None = None
) -> list[CartItem]:
    """Shift a line's quantity by *delta*, never below one."""
    return [
        i.model_copy(update={"quantity": max(1, i.quantity + delta)})
        if _same_line(i, product_id, variant_id)
        else i
        for i in cart
    ]


def remove_from_cart(
    cart: list[CartItem], product_id: UUID, variant_id: UUID | None = None
) -> list[CartItem]:
    return [i for i in cart if not _same_line(i, product_id, variant_id)]


def set_discount(
    cart: list[CartItem], product_id: UUID, discount: Decimal, variant_id: UUID | None = None
) -> list[CartItem]:
    """Set a per-unit discount on a line; negative discounts become zero."""
    clamped = max(Decimal("0"), discount)
    return [
        i.model_copy(update={"discount": clamped})
        if _same_line(i, product_id, variant_id)
        else i
        for i in cart
    ]
