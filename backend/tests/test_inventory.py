"""Tests for stock reconciliation and catalog helpers."""
from __future__ import annotations

import logging
from decimal import Decimal
from uuid import uuid4

import pytest

from backend.posgo.schemas.catalog import Product, ProductIn, Variant, VariantIn
from backend.posgo.services.inventory import (
    apply_sale,
    build_product,
    find_by_barcode,
    normalize_product,
    search_products,
    touched_products,
)
from backend.tests.conftest import line


def _shirt() -> Product:
    return Product(
        id=uuid4(),
        name="Polo",
        price=Decimal("20.00"),
        stock=8,
        has_variants=True,
        variants=[
            Variant(name="S", price=Decimal("20.00"), stock=3),
            Variant(name="M", price=Decimal("22.00"), stock=5),
        ],
    )


def _soda(stock: int = 10) -> Product:
    return Product(id=uuid4(), name="Inca Kola 500ml", price=Decimal("3.50"), stock=stock, barcode="77501000")


class TestApplySale:
    def test_base_product_decrements_stock(self) -> None:
        soda = _soda(10)
        [updated] = apply_sale([soda], [line(soda, 3)])
        assert updated.stock == 7
        assert soda.stock == 10

    def test_variant_sale_keeps_aggregate(self) -> None:
        """Selling 2 of variant S out of 3/5: S=1, M=5, stock=6."""
        shirt = _shirt()
        small = shirt.variants[0]
        [updated] = apply_sale([shirt], [line(shirt, 2, variant=small)])
        assert updated.find_variant(small.id).stock == 1
        assert updated.variants[1].stock == 5
        assert updated.stock == 6

    def test_selling_first_variant_recomputes_total(self) -> None:
        product = Product(
            id=uuid4(),
            name="Chicha",
            price=Decimal("4.00"),
            stock=8,
            has_variants=True,
            variants=[Variant(name="1L", stock=5), Variant(name="2L", stock=3)],
        )
        first = product.variants[0]
        [updated] = apply_sale([product], [line(product, 2, variant=first)])
        assert updated.variants[0].stock == 3
        assert updated.stock == 6

    def test_aggregate_holds_across_mixed_lines(self) -> None:
        shirt = _shirt()
        small, medium = shirt.variants
        [updated] = apply_sale(
            [shirt], [line(shirt, 1, variant=small), line(shirt, 4, variant=medium)]
        )
        assert updated.stock == sum(v.stock for v in updated.variants) == 3

    def test_untouched_products_pass_through(self) -> None:
        soda, other = _soda(), _soda(4)
        result = apply_sale([soda, other], [line(soda, 1)])
        assert result[1] is other
        assert touched_products(result, [soda.id]) == [result[0]]

    def test_oversell_goes_negative_and_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        soda = _soda(2)
        with caplog.at_level(logging.WARNING, logger="backend.posgo.services.inventory"):
            [updated] = apply_sale([soda], [line(soda, 5)])
        assert updated.stock == -3
        assert "oversold" in caplog.text

    def test_variant_oversell_is_permitted(self) -> None:
        shirt = _shirt()
        small = shirt.variants[0]
        [updated] = apply_sale([shirt], [line(shirt, 4, variant=small)])
        assert updated.find_variant(small.id).stock == -1
        assert updated.stock == 4


class TestNormalize:
    def test_stale_aggregate_is_recomputed(self) -> None:
        shirt = _shirt().model_copy(update={"stock": 99})
        assert normalize_product(shirt).stock == 8

    def test_plain_product_unchanged(self) -> None:
        soda = _soda(5)
        assert normalize_product(soda) is soda


class TestBuildProduct:
    def test_variants_get_ids_and_aggregate_stock(self) -> None:
        payload = ProductIn(
            name="  Polo ",
            price=Decimal("20"),
            stock=0,
            variants=[VariantIn(name="S", stock=2), VariantIn(name="L", stock=4)],
        )
        product = build_product(uuid4(), payload)
        assert product.name == "Polo"
        assert product.has_variants is True
        assert product.stock == 6
        assert all(v.id is not None for v in product.variants)

    def test_blank_barcode_becomes_none(self) -> None:
        product = build_product(uuid4(), ProductIn(name="Pan", price=Decimal("0.30"), barcode=""))
        assert product.barcode is None
        assert product.has_variants is False

    def test_three_images_rejected(self) -> None:
        with pytest.raises(ValueError):
            ProductIn(name="Pan", price=Decimal("1"), images=["a", "b", "c"])


class TestLookup:
    def test_barcode_exact_match(self) -> None:
        soda = _soda()
        assert find_by_barcode([soda], " 77501000 ") == soda
        assert find_by_barcode([soda], "7750") is None
        assert find_by_barcode([soda], "  ") is None

    def test_search_by_name_or_barcode(self) -> None:
        soda, shirt = _soda(), _shirt()
        assert search_products([soda, shirt], "inca") == [soda]
        assert search_products([soda, shirt], "7750") == [soda]
        assert search_products([soda, shirt], "") == []

    def test_search_respects_limit(self) -> None:
        sodas = [_soda() for _ in range(8)]
        assert len(search_products(sodas, "kola")) == 5
        assert len(search_products(sodas, "kola", limit=2)) == 2
