from __future__ import annotations

from fastapi import APIRouter, Depends

from backend.posgo.api.deps import get_store, raise_http
from backend.posgo.api.permission_deps import require_permission
from backend.posgo.core.exceptions import NotFound, PosError
from backend.posgo.schemas.organization import UserProfile
from backend.posgo.schemas.pos import (
    CartDiscountRequest,
    CartItem,
    CartLineRequest,
    CartQuantityRequest,
    CartScanRequest,
    CartTotals,
    CheckoutOut,
    CheckoutRequest,
    FillRemainingRequest,
    QuoteRequest,
    TenderRequest,
    Tenders,
    TenderSummary,
    Transaction,
)
from backend.posgo.services.cart import add_to_cart, remove_from_cart, set_discount, update_quantity
from backend.posgo.services.checkout import checkout
from backend.posgo.services.inventory import find_by_barcode
from backend.posgo.services.payments import fill_remaining, summarize_tenders
from backend.posgo.services.pricing import calculate_totals
from backend.posgo.storage.base import DataStore

router = APIRouter()


# ─── Cart ─────────────────────────────────────────────────────────────────────


@router.post("/cart/add", response_model=list[CartItem])
def cart_add(
    payload: CartLineRequest,
    store: DataStore = Depends(get_store),
    _profile: UserProfile = Depends(require_permission("pos:sale")),
) -> list[CartItem]:
    try:
        product = store.get_product(payload.product_id)
        return add_to_cart(payload.items, product, payload.variant_id)
    except PosError as e:
        raise_http(e)


@router.post("/cart/scan", response_model=list[CartItem])
def cart_scan(
    payload: CartScanRequest,
    store: DataStore = Depends(get_store),
    _profile: UserProfile = Depends(require_permission("pos:sale")),
) -> list[CartItem]:
    product = find_by_barcode(store.list_products(), payload.barcode)
    if product is None:
        raise_http(NotFound("Product with barcode", payload.barcode))
    return add_to_cart(payload.items, product)


@router.post("/cart/quantity", response_model=list[CartItem])
def cart_quantity(
    payload: CartQuantityRequest,
    _profile: UserProfile = Depends(require_permission("pos:sale")),
) -> list[CartItem]:
    return update_quantity(payload.items, payload.product_id, payload.delta, payload.variant_id)


@router.post("/cart/remove", response_model=list[CartItem])
def cart_remove(
    payload: CartLineRequest,
    _profile: UserProfile = Depends(require_permission("pos:sale")),
) -> list[CartItem]:
    return remove_from_cart(payload.items, payload.product_id, payload.variant_id)


@router.post("/cart/discount", response_model=list[CartItem])
def cart_discount(
    payload: CartDiscountRequest,
    _profile: UserProfile = Depends(require_permission("pos:sale")),
) -> list[CartItem]:
    return set_discount(payload.items, payload.product_id, payload.discount, payload.variant_id)


# ─── Pricing & Tenders ────────────────────────────────────────────────────────


@router.post("/quote", response_model=CartTotals)
def quote(
    payload: QuoteRequest,
    store: DataStore = Depends(get_store),
    _profile: UserProfile = Depends(require_permission("pos:sale")),
) -> CartTotals:
    return calculate_totals(payload.items, store.get_settings())


@router.post("/tenders", response_model=TenderSummary)
def tender_summary(
    payload: TenderRequest,
    store: DataStore = Depends(get_store),
    _profile: UserProfile = Depends(require_permission("pos:sale")),
) -> TenderSummary:
    totals = calculate_totals(payload.items, store.get_settings())
    return summarize_tenders(totals.final_total, payload.tenders)


@router.post("/tenders/fill-remaining", response_model=Tenders)
def tender_fill_remaining(
    payload: FillRemainingRequest,
    store: DataStore = Depends(get_store),
    _profile: UserProfile = Depends(require_permission("pos:sale")),
) -> Tenders:
    totals = calculate_totals(payload.items, store.get_settings())
    return fill_remaining(totals.final_total, payload.tenders, payload.method)


# ─── Checkout ─────────────────────────────────────────────────────────────────


@router.post("/checkout", response_model=CheckoutOut)
def create_sale(
    payload: CheckoutRequest,
    store: DataStore = Depends(get_store),
    _profile: UserProfile = Depends(require_permission("pos:sale")),
) -> CheckoutOut:
    try:
        result = checkout(store, payload.items, payload.tenders, store.get_active_shift_id())
    except PosError as e:
        raise_http(e)
    return CheckoutOut(transaction=result.transaction, change=result.change)


@router.get("/transactions", response_model=list[Transaction])
def list_transactions(
    store: DataStore = Depends(get_store),
    _profile: UserProfile = Depends(require_permission("pos:sale")),
) -> list[Transaction]:
    return store.list_transactions()
