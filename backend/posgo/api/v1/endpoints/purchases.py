from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from backend.posgo.api.deps import get_store, raise_http
from backend.posgo.api.permission_deps import require_permission
from backend.posgo.core.exceptions import PosError
from backend.posgo.schemas.organization import UserProfile
from backend.posgo.schemas.supplier import (
    PriceLineOut,
    PriceLineRequest,
    Purchase,
    PurchaseCreate,
    PurchaseLineOut,
)
from backend.posgo.services.purchasing import PurchaseLine, PurchaseService, recalculate_line
from backend.posgo.storage.base import DataStore

router = APIRouter()


@router.get("", response_model=list[Purchase])
def list_purchases(
    store: DataStore = Depends(get_store),
    _profile: UserProfile = Depends(require_permission("purchase:read")),
) -> list[Purchase]:
    return store.list_purchases()


@router.get("/lines/{product_id}", response_model=PurchaseLineOut)
def start_line(
    product_id: UUID,
    quantity: int = Query(1, ge=1),
    store: DataStore = Depends(get_store),
    _profile: UserProfile = Depends(require_permission("purchase:write")),
) -> PurchaseLineOut:
    """Initial cost/margin/price row for a product added to the purchase form."""
    try:
        product = store.get_product(product_id)
    except PosError as e:
        raise_http(e)
    return PurchaseLineOut.model_validate(PurchaseLine.for_product(product, quantity))


@router.post("/price-line", response_model=PriceLineOut)
def price_line(
    payload: PriceLineRequest,
    _profile: UserProfile = Depends(require_permission("purchase:write")),
) -> PriceLineOut:
    return recalculate_line(payload)


@router.post("", response_model=Purchase, status_code=status.HTTP_201_CREATED)
def create_purchase(
    payload: PurchaseCreate,
    store: DataStore = Depends(get_store),
    _profile: UserProfile = Depends(require_permission("purchase:write")),
) -> Purchase:
    try:
        return PurchaseService(store).process(payload).purchase
    except PosError as e:
        raise_http(e)
