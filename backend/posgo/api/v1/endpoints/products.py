from __future__ import annotations

from uuid import UUID, uuid4

from fastapi import APIRouter, Depends, Query, status

from backend.posgo.api.deps import get_store, raise_http
from backend.posgo.api.permission_deps import require_permission
from backend.posgo.core.exceptions import NotFound, PosError
from backend.posgo.schemas.catalog import Product, ProductIn, ScanRequest
from backend.posgo.schemas.organization import UserProfile
from backend.posgo.services.inventory import build_product, find_by_barcode, search_products
from backend.posgo.storage.base import DataStore

router = APIRouter()


@router.get("", response_model=list[Product])
def list_products(
    store: DataStore = Depends(get_store),
    _profile: UserProfile = Depends(require_permission("product:read")),
) -> list[Product]:
    return store.list_products()


@router.post("", response_model=Product, status_code=status.HTTP_201_CREATED)
def create_product(
    payload: ProductIn,
    store: DataStore = Depends(get_store),
    _profile: UserProfile = Depends(require_permission("product:write")),
) -> Product:
    product = build_product(uuid4(), payload)
    try:
        store.create_product(product)
    except PosError as e:
        raise_http(e)
    return product


@router.put("/{product_id}", response_model=Product)
def update_product(
    product_id: UUID,
    payload: ProductIn,
    store: DataStore = Depends(get_store),
    _profile: UserProfile = Depends(require_permission("product:write")),
) -> Product:
    product = build_product(product_id, payload)
    try:
        store.update_product(product_id, product)
    except PosError as e:
        raise_http(e)
    return product


@router.post("/scan", response_model=Product)
def scan_barcode(
    payload: ScanRequest,
    store: DataStore = Depends(get_store),
    _profile: UserProfile = Depends(require_permission("product:read")),
) -> Product:
    product = find_by_barcode(store.list_products(), payload.barcode)
    if product is None:
        raise_http(NotFound("Product with barcode", payload.barcode))
    return product


@router.get("/search", response_model=list[Product])
def search(
    q: str = Query(""),
    limit: int = Query(5, ge=1, le=50),
    store: DataStore = Depends(get_store),
    _profile: UserProfile = Depends(require_permission("product:read")),
) -> list[Product]:
    return search_products(store.list_products(), q, limit=limit)


@router.get("/categories", response_model=list[str])
def list_categories(
    store: DataStore = Depends(get_store),
    _profile: UserProfile = Depends(require_permission("product:read")),
) -> list[str]:
    return sorted({p.category for p in store.list_products()})
