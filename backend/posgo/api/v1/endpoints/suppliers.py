from __future__ import annotations

from uuid import uuid4

from fastapi import APIRouter, Depends, status

from backend.posgo.api.deps import get_store, raise_http
from backend.posgo.api.permission_deps import require_permission
from backend.posgo.core.exceptions import PosError
from backend.posgo.schemas.organization import UserProfile
from backend.posgo.schemas.supplier import Supplier, SupplierCreate
from backend.posgo.storage.base import DataStore

router = APIRouter()


@router.get("", response_model=list[Supplier])
def list_suppliers(
    store: DataStore = Depends(get_store),
    _profile: UserProfile = Depends(require_permission("supplier:read")),
) -> list[Supplier]:
    return store.list_suppliers()


@router.post("", response_model=Supplier, status_code=status.HTTP_201_CREATED)
def create_supplier(
    payload: SupplierCreate,
    store: DataStore = Depends(get_store),
    _profile: UserProfile = Depends(require_permission("supplier:write")),
) -> Supplier:
    supplier = Supplier(id=uuid4(), **payload.model_dump())
    try:
        store.create_supplier(supplier)
    except PosError as e:
        raise_http(e)
    return supplier
