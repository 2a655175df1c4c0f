from __future__ import annotations

from uuid import uuid4

from fastapi import APIRouter, Depends, status

from backend.posgo.api.deps import get_store, raise_http
from backend.posgo.api.permission_deps import require_permission
from backend.posgo.core.exceptions import PosError
from backend.posgo.schemas.customer import Customer, CustomerCreate
from backend.posgo.schemas.organization import UserProfile
from backend.posgo.storage.base import DataStore

router = APIRouter()


@router.get("", response_model=list[Customer])
def list_customers(
    store: DataStore = Depends(get_store),
    _profile: UserProfile = Depends(require_permission("customer:read")),
) -> list[Customer]:
    return store.list_customers()


@router.post("", response_model=Customer, status_code=status.HTTP_201_CREATED)
def create_customer(
    payload: CustomerCreate,
    store: DataStore = Depends(get_store),
    _profile: UserProfile = Depends(require_permission("customer:write")),
) -> Customer:
    customer = Customer(id=uuid4(), **payload.model_dump())
    try:
        store.create_customer(customer)
    except PosError as e:
        raise_http(e)
    return customer
