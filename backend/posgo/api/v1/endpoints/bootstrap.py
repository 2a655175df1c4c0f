from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from backend.posgo.api.deps import get_store, raise_http
from backend.posgo.api.permission_deps import require_permission
from backend.posgo.core.exceptions import PosError
from backend.posgo.schemas.bootstrap import BootstrapOut
from backend.posgo.schemas.organization import UserProfile
from backend.posgo.storage.base import DataStore
from backend.posgo.storage.local import LocalDataStore

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=BootstrapOut)
def load_all(
    store: DataStore = Depends(get_store),
    _profile: UserProfile = Depends(require_permission("pos:sale")),
) -> BootstrapOut:
    try:
        return BootstrapOut(
            products=store.list_products(),
            transactions=store.list_transactions(),
            purchases=store.list_purchases(),
            settings=store.get_settings(),
            customers=store.list_customers(),
            suppliers=store.list_suppliers(),
            shifts=store.list_shifts(),
            movements=store.list_movements(),
            active_shift_id=store.get_active_shift_id(),
        )
    except PosError as e:
        raise_http(e)


@router.post("/reset", status_code=status.HTTP_204_NO_CONTENT)
def reset_demo(
    store: DataStore = Depends(get_store),
    profile: UserProfile = Depends(require_permission("store:reset")),
) -> None:
    if not isinstance(store, LocalDataStore):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only the demo store can be reset",
        )
    try:
        store.reset_demo_data()
    except PosError as e:
        raise_http(e)
    logger.warning("Demo store reset by %s", profile.name)
