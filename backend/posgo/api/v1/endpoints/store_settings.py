from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from backend.posgo.api.deps import get_store, raise_http
from backend.posgo.api.permission_deps import require_permission
from backend.posgo.core.exceptions import PosError
from backend.posgo.schemas.organization import StoreSettings, UserProfile
from backend.posgo.storage.base import DataStore

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=StoreSettings)
def read_settings(
    store: DataStore = Depends(get_store),
    _profile: UserProfile = Depends(require_permission("settings:read")),
) -> StoreSettings:
    return store.get_settings()


@router.put("", response_model=StoreSettings)
def update_settings(
    payload: StoreSettings,
    store: DataStore = Depends(get_store),
    profile: UserProfile = Depends(require_permission("settings:write")),
) -> StoreSettings:
    try:
        store.save_settings(payload)
    except PosError as e:
        raise_http(e)
    logger.info(
        "Store settings updated by %s: tax_rate=%s prices_include_tax=%s",
        profile.name, payload.tax_rate, payload.prices_include_tax,
    )
    return payload
