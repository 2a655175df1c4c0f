from __future__ import annotations

from typing import NoReturn

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from sqlalchemy.orm import Session

from backend.posgo.core.config import settings
from backend.posgo.core.database import get_db
from backend.posgo.core.exceptions import NotFound, PosError
from backend.posgo.core.security import decode_session_token, is_token_revoked
from backend.posgo.schemas.organization import UserProfile
from backend.posgo.services.identity import resolve_store_id
from backend.posgo.storage.base import DataStore
from backend.posgo.storage.local import LocalDataStore
from backend.posgo.storage.remote import SqlDataStore

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/demo")


def get_current_profile(token: str = Depends(oauth2_scheme)) -> UserProfile:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    # Check if token was revoked (logout)
    if is_token_revoked(token):
        raise credentials_exception

    try:
        payload = decode_session_token(token)
    except JWTError:
        raise credentials_exception
    user_id: str | None = payload.get("sub")
    if user_id is None:
        raise credentials_exception

    return UserProfile(
        id=user_id,
        name=payload.get("name", ""),
        role=payload.get("role", "cashier"),
        store_id=payload.get("store_id"),
    )


def is_demo(profile: UserProfile) -> bool:
    return profile.id == settings.DEMO_USER_ID


# ─── Data store selection ────────────────────────────────────────────────────

_local_store: LocalDataStore | None = None


def get_local_store() -> LocalDataStore:
    """Process-wide demo store, created on first use."""
    global _local_store
    if _local_store is None:
        _local_store = LocalDataStore(settings.LOCAL_STORAGE_PATH or None)
    return _local_store


def get_store(
    profile: UserProfile = Depends(get_current_profile),
    db: Session = Depends(get_db),
) -> DataStore:
    if is_demo(profile):
        return get_local_store()
    store_id = profile.store_id
    if store_id is None:
        try:
            store_id = resolve_store_id(db, profile.id)
        except NotFound:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="No store is assigned to this user",
            )
    return SqlDataStore(db, store_id)


def raise_http(exc: PosError) -> NoReturn:
    """Re-raise a domain error as the matching HTTP error."""
    raise HTTPException(status_code=exc.status_code, detail=str(exc)) from exc
