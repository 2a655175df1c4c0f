"""Map an authenticated user to the store (tenant) their data lives in."""

from __future__ import annotations

import logging
from uuid import UUID

from sqlalchemy.orm import Session

from backend.posgo.core.exceptions import NotFound
from backend.posgo.models.store import Profile

logger = logging.getLogger(__name__)

# Resolved once per user for the lifetime of the process; cleared on logout.
_store_ids: dict[str, UUID] = {}


def resolve_store_id(db: Session, user_id: str) -> UUID:
    cached = _store_ids.get(user_id)
    if cached is not None:
        return cached

    profile = db.query(Profile).filter(Profile.id == user_id).first()
    if profile is None:
        raise NotFound("Profile", user_id)
    _store_ids[user_id] = profile.store_id
    logger.debug("Resolved user %s to store %s", user_id, profile.store_id)
    return profile.store_id


def forget_store_id(user_id: str | None = None) -> None:
    """Drop one cached resolution, or all of them."""
    if user_id is None:
        _store_ids.clear()
    else:
        _store_ids.pop(user_id, None)
