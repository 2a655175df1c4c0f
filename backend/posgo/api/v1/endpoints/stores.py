from __future__ import annotations

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.posgo.api.deps import raise_http
from backend.posgo.api.permission_deps import require_permission
from backend.posgo.core.database import get_db
from backend.posgo.core.exceptions import PersistenceFailure, PosError
from backend.posgo.schemas.organization import StoreSummary, UserProfile
from backend.posgo.services.tenants import delete_store, list_stores

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=list[StoreSummary])
def list_all_stores(
    db: Session = Depends(get_db),
    _profile: UserProfile = Depends(require_permission("store:admin")),
) -> list[StoreSummary]:
    """List every tenant. Super admin only."""
    return list_stores(db)


@router.delete("/{store_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_store(
    store_id: UUID,
    db: Session = Depends(get_db),
    profile: UserProfile = Depends(require_permission("store:admin")),
) -> None:
    """Delete a tenant together with all of its data."""
    try:
        delete_store(db, store_id)
        db.commit()
    except PosError as e:
        raise_http(e)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to delete store %s", store_id)
        raise_http(PersistenceFailure(f"Could not delete store {store_id}"))
    logger.warning("Store %s deleted by %s", store_id, profile.name)
