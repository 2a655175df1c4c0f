"""Tenant administration for the super-admin console.

Nothing here calls ``db.commit()``; the endpoint commits.
"""

from __future__ import annotations

import logging
from uuid import UUID

from sqlalchemy.orm import Session

from backend.posgo.core.exceptions import NotFound
from backend.posgo.models.customer import Customer
from backend.posgo.models.inventory import Product
from backend.posgo.models.pos import CashMovement, CashShift, Transaction
from backend.posgo.models.store import Profile, Store
from backend.posgo.models.supplier import Purchase, Supplier
from backend.posgo.schemas.organization import StoreSummary
from backend.posgo.services.identity import forget_store_id

logger = logging.getLogger(__name__)

# Children before parents so foreign keys hold at every step
_TENANT_TABLES = (
    Transaction,
    CashMovement,
    CashShift,
    Purchase,
    Supplier,
    Product,
    Customer,
    Profile,
)


def list_stores(db: Session) -> list[StoreSummary]:
    """Return every store, newest first."""
    rows = db.query(Store).order_by(Store.created_at.desc()).all()
    return [
        StoreSummary(
            id=row.id,
            name=(row.settings or {}).get("name") or None,
            created_at=row.created_at,
            users=len(row.profiles),
        )
        for row in rows
    ]


def delete_store(db: Session, store_id: UUID) -> dict[str, int]:
    """Delete a store and every row stamped with its ``store_id``.

    Returns the number of rows removed per table.
    """
    if db.query(Store.id).filter(Store.id == store_id).first() is None:
        raise NotFound("Store", store_id)

    user_ids = [pid for (pid,) in db.query(Profile.id).filter(Profile.store_id == store_id)]
    removed: dict[str, int] = {}
    for model in _TENANT_TABLES:
        removed[model.__tablename__] = (
            db.query(model)
            .filter(model.store_id == store_id)
            .delete(synchronize_session=False)
        )
    db.query(Store).filter(Store.id == store_id).delete(synchronize_session=False)
    db.expire_all()

    for user_id in user_ids:
        forget_store_id(user_id)
    logger.info("Store %s rows removed: %s", store_id, removed)
    return removed
