"""One-time script to provision a store and assign a user to it.

Usage:
    python -m backend.create_store
"""

from __future__ import annotations

from backend.posgo.core.database import SessionLocal
from backend.posgo.schemas.organization import DEFAULT_SETTINGS, RoleEnum

# Import all models so SQLAlchemy resolves relationships
import backend.posgo.models.customer  # noqa: F401
import backend.posgo.models.inventory  # noqa: F401
import backend.posgo.models.pos  # noqa: F401
import backend.posgo.models.supplier  # noqa: F401

from backend.posgo.models.store import Profile, Store


def main() -> None:
    user_id = input("User id (from the identity provider): ").strip()
    if not user_id:
        print("Error: user id cannot be empty.")
        return
    name = input("Display name [Admin]: ").strip() or "Admin"
    role = input("Role [admin]: ").strip() or RoleEnum.ADMIN.value
    if role not in {r.value for r in RoleEnum}:
        print(f"Error: role must be one of {', '.join(r.value for r in RoleEnum)}.")
        return

    db = SessionLocal()
    try:
        existing = db.query(Profile).filter(Profile.id == user_id).first()
        if existing:
            # Keep the store, refresh name and role
            existing.name = name
            existing.role = role
            db.commit()
            print("Profile already exists, name and role updated.")
            print(f"  User:  {user_id}")
            print(f"  Store: {existing.store_id}")
            print(f"  Role:  {role}")
            return

        store = Store(settings=DEFAULT_SETTINGS.model_dump(mode="json"))
        db.add(store)
        db.flush()
        db.add(Profile(id=user_id, store_id=store.id, name=name, role=role))
        db.commit()

        print("Store created successfully!")
        print(f"  Store: {store.id}")
        print(f"  User:  {user_id}")
        print(f"  Role:  {role}")
    finally:
        db.close()


if __name__ == "__main__":
    main()
