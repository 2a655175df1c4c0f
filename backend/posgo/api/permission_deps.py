"""Role-based permission dependencies.

Usage in endpoints::

    @router.post("")
    def create_product(
        payload: ProductIn,
        store: DataStore = Depends(get_store),
        _profile: UserProfile = Depends(require_permission("product:write")),
    ):
        ...
"""

from __future__ import annotations

from fastapi import Depends, HTTPException, status

from backend.posgo.api.deps import get_current_profile
from backend.posgo.schemas.organization import RoleEnum, UserProfile

_CASHIER = frozenset({
    "pos:sale",
    "pos:shift",
    "product:read",
    "customer:read",
    "customer:write",
    "settings:read",
    "receipt:send",
})

_ADMIN = _CASHIER | {
    "product:write",
    "purchase:read",
    "purchase:write",
    "supplier:read",
    "supplier:write",
    "settings:write",
    "shift:report",
}

ROLE_PERMISSIONS: dict[RoleEnum, frozenset[str]] = {
    RoleEnum.CASHIER: _CASHIER,
    RoleEnum.ADMIN: _ADMIN,
    RoleEnum.SUPER_ADMIN: _ADMIN | {"store:reset", "store:admin"},
}


def require_permission(*permission_codes: str):
    """FastAPI dependency factory: checks the caller's role grants **all** listed permissions.

    Returns the authenticated ``UserProfile``::

        profile = Depends(require_permission("pos:sale"))
    """

    def _checker(profile: UserProfile = Depends(get_current_profile)) -> UserProfile:
        missing = set(permission_codes) - ROLE_PERMISSIONS.get(profile.role, frozenset())
        if missing:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Missing permissions: {', '.join(sorted(missing))}",
            )
        return profile

    return _checker
