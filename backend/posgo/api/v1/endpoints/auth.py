from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status

from backend.posgo.api.deps import get_current_profile, oauth2_scheme
from backend.posgo.core.config import settings
from backend.posgo.core.security import create_session_token, revoke_token
from backend.posgo.schemas.organization import DemoLoginRequest, TokenOut, UserProfile
from backend.posgo.services.identity import forget_store_id

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/demo", response_model=TokenOut)
def demo_login(payload: DemoLoginRequest) -> TokenOut:
    """Start a demo session. Demo data lives in the local store only."""
    profile = UserProfile(id=settings.DEMO_USER_ID, name=payload.name, role=payload.role)
    token = create_session_token(profile.model_dump(mode="json"))
    logger.info("Demo session started as %s", profile.role.value)
    return TokenOut(access_token=token, profile=profile)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(
    token: str = Depends(oauth2_scheme),
    profile: UserProfile = Depends(get_current_profile),
) -> None:
    revoke_token(token)
    forget_store_id(profile.id)


@router.get("/me", response_model=UserProfile)
def read_me(profile: UserProfile = Depends(get_current_profile)) -> UserProfile:
    return profile
