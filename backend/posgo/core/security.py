from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

from jose import jwt

from backend.posgo.core.config import settings

ALGORITHM = "HS256"

# In-memory token deny-list for logout
# In production with multiple replicas, use Redis instead
_revoked_tokens: set[str] = set()


def create_session_token(
    profile: dict[str, Any], expires_delta: timedelta | None = None
) -> str:
    """Encode a user profile (``id``, ``name``, ``role``, ``store_id``) as a session token."""
    expire = datetime.now(timezone.utc) + (
        expires_delta
        if expires_delta
        else timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode = {
        "sub": str(profile["id"]),
        "name": profile.get("name", ""),
        "role": profile.get("role", "cashier"),
        "exp": expire,
    }
    if profile.get("store_id"):
        to_encode["store_id"] = str(profile["store_id"])
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=ALGORITHM)


def decode_session_token(token: str) -> dict[str, Any]:
    """Return the claims of *token*; raises ``jose.JWTError`` when invalid or expired."""
    return jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])


def revoke_token(token: str) -> None:
    """Add a token to the deny-list (logout), pruning entries that have expired."""
    cleanup_expired_tokens()
    _revoked_tokens.add(token)


def is_token_revoked(token: str) -> bool:
    """Check if a token has been revoked."""
    return token in _revoked_tokens


def cleanup_expired_tokens() -> int:
    """Remove expired tokens from the in-memory deny-list.

    Returns the number of tokens removed.
    """
    expired: list[str] = []
    for token in _revoked_tokens:
        try:
            jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
        except jwt.ExpiredSignatureError:
            expired.append(token)
        except jwt.JWTError:
            # Malformed tokens can also be cleaned up
            expired.append(token)
    for token in expired:
        _revoked_tokens.discard(token)
    return len(expired)
