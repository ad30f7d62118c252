from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import jwt

from qrmenu.config import settings

ALGORITHM = settings.AUTH_JWT_ALGORITHM


def decode_access_token(token: str) -> Dict[str, Any]:
    """Verify a provider-issued token and return its claims.

    Raises jose.JWTError when the signature, expiry or audience is wrong.
    """
    options = {"verify_aud": settings.AUTH_JWT_AUDIENCE is not None}
    return jwt.decode(
        token,
        settings.AUTH_JWT_SECRET,
        algorithms=[ALGORITHM],
        audience=settings.AUTH_JWT_AUDIENCE,
        options=options,
    )


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Mint a token the way the auth provider does. Used by dev scripts and tests."""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode["exp"] = expire
    if settings.AUTH_JWT_AUDIENCE:
        to_encode["aud"] = settings.AUTH_JWT_AUDIENCE
    return jwt.encode(to_encode, settings.AUTH_JWT_SECRET, algorithm=ALGORITHM)
