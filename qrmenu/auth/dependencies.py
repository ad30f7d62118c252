from typing import Optional
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from qrmenu.database import get_db
from qrmenu.auth import security
from qrmenu.auth.models import Profile, UserRole
from qrmenu.auth.schemas import TokenPayload

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> Profile:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if credentials is None:
        raise credentials_exception
    try:
        payload = TokenPayload(**security.decode_access_token(credentials.credentials))
        if payload.sub is None:
            raise credentials_exception
        user_id = UUID(payload.sub)
    except (JWTError, ValidationError, ValueError):
        raise credentials_exception

    result = await db.execute(select(Profile).where(Profile.user_id == user_id))
    profile = result.scalars().first()

    if profile is None:
        raise credentials_exception
    return profile


class CheckRole:
    """FastAPI dependency that checks the current user has a specific role."""

    def __init__(self, role: UserRole):
        self.role = role

    async def __call__(self, user: Profile = Depends(get_current_user)) -> Profile:
        if user.role != self.role:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Requires role: {self.role.value}",
            )
        return user


require_owner = CheckRole(UserRole.OWNER)
require_super_admin = CheckRole(UserRole.SUPER_ADMIN)


async def get_owner_business(
    current_user: Profile = Depends(require_owner),
    db: AsyncSession = Depends(get_db),
):
    """Resolve the business owned by the calling owner.

    Every owner-scoped endpoint hangs off this; it raises 404 when the owner
    has not created a business yet.
    """
    from qrmenu.business.models import Business

    result = await db.execute(
        select(Business).where(Business.owner_id == current_user.user_id)
    )
    business = result.scalars().first()
    if not business:
        raise HTTPException(status_code=404, detail="Business not found")
    return business
