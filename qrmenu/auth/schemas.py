from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict
from uuid import UUID

from qrmenu.auth.models import UserRole

class TokenPayload(BaseModel):
    sub: Optional[str] = None

class ProfileResponse(BaseModel):
    user_id: UUID
    email: Optional[str] = None
    phone_number: Optional[str] = None
    role: UserRole
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
