from datetime import datetime
from uuid import UUID
from typing import Optional
from pydantic import BaseModel, ConfigDict

from qrmenu.business.models import BusinessStatus

class StatusUpdate(BaseModel):
    status: BusinessStatus

class TimeWindowUpdate(BaseModel):
    # Absent and null differ: null means "no limit"
    minutes: Optional[int] = None
    days: Optional[int] = None

class OwnerContact(BaseModel):
    email: Optional[str] = None
    phone_number: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

class OwnerContactUpdate(BaseModel):
    # An empty string clears the field
    email: Optional[str] = None
    phone_number: Optional[str] = None

class OwnerContactResponse(BaseModel):
    success: bool = True
    message: str
    profile: OwnerContact

class AdminBusinessResponse(BaseModel):
    id: UUID
    owner_id: UUID
    name: str
    slug: str
    theme_id: str
    logo_url: Optional[str] = None
    primary_color: Optional[str] = None
    status: BusinessStatus
    effective_status: BusinessStatus
    expires_at: Optional[datetime] = None
    qr_design_version_id: Optional[UUID] = None
    created_at: datetime
    owner: Optional[OwnerContact] = None

    model_config = ConfigDict(from_attributes=True)
