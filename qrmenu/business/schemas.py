from datetime import datetime
from uuid import UUID
from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict, computed_field, field_validator

from qrmenu.business.lifecycle import effective_status
from qrmenu.business.models import BusinessStatus, THEME_IDS
from qrmenu.designs.schemas import DesignDocument, DesignVersionResponse

class BusinessBase(BaseModel):
    name: str
    slug: str
    theme_id: str = "minimal"
    logo_url: Optional[str] = None
    primary_color: Optional[str] = None

    @field_validator("theme_id")
    @classmethod
    def known_theme(cls, v):
        if v is not None and v not in THEME_IDS:
            raise ValueError(f"theme_id must be one of: {', '.join(THEME_IDS)}")
        return v

class BusinessCreate(BusinessBase):
    pass

class BusinessUpdate(BusinessBase):
    name: Optional[str] = None
    slug: Optional[str] = None
    theme_id: Optional[str] = None

class BusinessResponse(BusinessBase):
    id: UUID
    owner_id: UUID
    status: BusinessStatus
    expires_at: Optional[datetime] = None
    design: Optional[Dict[str, Any]] = None
    qr_design_version_id: Optional[UUID] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @computed_field
    @property
    def effective_status(self) -> BusinessStatus:
        return effective_status(self.status, self.expires_at)

class DesignSaveRequest(BaseModel):
    design: DesignDocument

class DesignSaveResponse(BaseModel):
    success: bool = True
    business: BusinessResponse
    version: DesignVersionResponse
    qr_linked: bool
    qr_error: Optional[str] = None
