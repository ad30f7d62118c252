from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict

from qrmenu.business.models import BusinessStatus
from qrmenu.menu.schemas import CategoryWithItems

class PublicBusiness(BaseModel):
    name: str
    slug: str
    theme_id: str
    logo_url: Optional[str] = None
    primary_color: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

class PublicMenuResponse(BaseModel):
    business: PublicBusiness
    effective_status: BusinessStatus
    is_paused: bool
    design: Optional[Dict[str, Any]] = None
    categories: List[CategoryWithItems] = []

class LiveBusiness(BaseModel):
    slug: str
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
