from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DesignLayout(str, Enum):
    GRID = "grid"
    LIST = "list"
    CARD = "card"
    MODERN = "modern"


class DesignItem(BaseModel):
    name: str
    price: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None

    model_config = ConfigDict(extra="allow")

    @field_validator("price", mode="before")
    @classmethod
    def price_as_text(cls, v):
        # Editors send either "12.50" or 12.5
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


class DesignSection(BaseModel):
    title: str
    items: List[DesignItem] = []

    model_config = ConfigDict(extra="allow")


class DesignDocument(BaseModel):
    """The editor's JSON document describing a menu's look and content.

    Keys are camelCase on the wire, matching what the editors produce, and
    unknown keys are carried through untouched.
    """
    header_title: str = Field(alias="headerTitle")
    background: str
    background_image: Optional[str] = Field(default=None, alias="backgroundImage")
    accent_color: str = Field(alias="accentColor")
    logo: Optional[str] = None
    font_family: str = Field(alias="fontFamily")
    layout: DesignLayout = DesignLayout.GRID
    sections: List[DesignSection] = []

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    def to_json(self) -> Dict[str, Any]:
        # Only what the editor sent, explicit nulls included
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


class DesignVersionCreate(BaseModel):
    name: str
    description: Optional[str] = None
    design: DesignDocument
    set_as_active: bool = Field(default=False, alias="setAsActive")

    model_config = ConfigDict(populate_by_name=True)


class DesignVersionUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    design: Optional[DesignDocument] = None
    set_as_active: Optional[bool] = Field(default=None, alias="setAsActive")

    model_config = ConfigDict(populate_by_name=True)


class DesignVersionSummary(BaseModel):
    id: UUID
    name: str
    description: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class DesignVersionResponse(DesignVersionSummary):
    business_id: UUID
    design: Dict[str, Any]
    created_by: Optional[UUID] = None


class QRLinkRequest(BaseModel):
    design_version_id: UUID = Field(alias="designVersionId")

    model_config = ConfigDict(populate_by_name=True)


class QRLinkResponse(BaseModel):
    design_version_id: Optional[UUID] = None
    design: Optional[DesignVersionResponse] = None
