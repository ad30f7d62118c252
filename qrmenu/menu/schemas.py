from datetime import datetime
from decimal import Decimal
from uuid import UUID
from typing import Annotated, List, Optional
from pydantic import BaseModel, ConfigDict, Field, PlainSerializer

# Exact to the cent in storage, a plain number on the wire
Price = Annotated[
    Decimal,
    Field(max_digits=10, decimal_places=2),
    PlainSerializer(float, return_type=float, when_used="json"),
]

class CategoryBase(BaseModel):
    name: str
    position: int = 0
    available: bool = True
    image_url: Optional[str] = None

class CategoryCreate(CategoryBase):
    pass

class CategoryUpdate(CategoryBase):
    name: Optional[str] = None
    position: Optional[int] = None
    available: Optional[bool] = None

class ItemBase(BaseModel):
    name: str
    description: Optional[str] = None
    price: Optional[Price] = None
    image_url: Optional[str] = None
    available: bool = True
    position: Optional[int] = None

class ItemCreate(ItemBase):
    category_id: UUID

class ItemUpdate(ItemBase):
    name: Optional[str] = None
    available: Optional[bool] = None

class ItemResponse(ItemBase):
    id: UUID
    category_id: UUID
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

class CategoryResponse(CategoryBase):
    id: UUID
    business_id: UUID
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

class CategoryWithItems(CategoryResponse):
    items: List[ItemResponse] = []
