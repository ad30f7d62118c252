from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from qrmenu.database import get_db
from qrmenu.auth.dependencies import get_owner_business
from qrmenu.business.models import Business
from qrmenu.menu.schemas import (
    CategoryCreate,
    CategoryUpdate,
    CategoryResponse,
    CategoryWithItems,
    ItemCreate,
    ItemUpdate,
    ItemResponse,
)
from qrmenu.menu.service import MenuService

router = APIRouter(prefix="/admin/menu", tags=["menu"])


@router.get("/categories", response_model=List[CategoryWithItems])
async def list_categories(
    business: Business = Depends(get_owner_business),
    db: AsyncSession = Depends(get_db),
):
    service = MenuService(db)
    return await service.list_categories(business.id)


@router.post("/categories", response_model=CategoryResponse)
async def create_category(
    category: CategoryCreate,
    business: Business = Depends(get_owner_business),
    db: AsyncSession = Depends(get_db),
):
    service = MenuService(db)
    return await service.create_category(business.id, category)


@router.patch("/categories/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: UUID,
    category: CategoryUpdate,
    business: Business = Depends(get_owner_business),
    db: AsyncSession = Depends(get_db),
):
    service = MenuService(db)
    return await service.update_category(business.id, category_id, category)


@router.delete("/categories/{category_id}")
async def delete_category(
    category_id: UUID,
    business: Business = Depends(get_owner_business),
    db: AsyncSession = Depends(get_db),
):
    service = MenuService(db)
    await service.delete_category(business.id, category_id)
    return {"success": True}


@router.post("/items", response_model=ItemResponse)
async def create_item(
    item: ItemCreate,
    business: Business = Depends(get_owner_business),
    db: AsyncSession = Depends(get_db),
):
    service = MenuService(db)
    return await service.create_item(business.id, item)


@router.patch("/items/{item_id}", response_model=ItemResponse)
async def update_item(
    item_id: UUID,
    item: ItemUpdate,
    business: Business = Depends(get_owner_business),
    db: AsyncSession = Depends(get_db),
):
    service = MenuService(db)
    return await service.update_item(business.id, item_id, item)


@router.delete("/items/{item_id}")
async def delete_item(
    item_id: UUID,
    business: Business = Depends(get_owner_business),
    db: AsyncSession = Depends(get_db),
):
    service = MenuService(db)
    await service.delete_item(business.id, item_id)
    return {"success": True}
