from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from qrmenu.database import get_db
from qrmenu.business.service import BusinessService
from qrmenu.public.schemas import PublicMenuResponse, LiveBusiness
from qrmenu.public.service import PublicMenuService

router = APIRouter(prefix="/public", tags=["public"])


@router.get("/menu/{slug}", response_model=PublicMenuResponse)
async def get_public_menu(slug: str, db: AsyncSession = Depends(get_db)):
    service = PublicMenuService(db)
    return await service.get_menu(slug)


@router.get("/businesses", response_model=List[LiveBusiness])
async def list_live_businesses(db: AsyncSession = Depends(get_db)):
    """Slugs currently serving a menu, for the sitemap."""
    service = BusinessService(db)
    return await service.list_live()
