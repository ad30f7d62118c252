from fastapi import APIRouter

from qrmenu.business.router import router as business_router
from qrmenu.designs.router import router as designs_router
from qrmenu.menu.router import router as menu_router
from qrmenu.public.router import router as public_router
from qrmenu.super_admin.router import router as super_admin_router

api_router = APIRouter()

api_router.include_router(business_router)
api_router.include_router(designs_router)
api_router.include_router(menu_router)
api_router.include_router(public_router)
api_router.include_router(super_admin_router)
