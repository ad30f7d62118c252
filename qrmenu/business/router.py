from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from qrmenu.database import get_db
from qrmenu.auth.models import Profile
from qrmenu.auth.dependencies import require_owner, get_owner_business
from qrmenu.business.models import Business
from qrmenu.business.qr import public_menu_url, render_qr_png
from qrmenu.business.schemas import (
    BusinessCreate,
    BusinessUpdate,
    BusinessResponse,
    DesignSaveRequest,
    DesignSaveResponse,
)
from qrmenu.business.service import BusinessService
from qrmenu.designs.schemas import DesignVersionResponse

router = APIRouter(prefix="/admin/business", tags=["business"])


@router.post("", response_model=BusinessResponse)
async def create_business(
    business: BusinessCreate,
    current_user: Profile = Depends(require_owner),
    db: AsyncSession = Depends(get_db),
):
    service = BusinessService(db)
    return await service.create_business(business, current_user.user_id)


@router.get("", response_model=BusinessResponse)
async def get_business(business: Business = Depends(get_owner_business)):
    return business


@router.patch("", response_model=BusinessResponse)
async def update_business(
    business_in: BusinessUpdate,
    business: Business = Depends(get_owner_business),
    db: AsyncSession = Depends(get_db),
):
    service = BusinessService(db)
    return await service.update_business(business, business_in)


@router.post("/design", response_model=DesignSaveResponse)
async def save_design(
    request: DesignSaveRequest,
    current_user: Profile = Depends(require_owner),
    business: Business = Depends(get_owner_business),
    db: AsyncSession = Depends(get_db),
):
    """
    Save from the design editor: stores the design, records it as the new
    active version and points the QR code at it.
    """
    service = BusinessService(db)
    result = await service.save_design(business, request.design, created_by=current_user.user_id)
    return DesignSaveResponse(
        business=BusinessResponse.model_validate(result.business),
        version=DesignVersionResponse.model_validate(result.version),
        qr_linked=result.qr_linked,
        qr_error=result.qr_error,
    )


@router.get("/qr.png")
async def get_qr_code(business: Business = Depends(get_owner_business)):
    """PNG QR code that opens the business's public menu."""
    png = render_qr_png(public_menu_url(business.slug))
    return Response(
        content=png,
        media_type="image/png",
        headers={"Content-Disposition": f'inline; filename="{business.slug}-qr.png"'},
    )
