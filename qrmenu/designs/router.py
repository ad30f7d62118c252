from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from qrmenu.database import get_db
from qrmenu.auth.models import Profile
from qrmenu.auth.dependencies import require_owner, get_owner_business
from qrmenu.business.models import Business
from qrmenu.business.schemas import BusinessResponse
from qrmenu.designs.schemas import (
    DesignVersionCreate,
    DesignVersionUpdate,
    DesignVersionSummary,
    DesignVersionResponse,
    QRLinkRequest,
    QRLinkResponse,
)
from qrmenu.designs.service import DesignVersionService

router = APIRouter(prefix="/admin/business", tags=["designs"])


@router.get("/design-versions", response_model=List[DesignVersionSummary])
async def list_design_versions(
    business: Business = Depends(get_owner_business),
    db: AsyncSession = Depends(get_db),
):
    service = DesignVersionService(db)
    return await service.list_versions(business.id)


@router.post("/design-versions", response_model=DesignVersionResponse)
async def create_design_version(
    version: DesignVersionCreate,
    current_user: Profile = Depends(require_owner),
    business: Business = Depends(get_owner_business),
    db: AsyncSession = Depends(get_db),
):
    service = DesignVersionService(db)
    return await service.create_version(business.id, version, created_by=current_user.user_id)


@router.get("/design-versions/{version_id}", response_model=DesignVersionResponse)
async def get_design_version(
    version_id: UUID,
    business: Business = Depends(get_owner_business),
    db: AsyncSession = Depends(get_db),
):
    service = DesignVersionService(db)
    return await service.get_version(business.id, version_id)


@router.put("/design-versions/{version_id}", response_model=DesignVersionResponse)
async def update_design_version(
    version_id: UUID,
    version: DesignVersionUpdate,
    business: Business = Depends(get_owner_business),
    db: AsyncSession = Depends(get_db),
):
    service = DesignVersionService(db)
    return await service.update_version(business.id, version_id, version)


@router.post("/design-versions/{version_id}/activate", response_model=DesignVersionResponse)
async def activate_design_version(
    version_id: UUID,
    business: Business = Depends(get_owner_business),
    db: AsyncSession = Depends(get_db),
):
    service = DesignVersionService(db)
    return await service.set_active_version(business.id, version_id)


@router.delete("/design-versions/{version_id}")
async def delete_design_version(
    version_id: UUID,
    business: Business = Depends(get_owner_business),
    db: AsyncSession = Depends(get_db),
):
    service = DesignVersionService(db)
    await service.delete_version(business.id, version_id)
    return {"success": True, "message": "Design deleted successfully"}


@router.get("/qr-link", response_model=QRLinkResponse)
async def get_qr_link(
    business: Business = Depends(get_owner_business),
    db: AsyncSession = Depends(get_db),
):
    service = DesignVersionService(db)
    pointer, version = await service.get_qr_link(business)
    return QRLinkResponse(
        design_version_id=pointer,
        design=DesignVersionResponse.model_validate(version) if version else None,
    )


@router.post("/qr-link", response_model=BusinessResponse)
async def link_qr_design(
    link: QRLinkRequest,
    business: Business = Depends(get_owner_business),
    db: AsyncSession = Depends(get_db),
):
    service = DesignVersionService(db)
    return await service.link_to_qr(business.id, link.design_version_id)


@router.delete("/qr-link", response_model=BusinessResponse)
async def unlink_qr_design(
    business: Business = Depends(get_owner_business),
    db: AsyncSession = Depends(get_db),
):
    service = DesignVersionService(db)
    return await service.unlink_qr(business.id)
