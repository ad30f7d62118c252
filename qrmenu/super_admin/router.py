from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from qrmenu.database import get_db
from qrmenu.auth.models import Profile
from qrmenu.auth.dependencies import require_super_admin
from qrmenu.business.lifecycle import UNSET
from qrmenu.business.schemas import BusinessResponse
from qrmenu.super_admin.schemas import (
    AdminBusinessResponse,
    OwnerContact,
    OwnerContactResponse,
    OwnerContactUpdate,
    StatusUpdate,
    TimeWindowUpdate,
)
from qrmenu.super_admin.service import SuperAdminService

router = APIRouter(prefix="/super-admin/businesses", tags=["super-admin"])


@router.get("", response_model=List[AdminBusinessResponse])
async def list_businesses(
    current_user: Profile = Depends(require_super_admin),
    db: AsyncSession = Depends(get_db),
):
    service = SuperAdminService(db)
    return await service.list_businesses()


@router.patch("/{business_id}/status", response_model=BusinessResponse)
async def update_business_status(
    business_id: UUID,
    body: StatusUpdate,
    current_user: Profile = Depends(require_super_admin),
    db: AsyncSession = Depends(get_db),
):
    service = SuperAdminService(db)
    return await service.update_status(business_id, body.status)


@router.patch("/{business_id}/time", response_model=BusinessResponse)
async def update_business_time(
    business_id: UUID,
    body: TimeWindowUpdate,
    current_user: Profile = Depends(require_super_admin),
    db: AsyncSession = Depends(get_db),
):
    """
    Set the trial window. ``minutes`` (or legacy ``days``): -1 or 0 pauses
    now, null removes the limit, a positive value opens a window from now.
    """
    sent = body.model_fields_set
    service = SuperAdminService(db)
    return await service.set_time_window(
        business_id,
        minutes=body.minutes if "minutes" in sent else UNSET,
        days=body.days if "days" in sent else UNSET,
    )


@router.patch("/{business_id}/profile", response_model=OwnerContactResponse)
async def update_owner_contact(
    business_id: UUID,
    body: OwnerContactUpdate,
    current_user: Profile = Depends(require_super_admin),
    db: AsyncSession = Depends(get_db),
):
    service = SuperAdminService(db)
    profile = await service.update_owner_contact(business_id, body)
    return OwnerContactResponse(
        message="Profile updated successfully",
        profile=OwnerContact.model_validate(profile),
    )


@router.delete("/{business_id}")
async def delete_business(
    business_id: UUID,
    current_user: Profile = Depends(require_super_admin),
    db: AsyncSession = Depends(get_db),
):
    service = SuperAdminService(db)
    await service.delete_business(business_id)
    return {"success": True, "message": "Business deleted successfully"}
