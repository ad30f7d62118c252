import logging
from typing import List
from uuid import UUID

from sqlalchemy import select, delete, desc
from sqlalchemy.ext.asyncio import AsyncSession

from qrmenu.auth.models import Profile, UserRole
from qrmenu.business.lifecycle import UNSET, compute_time_window, effective_status, pause_expired
from qrmenu.business.models import Business, BusinessStatus
from qrmenu.designs.models import DesignVersion
from qrmenu.menu.models import Category, Item
from qrmenu.shared.exceptions import InvalidInput, NotFound
from qrmenu.super_admin.schemas import OwnerContactUpdate

logger = logging.getLogger(__name__)


class SuperAdminService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get_business(self, business_id: UUID) -> Business:
        business = await self.db.get(Business, business_id)
        if not business:
            raise NotFound("Business not found")
        return business

    async def list_businesses(self) -> List[dict]:
        """All tenants, newest first, with owner contact and effective status."""
        await pause_expired(self.db)

        result = await self.db.execute(select(Business).order_by(desc(Business.created_at)))
        businesses = result.scalars().all()
        if not businesses:
            return []

        owner_ids = {b.owner_id for b in businesses}
        profile_result = await self.db.execute(select(Profile).where(Profile.user_id.in_(owner_ids)))
        profiles = {p.user_id: p for p in profile_result.scalars().all()}

        enriched = []
        for b in businesses:
            profile = profiles.get(b.owner_id)
            owner = {"email": profile.email, "phone_number": profile.phone_number} if profile else None
            enriched.append({
                **b.__dict__,
                "effective_status": effective_status(b.status, b.expires_at),
                "owner": owner,
            })
        return enriched

    async def update_status(self, business_id: UUID, new_status: BusinessStatus) -> Business:
        business = await self._get_business(business_id)
        business.status = new_status
        await self.db.commit()
        await self.db.refresh(business)
        logger.info(f"Business {business_id} status set to {new_status.value}")
        return business

    async def set_time_window(self, business_id: UUID, minutes=UNSET, days=UNSET) -> Business:
        expires_at, new_status = compute_time_window(minutes=minutes, days=days)
        business = await self._get_business(business_id)

        business.expires_at = expires_at
        business.status = new_status
        await self.db.commit()
        await self.db.refresh(business)
        logger.info(f"Business {business_id} window set: status={new_status.value} expires_at={expires_at}")
        return business

    async def update_owner_contact(self, business_id: UUID, contact: OwnerContactUpdate) -> Profile:
        """Change the email and/or phone of the business owner's profile.

        Creates the profile when the auth provider's sync never wrote one.
        """
        if not contact.email and not contact.phone_number:
            raise InvalidInput("Email or phone number is required")
        business = await self._get_business(business_id)

        result = await self.db.execute(select(Profile).where(Profile.user_id == business.owner_id))
        profile = result.scalars().first()
        if profile is None:
            profile = Profile(user_id=business.owner_id, role=UserRole.OWNER)
            self.db.add(profile)

        for field, value in contact.model_dump(exclude_unset=True).items():
            setattr(profile, field, value or None)

        await self.db.commit()
        await self.db.refresh(profile)
        logger.info(f"Owner contact of business {business_id} updated")
        return profile

    async def delete_business(self, business_id: UUID) -> None:
        """Delete a tenant together with its versions, categories and items."""
        business = await self._get_business(business_id)

        category_ids = select(Category.id).where(Category.business_id == business.id)
        await self.db.execute(delete(Item).where(Item.category_id.in_(category_ids)))
        await self.db.execute(delete(Category).where(Category.business_id == business.id))
        await self.db.execute(delete(DesignVersion).where(DesignVersion.business_id == business.id))
        await self.db.delete(business)
        await self.db.commit()
        logger.info(f"Business {business_id} deleted")
