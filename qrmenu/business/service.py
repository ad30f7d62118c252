import logging
import re
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select, or_, desc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from qrmenu.config import settings
from qrmenu.business.models import Business, BusinessStatus
from qrmenu.business.schemas import BusinessCreate, BusinessUpdate
from qrmenu.designs.models import DesignVersion
from qrmenu.designs.schemas import DesignDocument, DesignVersionCreate
from qrmenu.designs.service import DesignVersionService
from qrmenu.shared.exceptions import InvalidInput, QRMenuError, UpstreamFailure
from qrmenu.shared.models import utcnow

logger = logging.getLogger(__name__)

SLUG_RE = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


@dataclass
class DesignSaveResult:
    """Outcome of the editor's save.

    ``version`` always exists once a result is returned. ``qr_linked`` is
    False when the follow-up repoint of the QR code failed, in which case
    the QR code keeps showing whatever it pointed at before.
    """
    business: Business
    version: DesignVersion
    qr_linked: bool
    qr_error: Optional[str] = None


class BusinessService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _validate_slug(self, slug: str, exclude_id: Optional[UUID] = None) -> str:
        slug = slug.strip().lower()
        if not SLUG_RE.match(slug):
            raise InvalidInput("Slug may only contain lowercase letters, digits and dashes")

        query = select(Business.id).where(Business.slug == slug)
        if exclude_id:
            query = query.where(Business.id != exclude_id)
        result = await self.db.execute(query)
        if result.first():
            raise InvalidInput(f"Slug '{slug}' is already taken")
        return slug

    async def get_by_owner(self, owner_id: UUID) -> Optional[Business]:
        result = await self.db.execute(select(Business).where(Business.owner_id == owner_id))
        return result.scalars().first()

    async def get_by_slug(self, slug: str) -> Optional[Business]:
        """Public lookup. Paused businesses are returned too; a store failure reads as missing."""
        try:
            result = await self.db.execute(
                select(Business).where(
                    Business.slug == slug,
                    Business.status.in_([BusinessStatus.ACTIVE, BusinessStatus.PAUSED]),
                )
            )
            return result.scalars().first()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.warning(f"Business lookup for slug '{slug}' failed: {e}")
            return None

    async def create_business(self, business_in: BusinessCreate, owner_id: UUID) -> Business:
        if await self.get_by_owner(owner_id):
            raise InvalidInput("This account already has a business")
        if not business_in.name.strip():
            raise InvalidInput("Name is required")

        business = Business(
            **business_in.model_dump(exclude={"slug"}),
            slug=await self._validate_slug(business_in.slug),
            owner_id=owner_id,
            status=BusinessStatus.ACTIVE,
            expires_at=utcnow() + timedelta(days=settings.TRIAL_DAYS),
        )
        self.db.add(business)
        await self.db.commit()
        await self.db.refresh(business)
        return business

    async def update_business(self, business: Business, business_in: BusinessUpdate) -> Business:
        update_data = business_in.model_dump(exclude_unset=True)

        if "slug" in update_data:
            if not update_data["slug"]:
                raise InvalidInput("Slug cannot be empty")
            update_data["slug"] = await self._validate_slug(update_data["slug"], exclude_id=business.id)
        for required in ("name", "theme_id"):
            if required in update_data and not update_data[required]:
                raise InvalidInput(f"{required} cannot be empty")

        for field, value in update_data.items():
            setattr(business, field, value)

        await self.db.commit()
        await self.db.refresh(business)
        return business

    async def save_design(
        self,
        business: Business,
        document: DesignDocument,
        created_by: Optional[UUID] = None,
    ) -> DesignSaveResult:
        """Save the editor's document and publish it.

        1. In one transaction: store the document inline on the business and
           as a new version that becomes the only active one.
        2. Repoint the QR code at that version. Failure here is logged and
           reported in the result; the save itself stands.
        """
        business_id = business.id
        versions = DesignVersionService(self.db)

        try:
            business.design = document.to_json()
            version = await versions.create_version(
                business_id,
                DesignVersionCreate(
                    name=f"Version {utcnow():%Y-%m-%d %H:%M:%S}",
                    description="Auto-saved from design editor",
                    design=document,
                    set_as_active=True,
                ),
                created_by=created_by,
            )
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Saving design for business {business_id} failed: {e}")
            raise UpstreamFailure("Failed to save design") from e

        version_id = version.id
        try:
            business = await versions.link_to_qr(business_id, version_id)
        except (QRMenuError, SQLAlchemyError) as e:
            await self.db.rollback()
            logger.warning(
                f"Design {version_id} saved for business {business_id} but QR repoint failed: {e}"
            )
            await self.db.refresh(business)
            await self.db.refresh(version)
            message = e.message if isinstance(e, QRMenuError) else UpstreamFailure.default_message
            return DesignSaveResult(business=business, version=version, qr_linked=False, qr_error=message)

        return DesignSaveResult(business=business, version=version, qr_linked=True)

    async def list_live(self, now: Optional[datetime] = None) -> List[Business]:
        """Active businesses whose window has not closed, most recently updated first."""
        now = now or utcnow()
        result = await self.db.execute(
            select(Business)
            .where(
                Business.status == BusinessStatus.ACTIVE,
                or_(Business.expires_at.is_(None), Business.expires_at > now),
            )
            .order_by(desc(Business.updated_at))
        )
        return list(result.scalars().all())
