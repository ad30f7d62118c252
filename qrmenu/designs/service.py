import logging
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import select, update, desc
from sqlalchemy.ext.asyncio import AsyncSession

from qrmenu.business.models import Business
from qrmenu.designs.models import DesignVersion
from qrmenu.designs.schemas import DesignVersionCreate, DesignVersionUpdate
from qrmenu.shared.exceptions import NotFound, InvalidInput, CannotDeleteActiveVersion
from qrmenu.shared.models import utcnow

logger = logging.getLogger(__name__)


class DesignVersionService:
    """Design versions of one business, and the business's QR pointer.

    Every lookup is scoped by ``business_id``; a version id that belongs to
    another business behaves exactly like one that does not exist.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get_owned(self, business_id: UUID, version_id: UUID) -> DesignVersion:
        result = await self.db.execute(
            select(DesignVersion).where(
                DesignVersion.id == version_id,
                DesignVersion.business_id == business_id,
            )
        )
        version = result.scalar_one_or_none()
        if not version:
            raise NotFound("Design not found")
        return version

    async def _get_business(self, business_id: UUID) -> Business:
        business = await self.db.get(Business, business_id)
        if not business:
            raise NotFound("Business not found")
        return business

    async def _clear_active(self, business_id: UUID, keep_id: Optional[UUID] = None):
        stmt = (
            update(DesignVersion)
            .where(
                DesignVersion.business_id == business_id,
                DesignVersion.is_active == True,
            )
            .values(is_active=False)
        )
        if keep_id is not None:
            stmt = stmt.where(DesignVersion.id != keep_id)
        await self.db.execute(stmt)

    async def list_versions(self, business_id: UUID) -> List[DesignVersion]:
        result = await self.db.execute(
            select(DesignVersion)
            .where(DesignVersion.business_id == business_id)
            .order_by(desc(DesignVersion.created_at))
        )
        return list(result.scalars().all())

    async def get_version(self, business_id: UUID, version_id: UUID) -> DesignVersion:
        return await self._get_owned(business_id, version_id)

    async def get_active_version(self, business_id: UUID) -> Optional[DesignVersion]:
        """The active version, or None; having none active is a normal state."""
        result = await self.db.execute(
            select(DesignVersion).where(
                DesignVersion.business_id == business_id,
                DesignVersion.is_active == True,
            ).order_by(desc(DesignVersion.updated_at)).limit(1)
        )
        return result.scalar_one_or_none()

    async def create_version(
        self,
        business_id: UUID,
        version_in: DesignVersionCreate,
        created_by: Optional[UUID] = None,
    ) -> DesignVersion:
        if not version_in.name.strip():
            raise InvalidInput("Name and design are required")

        # Inserting as active must end in the same state as activating later
        if version_in.set_as_active:
            await self._clear_active(business_id)

        version = DesignVersion(
            business_id=business_id,
            name=version_in.name,
            description=version_in.description or None,
            design=version_in.design.to_json(),
            is_active=version_in.set_as_active,
            created_by=created_by,
        )
        self.db.add(version)
        await self.db.commit()
        await self.db.refresh(version)
        return version

    async def update_version(
        self,
        business_id: UUID,
        version_id: UUID,
        version_in: DesignVersionUpdate,
    ) -> DesignVersion:
        version = await self._get_owned(business_id, version_id)
        fields = version_in.model_fields_set

        if "name" in fields:
            if not version_in.name or not version_in.name.strip():
                raise InvalidInput("Name cannot be empty")
            version.name = version_in.name
        if "description" in fields:
            version.description = version_in.description
        if "design" in fields:
            if version_in.design is None:
                raise InvalidInput("Design cannot be empty")
            version.design = version_in.design.to_json()

        if version_in.set_as_active is True:
            await self._clear_active(business_id, keep_id=version.id)
            version.is_active = True
        elif version_in.set_as_active is False:
            version.is_active = False

        version.updated_at = utcnow()
        await self.db.commit()
        await self.db.refresh(version)
        return version

    async def set_active_version(self, business_id: UUID, version_id: UUID) -> DesignVersion:
        """Make ``version_id`` the only active version of the business.

        Clearing the others and flagging the target are committed together,
        so a failure in between cannot leave the business with none active.
        Two activations racing under READ COMMITTED can still both win.
        """
        version = await self._get_owned(business_id, version_id)

        await self._clear_active(business_id, keep_id=version.id)
        version.is_active = True
        version.updated_at = utcnow()

        await self.db.commit()
        await self.db.refresh(version)
        return version

    async def delete_version(self, business_id: UUID, version_id: UUID) -> None:
        version = await self._get_owned(business_id, version_id)
        if version.is_active:
            raise CannotDeleteActiveVersion()

        await self.db.delete(version)
        await self.db.commit()

    async def link_to_qr(self, business_id: UUID, version_id: UUID) -> Business:
        # Ownership is checked before anything is written
        version = await self._get_owned(business_id, version_id)
        business = await self._get_business(business_id)

        business.qr_design_version_id = version.id
        await self.db.commit()
        await self.db.refresh(business)
        logger.info(f"Business {business_id} QR code now points at design {version.id}")
        return business

    async def unlink_qr(self, business_id: UUID) -> Business:
        business = await self._get_business(business_id)
        business.qr_design_version_id = None
        await self.db.commit()
        await self.db.refresh(business)
        return business

    async def get_qr_link(self, business: Business) -> Tuple[Optional[UUID], Optional[DesignVersion]]:
        """The QR pointer and the version it resolves to, if it still does."""
        pointer = business.qr_design_version_id
        if pointer is None:
            return None, None
        try:
            version = await self._get_owned(business.id, pointer)
        except NotFound:
            logger.warning(f"Business {business.id} QR pointer {pointer} is dangling")
            version = None
        return pointer, version
