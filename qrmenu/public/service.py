import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from qrmenu.business.lifecycle import effective_status
from qrmenu.business.models import BusinessStatus
from qrmenu.business.service import BusinessService
from qrmenu.designs.display import resolve_display_design
from qrmenu.menu.service import MenuService
from qrmenu.public.schemas import PublicBusiness
from qrmenu.shared.exceptions import NotFound

logger = logging.getLogger(__name__)


class PublicMenuService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_menu(self, slug: str) -> dict:
        """Everything the diner-facing page needs for ``slug``.

        A paused (or lapsed) business gets its header only. Otherwise the
        resolved design is returned, or, when there is none, the available
        categories and items. Only an unknown slug is an error.
        """
        business = await BusinessService(self.db).get_by_slug(slug)
        if not business:
            raise NotFound("Menu not found")

        business_id = business.id
        # Snapshot now: a rollback in the fallbacks below expires the instance
        header = PublicBusiness.model_validate(business)
        status = effective_status(business.status, business.expires_at)
        paused = status == BusinessStatus.PAUSED

        design: Optional[dict] = None
        categories = []
        if not paused:
            design = await resolve_display_design(self.db, business)
            if design is None:
                try:
                    categories = await MenuService(self.db).list_categories(business_id, available_only=True)
                except SQLAlchemyError as e:
                    await self.db.rollback()
                    logger.warning(f"Failed to load categories for business {business_id}: {e}")

        return {
            "business": header,
            "effective_status": status,
            "is_paused": paused,
            "design": design,
            "categories": categories,
        }
