"""Which design a business shows to the public.

The QR pointer wins when it resolves to a stored design; otherwise the
legacy inline ``business.design`` is used; ``None`` tells the caller to
render the plain categorized menu. Failures along the way only ever move
resolution to the next source, so a dangling pointer or a database hiccup
degrades the public page instead of breaking it.
"""
import logging
from typing import Any, Dict, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from qrmenu.business.models import Business
from qrmenu.designs.models import DesignVersion

logger = logging.getLogger(__name__)


async def resolve_display_design(db: AsyncSession, business: Business) -> Optional[Dict[str, Any]]:
    # Read before any query: a rollback below expires the instance
    business_id = business.id
    pointer = business.qr_design_version_id
    fallback = business.design

    if pointer is not None:
        try:
            result = await db.execute(
                select(DesignVersion.design).where(
                    DesignVersion.id == pointer,
                    DesignVersion.business_id == business_id,
                )
            )
            design = result.scalar_one_or_none()
            if design is not None:
                return design
            logger.warning(
                f"QR design {pointer} for business {business_id} not found, using inline design"
            )
        except SQLAlchemyError as e:
            await db.rollback()
            logger.warning(f"Failed to load QR design for business {business_id}: {e}")

    return fallback
