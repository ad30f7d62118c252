"""Trial and subscription windowing.

A business carries a stored ``status`` and an optional ``expires_at``. What
diners see is the *effective* status, derived from both on every read, so a
lapsed trial goes dark on time without anything having to flip ``status``.
``pause_expired`` writes the derived value back for listings; it is a
convenience sync and nothing depends on it having run.
"""
import logging
from datetime import datetime, timedelta
from typing import Optional, Tuple

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from qrmenu.business.models import Business, BusinessStatus
from qrmenu.shared.exceptions import InvalidInput
from qrmenu.shared.models import utcnow

logger = logging.getLogger(__name__)

# Sentinel for "field absent from the request", distinct from an explicit null
UNSET = object()

PAUSE_NOW = (-1, 0)


def effective_status(
    status: BusinessStatus,
    expires_at: Optional[datetime],
    now: Optional[datetime] = None,
) -> BusinessStatus:
    if BusinessStatus(status) == BusinessStatus.PAUSED:
        return BusinessStatus.PAUSED
    now = now or utcnow()
    if expires_at is not None and expires_at < now:
        return BusinessStatus.PAUSED
    return BusinessStatus.ACTIVE


def is_paused(business: Business, now: Optional[datetime] = None) -> bool:
    return effective_status(business.status, business.expires_at, now) == BusinessStatus.PAUSED


def compute_time_window(
    minutes=UNSET,
    days=UNSET,
    now: Optional[datetime] = None,
) -> Tuple[Optional[datetime], BusinessStatus]:
    """Translate a requested window into ``(expires_at, status)``.

    ``minutes`` takes precedence over the legacy ``days``. ``-1`` and ``0``
    both pause immediately, ``None`` removes the limit and a positive value
    opens a window of that length starting now.
    """
    if minutes is not UNSET:
        total = minutes
    elif days is not UNSET:
        if days is None or days == -1:
            total = days
        else:
            total = days * 24 * 60
    else:
        raise InvalidInput("Either minutes or days is required")

    if total is None:
        return None, BusinessStatus.ACTIVE
    if total in PAUSE_NOW:
        return None, BusinessStatus.PAUSED
    if total < 0:
        raise InvalidInput(f"Invalid time window: {total}")

    now = now or utcnow()
    return now + timedelta(minutes=total), BusinessStatus.ACTIVE


async def pause_expired(db: AsyncSession, now: Optional[datetime] = None) -> int:
    """Persist ``paused`` for active businesses whose window has closed.

    Best effort: a failure is logged and reported as zero rows.
    """
    now = now or utcnow()
    try:
        result = await db.execute(
            update(Business)
            .where(
                Business.status == BusinessStatus.ACTIVE,
                Business.expires_at.is_not(None),
                Business.expires_at < now,
            )
            .values(status=BusinessStatus.PAUSED)
        )
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.warning(f"Auto-pause of expired businesses failed: {e}")
        return 0

    if result.rowcount:
        logger.info(f"Auto-paused {result.rowcount} expired businesses")
    return result.rowcount or 0
