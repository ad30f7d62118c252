import uuid

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from qrmenu.designs.display import resolve_display_design
from qrmenu.designs.models import DesignVersion

from conftest import create_business, create_profile, make_design


async def add_version(db: AsyncSession, business, title: str, is_active: bool = False) -> DesignVersion:
    version = DesignVersion(
        business_id=business.id,
        name=title,
        design=make_design(title),
        is_active=is_active,
    )
    db.add(version)
    await db.commit()
    await db.refresh(version)
    return version


@pytest.mark.asyncio
async def test_nothing_to_show(db_session: AsyncSession, business):
    assert await resolve_display_design(db_session, business) is None


@pytest.mark.asyncio
async def test_inline_design_when_no_pointer(db_session: AsyncSession, owner):
    business = await create_business(db_session, owner, design=make_design("Inline"))
    design = await resolve_display_design(db_session, business)
    assert design["headerTitle"] == "Inline"


@pytest.mark.asyncio
async def test_qr_version_wins_over_inline(db_session: AsyncSession, owner):
    business = await create_business(db_session, owner, design=make_design("Inline"))
    version = await add_version(db_session, business, "Linked")
    business.qr_design_version_id = version.id
    await db_session.commit()

    design = await resolve_display_design(db_session, business)
    assert design["headerTitle"] == "Linked"


@pytest.mark.asyncio
async def test_active_flag_does_not_drive_display(db_session: AsyncSession, owner):
    business = await create_business(db_session, owner, design=make_design("Inline"))
    linked = await add_version(db_session, business, "Linked")
    await add_version(db_session, business, "Active", is_active=True)
    business.qr_design_version_id = linked.id
    await db_session.commit()

    design = await resolve_display_design(db_session, business)
    assert design["headerTitle"] == "Linked"


@pytest.mark.asyncio
async def test_dangling_pointer_falls_back_to_inline(db_session: AsyncSession, owner):
    business = await create_business(
        db_session, owner, design=make_design("Inline"), qr_design_version_id=uuid.uuid4()
    )
    design = await resolve_display_design(db_session, business)
    assert design["headerTitle"] == "Inline"


@pytest.mark.asyncio
async def test_dangling_pointer_without_inline(db_session: AsyncSession, owner):
    business = await create_business(db_session, owner, qr_design_version_id=uuid.uuid4())
    assert await resolve_display_design(db_session, business) is None


@pytest.mark.asyncio
async def test_pointer_into_another_business_is_ignored(db_session: AsyncSession, owner):
    other_owner = await create_profile(db_session)
    other = await create_business(db_session, other_owner)
    foreign = await add_version(db_session, other, "Foreign")

    business = await create_business(
        db_session, owner, design=make_design("Inline"), qr_design_version_id=foreign.id
    )
    design = await resolve_display_design(db_session, business)
    assert design["headerTitle"] == "Inline"


@pytest.mark.asyncio
async def test_store_failure_falls_back_to_inline(db_session: AsyncSession, owner, monkeypatch):
    business = await create_business(
        db_session, owner, design=make_design("Inline"), qr_design_version_id=uuid.uuid4()
    )

    async def failing_execute(*args, **kwargs):
        raise OperationalError("SELECT design FROM design_versions", {}, Exception("connection lost"))

    monkeypatch.setattr(AsyncSession, "execute", failing_execute)

    design = await resolve_display_design(db_session, business)
    assert design["headerTitle"] == "Inline"
