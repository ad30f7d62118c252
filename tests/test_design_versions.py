import uuid

import pytest
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from qrmenu.designs.models import DesignVersion
from qrmenu.designs.schemas import DesignDocument, DesignVersionCreate, DesignVersionUpdate
from qrmenu.designs.service import DesignVersionService
from qrmenu.shared.exceptions import CannotDeleteActiveVersion, InvalidInput, NotFound

from conftest import create_business, create_profile, make_design


def version_in(title: str, set_as_active: bool = False) -> DesignVersionCreate:
    return DesignVersionCreate(
        name=title,
        design=DesignDocument.model_validate(make_design(title)),
        set_as_active=set_as_active,
    )


async def active_ids(db: AsyncSession, business_id) -> set:
    result = await db.execute(
        select(DesignVersion.id).where(
            DesignVersion.business_id == business_id,
            DesignVersion.is_active == True,
        )
    )
    return set(result.scalars().all())


async def version_count(db: AsyncSession, business_id) -> int:
    result = await db.execute(
        select(func.count(DesignVersion.id)).where(DesignVersion.business_id == business_id)
    )
    return result.scalar_one()


@pytest.mark.asyncio
async def test_create_inactive_by_default(db_session: AsyncSession, business):
    service = DesignVersionService(db_session)
    version = await service.create_version(business.id, version_in("Draft"))

    assert version.is_active is False
    assert version.design["headerTitle"] == "Draft"
    assert await service.get_active_version(business.id) is None


@pytest.mark.asyncio
async def test_create_blank_name_rejected(db_session: AsyncSession, business):
    service = DesignVersionService(db_session)
    with pytest.raises(InvalidInput):
        await service.create_version(business.id, version_in("   "))
    assert await version_count(db_session, business.id) == 0


@pytest.mark.asyncio
async def test_create_as_active_matches_activate_later(db_session: AsyncSession, owner):
    service = DesignVersionService(db_session)

    a = await create_business(db_session, owner)
    await service.create_version(a.id, version_in("A1", set_as_active=True))
    a2 = await service.create_version(a.id, version_in("A2", set_as_active=True))

    other_owner = await create_profile(db_session)
    b = await create_business(db_session, other_owner)
    await service.create_version(b.id, version_in("B1", set_as_active=True))
    b2 = await service.create_version(b.id, version_in("B2"))
    await service.set_active_version(b.id, b2.id)

    assert await active_ids(db_session, a.id) == {a2.id}
    assert await active_ids(db_session, b.id) == {b2.id}


@pytest.mark.asyncio
async def test_set_active_is_idempotent(db_session: AsyncSession, business):
    service = DesignVersionService(db_session)
    v1 = await service.create_version(business.id, version_in("V1"))
    await service.create_version(business.id, version_in("V2"))

    await service.set_active_version(business.id, v1.id)
    await service.set_active_version(business.id, v1.id)

    assert await active_ids(db_session, business.id) == {v1.id}


@pytest.mark.asyncio
async def test_at_most_one_active_through_any_sequence(db_session: AsyncSession, business):
    service = DesignVersionService(db_session)
    versions = [await service.create_version(business.id, version_in(f"V{i}")) for i in range(3)]

    for v in (versions[2], versions[0], versions[1], versions[0]):
        await service.set_active_version(business.id, v.id)
        assert await active_ids(db_session, business.id) == {v.id}

    active = await service.get_active_version(business.id)
    assert active.id == versions[0].id


@pytest.mark.asyncio
async def test_activation_is_scoped_to_business(db_session: AsyncSession, business, owner):
    service = DesignVersionService(db_session)
    mine = await service.create_version(business.id, version_in("Mine", set_as_active=True))

    other_owner = await create_profile(db_session)
    other = await create_business(db_session, other_owner)
    theirs = await service.create_version(other.id, version_in("Theirs", set_as_active=True))

    with pytest.raises(NotFound):
        await service.set_active_version(business.id, theirs.id)

    assert await active_ids(db_session, business.id) == {mine.id}
    assert await active_ids(db_session, other.id) == {theirs.id}


@pytest.mark.asyncio
async def test_delete_active_version_refused(db_session: AsyncSession, business):
    service = DesignVersionService(db_session)
    active = await service.create_version(business.id, version_in("Live", set_as_active=True))
    await service.create_version(business.id, version_in("Draft"))

    with pytest.raises(CannotDeleteActiveVersion) as exc_info:
        await service.delete_version(business.id, active.id)

    assert exc_info.value.message == "Cannot delete the active design. Activate another design first."
    assert await version_count(db_session, business.id) == 2
    assert await active_ids(db_session, business.id) == {active.id}


@pytest.mark.asyncio
async def test_delete_inactive_version(db_session: AsyncSession, business):
    service = DesignVersionService(db_session)
    draft = await service.create_version(business.id, version_in("Draft"))

    await service.delete_version(business.id, draft.id)

    assert await version_count(db_session, business.id) == 0
    with pytest.raises(NotFound):
        await service.get_version(business.id, draft.id)


@pytest.mark.asyncio
async def test_delete_unknown_version(db_session: AsyncSession, business):
    service = DesignVersionService(db_session)
    with pytest.raises(NotFound):
        await service.delete_version(business.id, uuid.uuid4())


@pytest.mark.asyncio
async def test_update_is_partial(db_session: AsyncSession, business):
    service = DesignVersionService(db_session)
    version = await service.create_version(business.id, version_in("Original"))

    updated = await service.update_version(
        business.id, version.id, DesignVersionUpdate(description="Ramadan menu")
    )

    assert updated.name == "Original"
    assert updated.description == "Ramadan menu"
    assert updated.design["headerTitle"] == "Original"
    assert updated.is_active is False


@pytest.mark.asyncio
async def test_update_can_activate_and_deactivate(db_session: AsyncSession, business):
    service = DesignVersionService(db_session)
    await service.create_version(business.id, version_in("First", set_as_active=True))
    second = await service.create_version(business.id, version_in("Second"))

    await service.update_version(business.id, second.id, DesignVersionUpdate(set_as_active=True))
    assert await active_ids(db_session, business.id) == {second.id}

    await service.update_version(business.id, second.id, DesignVersionUpdate(set_as_active=False))
    assert await active_ids(db_session, business.id) == set()


@pytest.mark.asyncio
async def test_update_rejects_blank_name(db_session: AsyncSession, business):
    service = DesignVersionService(db_session)
    version = await service.create_version(business.id, version_in("Original"))
    with pytest.raises(InvalidInput):
        await service.update_version(business.id, version.id, DesignVersionUpdate(name=""))


@pytest.mark.asyncio
async def test_link_to_qr_leaves_active_flag_alone(db_session: AsyncSession, business):
    service = DesignVersionService(db_session)
    active = await service.create_version(business.id, version_in("Active", set_as_active=True))
    draft = await service.create_version(business.id, version_in("Draft"))

    linked = await service.link_to_qr(business.id, draft.id)

    assert linked.qr_design_version_id == draft.id
    assert await active_ids(db_session, business.id) == {active.id}


@pytest.mark.asyncio
async def test_link_foreign_version_is_not_found(db_session: AsyncSession, business):
    service = DesignVersionService(db_session)
    mine = await service.create_version(business.id, version_in("Mine"))
    await service.link_to_qr(business.id, mine.id)

    other_owner = await create_profile(db_session)
    other = await create_business(db_session, other_owner)
    theirs = await service.create_version(other.id, version_in("Theirs"))

    with pytest.raises(NotFound):
        await service.link_to_qr(business.id, theirs.id)

    await db_session.refresh(business)
    assert business.qr_design_version_id == mine.id


@pytest.mark.asyncio
async def test_qr_link_reports_dangling_pointer(db_session: AsyncSession, business):
    service = DesignVersionService(db_session)
    draft = await service.create_version(business.id, version_in("Draft"))
    await service.link_to_qr(business.id, draft.id)
    await service.delete_version(business.id, draft.id)

    await db_session.refresh(business)
    pointer, version = await service.get_qr_link(business)
    assert pointer == draft.id
    assert version is None


@pytest.mark.asyncio
async def test_unlink_clears_pointer(db_session: AsyncSession, business):
    service = DesignVersionService(db_session)
    draft = await service.create_version(business.id, version_in("Draft"))
    await service.link_to_qr(business.id, draft.id)

    unlinked = await service.unlink_qr(business.id)

    assert unlinked.qr_design_version_id is None
    assert await service.get_qr_link(unlinked) == (None, None)


@pytest.mark.asyncio
async def test_list_versions_newest_first(db_session: AsyncSession, business):
    service = DesignVersionService(db_session)
    for title in ("One", "Two", "Three"):
        await service.create_version(business.id, version_in(title))

    names = [v.name for v in await service.list_versions(business.id)]
    assert names == ["Three", "Two", "One"]
