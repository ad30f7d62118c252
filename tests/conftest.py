import os

# Point settings at an in-memory database before the app is imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("AUTH_JWT_SECRET", "test-secret")

import uuid
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from qrmenu.main import app
from qrmenu.database import get_db, Base, engine_options
from qrmenu.auth.models import Profile, UserRole
from qrmenu.auth.security import create_access_token
from qrmenu.business.models import Business, BusinessStatus


def make_design(title: str = "Cafe", **overrides) -> dict:
    """A valid design document as the editor sends it."""
    design = {
        "headerTitle": title,
        "background": "#ffffff",
        "accentColor": "#E85D04",
        "fontFamily": "Cairo, sans-serif",
        "layout": "grid",
        "sections": [
            {"title": "Drinks", "items": [{"name": "Espresso", "price": "12"}]},
        ],
    }
    design.update(overrides)
    return design


def auth_headers(profile: Profile) -> dict:
    token = create_access_token({"sub": str(profile.user_id)})
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """A fresh in-memory database and session for each test."""
    # One shared connection, otherwise every checkout sees an empty database
    test_url = "sqlite+aiosqlite://"
    test_engine = create_async_engine(test_url, poolclass=StaticPool, **engine_options(test_url))
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    TestingSessionLocal = sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )

    async with TestingSessionLocal() as session:
        yield session

    await test_engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def async_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Client for testing API endpoints."""
    # Override the get_db dependency to use our test session
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


async def create_profile(db: AsyncSession, role: UserRole = UserRole.OWNER, email: str = None) -> Profile:
    user_id = uuid.uuid4()
    profile = Profile(
        user_id=user_id,
        email=email or f"{role.value}-{user_id.hex[:8]}@test.menu",
        phone_number="+966500000000",
        role=role,
    )
    db.add(profile)
    await db.commit()
    await db.refresh(profile)
    return profile


async def create_business(db: AsyncSession, owner: Profile, **fields) -> Business:
    values = {
        "name": "Test Cafe",
        "slug": f"cafe-{uuid.uuid4().hex[:8]}",
        "status": BusinessStatus.ACTIVE,
        "expires_at": None,
        "design": None,
        "qr_design_version_id": None,
    }
    values.update(fields)
    business = Business(owner_id=owner.user_id, **values)
    db.add(business)
    await db.commit()
    await db.refresh(business)
    return business


@pytest_asyncio.fixture
async def owner(db_session: AsyncSession) -> Profile:
    return await create_profile(db_session, UserRole.OWNER)


@pytest_asyncio.fixture
async def super_admin(db_session: AsyncSession) -> Profile:
    return await create_profile(db_session, UserRole.SUPER_ADMIN)


@pytest_asyncio.fixture
async def business(db_session: AsyncSession, owner: Profile) -> Business:
    return await create_business(db_session, owner)


@pytest.fixture
def owner_headers(owner: Profile) -> dict:
    return auth_headers(owner)


@pytest.fixture
def admin_headers(super_admin: Profile) -> dict:
    return auth_headers(super_admin)
