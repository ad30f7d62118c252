import uuid

import pytest
from httpx import AsyncClient

from qrmenu.auth.security import create_access_token


@pytest.mark.asyncio
async def test_me_returns_profile(async_client: AsyncClient, owner, owner_headers):
    response = await async_client.get("/v1/auth/me", headers=owner_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["user_id"] == str(owner.user_id)
    assert data["role"] == "owner"


@pytest.mark.asyncio
async def test_me_requires_token(async_client: AsyncClient):
    response = await async_client.get("/v1/auth/me")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_me_rejects_garbage_token(async_client: AsyncClient):
    response = await async_client.get("/v1/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Could not validate credentials"


@pytest.mark.asyncio
async def test_me_rejects_token_without_profile(async_client: AsyncClient):
    token = create_access_token({"sub": str(uuid.uuid4())})
    response = await async_client.get("/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_owner_routes_forbid_super_admin(async_client: AsyncClient, admin_headers):
    response = await async_client.get("/v1/admin/business", headers=admin_headers)
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_super_admin_routes_forbid_owner(async_client: AsyncClient, owner_headers):
    response = await async_client.get("/v1/super-admin/businesses", headers=owner_headers)
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_owner_without_business_gets_404(async_client: AsyncClient, owner_headers):
    response = await async_client.get("/v1/admin/business/design-versions", headers=owner_headers)
    assert response.status_code == 404
    assert response.json()["detail"] == "Business not found"


@pytest.mark.asyncio
async def test_health(async_client: AsyncClient):
    response = await async_client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert response.json()["database"] == "ok"
