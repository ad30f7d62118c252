"""
Mint a development bearer token for an existing profile.

Usage:
    python -m qrmenu.scripts.create_token owner@demo.menu
"""
import asyncio
import sys

from sqlalchemy import select

# Import the app to ensure all models are registered with SQLAlchemy
import qrmenu.main  # noqa: F401

from qrmenu.database import AsyncSessionLocal
from qrmenu.auth.models import Profile
from qrmenu.auth.security import create_access_token

async def create_token(email: str):
    async with AsyncSessionLocal() as session:
        result = await session.execute(select(Profile).where(Profile.email == email))
        profile = result.scalars().first()
        if not profile:
            print(f"No profile with email {email}. Run qrmenu.scripts.seed first.")
            return

        token = create_access_token({"sub": str(profile.user_id), "role": profile.role.value})
        print(f"Role: {profile.role.value}")
        print(token)

if __name__ == "__main__":
    if len(sys.argv) != 2:
        print("Usage: python -m qrmenu.scripts.create_token <email>")
        sys.exit(1)
    asyncio.run(create_token(sys.argv[1]))
