import asyncio
from uuid import UUID

# Import the app to ensure all models are registered with SQLAlchemy
import qrmenu.main  # noqa: F401

from qrmenu.database import AsyncSessionLocal
from qrmenu.auth.models import Profile, UserRole
from qrmenu.business.models import Business, BusinessStatus
from qrmenu.designs.models import DesignVersion
from qrmenu.menu.models import Category, Item

SUPER_ADMIN_ID = UUID("00000000-0000-0000-0000-000000000001")
OWNER_ID = UUID("00000000-0000-0000-0000-000000000002")
BUSINESS_ID = UUID("00000000-0000-0000-0000-000000000010")
DESIGN_ID = UUID("00000000-0000-0000-0000-000000000020")

DEMO_DESIGN = {
    "headerTitle": "Demo Cafe",
    "background": "#fffaf3",
    "accentColor": "#E85D04",
    "fontFamily": "Cairo, sans-serif",
    "layout": "card",
    "sections": [
        {
            "title": "Hot Drinks",
            "items": [
                {"name": "Espresso", "price": "12"},
                {"name": "Cappuccino", "price": "16", "description": "Double shot, steamed milk"},
            ],
        },
        {
            "title": "Desserts",
            "items": [{"name": "Basbousa", "price": "14"}],
        },
    ],
}

async def seed_data():
    async with AsyncSessionLocal() as session:
        # 1. Profiles
        if not await session.get(Profile, SUPER_ADMIN_ID):
            print("Creating super admin profile...")
            session.add(Profile(
                id=SUPER_ADMIN_ID,
                user_id=SUPER_ADMIN_ID,
                email="admin@demo.menu",
                role=UserRole.SUPER_ADMIN,
            ))
        if not await session.get(Profile, OWNER_ID):
            print("Creating owner profile...")
            session.add(Profile(
                id=OWNER_ID,
                user_id=OWNER_ID,
                email="owner@demo.menu",
                phone_number="+966500000000",
                role=UserRole.OWNER,
            ))
        await session.flush()

        # 2. Business with a plain menu
        business = await session.get(Business, BUSINESS_ID)
        if not business:
            print("Creating demo business...")
            business = Business(
                id=BUSINESS_ID,
                owner_id=OWNER_ID,
                name="Demo Cafe",
                slug="demo-cafe",
                status=BusinessStatus.ACTIVE,
                primary_color="#E85D04",
            )
            session.add(business)
            await session.flush()

            drinks = Category(business_id=BUSINESS_ID, name="Hot Drinks", position=0)
            session.add(drinks)
            await session.flush()
            session.add_all([
                Item(category_id=drinks.id, name="Espresso", price=12, position=0),
                Item(category_id=drinks.id, name="Cappuccino", price=16, position=1),
            ])

        # 3. A design version shown through the QR code
        if not await session.get(DesignVersion, DESIGN_ID):
            print("Creating demo design and linking it to the QR code...")
            session.add(DesignVersion(
                id=DESIGN_ID,
                business_id=BUSINESS_ID,
                name="Launch design",
                description="Seeded",
                design=DEMO_DESIGN,
                is_active=True,
                created_by=OWNER_ID,
            ))
            business.qr_design_version_id = DESIGN_ID

        await session.commit()
        print("Seeding complete.")

if __name__ == "__main__":
    asyncio.run(seed_data())
