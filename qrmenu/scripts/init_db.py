import argparse
import asyncio
from qrmenu.database import engine, Base

# Register every table on Base.metadata
from qrmenu.auth.models import Profile  # noqa: F401
from qrmenu.business.models import Business  # noqa: F401
from qrmenu.designs.models import DesignVersion  # noqa: F401
from qrmenu.menu.models import Category, Item  # noqa: F401


async def init_models(reset: bool = False):
    async with engine.begin() as conn:
        if reset:
            await conn.run_sync(Base.metadata.drop_all)
            print("Dropped menu, design and business tables.")
        # create_all skips existing tables, so a plain run is repeatable
        await conn.run_sync(Base.metadata.create_all)
    await engine.dispose()
    print("Database tables created.")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create the QR menu tables.")
    parser.add_argument("--reset", action="store_true", help="drop every table first (destroys data)")
    args = parser.parse_args()
    asyncio.run(init_models(reset=args.reset))
