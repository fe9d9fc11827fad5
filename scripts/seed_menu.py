# scripts/seed_menu.py
import asyncio

from canteen.core.logging import configure_logging
from canteen.db import async_session, create_db_and_tables
from canteen.seed import seed_menu


async def main():
    await create_db_and_tables()
    async with async_session() as session:
        ids = await seed_menu(session)
    print(f"✅ Menu ready: {len(ids)} items.")

if __name__ == "__main__":
    configure_logging()
    asyncio.run(main())
