# scripts/init_db.py
import asyncio

from menudujour.db import create_db_and_tables, engine


async def create_tables():
    # create_db_and_tables imports menudujour.models, registering every table on Base
    await create_db_and_tables()
    await engine.dispose()
    print("✅ All missing tables created.")

if __name__ == "__main__":
    asyncio.run(create_tables())
