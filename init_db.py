"""Initialize database - Run this once to create all tables"""
import asyncio
from cloudspace.config import get_settings
from cloudspace.db.session import Database

async def init_db():
    print("Creating database tables...")
    database = Database(get_settings())

    # Drop all tables, then create them again
    await database.drop_all()
    await database.create_all()

    await database.dispose()
    print("Database initialized successfully!")

if __name__ == "__main__":
    asyncio.run(init_db())
