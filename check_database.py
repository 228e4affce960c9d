import asyncio
import sys

from loguru import logger

from config import SQLALCHEMY_DATABASE_URL
from database import DatabaseManager
from services.gateway import PersistenceGateway


async def check_database(database_url: str = SQLALCHEMY_DATABASE_URL) -> dict:
    """Initialize the store and report table and settings status."""
    gateway = PersistenceGateway(DatabaseManager(database_url))
    try:
        await gateway.initialize()
        tables = await gateway.database.check_tables_exist()
        settings = await gateway.settings.get_all_settings()
    finally:
        await gateway.close()

    return {"tables": tables, "settings": settings}


async def main() -> int:
    logger.info("Checking database status...")
    try:
        status = await check_database()
    except Exception as e:
        logger.error("Database check failed: {}", e)
        return 1

    logger.info("Tables status: {}", status["tables"])
    logger.info("Settings: {}", status["settings"])
    if not status["tables"]["all_tables_exist"]:
        logger.warning("Some tables are still missing")
        return 1

    logger.success("All tables are ready!")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
