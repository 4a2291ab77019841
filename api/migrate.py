"""Create the conversation store schema and exit.

The API also creates missing tables on startup; this is for preparing a
database ahead of a deployment.
"""
import asyncio
import logging
import sys

from api.shared.entities.registry import BaseEntity
from core.settings import SETTINGS
from infra.resources import DatabaseResource

logger = logging.getLogger("supportchat.migrate")


async def migrate(database_url: str) -> list[str]:
    """Create missing tables; returns the table names the schema defines."""
    db_resource = DatabaseResource(database_url=database_url)
    await db_resource.init()
    try:
        await db_resource.create_schema(BaseEntity.metadata)
    finally:
        await db_resource.shutdown()
    return sorted(BaseEntity.metadata.tables)


def main() -> int:
    logging.basicConfig(
        level=SETTINGS.APP.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    database_url = str(SETTINGS.DATABASE.DATABASE_URL)
    try:
        tables = asyncio.run(migrate(database_url))
    except Exception:
        logger.exception(f"Schema initialization failed for {database_url}")
        return 1
    logger.info(f"Database schema initialized at {database_url}")
    logger.info(f"Tables: {', '.join(tables)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
