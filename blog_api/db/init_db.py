"""
Database initialization script.

Creates the schema for the configured ``DATABASE_URL``:

    python -m blog_api.db.init_db
"""

from asyncio import run as asyncio_run

from blog_api.db.database import close_db, init_db
from blog_api.errors.database import DatabaseConnectionError
from blog_api.monitoring import configure_logging, get_logger

logger = get_logger(__name__)


async def main() -> None:
    """Create tables and release the engine."""
    try:
        logger.info("Initializing database...")
        await init_db()
        logger.info("Database ready!")
    except Exception as e:
        logger.exception("Failed to initialize database")
        raise DatabaseConnectionError from e
    finally:
        await close_db()


if __name__ == "__main__":
    configure_logging()
    asyncio_run(main())
