"""Database engine and session management."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy import event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlmodel import SQLModel

from blog_api.configs import pool_kwargs, settings
from blog_api.monitoring import get_logger

logger = get_logger(__name__)


def _configure_engine_events(engine: AsyncEngine) -> None:
    """Configure connection pool events for monitoring."""

    @event.listens_for(engine.sync_engine, "connect")
    def on_connect(dbapi_connection: object, connection_record: object) -> None:
        logger.debug("New database connection established")

    @event.listens_for(engine.sync_engine, "checkin")
    def on_checkin(dbapi_connection: object, connection_record: object) -> None:
        logger.debug("Connection returned to pool")


def _enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """SQLite ignores foreign keys unless asked per connection."""

    @event.listens_for(engine.sync_engine, "connect")
    def on_connect(dbapi_connection: object, connection_record: object) -> None:
        cursor = dbapi_connection.cursor()  # type: ignore[attr-defined]
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_engine(database_url: str, **kwargs: object) -> AsyncEngine:
    """
    Create an async engine with the application's event hooks attached.

    Args:
        database_url: SQLAlchemy async database URL
        **kwargs: Extra keyword arguments for ``create_async_engine``

    Returns:
        AsyncEngine: Configured engine
    """
    new_engine = create_async_engine(
        database_url,
        echo=settings.DATABASE_ECHO,
        **pool_kwargs(database_url),
        **kwargs,
    )
    if new_engine.dialect.name == "sqlite":
        _enable_sqlite_foreign_keys(new_engine)
    if settings.DEBUG:
        _configure_engine_events(new_engine)
    return new_engine


def build_session_maker(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create the session factory used for request-scoped sessions."""
    return async_sessionmaker(
        bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


engine: AsyncEngine = build_engine(settings.DATABASE_URL)

async_session_maker: async_sessionmaker[AsyncSession] = build_session_maker(engine)


async def get_session() -> AsyncGenerator[AsyncSession]:
    """
    Dependency for getting async database sessions.

    Each request runs in exactly one transaction.

    Yields:
        AsyncSession: Database session

    Example:
        ```python
        @app.get("/blogs")
        async def list_blogs(session: AsyncSession = Depends(get_session)):
            result = await session.execute(select(BlogDB))
            return result.scalars().all()
        ```
    """
    async with transaction() as session:
        yield session


@asynccontextmanager
async def transaction(
    session_maker: async_sessionmaker[AsyncSession] | None = None,
) -> AsyncGenerator[AsyncSession]:
    """
    Context manager for explicit transaction management.

    Commits on successful exit, rolls back on any exception.

    Args:
        session_maker: Optional session factory (defaults to the application's)

    Yields:
        AsyncSession: Database session within a transaction
    """
    maker = session_maker or async_session_maker
    async with maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            logger.debug("Transaction rolled back")
            raise


async def init_db(bind: AsyncEngine | None = None) -> None:
    """
    Create all tables defined in SQLModel models.

    Called on application startup.
    """
    async with (bind or engine).begin() as conn:
        # Import all models to ensure they are registered
        from blog_api.models import BlogDB, UserDB  # noqa: F401, PLC0415

        await conn.run_sync(SQLModel.metadata.create_all)
        logger.info("Database initialized successfully!")


async def ping_db() -> bool:
    """Return True when the database answers a trivial query."""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError):
        logger.exception("Database ping failed")
        return False
    return True


async def close_db() -> None:
    """Dispose of all pooled database connections."""
    await engine.dispose()
    logger.info("Database connections closed")
