"""
Database Session Management
Engine creation and session handling for the permission store
"""

from typing import Optional

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from docgate.core.config import Settings, settings as default_settings
from docgate.core.logging import get_logger
from docgate.db.base import Base

logger = get_logger(__name__)

# Engine
engine: Optional[AsyncEngine] = None
async_session_maker: Optional[async_sessionmaker] = None


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_engine(url: str, echo: bool = False) -> AsyncEngine:
    """Create an async engine; SQLite connections get foreign key enforcement"""
    if url.startswith("sqlite"):
        db_engine = create_async_engine(url, echo=echo)
        event.listen(db_engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    else:
        db_engine = create_async_engine(
            url,
            echo=echo,
            pool_pre_ping=True,
            pool_size=10,
            max_overflow=20,
        )
    return db_engine


def create_session_maker(db_engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def create_tables(db_engine: AsyncEngine) -> None:
    """Create all tables (use migrations for production)"""
    # Import models so they're registered with Base
    from docgate.db import models  # noqa: F401

    async with db_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def init_db(config: Optional[Settings] = None) -> async_sessionmaker:
    """Initialize database engine and create tables in development"""
    global engine, async_session_maker
    config = config or default_settings

    logger.info(f"Connecting to permission store ({config.STORE_URL.split(':', 1)[0]})")

    engine = create_engine(config.DATABASE_URL, echo=config.DEBUG)
    async_session_maker = create_session_maker(engine)

    if config.ENVIRONMENT == "development":
        await create_tables(engine)
        logger.info("Database tables created")

    return async_session_maker


async def close_db() -> None:
    """Close database connections"""
    global engine, async_session_maker

    if engine:
        await engine.dispose()
        engine = None
        async_session_maker = None
        logger.info("Database connection closed")


async def check_connection(session_maker: async_sessionmaker) -> bool:
    """Run a trivial query against the store"""
    try:
        async with session_maker() as session:
            await session.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.warning(f"Store connection check failed: {e}")
        return False
