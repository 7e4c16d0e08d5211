"""Database configuration and connection management"""

from typing import AsyncGenerator, Optional
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    create_async_engine,
    AsyncSession,
    AsyncEngine
)
from sqlalchemy.orm import sessionmaker
from app.core.config import settings

# Import Base from models (defined in models/base.py)
# This ensures all models are registered with the same Base
from app.models.base import Base

engine: Optional[AsyncEngine] = None
async_session_factory: Optional[sessionmaker] = None


def get_database_url() -> str:
    """Construct the async PostgreSQL connection URL"""
    if settings.DATABASE_URL:
        return settings.DATABASE_URL
    return (
        f"postgresql+asyncpg://{settings.POSTGRES_USER}:{settings.POSTGRES_PASSWORD}"
        f"@{settings.POSTGRES_HOST}:{settings.POSTGRES_PORT}/{settings.POSTGRES_DATABASE}"
    )


def build_session_factory(bind: AsyncEngine) -> sessionmaker:
    """Session factory shared by the app and the test suite"""
    return sessionmaker(
        bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


async def init_db() -> None:
    """Initialize the async engine and session factory"""
    global engine, async_session_factory

    url = get_database_url()
    options = {"echo": settings.DEBUG, "pool_pre_ping": True}
    if not url.startswith("sqlite"):
        options.update(
            pool_size=10,
            max_overflow=20,
            pool_timeout=30,
            pool_recycle=3600,
        )

    engine = create_async_engine(url, **options)
    async_session_factory = build_session_factory(engine)


async def close_db() -> None:
    """Dispose the engine and cleanup connections"""
    global engine
    if engine:
        await engine.dispose()
        engine = None


async def create_tables() -> None:
    """Create all tables; used for local development without Alembic"""
    if engine is None:
        raise RuntimeError("Database not initialized. Call init_db() first.")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency injection for database sessions.

    One session per request; committed on success, rolled back on error.

    Usage in FastAPI:
        @router.get("/items")
        async def get_items(db: AsyncSession = Depends(get_db)):
            ...
    """
    if async_session_factory is None:
        raise RuntimeError("Database not initialized. Call init_db() first.")

    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def check_db_connection() -> bool:
    """
    Check if the database connection is healthy.
    Used for health checks.
    """
    if engine is None:
        return False

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except Exception:
        return False
