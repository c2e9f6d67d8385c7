"""
Async engine and session factory.

Each request gets its own AsyncSession. The store commits every write
itself, so the dependency only has to guarantee the session is closed.
"""

from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from event_admin.core.config import get_settings

settings = get_settings()


def build_engine(url: str, **overrides) -> AsyncEngine:
    """Create an async engine; pool sizing only applies to server databases."""
    options = {"echo": settings.DEBUG, "pool_pre_ping": True}
    if not url.startswith("sqlite") and "poolclass" not in overrides:
        options.update(
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_timeout=settings.DB_POOL_TIMEOUT,
            pool_recycle=settings.DB_POOL_RECYCLE,
        )
    options.update(overrides)
    return create_async_engine(url, **options)


engine = build_engine(settings.DATABASE_URL)
AsyncSessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:
        yield session
