"""
ShopAdmin Database Configuration
Async SQLAlchemy engine and session management.
"""

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import declarative_base

from app.config import Settings
from app.exceptions import ConflictError

# Base class for all models
Base = declarative_base()


def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    """Build the async engine for the configured database URL."""
    kwargs = {
        "echo": settings.database_echo,
        "future": True,
        "pool_pre_ping": True,    # Check connection health before use
    }
    if not settings.database_url.startswith("sqlite"):
        kwargs.update(
            pool_size=20,
            max_overflow=40,
            pool_recycle=3600,    # Recycle connections every hour
        )
    return create_async_engine(settings.database_url, **kwargs)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    """Create the async session factory bound to an engine."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


async def get_db(request: Request) -> AsyncSession:
    """
    Dependency that provides a database session.
    Use with FastAPI's Depends().
    """
    async with request.app.state.session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def init_db(engine: AsyncEngine):
    """
    Initialize database tables.
    For development/testing only - use Alembic migrations in production.
    """
    # Register models with Base.metadata
    import app.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db(engine: AsyncEngine):
    """Close database connections."""
    await engine.dispose()


async def commit_or_conflict(db: AsyncSession, detail: str):
    """
    Commit the session, translating a uniqueness violation into a conflict.
    The database constraint decides the winner when writers race.
    """
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ConflictError(detail)
