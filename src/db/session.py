from typing import AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from config.settings import database_settings


def get_async_engine(db_url: Optional[str] = None, echo: Optional[bool] = None) -> AsyncEngine:
    """Creates an asynchronous SQLAlchemy engine instance."""
    db_url = db_url or database_settings.url
    kwargs = {
        "echo": database_settings.echo if echo is None else echo,
        "pool_pre_ping": True,
    }
    if not db_url.startswith("sqlite"):
        # SQLite uses a static/singleton pool; sizing only applies to server databases
        kwargs.update(pool_size=10, max_overflow=20, pool_recycle=1800)  # 30 minutes
    return create_async_engine(db_url, **kwargs)


def get_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    """Creates an asynchronous session factory."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,  # Important for async usage, especially with FastAPI
    )


# Create engine and session factory instances
async_engine = get_async_engine()
SessionFactory = get_session_factory(async_engine)


async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency to provide a database session.

    Handles session creation, rollback on error, and closing. Commits are
    issued by the service that owns the unit of work.
    """
    async with SessionFactory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
