"""Async engine and session factory for the BaaS store (service credential)."""

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from fitsnap.core.config import get_settings

settings = get_settings()

# Connects with the elevated role: row-level security does not apply to this engine.
service_engine = create_async_engine(
    settings.async_database_url,
    pool_size=settings.database_pool_size,
    max_overflow=settings.database_max_overflow,
    echo=settings.debug,
)

service_session_maker = async_sessionmaker(
    service_engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


async def get_service_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency that yields a service-credential session, committed when the handler returns."""
    async with service_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
