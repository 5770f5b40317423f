"""
Database engine, session factory and declarative base.
"""
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from repufrenos.config import get_settings

settings = get_settings()

engine_options = {"echo": settings.debug}
if settings.database_url.startswith("sqlite"):
    # aiosqlite connections are bound to the loop that opened them
    engine_options["poolclass"] = NullPool
else:
    engine_options["pool_pre_ping"] = True

engine = create_async_engine(settings.database_url, **engine_options)
SessionLocal = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


class Base(DeclarativeBase):
    """Declarative base for all tables."""
    pass


async def get_db() -> AsyncIterator[AsyncSession]:
    """Yield a request-scoped session."""
    async with SessionLocal() as session:
        yield session


async def init_db(bind=None) -> None:
    """Create all tables."""
    import repufrenos.models  # noqa: F401  registers the tables

    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
