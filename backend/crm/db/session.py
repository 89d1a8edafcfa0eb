"""Async Session Factory — provides async DB sessions outside FastAPI.

Invariants:
    - Meant for command-line tools (create_user) that run without the app lifespan
    - Caller owns the engine and must dispose it

Design Decisions:
    - Separate from infrastructure/database.py: no pool sizing, no global singleton
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine,
)


def create_session_factory(
    database_url: str,
) -> tuple[AsyncEngine, async_sessionmaker[AsyncSession]]:
    """Create an engine and an async session factory for the given database URL."""
    engine = create_async_engine(database_url, echo=False)
    factory = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False,
    )
    return engine, factory
