"""
Database Configuration

Async SQLAlchemy 2.0 setup backing the SQL document store.
PostgreSQL (asyncpg) in deployments, SQLite (aiosqlite) for local work.
"""

from sqlalchemy import pool
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    All models should inherit from this class.
    """
    pass


def create_engine_for_url(db_url: str, echo: bool = False, null_pool: bool = False) -> AsyncEngine:
    """
    Create an async engine for ``db_url``.

    ``null_pool`` opens a fresh connection per checkout (used by migrations).

    asyncpg does not accept libpq query parameters (sslmode, channel_binding),
    so they are stripped and SSL is configured through connect_args instead.
    """
    if db_url.startswith("sqlite"):
        if null_pool:
            return create_async_engine(db_url, echo=echo, poolclass=pool.NullPool)
        return create_async_engine(db_url, echo=echo)

    import ssl

    if "?" in db_url:
        db_url = db_url.split("?")[0]

    ssl_context = ssl.create_default_context()
    ssl_context.check_hostname = False
    ssl_context.verify_mode = ssl.CERT_NONE

    if null_pool:
        pool_options = {"poolclass": pool.NullPool}
    else:
        pool_options = {"pool_pre_ping": True, "pool_size": 5, "max_overflow": 10}

    return create_async_engine(
        db_url,
        echo=echo,
        connect_args={"ssl": ssl_context},
        **pool_options,
    )


def make_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Build a session maker bound to ``engine``."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


async def init_db(engine: AsyncEngine) -> None:
    """
    Initialize database tables.

    Note: In production, use Alembic migrations instead.
    This is useful for testing or initial development.
    """
    # Register models on Base.metadata
    import aptiprep.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

