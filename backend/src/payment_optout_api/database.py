"""Database connection pool and unit-of-work session factory."""

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from payment_optout_api.config import get_settings

settings = get_settings()

engine = create_async_engine(
    settings.async_database_url,
    pool_size=settings.database_pool_size,
    max_overflow=settings.database_max_overflow,
    pool_timeout=settings.database_pool_timeout_seconds,
    # Validate connections before checkout to detect stale connections
    pool_pre_ping=True,
    pool_recycle=3600,
    # Never echo SQL statements, they contain user identifiers
    echo=False,
    connect_args={
        "server_settings": {
            "statement_timeout": str(settings.database_statement_timeout_ms),
        },
    },
)

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


def get_session_maker() -> async_sessionmaker[AsyncSession]:
    """Get the process-wide session factory dependency.

    Services open and close one session per unit of work from this factory.
    """
    return async_session_maker


async def dispose_engine() -> None:
    """Close all pooled connections."""
    await engine.dispose()
